"""HTTP service exposing the image search hub."""
