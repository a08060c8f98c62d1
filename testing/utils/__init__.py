"""
Shared testing utilities for image hub tests.

- payloads: native Unsplash/Pixabay/Pexels records as the APIs return them
- fakes: in-memory provider and fetcher doubles
"""

from .fakes import FakeProvider, RecordingFetcher, make_page, make_response
from .payloads import (
    NORMALIZERS,
    SAMPLE_RECORDS,
    pexels_photo,
    pixabay_hit,
    unsplash_photo,
)

__all__ = [
    # payloads
    "NORMALIZERS",
    "SAMPLE_RECORDS",
    "pexels_photo",
    "pixabay_hit",
    "unsplash_photo",
    # fakes
    "FakeProvider",
    "RecordingFetcher",
    "make_page",
    "make_response",
]
