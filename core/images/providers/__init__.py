"""Image provider registry.

Each registered class exposes the same capability pair: ``search`` (async,
returns a ProviderPage of native records) and ``normalize`` (native record to
ImageResult). Adding a provider means adding a class and a registry entry.
"""

from ..types import ImageSource
from .base import BaseImageProvider
from .pexels import PexelsProvider
from .pixabay import PixabayProvider
from .unsplash import UnsplashProvider

PROVIDER_REGISTRY: dict[ImageSource, type[BaseImageProvider]] = {
    ImageSource.UNSPLASH: UnsplashProvider,
    ImageSource.PIXABAY: PixabayProvider,
    ImageSource.PEXELS: PexelsProvider,
}

__all__ = [
    "BaseImageProvider",
    "PexelsProvider",
    "PixabayProvider",
    "UnsplashProvider",
    "PROVIDER_REGISTRY",
]
