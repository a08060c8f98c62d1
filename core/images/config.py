"""Configuration for the image search hub."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PIXABAY_URL = "https://pixabay.com/api/"


@dataclass
class ImageConfig:
    """Configuration for image search providers.

    Environment Variables:
        UNSPLASH_ACCESS_KEY: Access key for Unsplash
        PIXABAY_API_KEY: API key for Pixabay
        PIXABAY_URL: Pixabay endpoint override (default: public API)
        PEXELS_API_KEY: API key for Pexels
        UNSPLASH_ORDER_BY: Unsplash result ordering (default: relevant)
        IMAGE_TIMEOUT: HTTP request timeout in seconds (default: 15)
        IMAGE_PROVIDER_TIMEOUT: Deadline for one provider call in seconds,
            0 disables it (default: 15)
    """

    unsplash_access_key: str | None = field(
        default_factory=lambda: os.environ.get("UNSPLASH_ACCESS_KEY")
    )
    pixabay_api_key: str | None = field(
        default_factory=lambda: os.environ.get("PIXABAY_API_KEY")
    )
    pixabay_url: str = field(
        default_factory=lambda: os.environ.get("PIXABAY_URL") or DEFAULT_PIXABAY_URL
    )
    pexels_api_key: str | None = field(
        default_factory=lambda: os.environ.get("PEXELS_API_KEY")
    )
    unsplash_order_by: str = field(
        default_factory=lambda: os.environ.get("UNSPLASH_ORDER_BY", "relevant")
    )
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("IMAGE_TIMEOUT", "15"))
    )
    provider_timeout: float = field(
        default_factory=lambda: float(os.environ.get("IMAGE_PROVIDER_TIMEOUT", "15"))
    )

    @property
    def unsplash_available(self) -> bool:
        """Check if Unsplash provider is configured."""
        return bool(self.unsplash_access_key)

    @property
    def pixabay_available(self) -> bool:
        """Check if Pixabay provider is configured."""
        return bool(self.pixabay_api_key)

    @property
    def pexels_available(self) -> bool:
        """Check if Pexels provider is configured."""
        return bool(self.pexels_api_key)


_config: ImageConfig | None = None


def get_image_config() -> ImageConfig:
    """Get global ImageConfig instance."""
    global _config
    if _config is None:
        _config = ImageConfig()
    return _config
