"""Multi-provider image search hub.

Search Unsplash, Pixabay and Pexels concurrently and get one unified,
provider-grouped response. A failing provider degrades the response instead
of failing it.

Example:
    from core.images import search_images

    response = await search_images("sunset", ["unsplash", "pexels"], page=1)
    for result in response.providers:
        print(result.provider.value, len(result.images), result.error)

    # Incremental loading
    from core.images import ImageSearchState, get_image_service

    state = ImageSearchState(get_image_service().search)
    await state.search("sunset")
    await state.load_more()

Environment Variables:
    UNSPLASH_ACCESS_KEY: Access key for Unsplash
    PIXABAY_API_KEY: API key for Pixabay
    PEXELS_API_KEY: API key for Pexels
"""

from .config import ImageConfig, get_image_config
from .errors import (
    AggregateError,
    ConfigurationError,
    ImageError,
    InvalidResponseError,
    ProviderError,
    RateLimitError,
    ValidationError,
)
from .hub_client import HubApiClient
from .normalizer import normalize_pexels, normalize_pixabay, normalize_unsplash
from .service import ImageSearchService, get_image_service, search_images
from .state import ImageSearchState, merge_search_responses
from .types import (
    CANONICAL_ORDER,
    ImageResult,
    ImageSource,
    ProviderPage,
    ProviderResult,
    SearchResponse,
)

__all__ = [
    # Main function
    "search_images",
    # Service
    "get_image_service",
    "ImageSearchService",
    # Client-side state
    "ImageSearchState",
    "merge_search_responses",
    "HubApiClient",
    # Normalizers
    "normalize_unsplash",
    "normalize_pixabay",
    "normalize_pexels",
    # Types
    "CANONICAL_ORDER",
    "ImageResult",
    "ImageSource",
    "ProviderPage",
    "ProviderResult",
    "SearchResponse",
    # Config
    "ImageConfig",
    "get_image_config",
    # Errors
    "ImageError",
    "ValidationError",
    "ConfigurationError",
    "RateLimitError",
    "InvalidResponseError",
    "ProviderError",
    "AggregateError",
]
