"""Mapping of provider-native records into ImageResult.

Callers pass records that came out of a provider client, so the required
keys are present. Optional keys fall back in a fixed order and URLs are only
ever taken from the record itself.
"""

from typing import Any

from .types import ImageResult, ImageSource

PIXABAY_PHOTO_URL = "https://pixabay.com/photos/{id}/"


def _text(value: Any) -> str | None:
    """Return stripped text, or None for missing and blank values."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _first_url(mapping: dict[str, Any], *keys: str) -> str:
    for key in keys:
        url = _text(mapping.get(key))
        if url:
            return url
    return ""


def normalize_unsplash(photo: dict[str, Any]) -> ImageResult:
    user = photo.get("user") or {}
    urls = photo.get("urls") or {}
    author = _text(user.get("name")) or _text(user.get("username")) or "Unknown"

    return ImageResult(
        id=f"u-{photo['id']}",
        source=ImageSource.UNSPLASH,
        url_thumb=_first_url(urls, "small", "thumb", "regular"),
        url_regular=_first_url(urls, "regular", "full", "raw"),
        url_full=_first_url(urls, "full", "raw", "regular"),
        width=photo["width"],
        height=photo["height"],
        description=_text(photo.get("description")) or _text(photo.get("alt_description")),
        author=author,
        author_url=_text((user.get("links") or {}).get("html")),
        source_url=(photo.get("links") or {}).get("html", ""),
        tags=[
            tag["title"].strip()
            for tag in photo.get("tags") or []
            if isinstance(tag, dict) and _text(tag.get("title"))
        ],
        attribution=f"Photo by {author} on Unsplash",
    )


def normalize_pixabay(hit: dict[str, Any]) -> ImageResult:
    author = _text(hit.get("user")) or "Unknown"
    raw_tags = hit.get("tags") or ""

    return ImageResult(
        id=f"pb-{hit['id']}",
        source=ImageSource.PIXABAY,
        url_thumb=_first_url(hit, "webformatURL", "previewURL", "largeImageURL"),
        url_regular=_first_url(hit, "largeImageURL", "webformatURL"),
        # imageURL and fullHDURL are only returned to approved API accounts
        url_full=_first_url(hit, "imageURL", "fullHDURL", "largeImageURL"),
        width=hit["imageWidth"],
        height=hit["imageHeight"],
        description=None,
        author=author,
        author_url=None,
        source_url=_text(hit.get("pageURL")) or PIXABAY_PHOTO_URL.format(id=hit["id"]),
        tags=[tag.strip() for tag in raw_tags.split(",") if tag.strip()],
        attribution=f"Image by {author} from Pixabay",
    )


def normalize_pexels(photo: dict[str, Any]) -> ImageResult:
    src = photo.get("src") or {}
    author = _text(photo.get("photographer")) or "Unknown"

    return ImageResult(
        id=f"px-{photo['id']}",
        source=ImageSource.PEXELS,
        url_thumb=_first_url(src, "small", "medium", "tiny"),
        url_regular=_first_url(src, "large", "large2x", "original"),
        url_full=_first_url(src, "original", "large2x", "large"),
        width=photo["width"],
        height=photo["height"],
        description=_text(photo.get("alt")),
        author=author,
        author_url=_text(photo.get("photographer_url")),
        source_url=photo.get("url", ""),
        tags=[],
        attribution=f"Photo by {author} from Pexels",
    )
