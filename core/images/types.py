"""Type definitions for the image search hub."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ImageSource(str, Enum):
    """Supported image providers.

    Declaration order is the canonical output order of a search response.
    """

    UNSPLASH = "unsplash"
    PIXABAY = "pixabay"
    PEXELS = "pexels"

    @classmethod
    def parse_list(cls, raw: str) -> list["ImageSource"]:
        """Parse a comma-separated provider list, dropping unknown names."""
        known = {source.value: source for source in cls}
        parsed: list[ImageSource] = []
        for name in raw.split(","):
            source = known.get(name.strip().lower())
            if source is not None and source not in parsed:
                parsed.append(source)
        return parsed


CANONICAL_ORDER: tuple[ImageSource, ...] = tuple(ImageSource)


class _WireModel(BaseModel):
    """Frozen model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ImageResult(_WireModel):
    """Provider-agnostic representation of one searchable image."""

    id: str = Field(description="Provider-prefixed ID, e.g. 'u-abc', 'px-123'")
    source: ImageSource
    url_thumb: str
    url_regular: str
    url_full: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    description: str | None = None
    author: str
    author_url: str | None = None
    source_url: str = Field(description="Link to the image on the provider's site")
    tags: list[str] = Field(default_factory=list)
    attribution: str


class ProviderResult(_WireModel):
    """Outcome of one provider call within a search."""

    provider: ImageSource
    images: list[ImageResult] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    current_page: int = Field(default=1, ge=1)
    has_more: bool = False
    error: str | None = None

    @classmethod
    def failed(cls, provider: ImageSource, page: int, message: str) -> "ProviderResult":
        return cls(provider=provider, current_page=page, error=message)


class SearchResponse(_WireModel):
    """Aggregate result of one search invocation."""

    query: str
    providers: list[ProviderResult] = Field(default_factory=list)
    total_results: int = 0
    has_more: bool = False
    errors: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_providers(
        cls, query: str, providers: list[ProviderResult]
    ) -> "SearchResponse":
        """Build a response, deriving totals and errors from provider results."""
        return cls(
            query=query,
            providers=providers,
            total_results=sum(p.total for p in providers),
            has_more=any(p.has_more for p in providers),
            errors={p.provider.value: p.error for p in providers if p.error},
        )

    def provider(self, source: ImageSource) -> ProviderResult | None:
        for result in self.providers:
            if result.provider == source:
                return result
        return None


@dataclass
class ProviderPage:
    """Raw page of native records returned by a provider client."""

    items: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0

    @classmethod
    def empty(cls) -> "ProviderPage":
        return cls()


def count_pages(total: int, per_page: int) -> int:
    """Number of pages needed for ``total`` items at ``per_page`` each."""
    if per_page <= 0:
        return 0
    return math.ceil(total / per_page)
