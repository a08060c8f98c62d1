"""Client-side search state for incremental (infinite-scroll) loading.

ImageSearchState holds the view model a gallery renders from: the active
query and providers, the accumulated SearchResponse, and loading, error and
pagination flags. A fresh ``search`` replaces the results; ``load_more``
fetches the next page and merges it into each provider's image list,
skipping images whose ID is already present.

The fetcher is any coroutine function with the signature
``(query, providers, page, per_page) -> SearchResponse``, e.g.
``ImageSearchService.search`` in-process or ``HubApiClient.search`` over HTTP.
"""

import logging
from typing import Awaitable, Callable, Sequence

from .types import CANONICAL_ORDER, ImageSource, ProviderResult, SearchResponse

logger = logging.getLogger(__name__)

SearchFetcher = Callable[[str, list[ImageSource], int, int], Awaitable[SearchResponse]]


def merge_provider_results(
    previous: ProviderResult, fresh: ProviderResult
) -> ProviderResult:
    """Append the images of ``fresh`` that ``previous`` does not already hold.

    Pagination flags of the fresh page win. A fresh error replaces the old
    one but already-loaded images are kept.
    """
    existing_ids = {image.id for image in previous.images}
    new_images = [image for image in fresh.images if image.id not in existing_ids]
    return previous.model_copy(
        update={
            "images": [*previous.images, *new_images],
            "current_page": fresh.current_page,
            "has_more": fresh.has_more,
            "error": fresh.error or previous.error,
        }
    )


def merge_search_responses(
    previous: SearchResponse, fresh: SearchResponse
) -> SearchResponse:
    """Merge a next-page response into the accumulated one.

    Only providers present in ``previous`` are kept, in their existing order.
    Neither argument is modified.
    """
    merged = []
    for prev_result in previous.providers:
        fresh_result = fresh.provider(prev_result.provider)
        merged.append(
            merge_provider_results(prev_result, fresh_result)
            if fresh_result is not None
            else prev_result
        )
    return SearchResponse.from_providers(fresh.query or previous.query, merged)


class ImageSearchState:
    """Search state driven by user searches and scroll-triggered loads.

    Only one request is in flight at a time: ``load_more`` is a no-op while
    ``loading`` is set. A new ``search`` or ``clear_results`` supersedes any
    request still in flight; its response is dropped when it lands.
    Aggregate failures set ``error`` and keep whatever results were already
    loaded.
    """

    def __init__(
        self,
        fetcher: SearchFetcher,
        providers: Sequence[ImageSource | str] | None = None,
        per_page: int = 20,
        query: str = "",
    ):
        self._fetcher = fetcher
        self.per_page = per_page
        self.query = query
        self.providers: list[ImageSource] = [
            ImageSource(p) for p in (providers if providers is not None else CANONICAL_ORDER)
        ]
        self.results: SearchResponse | None = None
        self.loading = False
        self.error: str | None = None
        self.current_page = 1
        # Bumped by search() and clear_results(); responses to older
        # generations are discarded
        self._generation = 0

    @property
    def has_more(self) -> bool:
        return self.results.has_more if self.results is not None else False

    async def _perform_search(
        self, query: str, providers: list[ImageSource], page: int
    ) -> None:
        if not query.strip():
            self.error = "Query cannot be empty"
            return

        generation = self._generation
        self.loading = True
        self.error = None
        try:
            data = await self._fetcher(query.strip(), providers, page, self.per_page)
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Dropping stale error for '{query}' (page {page}): {e}")
                return
            self.error = getattr(e, "message", None) or str(e) or "Search failed"
            logger.warning(f"Search error for '{query}' (page {page}): {self.error}")
            return
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug(f"Dropping stale response for '{query}' (page {page})")
            return

        if page == 1 or self.results is None:
            self.results = data
        else:
            self.results = merge_search_responses(self.results, data)
        self.current_page = page

    def _start_generation(self) -> None:
        """Invalidate requests still in flight."""
        self._generation += 1
        self.loading = False

    async def search(
        self, query: str, providers: Sequence[ImageSource | str] | None = None
    ) -> None:
        """Start a new search, replacing any existing results."""
        if providers is not None:
            self.set_providers(providers)
        self._start_generation()
        self.query = query
        await self._perform_search(query, self.providers, 1)

    async def load_more(self) -> None:
        """Fetch and merge the next page, unless a load is already running."""
        if not self.query or self.loading or not self.has_more:
            return
        await self._perform_search(self.query, self.providers, self.current_page + 1)

    async def retry(self) -> None:
        """Re-issue the last query at the last completed page."""
        if not self.query:
            return
        await self._perform_search(self.query, self.providers, self.current_page)

    def set_providers(self, providers: Sequence[ImageSource | str]) -> None:
        """Change the provider selection without searching."""
        self.providers = [ImageSource(p) for p in providers]

    def clear_results(self) -> None:
        self._start_generation()
        self.results = None
        self.query = ""
        self.current_page = 1
        self.error = None
