"""Tests for the provider clients against a mocked HTTP transport."""

import httpx
import pytest

from core.images import (
    ConfigurationError,
    ImageConfig,
    ProviderError,
    RateLimitError,
)
from core.images.providers import PexelsProvider, PixabayProvider, UnsplashProvider
from testing.utils import pexels_photo, pixabay_hit, unsplash_photo


class Recorder:
    """MockTransport handler returning a fixed response and keeping requests."""

    def __init__(self, status: int = 200, body=None, text: str | None = None):
        self.status = status
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status, json=self.body)

    @property
    def params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params


def build(provider_class, config, recorder):
    return provider_class(config, transport=httpx.MockTransport(recorder))


class TestUnsplashProvider:
    async def test_search_sends_native_request(self, image_config):
        recorder = Recorder(body={"results": [unsplash_photo("a")], "total": 40, "total_pages": 2})
        provider = build(UnsplashProvider, image_config, recorder)

        page = await provider.search("  sunset ", page=2, per_page=10)

        request = recorder.requests[0]
        assert request.url.path == "/search/photos"
        assert request.headers["Authorization"] == "Client-ID unsplash-key"
        assert recorder.params["query"] == "sunset"
        assert recorder.params["page"] == "2"
        assert recorder.params["per_page"] == "10"
        assert recorder.params["order_by"] == "relevant"
        assert len(page.items) == 1
        assert (page.total, page.total_pages) == (40, 2)
        await provider.close()

    async def test_per_page_clamped_to_30(self, image_config):
        recorder = Recorder(body={"results": [], "total": 0, "total_pages": 0})
        provider = build(UnsplashProvider, image_config, recorder)

        await provider.search("sunset", per_page=500)

        assert recorder.params["per_page"] == "30"

    async def test_403_rate_limit_body_is_rate_limit(self, image_config):
        recorder = Recorder(status=403, text="Rate Limit Exceeded")
        provider = build(UnsplashProvider, image_config, recorder)

        with pytest.raises(RateLimitError, match="Unsplash rate limit exceeded"):
            await provider.search("sunset")

    async def test_401_is_configuration_error(self, image_config):
        recorder = Recorder(status=401, body={"errors": ["OAuth error"]})
        provider = build(UnsplashProvider, image_config, recorder)

        with pytest.raises(ConfigurationError, match="Unsplash API key invalid"):
            await provider.search("sunset")

    async def test_missing_results_field_returns_empty_page(self, image_config):
        recorder = Recorder(body={"errors": ["something changed"]})
        provider = build(UnsplashProvider, image_config, recorder)

        page = await provider.search("sunset")

        assert page.items == []
        assert (page.total, page.total_pages) == (0, 0)

    def test_missing_key_fails_at_construction(self):
        config = ImageConfig(unsplash_access_key=None)
        with pytest.raises(ConfigurationError, match="UNSPLASH_ACCESS_KEY is required"):
            UnsplashProvider(config)


class TestPexelsProvider:
    async def test_search_computes_total_pages(self, image_config):
        recorder = Recorder(
            body={
                "photos": [pexels_photo(1), pexels_photo(2)],
                "total_results": 101,
                "page": 1,
                "per_page": 20,
            }
        )
        provider = build(PexelsProvider, image_config, recorder)

        page = await provider.search("sunset")

        assert recorder.requests[0].headers["Authorization"] == "pexels-key"
        assert page.total == 101
        assert page.total_pages == 6
        assert [item["id"] for item in page.items] == [1, 2]

    async def test_per_page_clamped_to_80(self, image_config):
        recorder = Recorder(body={"photos": [], "total_results": 0, "per_page": 80})
        provider = build(PexelsProvider, image_config, recorder)

        await provider.search("sunset", per_page=500)

        assert recorder.params["per_page"] == "80"

    async def test_429_is_rate_limit(self, image_config):
        provider = build(PexelsProvider, image_config, Recorder(status=429, body={}))

        with pytest.raises(RateLimitError, match="Pexels rate limit exceeded"):
            await provider.search("sunset")

    async def test_server_error_is_provider_error(self, image_config):
        provider = build(PexelsProvider, image_config, Recorder(status=502, text="bad gateway"))

        with pytest.raises(ProviderError, match="Failed to fetch images from Pexels"):
            await provider.search("sunset")

    async def test_status_error_message_omits_body(self, image_config):
        page_html = "<html><body>" + "upstream stack trace " * 200 + "</body></html>"
        provider = build(PexelsProvider, image_config, Recorder(status=500, text=page_html))

        with pytest.raises(ProviderError) as exc_info:
            await provider.search("sunset")

        assert exc_info.value.message == "Failed to fetch images from Pexels: HTTP 500"
        assert "<html>" not in exc_info.value.message

    async def test_connection_error_is_provider_error(self, image_config):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = PexelsProvider(image_config, transport=httpx.MockTransport(refuse))

        with pytest.raises(ProviderError, match="Connection failed"):
            await provider.search("sunset")

    async def test_non_json_body_returns_empty_page(self, image_config):
        provider = build(PexelsProvider, image_config, Recorder(text="<html>maintenance</html>"))

        page = await provider.search("sunset")

        assert page.items == []

    async def test_malformed_records_are_skipped(self, image_config):
        recorder = Recorder(
            body={
                "photos": [pexels_photo(1), {"id": 2}, "junk"],
                "total_results": 3,
                "per_page": 20,
            }
        )
        provider = build(PexelsProvider, image_config, recorder)

        page = await provider.search("sunset")

        assert [item["id"] for item in page.items] == [1]


class TestPixabayProvider:
    async def test_search_sends_key_as_param(self, image_config):
        recorder = Recorder(body={"hits": [pixabay_hit(1)], "total": 5000, "totalHits": 500})
        provider = build(PixabayProvider, image_config, recorder)

        page = await provider.search("flowers", page=3, per_page=50)

        assert recorder.params["key"] == "pixabay-key"
        assert recorder.params["q"] == "flowers"
        assert recorder.params["page"] == "3"
        assert recorder.params["image_type"] == "photo"
        assert page.total == 500
        assert page.total_pages == 10

    async def test_total_pages_uses_clamped_page_size(self, image_config):
        recorder = Recorder(body={"hits": [], "total": 1000, "totalHits": 500})
        provider = build(PixabayProvider, image_config, recorder)

        page = await provider.search("flowers", per_page=1000)

        assert recorder.params["per_page"] == "200"
        assert page.total_pages == 3

    async def test_400_is_configuration_error(self, image_config):
        recorder = Recorder(status=400, text="[ERROR 400] Invalid or missing API key")
        provider = build(PixabayProvider, image_config, recorder)

        with pytest.raises(ConfigurationError, match="Pixabay API key invalid"):
            await provider.search("flowers")

    async def test_hits_not_a_list_returns_empty_page(self, image_config):
        provider = build(PixabayProvider, image_config, Recorder(body={"hits": "oops"}))

        page = await provider.search("flowers")

        assert page.items == []

    async def test_custom_endpoint(self, image_config):
        image_config.pixabay_url = "https://pixabay.internal/api/"
        recorder = Recorder(body={"hits": [], "totalHits": 0})
        provider = build(PixabayProvider, image_config, recorder)

        await provider.search("flowers")

        assert recorder.requests[0].url.host == "pixabay.internal"
