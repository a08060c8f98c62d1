"""Tests for HubApiClient against a mocked hub."""

import httpx
import pytest

from core.images import AggregateError, HubApiClient, ImageSearchState, ImageSource
from testing.utils import make_response


def hub_transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


async def test_search_decodes_camel_case_response():
    expected = make_response("sunset", {ImageSource.UNSPLASH: ([1, 2], 40, 2)})
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=expected.model_dump(mode="json", by_alias=True))

    async with HubApiClient(
        base_url="http://hub", user_id="user_123", transport=hub_transport(handler)
    ) as hub:
        response = await hub.search(" sunset ", ["unsplash", ImageSource.PEXELS], page=2, per_page=30)

    assert response == expected
    request = seen[0]
    assert request.url.path == "/search"
    assert request.url.params["q"] == "sunset"
    assert request.url.params["providers"] == "unsplash,pexels"
    assert request.url.params["page"] == "2"
    assert request.url.params["per_page"] == "30"
    assert request.headers["X-User-Id"] == "user_123"


async def test_error_body_message_is_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400, json={"error": "Bad Request", "message": "Page must be a positive integer"}
        )

    hub = HubApiClient(base_url="http://hub", transport=hub_transport(handler))

    with pytest.raises(AggregateError, match="Page must be a positive integer"):
        await hub.search("sunset", ["unsplash"], page=0)
    await hub.close()


async def test_non_json_error_uses_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    hub = HubApiClient(base_url="http://hub", transport=hub_transport(handler))

    with pytest.raises(AggregateError, match="Search failed: HTTP 502"):
        await hub.search("sunset", ["unsplash"])
    await hub.close()


async def test_unreachable_hub():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    hub = HubApiClient(base_url="http://hub", transport=hub_transport(handler))

    with pytest.raises(AggregateError, match="Connection failed"):
        await hub.search("sunset", ["unsplash"])
    await hub.close()


async def test_invalid_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    hub = HubApiClient(base_url="http://hub", transport=hub_transport(handler))

    with pytest.raises(AggregateError, match="Invalid search response"):
        await hub.search("sunset", ["unsplash"])
    await hub.close()


async def test_drives_search_state():
    pages = {
        "1": make_response("sunset", {ImageSource.PEXELS: ([1, 2], 4, 2)}),
        "2": make_response("sunset", {ImageSource.PEXELS: ([2, 3], 4, 2)}, page=2),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        page = pages[request.url.params["page"]]
        return httpx.Response(200, json=page.model_dump(mode="json", by_alias=True))

    async with HubApiClient(base_url="http://hub", transport=hub_transport(handler)) as hub:
        state = ImageSearchState(hub.search, providers=["pexels"])
        await state.search("sunset")
        await state.load_more()

    images = state.results.provider(ImageSource.PEXELS).images
    assert [image.id for image in images] == ["px-1", "px-2", "px-3"]
    assert state.has_more is False
    assert state.error is None
