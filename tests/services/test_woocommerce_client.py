import httpx
import pytest

from woo_admin.schemas.woo import WooCredentials
from woo_admin.services.woocommerce import Ok, UpstreamError, WooCommerceClient, build_proxy_url

CREDENTIALS = WooCredentials(base_url="https://shop.example.com/", consumer_key="ck_1", consumer_secret="cs_2")


def _client(handler) -> WooCommerceClient:
    return WooCommerceClient(CREDENTIALS, transport=httpx.MockTransport(handler))


def test_build_proxy_url_appends_auth_to_existing_query():
    url = build_proxy_url(CREDENTIALS, "products?foo=1")

    assert url == "https://shop.example.com/wp-json/wc/v3/products?foo=1&consumer_key=ck_1&consumer_secret=cs_2"


def test_build_proxy_url_starts_query_when_absent():
    url = build_proxy_url(CREDENTIALS, "products")

    assert url == "https://shop.example.com/wp-json/wc/v3/products?consumer_key=ck_1&consumer_secret=cs_2"


def test_build_proxy_url_strips_only_one_trailing_slash():
    credentials = WooCredentials(base_url="https://shop.example.com", consumer_key="k", consumer_secret="s")

    assert build_proxy_url(credentials, "orders/7").startswith("https://shop.example.com/wp-json/wc/v3/orders/7?")


@pytest.mark.asyncio
async def test_fetch_resource_returns_ok_with_json():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1}])

    result = await _client(handler).fetch_resource("orders?per_page=100&status=any")

    assert result == Ok([{"id": 1}])
    assert seen[0].method == "GET"
    assert seen[0].url.params["status"] == "any"
    assert seen[0].url.params["consumer_key"] == "ck_1"


@pytest.mark.asyncio
async def test_fetch_resource_wraps_non_2xx_as_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text='{"code":"woocommerce_rest_shop_order_invalid_id"}')

    result = await _client(handler).fetch_resource("orders/123")

    assert isinstance(result, UpstreamError)
    assert result.to_dict() == {
        "error": True,
        "status": 404,
        "message": '{"code":"woocommerce_rest_shop_order_invalid_id"}',
    }


@pytest.mark.asyncio
async def test_update_resource_sends_json_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 5, "regular_price": "99"})

    result = await _client(handler).update_resource("products/5", {"regular_price": "99"})

    assert result == Ok({"id": 5, "regular_price": "99"})
    assert seen[0].method == "PUT"
    assert seen[0].headers["content-type"] == "application/json"
    assert b'"regular_price"' in seen[0].content


@pytest.mark.asyncio
async def test_update_resource_passes_through_json_error_documents():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "rest_invalid_param", "data": {"status": 400}})

    result = await _client(handler).update_resource("products/5", {"regular_price": "x"})

    assert result == Ok({"code": "rest_invalid_param", "data": {"status": 400}})


@pytest.mark.asyncio
async def test_update_resource_wraps_unparsable_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    result = await _client(handler).update_resource("products/5", {})

    assert result == UpstreamError(status=502, message="<html>Bad gateway</html>")
