import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from woo_admin.schemas.woo import WooCredentials

logger = logging.getLogger(__name__)

API_PATH = "wp-json/wc/v3"

@dataclass(frozen=True)
class Ok:
    data: Any

@dataclass(frozen=True)
class UpstreamError:
    status: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"error": True, "status": self.status, "message": self.message}

WooResult = Union[Ok, UpstreamError]

def build_proxy_url(credentials: WooCredentials, endpoint: str) -> str:
    """
    Build the full WooCommerce REST URL for an endpoint fragment.

    Args:
        credentials: The store's base URL and consumer key pair
        endpoint: Path below /wp-json/wc/v3/, optionally with a query string
            (e.g. 'orders?per_page=100&status=any')

    Returns:
        The URL with consumer_key and consumer_secret appended to the query string
    """
    base_url = credentials.base_url
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    separator = "&" if "?" in endpoint else "?"
    auth = f"consumer_key={credentials.consumer_key}&consumer_secret={credentials.consumer_secret}"
    return f"{base_url}/{API_PATH}/{endpoint}{separator}{auth}"

class WooCommerceClient:
    """Forwards single requests to one WooCommerce store. No retries."""

    def __init__(
        self,
        credentials: WooCredentials,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def fetch_resource(self, endpoint: str) -> WooResult:
        """GET an endpoint. Non-2xx responses come back as UpstreamError with the raw body."""
        url = build_proxy_url(self.credentials, endpoint)
        logger.debug(f"WooCommerce GET {endpoint}")
        async with self._client() as client:
            response = await client.get(url)

        if not response.is_success:
            logger.warning(f"WooCommerce GET {endpoint} failed with status {response.status_code}")
            return UpstreamError(status=response.status_code, message=response.text)
        return Ok(response.json())

    async def update_resource(self, endpoint: str, body: Any) -> WooResult:
        """
        PUT a JSON body to an endpoint.

        The response text is parsed as JSON whatever the status code, so WooCommerce's
        own error documents pass through. Only unparsable text becomes UpstreamError.
        """
        url = build_proxy_url(self.credentials, endpoint)
        logger.debug(f"WooCommerce PUT {endpoint}")
        async with self._client() as client:
            response = await client.put(url, json=body)

        text = response.text
        try:
            return Ok(json.loads(text))
        except ValueError:
            logger.warning(f"WooCommerce PUT {endpoint} returned non-JSON body (status {response.status_code})")
            return UpstreamError(status=response.status_code, message=text)
