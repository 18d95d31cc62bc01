from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx

from woo_admin.schemas.push import PushNotification

class PushSender(ABC):
    """Abstract base class for push notification gateways."""

    def __init__(self, timeout: Optional[float] = 30, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    def client(self) -> httpx.AsyncClient:
        """HTTP client shared by every request of one flush."""
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    @abstractmethod
    async def get_platform_name(self) -> str:
        """Get the name of the gateway this sender handles."""
        pass

    @abstractmethod
    async def authorize(self, client: httpx.AsyncClient) -> Dict[str, str]:
        """
        Prepare the request headers for one flush.

        Called once before any message of the flush is sent.
        """
        pass

    @abstractmethod
    async def send(
        self,
        client: httpx.AsyncClient,
        headers: Dict[str, str],
        token: str,
        notification: PushNotification
    ) -> httpx.Response:
        """Send one notification to one device token."""
        pass
