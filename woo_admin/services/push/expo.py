from typing import Dict

import httpx

from .base import PushSender
from woo_admin.schemas.push import PushNotification

class ExpoSender(PushSender):
    """Expo push API sender. Needs no access token."""

    SEND_URL = "https://exp.host/--/api/v2/push/send"

    async def get_platform_name(self) -> str:
        return "expo"

    async def authorize(self, client: httpx.AsyncClient) -> Dict[str, str]:
        return {"Accept": "application/json"}

    async def send(
        self,
        client: httpx.AsyncClient,
        headers: Dict[str, str],
        token: str,
        notification: PushNotification
    ) -> httpx.Response:
        # Expo answers 200 with per-message tickets; ticket status is not inspected
        return await client.post(
            self.SEND_URL,
            headers=headers,
            json={
                "to": token,
                "title": notification.title,
                "body": notification.body,
                "data": notification.data,
                "sound": "default",
            },
        )
