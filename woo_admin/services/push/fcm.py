from typing import Dict, Optional

import httpx

from .base import PushSender
from .token_minter import mint_access_token
from woo_admin.schemas.push import PushNotification

class FcmSender(PushSender):
    """Firebase Cloud Messaging HTTP v1 sender."""

    SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"

    def __init__(
        self,
        client_email: str,
        private_key: str,
        project_id: str,
        timeout: Optional[float] = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.client_email = client_email
        self.private_key = private_key
        self.project_id = project_id

    async def get_platform_name(self) -> str:
        return "fcm"

    async def authorize(self, client: httpx.AsyncClient) -> Dict[str, str]:
        access_token = await mint_access_token(self.client_email, self.private_key, client)
        return {"Authorization": f"Bearer {access_token}"}

    async def send(
        self,
        client: httpx.AsyncClient,
        headers: Dict[str, str],
        token: str,
        notification: PushNotification
    ) -> httpx.Response:
        message = {
            "message": {
                "token": token,
                "notification": {
                    "title": notification.title,
                    "body": notification.body,
                },
                "data": notification.data,
            }
        }
        return await client.post(
            self.SEND_URL.format(project_id=self.project_id),
            headers=headers,
            json=message,
        )
