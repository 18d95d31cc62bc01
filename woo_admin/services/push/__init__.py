from typing import Dict, Type
from fastapi import Depends

from .base import PushSender
from .expo import ExpoSender
from .fcm import FcmSender
from .fanout import DeliveryResult, FanoutReport, notify
from woo_admin.core.config import Settings, get_settings

_senders: Dict[str, Type[PushSender]] = {
    'fcm': FcmSender,
    'expo': ExpoSender,
}

def get_sender(provider: str, settings: Settings) -> PushSender:
    """
    Get a sender instance for the configured push provider.

    Args:
        provider: The provider name ('fcm' or 'expo')
        settings: Application settings holding the provider credentials

    Raises:
        ValueError if the provider is not supported
    """
    sender_class = _senders.get(provider.lower())
    if not sender_class:
        raise ValueError(f"Unsupported push provider: {provider}")
    if sender_class is FcmSender:
        return FcmSender(
            client_email=settings.FCM_CLIENT_EMAIL,
            private_key=settings.FCM_PRIVATE_KEY,
            project_id=settings.FCM_PROJECT_ID,
        )
    return sender_class()

async def get_push_sender(settings: Settings = Depends(get_settings)) -> PushSender:
    return get_sender(settings.PUSH_PROVIDER, settings)

__all__ = [
    'PushSender',
    'FcmSender',
    'ExpoSender',
    'DeliveryResult',
    'FanoutReport',
    'notify',
    'get_sender',
    'get_push_sender',
]
