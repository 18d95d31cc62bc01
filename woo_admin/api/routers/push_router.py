from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from woo_admin.core.config import Settings, get_settings
from woo_admin.crud.push_token import TokenRegistry, get_token_registry
from woo_admin.schemas.push import SaveTokenRequest
from woo_admin.services.push import PushSender, get_push_sender, notify
from woo_admin.services.push.messages import new_order_notification, test_notification

router = APIRouter()

@router.post("/save-token")
async def save_token(
    payload: SaveTokenRequest,
    registry: TokenRegistry = Depends(get_token_registry),
    settings: Settings = Depends(get_settings)
):
    """Register a device push token (FCM or Expo)."""
    token = payload.token
    if not token:
        field = "expoPushToken" if settings.PUSH_PROVIDER == "expo" else "fcmToken"
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} is required"
        )

    await registry.save(token)
    return {"success": True}

@router.post("/order-created")
async def order_created(
    order: Dict[str, Any] = Body(...),
    registry: TokenRegistry = Depends(get_token_registry),
    sender: PushSender = Depends(get_push_sender),
    settings: Settings = Depends(get_settings)
):
    """
    WooCommerce order webhook. Announces the order to every registered device.
    'sent' counts attempted sends; 'delivered' counts gateway 2xx responses.
    """
    tokens = await registry.list_tokens()
    if not tokens:
        return {"success": True, "sent": 0}

    notification = new_order_notification(order, settings.NOTIFICATION_CURRENCY_SYMBOL)
    report = await notify(sender, tokens, notification, concurrency=settings.PUSH_CONCURRENCY)
    return {"success": True, "sent": report.attempted, "delivered": report.delivered}

@router.get("/test-notification")
async def send_test_notification(
    registry: TokenRegistry = Depends(get_token_registry),
    sender: PushSender = Depends(get_push_sender),
    settings: Settings = Depends(get_settings)
):
    """Send a canned notification to every registered device. 'sent' counts delivered messages."""
    tokens = await registry.list_tokens()
    if not tokens:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "No tokens stored"})

    report = await notify(sender, tokens, test_notification(), concurrency=settings.PUSH_CONCURRENCY)
    return {"success": True, "sent": report.delivered, "total": report.attempted}
