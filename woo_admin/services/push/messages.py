from typing import Any, Dict

from woo_admin.schemas.push import PushNotification

def new_order_notification(order: Dict[str, Any], currency_symbol: str = "₹") -> PushNotification:
    """Build the notification announcing a WooCommerce order webhook payload."""
    billing = order.get("billing") or {}
    first_name = billing.get("first_name") or "Customer"
    total = order.get("total") or "0"
    order_id = order.get("id")
    order_id = str(order_id) if order_id is not None else ""

    return PushNotification(
        title=f"New Order #{order_id}",
        body=f"{currency_symbol}{total} from {first_name}",
        data={"orderId": order_id},
    )

def test_notification() -> PushNotification:
    return PushNotification(
        title="Test Notification",
        body="Your push setup is working! 🎉",
        data={"type": "test"},
    )
