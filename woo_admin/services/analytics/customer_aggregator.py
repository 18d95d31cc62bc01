import math
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from woo_admin.schemas.customer import CustomerAggregate

logger = logging.getLogger(__name__)

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Safely parse ISO 8601 datetime strings from WooCommerce. Naive values are taken as UTC."""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, TypeError):
        logger.debug(f"Could not parse datetime value: {value}")
        return None


def _safe_amount(value: Any) -> float:
    """Convert an order total to a number, defaulting to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(str(value).strip() or 0)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount):
        return 0.0
    return amount


def _billing(order: Dict[str, Any]) -> Dict[str, Any]:
    return order.get('billing') or {}


def aggregate(orders: Optional[Iterable[Dict[str, Any]]]) -> List[CustomerAggregate]:
    """
    Fold WooCommerce orders into one record per customer.

    Customers are keyed by billing phone, falling back to billing email; keys are
    used as-is, without case or whitespace normalization. Orders with neither are
    skipped. The result keeps the order in which keys were first seen.

    Args:
        orders: Order dicts as returned by the WooCommerce orders endpoint (None is treated as empty)

    Returns:
        List of CustomerAggregate
    """
    customers: Dict[str, CustomerAggregate] = {}

    for order in orders or []:
        billing = _billing(order)
        key = billing.get('phone') or billing.get('email')
        if not key:
            continue
        key = str(key)

        customer = customers.get(key)
        if customer is None:
            name = f"{billing.get('first_name') or ''} {billing.get('last_name') or ''}".strip()
            customers[key] = CustomerAggregate(
                id=key,
                name=name,
                email=str(billing.get('email') or ''),
                phone=str(billing.get('phone') or ''),
                city=billing.get('city') or '',
                state=billing.get('state') or '',
                total_orders=1,
                total_spent=_safe_amount(order.get('total')),
                last_order_date=order.get('date_created') or None,
            )
            continue

        customer.total_orders += 1
        customer.total_spent += _safe_amount(order.get('total'))

        # An unparsable date on either side never counts as newer.
        # A customer seeded without any date compares as the epoch.
        newer = _parse_datetime(order.get('date_created'))
        if customer.last_order_date is None:
            older = EPOCH
        else:
            older = _parse_datetime(customer.last_order_date)
        if newer is not None and older is not None and newer > older:
            customer.last_order_date = order.get('date_created')

    return list(customers.values())


def normalize_identifier(identifier: str) -> str:
    return (identifier or '').strip().lower()


def filter_by_identifier(orders: Optional[Iterable[Dict[str, Any]]], identifier: str) -> List[Dict[str, Any]]:
    """Return the orders whose billing email or phone equals the normalized identifier exactly."""
    matches = []
    for order in orders or []:
        billing = _billing(order)
        email = str(billing.get('email') or '').strip().lower()
        phone = str(billing.get('phone') or '').strip().lower()
        if email == identifier or phone == identifier:
            matches.append(order)
    return matches
