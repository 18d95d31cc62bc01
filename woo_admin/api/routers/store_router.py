from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from woo_admin.core.auth import get_woo_client
from woo_admin.services.analytics.customer_aggregator import (
    aggregate,
    filter_by_identifier,
    normalize_identifier,
)
from woo_admin.services.woocommerce import Ok, UpstreamError, WooResult, WooCommerceClient

router = APIRouter()

PRODUCTS_ENDPOINT = "products?per_page=100"
ORDERS_ENDPOINT = "orders?per_page=100&status=any"

def _render(result: WooResult) -> Any:
    # Upstream failures are returned with a 200 status; callers inspect the body
    if isinstance(result, UpstreamError):
        return result.to_dict()
    return result.data

def _order_list(result: Ok) -> list:
    return result.data if isinstance(result.data, list) else []

@router.get("/products")
async def list_products(woo: WooCommerceClient = Depends(get_woo_client)):
    return _render(await woo.fetch_resource(PRODUCTS_ENDPOINT))

@router.put("/products/{product_id}")
async def update_product(
    product_id: str,
    body: Dict[str, Any] = Body(...),
    woo: WooCommerceClient = Depends(get_woo_client)
):
    return _render(await woo.update_resource(f"products/{product_id}", body))

@router.get("/orders")
async def list_orders(woo: WooCommerceClient = Depends(get_woo_client)):
    return _render(await woo.fetch_resource(ORDERS_ENDPOINT))

@router.get("/orders/{order_id}")
async def get_order(order_id: str, woo: WooCommerceClient = Depends(get_woo_client)):
    return _render(await woo.fetch_resource(f"orders/{order_id}"))

@router.get("/customers")
async def list_customers(woo: WooCommerceClient = Depends(get_woo_client)):
    """Customers derived from the latest 100 orders, one per phone number or email."""
    result = await woo.fetch_resource(ORDERS_ENDPOINT)
    if isinstance(result, UpstreamError):
        return result.to_dict()
    return [customer.model_dump(by_alias=True) for customer in aggregate(_order_list(result))]

@router.get("/customers/orders/{identifier}")
async def list_customer_orders(identifier: str, woo: WooCommerceClient = Depends(get_woo_client)):
    """Orders whose billing email or phone matches the identifier (case-insensitive, exact)."""
    result = await woo.fetch_resource(ORDERS_ENDPOINT)
    if isinstance(result, UpstreamError):
        return result.to_dict()
    return filter_by_identifier(_order_list(result), normalize_identifier(identifier))
