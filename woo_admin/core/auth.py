import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from woo_admin.core.config import Settings, get_settings
from woo_admin.core.security import verify_token
from woo_admin.crud.user import UserRepository, get_user_repository
from woo_admin.db.models.user import User as UserModel
from woo_admin.schemas.woo import WooCredentials
from woo_admin.services.woocommerce import WooCommerceClient

logger = logging.getLogger(__name__)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing or invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

def _bearer_user_id(request: Request) -> Optional[str]:
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.lower().startswith("bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    # Validate token structure before decoding
    if len(token.split('.')) != 3:
        return None
    try:
        payload = verify_token(token)
    except ValueError as e:
        logger.info(f"Rejected session token: {e}")
        return None
    return payload.get("sub")

async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> UserModel:
    """
    Resolve the calling tenant from its session token.

    With TRUST_USER_ID_HEADER enabled, a bare x-user-id header is accepted as well.
    That header is not bound to any session and should only be used behind a
    trusted gateway.
    """
    user_id = _bearer_user_id(request)
    if user_id is None and settings.TRUST_USER_ID_HEADER:
        user_id = request.headers.get("x-user-id")

    user = await users.get_by_id(user_id)
    if user is None:
        raise _credentials_exception()
    return user

async def get_woo_credentials(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> WooCredentials:
    """Resolve the WooCommerce credential triple for this request."""
    if settings.TENANCY_MODE == "single":
        return WooCredentials(
            base_url=settings.WOO_URL,
            consumer_key=settings.WOO_CONSUMER_KEY,
            consumer_secret=settings.WOO_CONSUMER_SECRET,
        )

    user = await get_current_user(request, settings, users)
    return WooCredentials(
        base_url=user.woo_url or "",
        consumer_key=user.woo_ck or "",
        consumer_secret=user.woo_cs or "",
    )

async def get_woo_client(
    credentials: WooCredentials = Depends(get_woo_credentials),
    settings: Settings = Depends(get_settings),
) -> WooCommerceClient:
    return WooCommerceClient(credentials, timeout=settings.WOO_HTTP_TIMEOUT)
