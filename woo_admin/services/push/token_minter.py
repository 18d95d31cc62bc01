import re
import time
import base64
import logging
from typing import Any, Dict, Optional

import httpx
from cryptography.hazmat.primitives import serialization
from jose import jwt

logger = logging.getLogger(__name__)

TOKEN_URL = "https://oauth2.googleapis.com/token"
MESSAGING_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME = 3600

_PEM_ARMOR = re.compile(r"-----(BEGIN|END) PRIVATE KEY-----")


class TokenExchangeError(Exception):
    """The OAuth2 token endpoint did not return an access token."""


def pem_to_der(private_key_pem: str) -> bytes:
    """
    Decode a PKCS8 PEM private key to DER.

    Service account keys pasted into .env files often carry literal '\\n'
    escapes instead of newlines; both forms are accepted.
    """
    body = private_key_pem.replace("\\n", "\n")
    body = _PEM_ARMOR.sub("", body)
    body = re.sub(r"\s+", "", body)
    return base64.b64decode(body)


def load_private_key(private_key_pem: str):
    return serialization.load_der_private_key(pem_to_der(private_key_pem), password=None)


def build_assertion(service_account_email: str, private_key_pem: str, now: Optional[int] = None) -> str:
    """
    Build the RS256-signed JWT assertion for the JWT-bearer grant.

    Args:
        service_account_email: The service account's client email (JWT issuer)
        private_key_pem: The service account's PKCS8 private key in PEM form
        now: Issue time in epoch seconds (defaults to the current time)

    Returns:
        header.payload.signature, each segment base64url encoded without padding
    """
    issued_at = int(time.time()) if now is None else now
    claims: Dict[str, Any] = {
        "iss": service_account_email,
        "scope": MESSAGING_SCOPE,
        "aud": TOKEN_URL,
        "iat": issued_at,
        "exp": issued_at + ASSERTION_LIFETIME,
    }
    return jwt.encode(claims, load_private_key(private_key_pem), algorithm="RS256")


async def mint_access_token(service_account_email: str, private_key_pem: str, client: httpx.AsyncClient) -> str:
    """
    Exchange a signed assertion for a short-lived bearer token.

    The token is not cached: callers mint one per notification flush.
    Signing and HTTP errors propagate to the caller.
    """
    assertion = build_assertion(service_account_email, private_key_pem)
    response = await client.post(
        TOKEN_URL,
        data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
    )
    access_token = None
    if response.is_success:
        access_token = response.json().get("access_token")
    if not access_token:
        raise TokenExchangeError(
            f"Token exchange failed with status {response.status_code}: {response.text}"
        )
    logger.debug("Minted push gateway access token")
    return access_token
