from types import SimpleNamespace
from typing import Dict, List, Optional

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import Depends
from fastapi.testclient import TestClient

from woo_admin.core.auth import get_woo_client, get_woo_credentials
from woo_admin.core.config import Settings, get_settings
from woo_admin.core.security import hash_password
from woo_admin.crud.push_token import get_token_registry
from woo_admin.crud.user import get_user_repository
from woo_admin.schemas.woo import WooCredentials
from woo_admin.server import app
from woo_admin.services.push import FcmSender, get_push_sender
from woo_admin.services.push.token_minter import TOKEN_URL
from woo_admin.services.woocommerce import WooCommerceClient

TEST_PASSWORD = "mysecretpassword123"
TEST_WOO_URL = "https://shop.example.com/"


class FakeUserRepository:
    def __init__(self, users: List[SimpleNamespace]):
        self.users = users

    async def get_by_id(self, user_id) -> Optional[SimpleNamespace]:
        for user in self.users:
            if str(user.id) == str(user_id):
                return user
        return None

    async def get_by_email(self, email: str) -> Optional[SimpleNamespace]:
        for user in self.users:
            if user.email == email:
                return user
        return None


class FakeTokenRegistry:
    def __init__(self):
        self.tokens: Dict[str, str] = {}

    async def save(self, token: str) -> None:
        self.tokens[token] = "1"

    async def list_tokens(self) -> List[str]:
        return list(self.tokens)


class RecordingHandler:
    """httpx.MockTransport handler that records requests and answers from a route table."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes = {}

    def add(self, method: str, path: str, status_code: int = 200, **kwargs):
        self.routes[(method, path)] = (status_code, kwargs)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="not found")
        status_code, kwargs = route
        return httpx.Response(status_code, **kwargs)

    def paths(self, host: Optional[str] = None) -> List[str]:
        return [r.url.path for r in self.requests if host is None or r.url.host == host]


@pytest.fixture(scope="session")
def private_key_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def tenant() -> SimpleNamespace:
    return SimpleNamespace(
        id=1,
        email="owner@example.com",
        hashed_password=hash_password(TEST_PASSWORD),
        password=None,
        woo_url=TEST_WOO_URL,
        woo_ck="ck_tenant",
        woo_cs="cs_tenant",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(TENANCY_MODE="multi", TRUST_USER_ID_HEADER=False, PUSH_PROVIDER="fcm", PUSH_CONCURRENCY=4)


@pytest.fixture
def users(tenant) -> FakeUserRepository:
    return FakeUserRepository([tenant])


@pytest.fixture
def registry() -> FakeTokenRegistry:
    return FakeTokenRegistry()


@pytest.fixture
def woo_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def push_handler() -> RecordingHandler:
    handler = RecordingHandler()
    handler.add("POST", httpx.URL(TOKEN_URL).path, json={"access_token": "ya29.test", "expires_in": 3599})
    handler.add("POST", "/v1/projects/demo-project/messages:send", json={"name": "projects/demo-project/messages/1"})
    return handler


@pytest.fixture
def client(settings, users, registry, woo_handler, push_handler, private_key_pem):
    woo_transport = httpx.MockTransport(woo_handler)

    def woo_client_override(credentials: WooCredentials = Depends(get_woo_credentials)) -> WooCommerceClient:
        return WooCommerceClient(credentials, transport=woo_transport)

    sender = FcmSender(
        client_email="push@demo-project.iam.gserviceaccount.com",
        private_key=private_key_pem,
        project_id="demo-project",
        transport=httpx.MockTransport(push_handler),
    )

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_token_registry] = lambda: registry
    app.dependency_overrides[get_woo_client] = woo_client_override
    app.dependency_overrides[get_push_sender] = lambda: sender
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
