"""Shared fixtures for csrfguard tests."""
import os

# Default Settings() and get_settings() read these
os.environ["CSRF_TOKEN_SECRET"] = "test-encryption-secret"
os.environ["CSRF_ISSUER_SECRET"] = "test-issuer-secret"
os.environ["LOG_JSON"] = "false"

import pytest
from fastapi.testclient import TestClient

from csrfguard.config import Settings
from csrfguard.crypto import CsrfTokenCodec
from csrfguard.app import create_app

TOKEN_SECRET = os.environ["CSRF_TOKEN_SECRET"]
ISSUER_SECRET = os.environ["CSRF_ISSUER_SECRET"]


def build_app(**overrides):
    """Create an app with a few protected routes for exercising the gate."""
    values = {
        "CSRF_TOKEN_SECRET": TOKEN_SECRET,
        "CSRF_ISSUER_SECRET": ISSUER_SECRET,
    }
    values.update(overrides)
    app = create_app(Settings(**values))

    @app.post("/v1/orders")
    async def create_order():
        return {"status": "accepted"}

    @app.get("/v1/orders")
    async def list_orders():
        return {"orders": []}

    @app.post("/v1/webhooks")
    async def receive_webhook():
        return {"status": "received"}

    @app.post("/v1/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


@pytest.fixture
def make_app():
    """Factory fixture: build an app with settings overrides."""
    return build_app


@pytest.fixture
def app():
    return build_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def codec():
    return CsrfTokenCodec.from_secret(TOKEN_SECRET)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {ISSUER_SECRET}"}
