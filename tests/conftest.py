import os

# settings are loaded at import time and need a provider key
os.environ["RESEND_API_KEY"] = "re_test_key"

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_email_client, get_settings
from app.core.config import Settings
from app.main import app
from app.schemas.contact import EmailSendResult


class FakeEmailClient:
    """Stands in for ResendClient and records every envelope it is given."""

    def __init__(self, result=None, error=None):
        self.result = result or EmailSendResult(data={"id": "123"})
        self.error = error
        self.calls = []

    def send_email(self, envelope):
        self.calls.append(envelope)
        if self.error is not None:
            raise self.error
        return self.result


def make_settings(**overrides) -> Settings:
    values = {"RESEND_API_KEY": "re_test_key", "ENV": "production"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fake_client():
    return FakeEmailClient()


@pytest.fixture
def app_settings():
    return make_settings()


@pytest.fixture
def client(fake_client, app_settings):
    app.dependency_overrides[get_email_client] = lambda: fake_client
    app.dependency_overrides[get_settings] = lambda: app_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
