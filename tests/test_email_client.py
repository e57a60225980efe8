import pytest
import requests

from app.core.email_client import (
    GENERIC_PROVIDER_ERROR,
    ResendClient,
    build_email_client,
)
from app.core.exceptions import ConfigError, TransportError
from app.schemas.contact import EmailEnvelope
from conftest import make_settings


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self.body = body
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class FakePost:
    """Replaces requests.post and records each outbound call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.requests.append(
            {"url": url, "json": json, "headers": headers, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def envelope():
    return EmailEnvelope(
        from_="Mr. O Gym <contacto@mrogym.com>",
        to=["a@b.com"],
        subject="Hi",
        html="<p>Hello</p>",
    )


@pytest.fixture
def fake_post(monkeypatch):
    post = FakePost()
    monkeypatch.setattr(requests, "post", post)
    return post


def make_client():
    return ResendClient(
        api_key="re_test_key", base_url="https://api.resend.test/", timeout=5.0
    )


def test_success_posts_once_and_returns_data(envelope, fake_post):
    fake_post.response = FakeResponse(200, {"id": "123"})

    result = make_client().send_email(envelope)

    assert result.data == {"id": "123"}
    assert result.error is None
    assert len(fake_post.requests) == 1

    sent = fake_post.requests[0]
    assert sent["url"] == "https://api.resend.test/emails"
    assert sent["timeout"] == 5.0
    assert sent["headers"]["Authorization"] == "Bearer re_test_key"
    assert "Idempotency-Key" not in sent["headers"]
    assert sent["json"] == {
        "from": "Mr. O Gym <contacto@mrogym.com>",
        "to": ["a@b.com"],
        "subject": "Hi",
        "html": "<p>Hello</p>",
    }


def test_structured_provider_error(envelope, fake_post):
    body = {
        "statusCode": 422,
        "name": "validation_error",
        "message": "Invalid `to` field.",
    }
    fake_post.response = FakeResponse(422, body, reason="Unprocessable Entity")

    result = make_client().send_email(envelope)

    assert result.data is None
    assert result.error.name == "validation_error"
    assert result.error.message == "Invalid `to` field."
    assert result.error.status_code == 422


def test_unreadable_provider_error_is_application_error(envelope, fake_post):
    fake_post.response = FakeResponse(502, ValueError("not json"), reason="Bad Gateway")

    result = make_client().send_email(envelope)

    assert result.error.name == "application_error"
    assert result.error.message == GENERIC_PROVIDER_ERROR
    assert result.error.status_code == 502


@pytest.mark.parametrize(
    "error", [requests.ConnectionError("refused"), requests.Timeout("slow")]
)
def test_network_failure_raises_transport_error(envelope, fake_post, error):
    fake_post.error = error

    with pytest.raises(TransportError):
        make_client().send_email(envelope)

    # no retry
    assert len(fake_post.requests) == 1


def test_unreadable_success_body_raises_transport_error(envelope, fake_post):
    fake_post.response = FakeResponse(200, ValueError("truncated"))

    with pytest.raises(TransportError):
        make_client().send_email(envelope)


@pytest.mark.parametrize("key", ["", "   "])
def test_blank_api_key_is_config_error(key):
    with pytest.raises(ConfigError):
        ResendClient(api_key=key)


def test_build_from_settings():
    settings = make_settings(
        RESEND_BASE_URL="https://proxy.local", RESEND_TIMEOUT_SECONDS=3
    )

    client = build_email_client(settings)

    assert client.base_url == "https://proxy.local"
    assert client.timeout == 3
    assert client.headers["User-Agent"] == settings.RESEND_USER_AGENT
