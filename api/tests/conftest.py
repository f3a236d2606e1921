"""Shared fixtures for contact-forwarder tests."""

from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from api.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import api.services.http_client as http_mod

    http_mod._client = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from api.config import Settings, get_settings

    test_settings = Settings(
        github_repo="testowner/testrepo",
        github_token="test-token",
        github_api_url="https://api.github.test",
        issue_label="contact-form",
        issue_title_prefix="",
        site_name="example.test",
        user_agent="test-contact-form",
        max_payload_size=50_000,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("api.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from api.config import get_settings creates a local binding that
    # the api.config monkeypatch above does not affect)
    for mod_path in [
        "api.main",
        "api.routers.contact",
        "api.services.http_client",
        "api.services.issue_forwarder",
        "functions.contact",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@dataclass
class FakeGitHub:
    """Records create-issue calls and answers them with a canned response."""

    status_code: int = 201
    json_body: Any = field(
        default_factory=lambda: {
            "number": 42,
            "html_url": "https://github.com/testowner/testrepo/issues/42",
        }
    )
    text_body: str | None = None
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def forwarder(mock_settings, fake_github):
    """IssueForwarder wired to the fake GitHub transport."""
    from api.services.issue_forwarder import IssueForwarder

    return IssueForwarder(mock_settings, fake_github.client())


@pytest.fixture
def patch_forwarder(mocker, forwarder):
    """Make the HTTP surfaces use the fake-backed forwarder."""
    mocker.patch("api.routers.contact.get_forwarder", return_value=forwarder)
    mocker.patch("functions.contact.get_forwarder", return_value=forwarder)
    return forwarder
