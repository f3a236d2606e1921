"""Tests for http_client module: shared client lifecycle and GitHub headers."""

from api.services.http_client import (
    close_shared_client,
    get_shared_client,
    github_headers,
)


class TestGitHubHeaders:
    """Tests for github_headers()."""

    def test_includes_accept_and_api_version(self):
        headers = github_headers("token")
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["X-GitHub-Api-Version"] == "2022-11-28"

    def test_includes_auth_when_token_present(self):
        headers = github_headers("test_token")  # noqa: S106
        assert headers["Authorization"] == "Bearer test_token"

    def test_omits_auth_when_no_token(self):
        headers = github_headers("")
        assert "Authorization" not in headers

    def test_includes_user_agent_when_given(self):
        headers = github_headers("token", user_agent="elm-contact-form")
        assert headers["User-Agent"] == "elm-contact-form"


class TestSharedClient:
    def test_reuses_client(self, mock_settings):
        assert get_shared_client() is get_shared_client()

    def test_uses_configured_timeout(self, mock_settings):
        mock_settings.http_timeout = 3.0
        client = get_shared_client()
        assert client.timeout.read == 3.0

    async def test_recreated_after_close(self, mock_settings):
        first = get_shared_client()
        await close_shared_client()
        assert first.is_closed
        assert get_shared_client() is not first
