import os
from types import SimpleNamespace

import pytest
import requests

os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "_logs"))

from manifest_check import publisher
from manifest_check.config.settings import Settings
from manifest_check.errors import CollaboratorError, ConfigurationError
from manifest_check.models import CommentRequest, RepositoryCoordinates


class DummyResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    def json(self):
        return self._payload


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response or DummyResponse(201, {"id": 1})
        self.error = error
        self.calls = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append(SimpleNamespace(url=url, headers=headers, json=json, timeout=timeout))
        if self.error:
            raise self.error
        return self.response


def _request(body="✅ ok"):
    return CommentRequest(
        coordinates=RepositoryCoordinates(owner="acme", repo="widgets"),
        request_number=12,
        body=body,
    )


class TestRemoteParsing:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("git@github.com:acme/widgets.git", ("acme", "widgets.git")),
            ("https://github.com/acme/widgets.git", ("acme", "widgets.git")),
            ("https://github.com/acme/widgets", ("acme", "widgets")),
            ("ssh://git@github.com/acme/widgets", ("acme", "widgets")),
        ],
    )
    def test_github_urls(self, url, expected):
        assert publisher.parse_github_remote(url) == expected

    @pytest.mark.parametrize(
        "url",
        [None, "", "https://gitlab.com/acme/widgets", "https://github.com/acme", "https://github.com/acme/widgets/pulls/1"],
    )
    def test_non_matching_urls(self, url):
        assert publisher.parse_github_remote(url) is None


class TestResolveCoordinates:
    def test_scp_remote_strips_git_suffix(self):
        coords = publisher.resolve_coordinates(Settings(remote_url="git@github.com:acme/widgets.git"))
        assert (coords.owner, coords.repo) == ("acme", "widgets")

    def test_url_wins_over_overrides(self):
        coords = publisher.resolve_coordinates(
            Settings(remote_url="https://github.com/acme/widgets", owner="other", repo="thing")
        )
        assert coords.full_name == "acme/widgets"

    def test_falls_back_to_overrides(self):
        coords = publisher.resolve_coordinates(
            Settings(remote_url="https://git.example.com/acme/widgets", owner="acme", repo="widgets.git")
        )
        assert coords.full_name == "acme/widgets"

    def test_no_remote_uses_overrides(self):
        coords = publisher.resolve_coordinates(Settings(owner="acme", repo="widgets"))
        assert coords.full_name == "acme/widgets"

    @pytest.mark.parametrize(
        "settings",
        [
            Settings(),
            Settings(owner="acme"),
            Settings(repo="widgets"),
            Settings(remote_url="https://gitlab.com/acme/widgets", owner="acme"),
            Settings(owner="acme", repo=".git"),
        ],
    )
    def test_unresolved_is_configuration_error(self, settings):
        with pytest.raises(ConfigurationError):
            publisher.resolve_coordinates(settings)


class TestRequestNumber:
    def test_parses_integer(self):
        assert publisher.parse_request_number("42") == 42
        assert publisher.parse_request_number(" 7\n") == 7

    @pytest.mark.parametrize("raw", [None, "", "  ", "abc", "12abc", "1.5", "0", "-3"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ConfigurationError):
            publisher.parse_request_number(raw)


class TestGitHubCommentPublisher:
    def test_posts_single_comment(self, monkeypatch):
        session = DummySession()
        monkeypatch.setattr(publisher, "retry_session", lambda **kw: session)

        pub = publisher.GitHubCommentPublisher(publisher.GitHubCommentConfig(token="tok", timeout_sec=10))
        pub.publish(_request("❌ failed"))

        assert len(session.calls) == 1
        call = session.calls[0]
        assert call.url == "https://api.github.com/repos/acme/widgets/issues/12/comments"
        assert call.json == {"body": "❌ failed"}
        assert call.headers["Authorization"] == "token tok"
        assert call.timeout == 10

    def test_without_token_omits_authorization(self, monkeypatch, caplog):
        session = DummySession()
        monkeypatch.setattr(publisher, "retry_session", lambda **kw: session)
        caplog.set_level("WARNING")

        publisher.GitHubCommentPublisher(publisher.GitHubCommentConfig()).publish(_request())

        assert "Authorization" not in session.calls[0].headers
        assert any("token missing" in r.message for r in caplog.records)

    def test_http_error_is_collaborator_error(self, monkeypatch):
        session = DummySession(response=DummyResponse(404, text='{"message": "Not Found"}'))
        monkeypatch.setattr(publisher, "retry_session", lambda **kw: session)

        pub = publisher.GitHubCommentPublisher(publisher.GitHubCommentConfig(token="tok"))
        with pytest.raises(CollaboratorError) as exc_info:
            pub.publish(_request())
        assert "404" in str(exc_info.value)

    def test_transport_error_is_collaborator_error(self, monkeypatch):
        session = DummySession(error=requests.ConnectionError("connection refused"))
        monkeypatch.setattr(publisher, "retry_session", lambda **kw: session)

        pub = publisher.GitHubCommentPublisher(publisher.GitHubCommentConfig(token="tok"))
        with pytest.raises(CollaboratorError):
            pub.publish(_request())

    def test_build_publisher_from_settings(self, monkeypatch):
        seen = {}

        def fake_retry_session(total=0, backoff=0.5):
            seen["total"] = total
            seen["backoff"] = backoff
            return DummySession()

        monkeypatch.setattr(publisher, "retry_session", fake_retry_session)
        pub = publisher.build_publisher(
            Settings(token="tok", api_url="https://ghe.example.com/api/v3", http_timeout_sec=5.0, http_retries=2, http_backoff_sec=1.5)
        )

        assert seen["total"] == 2
        assert seen["backoff"] == 1.5
        assert pub.cfg.api_url == "https://ghe.example.com/api/v3"
        assert pub._comments_api(_request()) == "https://ghe.example.com/api/v3/repos/acme/widgets/issues/12/comments"
