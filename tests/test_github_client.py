from __future__ import annotations

from typing import Any

import pytest
import requests

from template_init.github_client import GitHubClient, GitHubError


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


def _repo_payload(owner: str, name: str, visibility: str) -> dict[str, Any]:
    return {
        "html_url": f"https://github.com/{owner}/{name}",
        "clone_url": f"https://github.com/{owner}/{name}.git",
        "visibility": visibility,
        "private": visibility != "public",
    }


@pytest.fixture()
def http(monkeypatch: pytest.MonkeyPatch):
    calls: list[tuple[str, str, Any]] = []
    routes: dict[tuple[str, str], FakeResponse] = {}

    def fake_request(method, url, headers=None, json=None, timeout=None):
        calls.append((method, url, json))
        assert headers["Authorization"] == "Bearer tok"
        return routes.get((method, url), FakeResponse(404, {"message": "Not Found"}))

    monkeypatch.setattr(requests, "request", fake_request)
    return calls, routes


def test_empty_token_rejected():
    with pytest.raises(GitHubError):
        GitHubClient("  ")


def test_ensure_repo_creates_org_repo_with_visibility(http):
    calls, routes = http
    api = "https://api.github.com"
    routes[("GET", f"{api}/user")] = FakeResponse(200, {"login": "someone"})
    routes[("POST", f"{api}/orgs/acme/repos")] = FakeResponse(201, _repo_payload("acme", "widget", "internal"))

    repo = GitHubClient("tok").ensure_repo(owner="acme", name="widget", visibility="internal")

    assert repo.clone_url == "https://github.com/acme/widget.git"
    assert repo.visibility == "internal"
    post = [c for c in calls if c[0] == "POST"][0]
    assert post[2]["visibility"] == "internal"
    assert post[2]["name"] == "widget"


def test_ensure_repo_creates_user_repo_as_private(http):
    calls, routes = http
    api = "https://api.github.com"
    routes[("GET", f"{api}/user")] = FakeResponse(200, {"login": "me"})
    routes[("POST", f"{api}/user/repos")] = FakeResponse(201, _repo_payload("me", "widget", "private"))

    GitHubClient("tok").ensure_repo(owner="me", name="widget", visibility="private")

    post = [c for c in calls if c[0] == "POST"][0]
    assert post[2]["private"] is True
    assert "visibility" not in post[2]


def test_internal_visibility_rejected_for_user_repo(http):
    _calls, routes = http
    routes[("GET", "https://api.github.com/user")] = FakeResponse(200, {"login": "me"})
    with pytest.raises(GitHubError, match="internal"):
        GitHubClient("tok").create_repo(owner="me", name="widget", visibility="internal")


def test_ensure_repo_reuses_existing(http):
    calls, routes = http
    routes[("GET", "https://api.github.com/repos/acme/widget")] = FakeResponse(200, _repo_payload("acme", "widget", "public"))

    repo = GitHubClient("tok").ensure_repo(owner="acme", name="widget", visibility="private")

    assert repo.visibility == "public"
    assert [c[0] for c in calls] == ["GET"]


def test_api_error_surfaces_message(http):
    _calls, routes = http
    routes[("GET", "https://api.github.com/repos/acme/widget")] = FakeResponse(403, {"message": "Forbidden"})
    with pytest.raises(GitHubError, match="403.*Forbidden"):
        GitHubClient("tok").get_repo("acme", "widget")
