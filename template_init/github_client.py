"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

Only used by `--create-remote`. This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class RepoInfo:
    owner: str
    name: str
    html_url: str
    clone_url: str
    visibility: str


class GitHubClient:
    def __init__(self, token: str, api_base: str = "https://api.github.com") -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required (set GITHUB_TOKEN).")
        self._token = token
        self._api_base = api_base.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "template-init",
        }

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), json=json_body, timeout=30)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code == 404:
            return None
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {payload.get('message', payload)}")
        if r.status_code == 204:
            return None
        return r.json()

    @staticmethod
    def _repo_info(owner: str, name: str, data: dict[str, Any]) -> RepoInfo:
        visibility = data.get("visibility") or ("private" if data.get("private") else "public")
        return RepoInfo(
            owner=owner,
            name=name,
            html_url=data["html_url"],
            clone_url=data["clone_url"],
            visibility=visibility,
        )

    def get_repo(self, owner: str, name: str) -> RepoInfo | None:
        """Return RepoInfo if the repo exists and is accessible; otherwise None."""
        data = self._request("GET", f"/repos/{owner}/{name}")
        if data is None:
            return None
        return self._repo_info(owner, name, data)

    def create_repo(self, *, owner: str, name: str, visibility: str, description: str = "") -> RepoInfo:
        """
        Create a repository under the authenticated user (when owner is the viewer)
        or under the `owner` organization.

        `internal` visibility only exists for organizations.
        """
        viewer = self._request("GET", "/user") or {}
        viewer_login = str(viewer.get("login") or "")

        body: dict[str, Any] = {
            "name": name,
            "description": description,
            "auto_init": False,
        }

        if owner == viewer_login:
            if visibility == "internal":
                raise GitHubError("`internal` visibility is only available for organization repositories.")
            body["private"] = visibility != "public"
            data = self._request("POST", "/user/repos", json_body=body)
        else:
            body["visibility"] = visibility
            data = self._request("POST", f"/orgs/{owner}/repos", json_body=body)

        if data is None:
            raise GitHubError(f"Owner not found or not accessible: {owner}")
        return self._repo_info(owner, name, data)

    def ensure_repo(self, *, owner: str, name: str, visibility: str, description: str = "") -> RepoInfo:
        existing = self.get_repo(owner, name)
        if existing is not None:
            return existing
        return self.create_repo(owner=owner, name=name, visibility=visibility, description=description)
