from __future__ import annotations

import logging
from datetime import datetime
from urllib.parse import quote

import httpx

from gitmind.domain.entities import Account, RepositorySummary
from gitmind.domain.errors import AccountNotFound, NetworkError, RepositoryFetchDegraded
from gitmind.domain.interfaces import IProfileFetcher, IRepositoryFetcher

log = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
PAGE_SIZE = 6
REQUEST_TIMEOUT = 30.0


class GitHubClient(IProfileFetcher, IRepositoryFetcher):
    """
    Concrete implementation of both fetcher ports over GitHub's REST API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. The caller owns its lifecycle, and tests pass
    a client built on httpx.MockTransport. Requests are unauthenticated.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str = GITHUB_API_URL) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Accept": "application/vnd.github+json",
        }

    def _user_url(self, handle: str) -> str:
        return f"{self._base_url}/users/{quote(handle, safe='')}"

    # Anti-Corruption Layer
    @staticmethod
    def _parse_datetime(value: str | None) -> datetime | None:
        """Convert GitHub's ISO datetime string to Python datetime. Unparsable → None."""
        if not value:
            return None
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            log.debug("Ignoring unparsable timestamp %r", value)
            return None

    @staticmethod
    def _parse_account(data: dict) -> Account:
        """
        Translate the /users/{handle} payload into an Account.
        Raises KeyError/TypeError/ValueError when the shape is wrong.
        """
        return Account(
            login        = str(data["login"]),
            name         = data.get("name") or None,
            avatar_url   = data.get("avatar_url") or "",
            bio          = data.get("bio") or None,
            public_repos = int(data.get("public_repos") or 0),
            followers    = int(data.get("followers") or 0),
            following    = int(data.get("following") or 0),
            html_url     = data.get("html_url") or "",
            location     = data.get("location") or None,
        )

    def _parse_repository(self, node: dict) -> RepositorySummary | None:
        try:
            return RepositorySummary(
                id               = int(node["id"]),
                name             = str(node["name"]),
                description      = node.get("description") or None,
                stargazers_count = int(node.get("stargazers_count") or 0),
                forks_count      = int(node.get("forks_count") or 0),
                language         = node.get("language") or None,
                html_url         = node.get("html_url") or "",
                updated_at       = self._parse_datetime(node.get("updated_at")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            log.debug("Skipping malformed repository node %r: %s", node, exc)
            return None

    # IProfileFetcher implementation
    async def fetch_account(self, handle: str) -> Account:
        """
        GET /users/{handle}.

        A non-2xx status raises AccountNotFound without reading the body.
        Transport failures and undecodable bodies raise NetworkError.
        """
        try:
            response = await self._client.get(
                self._user_url(handle),
                headers=self._headers,
                timeout=REQUEST_TIMEOUT,
            )
        except httpx.RequestError as exc:
            log.warning("Account lookup for %s failed in transport: %s", handle, exc)
            raise NetworkError(handle, str(exc)) from exc

        if not response.is_success:
            log.info("Account lookup for %s returned HTTP %d", handle, response.status_code)
            raise AccountNotFound(handle, response.status_code)

        try:
            return self._parse_account(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            log.warning("Account payload for %s could not be decoded: %s", handle, exc)
            raise NetworkError(handle, f"malformed account payload: {exc}") from exc

    # IRepositoryFetcher implementation
    async def fetch_repositories(self, handle: str) -> list[RepositorySummary]:
        """
        GET /users/{handle}/repos?sort=updated&per_page=6.

        Any failure of the listing as a whole raises RepositoryFetchDegraded.
        Individual malformed entries are dropped.
        """
        try:
            response = await self._client.get(
                f"{self._user_url(handle)}/repos",
                params={"sort": "updated", "per_page": PAGE_SIZE},
                headers=self._headers,
                timeout=REQUEST_TIMEOUT,
            )
        except httpx.RequestError as exc:
            raise RepositoryFetchDegraded(handle, f"transport error: {exc}") from exc

        if not response.is_success:
            raise RepositoryFetchDegraded(handle, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise RepositoryFetchDegraded(handle, f"invalid JSON: {exc}") from exc

        if not isinstance(payload, list):
            raise RepositoryFetchDegraded(handle, f"expected a list, got {type(payload).__name__}")

        repos = [parsed for node in payload if (parsed := self._parse_repository(node)) is not None]
        log.debug("Fetched %d repositories for %s", len(repos), handle)
        return repos[:PAGE_SIZE]
