"""Fetcher seam between the listing algorithms and the GitHub API.

Algorithms only see the ``Fetcher`` protocol, so tests can swap in a
simulated corpus.
"""

from typing import Protocol

import httpx
from github import GithubException

from .errors import FetchError
from .github import GitHubClient, get_client
from .models import Page
from .rest import RestClient, get_rest_client, parse_next_page
from .settings import get_settings


class Fetcher(Protocol):
    def fetch_since(self, since: int) -> Page:
        """One page of repositories with identifiers greater than ``since``."""
        ...

    def fetch_page(self, endpoint: str, page: int, params: dict | None = None) -> Page:
        """One page of a page-number listing."""
        ...

    def fetch_owner(self, login: str) -> dict:
        """Raw profile of a user or organization."""
        ...


class GitHubFetcher:
    """Fetcher backed by the cached REST client and PyGithub.

    Every failure surfaces as FetchError.
    """

    def __init__(
        self,
        rest: RestClient | None = None,
        client: GitHubClient | None = None,
        per_page: int | None = None,
        skip_cache: bool = False,
    ):
        self._rest = rest
        self._client = client
        self.per_page = per_page or get_settings().per_page
        self.skip_cache = skip_cache

    @property
    def rest(self) -> RestClient:
        if self._rest is None:
            self._rest = get_rest_client(skip_cache=self.skip_cache)
        return self._rest

    @property
    def client(self) -> GitHubClient:
        if self._client is None:
            self._client = get_client(skip_cache=self.skip_cache)
        return self._client

    def _get(self, endpoint: str, params: dict):
        try:
            resp = self.rest.api(endpoint, params=params)
        except (httpx.HTTPError, RuntimeError) as e:
            raise FetchError(f"GET {endpoint} failed: {e}") from e
        if not isinstance(resp.body, list):
            raise FetchError(f"GET {endpoint} returned {type(resp.body).__name__}, expected a list")
        return resp

    def fetch_since(self, since: int) -> Page:
        resp = self._get("repositories", {"since": since})
        return Page(items=resp.body)

    def fetch_page(self, endpoint: str, page: int, params: dict | None = None) -> Page:
        query = {**(params or {}), "page": page, "per_page": self.per_page}
        resp = self._get(endpoint, query)
        return Page(items=resp.body, next_page=parse_next_page(resp.link))

    def fetch_owner(self, login: str) -> dict:
        try:
            return self.client.get_owner(login)
        except (GithubException, LookupError, RuntimeError) as e:
            raise FetchError(f"Owner lookup for {login} failed: {e}") from e
