"""Shared fixtures: a simulated GitHub corpus behind the Fetcher protocol."""

import pytest

from .errors import FetchError
from .models import Page


def make_raw_repo(repo_id: int, fork: bool = False, **overrides) -> dict:
    """Raw repository object shaped like the REST API's."""
    raw = {
        "id": repo_id,
        "name": f"repo{repo_id}",
        "full_name": f"owner{repo_id}/repo{repo_id}",
        "owner": {"login": f"owner{repo_id}", "id": repo_id * 10, "type": "User"},
        "fork": fork,
        "clone_url": f"https://github.com/owner{repo_id}/repo{repo_id}.git",
        "ssh_url": f"git@github.com:owner{repo_id}/repo{repo_id}.git",
        "html_url": f"https://github.com/owner{repo_id}/repo{repo_id}",
        "default_branch": "main",
        "description": None,
        "homepage": None,
    }
    raw.update(overrides)
    return raw


class FakeFetcher:
    """In-memory corpus.

    ``repos`` holds ids (non-forks) or ``(id, fork)`` pairs. ``listings`` maps
    an endpoint to its pages of raw objects. ``fail_on`` makes the Nth call
    to ``fetch_since`` (1-based) raise, ``fail_on_page`` does the same for
    ``fetch_page``.
    """

    def __init__(
        self,
        repos=(),
        page_size: int = 100,
        listings: dict | None = None,
        owners: dict | None = None,
        fail_on: int | None = None,
        fail_on_page: int | None = None,
    ):
        entries = [r if isinstance(r, tuple) else (r, False) for r in repos]
        self.repos = [make_raw_repo(i, fork=f) for i, f in sorted(entries)]
        self.page_size = page_size
        self.listings = listings or {}
        self.owners = owners or {}
        self.fail_on = fail_on
        self.fail_on_page = fail_on_page
        self.since_calls: list[int] = []
        self.page_calls: list[tuple[str, int, dict | None]] = []

    def fetch_since(self, since: int) -> Page:
        self.since_calls.append(since)
        if self.fail_on is not None and len(self.since_calls) == self.fail_on:
            raise FetchError(f"simulated failure at since={since}")
        items = [r for r in self.repos if r["id"] > since][: self.page_size]
        return Page(items=items)

    def fetch_page(self, endpoint: str, page: int, params: dict | None = None) -> Page:
        self.page_calls.append((endpoint, page, params))
        if self.fail_on_page is not None and len(self.page_calls) == self.fail_on_page:
            raise FetchError(f"simulated failure on {endpoint} page {page}")
        pages = self.listings.get(endpoint, [[]])
        items = pages[page - 1] if page <= len(pages) else []
        return Page(items=items, next_page=page + 1 if page < len(pages) else None)

    def fetch_owner(self, login: str) -> dict:
        if login not in self.owners:
            raise FetchError(f"Owner lookup for {login} failed: 404")
        return self.owners[login]


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher
