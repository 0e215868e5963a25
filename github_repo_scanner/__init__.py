"""Enumerate GitHub owners and repositories.

Full-corpus discovery walks the global repository id space: a doubling and
bisection search finds the highest id in use, then a forward paged scan
collects every non-fork repository up to it.
"""

from .cli import main
from .errors import FetchError, PartialResultError
from .fetcher import Fetcher, GitHubFetcher
from .find_upper_bound import find_upper_bound
from .list_owners import (
    get_owner,
    list_organization_members,
    list_organization_repositories,
    list_owner_repositories,
    list_user_repositories,
)
from .models import ApiResponse, OwnerRecord, Page, RepositoryRecord
from .scan_repositories import scan_repositories

__all__ = [
    "main",
    "FetchError",
    "PartialResultError",
    "Fetcher",
    "GitHubFetcher",
    "find_upper_bound",
    "get_owner",
    "list_organization_members",
    "list_organization_repositories",
    "list_owner_repositories",
    "list_user_repositories",
    "ApiResponse",
    "OwnerRecord",
    "Page",
    "RepositoryRecord",
    "scan_repositories",
]

if __name__ == "__main__":
    main()
