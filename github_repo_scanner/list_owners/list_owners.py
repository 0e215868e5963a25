"""Owner lookup and the page-number listings around it."""

import sys
from typing import Callable, TypeVar

from ..errors import FetchError, PartialResultError
from ..fetcher import Fetcher
from ..models import OwnerRecord, RepositoryRecord
from ..projection import is_fork, to_member, to_owner, to_repository

T = TypeVar("T")


def _log(msg: str):
    sys.stderr.write(f"\033[2K\r[owners] {msg}\n")
    sys.stderr.flush()


def _paginate(
    fetcher: Fetcher,
    endpoint: str,
    project: Callable[[dict], T],
    params: dict | None = None,
    keep: Callable[[dict], bool] | None = None,
) -> list[T]:
    """Follow a page-number listing until there is no next page.

    Termination is decided by ``Page.next_page`` only; an empty page (or one
    whose entries were all filtered out) does not end the listing.
    """
    results: list[T] = []
    page_number = 1

    while True:
        try:
            page = fetcher.fetch_page(endpoint, page_number, params)
        except FetchError as e:
            raise PartialResultError(
                f"Listing {endpoint} stopped at page {page_number} after {len(results)} items: {e}",
                results,
            ) from e

        for raw in page.items:
            if keep is None or keep(raw):
                results.append(project(raw))

        if page.next_page is None:
            return results
        page_number = page.next_page


def get_owner(fetcher: Fetcher, login: str) -> OwnerRecord:
    """Resolve a user or organization into its full profile."""
    return to_owner(fetcher.fetch_owner(login))


def list_user_repositories(
    fetcher: Fetcher,
    login: str,
    include_forks: bool = False,
) -> list[RepositoryRecord]:
    """List repositories owned by a user. Forks are dropped unless asked for."""
    return _paginate(
        fetcher,
        f"users/{login}/repos",
        to_repository,
        # The user endpoint has no "sources" type; "owner" drops repos the user
        # only collaborates on, and forks are filtered below
        params={"type": "owner"},
        keep=None if include_forks else (lambda raw: not is_fork(raw)),
    )


def list_organization_repositories(fetcher: Fetcher, login: str) -> list[RepositoryRecord]:
    """List an organization's source repositories, cloned over SSH."""
    return _paginate(
        fetcher,
        f"orgs/{login}/repos",
        lambda raw: to_repository(raw, clone_url_field="ssh_url"),
        params={"type": "sources"},
        keep=lambda raw: not is_fork(raw),
    )


def list_organization_members(fetcher: Fetcher, login: str) -> list[OwnerRecord]:
    return _paginate(fetcher, f"orgs/{login}/members", to_member)


def list_owner_repositories(
    fetcher: Fetcher,
    login: str,
    include_forks: bool = False,
) -> list[RepositoryRecord]:
    """List repositories of whatever ``login`` turns out to be.

    Organizations never include forks; ``include_forks`` only applies to
    users.
    """
    owner = get_owner(fetcher, login)
    if owner.is_organization:
        _log(f"{login} is an organization")
        return list_organization_repositories(fetcher, login)
    return list_user_repositories(fetcher, login, include_forks=include_forks)
