"""Walk GitHub's repository identifier space page by page."""

import sys

from ..errors import FetchError, PartialResultError
from ..fetcher import Fetcher
from ..models import RepositoryRecord
from ..projection import is_fork, to_repository


def _progress(msg: str):
    sys.stderr.write(f"\033[2K\r{msg}")
    sys.stderr.flush()


def scan_repositories(
    fetcher: Fetcher,
    start: int,
    end: int,
    default_branch: str | None = None,
) -> list[RepositoryRecord]:
    """Collect every non-fork repository with an identifier in ``(start, end]``.

    Records come back in the order GitHub lists them, which is ascending
    identifier order. The walk stops as soon as a qualifying identifier
    reaches ``end`` (no further page is requested), or when a page comes back
    with no entries at all.

    Args:
        fetcher: Source of ``since`` pages.
        start: Exclusive lower bound; the first request is ``since=start``.
        end: Inclusive upper bound.
        default_branch: Replaces each record's default branch when set. The
            bulk listing does not report it reliably.

    Raises:
        PartialResultError: a page failed; ``results`` holds the records
            collected before it.
    """
    results: list[RepositoryRecord] = []
    if start >= end:
        return results

    cursor = start
    pages = 0

    while True:
        try:
            page = fetcher.fetch_since(cursor)
        except FetchError as e:
            sys.stderr.write("\n")
            raise PartialResultError(
                f"Scan stopped at since={cursor} after {len(results)} repositories: {e}",
                results,
            ) from e
        pages += 1

        if not page.items:
            break

        qualified = False
        for raw in page.items:
            if is_fork(raw):
                continue
            if raw["id"] > end:
                # end itself is not assigned; nothing past it belongs to the range
                _progress(f"  [{pages} pages] {len(results):,} repositories, passed {end:,}\n")
                return results
            record = to_repository(raw, default_branch=default_branch)
            results.append(record)
            cursor = record.id
            qualified = True
            if cursor >= end:
                _progress(f"  [{pages} pages] {len(results):,} repositories, reached {end:,}\n")
                return results

        if not qualified:
            # Fork-only page: step past it instead of asking for it again
            cursor = page.items[-1]["id"]
            if cursor >= end:
                break

        _progress(f"  [{pages} pages] {len(results):,} repositories, since={cursor:,}")

    _progress(f"  [{pages} pages] {len(results):,} repositories, done\n")
    return results
