"""Locate the top of GitHub's repository identifier space.

Doubles a probe identifier until ``/repositories?since=<probe>`` comes back
empty, then bisects between the last non-empty probe and the empty one until
the probe stops moving. Costs O(log N) requests instead of walking N ids.
"""

import sys

from ..fetcher import Fetcher
from ..projection import is_fork


def _log(msg: str):
    sys.stderr.write(f"\033[2K\r[bound] {msg}\n")
    sys.stderr.flush()


def find_upper_bound(fetcher: Fetcher, on_probe=None) -> int:
    """Return the highest non-fork repository identifier currently assigned.

    Returns 0 for an empty corpus. FetchError propagates: a bound computed
    from a failed probe cannot be trusted, so nothing partial is returned.

    Args:
        fetcher: Source of ``since`` pages.
        on_probe: Optional callback, called with each probe identifier before
            it is fetched.
    """
    # Highest non-fork id seen, and highest id of any kind seen. Probing
    # steers by the frontier so a page holding only forks still moves it.
    committed = 0
    frontier = 0
    candidate = 0
    probes = 0

    while True:
        if on_probe is not None:
            on_probe(candidate)
        page = fetcher.fetch_since(candidate)
        probes += 1

        if page.items:
            for raw in page.items:
                if not is_fork(raw):
                    committed = max(committed, raw["id"])
            frontier = max(frontier, page.items[-1]["id"])
            candidate = frontier * 2
            _log(f"probe {probes}: non-empty up to {frontier:,}, doubling to {candidate:,}")
        elif candidate == frontier:
            _log(f"probe {probes}: converged on {committed:,}")
            return committed
        else:
            candidate = (frontier + candidate) // 2
            _log(f"probe {probes}: empty, bisecting to {candidate:,}")
