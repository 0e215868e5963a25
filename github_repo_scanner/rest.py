"""GitHub REST transport for repository and owner enumeration.

Responses are cached on disk with Cachetta, per endpoint:

- ``repositories`` (the ``since`` id scan) is never cached. The corpus keeps
  growing, so a stored page (above all the empty page that marks the end of
  the corpus) would hide repositories created after it was written.
- Owner and organization listings change slowly and are cached for a day.
- Anything else (the ``api`` passthrough) is cached for 30 days.
"""

import hashlib
import json
import time
from datetime import timedelta
from pathlib import Path

import httpx
from cachetta import Cachetta

from .github import BACKOFF_FACTOR, MAX_RETRIES, REQUESTS_PER_SECOND
from .models import ApiResponse
from .settings import get_settings

API_BASE = "https://api.github.com"

SINCE_ENDPOINT = "repositories"
LISTING_DURATION = timedelta(days=1)
DEFAULT_DURATION = timedelta(days=30)

# Endpoint prefix -> freshness window, first match wins. None: never cached.
CACHE_POLICY: tuple[tuple[str, timedelta | None], ...] = (
    ("users/", LISTING_DURATION),
    ("orgs/", LISTING_DURATION),
)


def cache_duration(endpoint: str) -> timedelta | None:
    """How long a response from ``endpoint`` may be served from disk."""
    path = endpoint.strip("/")
    if path == SINCE_ENDPOINT:
        return None
    for prefix, duration in CACHE_POLICY:
        if path.startswith(prefix):
            return duration
    return DEFAULT_DURATION


def _cache_path(cache_dir: Path):
    def _path(endpoint, params=None):
        raw = f"{endpoint}|{json.dumps(params or {}, sort_keys=True)}"
        key = hashlib.sha256(raw.encode()).hexdigest()[:16]
        return Path(cache_dir) / f"{key}.json"

    return _path


class _RateLimited(Exception):
    def __init__(self, wait: float):
        self.wait = wait


class _ServerError(Exception):
    pass


def _read_response(resp: httpx.Response) -> dict:
    """Turn a response into a cacheable dict, or raise.

    Rate limits and 5xx raise the private retry signals. Other client errors
    raise httpx.HTTPStatusError and are neither retried nor cached.
    """
    status = resp.status_code
    if status == 429 or (status == 403 and "rate limit" in resp.text.lower()):
        raise _RateLimited(_parse_retry_after(resp) or 5)
    if status >= 500:
        raise _ServerError()
    if not 200 <= status < 300:
        raise httpx.HTTPStatusError(f"GitHub API error {status}", request=resp.request, response=resp)
    return {
        "status": status,
        "body": resp.json() if resp.content else {},
        "etag": resp.headers.get("etag"),
        "link": resp.headers.get("link"),
    }


class RestClient:
    """Throttled, retrying GET client with the per-endpoint cache policy above."""

    def __init__(self, cache_dir=None, skip_cache=False):
        settings = get_settings()
        if not settings.github_token:
            raise RuntimeError("GITHUB_TOKEN is not set")
        self._client = httpx.Client(
            headers={
                "Authorization": f"bearer {settings.github_token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=30.0,
        )
        self._cache_dir = cache_dir or settings.cache_dir
        self._skip_cache = skip_cache
        self._last_request_time = 0.0
        self._min_interval = 1.0 / REQUESTS_PER_SECOND
        # duration -> (read-through fetch, write-only fetch)
        self._cached: dict[timedelta, tuple] = {}
        self.requests = 0

    def _get(self, endpoint, params=None):
        ep = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self.requests += 1
        return _read_response(self._client.request("GET", f"{API_BASE}{ep}", params=params))

    def _fetch_for(self, endpoint, skip_cache):
        duration = cache_duration(endpoint)
        if duration is None:
            return self._get
        if duration not in self._cached:
            cache = Cachetta(path=_cache_path(self._cache_dir), duration=duration)
            self._cached[duration] = (cache(self._get), cache.copy(read=False)(self._get))
        read_through, write_only = self._cached[duration]
        return write_only if skip_cache or self._skip_cache else read_through

    def _throttle(self):
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_interval:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.time()

    def api(self, endpoint, params=None, skip_cache=False):
        """GET a GitHub REST endpoint.

        Args:
            endpoint: API path, e.g. "orgs/octo-org/repos" or "repositories"
            params: Query parameters dict
            skip_cache: Skip reading cache for this call (still writes)

        Returns:
            ApiResponse with status, body, etag, and link fields.
        """
        params = params or {}
        fetch = self._fetch_for(endpoint, skip_cache)

        for attempt in range(MAX_RETRIES):
            self._throttle()
            try:
                data = fetch(endpoint, params)
            except _RateLimited as e:
                time.sleep(BACKOFF_FACTOR**attempt * e.wait)
                continue
            except (_ServerError, httpx.ConnectError, httpx.RemoteProtocolError, httpx.ReadError):
                time.sleep(BACKOFF_FACTOR**attempt)
                continue
            return ApiResponse(
                status=data["status"],
                body=data["body"],
                etag=data.get("etag"),
                link=data.get("link"),
            )

        raise RuntimeError(f"GitHub API request failed after {MAX_RETRIES} retries: GET {endpoint}")

    def close(self):
        self._client.close()


_rest_clients: dict[tuple, RestClient] = {}


def get_rest_client(cache_dir=None, skip_cache=False):
    """Get or create a RestClient with the given configuration."""
    key = (str(cache_dir) if cache_dir else None, skip_cache)
    if key not in _rest_clients:
        _rest_clients[key] = RestClient(cache_dir, skip_cache=skip_cache)
    return _rest_clients[key]


def _parse_retry_after(resp: httpx.Response) -> float | None:
    val = resp.headers.get("retry-after")
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        return None


def parse_next_page(link: str | None) -> int | None:
    """Extract the ``page`` number of the rel="next" URL in a Link header.

    Returns None when there is no next page.
    """
    if not link:
        return None
    for part in link.split(","):
        target, _, rel = part.partition(";")
        if 'rel="next"' not in rel:
            continue
        page = httpx.URL(target.strip().strip("<>")).params.get("page")
        return int(page) if page and page.isdigit() else None
    return None
