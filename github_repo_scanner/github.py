"""GitHub API client using PyGithub with caching and rate limiting."""

import hashlib
import json
import threading
import time
from pathlib import Path

from github import Auth, Github, GithubException, RateLimitExceededException

from .settings import get_settings

# Rate limit backoff settings
BACKOFF_FACTOR = 1.5
MAX_RETRIES = 30

# Steady-state throttle: 1.3 req/sec = ~4,680/hour (under 5K limit)
REQUESTS_PER_SECOND = 1.3

# Profile fields kept from a user/organization lookup, in REST naming
OWNER_FIELDS = (
    "login",
    "id",
    "type",
    "name",
    "avatar_url",
    "html_url",
    "company",
    "blog",
    "location",
    "email",
    "bio",
)


class Cache:
    """Simple file-based cache for API responses."""

    def __init__(self, cache_dir: Path, skip_cache: bool = False):
        self.cache_dir = cache_dir
        self.skip_cache = skip_cache
        self.hits = 0

    def _key(self, endpoint: str, params: dict) -> str:
        """Generate cache key for an API call."""
        key = f"{endpoint}|{json.dumps(params, sort_keys=True)}"
        return hashlib.sha256(key.encode()).hexdigest()[:16]

    def get(self, endpoint: str, params: dict) -> dict | None:
        """Get cached API response."""
        if self.skip_cache:
            return None
        path = self.cache_dir / f"{self._key(endpoint, params)}.json"
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            return None
        self.hits += 1
        return data

    def set(self, endpoint: str, params: dict, data: dict):
        """Cache an API response."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self.cache_dir / f"{self._key(endpoint, params)}.json"
        with open(path, "w") as f:
            json.dump(data, f)


class GitHubClient:
    """GitHub API client using PyGithub with caching.

    Auth is handled via GITHUB_TOKEN environment variable.
    """

    def __init__(self, cache_dir: Path | None = None, skip_cache: bool = False):
        self.cache = Cache(Path(cache_dir or get_settings().cache_dir), skip_cache=skip_cache)
        self._github: Github | None = None
        self._rate_limit_hits = 0
        self._rate_limit_reset = 0  # unix timestamp when rate limit resets
        self.api_retries = 0
        self._throttle_lock = threading.Lock()
        self._last_request_time = 0.0
        self._min_interval = 1.0 / REQUESTS_PER_SECOND

    @property
    def github(self) -> Github:
        """Lazy-initialize the GitHub client."""
        if self._github is None:
            settings = get_settings()
            if not settings.github_token:
                raise RuntimeError("GITHUB_TOKEN is not set")
            auth = Auth.Token(settings.github_token)
            self._github = Github(auth=auth, retry=3, per_page=settings.per_page)
        return self._github

    @property
    def rate_limit_waiting(self) -> int:
        """Seconds until rate limit resets, 0 if not limited."""
        return max(0, int(self._rate_limit_reset - time.time()))

    def _throttle(self) -> None:
        """Wait if needed to maintain steady request rate."""
        with self._throttle_lock:
            now = time.time()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                time.sleep(self._min_interval - elapsed)
            self._last_request_time = time.time()

    def _handle_rate_limit(self, e: RateLimitExceededException) -> None:
        """Handle rate limit by waiting until reset."""
        self._rate_limit_hits += 1
        reset_time = self.github.rate_limiting_resettime
        self._rate_limit_reset = max(self._rate_limit_reset, reset_time + 1)
        while time.time() < self._rate_limit_reset:
            time.sleep(1)

    def get_owner(self, login: str) -> dict:
        """Look up a user or organization by login.

        Returns a dict keyed like the REST ``users/{login}`` response, limited
        to OWNER_FIELDS.

        Raises:
            LookupError: the login does not exist.
            RuntimeError: the lookup kept failing after MAX_RETRIES.
        """
        cache_params = {"login": login}
        cached = self.cache.get("users", cache_params)
        if cached is not None:
            return cached

        for attempt in range(MAX_RETRIES):
            try:
                self._throttle()
                user = self.github.get_user(login)
                result = {name: getattr(user, name) for name in OWNER_FIELDS}
                self.cache.set("users", cache_params, result)
                return result

            except RateLimitExceededException as e:
                self._handle_rate_limit(e)
                continue
            except GithubException as e:
                if e.status in (403, 429) and "rate limit" in str(e).lower():
                    self._handle_rate_limit(RateLimitExceededException(e.status, e.data, e.headers))
                    continue
                elif e.status == 404:
                    raise LookupError(f"Owner not found: {login}") from e
                elif 400 <= e.status < 500:
                    raise
                else:
                    self.api_retries += 1
                    time.sleep(5 * BACKOFF_FACTOR**attempt)
                    continue

        raise RuntimeError(f"Max retries exceeded looking up owner {login}")


# Client instances keyed by config
_clients: dict[tuple, GitHubClient] = {}


def get_client(cache_dir: Path | None = None, skip_cache: bool = False) -> GitHubClient:
    """Get or create a GitHub client with the given configuration."""
    key = (str(cache_dir) if cache_dir else None, skip_cache)
    if key not in _clients:
        _clients[key] = GitHubClient(cache_dir, skip_cache=skip_cache)
    return _clients[key]
