"""Data models for enumerated owners and repositories.

Every field is optional: ``None`` means the API did not report the value,
which is different from an empty string.
"""

from dataclasses import dataclass, field

ORGANIZATION_TYPE = "Organization"
USER_TYPE = "User"


@dataclass
class ApiResponse:
    """Response from the generic GitHub REST API client."""

    status: int
    body: dict | list
    etag: str | None = None
    link: str | None = None


@dataclass
class Page:
    """One page of raw API objects.

    ``next_page`` is only meaningful for page-number listings. Identifier
    scans (``/repositories?since=``) are exhausted when ``items`` is empty.
    """

    items: list[dict] = field(default_factory=list)
    next_page: int | None = None


@dataclass
class RepositoryRecord:
    owner: str | None = None
    id: int | None = None
    name: str | None = None
    full_name: str | None = None
    clone_url: str | None = None
    url: str | None = None
    default_branch: str | None = None
    description: str | None = None
    homepage: str | None = None


@dataclass
class OwnerRecord:
    """A user or organization.

    Member listings only fill ``login``, ``id`` and ``type``.
    """

    login: str | None = None
    id: int | None = None
    type: str | None = None
    name: str | None = None
    avatar_url: str | None = None
    url: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None

    @property
    def is_organization(self) -> bool:
        return self.type == ORGANIZATION_TYPE
