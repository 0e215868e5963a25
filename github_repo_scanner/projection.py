"""Map raw GitHub REST objects onto owner and repository records."""

from .models import OwnerRecord, RepositoryRecord


def is_fork(raw: dict) -> bool:
    """Fork predicate. A missing ``fork`` field counts as not a fork."""
    return bool(raw.get("fork"))


def to_repository(
    raw: dict,
    *,
    clone_url_field: str = "clone_url",
    default_branch: str | None = None,
) -> RepositoryRecord:
    """Project a repository object.

    Args:
        raw: Repository JSON as returned by any listing endpoint.
        clone_url_field: Which URL to expose as ``clone_url`` (organization
            listings use ``ssh_url``).
        default_branch: Replaces the remote default branch when given.
    """
    owner = raw.get("owner") or {}
    return RepositoryRecord(
        owner=owner.get("login"),
        id=raw.get("id"),
        name=raw.get("name"),
        full_name=raw.get("full_name"),
        clone_url=raw.get(clone_url_field),
        url=raw.get("html_url"),
        default_branch=default_branch if default_branch is not None else raw.get("default_branch"),
        description=raw.get("description"),
        homepage=raw.get("homepage"),
    )


def to_owner(raw: dict) -> OwnerRecord:
    return OwnerRecord(
        login=raw.get("login"),
        id=raw.get("id"),
        type=raw.get("type"),
        name=raw.get("name"),
        avatar_url=raw.get("avatar_url"),
        url=raw.get("html_url"),
        company=raw.get("company"),
        blog=raw.get("blog"),
        location=raw.get("location"),
        email=raw.get("email"),
        bio=raw.get("bio"),
    )


def to_member(raw: dict) -> OwnerRecord:
    """Project an organization member; profile fields stay unset."""
    return OwnerRecord(login=raw.get("login"), id=raw.get("id"), type=raw.get("type"))
