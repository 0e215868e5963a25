from .list_owners import (
    get_owner,
    list_organization_members,
    list_organization_repositories,
    list_owner_repositories,
    list_user_repositories,
)

__all__ = [
    "get_owner",
    "list_organization_members",
    "list_organization_repositories",
    "list_owner_repositories",
    "list_user_repositories",
]
