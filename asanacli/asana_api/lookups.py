"""Resolve user-typed names to Asana workspaces, projects and users."""
from typing import Sequence, TypeVar

from thefuzz import process

from .data_models import AsanaModel

FUZZY_THRESHOLD = 80

T = TypeVar("T", bound=AsanaModel)


class NotFoundError(LookupError):
    pass


def resolve(items: Sequence[T], query: str, kind: str) -> T:
    """
    Find the item whose gid or name matches ``query``.
    Tries exact gid, then case-insensitive name, then the best fuzzy name match.
    """
    query = query.strip()
    for item in items:
        if item.gid == query:
            return item

    lowered = query.lower()
    for item in items:
        if item.name and item.name.lower() == lowered:
            return item

    names = {item.gid: item.name for item in items if item.name}
    if names:
        match = process.extractOne(query, names)
        if match and match[1] >= FUZZY_THRESHOLD:
            gid = match[2]
            return next(item for item in items if item.gid == gid)

    raise NotFoundError(f"No {kind} matching '{query}'")


def resolve_workspace(workspaces: Sequence[T], query: str) -> T:
    return resolve(workspaces, query, "workspace")


def resolve_project(projects: Sequence[T], query: str) -> T:
    return resolve(projects, query, "project")


def resolve_user(users: Sequence[T], query: str) -> T:
    return resolve(users, query, "user")
