"""
Query Service - Search, filter and paginate users.

`query_users` is a pure function over a user snapshot; `UserQueryService`
wraps it behind the asynchronous network boundary so the store never deals
with paging concerns.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence
from swarm_admin.domain.user import User
from swarm_admin.domain.role import Role
from swarm_admin.ports.directory_port import DirectoryPort
from swarm_admin.ports.network_port import NetworkPort

logger = logging.getLogger(__name__)

# Filter value meaning "no filter on this column"
ALL = "all"


@dataclass
class UserQuery:
    """Request descriptor for one page of users."""
    page: int = 1
    page_size: int = 5
    search_text: str = ""
    filters: Dict[str, str] = field(default_factory=dict)


@dataclass
class UserPage:
    """One page of users plus the match count before pagination."""
    users: List[User]
    total_count: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        return page_count(self.total_count, self.page_size)


def page_count(total_count: int, page_size: Optional[int]) -> int:
    """Number of pages for a total; 0 when page_size is 0 or unset."""
    if not page_size or page_size <= 0:
        return 0
    return math.ceil(total_count / page_size)


def field_text(user: User, field_name: str, role_names: Mapping[str, str]) -> str:
    """
    Stringified value of a user field, as compared by column filters.

    The `role` column compares against the resolved role name; missing
    values compare as the empty string.
    """
    if field_name == "role":
        return role_names.get(user.role_id, "")

    value = getattr(user, field_name, None)
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def matches_search(user: User, search_text: str) -> bool:
    """Case-insensitive substring match on name or email."""
    needle = search_text.lower()
    return needle in user.name.lower() or needle in user.email.lower()


def active_filters(filters: Optional[Mapping[str, Optional[str]]]) -> Dict[str, str]:
    """Drop empty and "all" filter values."""
    return {
        name: value
        for name, value in (filters or {}).items()
        if value and value != ALL
    }


def query_users(
    users: Sequence[User],
    page: int,
    page_size: int,
    search_text: str = "",
    field_filters: Optional[Mapping[str, Optional[str]]] = None,
    role_names: Optional[Mapping[str, str]] = None,
) -> UserPage:
    """
    Search, filter and paginate a user snapshot.

    Args:
        users: Full snapshot from the store
        page: 1-based page number
        page_size: Rows per page (must be positive)
        search_text: Substring to find in name or email (case-insensitive)
        field_filters: Field name -> expected value, ANDed together
        role_names: role_id -> role name, used by the `role` filter

    Returns:
        UserPage with the sliced users and the total match count

    Raises:
        ValueError: page < 1 or page_size <= 0
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")

    role_names = role_names or {}
    matched = list(users)

    if search_text:
        matched = [u for u in matched if matches_search(u, search_text)]

    for name, value in active_filters(field_filters).items():
        expected = value.lower()
        matched = [u for u in matched if field_text(u, name, role_names).lower() == expected]

    start = (page - 1) * page_size
    return UserPage(
        users=matched[start:start + page_size],
        total_count=len(matched),
        page=page,
        page_size=page_size,
    )


class UserQueryService:
    """
    Asynchronous read side of the directory.

    Every call crosses the network boundary first and reads the store only
    once it resumes, so results reflect the store at completion time.
    """

    def __init__(self, directory: DirectoryPort, network: NetworkPort):
        self._directory = directory
        self._network = network

    async def query_users(self, query: UserQuery) -> UserPage:
        """Fetch one page of users matching a query."""
        await self._network.call("query_users")
        result = query_users(
            self._directory.list_users(),
            page=query.page,
            page_size=query.page_size,
            search_text=query.search_text,
            field_filters=query.filters,
            role_names=self._role_names(),
        )
        logger.debug(
            "query_users page=%s size=%s -> %s/%s",
            query.page, query.page_size, len(result.users), result.total_count,
        )
        return result

    async def get_user(self, user_id: str) -> Optional[User]:
        """Fetch a single user by ID."""
        await self._network.call("get_user")
        return self._directory.get_user(user_id)

    async def list_roles(self) -> List[Role]:
        """Fetch every role."""
        await self._network.call("list_roles")
        return self._directory.list_roles()

    async def role_names(self) -> Dict[str, str]:
        """Fetch the role_id -> name mapping."""
        await self._network.call("list_roles")
        return self._role_names()

    def _role_names(self) -> Dict[str, str]:
        return {role.role_id: role.name for role in self._directory.list_roles()}
