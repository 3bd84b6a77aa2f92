"""
Users Table Controller - View state of the users data table.

Owns paging, search, column filters, client-side sorting and row selection,
and keeps the visible rows in sync with the query service.

Fetch sequencing: every fetch gets a sequence number and cancels the one in
flight. A result is applied only if its sequence number is still the latest,
so a slow early response can never overwrite a newer one.

Known limitation: the query service has no sort key, so sorting reorders the
fetched page only. Row order is not consistent across pages.
"""

import asyncio
import logging
from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple
from swarm_admin.domain.user import User
from swarm_admin.domain.errors import AdminError, ValidationError
from swarm_admin.services.query import UserQuery, UserPage, UserQueryService, page_count
from swarm_admin.services.commands import DirectoryCommands

logger = logging.getLogger(__name__)


class TableState(Enum):
    """Fetch lifecycle of the table."""
    IDLE = "idle"
    FETCHING = "fetching"
    ERROR = "error"


@dataclass
class UserRow:
    """A user as rendered in the table (role resolved to its name)."""
    user_id: str
    name: str
    email: str
    role: str
    status: str
    department: Optional[str]
    location: Optional[str]
    created_at: datetime
    last_login: Optional[datetime]

    @classmethod
    def from_user(cls, user: User, role_names: Mapping[str, str]) -> "UserRow":
        return cls(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=role_names.get(user.role_id, ""),
            status=user.status.value,
            department=user.department,
            location=user.location,
            created_at=user.created_at,
            last_login=user.last_login,
        )


SORTABLE_COLUMNS = tuple(f.name for f in fields(UserRow))


@dataclass
class SortState:
    column: str
    descending: bool = False


@dataclass
class RowActionResult:
    """Outcome of a row-level intent, ready to show as a single message."""
    success: bool
    message: str
    record: Any = None


def sort_rows(rows: List[UserRow], sorting: Optional[SortState]) -> List[UserRow]:
    """Sort rows by one column; empty values always go last."""
    if sorting is None:
        return list(rows)

    def key(row: UserRow):
        value = getattr(row, sorting.column)
        return value.lower() if isinstance(value, str) else value

    present = [r for r in rows if getattr(r, sorting.column) is not None]
    missing = [r for r in rows if getattr(r, sorting.column) is None]
    return sorted(present, key=key, reverse=sorting.descending) + missing


class UsersTableController:
    """
    Users table view state.

    Presentation code calls the setters and row intents, then renders
    `rows`, `is_loading`, `total_count`, `page_count` and `last_error`.
    """

    def __init__(
        self,
        queries: UserQueryService,
        commands: Optional[DirectoryCommands] = None,
        page_size: int = 5,
        fetch_timeout: Optional[float] = 10.0,
    ):
        """
        Initialize table controller.

        Args:
            queries: Read side used for every fetch
            commands: Write side used by row intents (optional for read-only tables)
            page_size: Initial rows per page
            fetch_timeout: Seconds before a fetch is abandoned (None = no limit)
        """
        if page_size <= 0:
            raise ValueError("page_size must be positive")

        self._queries = queries
        self._commands = commands
        self._fetch_timeout = fetch_timeout

        self.page_index = 0
        self.page_size = page_size
        self.search_text = ""
        self.column_filters: Dict[str, str] = {}
        self.sorting: Optional[SortState] = None
        self.selection: Set[str] = set()

        self.rows: List[UserRow] = []
        self.total_count = 0
        self.state = TableState.IDLE
        self.last_error: Optional[str] = None

        self._fetched_rows: List[UserRow] = []
        self._sequence = 0
        self._inflight: Optional[asyncio.Task] = None

    # --- Derived state ---

    @property
    def is_loading(self) -> bool:
        return self.state == TableState.FETCHING

    @property
    def page_count(self) -> int:
        return page_count(self.total_count, self.page_size)

    @property
    def can_previous_page(self) -> bool:
        return self.page_index > 0

    @property
    def can_next_page(self) -> bool:
        return self.page_index + 1 < self.page_count

    @property
    def sequence(self) -> int:
        """Sequence number of the most recently started fetch."""
        return self._sequence

    def current_query(self) -> UserQuery:
        return UserQuery(
            page=self.page_index + 1,
            page_size=self.page_size,
            search_text=self.search_text,
            filters=dict(self.column_filters),
        )

    # --- Fetching ---

    async def refresh(self) -> bool:
        """
        Fetch the current page.

        Returns:
            True if this fetch's result was applied, False if it failed or
            was superseded by a newer fetch
        """
        self._sequence += 1
        sequence = self._sequence

        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        task = asyncio.ensure_future(self._load(self.current_query()))
        self._inflight = task
        self.state = TableState.FETCHING

        try:
            page, role_names = await asyncio.wait_for(task, timeout=self._fetch_timeout)
        except asyncio.CancelledError:
            # Only a newer fetch cancelling our load is absorbed; a cancel of
            # the caller itself always propagates
            if sequence != self._sequence and not asyncio.current_task().cancelling():
                logger.debug("Fetch %s superseded by %s", sequence, self._sequence)
                return False
            if sequence == self._sequence:
                self.state = TableState.IDLE
            raise
        except asyncio.TimeoutError:
            return self._fail(sequence, "Loading users timed out.")
        except AdminError as exc:
            return self._fail(sequence, f"Failed to load users: {exc}")

        if sequence != self._sequence:
            logger.debug("Discarding stale fetch %s (latest %s)", sequence, self._sequence)
            return False

        self._apply(page, role_names)

        # The current page vanished (e.g. last row on it deleted); step back
        if not page.users and self.total_count and self.page_index >= self.page_count:
            self.page_index = self.page_count - 1
            return await self.refresh()
        return True

    async def _load(self, query: UserQuery) -> Tuple[UserPage, Dict[str, str]]:
        role_names = await self._queries.role_names()
        page = await self._queries.query_users(query)
        return page, role_names

    def _apply(self, page: UserPage, role_names: Mapping[str, str]):
        self._fetched_rows = [UserRow.from_user(u, role_names) for u in page.users]
        self.rows = sort_rows(self._fetched_rows, self.sorting)
        self.total_count = page.total_count
        self.selection.clear()
        self.state = TableState.IDLE
        self.last_error = None

    def _fail(self, sequence: int, message: str) -> bool:
        if sequence != self._sequence:
            return False
        logger.warning("Fetch %s failed: %s", sequence, message)
        self.state = TableState.ERROR
        self.last_error = message
        return False

    # --- Paging, search, filters ---

    async def set_page(self, page_index: int) -> bool:
        """Go to a 0-based page index."""
        if page_index < 0:
            raise ValueError("page_index must be >= 0")
        self.page_index = page_index
        return await self.refresh()

    async def next_page(self) -> bool:
        if not self.can_next_page:
            return False
        return await self.set_page(self.page_index + 1)

    async def previous_page(self) -> bool:
        if not self.can_previous_page:
            return False
        return await self.set_page(self.page_index - 1)

    async def set_page_size(self, page_size: int) -> bool:
        """Change rows per page and go back to the first page."""
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.page_index = 0
        return await self.refresh()

    async def set_search(self, text: str) -> bool:
        """Change the global search text and go back to the first page."""
        self.search_text = text
        self.page_index = 0
        return await self.refresh()

    async def set_filter(self, column: str, value: Optional[str]) -> bool:
        """Set one column filter ("" / None / "all" removes it)."""
        if value and value != "all":
            self.column_filters[column] = value
        else:
            self.column_filters.pop(column, None)
        self.page_index = 0
        return await self.refresh()

    async def clear_filters(self) -> bool:
        self.column_filters.clear()
        self.search_text = ""
        self.page_index = 0
        return await self.refresh()

    # --- Sorting (client-side, current page only) ---

    def set_sort(self, column: Optional[str], descending: bool = False):
        """Sort the fetched page by a column, or restore fetch order with None."""
        if column is None:
            self.sorting = None
        elif column not in SORTABLE_COLUMNS:
            raise ValueError(f"Unknown column: {column}")
        else:
            self.sorting = SortState(column=column, descending=descending)
        self.rows = sort_rows(self._fetched_rows, self.sorting)

    # --- Selection ---

    def toggle_row(self, user_id: str) -> bool:
        """Toggle selection of a visible row. Returns the new state."""
        if user_id not in {r.user_id for r in self.rows}:
            raise KeyError(user_id)
        if user_id in self.selection:
            self.selection.discard(user_id)
            return False
        self.selection.add(user_id)
        return True

    def toggle_all(self):
        """Select every visible row, or clear if all are already selected."""
        visible = {r.user_id for r in self.rows}
        if visible and visible <= self.selection:
            self.selection.clear()
        else:
            self.selection = set(visible)

    def clear_selection(self):
        self.selection.clear()

    def selected_rows(self) -> List[UserRow]:
        return [r for r in self.rows if r.user_id in self.selection]

    # --- Row intents ---

    async def view_row(self, user_id: str) -> Optional[User]:
        """Fetch the full record behind a row."""
        return await self._queries.get_user(user_id)

    async def create_row(self, values: Mapping[str, Any]) -> RowActionResult:
        """
        Create a user, then re-query.

        Raises:
            ValidationError: form errors stay with the form
        """
        commands = self._require_commands()
        try:
            user = await commands.create_user(values)
        except ValidationError:
            raise
        except AdminError as exc:
            return self._command_failed("create user", exc)

        await self.refresh()
        return RowActionResult(True, "User created successfully!", user)

    async def edit_row(self, user_id: str, values: Mapping[str, Any]) -> RowActionResult:
        """
        Update a user, then re-query.

        Raises:
            ValidationError: form errors stay with the form
        """
        commands = self._require_commands()
        try:
            user = await commands.update_user(user_id, values)
        except ValidationError:
            raise
        except AdminError as exc:
            return self._command_failed("update user", exc)

        await self.refresh()
        if user is None:
            return RowActionResult(False, "User no longer exists.")
        return RowActionResult(True, "User updated successfully!", user)

    async def delete_row(self, user_id: str) -> RowActionResult:
        """
        Delete a user, then re-query.

        A user that is already gone counts as deleted.
        """
        commands = self._require_commands()
        try:
            removed = await commands.delete_user(user_id)
        except AdminError as exc:
            return self._command_failed("delete user", exc)

        await self.refresh()
        if not removed:
            return RowActionResult(True, "User was already deleted.")
        return RowActionResult(True, "User deleted successfully.")

    def _require_commands(self) -> DirectoryCommands:
        if self._commands is None:
            raise RuntimeError("This table was created without commands")
        return self._commands

    def _command_failed(self, action: str, exc: AdminError) -> RowActionResult:
        message = f"Failed to {action}: {exc}"
        logger.warning(message)
        self.last_error = message
        return RowActionResult(False, message)
