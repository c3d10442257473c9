"""In-memory stand-in for the Supabase client used by the services.

Covers the subset of the PostgREST query builder the app calls, enforces the
unique constraints of the RBAC tables and supports per-(table, operation)
failure injection.
"""

from __future__ import annotations

import copy
import re
import threading
import uuid
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

from app.core.notifier import TelegramNotifier

UNIQUE_CONSTRAINTS: dict[str, list[tuple[str, ...]]] = {
    "roles": [("name",)],
    "permissions": [("name",)],
    "role_permissions": [("role_id", "permission_id")],
    "user_roles": [("user_id", "role_id")],
    "bookings": [("booking_code",)],
}


class FakeAPIError(Exception):
    """Raised where postgrest would raise APIError."""


@dataclass
class FakeResponse:
    data: list[dict[str, Any]]
    count: int | None = None


def _like(pattern: str) -> re.Pattern[str]:
    parts = [re.escape(p) for p in pattern.split("%")]
    return re.compile("^" + ".*".join(parts) + "$", re.IGNORECASE | re.DOTALL)


class FakeQuery:
    def __init__(self, client: FakeSupabaseClient, table: str) -> None:
        self.client = client
        self.table_name = table
        self.op = "select"
        self.columns = "*"
        self.count: str | None = None
        self.payload: Any = None
        self.on_conflict: str | None = None
        self.ignore_duplicates = False
        self.filters: list[tuple[str, str, Any]] = []
        self.order_by: list[tuple[str, bool]] = []
        self._limit: int | None = None
        self._offset = 0

    # Builders

    def select(self, columns: str = "*", count: str | None = None) -> FakeQuery:
        self.op = "select"
        self.columns = columns
        self.count = count
        return self

    def insert(self, rows: Any) -> FakeQuery:
        self.op = "insert"
        self.payload = rows
        return self

    def upsert(self, rows: Any, on_conflict: str | None = None, ignore_duplicates: bool = False) -> FakeQuery:
        self.op = "upsert"
        self.payload = rows
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def update(self, values: dict[str, Any]) -> FakeQuery:
        self.op = "update"
        self.payload = values
        return self

    def delete(self) -> FakeQuery:
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: Any) -> FakeQuery:
        self.filters.append(("in", column, list(values)))
        return self

    def ilike(self, column: str, pattern: str) -> FakeQuery:
        self.filters.append(("ilike", column, _like(pattern)))
        return self

    def gte(self, column: str, value: Any) -> FakeQuery:
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value: Any) -> FakeQuery:
        self.filters.append(("lte", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self.order_by.append((column, desc))
        return self

    def limit(self, n: int) -> FakeQuery:
        self._limit = n
        return self

    def offset(self, n: int) -> FakeQuery:
        self._offset = n
        return self

    # Evaluation

    def _matches(self, row: dict[str, Any]) -> bool:
        for kind, column, value in self.filters:
            actual = row.get(column)
            if kind == "eq" and actual != value:
                return False
            if kind == "in" and actual not in value:
                return False
            if kind == "ilike" and (actual is None or not value.match(str(actual))):
                return False
            if kind == "gte" and (actual is None or actual < value):
                return False
            if kind == "lte" and (actual is None or actual > value):
                return False
        return True

    def _project(self, row: dict[str, Any]) -> dict[str, Any]:
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        names = [c.strip() for c in self.columns.split(",") if c.strip()]
        return {n: copy.deepcopy(row.get(n)) for n in names}

    def execute(self) -> FakeResponse:
        with self.client.lock:
            self.client.calls.append((self.table_name, self.op))
            failure = self.client.failures.get((self.table_name, self.op))
            if failure is not None:
                raise failure
            handler = getattr(self, f"_execute_{self.op}")
            return handler(self.client.rows(self.table_name))

    def _execute_select(self, rows: list[dict[str, Any]]) -> FakeResponse:
        matched = [r for r in rows if self._matches(r)]
        for column, desc in reversed(self.order_by):
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        total = len(matched)
        matched = matched[self._offset:]
        if self._limit is not None:
            matched = matched[:self._limit]
        return FakeResponse(
            data=[self._project(r) for r in matched],
            count=total if self.count else None,
        )

    def _rows_payload(self) -> list[dict[str, Any]]:
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        return [dict(r) for r in payload]

    def _check_unique(self, rows: list[dict[str, Any]], row: dict[str, Any]) -> None:
        for columns in UNIQUE_CONSTRAINTS.get(self.table_name, []):
            key = tuple(row.get(c) for c in columns)
            if any(tuple(r.get(c) for c in columns) == key for r in rows):
                raise FakeAPIError(
                    f'duplicate key value violates unique constraint "{self.table_name}_{"_".join(columns)}_key"'
                )

    def _execute_insert(self, rows: list[dict[str, Any]]) -> FakeResponse:
        inserted = []
        staged = list(rows)
        for row in self._rows_payload():
            row.setdefault("id", str(uuid.uuid4()))
            self._check_unique(staged, row)
            staged.append(row)
            inserted.append(row)
        rows.extend(inserted)
        return FakeResponse(data=copy.deepcopy(inserted))

    def _execute_upsert(self, rows: list[dict[str, Any]]) -> FakeResponse:
        conflict = [c.strip() for c in (self.on_conflict or "id").split(",")]
        written = []
        for row in self._rows_payload():
            key = tuple(row.get(c) for c in conflict)
            existing = next((r for r in rows if tuple(r.get(c) for c in conflict) == key), None)
            if existing is not None:
                if self.ignore_duplicates:
                    continue
                existing.update({k: v for k, v in row.items() if k != "id"})
                written.append(existing)
            else:
                row.setdefault("id", str(uuid.uuid4()))
                self._check_unique(rows, row)
                rows.append(row)
                written.append(row)
        return FakeResponse(data=copy.deepcopy(written))

    def _execute_update(self, rows: list[dict[str, Any]]) -> FakeResponse:
        updated = []
        for row in rows:
            if self._matches(row):
                row.update(copy.deepcopy(self.payload))
                updated.append(row)
        return FakeResponse(data=copy.deepcopy(updated))

    def _execute_delete(self, rows: list[dict[str, Any]]) -> FakeResponse:
        removed = [r for r in rows if self._matches(r)]
        rows[:] = [r for r in rows if not self._matches(r)]
        return FakeResponse(data=removed)


@dataclass
class FakeUser:
    id: str
    email: str
    user_metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str = "2026-01-01T00:00:00+00:00"


class FakeAuthAdmin:
    def __init__(self, auth: FakeAuth) -> None:
        self.auth = auth

    def list_users(self, page: int = 1, per_page: int = 50) -> list[FakeUser]:
        users = list(self.auth.users.values())
        start = (page - 1) * per_page
        return users[start:start + per_page]


class FakeAuth:
    """Bearer token -> user lookup, as auth.get_user(jwt=...) does."""

    def __init__(self) -> None:
        self.users: dict[str, FakeUser] = {}
        self.tokens: dict[str, str] = {}
        self.admin = FakeAuthAdmin(self)

    def add_user(self, user_id: str, email: str, token: str | None = None) -> FakeUser:
        user = FakeUser(id=user_id, email=email)
        self.users[user_id] = user
        if token:
            self.tokens[token] = user_id
        return user

    def get_user(self, jwt: str | None = None) -> SimpleNamespace:
        user_id = self.tokens.get(jwt or "")
        if user_id is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.users[user_id])

    def sign_out(self) -> None:
        return None


class FakeSupabaseClient:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.lock = threading.RLock()
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(name, [])

    def fail(self, table: str, op: str, error: Exception | None = None) -> None:
        self.failures[(table, op)] = error or FakeAPIError(f"{op} on {table} failed")

    def clear_failures(self) -> None:
        self.failures.clear()

    def count_calls(self, table: str, op: str | None = None) -> int:
        return sum(1 for t, o in self.calls if t == table and (op is None or o == op))


def seed_rbac(
    client: FakeSupabaseClient,
    grants: dict[str, list[str]],
    assignments: dict[str, list[str]] | None = None,
) -> dict[str, str]:
    """Create roles with their permission grants and user assignments.

    Returns a name -> id map covering both roles and permissions.
    """
    ids: dict[str, str] = {}
    for role_name, permission_names in grants.items():
        role_id = f"role-{role_name}"
        client.rows("roles").append({"id": role_id, "name": role_name, "description": None})
        ids[role_name] = role_id
        for name in permission_names:
            if name not in ids:
                ids[name] = f"perm-{name}"
                client.rows("permissions").append({
                    "id": ids[name],
                    "name": name,
                    "resource": name.split("_", 1)[-1],
                    "action": name.split("_", 1)[0],
                    "description": None,
                })
            client.rows("role_permissions").append({"role_id": role_id, "permission_id": ids[name]})
    for user_id, role_names in (assignments or {}).items():
        for role_name in role_names:
            client.rows("user_roles").append({"user_id": user_id, "role_id": ids[role_name]})
    return ids


class RecordingNotifier(TelegramNotifier):
    """Notifier that records messages instead of calling Telegram."""

    def __init__(self) -> None:
        super().__init__(bot_token="test-token", chat_id="42")
        self.sent: list[str] = []

    def send(self, text: str) -> bool:
        self.sent.append(text)
        return True
