"""
Pytest configuration and shared fixtures.

``FakeSupabaseClient`` stands in for ``supabase.Client``: it keeps rows per
table in memory, understands the subset of the PostgREST builder the
repositories use, and records each executed call so tests can assert how often
the remote store was hit.
"""

import re
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from teamcal.config import AppSettings, ExportSettings, StorageSettings, SupabaseSettings, UiSettings
from teamcal.data import SupabaseGateway
from teamcal.domain import parse_datetime
from teamcal.services import ServiceContext

ACTOR_ID = "user-1"
NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T")


def _coerce(value):
    if isinstance(value, str) and TIMESTAMP_PATTERN.match(value):
        return parse_datetime(value)
    return value


def _compare(op, left, right):
    if left is None:
        return False
    left, right = _coerce(left), _coerce(right)
    if op == "eq":
        return left == right
    if op == "gt":
        return left > right
    if op == "gte":
        return left >= right
    if op == "lt":
        return left < right
    if op == "lte":
        return left <= right
    raise AssertionError(f"unsupported operator {op}")


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.operation = "select"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.or_groups = []
        self.order_by = None
        self.row_limit = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def insert(self, payload):
        self.operation, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.operation, self.payload = "update", payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def upsert(self, payload, on_conflict=None):
        self.operation, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def _filter(self, op, column, value):
        self.filters.append((column, op, value))
        return self

    def eq(self, column, value):
        return self._filter("eq", column, value)

    def gt(self, column, value):
        return self._filter("gt", column, value)

    def gte(self, column, value):
        return self._filter("gte", column, value)

    def lt(self, column, value):
        return self._filter("lt", column, value)

    def lte(self, column, value):
        return self._filter("lte", column, value)

    def or_(self, expression):
        group = []
        for clause in expression.split(","):
            column, op, value = clause.split(".", 2)
            group.append((column, op, value))
        self.or_groups.append(group)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.row_limit = size
        return self

    def _matches(self, row):
        for column, op, value in self.filters:
            if not _compare(op, row.get(column), value):
                return False
        for group in self.or_groups:
            if not any(_compare(op, row.get(column), value) for column, op, value in group):
                return False
        return True

    def execute(self):
        self.client.calls.append((self.table, self.operation))
        if (self.table, self.operation) in self.client.failures:
            raise RuntimeError(f"{self.table} {self.operation} failed")
        rows = self.client.tables.setdefault(self.table, [])
        handler = getattr(self, f"_execute_{self.operation}")
        return SimpleNamespace(data=deepcopy(handler(rows)))

    def _execute_select(self, rows):
        selected = [row for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            selected.sort(key=lambda row: _coerce(row.get(column)), reverse=desc)
        if self.row_limit is not None:
            selected = selected[: self.row_limit]
        return selected

    def _execute_insert(self, rows):
        payloads = self.payload if isinstance(self.payload, list) else [self.payload]
        inserted = []
        for payload in payloads:
            row = dict(payload)
            row.setdefault("id", f"{self.table}-{len(rows) + 1}")
            row.setdefault("created_at", self.client.now.isoformat())
            rows.append(row)
            inserted.append(row)
        return inserted

    def _execute_update(self, rows):
        updated = []
        for row in rows:
            if self._matches(row):
                row.update(self.payload)
                updated.append(row)
        return updated

    def _execute_delete(self, rows):
        removed = [row for row in rows if self._matches(row)]
        rows[:] = [row for row in rows if not self._matches(row)]
        return removed

    def _execute_upsert(self, rows):
        key = self.on_conflict or "id"
        for row in rows:
            if row.get(key) == self.payload.get(key):
                row.update(self.payload)
                return [row]
        row = dict(self.payload)
        rows.append(row)
        return [row]


class FakeAuth:
    def __init__(self, user_id):
        self.user_id = user_id
        self.signed_in = []

    def sign_in_with_password(self, credentials):
        self.signed_in.append(credentials["email"])
        session = SimpleNamespace(user=SimpleNamespace(id=self.user_id))
        return SimpleNamespace(session=session, user=session.user)

    def sign_out(self):
        return None


class FakeSupabaseClient:
    def __init__(self, now=NOW, user_id=ACTOR_ID):
        self.tables = {}
        self.calls = []
        self.failures = set()
        self.now = now
        self.auth = FakeAuth(user_id)

    def table(self, name):
        return FakeQuery(self, name)

    def count(self, table, operation=None):
        return sum(
            1
            for called_table, called_operation in self.calls
            if called_table == table and (operation is None or called_operation == operation)
        )


def make_settings(output_dir: Path, *, reset_baseline_on_full_export=False, timezone_name="UTC"):
    return AppSettings(
        supabase=SupabaseSettings(url="https://example.supabase.co", anon_key="anon-key"),
        storage=StorageSettings(
            events_table="events",
            event_types_table="event_types",
            teams_table="teams",
            exports_table="calendar_exports",
        ),
        export=ExportSettings(
            product_id="-//TeamCal//Calendar Export//EN",
            uid_domain="teamcal.test",
            output_dir=output_dir,
            reset_baseline_on_full_export=reset_baseline_on_full_export,
        ),
        ui=UiSettings(app_name="Team Calendar", timezone=timezone_name),
    )


def make_event_row(event_id, *, start, end=None, created_at=None, team_id="team-a", event_type_id="type-meeting", **extra):
    row = {
        "id": event_id,
        "title": extra.pop("title", f"Event {event_id}"),
        "description": extra.pop("description", ""),
        "start_time": start,
        "end_time": end or start,
        "is_all_day": extra.pop("is_all_day", False),
        "location": extra.pop("location", None),
        "team_id": team_id,
        "event_type_id": event_type_id,
        "created_at": created_at or "2026-01-01T00:00:00+00:00",
        "team": {"id": team_id, "name": team_id.title()} if team_id else None,
        "event_type": {"id": event_type_id, "name": "Meeting", "color": "#4F46E5"} if event_type_id else None,
    }
    row.update(extra)
    return row


@pytest.fixture
def fake_client():
    return FakeSupabaseClient()


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path / "exports")


@pytest.fixture
def gateway(fake_client, settings):
    session = SimpleNamespace(user=SimpleNamespace(id=ACTOR_ID))
    return SupabaseGateway(settings.supabase, _client=fake_client, _session=session)


@pytest.fixture
def context(settings, gateway):
    return ServiceContext(settings=settings, gateway=gateway)


@pytest.fixture
def seed_events(fake_client):
    def _seed(*rows):
        fake_client.tables.setdefault("events", []).extend(rows)
        return rows

    return _seed


@pytest.fixture
def seed_export(fake_client):
    def _seed(last_export_time, user_id=ACTOR_ID):
        fake_client.tables.setdefault("calendar_exports", []).append(
            {"user_id": user_id, "last_export_time": last_export_time}
        )

    return _seed
