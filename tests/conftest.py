import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config):
    """pytest 초기화 시점에 실행되어 테스트 수집 전에 환경을 준비합니다.

    실제 Supabase에 접속하지 않도록 테스트용 접속 정보를 설정합니다.
    """
    os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
    os.environ.setdefault("SUPABASE_KEY", "test-anon-key")


# ============================================================
# Supabase 쿼리 빌더 대역
# ============================================================

class FakeQuery:
    """client.table(...)이 돌려주는 쿼리 빌더 대역.

    필터는 행 dict에 그대로 적용합니다. gte/lte는 문자열(ISO) 비교입니다.
    """

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.columns = "*"
        self.filters: list[tuple[str, str, object]] = []
        self.ordering: list[tuple[str, bool]] = []
        self.max_rows = None

    def select(self, columns: str = "*"):
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column, value):
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column, value):
        self.filters.append(("lte", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def like(self, column, pattern):
        self.filters.append(("like", column, pattern))
        return self

    def order(self, column, desc=False):
        self.ordering.append((column, desc))
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def _matches(self, row: dict) -> bool:
        for op, column, value in self.filters:
            actual = row.get(column)
            if op == "eq" and actual != value:
                return False
            if op == "gte" and (actual is None or str(actual) < str(value)):
                return False
            if op == "lte" and (actual is None or str(actual) > str(value)):
                return False
            if op == "in" and actual not in value:
                return False
            if op == "like" and not str(actual or "").startswith(str(value).rstrip("%")):
                return False
        return True

    def execute(self):
        self.client.calls.append(self)
        if self.table in self.client.failing:
            raise RuntimeError(f"relation {self.table} is unavailable")
        rows = [dict(row) for row in self.client.tables.get(self.table, []) if self._matches(row)]
        for column, desc in reversed(self.ordering):
            rows.sort(key=lambda r: (r.get(column) is None, str(r.get(column) or "")), reverse=desc)
        if self.max_rows is not None:
            rows = rows[: self.max_rows]
        return SimpleNamespace(data=rows)


class FakeSupabase:
    """테이블명 → 행 목록을 가진 Supabase 클라이언트 대역."""

    def __init__(self, tables=None, failing=()):
        self.tables = tables or {}
        self.failing = set(failing)
        self.calls: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def queried(self, table: str) -> list[FakeQuery]:
        return [call for call in self.calls if call.table == table]


@pytest.fixture
def fake_supabase():
    return FakeSupabase


@pytest.fixture
def now():
    """테스트 기준 시각 (일요일 14시)."""
    import pandas as pd

    return pd.Timestamp("2024-03-10 14:00")
