from __future__ import annotations

import pytest

from src.employee_management.employee_management.storage.mysql_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, table):
        self._table = table
        self._rows = []
        self.closed = False

    def execute(self, sql, params=()):
        sql = " ".join(sql.split())
        if sql.startswith("SELECT payload"):
            key = params[0]
            self._rows = [(self._table[key],)] if key in self._table else []
        elif sql.startswith("INSERT INTO"):
            self._table[params[0]] = params[1]
        elif sql.startswith("DELETE"):
            self._table.pop(params[0], None)
        elif sql.startswith("SELECT storage_key"):
            self._rows = [(k,) for k in sorted(self._table)]
        else:
            raise RuntimeError(f"unexpected SQL: {sql}")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, table, fail_on_execute=False):
        self._table = table
        self._fail = fail_on_execute
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self):
        cur = FakeCursor(self._table)
        if self._fail:
            def boom(*_args, **_kwargs):
                raise RuntimeError("connection lost")

            cur.execute = boom
        return cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, fail_on_execute=False):
        self.table = {}
        self.connections = []
        self._fail = fail_on_execute

    def connect(self):
        conn = FakeConnection(self.table, self._fail)
        self.connections.append(conn)
        return conn


def test_set_get_remove_keys():
    factory = FakeConnectionFactory()
    store = MySQLKeyValueStore(factory)

    store.set("ems_users", "[]")
    store.set("ems_timeoff", "[1]")
    store.set("ems_users", '[{"id": "EMP1"}]')

    assert store.get("ems_users") == '[{"id": "EMP1"}]'
    assert store.get("ems_attendance") is None
    assert list(store.keys()) == ["ems_timeoff", "ems_users"]

    store.remove("ems_timeoff")
    assert list(store.keys()) == ["ems_users"]
    assert all(c.committed and c.closed for c in factory.connections)


def test_failure_rolls_back_and_closes():
    factory = FakeConnectionFactory(fail_on_execute=True)
    store = MySQLKeyValueStore(factory)

    with pytest.raises(RuntimeError):
        store.set("ems_users", "[]")

    conn = factory.connections[0]
    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed
