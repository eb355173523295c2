"""
Shared fixtures for mysqldump tests.
"""

from contextlib import contextmanager

import pytest

from mysqldump.connection import Escaper
from mysqldump.models import DumpOptions


class FakeCursor:
    """Unbuffered-cursor stand-in: a description plus lazily iterated rows."""

    def __init__(self, columns, rows, fail_after=None, error=None):
        self.description = [(name, 253, None, None, None, None, 1, 0) for name in columns]
        self._rows = rows
        self._fail_after = fail_after
        self._error = error
        self.closed = False

    def __iter__(self):
        for i, row in enumerate(self._rows):
            if self._fail_after is not None and i >= self._fail_after:
                raise self._error
            yield row
        if self._fail_after is not None and self._fail_after >= len(self._rows):
            raise self._error

    def close(self):
        self.closed = True


class FakeConnection:
    """In-memory DatabaseConnection with the same public surface."""

    def __init__(self, tables=None):
        # name -> (create statement, columns, rows)
        self.tables = tables or {}
        self.escaper = Escaper()
        self.queries = []
        self.connected = False
        self.failures = {}
        self.stream_failures = {}

    def connect(self):
        if 'connect' in self.failures:
            raise self.failures['connect']
        self.connected = True

    def disconnect(self):
        if 'disconnect' in self.failures:
            raise self.failures['disconnect']
        self.connected = False

    def get_tables(self):
        self.queries.append("SHOW TABLES")
        if 'get_tables' in self.failures:
            raise self.failures['get_tables']
        return list(self.tables)

    def get_create_table(self, table):
        self.queries.append(f"SHOW CREATE TABLE {self.escape_identifier(table)}")
        if ('get_create_table', table) in self.failures:
            raise self.failures[('get_create_table', table)]
        return self.tables[table][0]

    @contextmanager
    def stream_query(self, query):
        self.queries.append(query)
        table = query.split('FROM ', 1)[1].strip('`')
        _, columns, rows = self.tables[table]
        fail_after, error = self.stream_failures.get(table, (None, None))
        cursor = FakeCursor(columns, rows, fail_after, error)
        try:
            yield cursor
        finally:
            cursor.close()

    def escape_identifier(self, name):
        return self.escaper.escape_identifier(name)

    def escape_value(self, value):
        return self.escaper.escape_value(value)


@pytest.fixture
def fake_connection():
    """Connection holding a small two-table database."""
    return FakeConnection({
        "users": (
            "CREATE TABLE `users` (\n  `id` int NOT NULL,\n  `name` varchar(255)\n)",
            ["id", "name"],
            [(1, "alice"), (2, "bob"), (3, None)],
        ),
        "empty_log": (
            "CREATE TABLE `empty_log` (\n  `id` int NOT NULL\n)",
            ["id"],
            [],
        ),
    })


@pytest.fixture
def make_options(tmp_path):
    """Factory for DumpOptions pointing at a temporary destination."""
    def _make(**overrides):
        settings = {
            "host": "localhost",
            "user": "root",
            "password": "secret",
            "database": "testdb",
            "dest": str(tmp_path / "dump.sql"),
        }
        settings.update(overrides)
        return DumpOptions.from_options(settings)
    return _make
