# tests/conftest.py
import re

import pytest
from fastapi.testclient import TestClient

from config import Settings
from db import QueryResult
from errors import StoreError
from main import create_app

_UPDATE_RE = re.compile(r"UPDATE products SET (?P<set>.+) WHERE id = %s")


class FakeDatabase:
    """In-memory stand-in for db.Database that understands the service's statements."""

    def __init__(self):
        self.rows = {}
        self.next_id = 1
        self.statements = []
        self.fail_with = None
        self.opened = False

    def open(self):
        self.opened = True

    def close(self):
        self.opened = False

    def mutations(self):
        return [sql for sql, _ in self.statements if not sql.startswith("SELECT")]

    def execute(self, sql, params=()):
        params = tuple(params)
        self.statements.append((sql, params))
        if self.fail_with:
            raise StoreError(self.fail_with)

        if sql == "SELECT 1":
            return QueryResult(rows=[{"1": 1}], row_count=1)

        if sql == "SELECT * FROM products ORDER BY id ASC":
            rows = [dict(self.rows[k]) for k in sorted(self.rows)]
            return QueryResult(rows=rows, row_count=len(rows))

        if sql == "SELECT * FROM products WHERE id = %s":
            row = self.rows.get(params[0])
            rows = [dict(row)] if row else []
            return QueryResult(rows=rows, row_count=len(rows))

        if sql.startswith("INSERT INTO products (name, price, quantity)"):
            name, price, quantity = params
            row_id = self.next_id
            self.next_id += 1
            self.rows[row_id] = {"id": row_id, "name": name, "price": price, "quantity": quantity}
            return QueryResult(row_count=1, last_row_id=row_id)

        match = _UPDATE_RE.fullmatch(sql)
        if match:
            columns = [part.split(" = ")[0] for part in match.group("set").split(", ")]
            assert len(columns) + 1 == len(params)
            row = self.rows.get(params[-1])
            if row is None:
                return QueryResult(row_count=0)
            row.update(dict(zip(columns, params[:-1])))
            return QueryResult(row_count=1)

        if sql == "DELETE FROM products WHERE id = %s":
            removed = self.rows.pop(params[0], None)
            return QueryResult(row_count=1 if removed else 0)

        raise AssertionError(f"unexpected statement: {sql}")


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def settings():
    return Settings(cors_origins=["http://localhost:5173"])


@pytest.fixture
def client(fake_db, settings):
    app = create_app(settings=settings, database=fake_db)
    with TestClient(app) as c:
        yield c
