from __future__ import annotations

import mysql.connector
import pytest

from user_registry.core.enums import UserStatus
from user_registry.core.exceptions import BadRequestError, ConflictError
from user_registry.users.model import User
from user_registry.users.mysql_user_repository import MySQLUserRepository


class FakeCursor:
    def __init__(self, rows=None, rowcount=1, lastrowid=7, error=None):
        self._error = error
        self._rows = list(rows or [])
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))
        if self._error:
            raise self._error

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return self._rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor):
        self.cursor = cursor
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


ROW = {
    "user_id": 3,
    "username": "turing",
    "name": "Alan",
    "password": "enigma",
    "token": "t-1",
    "birthday": None,
    "status": "ONLINE",
}


def test_get_by_token_maps_row():
    factory = FakeConnFactory(FakeCursor(rows=[ROW]))
    repo = MySQLUserRepository(factory)

    user = repo.get_by_token("t-1")

    assert user == User(
        user_id=3, username="turing", name="Alan", password="enigma", token="t-1", status=UserStatus.ONLINE
    )
    sql, params = factory.cursor.executed[0]
    assert sql.endswith("FROM users WHERE token=%s")
    assert params == ("t-1",)


def test_get_by_id_missing_returns_none():
    repo = MySQLUserRepository(FakeConnFactory(FakeCursor(rows=[])))

    assert repo.get_by_id(1) is None


def test_create_user_commits_and_returns_id():
    factory = FakeConnFactory(FakeCursor(lastrowid=11))
    repo = MySQLUserRepository(factory)

    new_id = repo.create_user(
        username="turing", name="Alan", password="enigma", token="t-1", birthday=None, status=UserStatus.OFFLINE
    )

    assert new_id == 11
    assert factory.conn.committed
    _, params = factory.cursor.executed[0]
    assert params == ("turing", "Alan", "enigma", "t-1", None, "OFFLINE")


def test_update_user_never_writes_token():
    factory = FakeConnFactory(FakeCursor(rowcount=1))
    repo = MySQLUserRepository(factory)
    user = User(user_id=3, username="t2", name="A", password="p", token="t-1", status=UserStatus.ONLINE)

    assert repo.update_user(user) is True
    sql, params = factory.cursor.executed[0]
    assert "token" not in sql
    assert params == ("t2", "A", None, "ONLINE", 3)


def test_update_user_reports_missing_row():
    repo = MySQLUserRepository(FakeConnFactory(FakeCursor(rowcount=0)))
    user = User(user_id=9, username="x", name=None, password=None, token="t")

    assert repo.update_user(user) is False


def test_create_user_duplicate_key_becomes_conflict():
    duplicate = mysql.connector.IntegrityError(msg="Duplicate entry 'turing' for key 'uq_users_username'", errno=1062)
    factory = FakeConnFactory(FakeCursor(error=duplicate))
    repo = MySQLUserRepository(factory)

    with pytest.raises(ConflictError):
        repo.create_user(
            username="turing", name="Alan", password="enigma", token="t-1", birthday=None, status=UserStatus.OFFLINE
        )

    assert factory.conn.rolled_back
    assert not factory.conn.committed


def test_update_user_duplicate_key_is_bad_request():
    duplicate = mysql.connector.IntegrityError(msg="Duplicate entry 'hopper' for key 'uq_users_username'", errno=1062)
    repo = MySQLUserRepository(FakeConnFactory(FakeCursor(error=duplicate)))
    user = User(user_id=3, username="hopper", name="A", password="p", token="t-1")

    with pytest.raises(BadRequestError):
        repo.update_user(user)
