from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import UserStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, username, name, password, token, birthday, status"


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        name=row.get("name"),
        password=row.get("password"),
        token=row["token"],
        birthday=row.get("birthday"),
        status=UserStatus(row.get("status") or UserStatus.OFFLINE.value),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, where: str, value: Any) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id")
            return [_row_to_user(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._select_one("user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._select_one("username", username)

    def list_by_username(self, username: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            return [_row_to_user(r) for r in fetchall(cur)]

    def get_by_token(self, token: str) -> Optional[User]:
        return self._select_one("token", token)

    def create_user(
        self,
        *,
        username: str,
        name: Optional[str],
        password: Optional[str],
        token: str,
        birthday: Optional[str],
        status: UserStatus,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, name, password, token, birthday, status)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (username, name, password, token, birthday, status.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # Lost a race on uq_users_username (or uq_users_token).
            raise ConflictError("The username provided is not unique.") from e

    def update_user(self, user: User) -> bool:
        # token is immutable and never written here
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE users
                    SET username=%s, name=%s, birthday=%s, status=%s
                    WHERE user_id=%s
                    """,
                    (user.username, user.name, user.birthday, user.status.value, user.user_id),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            raise ConflictError("Username already used.") from e
