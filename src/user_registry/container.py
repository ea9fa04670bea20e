from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_DB_PORT
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository

    user_service: UserService


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", DEFAULT_DB_PORT)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = MySQLUserRepository(conn)
    user_service = UserService(users_repo)

    return Container(conn=conn, users_repo=users_repo, user_service=user_service)


def build_container_for(users_repo: UserRepository) -> Container:
    """Wire the service over an already built repository (no DB connection)."""
    return Container(conn=None, users_repo=users_repo, user_service=UserService(users_repo))
