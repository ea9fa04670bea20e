from __future__ import annotations

from typing import Optional

import pytest

from user_registry.container import build_container_for
from user_registry.core.enums import UserStatus
from user_registry.users.model import User
from user_registry.users.service import UserService


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._next_id = 1
        self.writes = 0

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.username == username:
                return u
        return None

    def list_by_username(self, username: str):
        return [u for u in self._by_id.values() if u.username == username]

    def get_by_token(self, token: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.token == token:
                return u
        return None

    def create_user(self, *, username, name, password, token, birthday, status: UserStatus) -> int:
        uid = self._next_id
        self._next_id += 1
        self._by_id[uid] = User(
            user_id=uid,
            username=username,
            name=name,
            password=password,
            token=token,
            birthday=birthday,
            status=status,
        )
        self.writes += 1
        return uid

    def update_user(self, user: User) -> bool:
        if user.user_id not in self._by_id:
            return False
        self._by_id[user.user_id] = user
        self.writes += 1
        return True


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def service(users_repo):
    return UserService(users_repo)


@pytest.fixture
def container(users_repo):
    return build_container_for(users_repo)
