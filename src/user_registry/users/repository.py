from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    Writes are visible to the next read as soon as the call returns; the
    repository enforces no business rules.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_by_username(self, username: str) -> Sequence[User]:
        raise NotImplementedError

    def get_by_token(self, token: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_user(self, user: User) -> bool:
        raise NotImplementedError
