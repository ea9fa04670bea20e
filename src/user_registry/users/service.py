from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import is_blank, require_non_empty
from ..core.constants import INVALID_TOKEN_MESSAGE, WRONG_CREDENTIALS_MESSAGE
from ..core.enums import Permission, UserStatus
from ..core.exceptions import ConflictError, ForbiddenError, NotFoundError
from .model import NewUser, ProfileEdits, StatusEdits, User
from .repository import UserRepository

LOGGER = logging.getLogger(__name__)


class UserService:
    """Use case: identity and authorization.

    Owns every business rule about users: uniqueness on write, token issuance,
    permission evaluation, authentication and owner-only edits. The repository
    is only a store. Every check runs before the single write of an operation,
    so a failed call never leaves a partial update behind.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        # Callers gate this with authorize(token, READ).
        return self._users.list_all()

    def create_user(self, candidate: NewUser) -> User:
        username = require_non_empty(candidate.username, "Username")
        token = self._new_token()
        self._check_username_free(username)

        user_id = self._users.create_user(
            username=username,
            name=candidate.name,
            password=candidate.password,
            token=token,
            birthday=candidate.birthday,
            status=UserStatus.OFFLINE,
        )
        created = self.get_user_by_id(user_id)
        LOGGER.debug("Created user id=%s username=%s", created.user_id, created.username)
        return created

    def get_user_by_id(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User not found with ID: {user_id}")
        return user

    def get_user_by_token(self, token: str) -> User:
        user = self._users.get_by_token(token)
        if not user:
            raise NotFoundError("User token not found")
        return user

    def is_token_valid(self, token: str) -> bool:
        try:
            self.get_user_by_token(token)
        except NotFoundError:
            return False
        return True

    def is_token_owned_by(self, token: str, user_id: int) -> bool:
        try:
            user = self.get_user_by_token(token)
        except NotFoundError:
            return False
        return user.user_id == user_id

    def authorize(self, token: Optional[str], permission: Permission) -> bool:
        """READ check: the token belongs to some user.

        READ_WRITE always fails here; it is scoped to a user id and only
        evaluated by :meth:`authorize_for_user`.
        """
        if permission == Permission.READ and not is_blank(token):
            return self.is_token_valid(token)
        return False

    def authorize_for_user(self, token: Optional[str], permission: Permission, user_id: int) -> bool:
        """READ_WRITE check: the token belongs to the user with ``user_id``."""
        if permission == Permission.READ_WRITE and not is_blank(token):
            return self.is_token_owned_by(token, user_id)
        return False

    def authenticate_by_credentials(self, username: str, password: str) -> User:
        user = self._users.get_by_username(username)
        # Same error for unknown user and wrong password.
        if not user or user.password != password:
            raise ForbiddenError(WRONG_CREDENTIALS_MESSAGE)
        return user

    def authenticate_by_token(self, token: Optional[str]) -> User:
        if not self.authorize(token, Permission.READ):
            LOGGER.info("Token authentication rejected")
            raise ForbiddenError(INVALID_TOKEN_MESSAGE)
        return self.get_user_by_token(token)

    def update_profile(self, edits: ProfileEdits, target_id: int, caller_token: Optional[str]) -> User:
        """Change username, name and birthday of ``target_id``.

        Only the owner of ``caller_token`` may edit, and the new username may
        not belong to a different user. Status and token are left untouched.
        """
        username = require_non_empty(edits.username, "Username")
        user = self._get_for_edit(target_id, caller_token)

        for other in self._users.list_by_username(username):
            if other.user_id != target_id:
                raise ConflictError("Username already used.")

        updated = replace(user, username=username, name=edits.name, birthday=edits.birthday)
        self._save(updated)
        LOGGER.debug("Updated profile of user id=%s", target_id)
        return updated

    def update_status(self, edits: StatusEdits, target_id: int, caller_token: Optional[str]) -> User:
        user = self._get_for_edit(target_id, caller_token)

        updated = replace(user, status=UserStatus(edits.status))
        self._save(updated)
        LOGGER.debug("Updated status of user id=%s to %s", target_id, updated.status.value)
        return updated

    def _get_for_edit(self, target_id: int, caller_token: Optional[str]) -> User:
        user = self._users.get_by_id(target_id)
        if not user:
            raise NotFoundError(f"User with id {target_id} was not found")

        if not self.authorize_for_user(caller_token, Permission.READ_WRITE, target_id):
            LOGGER.info("Edit of user id=%s rejected: token does not own it", target_id)
            raise ForbiddenError("Not authorized to edit this user.")
        return user

    def _save(self, user: User) -> None:
        if not self._users.update_user(user):
            raise NotFoundError(f"User with id {user.user_id} was not found")

    def _check_username_free(self, username: str) -> None:
        # Names may repeat; only the username is a uniqueness key.
        if self._users.get_by_username(username):
            raise ConflictError(
                "The username provided is not unique. Therefore, the user could not be created!"
            )

    def _new_token(self) -> str:
        token = str(uuid.uuid4())
        while self._users.get_by_token(token):
            token = str(uuid.uuid4())
        return token
