from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code). `password` is stored and
    compared as given; `token` is assigned once at creation and never changes.
    """

    user_id: int
    username: str
    name: Optional[str]
    password: Optional[str]
    token: str
    birthday: Optional[str] = None
    status: UserStatus = UserStatus.OFFLINE


@dataclass(frozen=True)
class NewUser:
    username: Optional[str]
    name: Optional[str] = None
    password: Optional[str] = None
    birthday: Optional[str] = None


@dataclass(frozen=True)
class ProfileEdits:
    username: Optional[str]
    name: Optional[str] = None
    birthday: Optional[str] = None


@dataclass(frozen=True)
class StatusEdits:
    status: UserStatus
