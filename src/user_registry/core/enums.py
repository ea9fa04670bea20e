from __future__ import annotations

from enum import Enum


class UserStatus(str, Enum):
    """Presence flag, set only by the client through the status endpoint."""

    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class Permission(str, Enum):
    """Permission requested by a call. Evaluated per request, never stored."""

    READ = "READ"
    READ_WRITE = "READ_WRITE"
