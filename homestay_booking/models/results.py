"""Outcome of engine mutations and the rejection taxonomy."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RejectionCode(str, Enum):
    """Why a requested change to the selection was not applied.

    - UNSUITABLE_ROOM: growth requested on a room that cannot host its guests
      or has no availability left
    - ROOM_LIMIT_EXCEEDED: selected quantities would exceed the rooms searched for
    - CAPACITY_EXCEEDED: guests assigned to a room would exceed what it sleeps
    - EMPTY_ROOM: a selected room would hold no adult
    - REASSIGNMENT_TOTAL_MISMATCH: redistributed guests no longer add up to the search
    - STALE_REASSIGNMENT: the selection changed after the reassignment was staged
    - UNKNOWN_ROOM: room id not part of the current result set
    - UNKNOWN_EXTRA: extra label not offered with the room
    """

    UNSUITABLE_ROOM = "UNSUITABLE_ROOM"
    ROOM_LIMIT_EXCEEDED = "ROOM_LIMIT_EXCEEDED"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    EMPTY_ROOM = "EMPTY_ROOM"
    REASSIGNMENT_TOTAL_MISMATCH = "REASSIGNMENT_TOTAL_MISMATCH"
    STALE_REASSIGNMENT = "STALE_REASSIGNMENT"
    UNKNOWN_ROOM = "UNKNOWN_ROOM"
    UNKNOWN_EXTRA = "UNKNOWN_EXTRA"


class MutationResult(BaseModel):
    """Result of a store, draft or reassignment operation.

    Rejections never raise; callers show ``message`` to the user and the
    state they operated on is left untouched.
    """

    ok: bool
    changed: bool = False
    code: Optional[RejectionCode] = None
    message: Optional[str] = None

    class Config:
        frozen = True

    @classmethod
    def success(cls, changed: bool = True, message: Optional[str] = None) -> "MutationResult":
        return cls(ok=True, changed=changed, message=message)

    @classmethod
    def reject(cls, code: RejectionCode, message: str) -> "MutationResult":
        return cls(ok=False, changed=False, code=code, message=message)
