"""Staged redistribution of guests across the selected rooms."""

from typing import Optional

from pydantic import BaseModel
from structlog import get_logger

from homestay_booking.models.guests import GuestCounts, GuestField
from homestay_booking.models.results import MutationResult, RejectionCode
from homestay_booking.services.selection_store import SelectionStore

logger = get_logger(__name__)


class StagedGuests(BaseModel):
    """Working copy of one selected entry's guests.

    An entry with quantity > 1 is staged once and reassigned as a block.
    """

    room_id: int
    room_title: str
    quantity: int
    adults: int
    children: int
    sleeps: int
    capacity_warning: Optional[str] = None

    @property
    def total(self) -> int:
        return self.adults + self.children

    def as_counts(self) -> GuestCounts:
        return GuestCounts(adults=self.adults, children=self.children)


class ReassignmentSession:
    """All-or-nothing guest reassignment over a SelectionStore.

    The room set and quantities are frozen when the session is opened. Edits
    only touch the staged copy; ``commit`` checks the staged totals against
    the search and writes every entry at once, or nothing.
    """

    def __init__(self, store: SelectionStore):
        """Stage the store's current entries.

        Args:
            store: Store to reassign guests in
        """
        self._store = store
        self._frozen_quantities = {entry.room_id: entry.quantity for entry in store.entries}
        self.staged: list[StagedGuests] = [
            StagedGuests(
                room_id=entry.room_id,
                room_title=entry.room_title,
                quantity=entry.quantity,
                adults=entry.assigned_guests.adults,
                children=entry.assigned_guests.children,
                sleeps=entry.sleeps,
            )
            for entry in store.entries
        ]
        self.logger = logger.bind(homestay=store.catalog.slug)

    def _record(self, room_id: int) -> Optional[StagedGuests]:
        for record in self.staged:
            if record.room_id == room_id:
                return record
        return None

    @property
    def staged_adults(self) -> int:
        return sum(record.adults for record in self.staged)

    @property
    def staged_children(self) -> int:
        return sum(record.children for record in self.staged)

    def adjust(self, room_id: int, field: GuestField, delta: int) -> MutationResult:
        """Step adults (floor 1) or children (floor 0) on one staged record.

        An edit that would overflow the room is refused, the previous value
        kept and a capacity warning left on the record.
        """
        record = self._record(room_id)
        if record is None:
            return MutationResult.reject(
                RejectionCode.UNKNOWN_ROOM,
                f"Room {room_id} is not part of the current selection",
            )

        updated = record.as_counts().adjusted(field, delta)
        if updated.total > record.sleeps:
            record.capacity_warning = (
                f"{record.room_title} sleeps at most {record.sleeps} guest(s)"
            )
            self.logger.info(
                "Staged guest edit rejected",
                room_id=room_id,
                code=RejectionCode.CAPACITY_EXCEEDED.value,
                sleeps=record.sleeps,
            )
            return MutationResult.reject(RejectionCode.CAPACITY_EXCEEDED, record.capacity_warning)

        record.capacity_warning = None
        changed = (updated.adults, updated.children) != (record.adults, record.children)
        record.adults = updated.adults
        record.children = updated.children
        return MutationResult.success(changed=changed)

    def commit(self) -> MutationResult:
        """Write staged guests into the store if totals still match the search."""
        current_quantities = {entry.room_id: entry.quantity for entry in self._store.entries}
        if current_quantities != self._frozen_quantities:
            self.logger.info(
                "Reassignment aborted",
                code=RejectionCode.STALE_REASSIGNMENT.value,
            )
            return MutationResult.reject(
                RejectionCode.STALE_REASSIGNMENT,
                "The selected rooms changed; start the reassignment again",
            )

        search = self._store.search
        if (
            self.staged_adults != search.total_adults
            or self.staged_children != search.total_children
        ):
            message = (
                f"Guests must add up to {search.total_adults} adult(s) and "
                f"{search.total_children} child(ren); staged "
                f"{self.staged_adults} adult(s) and {self.staged_children} child(ren)"
            )
            self.logger.info(
                "Reassignment aborted",
                code=RejectionCode.REASSIGNMENT_TOTAL_MISMATCH.value,
                staged_adults=self.staged_adults,
                staged_children=self.staged_children,
            )
            return MutationResult.reject(RejectionCode.REASSIGNMENT_TOTAL_MISMATCH, message)

        return self._store.replace_guest_assignments(
            {record.room_id: record.as_counts() for record in self.staged}
        )
