"""Authoritative cart state for one search session."""

from datetime import date
from typing import Any, Optional

from structlog import get_logger

from homestay_booking.models.guests import GuestCounts, GuestField
from homestay_booking.models.offering import HomestayCatalog, RoomOffering
from homestay_booking.models.results import MutationResult, RejectionCode
from homestay_booking.models.search import SearchContext
from homestay_booking.models.selection import PriceQuote, RoomDraft, SelectionEntry
from homestay_booking.services.assignment import AssignmentProposal
from homestay_booking.services.pricing import PricingCalculator

logger = get_logger(__name__)


class SelectionStore:
    """Cart of selected rooms with invariant checks before every commit.

    After any committed change:

    - every entry's assigned guests fit in its snapshotted ``sleeps``
    - every entry's quantity is between 0 and the offering's rooms left
    - the quantities add up to at most the required room count

    A rejected change returns a MutationResult with the violated bound and
    leaves entries and drafts exactly as they were.

    Offerings nobody has selected yet keep a RoomDraft (guests shown on the
    card, chosen extra). Drafts are seeded from an AssignmentProposal when one
    is given.
    """

    def __init__(
        self,
        catalog: HomestayCatalog,
        search: SearchContext,
        proposal: Optional[AssignmentProposal] = None,
    ):
        """Initialize the store.

        Args:
            catalog: Offerings of the homestay being booked
            search: Dates, room count and guest groups searched for
            proposal: Optional default assignment used to seed card drafts
        """
        self._catalog = catalog
        self._search = search
        self._entries: dict[int, SelectionEntry] = {}
        self._drafts: dict[int, RoomDraft] = {}
        self.logger = logger.bind(homestay=catalog.slug)

        for offering in catalog.offerings:
            guests = GuestCounts()
            if proposal is not None:
                suggestion = proposal.suggestion_for(offering.room_id)
                if suggestion is not None:
                    guests = suggestion.suggested_guests
            self._drafts[offering.room_id] = RoomDraft(
                room_id=offering.room_id,
                guests=guests,
                selected_extra=offering.default_extra,
            )

    # Read side

    @property
    def catalog(self) -> HomestayCatalog:
        return self._catalog

    @property
    def search(self) -> SearchContext:
        return self._search

    @property
    def nights(self) -> int:
        return self._search.nights

    @property
    def required_room_count(self) -> int:
        return self._search.required_room_count

    @property
    def entries(self) -> list[SelectionEntry]:
        """Committed entries in selection order."""
        return list(self._entries.values())

    @property
    def total_quantity(self) -> int:
        return sum(entry.quantity for entry in self._entries.values())

    @property
    def assigned_adults(self) -> int:
        return sum(entry.assigned_guests.adults for entry in self._entries.values())

    @property
    def assigned_children(self) -> int:
        return sum(entry.assigned_guests.children for entry in self._entries.values())

    def entry(self, room_id: int) -> Optional[SelectionEntry]:
        return self._entries.get(room_id)

    def draft(self, room_id: int) -> Optional[RoomDraft]:
        return self._drafts.get(room_id)

    def quantity(self, room_id: int) -> int:
        entry = self._entries.get(room_id)
        return entry.quantity if entry else 0

    def guests_for(self, room_id: int) -> GuestCounts:
        """Guests currently shown for a room: committed if selected, else draft."""
        entry = self._entries.get(room_id)
        if entry is not None:
            return entry.assigned_guests
        draft = self._drafts.get(room_id)
        return draft.guests if draft else GuestCounts()

    def selected_extra(self, room_id: int) -> Optional[str]:
        entry = self._entries.get(room_id)
        if entry is not None:
            return entry.extra_label
        draft = self._drafts.get(room_id)
        return draft.selected_extra if draft else None

    def is_suitable(self, room_id: int) -> bool:
        """Whether the room can take its current guests and still has rooms left."""
        offering = self._catalog.get(room_id)
        if offering is None:
            return False
        return offering.is_suitable_for(self.guests_for(room_id).total)

    def quote(self) -> PriceQuote:
        return PricingCalculator.quote(self._entries.values(), self.nights)

    def checkout_issues(self) -> list[str]:
        """Reasons the cart cannot be reserved yet, empty when it can."""
        issues = []
        required = self.required_room_count
        if self.total_quantity != required:
            issues.append(
                f"Select exactly {required} room(s); {self.total_quantity} selected"
            )
        if self.assigned_adults != self._search.total_adults:
            issues.append(
                f"Rooms hold {self.assigned_adults} adult(s) but "
                f"{self._search.total_adults} were searched for"
            )
        if self.assigned_children != self._search.total_children:
            issues.append(
                f"Rooms hold {self.assigned_children} child(ren) but "
                f"{self._search.total_children} were searched for"
            )
        return issues

    def is_checkout_valid(self) -> bool:
        return not self.checkout_issues()

    # Mutations

    def _reject(self, code: RejectionCode, message: str, **context: Any) -> MutationResult:
        self.logger.info("Selection change rejected", code=code.value, reason=message, **context)
        return MutationResult.reject(code, message)

    def _offering(self, room_id: int) -> Optional[RoomOffering]:
        return self._catalog.get(room_id)

    def _unknown_room(self, room_id: int) -> MutationResult:
        return self._reject(
            RejectionCode.UNKNOWN_ROOM,
            f"Room {room_id} is not part of this search result",
            room_id=room_id,
        )

    def set_quantity(self, room_id: int, delta: int) -> MutationResult:
        """Change how many of a room are booked.

        The new quantity is clamped to ``[0, rooms left]``. Growth is refused
        for unsuitable rooms; shrinking never is. Reaching 0 removes the entry.

        Args:
            room_id: Offering to change
            delta: Signed change in quantity

        Returns:
            MutationResult
        """
        offering = self._offering(room_id)
        if offering is None:
            return self._unknown_room(room_id)

        entry = self._entries.get(room_id)
        current = entry.quantity if entry else 0
        new_quantity = offering.quantity_cap(current + delta)

        if delta > 0 and not self.is_suitable(room_id):
            if not offering.has_availability:
                message = f"{offering.title} is sold out"
            else:
                message = (
                    f"{offering.title} sleeps at most {offering.sleeps} guest(s); "
                    f"{self.guests_for(room_id).total} assigned"
                )
            return self._reject(RejectionCode.UNSUITABLE_ROOM, message, room_id=room_id)

        others = self.total_quantity - current
        if others + new_quantity > self.required_room_count:
            return self._reject(
                RejectionCode.ROOM_LIMIT_EXCEEDED,
                f"You can select at most {self.required_room_count} room(s) for this search",
                room_id=room_id,
                limit=self.required_room_count,
            )

        if new_quantity > 0:
            guests = self.guests_for(room_id)
            sleeps = entry.sleeps if entry else offering.sleeps
            if guests.total > sleeps:
                return self._reject(
                    RejectionCode.CAPACITY_EXCEEDED,
                    f"{offering.title} sleeps at most {sleeps} guest(s); {guests.total} assigned",
                    room_id=room_id,
                    sleeps=sleeps,
                )
            if guests.total < 1 or guests.adults < 1:
                return self._reject(
                    RejectionCode.EMPTY_ROOM,
                    f"Assign at least 1 adult to {offering.title} before selecting it",
                    room_id=room_id,
                )

        if new_quantity == current:
            message = None
            if delta > 0 and offering.available_quantity is not None:
                message = f"Only {offering.available_quantity} {offering.title} room(s) available"
            return MutationResult.success(changed=False, message=message)

        if new_quantity == 0:
            del self._entries[room_id]
            self.logger.debug("Room removed from selection", room_id=room_id)
        elif entry is not None:
            self._entries[room_id] = entry.model_copy(update={"quantity": new_quantity})
        else:
            draft = self._drafts[room_id]
            self._entries[room_id] = SelectionEntry(
                room_id=offering.room_id,
                room_title=offering.title,
                assigned_guests=draft.guests,
                quantity=new_quantity,
                nightly_price=offering.nightly_price,
                unit_total_price=offering.nightly_price * self.nights,
                sleeps=offering.sleeps,
                extra_label=draft.selected_extra,
                extra_price=offering.extra_price(draft.selected_extra),
            )

        self.logger.debug(
            "Room quantity updated",
            room_id=room_id,
            quantity=new_quantity,
            total_quantity=self.total_quantity,
        )
        return MutationResult.success()

    def set_guests(self, room_id: int, field: GuestField, delta: int) -> MutationResult:
        """Step adults or children for a room.

        Selected rooms are updated in the cart; unselected rooms only in
        their draft.

        Args:
            room_id: Offering to change
            field: ``"adults"`` or ``"children"``
            delta: Signed step

        Returns:
            MutationResult
        """
        offering = self._offering(room_id)
        if offering is None:
            return self._unknown_room(room_id)

        entry = self._entries.get(room_id)
        current = self.guests_for(room_id)
        updated = current.adjusted(field, delta)
        sleeps = entry.sleeps if entry else offering.sleeps

        if updated.total > sleeps:
            return self._reject(
                RejectionCode.CAPACITY_EXCEEDED,
                f"{offering.title} sleeps at most {sleeps} guest(s)",
                room_id=room_id,
                sleeps=sleeps,
            )

        if updated == current:
            return MutationResult.success(changed=False)

        self._drafts[room_id] = self._drafts[room_id].model_copy(update={"guests": updated})
        if entry is not None and entry.quantity > 0:
            self._entries[room_id] = entry.model_copy(update={"assigned_guests": updated})
        return MutationResult.success()

    def set_extra(self, room_id: int, label: str) -> MutationResult:
        """Choose which extra is priced in for a room."""
        offering = self._offering(room_id)
        if offering is None:
            return self._unknown_room(room_id)

        if not offering.has_extra(label):
            return self._reject(
                RejectionCode.UNKNOWN_EXTRA,
                f"{offering.title} does not offer '{label}'",
                room_id=room_id,
                extra=label,
            )

        if self.selected_extra(room_id) == label:
            return MutationResult.success(changed=False)

        self._drafts[room_id] = self._drafts[room_id].model_copy(update={"selected_extra": label})
        entry = self._entries.get(room_id)
        if entry is not None:
            self._entries[room_id] = entry.model_copy(
                update={"extra_label": label, "extra_price": offering.extra_price(label)}
            )
        return MutationResult.success()

    def remove_entry(self, room_id: int) -> MutationResult:
        return self.set_quantity(room_id, -self.quantity(room_id))

    def clear_all(self) -> MutationResult:
        changed = bool(self._entries)
        self._entries.clear()
        self.logger.debug("Selection cleared")
        return MutationResult.success(changed=changed)

    def set_stay_dates(self, check_in: date, check_out: date) -> MutationResult:
        """Move the stay; nights and unit totals follow, nightly prices do not."""
        search = self._search.with_dates(check_in, check_out)
        if search == self._search:
            return MutationResult.success(changed=False)

        self._search = search
        nights = search.nights
        for room_id, entry in list(self._entries.items()):
            self._entries[room_id] = entry.model_copy(
                update={"unit_total_price": entry.nightly_price * nights}
            )
        self.logger.info("Stay dates changed", check_in=str(check_in), check_out=str(check_out), nights=nights)
        return MutationResult.success()

    def replace_guest_assignments(self, assignments: dict[int, GuestCounts]) -> MutationResult:
        """Overwrite the guests of every selected entry in one step.

        ``assignments`` must cover exactly the selected rooms. Every new
        assignment is checked before any is written.
        """
        if set(assignments) != set(self._entries):
            return self._reject(
                RejectionCode.STALE_REASSIGNMENT,
                "The selected rooms changed; start the reassignment again",
            )

        for room_id, guests in assignments.items():
            entry = self._entries[room_id]
            if guests.total > entry.sleeps:
                return self._reject(
                    RejectionCode.CAPACITY_EXCEEDED,
                    f"{entry.room_title} sleeps at most {entry.sleeps} guest(s)",
                    room_id=room_id,
                    sleeps=entry.sleeps,
                )
            if guests.adults < 1:
                return self._reject(
                    RejectionCode.EMPTY_ROOM,
                    f"Assign at least 1 adult to {entry.room_title}",
                    room_id=room_id,
                )

        for room_id, guests in assignments.items():
            self._entries[room_id] = self._entries[room_id].model_copy(
                update={"assigned_guests": guests}
            )
            self._drafts[room_id] = self._drafts[room_id].model_copy(update={"guests": guests})

        self.logger.info("Guests reassigned", room_count=len(assignments))
        return MutationResult.success()
