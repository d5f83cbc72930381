"""Greedy default mapping of guest groups to room offerings."""

from typing import Optional

from pydantic import BaseModel, Field
from structlog import get_logger

from homestay_booking.models.guests import GuestCounts, GuestGroup
from homestay_booking.models.offering import RoomOffering

logger = get_logger(__name__)


class RoomAssignment(BaseModel):
    """A guest group placed in an offering by the proposer."""

    room_id: int
    group_index: int
    assigned_guests: GuestCounts

    class Config:
        frozen = True


class RoomSuggestion(BaseModel):
    """Per-offering defaults for the room card."""

    room_id: int
    suggested_guests: GuestCounts
    is_suitable: bool
    assigned: bool = False

    class Config:
        frozen = True


class AssignmentProposal(BaseModel):
    """Advisory output of the proposer. Nothing here is booked."""

    assignments: list[RoomAssignment] = Field(default_factory=list)
    unassigned_group_indexes: list[int] = Field(default_factory=list)
    suggestions: list[RoomSuggestion] = Field(default_factory=list)

    class Config:
        frozen = True

    def suggestion_for(self, room_id: int) -> Optional[RoomSuggestion]:
        for suggestion in self.suggestions:
            if suggestion.room_id == room_id:
                return suggestion
        return None

    def assignment_for(self, room_id: int) -> Optional[RoomAssignment]:
        for assignment in self.assignments:
            if assignment.room_id == room_id:
                return assignment
        return None


class AssignmentProposer:
    """First-fit assignment in input order.

    Groups are handled in search order and each takes the first offering
    (in catalog order) that is still free, sleeps the whole group and has
    rooms left. At most one group lands in an offering. The result does not
    minimise price or room count: a large room can go to a small early group
    and leave a later group without a fit.
    """

    @staticmethod
    def propose(
        offerings: list[RoomOffering],
        groups: list[GuestGroup],
        required_room_count: int,
    ) -> AssignmentProposal:
        """Propose default assignments and per-offering suitability.

        Args:
            offerings: Catalog offerings, already in display order
            groups: Guest groups in search order
            required_room_count: Stop assigning once this many rooms are placed

        Returns:
            AssignmentProposal
        """
        assignments: list[RoomAssignment] = []
        unassigned: list[int] = []
        taken: set[int] = set()

        for index, group in enumerate(groups):
            if len(assignments) >= required_room_count:
                unassigned.append(index)
                continue

            match = None
            for offering in offerings:
                if offering.room_id in taken:
                    continue
                if offering.sleeps >= group.total and offering.has_availability:
                    match = offering
                    break

            if match is None:
                logger.info(
                    "No free room fits guest group",
                    group_index=index,
                    adults=group.adults,
                    children=group.children,
                )
                unassigned.append(index)
                continue

            taken.add(match.room_id)
            assignments.append(
                RoomAssignment(
                    room_id=match.room_id,
                    group_index=index,
                    assigned_guests=group.as_counts(),
                )
            )

        by_room = {assignment.room_id: assignment for assignment in assignments}
        suggestions = []
        for offering in offerings:
            assignment = by_room.get(offering.room_id)
            guests = assignment.assigned_guests if assignment else GuestCounts()
            suggestions.append(
                RoomSuggestion(
                    room_id=offering.room_id,
                    suggested_guests=guests,
                    is_suitable=offering.is_suitable_for(guests.total),
                    assigned=assignment is not None,
                )
            )

        logger.info(
            "Proposed room assignments",
            assigned=len(assignments),
            unassigned=len(unassigned),
            required_room_count=required_room_count,
        )

        return AssignmentProposal(
            assignments=assignments,
            unassigned_group_indexes=unassigned,
            suggestions=suggestions,
        )
