# frontdesk/services/room/availability_service.py
"""
Availability filter.

A room is offerable only when its status is ``available``; the optional
criteria narrow that set further. Overlap checking against existing
bookings is opt-in (``ENFORCE_BOOKING_OVERLAP``).
"""

from datetime import datetime
from typing import Callable, Iterable, List, Optional, Protocol, TypeVar

from sqlalchemy.orm import Session

from frontdesk.config.settings import settings
from frontdesk.core.exceptions import InvalidDateRangeError
from frontdesk.core.logging import get_logger
from frontdesk.models.base.enums import RoomStatus, RoomType
from frontdesk.repositories.booking import BookingRepository
from frontdesk.repositories.room import RoomRepository
from frontdesk.schemas.room.room import AvailabilityCriteria, RoomFilter
from frontdesk.services.common.unit_of_work import UnitOfWork
from frontdesk.utils.date_utils import DateLike, to_naive_utc

logger = get_logger(__name__)


class RoomLike(Protocol):
    number: str
    type: RoomType
    capacity: int
    status: RoomStatus


TRoom = TypeVar("TRoom", bound=RoomLike)


def _type_label(room_type) -> str:
    return getattr(room_type, "value", room_type) or ""


def matches_criteria(room: RoomLike, criteria: AvailabilityCriteria) -> bool:
    """True if an available room satisfies every given criterion."""
    if room.status != RoomStatus.AVAILABLE:
        return False
    if criteria.type is not None and room.type != criteria.type:
        return False
    if criteria.min_capacity is not None and room.capacity < criteria.min_capacity:
        return False
    if criteria.search_text:
        needle = criteria.search_text.lower()
        haystacks = (str(room.number).lower(), _type_label(room.type).lower())
        if not any(needle in haystack for haystack in haystacks):
            return False
    return True


def find_available_rooms(
    rooms: Iterable[TRoom],
    criteria: Optional[AvailabilityCriteria] = None,
) -> List[TRoom]:
    """
    Filter rooms down to those that can be offered.

    Args:
        rooms: Candidate rooms (ORM rows or anything with the same fields)
        criteria: Optional type / minimum capacity / search text

    Returns:
        Matching rooms in their input order; rooms are not modified
    """
    criteria = criteria or AvailabilityCriteria()
    return [room for room in rooms if matches_criteria(room, criteria)]


class AvailabilityService:
    """
    Availability over the room directory.

    Responsibilities:
    - Load rooms from the directory and apply the availability filter
    - Optionally drop rooms with an overlapping active booking
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        enforce_overlap: Optional[bool] = None,
    ):
        self.session_factory = session_factory
        self.enforce_overlap = (
            settings.ENFORCE_BOOKING_OVERLAP if enforce_overlap is None else enforce_overlap
        )

    def list_available(
        self,
        criteria: Optional[AvailabilityCriteria] = None,
        check_in: Optional[DateLike] = None,
        check_out: Optional[DateLike] = None,
    ) -> List:
        """
        Rooms that can be offered for a new booking.

        Args:
            criteria: Optional filter criteria
            check_in: Requested check-in, used for overlap checking
            check_out: Requested check-out, used for overlap checking

        Returns:
            Offerable rooms in room-number order

        Raises:
            InvalidDateRangeError: If both dates are given and check_out <= check_in
        """
        start: Optional[datetime] = to_naive_utc(check_in) if check_in is not None else None
        end: Optional[datetime] = to_naive_utc(check_out) if check_out is not None else None
        if start is not None and end is not None and end <= start:
            raise InvalidDateRangeError(start_date=start.isoformat(), end_date=end.isoformat())

        with UnitOfWork(self.session_factory) as uow:
            rooms = uow.get_repo(RoomRepository).list_rooms(
                RoomFilter(status=RoomStatus.AVAILABLE)
            )
            available = find_available_rooms(rooms, criteria)

            if self.enforce_overlap and start is not None and end is not None and available:
                conflicts = uow.get_repo(BookingRepository).find_overlapping(
                    [room.id for room in available], start, end
                )
                blocked = {booking.room_id for booking in conflicts}
                if blocked:
                    logger.debug(
                        f"Excluding {len(blocked)} room(s) with overlapping bookings",
                        extra={"check_in": start.isoformat(), "check_out": end.isoformat()},
                    )
                available = [room for room in available if room.id not in blocked]

        return available
