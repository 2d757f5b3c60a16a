"""Seat Status Enum"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'AVAILABLE'
    SELECTED = 'SELECTED'
    BOOKED = 'BOOKED'
    BLOCKED = 'BLOCKED'
    BMS_BOOKED = 'BMS_BOOKED'

    def can_transition_to(self, target: 'SeatStatus') -> bool:
        if target is self:
            return True
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[SeatStatus, frozenset[SeatStatus]] = {
    SeatStatus.AVAILABLE: frozenset({SeatStatus.SELECTED, SeatStatus.BMS_BOOKED}),
    SeatStatus.SELECTED: frozenset({SeatStatus.AVAILABLE, SeatStatus.BOOKED}),
    SeatStatus.BMS_BOOKED: frozenset({SeatStatus.AVAILABLE}),
    SeatStatus.BLOCKED: frozenset(),
    SeatStatus.BOOKED: frozenset(),
}
