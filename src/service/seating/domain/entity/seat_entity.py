"""Seat Entity"""

import attrs

from src.service.seating.domain.enum.seat_status import SeatStatus


@attrs.define(frozen=True)
class Seat:
    """
    Seat (Entity)

    Identity is the seat id (`{row_id}{number}`, e.g. 'SC-A3').
    Snapshots are immutable; the registry swaps in a new instance on every status change.
    """

    id: str
    row: str
    number: int
    status: SeatStatus = SeatStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.status is SeatStatus.AVAILABLE

    @property
    def is_selected(self) -> bool:
        return self.status is SeatStatus.SELECTED

    def with_status(self, status: SeatStatus) -> 'Seat':
        return attrs.evolve(self, status=status)
