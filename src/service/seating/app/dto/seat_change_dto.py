"""Seat change DTOs"""

from typing import Tuple

import attrs

from src.service.seating.domain.enum.seat_status import SeatStatus


@attrs.define(frozen=True)
class SeatChange:
    """Requested status for one seat (also the wire shape of a move update)"""

    seat_id: str
    status: SeatStatus = attrs.field(converter=SeatStatus)


@attrs.define(frozen=True)
class SeatStatusChange:
    """Committed status change"""

    seat_id: str
    previous: SeatStatus
    current: SeatStatus


@attrs.define(frozen=True)
class SeatChangeBatch:
    """One committed registry mutation, as delivered to subscribers"""

    source: str
    changes: Tuple[SeatStatusChange, ...] = attrs.field(converter=tuple)

    @property
    def seat_ids(self) -> list[str]:
        return [change.seat_id for change in self.changes]
