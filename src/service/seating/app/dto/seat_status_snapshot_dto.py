"""Remote seat status snapshot DTO"""

from typing import List

import attrs


@attrs.define(frozen=True)
class SeatStatusSnapshot:
    """Canonical seat status for one show, as returned by the booking service"""

    booked_seats: List[str] = attrs.field(factory=list)
    bms_seats: List[str] = attrs.field(factory=list)
    selected_seats: List[str] = attrs.field(factory=list)  # held by other terminals
