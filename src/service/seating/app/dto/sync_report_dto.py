"""Sync and reconciliation result DTOs"""

from typing import List

import attrs

from src.service.seating.domain.enum.seat_status import SeatStatus


@attrs.define
class SyncFlushReport:
    """Outcome of one SyncBatcher flush"""

    persisted_seat_ids: List[str] = attrs.field(factory=list)
    rolled_back_seat_ids: List[str] = attrs.field(factory=list)
    failed_groups: List[SeatStatus] = attrs.field(factory=list)
    failed_moves: int = 0
    remote_calls: int = 0

    @property
    def success(self) -> bool:
        return not self.failed_groups and not self.failed_moves


@attrs.define
class ReconcileReport:
    """Outcome of one remote reconciliation"""

    changed_seat_ids: List[str] = attrs.field(factory=list)
    skipped_pending_seat_ids: List[str] = attrs.field(factory=list)
    unknown_seat_ids: List[str] = attrs.field(factory=list)
    released_hold_seat_ids: List[str] = attrs.field(factory=list)
