"""
Toggle Seat Use Case

Direct seat activation outside the planner:
- selection toggle (AVAILABLE <-> SELECTED), local only
- BMS toggle (AVAILABLE <-> BMS_BOOKED), staged through the sync batcher for persistence
"""

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import SeatChange
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.app.interface.i_seat_status_sync import ISeatStatusSync
from src.service.seating.domain.contiguity import is_contiguous
from src.service.seating.domain.enum.seat_status import SeatStatus


class ToggleSeatUseCase:
    def __init__(self, *, seat_registry: ISeatRegistry, seat_sync: ISeatStatusSync) -> None:
        self.seat_registry = seat_registry
        self.seat_sync = seat_sync

    @Logger.io
    def toggle_selection(self, *, seat_id: str, force: bool = False) -> bool:
        """
        Select an AVAILABLE seat or deselect a SELECTED one.

        Unless `force` is set, the class selection must stay one contiguous run:
        an add must touch the block, a removal must not split it.

        Returns:
            True if the registry changed
        """
        seat = self.seat_registry.get(seat_id)
        if seat.status not in (SeatStatus.AVAILABLE, SeatStatus.SELECTED):
            Logger.base.debug(f'🪑 [TOGGLE] {seat_id} is {seat.status}, not interactive')
            return False

        seat_map = self.seat_registry.seat_map
        if not force:
            seat_class = seat_map.class_for_row(seat.row)
            selection = self.seat_registry.selected(seat_class.key)
            layout = seat_map.row(seat.row)
            if seat.is_selected:
                remaining = [selected for selected in selection if selected.id != seat_id]
            else:
                remaining = [*selection, seat]
            if not is_contiguous(layout, remaining):
                Logger.base.debug(
                    f'🪑 [TOGGLE] {seat_id} rejected: {seat_class.key} selection would break'
                )
                return False

        target = SeatStatus.AVAILABLE if seat.is_selected else SeatStatus.SELECTED
        return self.seat_registry.apply(
            [SeatChange(seat_id, target)],
            source='manual.force' if force else 'manual.toggle',
        )

    @Logger.io
    def toggle_bms(self, *, seat_id: str) -> bool:
        """
        BMS mode: mark an AVAILABLE seat as externally booked, or unmark it.

        BOOKED, BLOCKED and SELECTED seats ignore BMS activations.
        """
        status = self.seat_registry.status_of(seat_id)
        if status is SeatStatus.AVAILABLE:
            return self.seat_sync.stage(seat_id, SeatStatus.BMS_BOOKED)
        if status is SeatStatus.BMS_BOOKED:
            return self.seat_sync.stage(seat_id, SeatStatus.AVAILABLE)

        Logger.base.debug(f'🪑 [BMS] {seat_id} is {status}, ignoring BMS toggle')
        return False
