"""
Relocation Controller (move mode)

Move mode state:
    INACTIVE ──(>1 selected, one contiguous run, BMS off)──> ACTIVE
    ACTIVE ──(selection <= 1 | cancel | relocation done | BMS on)──> INACTIVE

Activation input state, while ACTIVE:
    IDLE ──activate(seat)──> AWAITING_SECOND(seat) ──timer──> IDLE (single)
                                   └──activate(same seat)──> IDLE (double)

Single activation: AVAILABLE seat → relocate the block there; SELECTED seat → deselect it.
Double activation: forced manual add/remove.
"""

from typing import FrozenSet, Optional

from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.scheduling.task_scheduler import ITaskScheduler, ScheduledTask
from src.service.seating.app.command.toggle_seat_use_case import ToggleSeatUseCase
from src.service.seating.app.dto import SeatChange
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.app.interface.i_seat_status_sync import ISeatStatusSync
from src.service.seating.domain.contiguity import is_contiguous, sort_by_slot
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.move_mode_state import ActivationState, MoveModeState
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.seat_block import SeatBlock


class RelocationController:
    def __init__(
        self,
        *,
        seat_registry: ISeatRegistry,
        seat_sync: ISeatStatusSync,
        seat_toggle: ToggleSeatUseCase,
        scheduler: ITaskScheduler,
        activation_window: Optional[float] = None,
    ) -> None:
        self.seat_registry = seat_registry
        self.seat_sync = seat_sync
        self.seat_toggle = seat_toggle
        self.scheduler = scheduler
        self.activation_window = (
            settings.MOVE_DOUBLE_ACTIVATION_WINDOW_SECONDS
            if activation_window is None
            else activation_window
        )
        self.tracer = trace.get_tracer(__name__)

        self.bms_mode = False
        self.state = MoveModeState.INACTIVE
        self.activation_state = ActivationState.IDLE
        self.pending_seat_id: Optional[str] = None
        self.deadline: Optional[float] = None
        self._timer: Optional[ScheduledTask] = None
        # Selection that was cancelled/relocated; no auto re-activation until it changes
        self._suppressed_selection: Optional[FrozenSet[str]] = None

    @property
    def is_active(self) -> bool:
        return self.state is MoveModeState.ACTIVE

    # ========== Mode ==========

    def sync(self, *, bms_mode: Optional[bool] = None) -> MoveModeState:
        """Re-evaluate move mode after a registry change; bms_mode=None keeps the last flag"""
        if bms_mode is not None:
            self.bms_mode = bms_mode
        selection = self.seat_registry.selected()
        signature = frozenset(seat.id for seat in selection)
        if self._suppressed_selection is not None and signature != self._suppressed_selection:
            self._suppressed_selection = None

        if self.is_active:
            if len(selection) <= 1 or self.bms_mode:
                self._deactivate(reason='bms mode' if self.bms_mode else 'selection <= 1')
        elif (
            not self.bms_mode
            and self._suppressed_selection is None
            and self._source_block(selection) is not None
        ):
            self.state = MoveModeState.ACTIVE
            Logger.base.info(f'🔀 [MOVE] Move mode on for {sorted(signature)}')

        return self.state

    def cancel(self) -> None:
        """Leave move mode without touching any seat"""
        self._clear_pending()
        if self.is_active:
            selection = self.seat_registry.selected()
            self._suppressed_selection = frozenset(seat.id for seat in selection)
            self._deactivate(reason='cancelled')

    def _deactivate(self, *, reason: str) -> None:
        self._clear_pending()
        self.state = MoveModeState.INACTIVE
        Logger.base.info(f'🔀 [MOVE] Move mode off ({reason})')

    # ========== Activation input ==========

    def activate(self, seat_id: str) -> bool:
        """
        Route a seat activation through the single/double disambiguation.

        Returns:
            False if move mode is off and the activation was not consumed
        """
        if not self.is_active:
            return False

        if self.activation_state is ActivationState.AWAITING_SECOND:
            pending = self.pending_seat_id
            self._clear_pending()
            if pending == seat_id:
                self._double_activation(seat_id)
                return True
            if pending is not None:
                self._single_activation(pending)
            if not self.is_active:
                return False

        self.activation_state = ActivationState.AWAITING_SECOND
        self.pending_seat_id = seat_id
        self.deadline = self.scheduler.now() + self.activation_window
        self._timer = self.scheduler.call_later(
            self.activation_window,
            lambda: self._on_activation_timeout(seat_id),
            name='relocation.activation_timeout',
        )
        return True

    def _on_activation_timeout(self, seat_id: str) -> None:
        if self.pending_seat_id != seat_id:
            return
        self._timer = None
        self._clear_pending()
        self._single_activation(seat_id)

    def _clear_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.activation_state = ActivationState.IDLE
        self.pending_seat_id = None
        self.deadline = None

    def _single_activation(self, seat_id: str) -> None:
        seat = self.seat_registry.get(seat_id)
        if seat.is_available:
            self.relocate(seat_id)
        elif seat.is_selected:
            self.seat_toggle.toggle_selection(seat_id=seat_id, force=True)
        else:
            Logger.base.debug(f'🔀 [MOVE] {seat_id} is {seat.status}, ignoring')
        self.sync()

    def _double_activation(self, seat_id: str) -> None:
        Logger.base.debug(f'🔀 [MOVE] Double activation on {seat_id}, manual toggle')
        self.seat_toggle.toggle_selection(seat_id=seat_id, force=True)
        self.sync()

    # ========== Relocation ==========

    def _source_block(self, selection: list[Seat]) -> Optional[SeatBlock]:
        if len(selection) <= 1:
            return None
        rows = {seat.row for seat in selection}
        if len(rows) != 1:
            return None
        layout = self.seat_registry.seat_map.row(rows.pop())
        if not is_contiguous(layout, selection):
            return None
        return SeatBlock(row_id=layout.row_id, seats=tuple(sort_by_slot(layout, selection)))

    @Logger.io
    def relocate(self, target_seat_id: str) -> Optional[SeatBlock]:
        """
        Move the whole selected block so it starts at `target_seat_id`.

        The destination is the next len(block) layout slots from the target seat; each one
        must be a seat (no aisle gap), AVAILABLE, and in the same class as the block.
        """
        with self.tracer.start_as_current_span(
            'use_case.relocate_block', attributes={'seat.target': target_seat_id}
        ):
            seat_map = self.seat_registry.seat_map
            source = self._source_block(self.seat_registry.selected())
            if source is None:
                Logger.base.debug('🔀 [MOVE] No contiguous block to relocate')
                return None

            target_row, target_number = seat_map.locate(target_seat_id)
            source_class = seat_map.class_for_row(source.row_id)
            target_class = seat_map.class_for_row(target_row)
            if source_class.key != target_class.key:
                Logger.base.debug(
                    f'🔀 [MOVE] Rejected {target_seat_id}: class {target_class.key} '
                    f'!= {source_class.key}'
                )
                return None

            layout = seat_map.row(target_row)
            start = layout.slot_index(target_number)
            destination: list[Seat] = []
            for offset in range(len(source)):
                number = layout.number_at(start + offset) if start is not None else None
                if number is None:
                    Logger.base.debug(f'🔀 [MOVE] Rejected {target_seat_id}: aisle or row end')
                    return None
                seat = self.seat_registry.get(layout.seat_id(number))
                if not seat.is_available:
                    Logger.base.debug(
                        f'🔀 [MOVE] Rejected {target_seat_id}: {seat.id} is {seat.status}'
                    )
                    return None
                destination.append(seat)

            changes = [SeatChange(seat.id, SeatStatus.AVAILABLE) for seat in source.seats]
            changes.extend(SeatChange(seat.id, SeatStatus.SELECTED) for seat in destination)
            if not self.seat_sync.stage_move(changes):
                return None

            block = SeatBlock(
                row_id=target_row,
                seats=tuple(self.seat_registry.get(seat.id) for seat in destination),
            )
            self._suppressed_selection = frozenset(block.seat_ids)
            self._deactivate(reason='relocated')
            Logger.base.info(
                f'🔀 [MOVE] {list(source.seat_ids)} -> {list(block.seat_ids)}'
            )
            return block
