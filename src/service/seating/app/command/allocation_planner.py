"""
Allocation Planner - "add one seat to class X"

Runs the ordered allocation strategies against a snapshot of the class and applies
the winning block to the registry as one atomic mutation.
"""

from typing import Optional, Sequence

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import SeatChange
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.domain.allocation_strategy import (
    AllocationContext,
    AllocationStrategy,
    default_strategies,
)
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.seat_block import SeatBlock


class AllocationPlanner:
    """
    Allocation Planner

    Guarantees per interaction:
    - the class's selected count changes by exactly +1 or 0
    - the resulting selection is one contiguous run in one row
    - a rejected interaction leaves the registry untouched
    """

    def __init__(
        self,
        *,
        seat_registry: ISeatRegistry,
        strategies: Optional[Sequence[AllocationStrategy]] = None,
    ) -> None:
        self.seat_registry = seat_registry
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.tracer = trace.get_tracer(__name__)

    def build_context(self, class_key: str) -> AllocationContext:
        seat_map = self.seat_registry.seat_map
        seat_class = seat_map.seat_class(class_key)
        return AllocationContext(
            seat_map=seat_map,
            seat_class=seat_class,
            selection=tuple(self.seat_registry.selected(class_key)),
            seats_by_row={
                row_id: tuple(self.seat_registry.seats_in_row(row_id))
                for row_id in seat_class.rows
            },
        )

    @Logger.io
    def add_seat(self, *, class_key: str) -> Optional[SeatBlock]:
        """
        Grow the class's selection by one seat.

        Returns:
            The new selection block, or None when nothing changed
        """
        with self.tracer.start_as_current_span(
            'use_case.add_seat', attributes={'seat.class': class_key}
        ):
            context = self.build_context(class_key)
            if not context.has_available:
                Logger.base.debug(f'🪑 [PLANNER] {class_key}: no available seats')
                return None

            for strategy in self.strategies:
                block = strategy.attempt(context)
                if block is None:
                    continue

                if len(block) != context.target_count:
                    Logger.base.warning(
                        f'⚠️ [PLANNER] {strategy.name} returned {len(block)} seats, '
                        f'expected {context.target_count}; ignoring'
                    )
                    continue

                if not self._replace_selection(context, block, source=strategy.name):
                    return None

                Logger.base.info(
                    f'🪑 [PLANNER] {class_key}: {strategy.name} -> {list(block.seat_ids)}'
                )
                return block

            Logger.base.debug(
                f'🪑 [PLANNER] {class_key}: no block of {context.target_count} seats, no-op'
            )
            return None

    def _replace_selection(
        self, context: AllocationContext, block: SeatBlock, *, source: str
    ) -> bool:
        new_ids = set(block.seat_ids)
        old_ids = {seat.id for seat in context.selection}

        changes = [
            SeatChange(seat.id, SeatStatus.AVAILABLE)
            for seat in context.selection
            if seat.id not in new_ids
        ]
        changes.extend(
            SeatChange(seat.id, SeatStatus.SELECTED)
            for seat in block.seats
            if seat.id not in old_ids
        )
        return self.seat_registry.apply(changes, source=f'planner.{source}')
