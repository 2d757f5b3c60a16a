"""
Allocation Strategies

Ordered phases of the "add one seat to class X" procedure. Each strategy shares the
contract `attempt(context) -> SeatBlock | None`; the planner tries them in sequence
and the first block returned wins.

    1. AdjacentToBookedStrategy   fresh selection, snuggle up to booked seats
    2. CenterOfFirstRowStrategy   fresh selection, first row with room, nearest its center
    3. InRowGrowthStrategy        extend the current block by one seat, outward
    4. OverflowCheckStrategy      base-row bookkeeping only, never yields a block
    5. ClassReflowStrategy        "N+1": best-scoring block anywhere in the class
"""

from abc import ABC, abstractmethod
from typing import Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.contiguity import (
    candidate_blocks,
    is_contiguous,
    neighbor_number,
    row_center,
    sort_by_slot,
)
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.scoring import best_block, score_block
from src.service.seating.domain.seat_map import SeatMap
from src.service.seating.domain.value_object.row_layout import RowLayout
from src.service.seating.domain.value_object.seat_block import SeatBlock
from src.service.seating.domain.value_object.seat_class import SeatClass


_OCCUPIED_STATUSES = frozenset({SeatStatus.BOOKED, SeatStatus.BMS_BOOKED})


@attrs.define(frozen=True)
class AllocationContext:
    """Snapshot of one class at the moment of an "add seat" interaction"""

    seat_map: SeatMap
    seat_class: SeatClass
    selection: tuple[Seat, ...]
    seats_by_row: dict[str, tuple[Seat, ...]]  # row_id -> seats in slot order

    @property
    def target_count(self) -> int:
        return len(self.selection) + 1

    @property
    def is_fresh(self) -> bool:
        return not self.selection

    @property
    def current_row(self) -> Optional[str]:
        rows = {seat.row for seat in self.selection}
        return rows.pop() if len(rows) == 1 else None

    @property
    def has_available(self) -> bool:
        return any(seat.is_available for seats in self.seats_by_row.values() for seat in seats)

    def layout(self, row_id: str) -> RowLayout:
        return self.seat_map.row(row_id)

    def row_seats(self, row_id: str) -> tuple[Seat, ...]:
        return self.seats_by_row.get(row_id, ())

    def available(self, row_id: str) -> list[Seat]:
        return [seat for seat in self.row_seats(row_id) if seat.is_available]

    def seat_by_number(self, row_id: str) -> dict[int, Seat]:
        return {seat.number: seat for seat in self.row_seats(row_id)}


class AllocationStrategy(ABC):
    name: str = 'strategy'

    @abstractmethod
    def attempt(self, context: AllocationContext) -> Optional[SeatBlock]:
        pass


def _grow_toward_center(
    layout: RowLayout, anchor: Seat, target: int, seat_by_number: dict[int, Seat]
) -> list[Seat]:
    """Grow from `anchor` one seat at a time toward the row center, never crossing a gap"""
    center = row_center(layout)
    block = [anchor]

    while len(block) < target:
        block_center = (block[0].number + block[-1].number) / 2
        preferred = 1 if block_center <= center else -1

        grown = False
        for step in (preferred, -preferred):
            edge = block[-1] if step == 1 else block[0]
            number = neighbor_number(layout, edge.number, step)
            seat = seat_by_number.get(number) if number is not None else None
            if seat is not None and seat.is_available:
                if step == 1:
                    block.append(seat)
                else:
                    block.insert(0, seat)
                grown = True
                break

        if not grown:
            break

    return block


class AdjacentToBookedStrategy(AllocationStrategy):
    """Phase 1: fresh selection next to an existing booking, nearest the row center"""

    name = 'adjacent_to_booked'

    def attempt(self, context: AllocationContext) -> Optional[SeatBlock]:
        if not context.is_fresh:
            return None

        target = context.target_count
        for row_id in context.seat_class.rows:
            seats = context.row_seats(row_id)
            booked_numbers = {seat.number for seat in seats if seat.status in _OCCUPIED_STATUSES}
            if not booked_numbers:
                continue

            layout = context.layout(row_id)
            center = row_center(layout)
            candidates = [
                seat
                for seat in seats
                if seat.is_available
                and (seat.number - 1 in booked_numbers or seat.number + 1 in booked_numbers)
            ]
            if not candidates:
                continue

            anchor = min(candidates, key=lambda seat: (abs(seat.number - center), seat.number))
            grown = _grow_toward_center(layout, anchor, target, context.seat_by_number(row_id))
            if len(grown) == target:
                return SeatBlock(row_id=row_id, seats=tuple(grown))

        return None


class CenterOfFirstRowStrategy(AllocationStrategy):
    """Phase 2: first row (class order) with room, block nearest its center"""

    name = 'center_of_first_row'

    def attempt(self, context: AllocationContext) -> Optional[SeatBlock]:
        if not context.is_fresh:
            return None

        target = context.target_count
        for row_id in context.seat_class.rows:
            layout = context.layout(row_id)
            blocks = list(candidate_blocks(layout, context.available(row_id), target))
            if not blocks:
                continue
            center = row_center(layout)
            return min(blocks, key=lambda block: (abs(block.center - center), block.first))

        return None


class InRowGrowthStrategy(AllocationStrategy):
    """
    Phase 3: extend the current block by exactly one seat in the same row.

    Both sides open: take the side whose new center lies farther from the row center
    (outward growth). Equal distance: grow toward the center.
    """

    name = 'in_row_growth'

    def attempt(self, context: AllocationContext) -> Optional[SeatBlock]:
        row_id = context.current_row
        if context.is_fresh or row_id is None:
            return None

        layout = context.layout(row_id)
        selection = sort_by_slot(layout, context.selection)
        if not is_contiguous(layout, selection):
            return None

        seat_by_number = context.seat_by_number(row_id)

        def open_neighbor(number: int, step: int) -> Optional[Seat]:
            neighbor = neighbor_number(layout, number, step)
            seat = seat_by_number.get(neighbor) if neighbor is not None else None
            return seat if seat is not None and seat.is_available else None

        left = open_neighbor(selection[0].number, -1)
        right = open_neighbor(selection[-1].number, 1)
        if left is None and right is None:
            return None

        if left is not None and right is not None:
            center = row_center(layout)
            left_distance = abs((left.number + selection[-1].number) / 2 - center)
            right_distance = abs((selection[0].number + right.number) / 2 - center)
            if left_distance > right_distance:
                right = None
            elif right_distance > left_distance:
                left = None
            else:
                current_center = (selection[0].number + selection[-1].number) / 2
                if current_center < center:
                    left = None
                else:
                    right = None

        grown = [left, *selection] if left is not None else [*selection, right]
        if not is_contiguous(layout, grown):  # type: ignore[arg-type]
            return None
        return SeatBlock(row_id=row_id, seats=tuple(grown))  # type: ignore[arg-type]


class OverflowCheckStrategy(AllocationStrategy):
    """Phase 4: reaching the base row never breaks single-row contiguity; reflow decides"""

    name = 'overflow_check'

    def attempt(self, context: AllocationContext) -> Optional[SeatBlock]:
        row_id = context.current_row
        if row_id is not None and context.seat_class.is_overflow_row(row_id):
            Logger.base.debug(
                f'🪑 [PLANNER] {context.seat_class.key}: selection in overflow row {row_id} '
                f'(base row {context.seat_class.base_row}), deferring to reflow'
            )
        return None


class ClassReflowStrategy(AllocationStrategy):
    """Phase 5 ("N+1"): best-scoring block of the target size anywhere in the class"""

    name = 'class_reflow'

    def attempt(self, context: AllocationContext) -> Optional[SeatBlock]:
        target = context.target_count
        selected_ids = {seat.id for seat in context.selection}
        preferred_row = context.current_row

        scores = []
        for row_id in context.seat_class.rows:
            layout = context.layout(row_id)
            searchable = [
                seat
                for seat in context.row_seats(row_id)
                if seat.is_available or seat.id in selected_ids
            ]
            for block in candidate_blocks(layout, searchable, target):
                scores.append(score_block(block, layout, context.seat_class, preferred_row))

        best = best_block(scores)
        if best is None:
            return None

        Logger.base.debug(
            f'🪑 [PLANNER] Reflow picked {best.block.seat_ids} '
            f'(score={best.total}, candidates={len(scores)})'
        )
        return best.block


def default_strategies() -> list[AllocationStrategy]:
    return [
        AdjacentToBookedStrategy(),
        CenterOfFirstRowStrategy(),
        InRowGrowthStrategy(),
        OverflowCheckStrategy(),
        ClassReflowStrategy(),
    ]
