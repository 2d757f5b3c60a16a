"""
Contiguity Engine

Pure predicates/searches for contiguous seat runs that respect aisle gaps.

Adjacency is measured on layout slot positions:
    slots = [1, 2, 3, 4, 5, None, 6, 7]
    seats 5 and 6 are numerically adjacent but NOT contiguous (gap slot between them)
"""

from typing import Iterator, Optional, Sequence

from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.value_object.row_layout import RowLayout
from src.service.seating.domain.value_object.seat_block import SeatBlock


def sort_by_slot(layout: RowLayout, seats: Sequence[Seat]) -> list[Seat]:
    return sorted(seats, key=lambda seat: layout.slot_index(seat.number) or 0)


def is_contiguous(layout: RowLayout, seats: Sequence[Seat]) -> bool:
    """True iff every seat is in this row and their slot indices are consecutive"""
    if not seats:
        return True

    slot_indices: list[int] = []
    for seat in seats:
        slot_index = layout.slot_index(seat.number)
        if seat.row != layout.row_id or slot_index is None:
            return False
        slot_indices.append(slot_index)

    slot_indices.sort()
    return all(b - a == 1 for a, b in zip(slot_indices, slot_indices[1:]))


def find_block(
    layout: RowLayout, sorted_row_seats: Sequence[Seat], count: int, start_index: int
) -> Optional[SeatBlock]:
    """Return the `count`-seat run starting at `start_index` if it exists and is contiguous"""
    if count <= 0 or start_index < 0 or start_index + count > len(sorted_row_seats):
        return None

    window = sorted_row_seats[start_index : start_index + count]
    if not is_contiguous(layout, window):
        return None
    return SeatBlock(row_id=layout.row_id, seats=tuple(window))


def compute_runs(layout: RowLayout, seats: Sequence[Seat]) -> list[list[Seat]]:
    """
    Split seats into maximal contiguous runs (left to right).

    Example:
        slots = [1, 2, 3, None, 4, 5], seats = {1, 2, 4, 5}
        -> [[1, 2], [4, 5]]
    """
    runs: list[list[Seat]] = []
    current: list[Seat] = []
    previous_slot: Optional[int] = None

    for seat in sort_by_slot(layout, seats):
        slot_index = layout.slot_index(seat.number)
        if slot_index is None or seat.row != layout.row_id:
            continue
        if previous_slot is not None and slot_index - previous_slot == 1:
            current.append(seat)
        else:
            if current:
                runs.append(current)
            current = [seat]
        previous_slot = slot_index

    # Don't forget the last run
    if current:
        runs.append(current)

    return runs


def candidate_blocks(layout: RowLayout, seats: Sequence[Seat], count: int) -> Iterator[SeatBlock]:
    """Yield every contiguous `count`-seat window, left to right"""
    if count <= 0:
        return
    for run in compute_runs(layout, seats):
        for start in range(len(run) - count + 1):
            yield SeatBlock(row_id=layout.row_id, seats=tuple(run[start : start + count]))


def row_center(layout: RowLayout) -> float:
    """
    Point in the row that blocks are biased toward.

    - one aisle gap: its slot index
    - several gaps: the gap nearest the slot midpoint (first one on ties)
    - no gap: midpoint of the numeric seat range
    """
    if not layout.slots:
        return 0

    gaps = layout.gap_indices
    if len(gaps) == 1:
        return gaps[0]
    if gaps:
        midpoint = len(layout.slots) // 2
        return min(gaps, key=lambda gap: abs(gap - midpoint))
    return (layout.first_number + layout.last_number) / 2


def neighbor_number(layout: RowLayout, number: int, step: int) -> Optional[int]:
    """Seat number in the adjacent slot (step=-1 left, +1 right); None at a gap or row end"""
    slot_index = layout.slot_index(number)
    if slot_index is None:
        return None
    return layout.number_at(slot_index + step)
