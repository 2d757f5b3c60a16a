"""
Scoring Function

Numeric desirability of a candidate block. Higher total wins.

Terms:
- center:        max(0, 100 - 8 * |block_center - row_center|)
- row priority:  1000 for the preferred (current) row, else ROW_PRIORITY_TABLE[row_index]
- base penalty:  0 in front of the base row, else -500 - 100 * (row_index - base_index)
- buffer:        2 * min(left_gap, right_gap), discourages leaving an orphan seat at a row end
- aisle:         +5 if the row has an aisle gap
"""

from typing import Optional

import attrs

from src.service.seating.domain.contiguity import row_center
from src.service.seating.domain.value_object.row_layout import RowLayout
from src.service.seating.domain.value_object.seat_block import SeatBlock
from src.service.seating.domain.value_object.seat_class import SeatClass


PREFERRED_ROW_BONUS = 1000
ROW_PRIORITY_TABLE = (500, 400, 300, 200, 100, 50, 1, 1)
BASE_PENALTY = -500
BASE_PENALTY_PER_ROW = -100
AISLE_BONUS = 5


@attrs.define(frozen=True)
class BlockScore:
    block: SeatBlock
    row_index: int
    center_score: float
    row_priority_bonus: int
    base_penalty: int
    buffer_score: int
    aisle_bonus: int

    @property
    def total(self) -> float:
        return (
            self.center_score
            + self.row_priority_bonus
            + self.base_penalty
            + self.buffer_score
            + self.aisle_bonus
        )

    def rank_key(self) -> tuple[float, int, int]:
        """Sort ascending: best score first, then lower row index, then lower first seat"""
        return (-self.total, self.row_index, self.block.first)


def row_priority_bonus(row_index: int, *, is_preferred: bool) -> int:
    if is_preferred:
        return PREFERRED_ROW_BONUS
    if 0 <= row_index < len(ROW_PRIORITY_TABLE):
        return ROW_PRIORITY_TABLE[row_index]
    return 0


def base_penalty(row_index: int, base_index: int) -> int:
    if row_index < base_index:
        return 0
    return BASE_PENALTY + BASE_PENALTY_PER_ROW * (row_index - base_index)


def score_block(
    block: SeatBlock,
    layout: RowLayout,
    seat_class: SeatClass,
    preferred_row: Optional[str] = None,
) -> BlockScore:
    row_index = seat_class.row_index(layout.row_id)
    left_gap = block.first - layout.first_number
    right_gap = layout.last_number - block.last

    return BlockScore(
        block=block,
        row_index=row_index,
        center_score=max(0.0, 100 - 8 * abs(block.center - row_center(layout))),
        row_priority_bonus=row_priority_bonus(
            row_index, is_preferred=preferred_row == layout.row_id
        ),
        base_penalty=base_penalty(row_index, seat_class.base_index),
        buffer_score=2 * min(left_gap, right_gap),
        aisle_bonus=AISLE_BONUS if layout.has_aisle else 0,
    )


def best_block(scores: list[BlockScore]) -> Optional[BlockScore]:
    if not scores:
        return None
    return min(scores, key=BlockScore.rank_key)
