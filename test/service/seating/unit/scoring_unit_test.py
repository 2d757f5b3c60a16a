"""Unit tests for block scoring"""

import pytest

from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.scoring import (
    BlockScore,
    base_penalty,
    best_block,
    row_priority_bonus,
    score_block,
)
from src.service.seating.domain.value_object.row_layout import RowLayout
from src.service.seating.domain.value_object.seat_block import SeatBlock
from src.service.seating.domain.value_object.seat_class import SeatClass
from test.service.seating.fakes import split_row


SC_A = RowLayout(row_id='SC-A', slots=tuple(split_row(5, 5)))
STAR = SeatClass(key='STAR', label='STAR CLASS', rows=('SC-A', 'SC-B'))


def block(row: str, *numbers: int) -> SeatBlock:
    seats = tuple(Seat(id=f'{row}{n}', row=row, number=n) for n in numbers)
    return SeatBlock(row_id=row, seats=seats)


class TestScoreBlock:
    @pytest.mark.unit
    def test_all_terms(self) -> None:
        score = score_block(block('SC-A', 4), SC_A, STAR)

        assert score.center_score == 92  # 100 - 8 * |4 - 5|
        assert score.row_priority_bonus == 500
        assert score.base_penalty == 0
        assert score.buffer_score == 6  # 2 * min(4 - 1, 10 - 4)
        assert score.aisle_bonus == 5
        assert score.total == 603

    @pytest.mark.unit
    def test_preferred_row_bonus(self) -> None:
        score = score_block(block('SC-A', 4), SC_A, STAR, preferred_row='SC-A')
        assert score.row_priority_bonus == 1000

    @pytest.mark.unit
    def test_center_score_floors_at_zero(self) -> None:
        layout = RowLayout(row_id='SC-A', slots=tuple(range(1, 41)))
        score = score_block(block('SC-A', 1), layout, STAR)
        assert score.center_score == 0
        assert score.aisle_bonus == 0

    @pytest.mark.unit
    def test_edge_block_gets_no_buffer(self) -> None:
        score = score_block(block('SC-A', 8, 9, 10), SC_A, STAR)
        assert score.buffer_score == 0


class TestTerms:
    @pytest.mark.unit
    def test_row_priority_table(self) -> None:
        assert [row_priority_bonus(i, is_preferred=False) for i in range(9)] == [
            500, 400, 300, 200, 100, 50, 1, 1, 0,
        ]

    @pytest.mark.unit
    def test_base_penalty(self) -> None:
        assert base_penalty(5, 6) == 0
        assert base_penalty(6, 6) == -500
        assert base_penalty(7, 6) == -600


class TestTieBreak:
    @pytest.mark.unit
    def test_equal_totals_prefer_lower_row_then_lower_seat(self) -> None:
        def make(row_index: int, first: int) -> BlockScore:
            return BlockScore(
                block=block('SC-A', first),
                row_index=row_index,
                center_score=10,
                row_priority_bonus=0,
                base_penalty=0,
                buffer_score=0,
                aisle_bonus=0,
            )

        candidates = [make(1, 2), make(0, 7), make(0, 3)]
        best = best_block(candidates)

        assert best is not None
        assert (best.row_index, best.block.first) == (0, 3)

    @pytest.mark.unit
    def test_no_candidates(self) -> None:
        assert best_block([]) is None
