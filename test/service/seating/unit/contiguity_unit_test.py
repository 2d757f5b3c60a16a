"""
Unit tests for the contiguity engine

Row under test: SC-A = [1, 2, 3, 4, 5, gap, 6, 7, 8, 9, 10]
"""

import pytest

from src.service.seating.domain.contiguity import (
    candidate_blocks,
    compute_runs,
    find_block,
    is_contiguous,
    neighbor_number,
    row_center,
)
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.value_object.row_layout import RowLayout
from test.service.seating.fakes import split_row


SC_A = RowLayout(row_id='SC-A', slots=tuple(split_row(5, 5)))


def seats(*numbers: int, row: str = 'SC-A') -> list[Seat]:
    return [Seat(id=f'{row}{n}', row=row, number=n) for n in numbers]


class TestIsContiguous:
    @pytest.mark.unit
    def test_consecutive_slots(self) -> None:
        assert is_contiguous(SC_A, seats(3, 4, 5)) is True

    @pytest.mark.unit
    def test_unsorted_input(self) -> None:
        assert is_contiguous(SC_A, seats(8, 6, 7)) is True

    @pytest.mark.unit
    def test_numerically_adjacent_across_aisle_is_not_contiguous(self) -> None:
        """Seats 5 and 6 have consecutive numbers but a gap slot between them"""
        assert is_contiguous(SC_A, seats(5, 6)) is False
        assert is_contiguous(SC_A, seats(4, 5, 6)) is False

    @pytest.mark.unit
    def test_hole_in_run(self) -> None:
        assert is_contiguous(SC_A, seats(1, 3)) is False

    @pytest.mark.unit
    def test_single_and_empty(self) -> None:
        assert is_contiguous(SC_A, seats(7)) is True
        assert is_contiguous(SC_A, []) is True

    @pytest.mark.unit
    def test_seat_from_other_row(self) -> None:
        assert is_contiguous(SC_A, [*seats(1), *seats(2, row='SC-B')]) is False

    @pytest.mark.unit
    def test_seat_not_in_layout(self) -> None:
        assert is_contiguous(SC_A, seats(10, 11)) is False


class TestFindBlock:
    @pytest.mark.unit
    def test_run_from_start_index(self) -> None:
        block = find_block(SC_A, seats(1, 2, 3, 4, 5), 3, 1)
        assert block is not None
        assert block.numbers == (2, 3, 4)

    @pytest.mark.unit
    def test_window_crossing_aisle(self) -> None:
        assert find_block(SC_A, seats(4, 5, 6, 7), 3, 0) is None

    @pytest.mark.unit
    def test_window_out_of_range(self) -> None:
        assert find_block(SC_A, seats(1, 2, 3), 3, 1) is None
        assert find_block(SC_A, seats(1, 2, 3), 0, 0) is None


class TestRuns:
    @pytest.mark.unit
    def test_runs_split_at_holes_and_aisle(self) -> None:
        runs = compute_runs(SC_A, seats(1, 2, 4, 5, 6, 7))
        assert [[seat.number for seat in run] for run in runs] == [[1, 2], [4, 5], [6, 7]]

    @pytest.mark.unit
    def test_candidate_blocks_slide_within_runs(self) -> None:
        blocks = list(candidate_blocks(SC_A, seats(1, 2, 3, 5, 6), 2))
        assert [block.numbers for block in blocks] == [(1, 2), (2, 3)]

    @pytest.mark.unit
    def test_no_candidates_when_runs_too_short(self) -> None:
        assert list(candidate_blocks(SC_A, seats(1, 3, 5, 7), 2)) == []


class TestRowCenter:
    @pytest.mark.unit
    def test_single_gap_is_center(self) -> None:
        assert row_center(SC_A) == 5

    @pytest.mark.unit
    def test_no_gap_uses_numeric_midpoint(self) -> None:
        assert row_center(RowLayout(row_id='X', slots=tuple(range(1, 9)))) == 4.5

    @pytest.mark.unit
    def test_multiple_gaps_pick_nearest_to_middle(self) -> None:
        layout = RowLayout(row_id='X', slots=(1, 2, None, 3, 4, None, 5, 6))
        # len 8 -> middle slot 4; gaps at 2 and 5
        assert row_center(layout) == 5

    @pytest.mark.unit
    def test_multiple_gaps_tie_takes_first(self) -> None:
        layout = RowLayout(row_id='X', slots=(1, None, 2, None, 3))
        assert row_center(layout) == 1


class TestNeighbor:
    @pytest.mark.unit
    def test_neighbors_stop_at_gap_and_ends(self) -> None:
        assert neighbor_number(SC_A, 5, 1) is None
        assert neighbor_number(SC_A, 6, -1) is None
        assert neighbor_number(SC_A, 1, -1) is None
        assert neighbor_number(SC_A, 10, 1) is None
        assert neighbor_number(SC_A, 3, 1) == 4
