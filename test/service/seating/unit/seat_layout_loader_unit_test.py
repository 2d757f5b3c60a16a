from pathlib import Path

import orjson
import pytest

from src.platform.exception.exceptions import LayoutError
from src.service.seating.domain.contiguity import row_center
from src.service.seating.driven_adapter.layout.default_layout import DEFAULT_THEATER_LAYOUT
from src.service.seating.driven_adapter.layout.seat_layout_loader import (
    load_seat_map,
    parse_seat_layout,
)


SMALL_LAYOUT = {
    'id': 'studio',
    'name': 'Studio',
    'sections': [
        {
            'classKey': 'STALLS',
            'classLabel': 'STALLS',
            'price': 90,
            'rows': [
                {'id': 'ST-A', 'seats': [1, 2, '', 3, 4]},
                {'id': 'ST-B', 'seats': [1, 2, None, 3, 4]},
            ],
        }
    ],
}


class TestDefaultLayout:
    @pytest.mark.unit
    def test_default_theater(self) -> None:
        seat_map = parse_seat_layout(DEFAULT_THEATER_LAYOUT)

        assert len(seat_map) == 590
        assert [seat_class.key for seat_class in seat_map.classes] == [
            'BOX', 'STAR_CLASS', 'CLASSIC', 'FIRST_CLASS', 'SECOND_CLASS',
        ]
        assert seat_map.seat_class('STAR_CLASS').price == 150

    @pytest.mark.unit
    def test_default_base_rows(self) -> None:
        seat_map = parse_seat_layout(DEFAULT_THEATER_LAYOUT)

        assert seat_map.seat_class('CLASSIC').base_row == 'CB-G'
        assert seat_map.seat_class('FIRST_CLASS').base_row == 'FC-F'
        assert seat_map.seat_class('STAR_CLASS').base_row == 'SC-D'
        assert seat_map.seat_class('BOX').base_row == 'BOX-C'

    @pytest.mark.unit
    def test_star_row_aisle(self) -> None:
        row = parse_seat_layout(DEFAULT_THEATER_LAYOUT).row('SC-A')

        assert row.gap_indices == (18,)
        assert row.slot_index(19) == 19
        assert row_center(row) == 18

    @pytest.mark.unit
    def test_load_without_file_uses_default(self) -> None:
        assert len(load_seat_map()) == 590


class TestCustomLayout:
    @pytest.mark.unit
    def test_load_from_file(self, tmp_path: Path) -> None:
        layout_file = tmp_path / 'studio.json'
        layout_file.write_bytes(orjson.dumps(SMALL_LAYOUT))

        seat_map = load_seat_map(layout_file)

        assert len(seat_map) == 8
        assert seat_map.row('ST-A').slots == (1, 2, None, 3, 4)
        assert seat_map.row('ST-B').slots == (1, 2, None, 3, 4)
        assert seat_map.seat_class('STALLS').base_row == 'ST-B'

    @pytest.mark.unit
    def test_explicit_base_row(self) -> None:
        raw = orjson.loads(orjson.dumps(SMALL_LAYOUT))
        raw['sections'][0]['baseRow'] = 'ST-A'

        assert parse_seat_layout(raw).seat_class('STALLS').base_row == 'ST-A'

    @pytest.mark.unit
    @pytest.mark.parametrize(
        'mutate',
        [
            pytest.param(lambda raw: raw['sections'][0]['rows'][0].update(seats=[1, 'x', 2]),
                         id='non_blank_gap'),
            pytest.param(lambda raw: raw['sections'][0]['rows'][0].update(seats=[1, 1]),
                         id='duplicate_seat'),
            pytest.param(lambda raw: raw['sections'][0]['rows'][1].update(id='ST-A'),
                         id='duplicate_row'),
            pytest.param(lambda raw: raw['sections'][0].update(baseRow='ZZ-Z'),
                         id='foreign_base_row'),
            pytest.param(lambda raw: raw.update(sections=[]), id='no_sections'),
        ],
    )
    def test_invalid_layout(self, mutate) -> None:
        raw = orjson.loads(orjson.dumps(SMALL_LAYOUT))
        mutate(raw)

        with pytest.raises(LayoutError):
            parse_seat_layout(raw)

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LayoutError):
            load_seat_map(tmp_path / 'missing.json')

    @pytest.mark.unit
    def test_malformed_json(self, tmp_path: Path) -> None:
        layout_file = tmp_path / 'broken.json'
        layout_file.write_text('{"sections": [')

        with pytest.raises(LayoutError):
            load_seat_map(layout_file)
