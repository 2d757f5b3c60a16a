"""Seat Class Value Object"""

from typing import Optional

import attrs

from src.platform.exception.exceptions import LayoutError


# Classes whose allocation starts from a designated row instead of the last row
_BASE_ROW_OVERRIDES: dict[str, str] = {
    'CLASSIC': 'G',
    'FIRST': 'F',
}


def default_base_row(label: str, rows: tuple[str, ...]) -> str:
    """
    Default base row for a class.

    CLASSIC → row 'G', FIRST → row 'F' (matched on the row-letter suffix), else the last row.
    """
    upper_label = label.upper()
    for keyword, row_letter in _BASE_ROW_OVERRIDES.items():
        if keyword in upper_label:
            for row_id in rows:
                if row_id.rsplit('-', 1)[-1] == row_letter:
                    return row_id
    return rows[-1]


@attrs.define(frozen=True)
class SeatClass:
    """
    Seat class (Value Object)

    `rows` is the ordered front-to-back list of row ids belonging to the class.
    `base_row` and every row behind it form the penalized overflow zone.
    """

    key: str
    label: str
    rows: tuple[str, ...] = attrs.field(converter=tuple)
    price: int = 0
    base_row: Optional[str] = None

    def __attrs_post_init__(self) -> None:
        if not self.rows:
            raise LayoutError(f'Seat class {self.key} has no rows')
        if len(set(self.rows)) != len(self.rows):
            raise LayoutError(f'Seat class {self.key} lists a row twice')
        if self.base_row is None:
            object.__setattr__(self, 'base_row', default_base_row(self.label, self.rows))
        elif self.base_row not in self.rows:
            raise LayoutError(f'Seat class {self.key}: base row {self.base_row} not in class')

    @property
    def base_index(self) -> int:
        return self.rows.index(self.base_row)  # type: ignore[arg-type]

    def row_index(self, row_id: str) -> int:
        try:
            return self.rows.index(row_id)
        except ValueError:
            raise LayoutError(f'Row {row_id} is not part of seat class {self.key}')

    def is_overflow_row(self, row_id: str) -> bool:
        return self.row_index(row_id) >= self.base_index
