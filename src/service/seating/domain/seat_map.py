"""
Seat Map

Static theater layout: row slot sequences (with aisle gaps) and the
front-to-back row ordering of each seat class.
"""

from typing import Iterable, Iterator

from src.platform.exception.exceptions import LayoutError, NotFoundError
from src.service.seating.domain.value_object.row_layout import RowLayout
from src.service.seating.domain.value_object.seat_class import SeatClass


class SeatMap:
    def __init__(self, *, rows: Iterable[RowLayout], classes: Iterable[SeatClass]) -> None:
        self._rows: dict[str, RowLayout] = {}
        for row in rows:
            if row.row_id in self._rows:
                raise LayoutError(f'Duplicate row id: {row.row_id}')
            self._rows[row.row_id] = row

        self._classes: dict[str, SeatClass] = {}
        self._class_by_row: dict[str, SeatClass] = {}
        for seat_class in classes:
            if seat_class.key in self._classes:
                raise LayoutError(f'Duplicate seat class: {seat_class.key}')
            self._classes[seat_class.key] = seat_class
            for row_id in seat_class.rows:
                if row_id not in self._rows:
                    raise LayoutError(
                        f'Seat class {seat_class.key} references unknown row {row_id}'
                    )
                if row_id in self._class_by_row:
                    raise LayoutError(
                        f'Row {row_id} belongs to both {self._class_by_row[row_id].key} '
                        f'and {seat_class.key}'
                    )
                self._class_by_row[row_id] = seat_class

        orphan_rows = set(self._rows) - set(self._class_by_row)
        if orphan_rows:
            raise LayoutError(f'Rows without a seat class: {sorted(orphan_rows)}')

        # seat_id -> (row_id, number)
        self._seat_index: dict[str, tuple[str, int]] = {}
        for seat_class in self._classes.values():
            for row_id in seat_class.rows:
                row = self._rows[row_id]
                for number in row.seat_numbers:
                    seat_id = row.seat_id(number)
                    if seat_id in self._seat_index:
                        raise LayoutError(f'Duplicate seat id: {seat_id}')
                    self._seat_index[seat_id] = (row_id, number)

    @property
    def classes(self) -> list[SeatClass]:
        return list(self._classes.values())

    @property
    def rows(self) -> list[RowLayout]:
        """Rows in class order, front to back"""
        return [
            self._rows[row_id]
            for seat_class in self._classes.values()
            for row_id in seat_class.rows
        ]

    def row(self, row_id: str) -> RowLayout:
        try:
            return self._rows[row_id]
        except KeyError:
            raise NotFoundError(f'Row not found: {row_id}')

    def seat_class(self, key: str) -> SeatClass:
        try:
            return self._classes[key]
        except KeyError:
            raise NotFoundError(f'Seat class not found: {key}')

    def class_for_row(self, row_id: str) -> SeatClass:
        try:
            return self._class_by_row[row_id]
        except KeyError:
            raise NotFoundError(f'Row not found: {row_id}')

    def class_for_seat(self, seat_id: str) -> SeatClass:
        row_id, _ = self.locate(seat_id)
        return self._class_by_row[row_id]

    def locate(self, seat_id: str) -> tuple[str, int]:
        try:
            return self._seat_index[seat_id]
        except KeyError:
            raise NotFoundError(f'Seat not found: {seat_id}')

    def has_seat(self, seat_id: str) -> bool:
        return seat_id in self._seat_index

    def iter_seats(self) -> Iterator[tuple[str, str, int]]:
        """Yield (seat_id, row_id, number) in class, row and slot order"""
        for seat_id, (row_id, number) in self._seat_index.items():
            yield seat_id, row_id, number

    def __len__(self) -> int:
        return len(self._seat_index)
