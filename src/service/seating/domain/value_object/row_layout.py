"""Row Layout Value Object"""

from typing import Optional

import attrs

from src.platform.exception.exceptions import LayoutError


def build_seat_id(row_id: str, number: int) -> str:
    return f'{row_id}{number}'


@attrs.define(frozen=True)
class RowLayout:
    """
    Physical row layout (Value Object)

    `slots` is the left-to-right sequence of seat numbers; `None` marks an aisle gap.
    Adjacency is defined on slot positions, never on seat numbers.
    """

    row_id: str
    slots: tuple[Optional[int], ...] = attrs.field(converter=tuple)
    _slot_by_number: dict[int, int] = attrs.field(init=False, repr=False, eq=False)

    def __attrs_post_init__(self) -> None:
        slot_by_number: dict[int, int] = {}
        for index, number in enumerate(self.slots):
            if number is None:
                continue
            if number in slot_by_number:
                raise LayoutError(f'Row {self.row_id}: seat number {number} appears twice')
            slot_by_number[number] = index
        if not slot_by_number:
            raise LayoutError(f'Row {self.row_id}: no seats')
        object.__setattr__(self, '_slot_by_number', slot_by_number)

    @property
    def seat_numbers(self) -> tuple[int, ...]:
        return tuple(number for number in self.slots if number is not None)

    @property
    def gap_indices(self) -> tuple[int, ...]:
        return tuple(index for index, number in enumerate(self.slots) if number is None)

    @property
    def has_aisle(self) -> bool:
        return any(number is None for number in self.slots)

    @property
    def first_number(self) -> int:
        return self.seat_numbers[0]

    @property
    def last_number(self) -> int:
        return self.seat_numbers[-1]

    @property
    def seat_ids(self) -> tuple[str, ...]:
        return tuple(build_seat_id(self.row_id, number) for number in self.seat_numbers)

    def slot_index(self, number: int) -> Optional[int]:
        return self._slot_by_number.get(number)

    def number_at(self, slot_index: int) -> Optional[int]:
        if 0 <= slot_index < len(self.slots):
            return self.slots[slot_index]
        return None

    def seat_id(self, number: int) -> str:
        return build_seat_id(self.row_id, number)
