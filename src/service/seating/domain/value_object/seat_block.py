"""Seat Block Value Object"""

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.seating.domain.entity.seat_entity import Seat


@attrs.define(frozen=True)
class SeatBlock:
    """Contiguous run of seats within one row, ordered left to right"""

    row_id: str
    seats: tuple[Seat, ...] = attrs.field(converter=tuple)

    def __attrs_post_init__(self) -> None:
        if not self.seats:
            raise DomainError('Seat block cannot be empty')
        if any(seat.row != self.row_id for seat in self.seats):
            raise DomainError(f'Seat block spans rows other than {self.row_id}')

    def __len__(self) -> int:
        return len(self.seats)

    @property
    def first(self) -> int:
        return self.seats[0].number

    @property
    def last(self) -> int:
        return self.seats[-1].number

    @property
    def center(self) -> float:
        return (self.first + self.last) / 2

    @property
    def seat_ids(self) -> tuple[str, ...]:
        return tuple(seat.id for seat in self.seats)

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(seat.number for seat in self.seats)
