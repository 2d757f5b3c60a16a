"""Seating Domain Value Objects"""

from src.service.seating.domain.value_object.row_layout import RowLayout, build_seat_id
from src.service.seating.domain.value_object.seat_block import SeatBlock
from src.service.seating.domain.value_object.seat_class import SeatClass, default_base_row
from src.service.seating.domain.value_object.show_context import ShowContext

__all__ = [
    'RowLayout',
    'SeatBlock',
    'SeatClass',
    'ShowContext',
    'build_seat_id',
    'default_base_row',
]
