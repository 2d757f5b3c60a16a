"""Seating Domain Enums"""

from src.service.seating.domain.enum.move_mode_state import ActivationState, MoveModeState
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.enum.show_time import ShowTime

__all__ = ['ActivationState', 'MoveModeState', 'SeatStatus', 'ShowTime']
