"""Relocation mode enums"""

from enum import Enum


class MoveModeState(Enum):
    INACTIVE = 'inactive'
    ACTIVE = 'active'


class ActivationState(Enum):
    IDLE = 'idle'
    AWAITING_SECOND = 'awaiting_second'
