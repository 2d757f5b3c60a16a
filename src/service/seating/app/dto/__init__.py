"""Seating Application DTOs"""

from src.service.seating.app.dto.seat_change_dto import (
    SeatChange,
    SeatChangeBatch,
    SeatStatusChange,
)
from src.service.seating.app.dto.seat_status_snapshot_dto import SeatStatusSnapshot
from src.service.seating.app.dto.sync_report_dto import ReconcileReport, SyncFlushReport

__all__ = [
    'SeatChange',
    'SeatChangeBatch',
    'SeatStatusChange',
    'SeatStatusSnapshot',
    'ReconcileReport',
    'SyncFlushReport',
]
