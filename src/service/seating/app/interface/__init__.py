"""Seating Application Interfaces"""

from src.service.seating.app.interface.i_booking_service_client import IBookingServiceClient
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.app.interface.i_seat_status_sync import ISeatStatusSync

__all__ = ['IBookingServiceClient', 'ISeatRegistry', 'ISeatStatusSync']
