"""
Booking Service Client Interface

Remote canonical seat-status store. Implementations raise BookingServiceError on
transport or HTTP failures.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from src.service.seating.app.dto import SeatChange, SeatStatusSnapshot
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.show_context import ShowContext


class IBookingServiceClient(ABC):
    @abstractmethod
    async def fetch_seat_status(self, *, show: ShowContext) -> SeatStatusSnapshot:
        pass

    @abstractmethod
    async def persist_seat_status_batch(
        self, *, seat_ids: List[str], status: SeatStatus, show: ShowContext
    ) -> bool:
        pass

    @abstractmethod
    async def persist_seat_move(self, *, updates: Sequence[SeatChange], show: ShowContext) -> bool:
        pass

    async def aclose(self) -> None:
        return None
