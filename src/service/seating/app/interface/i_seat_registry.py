"""
Seat Registry Interface

Single-writer container for every seat's status. Readers get immutable Seat snapshots;
every committed mutation is published as one SeatChangeBatch.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Sequence

from anyio.streams.memory import MemoryObjectReceiveStream

from src.service.seating.app.dto import SeatChange, SeatChangeBatch, SeatStatusChange
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.seat_map import SeatMap


class ISeatRegistry(ABC):
    @property
    @abstractmethod
    def seat_map(self) -> SeatMap:
        pass

    # ========== Reads ==========

    @abstractmethod
    def get(self, seat_id: str) -> Seat:
        """Raises NotFoundError for unknown seat ids"""
        pass

    @abstractmethod
    def status_of(self, seat_id: str) -> SeatStatus:
        pass

    @abstractmethod
    def seats(self) -> List[Seat]:
        """All seats in class, row and slot order"""
        pass

    @abstractmethod
    def seats_in_row(self, row_id: str) -> List[Seat]:
        pass

    @abstractmethod
    def selected(self, class_key: Optional[str] = None) -> List[Seat]:
        """SELECTED seats (of one class, or all) in class, row and slot order"""
        pass

    @abstractmethod
    def statuses(self) -> Dict[str, SeatStatus]:
        pass

    @abstractmethod
    def stats(self) -> Dict[SeatStatus, int]:
        pass

    # ========== Writes ==========

    @abstractmethod
    def apply(self, changes: Sequence[SeatChange], *, source: str) -> bool:
        """
        Validate every transition, then commit all or nothing.

        Returns:
            False (nothing committed) if any transition is disallowed
        """
        pass

    @abstractmethod
    def overwrite(
        self, statuses: Mapping[str, SeatStatus], *, source: str
    ) -> List[SeatStatusChange]:
        """Authoritative write without transition checks (reconciliation, rollback)"""
        pass

    @abstractmethod
    def reset(self) -> List[SeatStatusChange]:
        pass

    # ========== Notifications ==========

    @abstractmethod
    def subscribe(self) -> MemoryObjectReceiveStream[SeatChangeBatch]:
        pass

    @abstractmethod
    async def unsubscribe(self, stream: MemoryObjectReceiveStream[SeatChangeBatch]) -> None:
        pass
