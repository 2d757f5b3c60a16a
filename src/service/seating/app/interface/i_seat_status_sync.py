"""Seat Status Sync Interface - optimistic local write + deferred remote persistence"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, List, Sequence, Set

from src.service.seating.app.dto import SeatChange, SyncFlushReport
from src.service.seating.domain.enum.seat_status import SeatStatus


class ISeatStatusSync(ABC):
    @abstractmethod
    def stage(self, seat_id: str, status: SeatStatus) -> bool:
        """Apply the status locally now and buffer it for the next flush"""
        pass

    @abstractmethod
    def stage_move(self, changes: Sequence[SeatChange]) -> bool:
        """Apply a relocation locally (atomically) and buffer it as one move group"""
        pass

    @abstractmethod
    def pending_seat_ids(self) -> Set[str]:
        """Seats with buffered or in-flight writes"""
        pass

    @abstractmethod
    def remote_holds(self) -> FrozenSet[str]:
        """Seats the booking service holds as SELECTED on behalf of this session"""
        pass

    @abstractmethod
    def release_holds(self, seat_ids: Iterable[str]) -> List[str]:
        """Persist AVAILABLE for held seats that are no longer selected here"""
        pass

    @abstractmethod
    async def flush(self) -> SyncFlushReport:
        pass

    @abstractmethod
    async def aclose(self) -> SyncFlushReport:
        pass
