"""
In-memory Seat Registry Implementation

Single source of truth for every seat's status in one show.

Architecture:
- Planner / RelocationController / SyncBatcher / reconciliation → apply()/overwrite()
- Each committed mutation → one SeatChangeBatch → every subscriber stream
- Rendering layer consumes the receive streams

Memory Management:
- Stream max buffer: REGISTRY_SUBSCRIBER_BUFFER batches
- Drop policy: drop if stream full (send_nowait raises WouldBlock), log a warning
- Closed subscriber streams are pruned on the next publish
"""

from typing import Dict, List, Mapping, Optional, Sequence

from anyio import BrokenResourceError, ClosedResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import SeatChange, SeatChangeBatch, SeatStatusChange
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.seat_map import SeatMap


_Subscriber = tuple[
    MemoryObjectSendStream[SeatChangeBatch], MemoryObjectReceiveStream[SeatChangeBatch]
]


class SeatRegistryImpl(ISeatRegistry):
    def __init__(self, *, seat_map: SeatMap, subscriber_buffer: Optional[int] = None) -> None:
        self._seat_map = seat_map
        self._subscriber_buffer = subscriber_buffer or settings.REGISTRY_SUBSCRIBER_BUFFER
        self._seats: Dict[str, Seat] = {
            seat_id: Seat(id=seat_id, row=row_id, number=number)
            for seat_id, row_id, number in seat_map.iter_seats()
        }
        self._subscribers: List[_Subscriber] = []

    @property
    def seat_map(self) -> SeatMap:
        return self._seat_map

    # ========== Reads ==========

    def get(self, seat_id: str) -> Seat:
        try:
            return self._seats[seat_id]
        except KeyError:
            raise NotFoundError(f'Seat not found: {seat_id}')

    def status_of(self, seat_id: str) -> SeatStatus:
        return self.get(seat_id).status

    def seats(self) -> List[Seat]:
        return list(self._seats.values())

    def seats_in_row(self, row_id: str) -> List[Seat]:
        layout = self._seat_map.row(row_id)
        return [self._seats[layout.seat_id(number)] for number in layout.seat_numbers]

    def selected(self, class_key: Optional[str] = None) -> List[Seat]:
        if class_key is None:
            return [seat for seat in self._seats.values() if seat.is_selected]

        seat_class = self._seat_map.seat_class(class_key)
        return [
            seat
            for row_id in seat_class.rows
            for seat in self.seats_in_row(row_id)
            if seat.is_selected
        ]

    def statuses(self) -> Dict[str, SeatStatus]:
        return {seat_id: seat.status for seat_id, seat in self._seats.items()}

    def stats(self) -> Dict[SeatStatus, int]:
        counts = {status: 0 for status in SeatStatus}
        for seat in self._seats.values():
            counts[seat.status] += 1
        return counts

    # ========== Writes ==========

    def apply(self, changes: Sequence[SeatChange], *, source: str) -> bool:
        if not changes:
            return True

        # Validate everything first: all-or-nothing
        targets: Dict[str, SeatStatus] = {}
        for change in changes:
            current = self.get(change.seat_id).status
            if change.seat_id in targets:
                Logger.base.debug(
                    f'🪑 [REGISTRY] Rejected {source}: {change.seat_id} listed twice'
                )
                return False
            if not current.can_transition_to(change.status):
                Logger.base.debug(
                    f'🪑 [REGISTRY] Rejected {source}: {change.seat_id} '
                    f'{current} -> {change.status} not allowed'
                )
                return False
            targets[change.seat_id] = change.status

        self._commit(targets, source=source)
        return True

    def overwrite(
        self, statuses: Mapping[str, SeatStatus], *, source: str
    ) -> List[SeatStatusChange]:
        for seat_id in statuses:
            self.get(seat_id)
        return self._commit(dict(statuses), source=source)

    def reset(self) -> List[SeatStatusChange]:
        return self._commit(
            {seat_id: SeatStatus.AVAILABLE for seat_id in self._seats}, source='registry.reset'
        )

    def _commit(self, targets: Dict[str, SeatStatus], *, source: str) -> List[SeatStatusChange]:
        committed: List[SeatStatusChange] = []
        for seat_id, status in targets.items():
            seat = self._seats[seat_id]
            if seat.status is status:
                continue
            self._seats[seat_id] = seat.with_status(status)
            committed.append(
                SeatStatusChange(seat_id=seat_id, previous=seat.status, current=status)
            )

        if committed:
            self._publish(SeatChangeBatch(source=source, changes=tuple(committed)))
        return committed

    # ========== Notifications ==========

    def subscribe(self) -> MemoryObjectReceiveStream[SeatChangeBatch]:
        send_stream, receive_stream = create_memory_object_stream[SeatChangeBatch](
            max_buffer_size=self._subscriber_buffer
        )
        self._subscribers.append((send_stream, receive_stream))

        Logger.base.debug(
            f'📡 [REGISTRY] Subscribed (total subscribers: {len(self._subscribers)})'
        )
        return receive_stream

    async def unsubscribe(self, stream: MemoryObjectReceiveStream[SeatChangeBatch]) -> None:
        for send_stream, receive_stream in list(self._subscribers):
            if receive_stream is stream:
                self._subscribers.remove((send_stream, receive_stream))
                await send_stream.aclose()
                await receive_stream.aclose()
                Logger.base.debug(
                    f'📡 [REGISTRY] Unsubscribed (remaining: {len(self._subscribers)})'
                )
                return

    def _publish(self, batch: SeatChangeBatch) -> None:
        delivered = 0
        dropped = 0

        for send_stream, receive_stream in list(self._subscribers):
            try:
                # Non-blocking send (raises WouldBlock if full)
                send_stream.send_nowait(batch)
                delivered += 1
            except WouldBlock:
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [REGISTRY] Subscriber stream full, dropping batch '
                    f'(source={batch.source}, seats={len(batch.changes)})'
                )
            except (BrokenResourceError, ClosedResourceError):
                # Receiver went away without unsubscribing
                self._subscribers.remove((send_stream, receive_stream))
                send_stream.close()

        Logger.base.debug(
            f'📡 [REGISTRY] {batch.source}: {len(batch.changes)} change(s), '
            f'delivered={delivered}, dropped={dropped}'
        )
