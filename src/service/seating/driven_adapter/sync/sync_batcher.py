"""
Sync Batcher

Buffers optimistic seat-status writes and persists them to the booking service in bulk.

Timing:
- every stage() resets a debounce timer (SYNC_DEBOUNCE_SECONDS)
- reaching SYNC_BATCH_THRESHOLD buffered seats flushes after SYNC_BATCH_GRACE_SECONDS,
  regardless of the remaining debounce
- aclose() waits for the in-flight flush, then flushes whatever is left

Flush:
- one persist_seat_status_batch() call per target status, one persist_seat_move() per move
- failed group → roll every seat back to its pre-toggle status (if it still shows ours)
- at most one flush in flight; writes during a flush form the next generation

Remote holds:
- seats this session persisted as SELECTED (relocations) stay held on the booking service
  until a later write for them succeeds; release_holds() sends AVAILABLE for stale ones
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

import anyio
import attrs
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import BookingServiceError
from src.platform.logging.loguru_io import Logger
from src.platform.scheduling.task_scheduler import ITaskScheduler, ScheduledTask
from src.service.seating.app.dto import SeatChange, SyncFlushReport
from src.service.seating.app.interface.i_booking_service_client import IBookingServiceClient
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.app.interface.i_seat_status_sync import ISeatStatusSync
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.show_context import ShowContext


@attrs.define(frozen=True)
class PendingSyncEntry:
    seat_id: str
    desired: SeatStatus
    original: SeatStatus  # status before the first buffered toggle, restored on failure


@attrs.define(frozen=True)
class PendingMove:
    updates: tuple[SeatChange, ...]
    previous: Dict[str, SeatStatus]

    @property
    def seat_ids(self) -> list[str]:
        return [update.seat_id for update in self.updates]


class SyncBatcher(ISeatStatusSync):
    def __init__(
        self,
        *,
        seat_registry: ISeatRegistry,
        booking_client: IBookingServiceClient,
        show: ShowContext,
        scheduler: ITaskScheduler,
        debounce_seconds: Optional[float] = None,
        batch_threshold: Optional[int] = None,
        grace_seconds: Optional[float] = None,
    ) -> None:
        self._registry = seat_registry
        self._client = booking_client
        self._show = show
        self._scheduler = scheduler
        self._debounce_seconds = (
            settings.SYNC_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        )
        self._batch_threshold = batch_threshold or settings.SYNC_BATCH_THRESHOLD
        self._grace_seconds = (
            settings.SYNC_BATCH_GRACE_SECONDS if grace_seconds is None else grace_seconds
        )

        self._buffer: Dict[str, PendingSyncEntry] = {}
        self._moves: List[PendingMove] = []
        self._in_flight: Dict[str, PendingSyncEntry] = {}
        self._in_flight_moves: List[PendingMove] = []
        self._remote_holds: Set[str] = set()

        self._timer: Optional[ScheduledTask] = None
        self._timer_is_threshold = False
        self._flushing = False
        self._closed = False
        self._lock = anyio.Lock()
        self.tracer = trace.get_tracer(__name__)

    @property
    def pending_count(self) -> int:
        return len(self._buffer) + sum(len(move.updates) for move in self._moves)

    def pending_seat_ids(self) -> Set[str]:
        seat_ids = set(self._buffer) | set(self._in_flight)
        for move in (*self._moves, *self._in_flight_moves):
            seat_ids.update(move.seat_ids)
        return seat_ids

    def remote_holds(self) -> FrozenSet[str]:
        return frozenset(self._remote_holds)

    def buffered(self) -> Dict[str, SeatStatus]:
        """Current generation: seat_id -> desired status"""
        return {seat_id: entry.desired for seat_id, entry in self._buffer.items()}

    # ========== Staging ==========

    def stage(self, seat_id: str, status: SeatStatus) -> bool:
        if self._closed:
            Logger.base.warning(f'⚠️ [SYNC] Batcher closed, ignoring {seat_id} -> {status}')
            return False

        previous = self._registry.status_of(seat_id)
        if not self._registry.apply([SeatChange(seat_id, status)], source='sync.stage'):
            return False

        # Last write wins, but rollback target stays the status before the first toggle
        existing = self._buffer.get(seat_id)
        original = existing.original if existing else previous
        self._buffer[seat_id] = PendingSyncEntry(seat_id=seat_id, desired=status, original=original)

        Logger.base.debug(
            f'🔄 [SYNC] Staged {seat_id} -> {status} (pending={self.pending_count})'
        )
        self._schedule()
        return True

    def stage_move(self, changes: Sequence[SeatChange]) -> bool:
        if self._closed:
            Logger.base.warning('⚠️ [SYNC] Batcher closed, ignoring move')
            return False

        previous = {change.seat_id: self._registry.status_of(change.seat_id) for change in changes}
        if not self._registry.apply(changes, source='sync.move'):
            return False

        self._moves.append(PendingMove(updates=tuple(changes), previous=previous))
        Logger.base.debug(f'🔄 [SYNC] Staged move of {len(changes)} seat(s)')
        self._schedule()
        return True

    def release_holds(self, seat_ids: Iterable[str]) -> List[str]:
        """Buffer AVAILABLE for held seats without a local write; returns the released ids"""
        if self._closed:
            return []

        pending = self.pending_seat_ids()
        released = [
            seat_id
            for seat_id in seat_ids
            if seat_id in self._remote_holds and seat_id not in pending
        ]
        for seat_id in released:
            # Local status is already AVAILABLE; a failed release has nothing to roll back
            self._buffer[seat_id] = PendingSyncEntry(
                seat_id=seat_id, desired=SeatStatus.AVAILABLE, original=SeatStatus.AVAILABLE
            )
        if released:
            Logger.base.debug(f'🔄 [SYNC] Releasing remote hold on {released}')
            self._schedule()
        return released

    def _schedule(self) -> None:
        if self._flushing:
            # Next generation is scheduled once the in-flight flush resolves
            return

        if self.pending_count >= self._batch_threshold:
            if self._timer_is_threshold and self._timer is not None and not self._timer.fired:
                return
            self._replace_timer(self._grace_seconds, is_threshold=True)
            Logger.base.debug(
                f'🔄 [SYNC] Threshold reached ({self.pending_count}), flushing in '
                f'{self._grace_seconds}s'
            )
            return

        self._replace_timer(self._debounce_seconds, is_threshold=False)

    def _replace_timer(self, delay: float, *, is_threshold: bool) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._scheduler.call_later(delay, self.flush, name='sync_batcher.flush')
        self._timer_is_threshold = is_threshold

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._timer_is_threshold = False

    # ========== Flushing ==========

    async def flush(self) -> SyncFlushReport:
        async with self._lock:
            self._cancel_timer()
            generation, self._buffer = self._buffer, {}
            moves, self._moves = self._moves, []
            if not generation and not moves:
                return SyncFlushReport()

            self._in_flight = generation
            self._in_flight_moves = moves
            self._flushing = True
            try:
                report = await self._flush_generation(generation, moves)
            finally:
                self._flushing = False
                self._in_flight = {}
                self._in_flight_moves = []

        if (self._buffer or self._moves) and not self._closed:
            self._schedule()
        return report

    async def _flush_generation(
        self, generation: Dict[str, PendingSyncEntry], moves: List[PendingMove]
    ) -> SyncFlushReport:
        with self.tracer.start_as_current_span(
            'sync_batcher.flush',
            attributes={
                'show.date': self._show.date_param,
                'show.slot': str(self._show.show),
                'sync.seats': len(generation),
                'sync.moves': len(moves),
            },
        ):
            report = SyncFlushReport()

            groups: Dict[SeatStatus, List[PendingSyncEntry]] = {}
            for entry in generation.values():
                groups.setdefault(entry.desired, []).append(entry)

            for status in SeatStatus:
                entries = groups.get(status)
                if not entries:
                    continue
                seat_ids = [entry.seat_id for entry in entries]
                report.remote_calls += 1
                if await self._persist_group(seat_ids, status):
                    report.persisted_seat_ids.extend(seat_ids)
                    self._track_holds(seat_ids, status)
                else:
                    report.failed_groups.append(status)
                    report.rolled_back_seat_ids.extend(self._rollback_group(entries))

            for move in moves:
                report.remote_calls += 1
                if await self._persist_move(move):
                    report.persisted_seat_ids.extend(move.seat_ids)
                    for update in move.updates:
                        self._track_holds([update.seat_id], update.status)
                else:
                    report.failed_moves += 1
                    report.rolled_back_seat_ids.extend(self._rollback_move(move))

            Logger.base.info(
                f'🔄 [SYNC] Flushed {len(report.persisted_seat_ids)} seat(s) '
                f'in {report.remote_calls} call(s), rolled back {len(report.rolled_back_seat_ids)}'
            )
            return report

    def _track_holds(self, seat_ids: List[str], status: SeatStatus) -> None:
        if status is SeatStatus.SELECTED:
            self._remote_holds.update(seat_ids)
        else:
            self._remote_holds.difference_update(seat_ids)

    async def _persist_group(self, seat_ids: List[str], status: SeatStatus) -> bool:
        try:
            ok = await self._client.persist_seat_status_batch(
                seat_ids=seat_ids, status=status, show=self._show
            )
        except BookingServiceError as e:
            Logger.base.warning(f'⚠️ [SYNC] Persist {status} x{len(seat_ids)} failed: {e}')
            return False
        except Exception as e:
            Logger.base.exception(f'⚠️ [SYNC] Persist {status} x{len(seat_ids)} crashed: {e}')
            return False

        if not ok:
            Logger.base.warning(f'⚠️ [SYNC] Booking service rejected {status} x{len(seat_ids)}')
        return ok

    async def _persist_move(self, move: PendingMove) -> bool:
        try:
            ok = await self._client.persist_seat_move(updates=move.updates, show=self._show)
        except BookingServiceError as e:
            Logger.base.warning(f'⚠️ [SYNC] Persist move {move.seat_ids} failed: {e}')
            return False
        except Exception as e:
            Logger.base.exception(f'⚠️ [SYNC] Persist move {move.seat_ids} crashed: {e}')
            return False

        if not ok:
            Logger.base.warning(f'⚠️ [SYNC] Booking service rejected move {move.seat_ids}')
        return ok

    def _rollback_group(self, entries: List[PendingSyncEntry]) -> List[str]:
        restore: Dict[str, SeatStatus] = {}
        for entry in entries:
            newer = self._buffer.get(entry.seat_id)
            if newer is not None:
                # A newer write is queued; it will be persisted, but it must roll back
                # to what the remote store still holds
                self._buffer[entry.seat_id] = attrs.evolve(newer, original=entry.original)
                continue
            if self._registry.status_of(entry.seat_id) is entry.desired:
                restore[entry.seat_id] = entry.original

        self._registry.overwrite(restore, source='sync.rollback')
        return list(restore)

    def _rollback_move(self, move: PendingMove) -> List[str]:
        restore = {
            update.seat_id: move.previous[update.seat_id]
            for update in move.updates
            if self._registry.status_of(update.seat_id) is update.status
        }
        self._registry.overwrite(restore, source='sync.rollback')
        return list(restore)

    # ========== Teardown ==========

    async def aclose(self) -> SyncFlushReport:
        self._closed = True
        self._cancel_timer()
        report = await self.flush()
        Logger.base.info(
            f'🔄 [SYNC] Closed (final flush persisted {len(report.persisted_seat_ids)})'
        )
        return report
