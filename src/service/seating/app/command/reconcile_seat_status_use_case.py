"""
Reconcile Seat Status Use Case

Remote canonical state overwrites local derived state:
1. every seat back to AVAILABLE
2. remote booked → BOOKED, remote BMS marks → BMS_BOOKED
3. local selections the remote did not book stay SELECTED
4. seats selected on other terminals → BLOCKED; remote selections this session persisted
   itself are not foreign: kept if still selected (or committed) here, released otherwise
5. seats with buffered/in-flight sync writes keep their local status until the flush resolves
"""

from typing import Dict, Optional

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import ReconcileReport, SeatStatusSnapshot
from src.service.seating.app.interface.i_booking_service_client import IBookingServiceClient
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.app.interface.i_seat_status_sync import ISeatStatusSync
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.show_context import ShowContext


class ReconcileSeatStatusUseCase:
    def __init__(
        self,
        *,
        seat_registry: ISeatRegistry,
        booking_client: IBookingServiceClient,
        show: ShowContext,
        seat_sync: Optional[ISeatStatusSync] = None,
    ) -> None:
        self.seat_registry = seat_registry
        self.booking_client = booking_client
        self.show = show
        self.seat_sync = seat_sync
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def reconcile(self) -> ReconcileReport:
        """Fetch the canonical snapshot and apply it. BookingServiceError propagates."""
        with self.tracer.start_as_current_span(
            'use_case.reconcile_seat_status',
            attributes={'show.date': self.show.date_param, 'show.slot': str(self.show.show)},
        ):
            snapshot = await self.booking_client.fetch_seat_status(show=self.show)
            return self.apply_snapshot(snapshot)

    def apply_snapshot(self, snapshot: SeatStatusSnapshot) -> ReconcileReport:
        report = ReconcileReport()
        seat_map = self.seat_registry.seat_map
        current = self.seat_registry.statuses()

        def known(seat_ids: list[str]) -> set[str]:
            result = set()
            for seat_id in seat_ids:
                if seat_map.has_seat(seat_id):
                    result.add(seat_id)
                elif seat_id not in report.unknown_seat_ids:
                    report.unknown_seat_ids.append(seat_id)
            return result

        booked = known(snapshot.booked_seats)
        bms = known(snapshot.bms_seats) - booked
        remote_selected = known(snapshot.selected_seats) - booked - bms
        own_holds = remote_selected & (self.seat_sync.remote_holds() if self.seat_sync else set())
        held_elsewhere = remote_selected - own_holds
        pending = self.seat_sync.pending_seat_ids() if self.seat_sync else set()

        target: Dict[str, SeatStatus] = {seat_id: SeatStatus.AVAILABLE for seat_id in current}
        for seat_id in booked:
            target[seat_id] = SeatStatus.BOOKED
        for seat_id in bms:
            target[seat_id] = SeatStatus.BMS_BOOKED
        for seat_id, status in current.items():
            if status is SeatStatus.SELECTED and seat_id not in booked and seat_id not in bms:
                target[seat_id] = SeatStatus.SELECTED
        for seat_id in held_elsewhere:
            if target[seat_id] is not SeatStatus.SELECTED:
                target[seat_id] = SeatStatus.BLOCKED

        stale_holds = []
        for seat_id in sorted(own_holds):
            if current[seat_id] is SeatStatus.BOOKED:
                # Committed here; the checkout has not booked it remotely yet
                target[seat_id] = SeatStatus.BOOKED
            elif current[seat_id] is not SeatStatus.SELECTED and seat_id not in pending:
                stale_holds.append(seat_id)

        # Unflushed local writes win over the snapshot until their flush resolves
        for seat_id in pending:
            if seat_id in target and target[seat_id] is not current[seat_id]:
                report.skipped_pending_seat_ids.append(seat_id)
            if seat_id in target:
                target[seat_id] = current[seat_id]

        changes = self.seat_registry.overwrite(target, source='reconcile')
        report.changed_seat_ids = [change.seat_id for change in changes]
        if stale_holds and self.seat_sync:
            report.released_hold_seat_ids = self.seat_sync.release_holds(stale_holds)

        if report.unknown_seat_ids:
            Logger.base.warning(
                f'⚠️ [RECONCILE] {len(report.unknown_seat_ids)} unknown seat id(s) from remote '
                f'{report.unknown_seat_ids[:10]}'
            )
        Logger.base.info(
            f'🔁 [RECONCILE] {self.show.date_param}/{self.show.show}: '
            f'changed={len(report.changed_seat_ids)}, '
            f'kept_pending={len(report.skipped_pending_seat_ids)}, '
            f'released={len(report.released_hold_seat_ids)}'
        )
        return report
