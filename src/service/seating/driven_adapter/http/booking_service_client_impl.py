"""
Booking Service HTTP Client

Endpoints (base URL: BOOKING_SERVICE_BASE_URL):
- GET  /seats/status?date=&show=  -> {success, data: {bookedSeats, bmsSeats, selectedSeats}}
- POST /seats/bms     {seatIds, status, date, show}
- POST /seats/status  {seatUpdates: [{seatId, status}], date, show}

Every response is wrapped as {success: bool, data: ..., message: str}.
"""

from typing import Any, List, Optional, Sequence

import httpx
import orjson
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import BookingServiceError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import SeatChange, SeatStatusSnapshot
from src.service.seating.app.interface.i_booking_service_client import IBookingServiceClient
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.show_context import ShowContext


def _seat_ids_from(entries: Any) -> List[str]:
    """Accept both plain ids and {seatId, class} objects"""
    seat_ids: List[str] = []
    for entry in entries or []:
        if isinstance(entry, str):
            seat_ids.append(entry)
        elif isinstance(entry, dict) and entry.get('seatId'):
            seat_ids.append(str(entry['seatId']))
    return seat_ids


class BookingServiceClientImpl(IBookingServiceClient):
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.BOOKING_SERVICE_BASE_URL,
            timeout=timeout or settings.BOOKING_SERVICE_TIMEOUT_SECONDS,
            headers={'Content-Type': 'application/json'},
            transport=transport,
        )
        self.tracer = trace.get_tracer(__name__)

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise BookingServiceError(f'{method} {path} failed: {e}')

        if response.is_error:
            raise BookingServiceError(
                f'{method} {path} returned HTTP {response.status_code}',
                status_code=response.status_code,
            )

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise BookingServiceError(f'{method} {path} returned invalid JSON: {e}')

        if not isinstance(body, dict):
            raise BookingServiceError(f'{method} {path} returned unexpected payload')
        return body

    @Logger.io
    async def fetch_seat_status(self, *, show: ShowContext) -> SeatStatusSnapshot:
        with self.tracer.start_as_current_span(
            'booking_client.fetch_seat_status',
            attributes={'show.date': show.date_param, 'show.slot': str(show.show)},
        ):
            body = await self._request(
                'GET', '/seats/status', params={'date': show.date_param, 'show': str(show.show)}
            )
            if not body.get('success', False):
                raise BookingServiceError(
                    f'Seat status fetch rejected: {body.get("message", "unknown error")}'
                )

            data = body.get('data') or {}
            snapshot = SeatStatusSnapshot(
                booked_seats=_seat_ids_from(data.get('bookedSeats')),
                bms_seats=_seat_ids_from(data.get('bmsSeats')),
                selected_seats=_seat_ids_from(data.get('selectedSeats')),
            )
            Logger.base.info(
                f'🌐 [BOOKING] Seat status {show.date_param}/{show.show}: '
                f'booked={len(snapshot.booked_seats)}, bms={len(snapshot.bms_seats)}, '
                f'selected={len(snapshot.selected_seats)}'
            )
            return snapshot

    @Logger.io
    async def persist_seat_status_batch(
        self, *, seat_ids: List[str], status: SeatStatus, show: ShowContext
    ) -> bool:
        payload = {
            'seatIds': seat_ids,
            'status': str(status),
            'date': show.date_param,
            'show': str(show.show),
        }
        body = await self._request('POST', '/seats/bms', content=orjson.dumps(payload))
        return bool(body.get('success', False))

    @Logger.io
    async def persist_seat_move(self, *, updates: Sequence[SeatChange], show: ShowContext) -> bool:
        payload = {
            'seatUpdates': [
                {'seatId': update.seat_id, 'status': str(update.status)} for update in updates
            ],
            'date': show.date_param,
            'show': str(show.show),
        }
        body = await self._request('POST', '/seats/status', content=orjson.dumps(payload))
        return bool(body.get('success', False))

    async def aclose(self) -> None:
        await self._client.aclose()
