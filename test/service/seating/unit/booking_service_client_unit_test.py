"""Booking service HTTP client against an httpx.MockTransport"""

from typing import Callable, List

import httpx
import orjson
import pytest

from src.platform.exception.exceptions import BookingServiceError
from src.service.seating.app.dto import SeatChange
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.show_context import ShowContext
from src.service.seating.driven_adapter.http.booking_service_client_impl import (
    BookingServiceClientImpl,
)


BASE_URL = 'http://booking.test/api'


def make_client(
    handler: Callable[[httpx.Request], httpx.Response], requests: List[httpx.Request]
) -> BookingServiceClientImpl:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return BookingServiceClientImpl(
        base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(recording_handler)
    )


class TestFetchSeatStatus:
    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_parses_snapshot(self, show: ShowContext) -> None:
        requests: List[httpx.Request] = []
        client = make_client(
            lambda request: httpx.Response(
                200,
                json={
                    'success': True,
                    'data': {
                        'bookedSeats': [{'seatId': 'SC-A1', 'class': 'STAR CLASS'}],
                        'bmsSeats': ['BOX-A2'],
                        'selectedSeats': [{'seatId': 'CB-C4'}],
                    },
                },
            ),
            requests,
        )

        snapshot = await client.fetch_seat_status(show=show)
        await client.aclose()

        assert snapshot.booked_seats == ['SC-A1']
        assert snapshot.bms_seats == ['BOX-A2']
        assert snapshot.selected_seats == ['CB-C4']
        assert requests[0].method == 'GET'
        assert requests[0].url.path == '/api/seats/status'
        assert requests[0].url.params['date'] == '2025-03-14'
        assert requests[0].url.params['show'] == str(show.show)

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_unsuccessful_body_raises(self, show: ShowContext) -> None:
        client = make_client(
            lambda request: httpx.Response(200, json={'success': False, 'message': 'no show'}),
            [],
        )

        with pytest.raises(BookingServiceError):
            await client.fetch_seat_status(show=show)
        await client.aclose()

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_http_error_raises(self, show: ShowContext) -> None:
        client = make_client(lambda request: httpx.Response(503), [])

        with pytest.raises(BookingServiceError) as exc_info:
            await client.fetch_seat_status(show=show)
        await client.aclose()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_transport_error_raises(self, show: ShowContext) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        client = make_client(refuse, [])

        with pytest.raises(BookingServiceError):
            await client.fetch_seat_status(show=show)
        await client.aclose()

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_invalid_json_raises(self, show: ShowContext) -> None:
        client = make_client(lambda request: httpx.Response(200, content=b'<html>'), [])

        with pytest.raises(BookingServiceError):
            await client.fetch_seat_status(show=show)
        await client.aclose()


class TestPersist:
    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_status_batch_payload(self, show: ShowContext) -> None:
        requests: List[httpx.Request] = []
        client = make_client(lambda request: httpx.Response(200, json={'success': True}), requests)

        ok = await client.persist_seat_status_batch(
            seat_ids=['SC-A1', 'SC-A2'], status=SeatStatus.BMS_BOOKED, show=show
        )
        await client.aclose()

        assert ok is True
        assert requests[0].method == 'POST'
        assert requests[0].url.path == '/api/seats/bms'
        assert orjson.loads(requests[0].content) == {
            'seatIds': ['SC-A1', 'SC-A2'],
            'status': 'BMS_BOOKED',
            'date': '2025-03-14',
            'show': str(show.show),
        }

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_move_payload(self, show: ShowContext) -> None:
        requests: List[httpx.Request] = []
        client = make_client(lambda request: httpx.Response(200, json={'success': True}), requests)

        ok = await client.persist_seat_move(
            updates=[
                SeatChange('SC-A1', SeatStatus.AVAILABLE),
                SeatChange('SC-A3', SeatStatus.SELECTED),
            ],
            show=show,
        )
        await client.aclose()

        assert ok is True
        assert requests[0].url.path == '/api/seats/status'
        assert orjson.loads(requests[0].content)['seatUpdates'] == [
            {'seatId': 'SC-A1', 'status': 'AVAILABLE'},
            {'seatId': 'SC-A3', 'status': 'SELECTED'},
        ]

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_rejected_write_returns_false(self, show: ShowContext) -> None:
        client = make_client(
            lambda request: httpx.Response(200, json={'success': False, 'message': 'locked'}), []
        )

        ok = await client.persist_seat_status_batch(
            seat_ids=['SC-A1'], status=SeatStatus.AVAILABLE, show=show
        )
        await client.aclose()

        assert ok is False
