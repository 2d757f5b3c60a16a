"""
Seating fixtures - pure in-memory, no booking service.

Theaters:
- star_map:     STAR class, rows SC-A/SC-B = [1..5, gap, 6..10]
- balcony_map:  CLASSIC BALCONY, rows CB-A..CB-H = [1..6, gap, 7..12], base row CB-G
- two_class_map: STAR (SC-A) + SECOND (SC2-A = [1..8], no gap)
"""

import datetime as dt

import pytest

from src.service.seating.domain.enum.show_time import ShowTime
from src.service.seating.domain.seat_map import SeatMap
from src.service.seating.domain.value_object.show_context import ShowContext
from src.service.seating.driven_adapter.state.seat_registry_impl import SeatRegistryImpl
from src.service.seating.driven_adapter.sync.sync_batcher import SyncBatcher
from test.service.seating.fakes import (
    FakeBookingServiceClient,
    ManualTaskScheduler,
    build_seat_map,
    split_row,
)


@pytest.fixture
def show() -> ShowContext:
    return ShowContext(date=dt.date(2025, 3, 14), show=ShowTime.EVENING)


@pytest.fixture
def star_map() -> SeatMap:
    return build_seat_map(
        ('STAR', 'STAR CLASS', {'SC-A': split_row(5, 5), 'SC-B': split_row(5, 5)}, None)
    )


@pytest.fixture
def balcony_map() -> SeatMap:
    rows = {f'CB-{name}': split_row(6, 6) for name in 'ABCDEFGH'}
    return build_seat_map(('CLASSIC', 'CLASSIC BALCONY', rows, None))


@pytest.fixture
def two_class_map() -> SeatMap:
    return build_seat_map(
        ('STAR', 'STAR CLASS', {'SC-A': split_row(5, 5)}, None),
        ('SECOND', 'SECOND CLASS', {'SC2-A': split_row(8)}, None),
    )


@pytest.fixture
def booking_client() -> FakeBookingServiceClient:
    return FakeBookingServiceClient()


@pytest.fixture
def scheduler() -> ManualTaskScheduler:
    return ManualTaskScheduler()


@pytest.fixture
def star_registry(star_map: SeatMap) -> SeatRegistryImpl:
    return SeatRegistryImpl(seat_map=star_map, subscriber_buffer=10)


@pytest.fixture
def star_batcher(
    star_registry: SeatRegistryImpl,
    booking_client: FakeBookingServiceClient,
    scheduler: ManualTaskScheduler,
    show: ShowContext,
) -> SyncBatcher:
    return SyncBatcher(
        seat_registry=star_registry,
        booking_client=booking_client,
        show=show,
        scheduler=scheduler,
        debounce_seconds=0.5,
        batch_threshold=20,
        grace_seconds=0.05,
    )
