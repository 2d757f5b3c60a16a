"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.scheduling.task_scheduler import AsyncioTaskScheduler
from src.service.seating.driven_adapter.http.booking_service_client_impl import (
    BookingServiceClientImpl,
)
from src.service.seating.driven_adapter.layout.seat_layout_loader import load_seat_map
from src.service.seating.driving_adapter.seat_grid_session import SeatGridSession


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Static theater layout (SEAT_LAYOUT_FILE or the built-in default)
    seat_map = providers.Singleton(load_seat_map)

    # Debounce / double-activation timers on the running asyncio loop
    task_scheduler = providers.Singleton(AsyncioTaskScheduler)

    # Booking service (canonical seat status)
    booking_service_client = providers.Singleton(
        BookingServiceClientImpl,
        base_url=config_service.provided.BOOKING_SERVICE_BASE_URL,
        timeout=config_service.provided.BOOKING_SERVICE_TIMEOUT_SECONDS,
    )

    # One session per show: call container.seat_grid_session(show=ShowContext(...))
    seat_grid_session = providers.Factory(
        SeatGridSession.create,
        seat_map=seat_map,
        booking_client=booking_service_client,
        scheduler=task_scheduler,
    )


container = Container()


def setup() -> None:
    container.config_service()
    container.seat_map()


async def cleanup() -> None:
    await container.booking_service_client().aclose()
    container.reset_singletons()
