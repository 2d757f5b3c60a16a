"""
Seat Grid Session

Entry point for one show's seat grid. Routes raw UI events to the engine:

- activate_seat(seat_id)   seat click: BMS toggle / move mode / manual toggle
- add_seat(class_key)      class click: planner grows the class selection by one
- cancel_move()            leave move mode
- set_bms_mode(enabled)    staff marking mode
- refresh()                reconcile with the booking service
- aclose()                 teardown, flushes pending sync writes
"""

from typing import Dict, List, Optional

from anyio.streams.memory import MemoryObjectReceiveStream

from src.platform.logging.loguru_io import Logger
from src.platform.scheduling.task_scheduler import ITaskScheduler
from src.service.seating.app.command.allocation_planner import AllocationPlanner
from src.service.seating.app.command.checkout_selection_use_case import CheckoutSelectionUseCase
from src.service.seating.app.command.reconcile_seat_status_use_case import (
    ReconcileSeatStatusUseCase,
)
from src.service.seating.app.command.relocation_controller import RelocationController
from src.service.seating.app.command.toggle_seat_use_case import ToggleSeatUseCase
from src.service.seating.app.dto import ReconcileReport, SeatChangeBatch, SyncFlushReport
from src.service.seating.app.interface.i_booking_service_client import IBookingServiceClient
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.app.interface.i_seat_status_sync import ISeatStatusSync
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.move_mode_state import MoveModeState
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.seat_map import SeatMap
from src.service.seating.domain.value_object.seat_block import SeatBlock
from src.service.seating.domain.value_object.show_context import ShowContext
from src.service.seating.driven_adapter.state.seat_registry_impl import SeatRegistryImpl
from src.service.seating.driven_adapter.sync.sync_batcher import SyncBatcher


class SeatGridSession:
    def __init__(
        self,
        *,
        show: ShowContext,
        seat_registry: ISeatRegistry,
        seat_sync: ISeatStatusSync,
        planner: AllocationPlanner,
        relocation: RelocationController,
        seat_toggle: ToggleSeatUseCase,
        checkout: CheckoutSelectionUseCase,
        reconcile: ReconcileSeatStatusUseCase,
    ) -> None:
        self.show = show
        self.seat_registry = seat_registry
        self.seat_sync = seat_sync
        self.planner = planner
        self.relocation = relocation
        self.seat_toggle = seat_toggle
        self.checkout = checkout
        self.reconcile = reconcile
        self.bms_mode = False

    @classmethod
    def create(
        cls,
        *,
        show: ShowContext,
        seat_map: SeatMap,
        booking_client: IBookingServiceClient,
        scheduler: ITaskScheduler,
    ) -> 'SeatGridSession':
        seat_registry = SeatRegistryImpl(seat_map=seat_map)
        seat_sync = SyncBatcher(
            seat_registry=seat_registry,
            booking_client=booking_client,
            show=show,
            scheduler=scheduler,
        )
        seat_toggle = ToggleSeatUseCase(seat_registry=seat_registry, seat_sync=seat_sync)
        return cls(
            show=show,
            seat_registry=seat_registry,
            seat_sync=seat_sync,
            planner=AllocationPlanner(seat_registry=seat_registry),
            relocation=RelocationController(
                seat_registry=seat_registry,
                seat_sync=seat_sync,
                seat_toggle=seat_toggle,
                scheduler=scheduler,
            ),
            seat_toggle=seat_toggle,
            checkout=CheckoutSelectionUseCase(seat_registry=seat_registry),
            reconcile=ReconcileSeatStatusUseCase(
                seat_registry=seat_registry,
                booking_client=booking_client,
                show=show,
                seat_sync=seat_sync,
            ),
        )

    @property
    def move_mode(self) -> MoveModeState:
        return self.relocation.state

    # ========== UI events ==========

    def activate_seat(self, seat_id: str) -> bool:
        """Returns True if the activation was consumed (changed a seat or is pending)"""
        if self.bms_mode:
            return self.seat_toggle.toggle_bms(seat_id=seat_id)

        if self.relocation.activate(seat_id):
            return True

        changed = self.seat_toggle.toggle_selection(seat_id=seat_id)
        self.relocation.sync(bms_mode=self.bms_mode)
        return changed

    def add_seat(self, class_key: str) -> Optional[SeatBlock]:
        if self.bms_mode:
            Logger.base.debug(f'🪑 [SESSION] BMS mode on, ignoring class click on {class_key}')
            return None

        block = self.planner.add_seat(class_key=class_key)
        self.relocation.sync(bms_mode=self.bms_mode)
        return block

    def cancel_move(self) -> None:
        self.relocation.cancel()

    def set_bms_mode(self, enabled: bool) -> None:
        self.bms_mode = enabled
        self.relocation.sync(bms_mode=enabled)
        Logger.base.info(f'🪑 [SESSION] BMS mode {"on" if enabled else "off"}')

    async def refresh(self) -> ReconcileReport:
        report = await self.reconcile.reconcile()
        self.relocation.sync(bms_mode=self.bms_mode)
        return report

    # ========== Checkout ==========

    def current_selection(self) -> List[Seat]:
        return self.checkout.current_selection()

    def selection_by_class(self) -> Dict[str, List[Seat]]:
        return self.checkout.selection_by_class()

    def commit_selection(self) -> List[Seat]:
        self.relocation.cancel()
        committed = self.checkout.commit_selection()
        self.relocation.sync(bms_mode=self.bms_mode)
        return committed

    def clear_selection(self) -> List[str]:
        self.relocation.cancel()
        cleared = self.checkout.clear_selection()
        self.seat_sync.release_holds(cleared)
        self.relocation.sync(bms_mode=self.bms_mode)
        return cleared

    # ========== Observation ==========

    def subscribe(self) -> MemoryObjectReceiveStream[SeatChangeBatch]:
        return self.seat_registry.subscribe()

    async def unsubscribe(self, stream: MemoryObjectReceiveStream[SeatChangeBatch]) -> None:
        await self.seat_registry.unsubscribe(stream)

    def stats(self) -> Dict[SeatStatus, int]:
        return self.seat_registry.stats()

    # ========== Lifecycle ==========

    async def aclose(self) -> SyncFlushReport:
        self.relocation.cancel()
        report = await self.seat_sync.aclose()
        Logger.base.info(f'🪑 [SESSION] Closed {self.show.date_param}/{self.show.show}')
        return report

    async def __aenter__(self) -> 'SeatGridSession':
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
