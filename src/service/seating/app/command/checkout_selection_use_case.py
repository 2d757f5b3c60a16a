"""
Checkout Selection Use Case

What the booking/checkout flow sees of the seat grid. Pricing is done by the
checkout flow from the class of each seat.
"""

from typing import Dict, List

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import SeatChange
from src.service.seating.app.interface.i_seat_registry import ISeatRegistry
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.seat_status import SeatStatus


class CheckoutSelectionUseCase:
    def __init__(self, *, seat_registry: ISeatRegistry) -> None:
        self.seat_registry = seat_registry
        self.tracer = trace.get_tracer(__name__)

    def current_selection(self) -> List[Seat]:
        """Selected seats ordered by class, row and slot"""
        return self.seat_registry.selected()

    def selection_by_class(self) -> Dict[str, List[Seat]]:
        seat_map = self.seat_registry.seat_map
        grouped: Dict[str, List[Seat]] = {}
        for seat in self.current_selection():
            grouped.setdefault(seat_map.class_for_seat(seat.id).key, []).append(seat)
        return grouped

    @Logger.io
    def commit_selection(self) -> List[Seat]:
        """SELECTED -> BOOKED for every selected seat; returns the committed seats"""
        with self.tracer.start_as_current_span('use_case.commit_selection'):
            selection = self.current_selection()
            if not selection:
                return []

            changes = [SeatChange(seat.id, SeatStatus.BOOKED) for seat in selection]
            if not self.seat_registry.apply(changes, source='checkout.commit'):
                return []

            Logger.base.info(f'🎟️ [CHECKOUT] Committed {len(selection)} seat(s)')
            return [self.seat_registry.get(seat.id) for seat in selection]

    @Logger.io
    def clear_selection(self) -> List[str]:
        selection = self.current_selection()
        changes = [SeatChange(seat.id, SeatStatus.AVAILABLE) for seat in selection]
        self.seat_registry.apply(changes, source='checkout.clear')
        return [seat.id for seat in selection]
