import pytest

from src.platform.exception.exceptions import NotFoundError
from src.service.seating.app.dto import SeatChange
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.seat_map import SeatMap
from src.service.seating.driven_adapter.state.seat_registry_impl import SeatRegistryImpl


class TestReads:
    @pytest.mark.unit
    def test_every_seat_starts_available(self, star_registry: SeatRegistryImpl) -> None:
        stats = star_registry.stats()

        assert stats[SeatStatus.AVAILABLE] == 20
        assert sum(stats.values()) == 20

    @pytest.mark.unit
    def test_seats_in_row_follow_slot_order(self, star_registry: SeatRegistryImpl) -> None:
        numbers = [seat.number for seat in star_registry.seats_in_row('SC-B')]

        assert numbers == list(range(1, 11))

    @pytest.mark.unit
    def test_unknown_seat(self, star_registry: SeatRegistryImpl) -> None:
        with pytest.raises(NotFoundError):
            star_registry.get('ZZ-Z9')

    @pytest.mark.unit
    def test_selected_by_class(self, two_class_map: SeatMap) -> None:
        registry = SeatRegistryImpl(seat_map=two_class_map)
        registry.apply(
            [SeatChange('SC2-A2', SeatStatus.SELECTED), SeatChange('SC-A7', SeatStatus.SELECTED)],
            source='test',
        )

        assert [seat.id for seat in registry.selected('SECOND')] == ['SC2-A2']
        assert [seat.id for seat in registry.selected()] == ['SC-A7', 'SC2-A2']


class TestApply:
    @pytest.mark.unit
    def test_valid_changes_commit(self, star_registry: SeatRegistryImpl) -> None:
        committed = star_registry.apply(
            [SeatChange('SC-A1', SeatStatus.SELECTED), SeatChange('SC-A2', SeatStatus.BMS_BOOKED)],
            source='test',
        )

        assert committed is True
        assert star_registry.status_of('SC-A1') is SeatStatus.SELECTED
        assert star_registry.status_of('SC-A2') is SeatStatus.BMS_BOOKED

    @pytest.mark.unit
    def test_one_disallowed_transition_rejects_all(
        self, star_registry: SeatRegistryImpl
    ) -> None:
        star_registry.overwrite({'SC-A2': SeatStatus.BOOKED}, source='test')

        committed = star_registry.apply(
            [SeatChange('SC-A1', SeatStatus.SELECTED), SeatChange('SC-A2', SeatStatus.SELECTED)],
            source='test',
        )

        assert committed is False
        assert star_registry.status_of('SC-A1') is SeatStatus.AVAILABLE
        assert star_registry.status_of('SC-A2') is SeatStatus.BOOKED

    @pytest.mark.unit
    def test_seat_listed_twice_is_rejected(self, star_registry: SeatRegistryImpl) -> None:
        committed = star_registry.apply(
            [SeatChange('SC-A1', SeatStatus.SELECTED), SeatChange('SC-A1', SeatStatus.AVAILABLE)],
            source='test',
        )

        assert committed is False
        assert star_registry.status_of('SC-A1') is SeatStatus.AVAILABLE

    @pytest.mark.unit
    def test_blocked_seat_is_not_interactive(self, star_registry: SeatRegistryImpl) -> None:
        star_registry.overwrite({'SC-A1': SeatStatus.BLOCKED}, source='test')

        assert star_registry.apply([SeatChange('SC-A1', SeatStatus.SELECTED)], source='t') is False

    @pytest.mark.unit
    def test_overwrite_skips_transition_rules(self, star_registry: SeatRegistryImpl) -> None:
        star_registry.overwrite({'SC-A1': SeatStatus.BOOKED}, source='test')

        changes = star_registry.overwrite({'SC-A1': SeatStatus.AVAILABLE}, source='test')

        assert [(c.seat_id, c.previous, c.current) for c in changes] == [
            ('SC-A1', SeatStatus.BOOKED, SeatStatus.AVAILABLE)
        ]

    @pytest.mark.unit
    def test_reset(self, star_registry: SeatRegistryImpl) -> None:
        star_registry.overwrite(
            {'SC-A1': SeatStatus.BOOKED, 'SC-B2': SeatStatus.BLOCKED}, source='test'
        )

        changes = star_registry.reset()

        assert {change.seat_id for change in changes} == {'SC-A1', 'SC-B2'}
        assert star_registry.stats()[SeatStatus.AVAILABLE] == 20


class TestNotifications:
    @pytest.mark.unit
    def test_one_batch_per_mutation(self, star_registry: SeatRegistryImpl) -> None:
        stream = star_registry.subscribe()

        star_registry.apply(
            [SeatChange('SC-A1', SeatStatus.SELECTED), SeatChange('SC-A2', SeatStatus.SELECTED)],
            source='test.apply',
        )
        star_registry.overwrite({'SC-A1': SeatStatus.SELECTED}, source='test.noop')

        batch = stream.receive_nowait()
        assert batch.source == 'test.apply'
        assert batch.seat_ids == ['SC-A1', 'SC-A2']
        assert stream.statistics().current_buffer_used == 0

    @pytest.mark.unit
    def test_full_subscriber_drops_batches(self, star_registry: SeatRegistryImpl) -> None:
        stream = star_registry.subscribe()

        for number in range(1, 11):
            star_registry.apply([SeatChange(f'SC-A{number}', SeatStatus.SELECTED)], source='t')
        star_registry.apply([SeatChange('SC-A1', SeatStatus.AVAILABLE)], source='t')

        # Buffer holds 10 batches; the 11th mutation still commits
        assert stream.statistics().current_buffer_used == 10
        assert star_registry.stats()[SeatStatus.SELECTED] == 9

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_unsubscribe_stops_delivery(self, star_registry: SeatRegistryImpl) -> None:
        stream = star_registry.subscribe()
        other = star_registry.subscribe()

        await star_registry.unsubscribe(stream)
        star_registry.apply([SeatChange('SC-A1', SeatStatus.SELECTED)], source='test')

        assert other.receive_nowait().seat_ids == ['SC-A1']

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_closed_receiver_is_pruned(self, star_registry: SeatRegistryImpl) -> None:
        stream = star_registry.subscribe()
        await stream.aclose()

        star_registry.apply([SeatChange('SC-A1', SeatStatus.SELECTED)], source='test')

        assert star_registry.status_of('SC-A1') is SeatStatus.SELECTED
