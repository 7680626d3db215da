import random
from datetime import time, timedelta
from itertools import combinations

import pytest
from django.utils import timezone

from apps.bookings import engine
from apps.bookings.exceptions import (
    InvalidBookingRequest,
    InvalidSlotRequest,
    NotFound,
    SlotUnavailable,
    TurfInactive,
)
from apps.bookings.models import Booking, PaymentStatus
from apps.payments.models import PaymentEvent
from apps.turfs import catalog
from apps.turfs.models import Turf

pytestmark = pytest.mark.django_db

MISSING = '00000000-0000-0000-0000-000000000000'


def _starts(slots):
    return [s.start for s in slots]


class TestWorkedExample:
    """09:00–18:00, hourly, one court."""

    def test_reserve_conflict_and_remaining(self, turf, court, play_date, reserve, second_customer):
        assert len(engine.get_free_slots(turf.id, court.id, play_date)) == 9

        booking = reserve(['10:00', '11:00'])
        assert booking.slot_starts == [time(10, 0), time(11, 0)]

        with pytest.raises(SlotUnavailable) as exc_info:
            reserve(['10:00'], customer_id=second_customer.id)
        assert exc_info.value.slots == [time(10, 0)]
        assert exc_info.value.as_dict()['slots'] == ['10:00']

        free = engine.get_free_slots(turf.id, court.id, play_date)
        assert len(free) == 7
        assert time(10, 0) not in _starts(free)
        assert time(11, 0) not in _starts(free)


class TestGetFreeSlots:

    def test_chronological(self, turf, court, play_date, reserve):
        reserve(['13:00'])
        starts = _starts(engine.get_free_slots(turf.id, court.id, play_date))
        assert starts == sorted(starts)
        assert time(13, 0) not in starts

    def test_other_dates_unaffected(self, turf, court, play_date, reserve):
        reserve(['13:00'])
        next_day = play_date + timedelta(days=1)
        assert len(engine.get_free_slots(turf.id, court.id, next_day)) == 9

    def test_inactive_turf_is_empty(self, turf, court, play_date):
        turf.is_active = False
        turf.save()
        assert engine.get_free_slots(turf.id, court.id, play_date) == []

    def test_unknown_turf_or_court(self, turf, court, play_date):
        with pytest.raises(NotFound):
            engine.get_free_slots(MISSING, court.id, play_date)
        with pytest.raises(NotFound):
            engine.get_free_slots(turf.id, MISSING, play_date)

    def test_retired_turf_is_not_found(self, turf, court, play_date):
        turf.retire()
        with pytest.raises(NotFound):
            engine.get_free_slots(turf.id, court.id, play_date)

    def test_court_from_another_turf(self, turf, other_court, play_date):
        with pytest.raises(InvalidSlotRequest):
            engine.get_free_slots(turf.id, other_court.id, play_date)


def test_list_active_turfs_skips_inactive_and_retired(turf, other_turf, games):
    closed = Turf.objects.create(name='Closed Ground', is_active=False)
    retired = Turf.objects.create(name='Old Ground')
    retired.retire()

    names = [t.name for t in catalog.list_active_turfs()]

    assert names == ['Marina Arena', 'VV Turf']
    assert closed.name not in names


class TestReserve:

    def test_initialises_pending_payment(self, reserve):
        booking = reserve(['09:00'])

        assert booking.payment_status == PaymentStatus.PENDING
        events = list(PaymentEvent.objects.filter(booking=booking))
        assert len(events) == 1
        assert events[0].from_status == ''
        assert events[0].to_status == PaymentStatus.PENDING

    def test_non_contiguous_slots_allowed(self, reserve):
        booking = reserve(['17:00', '09:00', '13:00'])
        assert booking.slot_starts == [time(9, 0), time(13, 0), time(17, 0)]

    def test_accepts_time_objects_and_game_case(self, reserve):
        booking = reserve([time(15, 0)], game='Cricket')
        assert booking.game == 'cricket'

    @pytest.mark.parametrize('slots', [
        [],
        ['10:00', '10:00'],
        ['10:30'],
        ['08:00'],
        ['18:00'],
        ['ten'],
        [time(10, 0, 30)],
    ])
    def test_invalid_slot_sets_never_reach_the_ledger(self, reserve, slots):
        with pytest.raises(InvalidSlotRequest):
            reserve(slots)
        assert Booking.objects.count() == 0

    def test_court_from_another_turf(self, reserve, other_court):
        with pytest.raises(InvalidSlotRequest):
            reserve(['10:00'], court_id=other_court.id)

    def test_past_date(self, reserve):
        with pytest.raises(InvalidSlotRequest):
            reserve(['10:00'], booking_date=timezone.localdate() - timedelta(days=1))

    def test_inactive_turf(self, reserve, turf):
        turf.is_active = False
        turf.save()
        with pytest.raises(TurfInactive):
            reserve(['10:00'])

    def test_unknown_ids(self, reserve):
        with pytest.raises(NotFound):
            reserve(['10:00'], turf_id=MISSING)
        with pytest.raises(NotFound):
            reserve(['10:00'], court_id=MISSING)
        with pytest.raises(NotFound):
            reserve(['10:00'], customer_id=MISSING)

    @pytest.mark.parametrize('game,team_size', [
        ('shuttle', 4),
        ('', 4),
        ('football', 0),
        ('football', 23),
        ('football', '10'),
    ])
    def test_invalid_details(self, reserve, game, team_size):
        with pytest.raises(InvalidBookingRequest):
            reserve(['10:00'], game=game, team_size=team_size)
        assert Booking.objects.count() == 0

    def test_request_key_makes_resubmission_safe(self, reserve):
        first = reserve(['10:00'], request_key='abc-123')
        again = reserve(['10:00'], request_key='abc-123')

        assert again.pk == first.pk
        assert Booking.objects.count() == 1
        assert PaymentEvent.objects.filter(booking=first).count() == 1

    def test_request_key_reused_by_another_customer(self, reserve, court, second_court, second_customer):
        first = reserve(['10:00'], request_key='k1')

        with pytest.raises(InvalidBookingRequest):
            reserve(['15:00'], request_key='k1', court_id=second_court.id, customer_id=second_customer.id)

        assert list(Booking.objects.all()) == [first]
        assert first.court == court

    @pytest.mark.parametrize('request_key', ['', '   ', 'k' * 65, 42, ['k1']])
    def test_malformed_request_key(self, reserve, request_key):
        with pytest.raises(InvalidBookingRequest):
            reserve(['10:00'], request_key=request_key)
        assert Booking.objects.count() == 0

    def test_request_key_at_the_length_limit(self, reserve):
        booking = reserve(['10:00'], request_key='k' * 64)
        assert booking.request_key == 'k' * 64

    def test_game_must_be_a_name(self, reserve):
        with pytest.raises(InvalidBookingRequest):
            reserve(['10:00'], game=7)


class TestCancelReservation:

    def test_restores_exactly_the_freed_slots(self, turf, court, play_date, reserve):
        reserve(['09:00'])
        before = _starts(engine.get_free_slots(turf.id, court.id, play_date))

        booking = reserve(['12:00', '15:00'])
        freed = engine.cancel_reservation(booking.id)

        after = _starts(engine.get_free_slots(turf.id, court.id, play_date))
        assert freed == [time(12, 0), time(15, 0)]
        assert after == before

    def test_unknown_booking(self):
        with pytest.raises(NotFound):
            engine.cancel_reservation(MISSING)

    def test_failed_payment_keeps_slots_until_cancelled(self, turf, court, play_date, reserve):
        from apps.payments import tracker

        booking = reserve(['10:00'])
        tracker.mark_failed(booking.id, 'card declined')

        assert time(10, 0) not in _starts(engine.get_free_slots(turf.id, court.id, play_date))

        engine.cancel_reservation(booking.id)
        assert time(10, 0) in _starts(engine.get_free_slots(turf.id, court.id, play_date))


class TestLookups:

    def test_bookings_for_turf_search(self, turf, reserve, second_customer):
        reserve(['09:00'])
        reserve(['10:00'], customer_id=second_customer.id)

        assert len(engine.bookings_for_turf(turf.id)) == 2
        found = engine.bookings_for_turf(turf.id, search='meen')
        assert [b.customer for b in found] == [second_customer]

    def test_bookings_for_customer(self, turf, customer, play_date, reserve, other_turf, other_court):
        reserve(['09:00'])
        reserve(['09:00'], turf_id=other_turf.id, court_id=other_court.id)

        assert len(engine.bookings_for_customer(customer.id)) == 2
        at_turf = engine.bookings_for_customer(customer.id, turf_id=turf.id, booking_date=play_date)
        assert len(at_turf) == 1
        assert at_turf[0].turf == turf

    def test_unknown_customer(self):
        with pytest.raises(NotFound):
            engine.bookings_for_customer(MISSING)


def test_committed_bookings_never_share_a_slot(turf, court, second_court, play_date, reserve):
    rng = random.Random(7)
    hours = [f'{h:02d}:00' for h in range(9, 18)]

    for _ in range(40):
        target = rng.choice([court, second_court])
        wanted = rng.sample(hours, rng.randint(1, 3))
        try:
            reserve(wanted, court_id=target.id)
        except SlotUnavailable:
            pass

    bookings = list(Booking.objects.all())
    assert bookings
    for a, b in combinations(bookings, 2):
        if (a.turf_id, a.court_id, a.booking_date) == (b.turf_id, b.court_id, b.booking_date):
            assert not set(a.slot_starts) & set(b.slot_starts)
