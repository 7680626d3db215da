from datetime import time, timedelta

import pytest
from django.db import OperationalError

from apps.bookings import ledger
from apps.bookings.exceptions import InvalidBookingRequest, NotFound, SlotUnavailable, StorageUnavailable
from apps.bookings.models import BookedSlot, Booking, CourtDay

pytestmark = pytest.mark.django_db


@pytest.fixture()
def candidate(turf, court, customer, play_date):
    def _candidate(*starts, **overrides):
        kwargs = {
            'turf': turf,
            'court': court,
            'booking_date': play_date,
            'starts': tuple(starts),
            'customer': customer,
            'game': 'football',
            'team_size': 8,
        }
        kwargs.update(overrides)
        return ledger.BookingCandidate(**kwargs)
    return _candidate


class TestTryCommit:

    def test_commits_booking_and_every_slot_key(self, candidate, turf, court, play_date):
        booking = ledger.try_commit(candidate(time(11, 0), time(10, 0)))

        assert booking.slot_starts == [time(10, 0), time(11, 0)]
        assert ledger.lookup(turf, court, play_date) == {
            (turf.id, court.id, play_date, time(10, 0)),
            (turf.id, court.id, play_date, time(11, 0)),
        }
        assert CourtDay.objects.filter(court=court, booking_date=play_date).count() == 1

    def test_conflict_commits_nothing(self, candidate, second_customer):
        ledger.try_commit(candidate(time(10, 0)))

        with pytest.raises(SlotUnavailable) as exc_info:
            ledger.try_commit(candidate(time(9, 0), time(10, 0), time(12, 0), customer=second_customer))

        assert exc_info.value.slots == [time(10, 0)]
        assert Booking.objects.count() == 1
        assert BookedSlot.objects.count() == 1
        assert not BookedSlot.objects.filter(start_time=time(9, 0)).exists()

    def test_same_start_on_another_court_is_free(self, candidate, second_court):
        ledger.try_commit(candidate(time(10, 0)))
        booking = ledger.try_commit(candidate(time(10, 0), court=second_court))

        assert booking.court == second_court

    def test_request_key_returns_existing_booking(self, candidate):
        first = ledger.try_commit(candidate(time(10, 0), request_key='req-1'))
        again = ledger.try_commit(candidate(time(10, 0), request_key='req-1'))

        assert again.pk == first.pk
        assert Booking.objects.count() == 1

    @pytest.mark.parametrize('change', ['slots', 'court', 'customer', 'date'])
    def test_request_key_reused_for_another_request(
        self, candidate, change, second_court, second_customer, play_date,
    ):
        first = ledger.try_commit(candidate(time(10, 0), request_key='req-1'))
        starts, overrides = {
            'slots': ((time(15, 0),), {}),
            'court': ((time(10, 0),), {'court': second_court}),
            'customer': ((time(10, 0),), {'customer': second_customer}),
            'date': ((time(10, 0),), {'booking_date': play_date + timedelta(days=1)}),
        }[change]

        with pytest.raises(InvalidBookingRequest):
            ledger.try_commit(candidate(*starts, request_key='req-1', **overrides))

        assert list(Booking.objects.values_list('pk', flat=True)) == [first.pk]
        assert BookedSlot.objects.count() == 1

    def test_unique_index_backstops_a_missed_check(self, candidate, monkeypatch):
        ledger.try_commit(candidate(time(10, 0)))

        real_taken = ledger._taken
        calls = []

        def blind_first_check(*args):
            calls.append(args)
            return set() if len(calls) == 1 else real_taken(*args)

        monkeypatch.setattr(ledger, '_taken', blind_first_check)

        with pytest.raises(SlotUnavailable) as exc_info:
            ledger.try_commit(candidate(time(10, 0), time(11, 0)))

        assert exc_info.value.slots == [time(10, 0)]
        assert Booking.objects.count() == 1
        assert not BookedSlot.objects.filter(start_time=time(11, 0)).exists()

    def test_storage_failure_is_surfaced(self, candidate, monkeypatch):
        def broken(*args, **kwargs):
            raise OperationalError('database is locked')

        monkeypatch.setattr(ledger, '_lock_court_day', broken)

        with pytest.raises(StorageUnavailable):
            ledger.try_commit(candidate(time(10, 0)))
        assert Booking.objects.count() == 0


class TestCancel:

    def test_removes_booking_and_keys(self, candidate, turf, court, play_date):
        booking = ledger.try_commit(candidate(time(10, 0), time(14, 0)))

        freed = ledger.cancel(booking.id)

        assert freed == [time(10, 0), time(14, 0)]
        assert not Booking.objects.filter(pk=booking.pk).exists()
        assert ledger.lookup(turf, court, play_date) == set()

    def test_unknown_booking(self):
        with pytest.raises(NotFound):
            ledger.cancel('00000000-0000-0000-0000-000000000000')

    def test_malformed_id(self):
        with pytest.raises(NotFound):
            ledger.cancel('not-a-uuid')

    def test_second_cancel_is_not_found(self, candidate):
        booking = ledger.try_commit(candidate(time(10, 0)))
        ledger.cancel(booking.id)

        with pytest.raises(NotFound):
            ledger.cancel(booking.id)

    def test_other_bookings_untouched(self, candidate, turf, court, play_date):
        keep = ledger.try_commit(candidate(time(9, 0)))
        drop = ledger.try_commit(candidate(time(10, 0)))

        ledger.cancel(drop.id)

        assert ledger.occupied_starts(turf, court, play_date) == {time(9, 0)}
        assert Booking.objects.get(pk=keep.pk).slot_starts == [time(9, 0)]
