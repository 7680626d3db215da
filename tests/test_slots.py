from datetime import date, time

import pytest

from apps.bookings.slots import (
    Slot,
    expand,
    expand_court,
    format_slot_label,
    parse_slot_time,
    slot_count,
)
from apps.turfs.models import Court, Turf

DAY = date(2030, 5, 4)


def _turf(opening, closing, minutes=60, active=True):
    return Turf(
        name='Grid Turf',
        opening_time=opening,
        closing_time=closing,
        slot_minutes=minutes,
        is_active=active,
    )


class TestExpandCourt:

    def test_nine_to_six_hourly_gives_nine_slots(self):
        turf = _turf(time(9, 0), time(18, 0))
        court = Court(turf=turf, name='Court 1')

        slots = expand_court(turf, court, DAY)

        assert [s.start for s in slots] == [time(h, 0) for h in range(9, 18)]
        assert slots[-1].end == time(18, 0)

    def test_trailing_partial_slot_is_dropped(self):
        turf = _turf(time(9, 0), time(17, 30))
        court = Court(turf=turf, name='Court 1')

        slots = expand_court(turf, court, DAY)

        assert len(slots) == 8
        assert slots[-1].start == time(16, 0)
        assert slots[-1].end == time(17, 0)

    def test_half_hour_granularity(self):
        turf = _turf(time(6, 0), time(8, 0), minutes=30)
        court = Court(turf=turf, name='Court 1')

        starts = [s.start for s in expand_court(turf, court, DAY)]

        assert starts == [time(6, 0), time(6, 30), time(7, 0), time(7, 30)]

    def test_inactive_turf_has_no_slots(self):
        turf = _turf(time(9, 0), time(18, 0), active=False)
        assert expand_court(turf, Court(turf=turf, name='C'), DAY) == []

    def test_inverted_window_has_no_slots(self):
        turf = _turf(time(18, 0), time(9, 0))
        assert expand_court(turf, Court(turf=turf, name='C'), DAY) == []

    def test_window_shorter_than_one_slot(self):
        turf = _turf(time(9, 0), time(9, 45))
        assert slot_count(turf) == 0

    def test_recomputed_fresh_each_call(self):
        turf = _turf(time(9, 0), time(12, 0))
        court = Court(turf=turf, name='C')

        first = expand_court(turf, court, DAY)
        turf.closing_time = time(11, 0)
        second = expand_court(turf, court, DAY)

        assert len(first) == 3
        assert len(second) == 2


class TestSlotValue:

    def test_identity_ignores_duration(self):
        a = Slot('t', 'c', DAY, time(10, 0), 60)
        b = Slot('t', 'c', DAY, time(10, 0), 30)
        assert a == b
        assert hash(a) == hash(b)

    def test_different_court_is_different_slot(self):
        assert Slot('t', 'c1', DAY, time(10, 0)) != Slot('t', 'c2', DAY, time(10, 0))

    def test_label_and_dict(self):
        slot = Slot('t', 'c', DAY, time(13, 0), 60)
        assert slot.label == '1:00 PM – 2:00 PM'
        assert slot.as_dict()['start'] == '13:00'
        assert slot.as_dict()['end'] == '14:00'


class TestParseSlotTime:

    def test_accepts_string_and_time(self):
        assert parse_slot_time('10:00') == time(10, 0)
        assert parse_slot_time(' 07:30 ') == time(7, 30)
        assert parse_slot_time(time(10, 0)) == time(10, 0)

    @pytest.mark.parametrize('value', [
        '10', '25:00', 'ten', None, 10,
        time(10, 0, 30),
        time(10, 0, 0, 500),
    ])
    def test_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_slot_time(value)


def test_format_slot_label():
    assert format_slot_label(time(9, 0), time(10, 30)) == '9:00 AM – 10:30 AM'
    assert format_slot_label(time(23, 0), time(0, 0)) == '11:00 PM – 12:00 AM'


@pytest.mark.django_db
@pytest.mark.parametrize('opening,closing,minutes,courts', [
    (time(9, 0), time(18, 0), 60, 1),
    (time(9, 0), time(18, 0), 60, 3),
    (time(6, 0), time(22, 30), 60, 2),
    (time(6, 0), time(22, 30), 45, 2),
    (time(7, 15), time(9, 0), 20, 4),
])
def test_grid_size_is_floor_of_window_times_courts(opening, closing, minutes, courts):
    turf = Turf.objects.create(
        name='Sized', opening_time=opening, closing_time=closing, slot_minutes=minutes,
    )
    for n in range(courts):
        Court.objects.create(turf=turf, name=f'Court {n}', position=n)

    window = (closing.hour * 60 + closing.minute) - (opening.hour * 60 + opening.minute)

    slots = expand(turf, DAY)

    assert len(slots) == (window // minutes) * courts
    assert slot_count(turf) == window // minutes


@pytest.mark.django_db
def test_expand_orders_by_court_then_time(turf, court, second_court):
    slots = expand(turf, DAY)

    assert [s.court_id for s in slots[:9]] == [court.id] * 9
    assert [s.court_id for s in slots[9:]] == [second_court.id] * 9
    assert [s.start for s in slots[9:]] == sorted(s.start for s in slots[9:])
