"""
Shared fixtures.

The default turf is open 09:00–18:00 with hourly slots, one court, and
football and cricket on offer.
"""
from datetime import time, timedelta

import pytest
from django.utils import timezone

from apps.customers.models import Customer
from apps.turfs.models import Court, Game, Turf


@pytest.fixture()
def games(db):
    return {
        name: Game.objects.create(name=name)
        for name in ('football', 'cricket', 'shuttle')
    }


@pytest.fixture()
def turf(games):
    turf = Turf.objects.create(
        name='VV Turf',
        area='Avadi',
        opening_time=time(9, 0),
        closing_time=time(18, 0),
        slot_minutes=60,
    )
    turf.games.set([games['football'], games['cricket']])
    return turf


@pytest.fixture()
def court(turf):
    return Court.objects.create(turf=turf, name='Court 1', position=1)


@pytest.fixture()
def second_court(turf):
    return Court.objects.create(turf=turf, name='Court 2', position=2)


@pytest.fixture()
def other_turf(games):
    other = Turf.objects.create(
        name='Marina Arena',
        opening_time=time(6, 0),
        closing_time=time(22, 0),
        slot_minutes=60,
    )
    other.games.set([games['football']])
    return other


@pytest.fixture()
def other_court(other_turf):
    return Court.objects.create(turf=other_turf, name='North', position=1)


@pytest.fixture()
def customer(db):
    customer, _ = Customer.get_or_create_by_mobile('Arjun', '+91 98765 43210')
    return customer


@pytest.fixture()
def second_customer(db):
    customer, _ = Customer.get_or_create_by_mobile('Meena', '9123456780')
    return customer


@pytest.fixture()
def play_date():
    return timezone.localdate() + timedelta(days=7)


@pytest.fixture()
def reserve(turf, court, customer, play_date):
    """Reserve on the default turf/court/date; keyword overrides allowed."""
    from apps.bookings import engine

    def _reserve(slots, **overrides):
        kwargs = {
            'turf_id': turf.id,
            'court_id': court.id,
            'booking_date': play_date,
            'requested_slots': slots,
            'customer_id': customer.id,
            'game': 'football',
            'team_size': 10,
        }
        kwargs.update(overrides)
        return engine.reserve(**kwargs)

    return _reserve
