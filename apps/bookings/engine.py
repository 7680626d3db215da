"""
Availability engine: pure business logic, no HTTP/request awareness.

Public API:
  get_free_slots(turf_id, court_id, booking_date)
  reserve(turf_id, court_id, booking_date, requested_slots, customer_id,
          game, team_size, request_key=None)
  cancel_reservation(booking_id)
  bookings_for_turf(turf_id, search='', booking_date=None)
  bookings_for_customer(customer_id, turf_id=None, booking_date=None)

Request validation happens here, before the ledger is touched, so the
ledger's critical section only ever sees well-formed slot sets.
"""
from datetime import date as date_type

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.customers.models import Customer
from apps.payments import tracker
from apps.turfs import catalog

from . import ledger
from .exceptions import (
    InvalidBookingRequest,
    InvalidSlotRequest,
    NotFound,
    TurfInactive,
)
from .models import REQUEST_KEY_MAX_LENGTH, Booking
from .slots import expand_court, parse_slot_time


# ── Helpers ───────────────────────────────────────────────────────────────────

def _resolve_court(turf_id, court_id):
    """Load turf and court, and check the court belongs to the turf."""
    turf = catalog.get_turf(turf_id)
    court = catalog.get_court(court_id)
    if court.turf_id != turf.id:
        raise InvalidSlotRequest(f"Court {court.name} does not belong to {turf.name}.")
    return turf, court


def _get_customer(customer_id) -> Customer:
    try:
        return Customer.objects.get(id=customer_id)
    except (Customer.DoesNotExist, ValidationError, ValueError, TypeError):
        raise NotFound(f"Customer {customer_id} not found.")


def _parse_requested(requested_slots) -> list:
    """
    Parse requested starts. Order is kept for error messages; duplicates
    and unparsable values are rejected.
    """
    if not requested_slots:
        raise InvalidSlotRequest('Select at least one slot.')
    try:
        starts = [parse_slot_time(value) for value in requested_slots]
    except (ValueError, TypeError):
        raise InvalidSlotRequest('Slot times must be given as HH:MM.')
    if len(set(starts)) != len(starts):
        raise InvalidSlotRequest('The same slot was requested more than once.')
    return starts


def _validate_details(turf, game: str, team_size) -> str:
    if game is not None and not isinstance(game, str):
        raise InvalidBookingRequest('Game must be given by name.')
    game = (game or '').strip()
    if not game:
        raise InvalidBookingRequest('Choose a game.')
    match = turf.game_named(game)
    if match is None:
        raise InvalidBookingRequest(f"{turf.name} does not offer {game}.")
    if not isinstance(team_size, int) or isinstance(team_size, bool):
        raise InvalidBookingRequest('Team size must be a whole number.')
    if team_size < 1 or team_size > settings.BOOKING_MAX_TEAM_SIZE:
        raise InvalidBookingRequest(
            f"Team size must be between 1 and {settings.BOOKING_MAX_TEAM_SIZE}."
        )
    return match.name


def _validate_request_key(request_key):
    """None, or a non-empty string that fits the stored column."""
    if request_key is None:
        return None
    if not isinstance(request_key, str) or not request_key.strip():
        raise InvalidBookingRequest('request_key must be a non-empty string.')
    if len(request_key) > REQUEST_KEY_MAX_LENGTH:
        raise InvalidBookingRequest(
            f"request_key must be at most {REQUEST_KEY_MAX_LENGTH} characters."
        )
    return request_key


# ── Core: Free slots ──────────────────────────────────────────────────────────

def get_free_slots(turf_id, court_id, booking_date: date_type) -> list:
    """
    Grid slots for the court/date that no committed booking holds,
    chronological. Empty list for an inactive turf.
    """
    turf, court = _resolve_court(turf_id, court_id)
    grid = expand_court(turf, court, booking_date)
    if not grid:
        return []
    occupied = ledger.lookup(turf, court, booking_date)
    return [slot for slot in grid if slot.key not in occupied]


# ── Core: Reserve ─────────────────────────────────────────────────────────────

def reserve(turf_id, court_id, booking_date: date_type, requested_slots, customer_id,
            game: str, team_size: int, request_key: str = None) -> Booking:
    """
    Validate and commit a reservation, then initialise its payment state.
    Both writes share one transaction: a booking never exists without
    a PENDING payment status.

    No automatic retry on conflict: the caller re-queries get_free_slots
    and chooses again.

    Raises:
      NotFound              — unknown turf, court or customer
      TurfInactive          — turf is inactive or has an empty grid
      InvalidSlotRequest    — empty/duplicate/off-grid slots, wrong court, past date
      InvalidBookingRequest — game not offered, team size out of range,
                              malformed request_key, or a request_key
                              already used for a different request
      SlotUnavailable       — a requested slot is already booked (.slots lists them)
      StorageUnavailable    — the ledger transaction could not run
    """
    turf, court = _resolve_court(turf_id, court_id)
    customer = _get_customer(customer_id)

    grid = expand_court(turf, court, booking_date)
    if not grid:
        raise TurfInactive(f"{turf.name} is not accepting bookings.")

    if booking_date < timezone.localdate():
        raise InvalidSlotRequest('Cannot book a past date.')

    starts = _parse_requested(requested_slots)
    valid_starts = {slot.start for slot in grid}
    off_grid = [s for s in starts if s not in valid_starts]
    if off_grid:
        raise InvalidSlotRequest(
            'Not bookable on this court: ' + ', '.join(s.strftime('%H:%M') for s in off_grid)
        )

    game_name = _validate_details(turf, game, team_size)
    request_key = _validate_request_key(request_key)

    candidate = ledger.BookingCandidate(
        turf=turf,
        court=court,
        booking_date=booking_date,
        starts=tuple(starts),
        customer=customer,
        game=game_name,
        team_size=team_size,
        request_key=request_key,
    )

    with transaction.atomic():
        booking = ledger.try_commit(candidate)
        if booking.payment_status is None:
            tracker.init_pending(booking.id)
            booking.refresh_from_db()

    return booking


# ── Core: Cancel ──────────────────────────────────────────────────────────────

def cancel_reservation(booking_id) -> list:
    """Release a booking's slots. Returns the freed start times."""
    return ledger.cancel(booking_id)


# ── Lookups ───────────────────────────────────────────────────────────────────

def bookings_for_turf(turf_id, search: str = '', booking_date: date_type = None):
    """A turf's bookings, newest first, optionally filtered by customer name."""
    turf = catalog.get_turf(turf_id)
    qs = (
        Booking.objects
        .filter(turf=turf)
        .select_related('customer', 'court')
        .prefetch_related('slots')
    )
    if search:
        qs = qs.filter(customer__name__icontains=search.strip())
    if booking_date:
        qs = qs.filter(booking_date=booking_date)
    return list(qs.order_by('-booking_date', '-created_at'))


def bookings_for_customer(customer_id, turf_id=None, booking_date: date_type = None):
    """
    A customer's bookings, newest first. Also the way for a caller whose
    reserve() timed out to learn whether the booking was made.
    """
    customer = _get_customer(customer_id)
    qs = (
        Booking.objects
        .filter(customer=customer)
        .select_related('turf', 'court')
        .prefetch_related('slots')
    )
    if turf_id is not None:
        qs = qs.filter(turf=catalog.get_turf(turf_id))
    if booking_date:
        qs = qs.filter(booking_date=booking_date)
    return list(qs.order_by('-booking_date', '-created_at'))
