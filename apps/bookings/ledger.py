"""
Booking ledger: the only writer of committed bookings and slot keys.

Every mutation is one transaction scoped to a (turf, court, date):
the CourtDay row for that key space is taken FOR UPDATE, so contenders for
the same day queue behind each other while other courts and dates commit
in parallel. The unique constraint on BookedSlot backs this up on every
backend; a violation is reported as SlotUnavailable, never swallowed.

Public API:
  try_commit(candidate)              -> Booking | raises SlotUnavailable
  cancel(booking_id)                 -> list of freed starts | raises NotFound
  lookup(turf, court, date)          -> set of occupied slot keys
  occupied_starts(turf, court, date) -> set of occupied start times
"""
import logging
from dataclasses import dataclass, field
from datetime import date as date_type

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from .exceptions import InvalidBookingRequest, NotFound, SlotUnavailable, StorageUnavailable
from .models import BookedSlot, Booking, CourtDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingCandidate:
    """A validated booking that has not been committed yet."""
    turf: object
    court: object
    booking_date: date_type
    starts: tuple
    customer: object
    game: str
    team_size: int
    request_key: str = field(default=None)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _lock_court_day(turf, court, booking_date: date_type) -> CourtDay:
    """Create the key-space row if needed, then hold it FOR UPDATE."""
    day, _ = CourtDay.objects.get_or_create(turf=turf, court=court, booking_date=booking_date)
    return CourtDay.objects.select_for_update().get(pk=day.pk)


def _taken(turf, court, booking_date: date_type, starts) -> set:
    return set(
        BookedSlot.objects.filter(
            turf=turf, court=court, booking_date=booking_date, start_time__in=list(starts),
        ).values_list('start_time', flat=True)
    )


def _find_by_request_key(request_key):
    if not request_key:
        return None
    return Booking.objects.filter(request_key=request_key).first()


def _replayed(existing: Booking, candidate: BookingCandidate, starts: list) -> Booking:
    """
    Return the booking already committed under this request_key, provided
    it is the same request. A key reused for anything else is rejected.
    """
    same = (
        existing.turf_id == candidate.turf.id
        and existing.court_id == candidate.court.id
        and existing.booking_date == candidate.booking_date
        and existing.customer_id == candidate.customer.id
        and existing.slot_starts == starts
    )
    if not same:
        logger.warning('request_key %s reused for a different request', candidate.request_key)
        raise InvalidBookingRequest('request_key was already used for a different request.')
    return existing


def _resolve_unique_violation(candidate: BookingCandidate, starts: list, exc: IntegrityError) -> Booking:
    """
    The insert lost a race the row lock did not cover. Either the same
    request was committed by a concurrent resubmission, or a slot key was
    taken; report which.
    """
    try:
        existing = _find_by_request_key(candidate.request_key)
        if existing is not None:
            logger.info('Resubmitted request %s resolved to booking %s', candidate.request_key, existing.id)
            return _replayed(existing, candidate, starts)
        taken = _taken(candidate.turf, candidate.court, candidate.booking_date, starts)
    except DatabaseError as db_exc:
        logger.exception('Ledger storage failure while resolving a conflict')
        raise StorageUnavailable() from db_exc

    logger.warning(
        'Slot key conflict on court %s %s: %s',
        candidate.court.id, candidate.booking_date, sorted(taken) or starts,
    )
    raise SlotUnavailable(taken or starts) from exc


# ── Commit ────────────────────────────────────────────────────────────────────

def try_commit(candidate: BookingCandidate) -> Booking:
    """
    All-or-nothing commit of a booking and its slot keys.

    Raises:
      SlotUnavailable       — any requested slot is already held; nothing written
      InvalidBookingRequest — request_key already used for a different request
      StorageUnavailable    — the transaction could not run
    """
    starts = sorted(set(candidate.starts))

    try:
        with transaction.atomic():
            _lock_court_day(candidate.turf, candidate.court, candidate.booking_date)

            existing = _find_by_request_key(candidate.request_key)
            if existing is not None:
                logger.info('Request %s already committed as booking %s', candidate.request_key, existing.id)
                return _replayed(existing, candidate, starts)

            taken = _taken(candidate.turf, candidate.court, candidate.booking_date, starts)
            if taken:
                raise SlotUnavailable(taken)

            booking = Booking.objects.create(
                turf=candidate.turf,
                court=candidate.court,
                booking_date=candidate.booking_date,
                customer=candidate.customer,
                game=candidate.game,
                team_size=candidate.team_size,
                request_key=candidate.request_key or None,
            )
            BookedSlot.objects.bulk_create([
                BookedSlot(
                    booking=booking,
                    turf=candidate.turf,
                    court=candidate.court,
                    booking_date=candidate.booking_date,
                    start_time=start,
                )
                for start in starts
            ])
    except SlotUnavailable as exc:
        logger.warning(
            'Booking rejected on court %s %s, slots taken: %s',
            candidate.court.id, candidate.booking_date, [s.strftime('%H:%M') for s in exc.slots],
        )
        raise
    except IntegrityError as exc:
        return _resolve_unique_violation(candidate, starts, exc)
    except DatabaseError as exc:
        logger.exception('Ledger storage failure committing booking on court %s', candidate.court.id)
        raise StorageUnavailable() from exc

    logger.info(
        'Booking %s committed: court %s %s %s',
        booking.id, candidate.court.id, candidate.booking_date, [s.strftime('%H:%M') for s in starts],
    )
    return booking


# ── Cancel ────────────────────────────────────────────────────────────────────

def _get_booking(booking_id, for_update=False) -> Booking:
    qs = Booking.objects.select_related('turf', 'court')
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(id=booking_id)
    except (Booking.DoesNotExist, ValidationError, ValueError, TypeError):
        raise NotFound(f"Booking {booking_id} not found.")


def cancel(booking_id) -> list:
    """
    Delete a booking and every slot key it holds in one transaction.
    Returns the freed start times. Raises NotFound for unknown ids.
    """
    try:
        with transaction.atomic():
            booking = _get_booking(booking_id)
            _lock_court_day(booking.turf, booking.court, booking.booking_date)
            # Re-read under the lock: a concurrent cancel may have won
            booking = _get_booking(booking.pk, for_update=True)
            freed = booking.slot_starts
            booking.delete()
    except DatabaseError as exc:
        logger.exception('Ledger storage failure cancelling booking %s', booking_id)
        raise StorageUnavailable() from exc

    logger.info('Booking %s cancelled, freed %s', booking_id, [s.strftime('%H:%M') for s in freed])
    return freed


# ── Reads ─────────────────────────────────────────────────────────────────────

def lookup(turf, court, booking_date: date_type) -> set:
    """Occupied (turf_id, court_id, date, start) keys for one court/date."""
    return {
        slot.key
        for slot in BookedSlot.objects.filter(turf=turf, court=court, booking_date=booking_date)
    }


def occupied_starts(turf, court, booking_date: date_type) -> set:
    return {key[3] for key in lookup(turf, court, booking_date)}
