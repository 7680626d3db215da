"""
Read access to the turf catalog for the booking engine.

Public API:
  get_turf(turf_id)
  get_court(court_id)
  list_active_turfs()
"""
from django.core.exceptions import ValidationError

from apps.bookings.exceptions import NotFound

from .models import Court, Turf


def get_turf(turf_id) -> Turf:
    """Return a non-retired turf (active or not). Raises NotFound."""
    try:
        return Turf.objects.prefetch_related('games').get(id=turf_id)
    except (Turf.DoesNotExist, ValidationError, ValueError, TypeError):
        raise NotFound(f"Turf {turf_id} not found.")


def get_court(court_id) -> Court:
    """Return a court whose turf has not been retired. Raises NotFound."""
    try:
        return Court.objects.select_related('turf').get(
            id=court_id, turf__retired_at__isnull=True,
        )
    except (Court.DoesNotExist, ValidationError, ValueError, TypeError):
        raise NotFound(f"Court {court_id} not found.")


def list_active_turfs():
    return Turf.objects.filter(is_active=True).prefetch_related('courts', 'games')
