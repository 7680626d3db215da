"""
JSON endpoints over the availability engine.

Thin adapters: parse the request, call the engine, and map
BookingEngineError subclasses to their status_code. Nothing here touches
the ledger directly.
"""
import json
from datetime import datetime

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from . import engine
from .exceptions import BookingEngineError


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse_date(date_str: str):
    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except (ValueError, TypeError):
        return None


def _error(exc: BookingEngineError) -> JsonResponse:
    return JsonResponse(exc.as_dict(), status=exc.status_code)


def _json_body(request):
    try:
        data = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


# ─────────────────────────────────────────────────────────────────────────────
# Free slots
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
def api_free_slots(request):
    """
    GET /bookings/api/free-slots/?turf=<uuid>&court=<uuid>&date=YYYY-MM-DD
    """
    booking_date = _parse_date(request.GET.get('date'))
    if not booking_date:
        return JsonResponse({'error': 'Invalid date', 'code': 'InvalidSlotRequest'}, status=400)

    try:
        slots = engine.get_free_slots(request.GET.get('turf'), request.GET.get('court'), booking_date)
    except BookingEngineError as exc:
        return _error(exc)

    return JsonResponse({
        'date': booking_date.isoformat(),
        'slots': [slot.as_dict() for slot in slots],
        'count': len(slots),
    })


# ─────────────────────────────────────────────────────────────────────────────
# Reserve
# ─────────────────────────────────────────────────────────────────────────────

@csrf_exempt
@require_POST
def api_reserve(request):
    """
    POST /bookings/api/reserve/
    {"turf": ..., "court": ..., "date": "YYYY-MM-DD", "slots": ["10:00", ...],
     "customer": ..., "game": "football", "team_size": 10, "request_key": "..."}
    """
    data = _json_body(request)
    if data is None:
        return JsonResponse({'error': 'Body must be a JSON object', 'code': 'InvalidBookingRequest'}, status=400)

    booking_date = _parse_date(data.get('date'))
    if not booking_date:
        return JsonResponse({'error': 'Invalid date', 'code': 'InvalidSlotRequest'}, status=400)

    slots = data.get('slots')
    if not isinstance(slots, list):
        return JsonResponse({'error': 'slots must be a list of HH:MM', 'code': 'InvalidSlotRequest'}, status=400)

    try:
        booking = engine.reserve(
            turf_id=data.get('turf'),
            court_id=data.get('court'),
            booking_date=booking_date,
            requested_slots=slots,
            customer_id=data.get('customer'),
            game=data.get('game', ''),
            team_size=data.get('team_size'),
            request_key=data.get('request_key'),
        )
    except BookingEngineError as exc:
        return _error(exc)

    return JsonResponse({'booking': booking.as_dict()}, status=201)


# ─────────────────────────────────────────────────────────────────────────────
# Cancel
# ─────────────────────────────────────────────────────────────────────────────

@csrf_exempt
@require_POST
def api_cancel(request, booking_id):
    """POST /bookings/api/<uuid>/cancel/"""
    try:
        freed = engine.cancel_reservation(booking_id)
    except BookingEngineError as exc:
        return _error(exc)

    return JsonResponse({
        'cancelled': str(booking_id),
        'freed': [t.strftime('%H:%M') for t in freed],
    })
