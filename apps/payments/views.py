"""
Payment status endpoint.

The external payment collaborator reports outcomes here; the tracker
records them. No money moves through this service.

POST /payments/api/<uuid>/status/
  {"event": "paid", "amount": "800.00", "method": "UPI"}
  {"event": "failed", "reason": "card declined"}
  {"event": "refunded", "reason": "rain-out"}
"""
import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from apps.bookings.exceptions import BookingEngineError

from . import tracker

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def api_payment_status(request, booking_id):
    try:
        payload = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JsonResponse({'error': 'Body must be JSON', 'code': 'InvalidPayload'}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({'error': 'Body must be a JSON object', 'code': 'InvalidPayload'}, status=400)

    event = payload.get('event', '')
    logger.info('Payment event %r received for booking %s', event, booking_id)

    try:
        if event == 'paid':
            booking = tracker.mark_paid(booking_id, payload.get('amount'), payload.get('method'))
        elif event == 'failed':
            booking = tracker.mark_failed(booking_id, payload.get('reason', ''))
        elif event == 'refunded':
            booking = tracker.refund(booking_id, payload.get('reason', ''))
        else:
            return JsonResponse({'error': f"Unknown event {event!r}", 'code': 'InvalidPayload'}, status=400)
    except BookingEngineError as exc:
        return JsonResponse(exc.as_dict(), status=exc.status_code)
    except ValueError as exc:
        return JsonResponse({'error': str(exc), 'code': 'InvalidPayload'}, status=400)

    return JsonResponse({
        'booking': str(booking.id),
        'payment_status': booking.payment_status,
        'amount_paid': str(booking.amount_paid),
    })
