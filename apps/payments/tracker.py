"""
Payment status tracker.

Records payment outcomes reported by the external payment collaborator.
It never moves money and never touches slot occupancy.

  UNSET   → PENDING   init_pending()
  PENDING → PAID      mark_paid()
  PENDING → FAILED    mark_failed()
  PAID    → REFUNDED  refund()

Anything else raises InvalidStatusTransition.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from apps.bookings.exceptions import InvalidStatusTransition, NotFound, StorageUnavailable
from apps.bookings.models import Booking, PaymentMethod, PaymentStatus

from .models import PaymentEvent

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    (None, PaymentStatus.PENDING),
    (PaymentStatus.PENDING, PaymentStatus.PAID),
    (PaymentStatus.PENDING, PaymentStatus.FAILED),
    (PaymentStatus.PAID, PaymentStatus.REFUNDED),
}


def can_transition(current, target) -> bool:
    return (current or None, target) in ALLOWED_TRANSITIONS


def _transition(booking_id, target, *, amount=None, method='', reason='', **updates) -> Booking:
    """Lock the booking row, check the move, apply it, append the audit event."""
    try:
        with transaction.atomic():
            try:
                booking = Booking.objects.select_for_update().get(id=booking_id)
            except (Booking.DoesNotExist, ValidationError, ValueError, TypeError):
                raise NotFound(f"Booking {booking_id} not found.")

            current = booking.payment_status or None
            if not can_transition(current, target):
                raise InvalidStatusTransition(current, target)

            booking.payment_status = target
            for field, value in updates.items():
                setattr(booking, field, value)
            booking.save(update_fields=['payment_status', 'updated_at', *updates])

            PaymentEvent.objects.create(
                booking=booking,
                from_status=current or '',
                to_status=target,
                amount=amount,
                method=method,
                reason=reason,
            )
    except DatabaseError as exc:
        logger.exception('Payment storage failure for booking %s', booking_id)
        raise StorageUnavailable() from exc

    logger.info('Booking %s payment %s → %s', booking_id, current or 'UNSET', target)
    return booking


def init_pending(booking_id) -> Booking:
    """Called right after a successful reserve()."""
    return _transition(booking_id, PaymentStatus.PENDING)


def mark_paid(booking_id, amount, method) -> Booking:
    """
    Record a captured payment.
    Raises ValueError for a non-positive or non-finite amount, or an
    unknown method.
    """
    try:
        parsed = Decimal(str(amount))
        if not parsed.is_finite():
            raise ValueError
        amount = parsed.quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid payment amount: {amount!r}")
    if amount <= 0:
        raise ValueError('Payment amount must be positive.')
    if method not in PaymentMethod.values:
        raise ValueError(f"Unknown payment method: {method!r}")

    return _transition(
        booking_id, PaymentStatus.PAID,
        amount=amount, method=method,
        amount_paid=amount, payment_method=method,
    )


def mark_failed(booking_id, reason: str = '') -> Booking:
    """Record a failed payment. The booking keeps its slots."""
    return _transition(booking_id, PaymentStatus.FAILED, reason=reason or '')


def refund(booking_id, reason: str = '') -> Booking:
    return _transition(booking_id, PaymentStatus.REFUNDED, reason=reason or '')


def payment_history(booking_id) -> list:
    return list(PaymentEvent.objects.filter(booking_id=booking_id).order_by('created_at', 'id'))
