"""
PaymentEvent: append-only audit trail of payment-status transitions.

The current status lives on Booking.payment_status; this table records how
it got there. Slot occupancy and payment state are tracked separately, so
a FAILED payment leaves the booking's slots held until it is cancelled.
"""
from django.db import models

from apps.bookings.models import Booking, PaymentMethod, PaymentStatus


class PaymentEvent(models.Model):
    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name='payment_events')
    from_status = models.CharField(max_length=10, choices=PaymentStatus.choices, blank=True)
    to_status = models.CharField(max_length=10, choices=PaymentStatus.choices)
    amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)
    reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Payment Event'
        verbose_name_plural = 'Payment Events'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Booking {str(self.booking_id)[:8]}: {self.from_status or 'UNSET'} → {self.to_status}"
