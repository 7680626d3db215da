"""
Bookings app models:
  - CourtDay   : one row per (turf, court, date) key space; row-locked to
                 serialise commits that contend for the same slots
  - Booking    : a committed reservation of one or more slots
  - BookedSlot : one occupied slot key; the unique constraint on it is the
                 database-level guard against double booking
"""
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from apps.core.models import UUIDModel, TimestampedModel
from apps.customers.models import Customer
from apps.turfs.models import Court, Turf


REQUEST_KEY_MAX_LENGTH = 64


class PaymentStatus(models.TextChoices):
    PENDING  = 'PENDING',  'Pending'
    PAID     = 'PAID',     'Paid'
    FAILED   = 'FAILED',   'Failed'
    REFUNDED = 'REFUNDED', 'Refunded'


class PaymentMethod(models.TextChoices):
    UPI         = 'UPI',         'UPI'
    CARD        = 'CARD',        'Card'
    NET_BANKING = 'NET_BANKING', 'Net Banking'
    CASH        = 'CASH',        'Cash'


# ── Ledger key space ──────────────────────────────────────────────────────────

class CourtDay(models.Model):
    """
    Lock row for a (turf, court, date). Created on first commit and never
    deleted; holding it FOR UPDATE serialises writers of that day's slots.
    """
    turf = models.ForeignKey(Turf, on_delete=models.CASCADE, related_name='+')
    court = models.ForeignKey(Court, on_delete=models.CASCADE, related_name='+')
    booking_date = models.DateField()

    class Meta:
        verbose_name = 'Court Day'
        verbose_name_plural = 'Court Days'
        constraints = [
            models.UniqueConstraint(
                fields=['turf', 'court', 'booking_date'],
                name='uq_court_day',
            )
        ]

    def __str__(self):
        return f"{self.court_id} on {self.booking_date}"


# ── Booking ───────────────────────────────────────────────────────────────────

class Booking(UUIDModel, TimestampedModel):
    """
    Committed reservation. Written only by the ledger; payment fields are
    written only by the payment tracker. Slot set is fixed at creation.
    """
    turf = models.ForeignKey(Turf, on_delete=models.PROTECT, related_name='bookings')
    court = models.ForeignKey(Court, on_delete=models.PROTECT, related_name='bookings')
    booking_date = models.DateField(db_index=True)
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='bookings')

    game = models.CharField(max_length=50)
    team_size = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # NULL until the tracker initialises it right after commit
    payment_status = models.CharField(
        max_length=10, choices=PaymentStatus.choices, null=True, blank=True, db_index=True,
    )
    amount_paid = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(0)],
    )
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)

    # Client-supplied idempotency key; resubmissions return the same booking
    request_key = models.CharField(max_length=REQUEST_KEY_MAX_LENGTH, null=True, blank=True)

    class Meta:
        verbose_name = 'Booking'
        verbose_name_plural = 'Bookings'
        ordering = ['-booking_date', '-created_at']
        indexes = [
            models.Index(fields=['turf', 'court', 'booking_date'], name='booking_turf_court_date_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['request_key'],
                condition=models.Q(request_key__isnull=False),
                name='uq_booking_request_key',
            ),
        ]

    def __str__(self):
        return f"#{self.id_short} | {self.customer.name} | {self.booking_date} {', '.join(self.slot_labels)}"

    @property
    def id_short(self):
        return str(self.id)[:8].upper()

    @property
    def slot_starts(self):
        """Occupied slot starts, chronological."""
        return [s.start_time for s in self.slots.all()]

    @property
    def slot_labels(self):
        return [t.strftime('%H:%M') for t in self.slot_starts]

    def as_dict(self):
        return {
            'id': str(self.id),
            'ref': self.id_short,
            'turf': str(self.turf_id),
            'court': str(self.court_id),
            'date': self.booking_date.isoformat(),
            'slots': self.slot_labels,
            'customer': str(self.customer_id),
            'game': self.game,
            'team_size': self.team_size,
            'payment_status': self.payment_status,
            'amount_paid': str(self.amount_paid),
            'payment_method': self.payment_method,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class BookedSlot(models.Model):
    """One occupied (turf, court, date, start) key, owned by a booking."""
    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name='slots')
    turf = models.ForeignKey(Turf, on_delete=models.CASCADE, related_name='+')
    court = models.ForeignKey(Court, on_delete=models.CASCADE, related_name='+')
    booking_date = models.DateField()
    start_time = models.TimeField()

    class Meta:
        verbose_name = 'Booked Slot'
        verbose_name_plural = 'Booked Slots'
        ordering = ['start_time']
        # DB-level guard: a slot key belongs to at most one booking
        constraints = [
            models.UniqueConstraint(
                fields=['turf', 'court', 'booking_date', 'start_time'],
                name='uq_booked_slot_key',
            )
        ]

    def __str__(self):
        return f"{self.court_id} {self.booking_date} {self.start_time:%H:%M}"

    @property
    def key(self):
        return (self.turf_id, self.court_id, self.booking_date, self.start_time)
