"""
Payout report for turf owners.
Summarises captured and refunded payments for one turf over a date range.
"""
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Sum

from apps.bookings.models import Booking, PaymentStatus
from apps.turfs import catalog

PAISE = Decimal('0.01')


def _sum(qs) -> Decimal:
    return qs.aggregate(total=Sum('amount_paid'))['total'] or Decimal('0.00')


def payout_summary(turf_id, date_from=None, date_to=None) -> dict:
    """
    Rows are newest first. Refunded bookings count toward gross and are
    then taken back out, so net is what the turf actually kept.
    """
    turf = catalog.get_turf(turf_id)

    qs = Booking.objects.filter(
        turf=turf,
        payment_status__in=[PaymentStatus.PAID, PaymentStatus.REFUNDED],
    )
    if date_from:
        qs = qs.filter(booking_date__gte=date_from)
    if date_to:
        qs = qs.filter(booking_date__lte=date_to)

    gross = _sum(qs)
    refunded = _sum(qs.filter(payment_status=PaymentStatus.REFUNDED))
    net = gross - refunded
    fee = (net * turf.platform_fee_percent / Decimal('100')).quantize(PAISE, rounding=ROUND_HALF_UP)

    rows = [
        {
            'ref': b.id_short,
            'date': b.booking_date,
            'customer': b.customer.name,
            'court': b.court.name,
            'amount': b.amount_paid,
            'method': b.payment_method,
            'status': b.payment_status,
        }
        for b in qs.select_related('customer', 'court').order_by('-booking_date', '-created_at')
    ]

    return {
        'turf': {'id': str(turf.id), 'name': turf.name},
        'period': {'from': date_from, 'to': date_to},
        'rows': rows,
        'totals': {
            'gross': gross.quantize(PAISE),
            'refunded': refunded.quantize(PAISE),
            'net': net.quantize(PAISE),
            'platform_fee': fee,
            'payout': (net - fee).quantize(PAISE),
            'currency': 'INR',
        },
    }
