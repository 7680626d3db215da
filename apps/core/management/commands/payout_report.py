"""
management command: payout_report

Prints a turf's payout summary: paid and refunded bookings, platform fee
and the amount owed to the turf owner.

  python manage.py payout_report <turf_id> [--from YYYY-MM-DD] [--to YYYY-MM-DD]
"""
from datetime import datetime
from django.core.management.base import BaseCommand, CommandError
from apps.bookings.exceptions import NotFound
from apps.payments.reports import payout_summary


def _date(value):
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise CommandError(f"Invalid date {value!r}, expected YYYY-MM-DD")


class Command(BaseCommand):
    help = 'Print the payout summary for a turf'

    def add_arguments(self, parser):
        parser.add_argument('turf_id')
        parser.add_argument('--from', dest='date_from', type=_date)
        parser.add_argument('--to', dest='date_to', type=_date)

    def handle(self, *args, **options):
        try:
            report = payout_summary(options['turf_id'], options['date_from'], options['date_to'])
        except NotFound as exc:
            raise CommandError(str(exc))

        self.stdout.write(f"Payout report — {report['turf']['name']}")
        for row in report['rows']:
            self.stdout.write(
                f"  {row['date']}  #{row['ref']}  {row['customer']:<20} {row['court']:<12} "
                f"{row['status']:<9} ₹{row['amount']}"
            )

        totals = report['totals']
        self.stdout.write(f"Gross:        ₹{totals['gross']}")
        self.stdout.write(f"Refunded:     ₹{totals['refunded']}")
        self.stdout.write(f"Platform fee: ₹{totals['platform_fee']}")
        self.stdout.write(self.style.SUCCESS(f"Payout:       ₹{totals['payout']}"))
