"""
Seed management command.

Populates the database with demo catalog data:
  - 4 games
  - 2 turfs (09:00–18:00 and 06:00–22:30, hourly slots)
  - courts for each turf
  - 1 demo customer

Usage:
    python manage.py seed_data
    python manage.py seed_data --flush   # wipe catalog and bookings, then re-seed
"""
from datetime import time
from django.core.management.base import BaseCommand
from django.db import transaction
from apps.bookings.models import Booking, CourtDay
from apps.customers.models import Customer
from apps.turfs.models import Court, Game, Turf


class Command(BaseCommand):
    help = 'Seed demo games, turfs, courts and a customer'

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush', action='store_true',
            help='Delete all bookings and catalog data before creating fresh records',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['flush']:
            self.stdout.write('Flushing existing data...')
            Booking.objects.all().delete()
            CourtDay.objects.all().delete()
            Court.objects.all().delete()
            Turf.all_objects.all().delete()
            Customer.objects.all().delete()

        self.stdout.write('Seeding games...')
        games = {
            name: Game.objects.get_or_create(name=name)[0]
            for name in ('football', 'cricket', 'shuttle', 'basketball')
        }
        self.stdout.write(self.style.SUCCESS(f'  ✔ {len(games)} games'))

        self.stdout.write('Seeding turfs...')
        turfs_data = [
            {
                'name': 'VV Turf', 'area': 'Avadi',
                'address': '1244, 1245 TNHB, Avadi, Chennai - 600054',
                'opening_time': time(9, 0), 'closing_time': time(18, 0),
                'games': ['football', 'cricket', 'shuttle', 'basketball'],
                'courts': ['Court 1', 'Court 2'],
            },
            {
                'name': 'Marina Arena', 'area': 'Mylapore',
                'address': '12, Santhome High Road, Chennai - 600004',
                'opening_time': time(6, 0), 'closing_time': time(22, 30),
                'games': ['football', 'cricket'],
                'courts': ['North', 'South', 'Box Cricket'],
            },
        ]
        for data in turfs_data:
            turf, _ = Turf.objects.get_or_create(
                name=data['name'],
                defaults={
                    'area': data['area'],
                    'address': data['address'],
                    'opening_time': data['opening_time'],
                    'closing_time': data['closing_time'],
                },
            )
            turf.games.set([games[g] for g in data['games']])
            for position, court_name in enumerate(data['courts'], start=1):
                Court.objects.get_or_create(turf=turf, name=court_name, defaults={'position': position})
        self.stdout.write(self.style.SUCCESS(f'  ✔ {len(turfs_data)} turfs with courts'))

        Customer.get_or_create_by_mobile('Demo Customer', '+91 98765 43210', area='Avadi')
        self.stdout.write(self.style.SUCCESS('  ✔ demo customer'))

        self.stdout.write(self.style.SUCCESS('\n✅ Seed complete!'))
