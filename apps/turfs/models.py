"""
Turf catalog models: Turf, Court, Game.

The booking engine only reads these. Operating hours, status and courts
are maintained through the admin.
"""
from datetime import time
from decimal import Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from apps.core.models import CatalogModel, UUIDModel


def default_slot_minutes():
    return settings.BOOKING_DEFAULT_SLOT_MINUTES


class Game(models.Model):
    """A sport offered at a turf (football, cricket, ...)."""
    name = models.CharField(max_length=50, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Turf(CatalogModel):
    name = models.CharField(max_length=120)
    address = models.TextField(blank=True)
    area = models.CharField(max_length=80, blank=True)

    # Operating window, wall clock. Slots cover [opening_time, closing_time).
    opening_time = models.TimeField(default=time(9, 0))
    closing_time = models.TimeField(default=time(18, 0))
    slot_minutes = models.PositiveIntegerField(
        default=default_slot_minutes,
        validators=[MinValueValidator(1)],
        help_text='Slot granularity. A trailing partial slot is dropped.',
    )

    games = models.ManyToManyField(Game, related_name='turfs', blank=True)

    platform_fee_percent = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('5.00'),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text='Platform commission deducted from payouts',
    )

    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        verbose_name = 'Turf'
        verbose_name_plural = 'Turfs'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.area})" if self.area else self.name

    def clean(self):
        if self.opening_time and self.closing_time and self.opening_time >= self.closing_time:
            raise ValidationError('Opening time must be before closing time.')
        if not self.slot_minutes:
            raise ValidationError('Slot length must be at least one minute.')

    @property
    def window_minutes(self):
        """Length of the operating window in minutes (0 if misconfigured)."""
        start = self.opening_time.hour * 60 + self.opening_time.minute
        end = self.closing_time.hour * 60 + self.closing_time.minute
        return max(0, end - start)

    def game_named(self, game_name: str):
        """The offered Game matching game_name case-insensitively, or None."""
        return self.games.filter(name__iexact=(game_name or '').strip()).first()


class Court(UUIDModel):
    """A bookable playing area. Belongs to exactly one turf."""
    turf = models.ForeignKey(Turf, on_delete=models.CASCADE, related_name='courts')
    name = models.CharField(max_length=60)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'Court'
        verbose_name_plural = 'Courts'
        ordering = ['turf', 'position', 'name']
        unique_together = [('turf', 'name')]

    def __str__(self):
        return f"{self.turf.name} — {self.name}"
