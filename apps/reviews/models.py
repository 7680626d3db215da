"""
Player reviews of a turf: a name, a message and a 1–5 star rating.
"""
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from apps.core.models import UUIDModel, TimestampedModel
from apps.turfs.models import Turf

MIN_RATING = 1
MAX_RATING = 5


class Review(UUIDModel, TimestampedModel):
    turf = models.ForeignKey(Turf, on_delete=models.CASCADE, related_name='reviews')
    name = models.CharField(max_length=100)
    message = models.TextField(blank=True)
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
    )

    class Meta:
        verbose_name = 'Review'
        verbose_name_plural = 'Reviews'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} on {self.turf.name}: {self.rating}★"

    def as_dict(self):
        return {
            'id': str(self.id),
            'turf': str(self.turf_id),
            'name': self.name,
            'message': self.message,
            'rating': self.rating,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
