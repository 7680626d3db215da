"""
Turf reviews.

Public API:
  reviews_for_turf(turf_id, search='', min_rating=0, rating=None)
  rating_summary(turf_id)
  add_review(turf_id, name, message, rating)
  delete_review(review_id)
"""
import logging

from django.core.exceptions import ValidationError
from django.db.models import Avg, Count

from apps.bookings.exceptions import InvalidReview, NotFound
from apps.turfs import catalog

from .models import MAX_RATING, MIN_RATING, Review

logger = logging.getLogger(__name__)


def _check_rating(value, *, allow_zero=False) -> int:
    low = 0 if allow_zero else MIN_RATING
    if not isinstance(value, int) or isinstance(value, bool) or not low <= value <= MAX_RATING:
        raise InvalidReview(f"Rating must be a whole number from {low} to {MAX_RATING}.")
    return value


def reviews_for_turf(turf_id, search: str = '', min_rating: int = 0, rating: int = None) -> list:
    """
    A turf's reviews, newest first.
    `search` matches the reviewer's name; `rating` picks one star value,
    `min_rating` everything at or above it (0 means no filter).
    """
    turf = catalog.get_turf(turf_id)
    qs = Review.objects.filter(turf=turf)
    if search and search.strip():
        qs = qs.filter(name__icontains=search.strip())
    if min_rating:
        qs = qs.filter(rating__gte=_check_rating(min_rating, allow_zero=True))
    if rating:
        qs = qs.filter(rating=_check_rating(rating))
    return list(qs.order_by('-created_at'))


def rating_summary(turf_id) -> dict:
    turf = catalog.get_turf(turf_id)
    agg = Review.objects.filter(turf=turf).aggregate(average=Avg('rating'), count=Count('id'))
    average = round(agg['average'], 1) if agg['average'] is not None else None
    return {'average': average, 'count': agg['count']}


def add_review(turf_id, name: str, message: str, rating: int) -> Review:
    turf = catalog.get_turf(turf_id)
    if not isinstance(name, str) or not name.strip():
        raise InvalidReview('Enter your name.')
    if message is not None and not isinstance(message, str):
        raise InvalidReview('Message must be text.')
    rating = _check_rating(rating)

    name = name.strip()
    if len(name) > Review._meta.get_field('name').max_length:
        raise InvalidReview('Name is too long.')

    review = Review.objects.create(turf=turf, name=name, message=(message or '').strip(), rating=rating)
    logger.info('Review %s added for turf %s (%s★)', review.id, turf.id, rating)
    return review


def delete_review(review_id) -> None:
    try:
        review = Review.objects.get(id=review_id)
    except (Review.DoesNotExist, ValidationError, ValueError, TypeError):
        raise NotFound(f"Review {review_id} not found.")
    review.delete()
    logger.info('Review %s deleted', review_id)
