"""
Review endpoints.

  GET  /reviews/api/turf/<uuid>/?search=&rating=&min_rating=
  POST /reviews/api/turf/<uuid>/    {"name": ..., "message": ..., "rating": 4}
  POST /reviews/api/<uuid>/delete/
"""
import json

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from apps.bookings.exceptions import BookingEngineError

from . import services


def _int_param(value):
    if value in (None, ''):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def api_turf_reviews(request, turf_id):
    try:
        if request.method == 'POST':
            try:
                data = json.loads(request.body or b'{}')
            except (json.JSONDecodeError, UnicodeDecodeError):
                data = None
            if not isinstance(data, dict):
                return JsonResponse({'error': 'Body must be a JSON object', 'code': 'InvalidReview'}, status=400)
            review = services.add_review(turf_id, data.get('name'), data.get('message', ''), data.get('rating'))
            return JsonResponse({'review': review.as_dict()}, status=201)

        rating = _int_param(request.GET.get('rating'))
        min_rating = _int_param(request.GET.get('min_rating'))
        if rating is None or min_rating is None:
            return JsonResponse({'error': 'Ratings must be whole numbers', 'code': 'InvalidReview'}, status=400)
        reviews = services.reviews_for_turf(
            turf_id, search=request.GET.get('search', ''), min_rating=min_rating, rating=rating,
        )
        summary = services.rating_summary(turf_id)
    except BookingEngineError as exc:
        return JsonResponse(exc.as_dict(), status=exc.status_code)

    return JsonResponse({
        'reviews': [r.as_dict() for r in reviews],
        'count': len(reviews),
        'summary': summary,
    })


@csrf_exempt
@require_POST
def api_delete_review(request, review_id):
    try:
        services.delete_review(review_id)
    except BookingEngineError as exc:
        return JsonResponse(exc.as_dict(), status=exc.status_code)
    return JsonResponse({'deleted': str(review_id)})
