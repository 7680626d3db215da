from django.urls import path
from . import views

app_name = 'reviews'

urlpatterns = [
    path('api/turf/<uuid:turf_id>/', views.api_turf_reviews,  name='api_turf_reviews'),
    path('api/<uuid:review_id>/delete/', views.api_delete_review, name='api_delete_review'),
]
