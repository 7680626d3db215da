"""
Booking API URLs.

  /bookings/api/free-slots/          GET  free slots for a turf+court+date
  /bookings/api/reserve/             POST commit a reservation
  /bookings/api/<uuid>/cancel/       POST release a booking's slots
"""
from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    path('api/free-slots/',             views.api_free_slots, name='api_free_slots'),
    path('api/reserve/',                views.api_reserve,    name='api_reserve'),
    path('api/<uuid:booking_id>/cancel/', views.api_cancel,   name='api_cancel'),
]
