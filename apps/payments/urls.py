from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    path('api/<uuid:booking_id>/status/', views.api_payment_status, name='api_status'),
]
