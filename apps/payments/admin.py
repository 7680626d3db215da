from django.contrib import admin
from .models import PaymentEvent


@admin.register(PaymentEvent)
class PaymentEventAdmin(admin.ModelAdmin):
    list_display = ['booking', 'from_status', 'to_status', 'amount', 'method', 'created_at']
    list_filter = ['to_status', 'method']
    search_fields = ['booking__customer__name', 'booking__customer__mobile']
    readonly_fields = ['booking', 'from_status', 'to_status', 'amount', 'method', 'reason', 'created_at']
