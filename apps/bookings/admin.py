from django.contrib import admin
from apps.payments.models import PaymentEvent
from .models import Booking, BookedSlot


class BookedSlotInline(admin.TabularInline):
    model = BookedSlot
    extra = 0
    fields = ['start_time']
    readonly_fields = ['start_time']
    can_delete = False


class PaymentEventInline(admin.TabularInline):
    model = PaymentEvent
    extra = 0
    readonly_fields = ['from_status', 'to_status', 'amount', 'method', 'reason', 'created_at']
    can_delete = False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Read-only: bookings change only through the engine and tracker."""
    list_display = [
        'short_id', 'booking_date', 'customer', 'turf', 'court', 'slots_display',
        'game', 'team_size', 'payment_status', 'amount_paid',
    ]
    list_filter = ['turf', 'payment_status', 'booking_date']
    search_fields = ['customer__name', 'customer__mobile', 'request_key']
    date_hierarchy = 'booking_date'
    inlines = [BookedSlotInline, PaymentEventInline]
    readonly_fields = [
        'id', 'turf', 'court', 'booking_date', 'customer', 'game', 'team_size',
        'payment_status', 'amount_paid', 'payment_method', 'request_key',
        'created_at', 'updated_at',
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def short_id(self, obj):
        return obj.id_short
    short_id.short_description = 'ID'

    def slots_display(self, obj):
        return ', '.join(obj.slot_labels)
    slots_display.short_description = 'Slots'
