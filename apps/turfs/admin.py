from django.contrib import admin
from .models import Court, Game, Turf


class CourtInline(admin.TabularInline):
    model = Court
    extra = 0
    fields = ['name', 'position']


@admin.register(Turf)
class TurfAdmin(admin.ModelAdmin):
    list_display = ['name', 'area', 'opening_time', 'closing_time', 'slot_minutes', 'is_active']
    list_filter = ['is_active', 'area', 'games']
    search_fields = ['name', 'area', 'address']
    list_editable = ['is_active']
    filter_horizontal = ['games']
    readonly_fields = ['id', 'created_at', 'updated_at', 'retired_at']
    inlines = [CourtInline]
    fieldsets = (
        ('Turf', {'fields': ('id', 'name', 'address', 'area', 'games')}),
        ('Operating Hours', {'fields': ('opening_time', 'closing_time', 'slot_minutes')}),
        ('Status', {'fields': ('is_active', 'platform_fee_percent')}),
        ('Audit', {'fields': ('created_at', 'updated_at', 'retired_at'), 'classes': ('collapse',)}),
    )


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = ['name']
    search_fields = ['name']
