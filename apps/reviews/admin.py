from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('name', 'turf', 'rating', 'created_at')
    list_filter = ('rating', 'turf')
    search_fields = ('name', 'message', 'turf__name')
    list_select_related = ('turf',)
    readonly_fields = ('created_at', 'updated_at')
    ordering = ('-created_at',)
