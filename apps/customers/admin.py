from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'mobile', 'area', 'email', 'created_at']
    search_fields = ['name', 'mobile', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']
