from django.contrib import admin

from .models import Livestock


@admin.register(Livestock)
class LivestockAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'farmer', 'health_status', 'tag_number', 'last_checkup')
    list_filter = ('type', 'health_status')
    search_fields = ('name', 'tag_number', 'farmer__email', 'farmer__first_name', 'farmer__last_name')
    raw_id_fields = ('farmer',)
    ordering = ('-created_at',)
