from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('livestock_name', 'farmer_name', 'vet_name', 'date', 'time', 'reason', 'status')
    list_filter = ('status', 'reason', 'date')
    search_fields = ('farmer_name', 'vet_name', 'livestock_name', 'farmer__email', 'vet__email')
    raw_id_fields = ('farmer', 'vet', 'livestock')
    date_hierarchy = 'date'
    readonly_fields = (
        'farmer_name', 'farmer_phone', 'vet_name', 'vet_specialty', 'vet_phone',
        'vet_email', 'livestock_name', 'livestock_type', 'created_at', 'updated_at'
    )
