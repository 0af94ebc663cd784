from django.contrib import admin

from .models import Alert, AlertRecipient


class AlertRecipientInline(admin.TabularInline):
    model = AlertRecipient
    extra = 0
    can_delete = False
    fields = ('position', 'user', 'phone', 'status', 'error')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    """Read-only view of dispatched alerts."""
    list_display = ('created_at', 'alert_type', 'audience', 'sender', 'success_count', 'failure_count', 'status')
    list_filter = ('alert_type', 'status', 'created_at')
    search_fields = ('message', 'sender__email')
    inlines = [AlertRecipientInline]
    readonly_fields = (
        'id', 'message', 'sender', 'alert_type', 'audience', 'status',
        'success_count', 'failure_count', 'created_at'
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
