from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth import get_user_model
from django.contrib import admin

User = get_user_model()


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for the custom User model."""

    list_display = (
        'email', 'get_full_name', 'phone', 'role', 'district', 'sector',
        'specialty', 'is_active', 'date_joined'
    )
    list_filter = ('role', 'is_active', 'is_staff', 'district', 'date_joined')
    search_fields = ('email', 'phone', 'first_name', 'last_name', 'license_number')
    ordering = ('-date_joined',)

    fieldsets = (
        (None, {'fields': ('email', 'username', 'password')}),
        ('Personal Info', {
            'fields': ('first_name', 'last_name', 'phone')
        }),
        ('Role', {
            'fields': ('role',)
        }),
        ('Farmer Location', {
            'fields': ('district', 'sector')
        }),
        ('Veterinarian Details', {
            'fields': ('specialty', 'license_number', 'location', 'rating')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')
        }),
        ('Important Dates', {
            'fields': ('last_login', 'date_joined')
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': (
                'email', 'username', 'phone', 'password1', 'password2',
                'first_name', 'last_name', 'role', 'district', 'sector',
                'specialty', 'license_number', 'location'
            ),
        }),
    )
