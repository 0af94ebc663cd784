"""
Role-based permissions for VetConnect API views.
"""
from rest_framework import permissions


class HasRole(permissions.BasePermission):
    """Allow authenticated users whose role is in ``allowed_roles``."""

    allowed_roles = ()
    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role in self.allowed_roles
        )


class IsAdmin(HasRole):
    """Permission for administrators (alerts, stats, user listings)."""
    allowed_roles = ('admin',)
    message = 'Admin access required.'


class IsFarmer(HasRole):
    """Permission for farmer-only views (dashboard)."""
    allowed_roles = ('farmer',)
    message = 'Only farmers can access this endpoint'
