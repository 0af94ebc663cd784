"""
Role checks shared by the resource policies.

A policy answers two kinds of question about a resource: which rows a user
may see (``scope``) and which actions they may take on one row (``can_*``).
"""


class BasePolicy:

    @staticmethod
    def is_authenticated(user):
        return bool(user and user.is_authenticated)

    @classmethod
    def has_role(cls, user, role):
        return cls.is_authenticated(user) and getattr(user, 'role', None) == role

    @classmethod
    def is_farmer(cls, user):
        return cls.has_role(user, 'farmer')

    @classmethod
    def is_veterinarian(cls, user):
        return cls.has_role(user, 'veterinarian')

    @classmethod
    def is_admin(cls, user):
        return cls.has_role(user, 'admin')

    @classmethod
    def scope(cls, user, queryset):
        """
        Narrow ``queryset`` to the rows ``user`` may read.

        Returns None when the user's role has no access to the resource at
        all, so callers can tell "nothing visible" from "not allowed".
        """
        raise NotImplementedError(f"{cls.__name__} must implement scope()")

    @classmethod
    def can_view(cls, user, resource):
        raise NotImplementedError(f"{cls.__name__} must implement can_view()")

    @classmethod
    def can_create(cls, user, resource_class=None):
        raise NotImplementedError(f"{cls.__name__} must implement can_create()")

    @classmethod
    def can_edit(cls, user, resource):
        raise NotImplementedError(f"{cls.__name__} must implement can_edit()")

    @classmethod
    def can_delete(cls, user, resource):
        raise NotImplementedError(f"{cls.__name__} must implement can_delete()")

    @classmethod
    def editable_fields(cls, user, resource):
        """Model field names ``user`` may change on ``resource``."""
        return []
