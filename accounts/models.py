from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.exceptions import ValidationError
from django.db import models
import uuid

from .profiles import MissingRoleFields, profile_for_user


class UserManager(BaseUserManager):
    """
    Manager for the email-based User model.

    Every user passes through the role profile check before it is saved, so a
    farmer without a district/sector or a veterinarian without a license
    number never reaches the database.
    """

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email address must be set')

        email = self.normalize_email(email)
        extra_fields.setdefault('username', email)

        user = self.model(email=email, **extra_fields)
        profile_for_user(user)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        extra_fields.setdefault('role', User.UserRole.FARMER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self._create_user(email, password, **extra_fields)

    def active(self):
        return self.filter(is_active=True)


class User(AbstractUser):
    """
    Custom User model extending Django's AbstractUser.

    Users log in with their email address. Role-specific fields live on the
    same table and are validated through ``accounts.profiles``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class UserRole(models.TextChoices):
        FARMER = 'farmer', 'Farmer'
        VETERINARIAN = 'veterinarian', 'Veterinarian'
        ADMIN = 'admin', 'Administrator'

    email = models.EmailField(unique=True)

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.FARMER,
        db_index=True,
        help_text="User's role in the system"
    )

    # Free-form; normalized to international format only when an SMS is sent
    phone = models.CharField(
        max_length=20,
        blank=True,
        default='',
        help_text="Phone number (e.g. 0788123456 or +250788123456)"
    )

    # Farmer location
    district = models.CharField(max_length=100, blank=True, default='', db_index=True)
    sector = models.CharField(max_length=100, blank=True, default='', db_index=True)

    # Veterinarian details
    specialty = models.CharField(max_length=100, blank=True, default='')
    license_number = models.CharField(max_length=50, blank=True, default='')
    location = models.CharField(max_length=200, blank=True, default='')
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Average rating (0-5)"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-date_joined']
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_active_idx'),
        ]

    def __str__(self):
        return f"{self.get_full_name()} ({self.get_role_display()})"

    def get_full_name(self):
        """Return the user's full name, falling back to the email."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    @property
    def name(self):
        return self.get_full_name()

    @property
    def profile(self):
        """The role profile; raises MissingRoleFields if role fields are blank."""
        return profile_for_user(self)

    @property
    def is_farmer(self):
        return self.role == self.UserRole.FARMER

    @property
    def is_veterinarian(self):
        return self.role == self.UserRole.VETERINARIAN

    @property
    def is_admin_user(self):
        return self.role == self.UserRole.ADMIN

    def validate_role_fields(self):
        """Raise a Django ValidationError keyed by each missing role field."""
        try:
            self.profile
        except MissingRoleFields as e:
            raise ValidationError({
                field: f'This field is required for {self.get_role_display().lower()}s.'
                for field in e.fields
            })

    def clean(self):
        super().clean()
        self.validate_role_fields()
