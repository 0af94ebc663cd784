from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .profiles import MissingRoleFields, build_profile

User = get_user_model()

ROLE_FIELD_LABELS = {
    'district': 'district',
    'sector': 'sector',
    'specialty': 'specialty',
    'license_number': 'licenseNumber',
    'location': 'location',
}


def split_name(name):
    """Split a display name into (first_name, last_name)."""
    parts = name.strip().split(' ', 1)
    return parts[0], parts[1].strip() if len(parts) > 1 else ''


def check_role_fields(role, values):
    """Raise a DRF ValidationError naming each missing role field."""
    try:
        build_profile(role, **values)
    except MissingRoleFields as e:
        raise serializers.ValidationError({
            ROLE_FIELD_LABELS.get(field, field): f'This field is required for role {role}.'
            for field in e.fields
        })


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for user details.
    Used for retrieving and updating the caller's own profile.
    """
    name = serializers.CharField(source='get_full_name', read_only=True)
    licenseNumber = serializers.CharField(
        source='license_number', required=False, allow_blank=True
    )
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)
    firstName = serializers.CharField(source='first_name', required=False)
    lastName = serializers.CharField(source='last_name', required=False, allow_blank=True)

    class Meta:
        model = User
        fields = (
            'id', 'name', 'firstName', 'lastName', 'email', 'phone', 'role',
            'district', 'sector', 'specialty', 'licenseNumber', 'location',
            'rating', 'isActive', 'createdAt'
        )
        read_only_fields = ('id', 'email', 'role', 'rating')

    def validate(self, attrs):
        if self.instance is not None:
            values = {
                field: attrs.get(field, getattr(self.instance, field))
                for field in ('district', 'sector', 'specialty', 'license_number', 'location')
            }
            check_role_fields(self.instance.role, values)
        return attrs


class VeterinarianSerializer(serializers.ModelSerializer):
    """Public directory entry for a veterinarian."""
    name = serializers.CharField(source='get_full_name', read_only=True)
    licenseNumber = serializers.CharField(source='license_number', read_only=True)

    class Meta:
        model = User
        fields = (
            'id', 'name', 'email', 'phone', 'specialty', 'licenseNumber',
            'location', 'rating'
        )
        read_only_fields = fields


class FarmerSerializer(serializers.ModelSerializer):
    """Farmer row for admin audience building."""
    name = serializers.CharField(source='get_full_name', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'phone', 'district', 'sector', 'createdAt')
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """
    Serializer for self-service registration.

    Farmers and veterinarians can register; admin accounts are created with
    the ``create_admin`` management command.
    """
    REGISTRABLE_ROLES = (User.UserRole.FARMER, User.UserRole.VETERINARIAN)

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=REGISTRABLE_ROLES, default=User.UserRole.FARMER)
    district = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    sector = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    specialty = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    licenseNumber = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('User already exists with this email')
        return value

    def validate(self, attrs):
        role = attrs['role']
        check_role_fields(role, {
            'district': attrs['district'],
            'sector': attrs['sector'],
            'specialty': attrs['specialty'],
            'license_number': attrs['licenseNumber'],
            'location': attrs['location'],
        })
        return attrs

    def create(self, validated_data):
        """Create a new user with only the fields its role uses."""
        first_name, last_name = split_name(validated_data['name'])
        role = validated_data['role']

        extra = {}
        if role == User.UserRole.FARMER:
            extra.update(
                district=validated_data['district'],
                sector=validated_data['sector'],
                location=validated_data['location'],
            )
        else:
            extra.update(
                specialty=validated_data['specialty'],
                license_number=validated_data['licenseNumber'],
                location=validated_data['location'],
            )

        return User.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            first_name=first_name,
            last_name=last_name,
            phone=validated_data['phone'],
            role=role,
            **extra
        )


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    JWT token serializer (email + password) that includes the user record.
    """
    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserSerializer(self.user).data
        return data


class ChangePasswordSerializer(serializers.Serializer):
    """Body of POST /api/auth/change-password/."""
    currentPassword = serializers.CharField(write_only=True)
    newPassword = serializers.CharField(write_only=True)

    def validate_currentPassword(self, value):
        if not self.context['request'].user.check_password(value):
            raise serializers.ValidationError('Current password is incorrect.')
        return value

    def validate(self, attrs):
        try:
            validate_password(attrs['newPassword'], user=self.context['request'].user)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'newPassword': list(e.messages)})
        return attrs
