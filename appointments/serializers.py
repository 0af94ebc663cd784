from rest_framework import serializers

from .models import Appointment

# Request keys accepted by the general update endpoint, mapped to model fields
UPDATE_FIELD_MAP = {
    'date': 'date',
    'time': 'time',
    'reason': 'reason',
    'notes': 'notes',
    'status': 'status',
    'location': 'location',
    'diagnosis': 'diagnosis',
    'treatment': 'treatment',
    'medications': 'medications',
    'followUpDate': 'follow_up_date',
}


def to_model_changes(data):
    """
    Translate request keys to model field names.

    Unknown keys are passed through untouched so the service can reject them.
    """
    return {UPDATE_FIELD_MAP.get(key, key): value for key, value in data.items()}


class AppointmentSerializer(serializers.ModelSerializer):
    """Appointment as returned by the API (camelCase keys)."""
    farmerId = serializers.UUIDField(source='farmer_id', read_only=True)
    farmerName = serializers.CharField(source='farmer_name', read_only=True)
    farmerPhone = serializers.CharField(source='farmer_phone', read_only=True)
    vetId = serializers.UUIDField(source='vet_id', read_only=True)
    vetName = serializers.CharField(source='vet_name', read_only=True)
    vetSpecialty = serializers.CharField(source='vet_specialty', read_only=True)
    vetPhone = serializers.CharField(source='vet_phone', read_only=True)
    vetEmail = serializers.CharField(source='vet_email', read_only=True)
    livestockId = serializers.UUIDField(source='livestock_id', read_only=True, allow_null=True)
    livestockName = serializers.CharField(source='livestock_name', read_only=True)
    livestockType = serializers.CharField(source='livestock_type', read_only=True)
    followUpDate = serializers.DateField(source='follow_up_date', read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Appointment
        fields = (
            'id',
            'farmerId', 'farmerName', 'farmerPhone',
            'vetId', 'vetName', 'vetSpecialty', 'vetPhone', 'vetEmail',
            'livestockId', 'livestockName', 'livestockType',
            'date', 'time', 'reason', 'notes', 'status', 'location',
            'diagnosis', 'treatment', 'medications', 'followUpDate',
            'createdAt', 'updatedAt',
        )
        read_only_fields = fields


class AppointmentCreateSerializer(serializers.Serializer):
    """Booking request from a farmer."""
    livestockId = serializers.UUIDField()
    vetId = serializers.UUIDField()
    date = serializers.DateField()
    time = serializers.CharField(max_length=50)
    reason = serializers.ChoiceField(choices=Appointment.Reason.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True, default=None)


class AppointmentCompleteSerializer(serializers.Serializer):
    """Visit outcome recorded by the veterinarian."""
    diagnosis = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    treatment = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    medications = serializers.ListField(
        child=serializers.CharField(allow_blank=False),
        required=False,
        allow_null=True,
        default=list
    )
    followUpDate = serializers.DateField(required=False, allow_null=True, default=None)
