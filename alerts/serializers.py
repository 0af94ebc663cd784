from rest_framework import serializers

from .audience import AudienceSelector
from .models import Alert


class BroadcastRequestSerializer(serializers.Serializer):
    """
    Body of POST /api/admin/broadcast/.

    targetType picks the audience: all farmers, one farmer
    (selectedFarmerId), a district (selectedDistrict) or a sector
    (selectedSector).
    """
    TARGET_TYPES = ('all', 'individual', 'district', 'sector')

    message = serializers.CharField(allow_blank=True, trim_whitespace=False)
    targetType = serializers.ChoiceField(choices=TARGET_TYPES, default='all')
    selectedFarmerId = serializers.UUIDField(required=False, allow_null=True)
    selectedDistrict = serializers.CharField(required=False, allow_blank=True, default='')
    selectedSector = serializers.CharField(required=False, allow_blank=True, default='')

    def get_audience(self):
        data = self.validated_data
        target = data['targetType']
        if target == 'individual':
            return AudienceSelector.farmer(data.get('selectedFarmerId'))
        if target == 'district':
            return AudienceSelector.district(data['selectedDistrict'])
        if target == 'sector':
            return AudienceSelector.sector(data['selectedSector'])
        return AudienceSelector.all()


class BroadcastAllRequestSerializer(serializers.Serializer):
    """Body of POST /api/admin/send-broadcast-alert/."""
    message = serializers.CharField(allow_blank=True, trim_whitespace=False)

    def get_audience(self):
        return AudienceSelector.all()


class IndividualAlertRequestSerializer(serializers.Serializer):
    """Body of POST /api/admin/send-individual-alert/."""
    message = serializers.CharField(allow_blank=True, trim_whitespace=False)
    farmerIds = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=True,
        required=False,
        default=list
    )

    def get_audience(self):
        return AudienceSelector.farmers(self.validated_data['farmerIds'])


class AlertSenderSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(source='get_full_name', read_only=True)
    email = serializers.EmailField(read_only=True)


class AlertSummarySerializer(serializers.ModelSerializer):
    """Compact alert row for dashboards."""
    alertType = serializers.CharField(source='alert_type', read_only=True)
    successCount = serializers.IntegerField(source='success_count', read_only=True)
    failureCount = serializers.IntegerField(source='failure_count', read_only=True)
    senderName = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Alert
        fields = (
            'id', 'message', 'alertType', 'status', 'successCount',
            'failureCount', 'senderName', 'createdAt'
        )
        read_only_fields = fields

    def get_senderName(self, obj):
        return obj.sender.get_full_name() if obj.sender else None


class AlertSerializer(AlertSummarySerializer):
    """Alert history entry with delivery detail."""
    sender = AlertSenderSerializer(read_only=True, allow_null=True)
    audience = serializers.CharField(read_only=True)
    recipientCount = serializers.SerializerMethodField()
    failedRecipients = serializers.ListField(source='failed_recipients', read_only=True)

    class Meta(AlertSummarySerializer.Meta):
        fields = AlertSummarySerializer.Meta.fields + (
            'sender', 'audience', 'recipientCount', 'failedRecipients'
        )
        read_only_fields = fields

    def get_recipientCount(self, obj):
        count = getattr(obj, 'recipient_count', None)
        if count is None:
            count = obj.deliveries.count()
        return count
