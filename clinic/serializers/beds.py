from rest_framework import serializers

from clinic.choices import BedType
from clinic.models import Bed, Patient


class BedSerializer(serializers.ModelSerializer):
    bedNumber = serializers.CharField(source='bed_number')
    bedType = serializers.CharField(source='bed_type')
    occupiedBy = serializers.IntegerField(source='occupied_by_id', allow_null=True)
    dailyRate = serializers.DecimalField(source='daily_rate', max_digits=10, decimal_places=2, coerce_to_string=False)
    lastCleaned = serializers.DateTimeField(source='last_cleaned', allow_null=True)
    maintenanceNotes = serializers.CharField(source='maintenance_notes')
    isActive = serializers.BooleanField(source='is_active')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = Bed
        fields = [
            'id', 'bedNumber', 'ward', 'bedType', 'status', 'occupiedBy', 'capacity', 'features',
            'dailyRate', 'lastCleaned', 'maintenanceNotes', 'isActive', 'updatedAt',
        ]


class OccupantSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')

    class Meta:
        model = Patient
        fields = ['id', 'firstName', 'lastName', 'status', 'ward']


class BedDetailSerializer(BedSerializer):
    """Bed plus a short view of the patient lying in it."""
    occupant = OccupantSerializer(source='occupied_by', allow_null=True)

    class Meta(BedSerializer.Meta):
        fields = BedSerializer.Meta.fields + ['occupant']


class BedCreateSerializer(serializers.Serializer):
    bedNumber = serializers.CharField(max_length=32)
    ward = serializers.CharField(max_length=16)
    bedType = serializers.ChoiceField(choices=BedType.choices, required=False)
    capacity = serializers.IntegerField(min_value=1, required=False)
    features = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    dailyRate = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)

    def validate_bedNumber(self, v):
        v = (v or '').strip().upper()
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v

    def to_service_kwargs(self) -> dict:
        vd = self.validated_data
        mapping = {
            'bedNumber': 'bed_number', 'ward': 'ward', 'bedType': 'bed_type',
            'capacity': 'capacity', 'features': 'features', 'dailyRate': 'daily_rate',
        }
        return {snake: vd[camel] for camel, snake in mapping.items() if camel in vd}


class BedStatusSerializer(serializers.Serializer):
    # Membership is checked by the service so the role restriction can be reported too.
    status = serializers.CharField(max_length=16)
    maintenanceNotes = serializers.CharField(required=False, allow_blank=True)
