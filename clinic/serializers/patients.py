import bleach
from rest_framework import serializers

from clinic.choices import BloodType, Gender
from clinic.models import Bed, Patient

from .base import BriefUserSerializer


def _clean(v):
    return bleach.clean((v or '').strip(), strip=True)


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=128, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    relation = serializers.CharField(max_length=64, required=False, allow_blank=True)


class AdmitPatientSerializer(serializers.Serializer):
    """Front desk admission form.  Field order is the order errors are reported in."""
    firstName = serializers.CharField(max_length=64)
    lastName = serializers.CharField(max_length=64)
    phone = serializers.CharField(max_length=32)
    gender = serializers.ChoiceField(choices=Gender.choices)
    bloodType = serializers.ChoiceField(choices=BloodType.choices)
    ward = serializers.CharField(max_length=16)
    email = serializers.EmailField(required=False, allow_blank=True)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    emergencyContact = EmergencyContactSerializer(required=False)
    medicalHistory = serializers.ListField(child=serializers.CharField(max_length=255), required=False)
    allergies = serializers.ListField(child=serializers.CharField(max_length=255), required=False)
    currentMedications = serializers.ListField(child=serializers.CharField(max_length=255), required=False)
    admissionReason = serializers.CharField(required=False, allow_blank=True)
    insuranceProvider = serializers.CharField(max_length=128, required=False, allow_blank=True)
    insurancePolicyNumber = serializers.CharField(max_length=64, required=False, allow_blank=True)

    def validate_firstName(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v

    def validate_lastName(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v

    def validate_address(self, v):
        return _clean(v)

    def validate_admissionReason(self, v):
        return _clean(v)

    def to_service_kwargs(self) -> dict:
        vd = self.validated_data
        mapping = {
            'firstName': 'first_name', 'lastName': 'last_name', 'phone': 'phone', 'gender': 'gender',
            'bloodType': 'blood_type', 'email': 'email', 'age': 'age', 'dateOfBirth': 'date_of_birth',
            'address': 'address', 'emergencyContact': 'emergency_contact', 'medicalHistory': 'medical_history',
            'allergies': 'allergies', 'currentMedications': 'current_medications',
            'admissionReason': 'admission_reason', 'insuranceProvider': 'insurance_provider',
            'insurancePolicyNumber': 'insurance_policy_number',
        }
        kwargs = {snake: vd[camel] for camel, snake in mapping.items() if camel in vd}
        if 'email' in kwargs:
            kwargs['email'] = (kwargs['email'] or '').lower()
        return kwargs


class BedRefSerializer(serializers.ModelSerializer):
    bedNumber = serializers.CharField(source='bed_number')

    class Meta:
        model = Bed
        fields = ['id', 'bedNumber', 'ward', 'status']


class PatientSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    fullName = serializers.CharField(source='full_name')
    dateOfBirth = serializers.DateField(source='date_of_birth')
    bloodType = serializers.CharField(source='blood_type')
    emergencyContact = serializers.JSONField(source='emergency_contact')
    medicalHistory = serializers.JSONField(source='medical_history')
    currentMedications = serializers.JSONField(source='current_medications')
    admissionDate = serializers.DateTimeField(source='admission_date')
    dischargeDate = serializers.DateTimeField(source='discharge_date')
    admissionReason = serializers.CharField(source='admission_reason')
    assignedBed = BedRefSerializer(source='assigned_bed', allow_null=True)
    doctor = BriefUserSerializer(allow_null=True)
    insuranceProvider = serializers.CharField(source='insurance_provider')
    insurancePolicyNumber = serializers.CharField(source='insurance_policy_number')

    class Meta:
        model = Patient
        fields = [
            'id', 'firstName', 'lastName', 'fullName', 'email', 'phone', 'age', 'dateOfBirth',
            'gender', 'bloodType', 'address', 'emergencyContact', 'medicalHistory', 'allergies',
            'currentMedications', 'ward', 'status', 'admissionDate', 'dischargeDate',
            'admissionReason', 'assignedBed', 'doctor', 'insuranceProvider', 'insurancePolicyNumber',
        ]
