from rest_framework import serializers

from clinic.choices import Role
from clinic.models import Duty, User


class UserSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='display_name')
    employeeId = serializers.CharField(source='employee_id', allow_null=True)
    isActive = serializers.BooleanField(source='is_active')
    createdAt = serializers.DateTimeField(source='date_joined')

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'phone', 'specialization', 'department',
                  'employeeId', 'isActive', 'createdAt']


class UserCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=Role.choices)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    specialization = serializers.CharField(max_length=128, required=False, allow_blank=True)
    department = serializers.CharField(max_length=128, required=False, allow_blank=True)
    employeeId = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)


class UserStatusSerializer(serializers.Serializer):
    isActive = serializers.BooleanField()


class UserListQuerySerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices, required=False)


class DutySerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id')
    shiftDate = serializers.DateField(source='shift_date')
    shiftStart = serializers.CharField(source='shift_start')
    shiftEnd = serializers.CharField(source='shift_end')
    isActive = serializers.BooleanField(source='is_active')

    class Meta:
        model = Duty
        fields = ['id', 'userId', 'ward', 'shiftDate', 'shiftStart', 'shiftEnd', 'status', 'notes', 'isActive']


class DutyStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=16)


class ReportRequestSerializer(serializers.Serializer):
    type = serializers.CharField(max_length=32, required=False, allow_blank=True)


class PatientListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(max_length=16, required=False)
    q = serializers.CharField(max_length=64, required=False)
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False)
