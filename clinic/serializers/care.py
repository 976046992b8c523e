from rest_framework import serializers

from clinic.models import Assignment, CareNote, VisitLog

from .base import BriefUserSerializer
from .patients import PatientSerializer


class CareNoteSerializer(serializers.ModelSerializer):
    nurseId = serializers.IntegerField(source='nurse_id', allow_null=True)
    vitals = serializers.DictField(read_only=True)
    timestamp = serializers.DateTimeField(source='created_at')

    class Meta:
        model = CareNote
        fields = ['id', 'nurseId', 'note', 'vitals', 'timestamp']


class VisitLogSerializer(serializers.ModelSerializer):
    visitedBy = serializers.IntegerField(source='visited_by_id', allow_null=True)
    date = serializers.DateTimeField(source='created_at')

    class Meta:
        model = VisitLog
        fields = ['id', 'visitedBy', 'role', 'note', 'date']


class AssignmentSerializer(serializers.ModelSerializer):
    patientId = serializers.IntegerField(source='patient_id')
    doctor = BriefUserSerializer(allow_null=True)
    nurse = BriefUserSerializer(allow_null=True)
    assignedAt = serializers.DateTimeField(source='assigned_at')
    careNotes = CareNoteSerializer(source='care_notes', many=True)
    visitLogs = VisitLogSerializer(source='visit_logs', many=True)

    class Meta:
        model = Assignment
        fields = ['id', 'patientId', 'doctor', 'nurse', 'assignedAt', 'status', 'notes', 'careNotes', 'visitLogs']


class AssignedPatientSerializer(serializers.Serializer):
    """One row of a doctor's or nurse's patient list, built from the assignment."""
    assignmentId = serializers.IntegerField(source='id')
    patient = PatientSerializer()
    doctor = BriefUserSerializer(allow_null=True)
    nurse = BriefUserSerializer(allow_null=True)
    assignedAt = serializers.DateTimeField(source='assigned_at')
    notes = serializers.CharField()
    careNotes = CareNoteSerializer(source='care_notes', many=True)
    visitLogs = VisitLogSerializer(source='visit_logs', many=True)


class VitalsSerializer(serializers.Serializer):
    # Type checks only; any numeric value is accepted.
    temperature = serializers.FloatField(required=False, allow_null=True)
    bloodPressure = serializers.CharField(max_length=16, required=False, allow_blank=True, allow_null=True)
    heartRate = serializers.FloatField(required=False, allow_null=True)
    oxygenLevel = serializers.FloatField(required=False, allow_null=True)


class CareNoteCreateSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True)
    vitals = VitalsSerializer(required=False, allow_null=True)


class VisitSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True)


class DoctorNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(allow_blank=True)
