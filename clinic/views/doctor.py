"""
Doctor dashboard endpoints.

A doctor sees their own shifts and the patients on their active
assignments, records bedside visits and keeps assignment-level notes.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import IsDoctorRole
from clinic.serializers.base import validated
from clinic.serializers.care import AssignedPatientSerializer, AssignmentSerializer, DoctorNotesSerializer, VisitSerializer
from clinic.serializers.patients import PatientSerializer
from clinic.serializers.staff import DutySerializer, DutyStatusSerializer
from clinic.services import beds, care_log, duties, staff

from .common import ok


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def duty_list(request):
    return ok(DutySerializer(duties.list_duties(request.user), many=True).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def duty_status(request, duty_id: int):
    vd = validated(DutyStatusSerializer, request.data)
    return ok(DutySerializer(duties.update_duty_status(request.user, duty_id, vd['status'])).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def patient_list(request):
    return ok(AssignedPatientSerializer(staff.assigned_patients(request.user), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def patient_detail(request, patient_id: int):
    patient, assignment = staff.patient_detail(request.user, patient_id)
    return ok({
        'patient': PatientSerializer(patient).data,
        'assignment': AssignmentSerializer(assignment).data if assignment else None,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def mark_visited(request, patient_id: int):
    vd = validated(VisitSerializer, request.data)
    entry = care_log.mark_visited(request.user, patient_id, vd.get('note', ''))
    return ok(AssignmentSerializer(entry.assignment).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def assignment_notes(request, assignment_id: int):
    vd = validated(DoctorNotesSerializer, request.data)
    assignment = care_log.update_doctor_notes(request.user, assignment_id, vd['notes'])
    return ok(AssignmentSerializer(assignment).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def bed_availability(request):
    return ok(beds.ward_occupancy())
