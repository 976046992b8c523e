"""
Nurse dashboard endpoints.

Nurses add care notes with vitals to their active assignments, record
visits and turn beds around after cleaning.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import IsNurseRole
from clinic.serializers.base import validated
from clinic.serializers.beds import BedSerializer, BedStatusSerializer
from clinic.serializers.care import AssignedPatientSerializer, AssignmentSerializer, CareNoteCreateSerializer, VisitSerializer
from clinic.serializers.patients import PatientSerializer
from clinic.serializers.staff import DutySerializer, DutyStatusSerializer
from clinic.services import beds, care_log, duties, staff

from .common import ok


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsNurseRole])
def duty_list(request):
    return ok(DutySerializer(duties.list_duties(request.user), many=True).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsNurseRole])
def duty_status(request, duty_id: int):
    vd = validated(DutyStatusSerializer, request.data)
    return ok(DutySerializer(duties.update_duty_status(request.user, duty_id, vd['status'])).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsNurseRole])
def patient_list(request):
    return ok(AssignedPatientSerializer(staff.assigned_patients(request.user), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsNurseRole])
def patient_detail(request, patient_id: int):
    patient, assignment = staff.patient_detail(request.user, patient_id)
    return ok({
        'patient': PatientSerializer(patient).data,
        'assignment': AssignmentSerializer(assignment).data if assignment else None,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsNurseRole])
def add_care_note(request, assignment_id: int):
    vd = validated(CareNoteCreateSerializer, request.data)
    entry = care_log.add_care_note(request.user, assignment_id, vd.get('note', ''), vd.get('vitals'))
    return ok(AssignmentSerializer(entry.assignment).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsNurseRole])
def mark_visited(request, patient_id: int):
    vd = validated(VisitSerializer, request.data)
    entry = care_log.mark_visited(request.user, patient_id, vd.get('note', ''))
    return ok(AssignmentSerializer(entry.assignment).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsNurseRole])
def bed_status(request, bed_id: int):
    vd = validated(BedStatusSerializer, request.data)
    bed = beds.set_bed_status(request.user, bed_id, vd['status'], maintenance_notes=vd.get('maintenanceNotes'))
    return ok(BedSerializer(bed).data)
