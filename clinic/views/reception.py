"""
Front desk endpoints: admissions, the in-house patient list, discharge
and a ward occupancy glance for receptionists and general staff.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import IsFrontDeskRole
from clinic.serializers.base import check, validated
from clinic.serializers.patients import AdmitPatientSerializer, PatientSerializer
from clinic.serializers.staff import PatientListQuerySerializer
from clinic.services import beds, staff
from clinic.services.admissions import admit_patient
from clinic.services.discharge import discharge_patient

from .common import ok, paginate


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsFrontDeskRole])
def admit(request):
    s = check(AdmitPatientSerializer(data=request.data))
    patient = admit_patient(request.user, ward=s.validated_data['ward'], **s.to_service_kwargs())
    return ok(PatientSerializer(patient).data,
              message=f'{patient.full_name} admitted to bed {patient.assigned_bed.bed_number}',
              status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsFrontDeskRole])
def patient_list(request):
    q = validated(PatientListQuerySerializer, request.query_params)
    qs = staff.list_patients(include_discharged=False, status=q.get('status'), q=q.get('q'))
    items, total = paginate(qs, q.get('page'), q.get('pageSize'))
    return ok({'items': PatientSerializer(items, many=True).data, 'total': total})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsFrontDeskRole])
def discharge(request, patient_id: int):
    patient = discharge_patient(request.user, patient_id)
    return ok(PatientSerializer(patient).data, message=f'{patient.full_name} discharged')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsFrontDeskRole])
def bed_availability(request):
    return ok(beds.ward_occupancy())
