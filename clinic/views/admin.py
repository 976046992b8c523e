"""
Administrator dashboard endpoints.

Administrators manage staff accounts and beds, assign care teams,
discharge patients and pull occupancy reports.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import IsAdminRole
from clinic.serializers.base import check, validated
from clinic.serializers.beds import BedCreateSerializer, BedSerializer, BedStatusSerializer
from clinic.serializers.care import AssignmentSerializer
from clinic.serializers.patients import PatientSerializer
from clinic.serializers.staff import (
    PatientListQuerySerializer,
    ReportRequestSerializer,
    UserCreateSerializer,
    UserListQuerySerializer,
    UserSerializer,
    UserStatusSerializer,
)
from clinic.services import beds, reports, staff
from clinic.services.care_team import assign_care_team
from clinic.services.discharge import discharge_patient

from .common import ok, paginate


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users(request):
    if request.method == 'GET':
        q = validated(UserListQuerySerializer, request.query_params)
        return ok(UserSerializer(staff.list_users(role=q.get('role')), many=True).data)

    vd = validated(UserCreateSerializer, request.data)
    user = staff.create_user(
        request.user,
        name=vd['name'], email=vd['email'], password=vd['password'], role=vd['role'],
        phone=vd.get('phone', ''), specialization=vd.get('specialization', ''),
        department=vd.get('department', ''), employee_id=vd.get('employeeId'),
    )
    return ok(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_status(request, user_id: int):
    vd = validated(UserStatusSerializer, request.data)
    user = staff.set_user_active(request.user, user_id, vd['isActive'])
    return ok(UserSerializer(user).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def patients(request):
    q = validated(PatientListQuerySerializer, request.query_params)
    qs = staff.list_patients(status=q.get('status'), q=q.get('q'))
    items, total = paginate(qs, q.get('page'), q.get('pageSize'))
    return ok({'items': PatientSerializer(items, many=True).data, 'total': total})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def assign_patient(request):
    d = request.data
    assignment, message = assign_care_team(
        request.user,
        patient_id=d.get('patientId'),
        doctor_id=d.get('doctorId'),
        nurse_id=d.get('nurseId'),
        ward=d.get('ward'),
        shift_date=d.get('shiftDate'),
        shift_start=d.get('shiftStart'),
        shift_end=d.get('shiftEnd'),
        notes=d.get('notes'),
    )
    return ok(AssignmentSerializer(assignment).data, message=message)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def discharge(request, patient_id: int):
    patient = discharge_patient(request.user, patient_id)
    return ok(PatientSerializer(patient).data, message=f'{patient.full_name} discharged')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def bed_list(request):
    if request.method == 'GET':
        return ok(BedSerializer(beds.list_beds(active_only=False), many=True).data)

    s = check(BedCreateSerializer(data=request.data))
    bed = beds.create_bed(request.user, **s.to_service_kwargs())
    return ok(BedSerializer(bed).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def bed_status(request, bed_id: int):
    vd = validated(BedStatusSerializer, request.data)
    bed = beds.set_bed_status(request.user, bed_id, vd['status'], maintenance_notes=vd.get('maintenanceNotes'))
    return ok(BedSerializer(bed).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def report_summary(request):
    return ok(reports.summary())


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def report_generate(request):
    vd = validated(ReportRequestSerializer, request.data)
    return ok(reports.generate_report(vd.get('type')))
