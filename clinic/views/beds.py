"""
Bed board endpoints.

Listing and availability are public so the lobby display can poll
them; the detailed list (with occupants) needs a login and direct status
changes need one of the bed staff roles.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from clinic.permissions import IsBedStaff
from clinic.serializers.base import validated
from clinic.serializers.beds import BedDetailSerializer, BedSerializer, BedStatusSerializer
from clinic.services import beds

from .common import ok


@api_view(['GET'])
@permission_classes([AllowAny])
def bed_list(request):
    return ok(BedSerializer(beds.list_beds(), many=True).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def beds_by_ward(request, ward: str):
    return ok(BedSerializer(beds.list_beds(ward=ward), many=True).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def availability_summary(request):
    return ok(beds.availability_summary())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def bed_details(request):
    return ok(BedDetailSerializer(beds.list_beds(detailed=True), many=True).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsBedStaff])
def bed_status(request, bed_id: int):
    vd = validated(BedStatusSerializer, request.data)
    bed = beds.set_bed_status(request.user, bed_id, vd['status'], maintenance_notes=vd.get('maintenanceNotes'))
    return ok(BedSerializer(bed).data)
