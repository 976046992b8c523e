from django.db.models import Count
from django.utils import timezone

from clinic.choices import BedStatus
from clinic.exceptions import ValidationError
from clinic.models import Bed, Patient, Ward
from clinic.services.beds import ward_occupancy

REPORT_TYPES = ('occupancy',)


def format_ward(ward: Ward) -> dict:
    return {
        'name': ward.name,
        'totalBeds': ward.total_beds,
        'availableBeds': ward.available_beds,
        'occupiedBeds': ward.occupied_beds,
        'occupancyRate': ward.occupancy_rate,
        'updatedAt': ward.updated_at.isoformat() if ward.updated_at else None,
    }


def summary() -> dict:
    """Admin dashboard headline numbers.

    Ward figures are the stored snapshot written by ``refresh_ward_counts``;
    bed and patient figures are live.
    """
    beds = Bed.objects.all()
    patients = (
        Patient.objects.values('status').annotate(count=Count('id')).order_by('status')
    )
    return {
        'beds': {
            'total': beds.count(),
            'available': beds.filter(status=BedStatus.AVAILABLE).count(),
            'occupied': beds.filter(status=BedStatus.OCCUPIED).count(),
        },
        'wards': [format_ward(w) for w in Ward.objects.order_by('name')],
        'patients': [{'status': p['status'], 'count': p['count']} for p in patients],
    }


def generate_report(report_type: str = None) -> dict:
    report_type = report_type or 'occupancy'
    if report_type not in REPORT_TYPES:
        raise ValidationError(f"Unsupported report type '{report_type}'", field='type', allowed=list(REPORT_TYPES))
    return {
        'type': report_type,
        'generatedAt': timezone.now().isoformat(),
        'summary': ward_occupancy(),
    }
