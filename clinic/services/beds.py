"""
Bed allocation, direct status changes and availability aggregates.

Claiming a bed is a single conditional UPDATE: the status only flips to
Occupied if the row is still Available at write time, so two concurrent
admissions can never end up sharing a bed.
"""
import logging
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from clinic.choices import BedStatus, Role, Ward
from clinic.exceptions import BedNotFound, InvalidState, NoBedAvailable, ValidationError
from clinic.models import Bed, Patient, Ward as WardRecord
from clinic.services import notifications
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)

# Each candidate lost to a concurrent claim costs one extra UPDATE; stop
# after this many and report the ward as full.
MAX_CLAIM_ATTEMPTS = 10


def validate_ward(ward) -> str:
    if not ward:
        raise ValidationError('ward is required', field='ward')
    if ward not in Ward.values:
        raise ValidationError(
            f"Invalid ward '{ward}'. Expected one of: {', '.join(Ward.values)}", field='ward'
        )
    return ward


def available_beds(ward: str):
    return Bed.objects.filter(ward=ward, status=BedStatus.AVAILABLE, is_active=True).order_by('bed_number')


def find_available_bed(ward: str) -> Bed:
    """Return the lowest-numbered Available bed in ``ward``.

    Read only: the bed is not reserved.  Use :func:`claim_bed` to take it.
    """
    validate_ward(ward)
    bed = available_beds(ward).first()
    if bed is None:
        raise NoBedAvailable(ward)
    return bed


def claim_bed(ward: str, patient: Patient) -> Bed:
    """Atomically take one Available bed in ``ward`` for ``patient``.

    Candidates are tried lowest bed number first; a candidate counts as
    claimed only if the conditional update touched exactly one row.
    """
    validate_ward(ward)
    candidate_ids = list(available_beds(ward).values_list('id', flat=True)[:MAX_CLAIM_ATTEMPTS])
    now = timezone.now()
    for bed_id in candidate_ids:
        updated = Bed.objects.filter(
            pk=bed_id, status=BedStatus.AVAILABLE, is_active=True
        ).update(status=BedStatus.OCCUPIED, occupied_by=patient, updated_at=now)
        if updated == 1:
            return Bed.objects.get(pk=bed_id)
        logger.info('bed %s was claimed concurrently, trying next candidate', bed_id)
    raise NoBedAvailable(ward)


def get_bed(bed_id, *, active_only: bool = True) -> Bed:
    qs = Bed.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    bed = qs.select_related('occupied_by').filter(pk=bed_id).first()
    if bed is None:
        raise BedNotFound(bed_id)
    return bed


def allowed_statuses_for(user) -> tuple:
    if getattr(user, 'role', None) == Role.NURSE:
        return tuple(settings.NURSE_BED_STATUSES)
    return tuple(BedStatus.values)


@transaction.atomic
def set_bed_status(actor, bed_id, new_status: str, *, maintenance_notes: Optional[str] = None) -> Bed:
    """Set a bed's status directly from a staff dashboard.

    Occupancy follows status: leaving Occupied clears ``occupied_by`` and
    detaches the bed from the patient who held it, and a bed with no
    patient cannot be set Occupied.  Moving to Available stamps
    ``last_cleaned``.
    """
    if not new_status:
        raise ValidationError('status is required', field='status')
    if new_status not in BedStatus.values:
        raise ValidationError('Invalid bed status', field='status', allowed=list(BedStatus.values))
    allowed = allowed_statuses_for(actor)
    if new_status not in allowed:
        raise ValidationError(
            f"Role '{actor.role}' may only set bed status to: {', '.join(allowed)}",
            field='status', allowed=list(allowed),
        )

    bed = Bed.objects.select_for_update().filter(pk=bed_id, is_active=True).first()
    if bed is None:
        raise BedNotFound(bed_id)
    if new_status == BedStatus.OCCUPIED and bed.occupied_by_id is None:
        # Only an admission can occupy a bed.
        raise InvalidState(
            f"Bed {bed.bed_number} has no patient; admit a patient to occupy it",
            bed_id=bed.id, status=bed.status,
        )

    previous = bed.status
    released_patient_id = None
    if new_status != BedStatus.OCCUPIED and bed.occupied_by_id:
        released_patient_id = bed.occupied_by_id
        Patient.objects.filter(pk=released_patient_id, assigned_bed=bed).update(assigned_bed=None)
        bed.occupied_by = None
    bed.status = new_status
    if new_status == BedStatus.AVAILABLE:
        bed.last_cleaned = timezone.now()
    if maintenance_notes is not None:
        bed.maintenance_notes = maintenance_notes
    bed.save()

    log_action(user=actor, action='bed_status', object_type='bed', object_id=bed.id,
               detail={'from': previous, 'to': new_status, 'releasedPatient': released_patient_id})
    logger.info('bed %s status %s -> %s by user %s', bed.bed_number, previous, new_status, getattr(actor, 'id', None))
    notifications.publish(notifications.BED_STATUS_CHANGED, {**notifications.bed_payload(bed), 'previousStatus': previous})
    return bed


def create_bed(actor, **fields) -> Bed:
    validate_ward(fields.get('ward'))
    if not fields.get('bed_number'):
        raise ValidationError('bedNumber is required', field='bedNumber')
    if Bed.objects.filter(bed_number=fields['bed_number']).exists():
        raise ValidationError(f"Bed {fields['bed_number']} already exists", field='bedNumber')
    with transaction.atomic():
        bed = Bed.objects.create(**fields)
        log_action(user=actor, action='bed_create', object_type='bed', object_id=bed.id,
                   detail={'bedNumber': bed.bed_number, 'ward': bed.ward})
    notifications.publish(notifications.BED_STATUS_CHANGED, notifications.bed_payload(bed))
    return bed


def list_beds(*, ward: Optional[str] = None, active_only: bool = True, detailed: bool = False):
    qs = Bed.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    if ward:
        qs = qs.filter(ward=validate_ward(ward))
    if detailed:
        qs = qs.select_related('occupied_by')
    return qs.order_by('bed_number')


def _status_counts():
    return dict(
        total=Count('id'),
        available=Count('id', filter=Q(status=BedStatus.AVAILABLE)),
        occupied=Count('id', filter=Q(status=BedStatus.OCCUPIED)),
        maintenance=Count('id', filter=Q(status=BedStatus.MAINTENANCE)),
        cleaning=Count('id', filter=Q(status=BedStatus.CLEANING)),
    )


def availability_summary() -> dict:
    """Per-ward and hospital-wide bed counts for the public board."""
    rows = (
        Bed.objects.filter(is_active=True)
        .values('ward')
        .annotate(**_status_counts())
        .order_by('ward')
    )
    wards = [dict(row) for row in rows]
    totals = {'totalBeds': 0, 'availableBeds': 0, 'occupiedBeds': 0, 'maintenanceBeds': 0, 'cleaningBeds': 0}
    for w in wards:
        totals['totalBeds'] += w['total']
        totals['availableBeds'] += w['available']
        totals['occupiedBeds'] += w['occupied']
        totals['maintenanceBeds'] += w['maintenance']
        totals['cleaningBeds'] += w['cleaning']
    return {'wards': wards, 'totals': totals}


def ward_occupancy() -> list[dict]:
    """Ward, total, available and occupied (= anything not Available)."""
    rows = (
        Bed.objects.values('ward')
        .annotate(total=Count('id'), available=Count('id', filter=Q(status=BedStatus.AVAILABLE)))
        .order_by('ward')
    )
    return [
        {'ward': r['ward'], 'total': r['total'], 'available': r['available'], 'occupied': r['total'] - r['available']}
        for r in rows
    ]


def refresh_ward_records() -> list[WardRecord]:
    """Rewrite the denormalized counters on every Ward row from Bed rows."""
    counts = {row['ward']: row for row in availability_summary()['wards']}
    refreshed = []
    for name in Ward.values:
        c = counts.get(name, {})
        total = c.get('total', 0)
        occupied = c.get('occupied', 0)
        ward, _ = WardRecord.objects.update_or_create(
            name=name,
            defaults={
                'total_beds': total,
                'available_beds': c.get('available', 0),
                'occupied_beds': occupied,
                'maintenance_beds': c.get('maintenance', 0),
                'occupancy_rate': round(occupied * 100.0 / total, 1) if total else 0,
            },
        )
        refreshed.append(ward)
    return refreshed

