"""
Patient discharge.

Discharging releases the patient's bed for cleaning and closes every
active care-team assignment.  The whole workflow is one transaction.
"""
import logging

from django.db import transaction
from django.utils import timezone

from clinic.choices import AssignmentStatus, BedStatus, PatientStatus
from clinic.exceptions import PatientAlreadyDischarged, PatientNotFound
from clinic.models import Assignment, Bed, Patient
from clinic.services import notifications
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


def discharge_patient(actor, patient_id) -> Patient:
    with transaction.atomic():
        patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
        if patient is None:
            raise PatientNotFound(patient_id)
        if patient.status == PatientStatus.DISCHARGED:
            raise PatientAlreadyDischarged(patient_id)

        bed_id = patient.assigned_bed_id
        now = timezone.now()
        patient.status = PatientStatus.DISCHARGED
        patient.discharge_date = now
        patient.assigned_bed = None
        patient.save(update_fields=['status', 'discharge_date', 'assigned_bed', 'updated_at'])

        released = None
        if bed_id is not None:
            # Only release the bed if this patient still holds it.
            if Bed.objects.filter(pk=bed_id, occupied_by=patient).update(
                status=BedStatus.CLEANING, occupied_by=None, updated_at=now
            ):
                released = Bed.objects.get(pk=bed_id)

        closed = Assignment.objects.filter(patient=patient, status=AssignmentStatus.ACTIVE).update(
            status=AssignmentStatus.COMPLETED, updated_at=now
        )

        log_action(user=actor, action='patient_discharge', object_type='patient', object_id=patient.id,
                   detail={'bedId': released.id if released else None, 'assignmentsClosed': closed})

        notifications.publish(notifications.PATIENT_DISCHARGED, {
            'patientId': patient.id, 'name': patient.full_name, 'ward': patient.ward,
        })
        if released is not None:
            notifications.publish(notifications.BED_RELEASED, notifications.bed_payload(released))

    logger.info('discharged patient %s (bed %s released, %d assignments closed)',
                patient.id, released.bed_number if released else None, closed)
    return patient
