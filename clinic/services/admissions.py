"""
Patient admission.

An admission creates the Patient and claims a bed for it inside one
transaction: if the claim fails the patient row is rolled back, so a bed
is never left Occupied without a patient and a patient never points at
a bed that is still Available.
"""
import logging

from django.db import transaction
from django.utils import timezone

from clinic.choices import PatientStatus
from clinic.models import Patient
from clinic.services import notifications
from clinic.services.audit import log_action
from clinic.services.beds import claim_bed, find_available_bed, validate_ward

logger = logging.getLogger(__name__)

ADMISSION_FIELDS = (
    'first_name', 'last_name', 'email', 'phone', 'age', 'date_of_birth', 'gender',
    'blood_type', 'address', 'emergency_contact', 'medical_history', 'allergies',
    'current_medications', 'admission_reason', 'insurance_provider', 'insurance_policy_number',
)


def admit_patient(actor, *, ward: str, **demographics) -> Patient:
    validate_ward(ward)
    # Fail fast before writing anything when the ward is already full.
    find_available_bed(ward)

    fields = {k: v for k, v in demographics.items() if k in ADMISSION_FIELDS and v is not None}
    with transaction.atomic():
        patient = Patient.objects.create(
            ward=ward,
            status=PatientStatus.ADMITTED,
            admission_date=timezone.now(),
            **fields,
        )
        bed = claim_bed(ward, patient)
        patient.assigned_bed = bed
        patient.save(update_fields=['assigned_bed', 'updated_at'])
        log_action(user=actor, action='patient_admit', object_type='patient', object_id=patient.id,
                   detail={'bedId': bed.id, 'bedNumber': bed.bed_number, 'ward': ward})

        notifications.publish(notifications.PATIENT_ADMITTED, {
            'patientId': patient.id, 'name': patient.full_name, 'ward': ward,
        })
        notifications.publish(notifications.BED_OCCUPIED, notifications.bed_payload(bed))

    logger.info('admitted patient %s to bed %s (%s)', patient.id, bed.bed_number, ward)
    return patient
