"""
Care-team assignment.

Binds a patient to one doctor and one nurse, records both on a shift
(Duty) and points the patient at the new doctor and ward.  All writes
happen in one transaction.

Re-running the same assignment (same doctor, nurse and shift) updates
the existing rows instead of duplicating them.  Handing the patient to a
different doctor or nurse keeps the previous Assignment as history with
status ``transferred`` and opens a new active one.
"""
import datetime
import logging
import re
from typing import Any, Optional, Tuple

from django.db import transaction
from django.utils.dateparse import parse_date, parse_datetime

from clinic.choices import AssignmentStatus, DutyStatus, PatientStatus, Role
from clinic.exceptions import PatientAlreadyDischarged, PatientNotFound, RoleMismatch, StaffNotFound, ValidationError
from clinic.models import Assignment, Duty, Patient, User
from clinic.services.audit import log_action
from clinic.services.beds import validate_ward
from clinic.services.care_log import clean_text

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('patient_id', 'doctor_id', 'nurse_id', 'ward', 'shift_date', 'shift_start', 'shift_end')
ID_FIELDS = ('patient_id', 'doctor_id', 'nurse_id')

_SHIFT_TIME = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def _require(values: dict) -> None:
    """Stop at the first missing field, in declaration order."""
    for name in REQUIRED_FIELDS:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(
                'patientId, doctorId, nurseId, ward, shiftDate, shiftStart, and shiftEnd are required',
                field=name,
            )


def parse_shift_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    try:
        parsed = parse_date(text) or parse_datetime(text)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"Invalid shiftDate '{value}', expected YYYY-MM-DD", field='shift_date')
    return parsed.date() if isinstance(parsed, datetime.datetime) else parsed


def parse_id(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer id', field=field)
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f'{field} must be an integer id', field=field)


def validate_shift_time(value: str, field: str) -> str:
    value = str(value).strip()
    if not _SHIFT_TIME.match(value):
        raise ValidationError(f"Invalid {field} '{value}', expected HH:MM", field=field)
    return value


def resolve_staff(user_id: Any, role: str) -> User:
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise StaffNotFound(user_id, role)
    if user.role != role:
        raise RoleMismatch(user_id, role)
    return user


def _upsert_assignment(patient: Patient, doctor: User, nurse: User, notes: Optional[str]) -> Assignment:
    current = (
        Assignment.objects.select_for_update()
        .filter(patient=patient, status=AssignmentStatus.ACTIVE)
        .first()
    )
    if current is not None and current.doctor_id == doctor.id and current.nurse_id == nurse.id:
        if notes is not None:
            current.notes = notes
            current.save(update_fields=['notes', 'updated_at'])
        return current

    if current is not None:
        current.status = AssignmentStatus.TRANSFERRED
        current.save(update_fields=['status', 'updated_at'])

    return Assignment.objects.create(
        patient=patient,
        doctor=doctor,
        nurse=nurse,
        notes=notes or '',
        status=AssignmentStatus.ACTIVE,
    )


def _upsert_duty(user: User, *, ward, shift_date, shift_start, shift_end, notes) -> Duty:
    duty, _ = Duty.objects.update_or_create(
        user=user,
        shift_date=shift_date,
        shift_start=shift_start,
        shift_end=shift_end,
        defaults={
            'ward': ward,
            'status': DutyStatus.ACTIVE,
            'notes': notes,
            'is_active': True,
        },
    )
    return duty


def assign_care_team(actor, *, patient_id=None, doctor_id=None, nurse_id=None, ward=None,
                     shift_date=None, shift_start=None, shift_end=None,
                     notes: Optional[str] = None) -> Tuple[Assignment, str]:
    _require(dict(
        patient_id=patient_id, doctor_id=doctor_id, nurse_id=nurse_id, ward=ward,
        shift_date=shift_date, shift_start=shift_start, shift_end=shift_end,
    ))
    patient_id, doctor_id, nurse_id = (
        parse_id(value, name) for value, name in zip((patient_id, doctor_id, nurse_id), ID_FIELDS)
    )
    validate_ward(ward)
    shift_date = parse_shift_date(shift_date)
    shift_start = validate_shift_time(shift_start, 'shift_start')
    shift_end = validate_shift_time(shift_end, 'shift_end')
    notes = (clean_text(notes, field='notes') or None) if isinstance(notes, str) else None

    patient = Patient.objects.filter(pk=patient_id).first()
    if patient is None:
        raise PatientNotFound(patient_id)
    if patient.status == PatientStatus.DISCHARGED:
        raise PatientAlreadyDischarged(patient_id)

    doctor = resolve_staff(doctor_id, Role.DOCTOR)
    nurse = resolve_staff(nurse_id, Role.NURSE)

    with transaction.atomic():
        assignment = _upsert_assignment(patient, doctor, nurse, notes)

        patient.doctor = doctor
        patient.ward = ward
        patient.save(update_fields=['doctor', 'ward', 'updated_at'])

        duty_notes = notes or f"Assigned to {patient.full_name}"
        for member in (doctor, nurse):
            _upsert_duty(member, ward=ward, shift_date=shift_date, shift_start=shift_start,
                         shift_end=shift_end, notes=duty_notes)

        log_action(user=actor, action='care_team_assign', object_type='assignment', object_id=assignment.id,
                   detail={'patientId': patient.id, 'doctorId': doctor.id, 'nurseId': nurse.id,
                           'shift': f"{shift_date.isoformat()} {shift_start}-{shift_end}"})

    message = f"Successfully assigned {patient.full_name} to {doctor.display_name} and {nurse.display_name}"
    logger.info('patient %s assigned to doctor %s / nurse %s (assignment %s)',
                patient.id, doctor.id, nurse.id, assignment.id)
    return assignment, message
