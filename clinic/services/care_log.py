from typing import Optional

import bleach
from django.conf import settings
from django.db import transaction

from clinic.choices import AssignmentStatus, Role, VisitRole
from clinic.exceptions import ActiveAssignmentNotFound, AssignmentNotFound, ValidationError
from clinic.models import Assignment, CareNote, VisitLog
from clinic.services.audit import log_action

VITAL_FIELDS = {
    'temperature': 'temperature',
    'heartRate': 'heart_rate',
    'oxygenLevel': 'oxygen_level',
}


def clean_text(value, field: str = 'note') -> str:
    value = bleach.clean((value or '').strip(), strip=True)
    if len(value) > settings.NOTE_MAX_LENGTH:
        raise ValidationError(f'{field} must be at most {settings.NOTE_MAX_LENGTH} characters', field=field)
    return value


def _coerce_vitals(vitals: Optional[dict]) -> dict:
    """Map camelCase vitals onto CareNote columns.

    Numbers are stored as given; only non-numeric values are rejected.
    """
    if not vitals:
        return {}
    if not isinstance(vitals, dict):
        raise ValidationError('vitals must be an object', field='vitals')
    out = {}
    for key, column in VITAL_FIELDS.items():
        value = vitals.get(key)
        if value is None or value == '':
            continue
        if isinstance(value, bool):
            raise ValidationError(f'vitals.{key} must be a number', field=f'vitals.{key}')
        try:
            out[column] = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f'vitals.{key} must be a number', field=f'vitals.{key}')
    bp = vitals.get('bloodPressure')
    if bp not in (None, ''):
        out['blood_pressure'] = bleach.clean(str(bp).strip(), strip=True)[:16]
    return out


def _active_assignment_for(user, **lookup) -> Assignment:
    staff_field = 'nurse' if user.role == Role.NURSE else 'doctor'
    assignment = (
        Assignment.objects.select_for_update()
        .filter(status=AssignmentStatus.ACTIVE, **{staff_field: user}, **lookup)
        .first()
    )
    if assignment is None:
        raise ActiveAssignmentNotFound(user_id=user.id, **lookup)
    return assignment


@transaction.atomic
def add_care_note(nurse, assignment_id, note, vitals: Optional[dict] = None) -> CareNote:
    """Append a nurse note (with optional vitals) to an active assignment."""
    columns = _coerce_vitals(vitals)
    note = clean_text(note)
    if not note and not columns:
        raise ValidationError('note or vitals is required', field='note')

    assignment = _active_assignment_for(nurse, pk=assignment_id)
    entry = CareNote.objects.create(assignment=assignment, nurse=nurse, note=note, **columns)
    log_action(user=nurse, action='care_note_add', object_type='assignment', object_id=assignment.id,
               detail={'careNoteId': entry.id})
    return entry


@transaction.atomic
def mark_visited(user, patient_id, note: str = '') -> VisitLog:
    """Stamp a bedside visit by the doctor or nurse on the patient's active assignment."""
    if user.role not in (Role.DOCTOR, Role.NURSE):
        raise ValidationError('Only doctors and nurses can record visits', field='role')
    assignment = _active_assignment_for(user, patient_id=patient_id)
    entry = VisitLog.objects.create(
        assignment=assignment,
        visited_by=user,
        role=VisitRole.NURSE if user.role == Role.NURSE else VisitRole.DOCTOR,
        note=clean_text(note),
    )
    log_action(user=user, action='visit_log_add', object_type='assignment', object_id=assignment.id,
               detail={'visitLogId': entry.id, 'patientId': assignment.patient_id})
    return entry


@transaction.atomic
def update_doctor_notes(doctor, assignment_id, notes) -> Assignment:
    if notes is None:
        raise ValidationError('notes is required', field='notes')
    assignment = Assignment.objects.select_for_update().filter(pk=assignment_id, doctor=doctor).first()
    if assignment is None:
        raise AssignmentNotFound(f'Assignment {assignment_id} not found', assignment_id=assignment_id)
    assignment.notes = clean_text(notes, field='notes')
    assignment.save(update_fields=['notes', 'updated_at'])
    log_action(user=doctor, action='assignment_notes', object_type='assignment', object_id=assignment.id)
    return assignment
