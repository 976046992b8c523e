"""
User accounts and patient listings for the staff dashboards.
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from clinic.choices import AssignmentStatus, PatientStatus, Role
from clinic.exceptions import NotFound, PatientNotFound, ValidationError
from clinic.models import Assignment, Patient
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)

User = get_user_model()


def list_users(*, role: Optional[str] = None):
    qs = User.objects.all()
    if role:
        qs = qs.filter(role=role)
    return qs.order_by('-date_joined', '-id')


def create_user(actor, *, name: str, email: str, password: str, role: str, phone: str = '',
                specialization: str = '', department: str = '', employee_id: Optional[str] = None) -> User:
    email = (email or '').strip().lower()
    if not email:
        raise ValidationError('email is required', field='email')
    if role not in Role.values:
        raise ValidationError(f"Invalid role '{role}'", field='role', allowed=list(Role.values))
    if User.objects.filter(email__iexact=email).exists() or User.objects.filter(username__iexact=email).exists():
        raise ValidationError('User already exists with this email', field='email')
    if employee_id and User.objects.filter(employee_id=employee_id).exists():
        raise ValidationError(f'Employee ID {employee_id} is already in use', field='employeeId')

    first, _, last = (name or '').strip().partition(' ')
    user = User(
        username=email, email=email, first_name=first, last_name=last.strip(),
        role=role, phone=phone or '', specialization=specialization or '',
        department=department or '', employee_id=employee_id or None,
        is_staff=(role == Role.ADMIN),
    )
    try:
        validate_password(password, user)
    except DjangoValidationError as e:
        raise ValidationError(' '.join(e.messages), field='password')
    user.set_password(password)
    with transaction.atomic():
        user.save()
        log_action(user=actor, action='user_create', object_type='user', object_id=user.id, detail={'role': role})
    logger.info('created %s account %s', role, user.id)
    return user


def set_user_active(actor, user_id, is_active) -> User:
    if not isinstance(is_active, bool):
        raise ValidationError('isActive must be a boolean', field='isActive')
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise NotFound(f'User {user_id} not found', user_id=user_id)
    if user.pk == getattr(actor, 'pk', None) and not is_active:
        raise ValidationError('You cannot deactivate your own account', field='isActive')
    user.is_active = is_active
    user.save(update_fields=['is_active'])
    log_action(user=actor, action='user_status', object_type='user', object_id=user.id, detail={'isActive': is_active})
    return user


def _patients():
    return Patient.objects.select_related('assigned_bed', 'doctor')


def list_patients(*, include_discharged: bool = True, status: Optional[str] = None, q: Optional[str] = None):
    qs = _patients()
    if not include_discharged:
        qs = qs.exclude(status=PatientStatus.DISCHARGED)
    if status:
        qs = qs.filter(status=status)
    if q:
        qs = qs.filter(first_name__icontains=q) | qs.filter(last_name__icontains=q)
    return qs.order_by('-admission_date', '-id')


def assigned_patients(user):
    """Active assignments held by a doctor or nurse, newest first."""
    staff_field = 'nurse' if user.role == Role.NURSE else 'doctor'
    return (
        Assignment.objects.filter(status=AssignmentStatus.ACTIVE, **{staff_field: user})
        .select_related('patient', 'patient__assigned_bed', 'doctor', 'nurse')
        .prefetch_related('care_notes', 'visit_logs')
        .order_by('-assigned_at', '-id')
    )


def patient_detail(user, patient_id):
    """The patient plus the caller's active assignment for them (or None)."""
    patient = _patients().filter(pk=patient_id).first()
    if patient is None:
        raise PatientNotFound(patient_id)
    staff_field = 'nurse' if user.role == Role.NURSE else 'doctor'
    assignment = (
        Assignment.objects.filter(patient=patient, status=AssignmentStatus.ACTIVE, **{staff_field: user})
        .select_related('doctor', 'nurse')
        .prefetch_related('care_notes', 'visit_logs')
        .first()
    )
    return patient, assignment
