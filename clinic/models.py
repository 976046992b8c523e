"""
Database models for the MediVibe backend.

These models capture users and their roles, wards, beds, admitted
patients, duty shifts and the care-team assignments that bind a patient
to one doctor and one nurse.  Care notes and visit logs hang off an
assignment as append-only child rows.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import Q
from django.utils import timezone

from .choices import (
    AssignmentStatus,
    BedStatus,
    BedType,
    BloodType,
    DutyStatus,
    Gender,
    PatientStatus,
    Role,
    VisitRole,
    Ward as WardName,
)


class User(AbstractUser):
    """Custom user model carrying a hospital role.

    Doctors additionally carry a ``specialization``.  Staff accounts are
    deactivated through ``is_active`` rather than deleted so that
    historical assignments and duties keep their references.
    """
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.PATIENT, db_index=True)
    specialization = models.CharField(max_length=128, blank=True)
    department = models.CharField(max_length=128, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    employee_id = models.CharField(max_length=32, unique=True, null=True, blank=True)

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Ward(models.Model):
    """Descriptive record for one of the six fixed wards.

    The bed counters are a denormalized snapshot; the authoritative
    numbers are always derived from :class:`Bed` rows.  The
    ``refresh_ward_counts`` management command rewrites them.
    """
    name = models.CharField(max_length=16, choices=WardName.choices, unique=True)
    description = models.TextField(blank=True)
    total_beds = models.PositiveIntegerField(default=0)
    available_beds = models.PositiveIntegerField(default=0)
    occupied_beds = models.PositiveIntegerField(default=0)
    maintenance_beds = models.PositiveIntegerField(default=0)
    occupancy_rate = models.FloatField(default=0)
    head = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='headed_wards')
    staff = models.ManyToManyField(User, blank=True, related_name='wards')
    equipment_list = models.JSONField(default=list, blank=True)
    specializations = models.JSONField(default=list, blank=True)
    emergency_phone_number = models.CharField(max_length=32, blank=True)
    location = models.CharField(max_length=128, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class Patient(models.Model):
    """An admitted (or formerly admitted) patient."""
    first_name = models.CharField(max_length=64)
    last_name = models.CharField(max_length=64)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32)
    age = models.PositiveIntegerField(null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=8, choices=Gender.choices)
    blood_type = models.CharField(max_length=3, choices=BloodType.choices)
    address = models.CharField(max_length=255, blank=True)
    emergency_contact = models.JSONField(default=dict, blank=True)
    medical_history = models.JSONField(default=list, blank=True)
    allergies = models.JSONField(default=list, blank=True)
    current_medications = models.JSONField(default=list, blank=True)

    # Admission details
    admission_date = models.DateTimeField(default=timezone.now)
    discharge_date = models.DateTimeField(null=True, blank=True)
    assigned_bed = models.ForeignKey(
        'Bed', null=True, blank=True, on_delete=models.SET_NULL, related_name='patients'
    )
    ward = models.CharField(max_length=16, choices=WardName.choices, blank=True)
    admission_reason = models.TextField(blank=True)
    doctor = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='primary_patients'
    )
    status = models.CharField(max_length=16, choices=PatientStatus.choices, default=PatientStatus.ADMITTED)

    insurance_provider = models.CharField(max_length=128, blank=True)
    insurance_policy_number = models.CharField(max_length=64, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['first_name', 'last_name'], name='clinic_patient_name_idx'),
            models.Index(fields=['status', '-admission_date'], name='clinic_patient_status_adm_idx'),
        ]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} ({self.status})"


class Bed(models.Model):
    """A physical bed.

    ``status`` and ``occupied_by`` move together: a bed is Occupied
    exactly when it references the patient lying in it.
    """
    bed_number = models.CharField(max_length=32, unique=True)
    ward = models.CharField(max_length=16, choices=WardName.choices, db_index=True)
    bed_type = models.CharField(max_length=16, choices=BedType.choices, default=BedType.STANDARD)
    status = models.CharField(max_length=16, choices=BedStatus.choices, default=BedStatus.AVAILABLE, db_index=True)
    occupied_by = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='occupied_beds'
    )
    capacity = models.PositiveIntegerField(default=1)
    features = models.JSONField(default=list, blank=True)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    last_cleaned = models.DateTimeField(null=True, blank=True)
    maintenance_notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['ward', 'status'], name='clinic_bed_ward_status_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.bed_number} [{self.ward}] {self.status}"


class Duty(models.Model):
    """A scheduled or active shift for one staff member in one ward."""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='duties')
    ward = models.CharField(max_length=16, choices=WardName.choices)
    shift_date = models.DateField()
    shift_start = models.CharField(max_length=5, help_text="e.g. 08:00")
    shift_end = models.CharField(max_length=5, help_text="e.g. 16:00")
    status = models.CharField(max_length=16, choices=DutyStatus.choices, default=DutyStatus.SCHEDULED)
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'shift_date', 'shift_start', 'shift_end'], name='uniq_duty_shift'
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'shift_date'], name='clinic_duty_user_date_idx'),
        ]

    def __str__(self) -> str:
        return f"Duty(u={self.user_id}, {self.ward}, {self.shift_date} {self.shift_start}-{self.shift_end})"


class Assignment(models.Model):
    """Care-team binding of one patient to a doctor and a nurse.

    Superseded assignments are kept with status ``transferred`` or
    ``completed``; at most one row per patient is ``active``.
    """
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='assignments')
    doctor = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctor_assignments'
    )
    nurse = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='nurse_assignments'
    )
    assigned_at = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=16, choices=AssignmentStatus.choices, default=AssignmentStatus.ACTIVE)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['patient'],
                condition=Q(status='active'),
                name='uniq_active_assignment_per_patient',
            ),
        ]
        indexes = [
            models.Index(fields=['patient', 'status'], name='clinic_asg_patient_status_idx'),
            models.Index(fields=['doctor', 'status'], name='clinic_asg_doctor_status_idx'),
            models.Index(fields=['nurse', 'status'], name='clinic_asg_nurse_status_idx'),
        ]

    def __str__(self) -> str:
        return f"Assignment(p={self.patient_id}, d={self.doctor_id}, n={self.nurse_id}, {self.status})"


class AppendOnlyModel(models.Model):
    """Rows that may be inserted but never rewritten."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError(f"{type(self).__name__} entries are append-only")
        super().save(*args, **kwargs)


class CareNote(AppendOnlyModel):
    """Nurse entry on an assignment, optionally with a set of vitals."""
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name='care_notes')
    nurse = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='care_notes')
    note = models.TextField(blank=True)
    temperature = models.FloatField(null=True, blank=True)
    blood_pressure = models.CharField(max_length=16, blank=True)
    heart_rate = models.FloatField(null=True, blank=True)
    oxygen_level = models.FloatField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['id']
        indexes = [models.Index(fields=['assignment', 'created_at'], name='clinic_carenote_asg_idx')]

    @property
    def vitals(self) -> dict:
        return {
            'temperature': self.temperature,
            'bloodPressure': self.blood_pressure or None,
            'heartRate': self.heart_rate,
            'oxygenLevel': self.oxygen_level,
        }

    def __str__(self) -> str:
        return f"care note {self.id} assignment={self.assignment_id}"


class VisitLog(AppendOnlyModel):
    """Doctor or nurse bedside visit stamp."""
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name='visit_logs')
    visited_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='visit_logs')
    role = models.CharField(max_length=8, choices=VisitRole.choices)
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['id']
        indexes = [models.Index(fields=['assignment', 'created_at'], name='clinic_visitlog_asg_idx')]

    def __str__(self) -> str:
        return f"visit {self.id} by {self.visited_by_id} ({self.role})"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]
