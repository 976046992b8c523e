"""
Shared vocabulary for the clinic app.

Every enumeration used by more than one model lives here once and is
referenced by models, serializers and services alike.
"""
from django.db import models


class Ward(models.TextChoices):
    ICU = 'ICU', 'ICU'
    GENERAL = 'General', 'General'
    EMERGENCY = 'Emergency', 'Emergency'
    PEDIATRIC = 'Pediatric', 'Pediatric'
    ORTHOPEDIC = 'Orthopedic', 'Orthopedic'
    CARDIAC = 'Cardiac', 'Cardiac'


class Role(models.TextChoices):
    ADMIN = 'admin', 'Administrator'
    DOCTOR = 'doctor', 'Doctor'
    NURSE = 'nurse', 'Nurse'
    RECEPTIONIST = 'receptionist', 'Receptionist'
    STAFF = 'staff', 'Staff'
    PATIENT = 'patient', 'Patient'


class BedStatus(models.TextChoices):
    AVAILABLE = 'Available', 'Available'
    OCCUPIED = 'Occupied', 'Occupied'
    MAINTENANCE = 'Maintenance', 'Maintenance'
    CLEANING = 'Cleaning', 'Cleaning'


class BedType(models.TextChoices):
    STANDARD = 'Standard', 'Standard'
    SEMI_DELUXE = 'Semi-Deluxe', 'Semi-Deluxe'
    DELUXE = 'Deluxe', 'Deluxe'
    ICU_STANDARD = 'ICU Standard', 'ICU Standard'
    ICU_ADVANCED = 'ICU Advanced', 'ICU Advanced'


class PatientStatus(models.TextChoices):
    ADMITTED = 'Admitted', 'Admitted'
    DISCHARGED = 'Discharged', 'Discharged'
    CRITICAL = 'Critical', 'Critical'
    RECOVERING = 'Recovering', 'Recovering'
    OBSERVATION = 'Observation', 'Observation'


class DutyStatus(models.TextChoices):
    SCHEDULED = 'scheduled', 'Scheduled'
    ACTIVE = 'active', 'Active'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


class AssignmentStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    COMPLETED = 'completed', 'Completed'
    TRANSFERRED = 'transferred', 'Transferred'


class VisitRole(models.TextChoices):
    DOCTOR = 'doctor', 'Doctor'
    NURSE = 'nurse', 'Nurse'


class Gender(models.TextChoices):
    MALE = 'Male', 'Male'
    FEMALE = 'Female', 'Female'
    OTHER = 'Other', 'Other'


class BloodType(models.TextChoices):
    A_POS = 'A+', 'A+'
    A_NEG = 'A-', 'A-'
    B_POS = 'B+', 'B+'
    B_NEG = 'B-', 'B-'
    AB_POS = 'AB+', 'AB+'
    AB_NEG = 'AB-', 'AB-'
    O_POS = 'O+', 'O+'
    O_NEG = 'O-', 'O-'
