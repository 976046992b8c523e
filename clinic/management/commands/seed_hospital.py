from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction

from clinic.choices import BedStatus, BedType, Role, Ward
from clinic.models import Bed, User
from clinic.services.beds import refresh_ward_records

# (email, first name, last name, role, password, specialization)
STAFF = [
    ("admin@medivibe.com", "Admin", "User", Role.ADMIN, "admin123", ""),
    ("sarah.johnson@medivibe.com", "Sarah", "Johnson", Role.DOCTOR, "doctor123", "Cardiology"),
    ("michael.chen@medivibe.com", "Michael", "Chen", Role.DOCTOR, "doctor123", "Emergency Medicine"),
    ("emily.davis@medivibe.com", "Emily", "Davis", Role.NURSE, "nurse123", ""),
    ("john.smith@medivibe.com", "John", "Smith", Role.RECEPTIONIST, "receptionist123", ""),
]

WARD_BEDS = [
    (Ward.GENERAL, BedType.STANDARD, 5),
    (Ward.ICU, BedType.ICU_ADVANCED, 3),
    (Ward.EMERGENCY, BedType.STANDARD, 4),
    (Ward.PEDIATRIC, BedType.STANDARD, 3),
    (Ward.ORTHOPEDIC, BedType.STANDARD, 3),
    (Ward.CARDIAC, BedType.ICU_ADVANCED, 2),
]


class Command(BaseCommand):
    help = "Ensure demo staff accounts, beds and ward records exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--reset-passwords", action="store_true",
                            help="Reset demo account passwords and re-activate them.")

    @transaction.atomic
    def handle(self, *args, **opts):
        for email, first, last, role, password, specialization in STAFF:
            u, created = User.objects.get_or_create(
                username=email,
                defaults={
                    "email": email, "first_name": first, "last_name": last, "role": role,
                    "specialization": specialization, "password": make_password(password),
                    "is_active": True, "is_staff": role == Role.ADMIN,
                },
            )
            if not created and opts["reset_passwords"]:
                u.password = make_password(password)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))

        new_beds = 0
        for ward, bed_type, count in WARD_BEDS:
            for i in range(1, count + 1):
                _, created = Bed.objects.get_or_create(
                    bed_number=f"{ward[:3].upper()}-{i:03d}",
                    defaults={"ward": ward, "bed_type": bed_type, "status": BedStatus.AVAILABLE, "daily_rate": 500},
                )
                new_beds += int(created)

        wards = refresh_ward_records()
        self.stdout.write(self.style.SUCCESS(
            f"Seeded {new_beds} new beds; {Bed.objects.count()} beds across {len(wards)} wards."
        ))
