import pytest
from rest_framework.test import APIClient

from clinic.choices import BedStatus, Role
from clinic.models import Bed, User


def _user(username, role, first, last, **extra):
    return User.objects.create_user(
        username=username, email=username, password="P@ssw0rd1", role=role,
        first_name=first, last_name=last, **extra,
    )


@pytest.fixture
def admin_user(db):
    return _user("admin@medivibe.test", Role.ADMIN, "Ada", "Admin", is_staff=True)


@pytest.fixture
def doctor(db):
    return _user("sarah@medivibe.test", Role.DOCTOR, "Sarah", "Johnson", specialization="Cardiology")


@pytest.fixture
def doctor2(db):
    return _user("michael@medivibe.test", Role.DOCTOR, "Michael", "Chen", specialization="Emergency Medicine")


@pytest.fixture
def nurse(db):
    return _user("emily@medivibe.test", Role.NURSE, "Emily", "Davis")


@pytest.fixture
def nurse2(db):
    return _user("grace@medivibe.test", Role.NURSE, "Grace", "Hopper")


@pytest.fixture
def receptionist(db):
    return _user("john@medivibe.test", Role.RECEPTIONIST, "John", "Smith")


@pytest.fixture
def make_bed(db):
    def _make(bed_number, ward="General", status=BedStatus.AVAILABLE, **extra):
        return Bed.objects.create(bed_number=bed_number, ward=ward, status=status, **extra)
    return _make


@pytest.fixture
def patient_data():
    return {
        "first_name": "Alice",
        "last_name": "Walker",
        "phone": "+1555000111",
        "gender": "Female",
        "blood_type": "O+",
        "age": 42,
    }


@pytest.fixture
def admit(receptionist, patient_data):
    """Admit a patient through the workflow, overriding demographics as needed."""
    from clinic.services.admissions import admit_patient

    def _admit(ward="General", **overrides):
        return admit_patient(receptionist, ward=ward, **{**patient_data, **overrides})
    return _admit


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def sent_events(monkeypatch):
    """Capture events handed to the channel layer instead of sending them."""
    from clinic.services import notifications

    events = []

    def fake_send(event, data):
        events.append((event, data))
        return True

    monkeypatch.setattr(notifications, "send_event", fake_send)
    return events
