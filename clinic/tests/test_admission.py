import threading

import pytest
from django.db import connection

from clinic.choices import BedStatus, PatientStatus
from clinic.exceptions import NoBedAvailable, ValidationError
from clinic.models import AuditEvent, Bed, Patient
from clinic.services import beds as bed_service
from clinic.services.discharge import discharge_patient

pytestmark = pytest.mark.django_db


def test_admission_binds_patient_and_bed(make_bed, admit):
    make_bed("ICU-001", ward="ICU")

    patient = admit(ward="ICU")

    bed = Bed.objects.get(bed_number="ICU-001")
    assert patient.status == PatientStatus.ADMITTED
    assert patient.ward == "ICU"
    assert patient.admission_date is not None
    assert patient.assigned_bed_id == bed.id
    assert bed.status == BedStatus.OCCUPIED
    assert bed.occupied_by_id == patient.id
    assert AuditEvent.objects.filter(action="patient_admit", object_id=patient.id).exists()


def test_full_ward_fails_before_any_write(make_bed, admit):
    make_bed("GEN-001", status=BedStatus.MAINTENANCE)

    with pytest.raises(NoBedAvailable):
        admit()
    assert Patient.objects.count() == 0


def test_invalid_ward_is_rejected(admit):
    with pytest.raises(ValidationError) as ei:
        admit(ward="Basement")
    assert ei.value.field == "ward"


def test_m_of_n_admissions_succeed_without_sharing_a_bed(make_bed, admit):
    for i in range(1, 4):
        make_bed(f"GEN-00{i}")

    admitted, refused = [], 0
    for i in range(5):
        try:
            admitted.append(admit(first_name=f"P{i}"))
        except NoBedAvailable:
            refused += 1

    assert len(admitted) == 3
    assert refused == 2
    bed_ids = [p.assigned_bed_id for p in admitted]
    assert len(set(bed_ids)) == 3
    assert Patient.objects.count() == 3
    for p in admitted:
        assert Bed.objects.get(pk=p.assigned_bed_id).occupied_by_id == p.id


@pytest.mark.django_db(transaction=True)
def test_concurrent_admissions_never_share_a_bed(make_bed, admit, sent_events):
    beds_free, callers = 3, 8
    for i in range(1, beds_free + 1):
        make_bed(f"GEN-00{i}")

    barrier = threading.Barrier(callers)
    lock = threading.Lock()
    admitted, refused, errors = [], [], []

    def worker(i):
        try:
            barrier.wait()
            patient = admit(first_name=f"P{i}")
            with lock:
                admitted.append(patient)
        except NoBedAvailable as exc:
            with lock:
                refused.append(exc)
        except Exception as exc:
            with lock:
                errors.append(exc)
        finally:
            connection.close()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(callers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert errors == []
    assert len(admitted) == beds_free
    assert len(refused) == callers - beds_free
    assert len({p.assigned_bed_id for p in admitted}) == beds_free
    assert Patient.objects.count() == beds_free
    for p in admitted:
        assert Bed.objects.get(pk=p.assigned_bed_id).occupied_by_id == p.id
    assert not Bed.objects.filter(status=BedStatus.AVAILABLE).exists()


def test_lost_claim_rolls_back_patient(make_bed, admit, monkeypatch):
    make_bed("GEN-001")

    def claim_lost(ward, patient):
        raise NoBedAvailable(ward)

    # The precheck sees a bed, but a concurrent admission wins the claim.
    monkeypatch.setattr("clinic.services.admissions.claim_bed", claim_lost)

    with pytest.raises(NoBedAvailable):
        admit()
    assert Patient.objects.count() == 0
    assert Bed.objects.get(bed_number="GEN-001").status == BedStatus.AVAILABLE


def test_admission_publishes_events(make_bed, admit, sent_events, django_capture_on_commit_callbacks):
    make_bed("GEN-001")
    with django_capture_on_commit_callbacks(execute=True):
        patient = admit()

    assert [e for e, _ in sent_events] == ["patient-admitted", "bed-occupied"]
    assert sent_events[1][1]["occupiedBy"] == patient.id


def test_notification_failure_does_not_fail_admission(make_bed, admit, monkeypatch, django_capture_on_commit_callbacks):
    from clinic.services import notifications

    def broken_layer():
        raise ConnectionError("redis down")

    monkeypatch.setattr(notifications, "get_channel_layer", broken_layer)
    make_bed("GEN-001")
    with django_capture_on_commit_callbacks(execute=True):
        patient = admit()

    assert Patient.objects.get(pk=patient.id).assigned_bed.bed_number == "GEN-001"


def test_admit_discharge_round_trip(make_bed, admit, admin_user):
    make_bed("ICU-001", ward="ICU")
    patient = admit(ward="ICU")
    bed_id = patient.assigned_bed_id

    discharged = discharge_patient(admin_user, patient.id)

    bed = Bed.objects.get(pk=bed_id)
    assert discharged.status == PatientStatus.DISCHARGED
    assert discharged.discharge_date is not None
    assert discharged.assigned_bed_id is None
    assert bed.status == BedStatus.CLEANING
    assert bed.occupied_by_id is None


def test_general_ward_single_bed_scenario(make_bed, admit, admin_user, nurse):
    gen = make_bed("GEN-001")

    a = admit(first_name="A")
    gen.refresh_from_db()
    assert gen.status == BedStatus.OCCUPIED

    with pytest.raises(NoBedAvailable) as ei:
        admit(first_name="B")
    assert ei.value.ward == "General"

    discharge_patient(admin_user, a.id)
    gen.refresh_from_db()
    assert gen.status == BedStatus.CLEANING
    assert gen.occupied_by_id is None

    with pytest.raises(NoBedAvailable):
        admit(first_name="B")

    bed_service.set_bed_status(nurse, gen.id, BedStatus.AVAILABLE)
    b = admit(first_name="B")
    assert b.assigned_bed_id == gen.id
