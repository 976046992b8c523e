import pytest

from clinic.choices import BedStatus
from clinic.exceptions import BedNotFound, InvalidState, NoBedAvailable, ValidationError
from clinic.models import AuditEvent, Bed
from clinic.services import beds

pytestmark = pytest.mark.django_db


def test_find_available_bed_picks_lowest_number(make_bed):
    make_bed("GEN-003")
    make_bed("GEN-001", status=BedStatus.OCCUPIED)
    make_bed("GEN-002")
    make_bed("ICU-001", ward="ICU")

    assert beds.find_available_bed("General").bed_number == "GEN-002"


def test_find_available_bed_skips_inactive_and_other_wards(make_bed):
    make_bed("GEN-001", is_active=False)
    make_bed("ICU-001", ward="ICU")

    with pytest.raises(NoBedAvailable) as ei:
        beds.find_available_bed("General")
    assert ei.value.ward == "General"
    assert ei.value.message == "No available beds in General ward"


def test_find_available_bed_rejects_unknown_ward():
    with pytest.raises(ValidationError) as ei:
        beds.find_available_bed("Mortuary")
    assert ei.value.field == "ward"


def test_claim_bed_flips_status_and_occupant(make_bed, admit):
    bed = make_bed("GEN-001")
    make_bed("GEN-002")
    patient = admit()  # takes GEN-001
    bed.refresh_from_db()
    assert bed.status == BedStatus.OCCUPIED
    assert bed.occupied_by_id == patient.id

    claimed = beds.claim_bed("General", patient)
    assert claimed.bed_number == "GEN-002"
    assert claimed.occupied_by_id == patient.id


def test_claim_bed_never_returns_a_bed_it_did_not_flip(make_bed, admit, monkeypatch):
    make_bed("GEN-001")
    patient = admit()
    # Simulate a stale read: the candidate list still offers GEN-001.
    stale = Bed.objects.filter(bed_number="GEN-001")
    monkeypatch.setattr(beds, "available_beds", lambda ward: stale)

    with pytest.raises(NoBedAvailable):
        beds.claim_bed("General", patient)
    assert Bed.objects.get(bed_number="GEN-001").occupied_by_id == patient.id


def test_nurse_may_only_set_cleaning_or_available(make_bed, nurse):
    bed = make_bed("GEN-001", status=BedStatus.CLEANING)

    with pytest.raises(ValidationError) as ei:
        beds.set_bed_status(nurse, bed.id, BedStatus.MAINTENANCE)
    assert ei.value.context["allowed"] == ["Cleaning", "Available"]

    updated = beds.set_bed_status(nurse, bed.id, BedStatus.AVAILABLE)
    assert updated.status == BedStatus.AVAILABLE
    assert updated.last_cleaned is not None


def test_unknown_status_is_rejected(make_bed, admin_user):
    bed = make_bed("GEN-001")
    with pytest.raises(ValidationError):
        beds.set_bed_status(admin_user, bed.id, "Exploded")


def test_inactive_or_missing_bed_is_not_found(make_bed, admin_user):
    bed = make_bed("GEN-001", is_active=False)
    with pytest.raises(BedNotFound):
        beds.set_bed_status(admin_user, bed.id, BedStatus.MAINTENANCE)
    with pytest.raises(BedNotFound):
        beds.set_bed_status(admin_user, 9999, BedStatus.MAINTENANCE)


def test_leaving_occupied_releases_occupant(make_bed, admit, admin_user):
    make_bed("GEN-001")
    patient = admit()
    bed_id = patient.assigned_bed_id

    bed = beds.set_bed_status(admin_user, bed_id, BedStatus.MAINTENANCE, maintenance_notes="rail broken")

    assert bed.status == BedStatus.MAINTENANCE
    assert bed.occupied_by is None
    assert bed.maintenance_notes == "rail broken"
    patient.refresh_from_db()
    assert patient.assigned_bed_id is None
    event = AuditEvent.objects.get(action="bed_status", object_id=bed_id)
    assert event.detail == {"from": "Occupied", "to": "Maintenance", "releasedPatient": patient.id}



def test_empty_bed_cannot_be_set_occupied(make_bed, admin_user):
    bed = make_bed("GEN-001")

    with pytest.raises(InvalidState) as ei:
        beds.set_bed_status(admin_user, bed.id, BedStatus.OCCUPIED)
    assert ei.value.status_code == 409

    bed.refresh_from_db()
    assert bed.status == BedStatus.AVAILABLE
    assert bed.occupied_by_id is None
    assert not AuditEvent.objects.filter(action="bed_status").exists()


def test_occupied_bed_stays_bound_when_reset_to_occupied(make_bed, admit, admin_user):
    make_bed("GEN-001")
    patient = admit()

    bed = beds.set_bed_status(admin_user, patient.assigned_bed_id, BedStatus.OCCUPIED)

    assert bed.status == BedStatus.OCCUPIED
    assert bed.occupied_by_id == patient.id


def test_status_change_is_published_after_commit(make_bed, admin_user, sent_events, django_capture_on_commit_callbacks):
    bed = make_bed("GEN-001")
    with django_capture_on_commit_callbacks(execute=True):
        beds.set_bed_status(admin_user, bed.id, BedStatus.MAINTENANCE)

    assert len(sent_events) == 1
    event, data = sent_events[0]
    assert event == "bed-status-changed"
    assert data["bedNumber"] == "GEN-001"
    assert data["status"] == "Maintenance"
    assert data["previousStatus"] == "Available"


def test_create_bed_rejects_duplicate_number(make_bed, admin_user):
    make_bed("GEN-001")
    with pytest.raises(ValidationError) as ei:
        beds.create_bed(admin_user, bed_number="GEN-001", ward="General")
    assert ei.value.field == "bedNumber"


def test_availability_summary_counts_active_beds(make_bed):
    make_bed("GEN-001")
    make_bed("GEN-002", status=BedStatus.OCCUPIED)
    make_bed("GEN-003", status=BedStatus.CLEANING)
    make_bed("GEN-004", is_active=False)
    make_bed("ICU-001", ward="ICU", status=BedStatus.MAINTENANCE)

    summary = beds.availability_summary()

    assert summary["totals"] == {
        "totalBeds": 4, "availableBeds": 1, "occupiedBeds": 1, "maintenanceBeds": 1, "cleaningBeds": 1,
    }
    general = next(w for w in summary["wards"] if w["ward"] == "General")
    assert general == {"ward": "General", "total": 3, "available": 1, "occupied": 1, "maintenance": 0, "cleaning": 1}


def test_ward_occupancy_counts_everything_not_available_as_occupied(make_bed):
    make_bed("GEN-001")
    make_bed("GEN-002", status=BedStatus.CLEANING)

    assert beds.ward_occupancy() == [{"ward": "General", "total": 2, "available": 1, "occupied": 1}]


def test_refresh_ward_records_writes_every_ward(make_bed):
    make_bed("GEN-001")
    make_bed("GEN-002", status=BedStatus.OCCUPIED)

    wards = {w.name: w for w in beds.refresh_ward_records()}

    assert len(wards) == 6
    assert wards["General"].total_beds == 2
    assert wards["General"].occupancy_rate == 50.0
    assert wards["ICU"].total_beds == 0
