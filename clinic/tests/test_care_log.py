import pytest

from clinic.choices import AssignmentStatus
from clinic.exceptions import ActiveAssignmentNotFound, AssignmentNotFound, ValidationError
from clinic.models import CareNote, VisitLog
from clinic.services import care_log
from clinic.services.care_team import assign_care_team
from clinic.services.discharge import discharge_patient

pytestmark = pytest.mark.django_db


@pytest.fixture
def assignment(make_bed, admit, admin_user, doctor, nurse):
    make_bed("GEN-001")
    patient = admit()
    a, _ = assign_care_team(
        admin_user, patient_id=patient.id, doctor_id=doctor.id, nurse_id=nurse.id, ward="General",
        shift_date="2026-10-19", shift_start="08:00", shift_end="16:00",
    )
    return a


def test_three_notes_append_in_call_order(nurse, assignment):
    for text in ("first", "second", "third"):
        care_log.add_care_note(nurse, assignment.id, text)

    assert [n.note for n in assignment.care_notes.all()] == ["first", "second", "third"]


def test_later_calls_do_not_touch_existing_notes(nurse, doctor, assignment):
    note = care_log.add_care_note(nurse, assignment.id, "stable", {"temperature": 37.2})
    care_log.mark_visited(doctor, assignment.patient_id)
    care_log.update_doctor_notes(doctor, assignment.id, "continue meds")
    care_log.add_care_note(nurse, assignment.id, "still stable")

    note.refresh_from_db()
    assert note.note == "stable"
    assert note.temperature == 37.2
    assert assignment.care_notes.count() == 2


def test_care_notes_cannot_be_rewritten(nurse, assignment):
    note = care_log.add_care_note(nurse, assignment.id, "original")
    note.note = "edited"
    with pytest.raises(ValueError):
        note.save()
    assert CareNote.objects.get(pk=note.pk).note == "original"


def test_vitals_are_stored_without_range_checks(nurse, assignment):
    note = care_log.add_care_note(nurse, assignment.id, "odd reading", {
        "temperature": 45, "bloodPressure": "300/10", "heartRate": "12", "oxygenLevel": 101.5,
    })
    assert note.vitals == {"temperature": 45.0, "bloodPressure": "300/10", "heartRate": 12.0, "oxygenLevel": 101.5}


def test_non_numeric_vitals_are_rejected(nurse, assignment):
    with pytest.raises(ValidationError) as ei:
        care_log.add_care_note(nurse, assignment.id, "", {"heartRate": "fast"})
    assert ei.value.field == "vitals.heartRate"
    assert CareNote.objects.count() == 0


def test_note_markup_is_stripped(nurse, assignment):
    note = care_log.add_care_note(nurse, assignment.id, "<script>x</script>ok")
    assert "<script>" not in note.note


def test_other_nurse_has_no_active_assignment(nurse2, assignment):
    with pytest.raises(ActiveAssignmentNotFound):
        care_log.add_care_note(nurse2, assignment.id, "not mine")


def test_completed_assignment_takes_no_notes(admin_user, nurse, assignment):
    discharge_patient(admin_user, assignment.patient_id)
    assignment.refresh_from_db()
    assert assignment.status == AssignmentStatus.COMPLETED
    with pytest.raises(ActiveAssignmentNotFound):
        care_log.add_care_note(nurse, assignment.id, "too late")


def test_visits_record_role(doctor, nurse, assignment):
    care_log.mark_visited(doctor, assignment.patient_id)
    care_log.mark_visited(nurse, assignment.patient_id, "rounds")

    logs = list(VisitLog.objects.filter(assignment=assignment))
    assert [(v.visited_by_id, v.role, v.note) for v in logs] == [
        (doctor.id, "doctor", ""), (nurse.id, "nurse", "rounds"),
    ]


def test_visit_without_assignment(doctor2, assignment):
    with pytest.raises(ActiveAssignmentNotFound):
        care_log.mark_visited(doctor2, assignment.patient_id)


def test_doctor_notes_only_on_own_assignment(doctor, doctor2, assignment):
    updated = care_log.update_doctor_notes(doctor, assignment.id, "NPO after midnight")
    assert updated.notes == "NPO after midnight"
    with pytest.raises(AssignmentNotFound):
        care_log.update_doctor_notes(doctor2, assignment.id, "hijack")
