from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from halaqat.core.enums import (
    ApplicationStatus,
    InterviewResult,
    InterviewStatus,
    NotificationPriority,
    NotificationType,
    Role,
    Stage,
    Weekday,
)
from halaqat.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def onboarding(container):
    return container.onboarding_service


@pytest.fixture
def new_student(onboarding, affairs, guardian_payload):
    return onboarding.create_application(
        actor=affairs,
        data={"name": "Omar Ahmed", "stage": "primary", "age": 9},
        guardian=guardian_payload,
    )


@pytest.fixture
def submitted(onboarding, affairs, new_student):
    return onboarding.submit_form(
        actor=affairs,
        student_id=new_student.student_id,
        data={"name": "Omar Ahmed Hassan", "stage": "prep", "age": 12},
    )


@pytest.fixture
def scheduled(onboarding, affairs, submitted, today):
    return onboarding.schedule_interview(actor=affairs, student_id=submitted.student_id, today=today)


def test_create_application_starts_new_and_inactive(new_student):
    assert new_student.application_status == ApplicationStatus.NEW
    assert new_student.is_active is False
    assert new_student.halqa_id is None
    assert new_student.guardian.name == "Ahmed Hassan"
    assert new_student.stage == Stage.PRIMARY


def test_create_application_reuses_existing_guardian(onboarding, affairs, new_student):
    sibling = onboarding.create_application(
        actor=affairs,
        data={"name": "Yusuf Ahmed", "stage": "secondary"},
        guardian_id=new_student.guardian_id,
    )
    assert sibling.guardian_id == new_student.guardian_id


def test_create_application_unknown_guardian(onboarding, affairs):
    with pytest.raises(NotFoundError):
        onboarding.create_application(actor=affairs, data={"name": "X", "stage": "primary"}, guardian_id=99)


def test_create_application_validates_student_fields(onboarding, affairs, guardian_payload):
    with pytest.raises(ValidationError):
        onboarding.create_application(actor=affairs, data={"name": "", "stage": "primary"}, guardian=guardian_payload)
    with pytest.raises(ValidationError):
        onboarding.create_application(actor=affairs, data={"name": "A", "stage": "college"}, guardian=guardian_payload)
    with pytest.raises(ValidationError):
        onboarding.create_application(
            actor=affairs, data={"name": "A", "stage": "primary", "age": 2}, guardian=guardian_payload
        )


def test_teacher_cannot_register_students(onboarding, teacher, guardian_payload):
    with pytest.raises(AuthorizationError):
        onboarding.create_application(actor=teacher, data={"name": "A", "stage": "primary"}, guardian=guardian_payload)


def test_mark_form_given_moves_from_new(onboarding, affairs, new_student):
    student = onboarding.mark_form_given(actor=affairs, student_id=new_student.student_id)
    assert student.application_status == ApplicationStatus.FORM_GIVEN


def test_mark_form_given_twice_is_invalid_and_changes_nothing(onboarding, affairs, new_student, db):
    onboarding.mark_form_given(actor=affairs, student_id=new_student.student_id)
    before = db.students[new_student.student_id]

    with pytest.raises(InvalidStateError):
        onboarding.mark_form_given(actor=affairs, student_id=new_student.student_id)
    assert db.students[new_student.student_id] == before


def test_mark_form_given_unknown_student(onboarding, affairs):
    with pytest.raises(NotFoundError):
        onboarding.mark_form_given(actor=affairs, student_id=404)


def test_submit_form_from_new_overwrites_fields_and_updates_guardian(onboarding, affairs, new_student):
    student = onboarding.submit_form(
        actor=affairs,
        student_id=new_student.student_id,
        data={"name": "Omar A. Hassan", "stage": "prep", "date_of_birth": "2014-03-01"},
        guardian={"alternate_phone": "+20 111 000 2222", "relationship": "grandfather"},
    )
    assert student.application_status == ApplicationStatus.FORM_SUBMITTED
    assert student.name == "Omar A. Hassan"
    assert student.stage == Stage.PREP
    assert student.date_of_birth == date(2014, 3, 1)
    assert student.age is None
    assert student.guardian.alternate_phone == "+20 111 000 2222"
    assert student.guardian.relationship.value == "grandfather"
    assert student.guardian.phone == "+20 100 123 4567"


def test_submit_form_after_form_given(onboarding, affairs, new_student):
    onboarding.mark_form_given(actor=affairs, student_id=new_student.student_id)
    student = onboarding.submit_form(
        actor=affairs, student_id=new_student.student_id, data={"name": "Omar", "stage": "primary"}
    )
    assert student.application_status == ApplicationStatus.FORM_SUBMITTED


def test_submit_form_invalid_guardian_leaves_everything_untouched(onboarding, affairs, new_student, db):
    with pytest.raises(ValidationError):
        onboarding.submit_form(
            actor=affairs,
            student_id=new_student.student_id,
            data={"name": "Omar", "stage": "primary"},
            guardian={"relationship": "neighbour"},
        )
    assert db.students[new_student.student_id].application_status == ApplicationStatus.NEW


def test_submit_form_twice_is_invalid(onboarding, affairs, submitted):
    with pytest.raises(InvalidStateError):
        onboarding.submit_form(actor=affairs, student_id=submitted.student_id, data={"name": "A", "stage": "primary"})


def test_cannot_skip_to_interview(onboarding, affairs, new_student, today, db):
    with pytest.raises(InvalidStateError):
        onboarding.schedule_interview(actor=affairs, student_id=new_student.student_id, today=today)
    assert db.interviews == {}


def test_schedule_interview_books_next_slot_and_notifies_director(scheduled, director, today):
    assert scheduled.student.application_status == ApplicationStatus.INTERVIEW_SCHEDULED
    assert scheduled.student.interview_date == date(2026, 10, 20)

    interview = scheduled.interview
    assert interview.status == InterviewStatus.SCHEDULED
    assert interview.day_of_week == Weekday.TUESDAY
    assert interview.scheduled_date == date(2026, 10, 20)
    assert interview.conductor_id == director.user_id
    assert interview.time_slot == "after_asr"

    notification = scheduled.notification
    assert notification.recipient_id == director.user_id
    assert notification.type == NotificationType.INTERVIEW_SCHEDULED
    assert notification.priority == NotificationPriority.HIGH
    assert notification.related_student_id == scheduled.student.student_id
    assert notification.related_interview_id == interview.interview_id
    assert notification.is_read is False


def test_schedule_interview_without_director_writes_nothing(onboarding, affairs, submitted, today, db, staff):
    director = staff[Role.DIRECTOR]
    db.staff[director.user_id] = replace(director, is_active=False)

    with pytest.raises(NotFoundError):
        onboarding.schedule_interview(actor=affairs, student_id=submitted.student_id, today=today)
    assert db.interviews == {}
    assert db.notifications == {}
    assert db.students[submitted.student_id].application_status == ApplicationStatus.FORM_SUBMITTED


def test_schedule_interview_uses_lowest_id_active_director(onboarding, affairs, submitted, today, container, staff):
    container.staff_repo.add(name="Second Director", email="d2@halaqat.local", password="secret123", role=Role.DIRECTOR)
    booking = onboarding.schedule_interview(actor=affairs, student_id=submitted.student_id, today=today)
    assert booking.interview.conductor_id == staff[Role.DIRECTOR].user_id


def test_schedule_interview_twice_is_invalid(onboarding, affairs, scheduled, today, db):
    with pytest.raises(InvalidStateError):
        onboarding.schedule_interview(actor=affairs, student_id=scheduled.student.student_id, today=today)
    assert len(db.interviews) == 1
    assert len(db.notifications) == 1


def test_losing_a_race_raises_conflict_without_side_effects(onboarding, affairs, submitted, today, db, container):
    container.students_repo.lose_next_write = True
    with pytest.raises(ConflictError):
        onboarding.schedule_interview(actor=affairs, student_id=submitted.student_id, today=today)
    assert db.interviews == {}
    assert db.notifications == {}


def test_duplicate_scheduled_interview_is_a_conflict_and_rolls_back(onboarding, affairs, submitted, today, db, container):
    onboarding.schedule_interview(actor=affairs, student_id=submitted.student_id, today=today)
    first = dict(db.interviews)
    # Another request already moved the row back while a stale interview is still scheduled.
    db.students[submitted.student_id] = replace(
        db.students[submitted.student_id], application_status=ApplicationStatus.FORM_SUBMITTED
    )

    with pytest.raises(ConflictError):
        onboarding.schedule_interview(actor=affairs, student_id=submitted.student_id, today=today)
    assert db.interviews == first
    assert db.students[submitted.student_id].application_status == ApplicationStatus.FORM_SUBMITTED


def test_accept_with_halqa_activates_student(onboarding, director, scheduled, halqa, fixed_now, db):
    student_id = scheduled.student.student_id
    student = onboarding.record_interview_result(
        actor=director,
        student_id=student_id,
        result="accepted",
        notes="Memorized Juz Amma",
        halqa_id=halqa.halqa_id,
        now=fixed_now,
    )
    assert student.application_status == ApplicationStatus.ACCEPTED
    assert student.is_active is True
    assert student.is_enrolled is True
    assert student.accepted_at == fixed_now
    assert student.accepted_by == director.user_id
    assert student.halqa_id == halqa.halqa_id
    assert student.halqa_name == "Halqa Al-Fajr"
    assert student.interview_notes == "Memorized Juz Amma"

    interview = db.interviews[scheduled.interview.interview_id]
    assert interview.status == InterviewStatus.COMPLETED
    assert interview.result == InterviewResult.ACCEPTED
    assert interview.conducted_at == fixed_now


def test_accept_without_halqa_is_active_but_not_enrolled(onboarding, director, scheduled, fixed_now):
    student = onboarding.record_interview_result(
        actor=director, student_id=scheduled.student.student_id, result="accepted", now=fixed_now
    )
    assert student.is_active is True
    assert student.halqa_id is None
    assert student.is_enrolled is False


def test_reject_leaves_student_inactive(onboarding, director, scheduled, fixed_now, db):
    student = onboarding.record_interview_result(
        actor=director, student_id=scheduled.student.student_id, result="rejected", notes="Too young", now=fixed_now
    )
    assert student.application_status == ApplicationStatus.REJECTED
    assert student.is_active is False
    assert student.halqa_id is None
    assert student.accepted_at is None
    assert db.interviews[scheduled.interview.interview_id].result == InterviewResult.REJECTED


def test_pending_result(onboarding, director, scheduled, fixed_now):
    student = onboarding.record_interview_result(
        actor=director, student_id=scheduled.student.student_id, result=InterviewResult.PENDING, now=fixed_now
    )
    assert student.application_status == ApplicationStatus.PENDING
    assert student.is_active is False


def test_rejected_student_cannot_get_a_halqa(onboarding, director, scheduled, halqa):
    with pytest.raises(ValidationError):
        onboarding.record_interview_result(
            actor=director, student_id=scheduled.student.student_id, result="rejected", halqa_id=halqa.halqa_id
        )


def test_invalid_result_is_a_validation_error(onboarding, director, scheduled, db):
    with pytest.raises(ValidationError):
        onboarding.record_interview_result(actor=director, student_id=scheduled.student.student_id, result="maybe")
    assert db.students[scheduled.student.student_id].application_status == ApplicationStatus.INTERVIEW_SCHEDULED


def test_only_director_records_results(onboarding, affairs, scheduled):
    with pytest.raises(AuthorizationError):
        onboarding.record_interview_result(actor=affairs, student_id=scheduled.student.student_id, result="accepted")


def test_result_requires_scheduled_status(onboarding, director, submitted):
    with pytest.raises(InvalidStateError):
        onboarding.record_interview_result(actor=director, student_id=submitted.student_id, result="accepted")


def test_terminal_states_reject_every_transition(onboarding, director, affairs, scheduled, today):
    student_id = scheduled.student.student_id
    onboarding.record_interview_result(actor=director, student_id=student_id, result="rejected")

    with pytest.raises(InvalidStateError):
        onboarding.mark_form_given(actor=affairs, student_id=student_id)
    with pytest.raises(InvalidStateError):
        onboarding.submit_form(actor=affairs, student_id=student_id, data={"name": "A", "stage": "primary"})
    with pytest.raises(InvalidStateError):
        onboarding.schedule_interview(actor=affairs, student_id=student_id, today=today)
    with pytest.raises(InvalidStateError):
        onboarding.record_interview_result(actor=director, student_id=student_id, result="accepted")


def test_full_halqa_is_rejected(onboarding, director, affairs, guardian_payload, container, today):
    small = container.halqat_repo.add(name="Tiny", max_students=1)

    def interviewed(name):
        s = onboarding.create_application(actor=affairs, data={"name": name, "stage": "primary"}, guardian=guardian_payload)
        onboarding.submit_form(actor=affairs, student_id=s.student_id, data={"name": name, "stage": "primary"})
        onboarding.schedule_interview(actor=affairs, student_id=s.student_id, today=today)
        return s.student_id

    first, second = interviewed("A"), interviewed("B")
    onboarding.record_interview_result(actor=director, student_id=first, result="accepted", halqa_id=small.halqa_id)

    with pytest.raises(ValidationError):
        onboarding.record_interview_result(actor=director, student_id=second, result="accepted", halqa_id=small.halqa_id)


def test_inactive_halqa_is_not_found(onboarding, director, scheduled, container):
    closed = container.halqat_repo.add(name="Closed", is_active=False)
    with pytest.raises(NotFoundError):
        onboarding.record_interview_result(
            actor=director, student_id=scheduled.student.student_id, result="accepted", halqa_id=closed.halqa_id
        )


def test_assign_halqa_after_acceptance(onboarding, director, scheduled, halqa):
    student_id = scheduled.student.student_id
    onboarding.record_interview_result(actor=director, student_id=student_id, result="accepted")

    student = onboarding.assign_halqa(actor=director, student_id=student_id, halqa_id=halqa.halqa_id)
    assert student.halqa_id == halqa.halqa_id
    assert student.is_enrolled is True


def test_assign_halqa_requires_acceptance(onboarding, director, scheduled, halqa):
    with pytest.raises(InvalidStateError):
        onboarding.assign_halqa(actor=director, student_id=scheduled.student.student_id, halqa_id=halqa.halqa_id)


def test_active_only_when_accepted(onboarding, director, affairs, guardian_payload, today, db):
    for result in ("accepted", "rejected", "pending"):
        s = onboarding.create_application(actor=affairs, data={"name": result, "stage": "primary"}, guardian=guardian_payload)
        onboarding.submit_form(actor=affairs, student_id=s.student_id, data={"name": result, "stage": "primary"})
        onboarding.schedule_interview(actor=affairs, student_id=s.student_id, today=today)
        onboarding.record_interview_result(actor=director, student_id=s.student_id, result=result)

    for student in db.students.values():
        assert student.is_active == (student.application_status == ApplicationStatus.ACCEPTED)


def test_list_pending_excludes_decided_and_is_newest_first(onboarding, director, affairs, scheduled, guardian_payload):
    onboarding.record_interview_result(actor=director, student_id=scheduled.student.student_id, result="accepted")
    a = onboarding.create_application(actor=affairs, data={"name": "A", "stage": "primary"}, guardian=guardian_payload)
    b = onboarding.create_application(actor=affairs, data={"name": "B", "stage": "primary"}, guardian=guardian_payload)

    pending = onboarding.list_pending(actor=affairs)
    assert [s.student_id for s in pending] == [b.student_id, a.student_id]


def test_get_application(onboarding, affairs, teacher, new_student):
    assert onboarding.get_application(actor=affairs, student_id=new_student.student_id).name == "Omar Ahmed"
    with pytest.raises(AuthorizationError):
        onboarding.get_application(actor=teacher, student_id=new_student.student_id)


def test_list_for_guardian(onboarding, affairs, teacher, new_student):
    sibling = onboarding.create_application(
        actor=affairs, data={"name": "Yusuf Ahmed", "stage": "secondary"}, guardian_id=new_student.guardian_id
    )
    students = onboarding.list_for_guardian(actor=affairs, guardian_id=new_student.guardian_id)
    assert [s.student_id for s in students] == [new_student.student_id, sibling.student_id]

    with pytest.raises(NotFoundError):
        onboarding.list_for_guardian(actor=affairs, guardian_id=999)
    with pytest.raises(AuthorizationError):
        onboarding.list_for_guardian(actor=teacher, guardian_id=new_student.guardian_id)
