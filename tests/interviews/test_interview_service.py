from __future__ import annotations

from datetime import date

import pytest

from halaqat.core.enums import InterviewStatus
from halaqat.core.exceptions import AuthorizationError


@pytest.fixture
def two_bookings(container, affairs, guardian_payload, today):
    onboarding = container.onboarding_service
    bookings = []
    for name, day in (("Omar", today), ("Zaid", date(2026, 10, 21))):
        s = onboarding.create_application(actor=affairs, data={"name": name, "stage": "primary"}, guardian=guardian_payload)
        onboarding.submit_form(actor=affairs, student_id=s.student_id, data={"name": name, "stage": "primary"})
        bookings.append(onboarding.schedule_interview(actor=affairs, student_id=s.student_id, today=day))
    return bookings


def test_upcoming_is_ordered_by_date(container, director, two_bookings, today):
    upcoming = container.interview_service.list_upcoming(actor=director, today=today)
    assert [i["student_name"] for i in upcoming] == ["Omar", "Zaid"]
    assert upcoming[0]["scheduled_date"] == "2026-10-20"
    assert upcoming[1]["scheduled_date"] == "2026-10-24"
    assert upcoming[0]["conductor_name"] == director.name


def test_upcoming_skips_past_and_completed(container, director, two_bookings):
    omar = two_bookings[0].student.student_id
    container.onboarding_service.record_interview_result(actor=director, student_id=omar, result="pending")

    upcoming = container.interview_service.list_upcoming(actor=director, today=date(2026, 10, 22))
    assert [i["student_name"] for i in upcoming] == ["Zaid"]


def test_upcoming_is_director_only(container, affairs):
    with pytest.raises(AuthorizationError):
        container.interview_service.list_upcoming(actor=affairs)


def test_history_for_student(container, director, affairs, two_bookings):
    omar = two_bookings[0].student.student_id
    container.onboarding_service.record_interview_result(actor=director, student_id=omar, result="accepted")

    history = container.interview_service.history_for_student(actor=affairs, student_id=omar)
    assert [i.status for i in history] == [InterviewStatus.COMPLETED]
    assert history[0].can_reschedule(date(2026, 10, 1)) is False


def test_can_reschedule_only_future_scheduled(two_bookings):
    interview = two_bookings[0].interview
    assert interview.can_reschedule(date(2026, 10, 19)) is True
    assert interview.can_reschedule(date(2026, 10, 20)) is False
