"""Example: drive the onboarding workflow through the service layer (no Flask).

Controllers are thin; every rule lives in the services, so scripts can reuse them.
"""

import importlib

from halaqat.config import get_settings_module
from halaqat.container import build_container
from halaqat.core.enums import Role
from halaqat.staff.model import Actor


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        interview_weekdays=settings.INTERVIEW_WEEKDAYS,
        interview_time_slot=settings.INTERVIEW_TIME_SLOT,
    )

    director = container.directory.interview_conductor()
    if not director:
        print("No active director; run scripts/seed_db.py first")
        return

    actor = Actor(user_id=director.user_id, role=Role.DIRECTOR, name=director.name)
    for student in container.onboarding_service.list_pending(actor=actor, limit=10):
        print(student.student_id, student.name, student.application_status.value)
    for interview in container.interview_service.list_upcoming(actor=actor, limit=5):
        print(interview["scheduled_date"], interview["student_name"], interview["time_slot"])


if __name__ == "__main__":
    main()
