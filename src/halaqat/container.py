from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .core.constants import DEFAULT_INTERVIEW_TIME_SLOT, DEFAULT_INTERVIEW_WEEKDAYS
from .database.connection import DBConfig, DatabaseConnection
from .guardians.mysql_guardian_repository import MySQLGuardianRepository
from .guardians.repository import GuardianRepository
from .guardians.service import GuardianService
from .halqat.mysql_halqa_repository import MySQLHalqaRepository
from .halqat.repository import HalqaRepository
from .halqat.service import HalqaService
from .interviews.mysql_interview_repository import MySQLInterviewRepository
from .interviews.repository import InterviewRepository
from .interviews.service import InterviewService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .staff.directory import RoleStaffDirectory, StaffDirectory
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import AuthService, StaffService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import OnboardingService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    staff_repo: StaffRepository
    guardians_repo: GuardianRepository
    halqat_repo: HalqaRepository
    students_repo: StudentRepository
    interviews_repo: InterviewRepository
    notifications_repo: NotificationRepository

    directory: StaffDirectory
    auth_service: AuthService
    staff_service: StaffService
    guardian_service: GuardianService
    halqa_service: HalqaService
    interview_service: InterviewService
    notification_service: NotificationService
    onboarding_service: OnboardingService


def wire(
    *,
    staff_repo: StaffRepository,
    guardians_repo: GuardianRepository,
    halqat_repo: HalqaRepository,
    students_repo: StudentRepository,
    interviews_repo: InterviewRepository,
    notifications_repo: NotificationRepository,
    conn: Optional[DatabaseConnection] = None,
    interview_weekdays: Iterable[str] = DEFAULT_INTERVIEW_WEEKDAYS,
    interview_time_slot: str = DEFAULT_INTERVIEW_TIME_SLOT,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""
    directory = RoleStaffDirectory(staff_repo)
    guardian_service = GuardianService(guardians_repo)
    halqa_service = HalqaService(halqat_repo)
    notification_service = NotificationService(notifications_repo)
    onboarding_service = OnboardingService(
        students_repo,
        interviews_repo,
        guardian_service=guardian_service,
        halqa_service=halqa_service,
        notification_service=notification_service,
        directory=directory,
        interview_weekdays=interview_weekdays,
        interview_time_slot=interview_time_slot,
    )

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        guardians_repo=guardians_repo,
        halqat_repo=halqat_repo,
        students_repo=students_repo,
        interviews_repo=interviews_repo,
        notifications_repo=notifications_repo,
        directory=directory,
        auth_service=AuthService(staff_repo),
        staff_service=StaffService(staff_repo),
        guardian_service=guardian_service,
        halqa_service=halqa_service,
        interview_service=InterviewService(interviews_repo),
        notification_service=notification_service,
        onboarding_service=onboarding_service,
    )


def build_container(
    *,
    db_config: dict,
    interview_weekdays: Iterable[str] = DEFAULT_INTERVIEW_WEEKDAYS,
    interview_time_slot: str = DEFAULT_INTERVIEW_TIME_SLOT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        staff_repo=MySQLStaffRepository(conn),
        guardians_repo=MySQLGuardianRepository(conn),
        halqat_repo=MySQLHalqaRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        interviews_repo=MySQLInterviewRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        interview_weekdays=interview_weekdays,
        interview_time_slot=interview_time_slot,
    )
