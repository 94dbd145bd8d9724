from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_int_in_range
from ..common.web import current_actor, json_body, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

_INTAKE = (Role.STUDENT_AFFAIRS, Role.DIRECTOR)


def _optional_id(value, field_name: str):
    return optional_int_in_range(value, field_name, low=1, high=2**31 - 1)


def register(app: Flask, container: Container) -> None:
    onboarding = container.onboarding_service

    @app.route("/api/onboarding/new", methods=["POST"], endpoint="new_application")
    @roles_required(*_INTAKE)
    def new_application():
        body = json_body()
        student = onboarding.create_application(
            actor=current_actor(),
            data=body,
            guardian_id=_optional_id(body.get("guardian_id"), "guardian_id"),
            guardian=body.get("guardian"),
        )
        return ok(201, student=student.to_dict())

    @app.route("/api/onboarding/<int:student_id>/form-given", methods=["PUT"], endpoint="form_given")
    @roles_required(*_INTAKE)
    def form_given(student_id: int):
        student = onboarding.mark_form_given(actor=current_actor(), student_id=student_id)
        return ok(student=student.to_dict())

    @app.route("/api/onboarding/<int:student_id>/form-submitted", methods=["PUT"], endpoint="form_submitted")
    @roles_required(*_INTAKE)
    def form_submitted(student_id: int):
        body = json_body()
        student = onboarding.submit_form(
            actor=current_actor(),
            student_id=student_id,
            data=body,
            guardian=body.get("guardian"),
        )
        return ok(student=student.to_dict())

    @app.route(
        "/api/onboarding/<int:student_id>/schedule-interview",
        methods=["POST"],
        endpoint="schedule_interview",
    )
    @roles_required(*_INTAKE)
    def schedule_interview(student_id: int):
        booking = onboarding.schedule_interview(actor=current_actor(), student_id=student_id)
        return ok(201, **booking.to_dict())

    @app.route("/api/onboarding/<int:student_id>/interview-result", methods=["PUT"], endpoint="interview_result")
    @roles_required(Role.DIRECTOR)
    def interview_result(student_id: int):
        body = json_body()
        student = onboarding.record_interview_result(
            actor=current_actor(),
            student_id=student_id,
            result=body.get("result"),
            notes=body.get("notes"),
            halqa_id=_optional_id(body.get("halqa_id"), "halqa_id"),
        )
        return ok(student=student.to_dict())

    @app.route("/api/onboarding/<int:student_id>/halqa", methods=["PUT"], endpoint="assign_halqa")
    @roles_required(Role.DIRECTOR)
    def assign_halqa(student_id: int):
        halqa_id = _optional_id(json_body().get("halqa_id"), "halqa_id")
        if halqa_id is None:
            raise ValidationError("halqa_id is required")
        student = onboarding.assign_halqa(actor=current_actor(), student_id=student_id, halqa_id=halqa_id)
        return ok(student=student.to_dict())

    @app.route("/api/onboarding/<int:student_id>", methods=["GET"], endpoint="get_application")
    @roles_required(*_INTAKE)
    def get_application(student_id: int):
        actor = current_actor()
        student = onboarding.get_application(actor=actor, student_id=student_id)
        interviews = container.interview_service.history_for_student(actor=actor, student_id=student_id)
        return ok(student=student.to_dict(), interviews=[i.to_dict() for i in interviews])

    @app.route("/api/onboarding/pending", methods=["GET"], endpoint="pending_applications")
    @roles_required(*_INTAKE)
    def pending_applications():
        students = onboarding.list_pending(actor=current_actor())
        return ok(students=[s.to_dict() for s in students], count=len(students))

    @app.route("/api/onboarding/interviews", methods=["GET"], endpoint="upcoming_interviews")
    @roles_required(Role.DIRECTOR)
    def upcoming_interviews():
        mine_only = request.args.get("mine", "").lower() in {"1", "true", "yes"}
        interviews = container.interview_service.list_upcoming(actor=current_actor(), mine_only=mine_only)
        return ok(interviews=interviews, count=len(interviews))
