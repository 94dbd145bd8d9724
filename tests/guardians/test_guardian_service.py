from __future__ import annotations

import pytest

from halaqat.core.enums import Relationship
from halaqat.core.exceptions import NotFoundError, ValidationError
from halaqat.guardians.service import parse_guardian_data


@pytest.fixture
def guardians(container):
    return container.guardian_service


def test_resolve_creates_with_default_relationship(guardians):
    guardian = guardians.resolve(data={"name": "Mahmoud Ali", "phone": "01001234567"})
    assert guardian.relationship == Relationship.FATHER
    assert guardian.whatsapp_enabled is True
    assert guardian.whatsapp_number == "01001234567"


def test_resolve_never_deduplicates(guardians, guardian_payload):
    first = guardians.resolve(data=guardian_payload)
    second = guardians.resolve(data=guardian_payload)
    assert first.guardian_id != second.guardian_id


def test_resolve_existing(guardians, guardian_payload):
    created = guardians.resolve(data=guardian_payload)
    assert guardians.resolve(guardian_id=created.guardian_id) == created


def test_resolve_missing_reference(guardians):
    with pytest.raises(NotFoundError):
        guardians.resolve(guardian_id=42)


def test_resolve_needs_a_reference_or_data(guardians):
    with pytest.raises(ValidationError):
        guardians.resolve()


@pytest.mark.parametrize(
    "payload",
    [
        {"phone": "01001234567"},
        {"name": "Ali"},
        {"name": "Ali", "phone": "call me"},
        {"name": "Ali", "phone": "01001234567", "relationship": "cousin"},
    ],
)
def test_parse_rejects_invalid_data(payload):
    with pytest.raises(ValidationError):
        parse_guardian_data(payload)


def test_partial_parse_only_keeps_given_fields():
    data = parse_guardian_data({"address": " 12 Nile St ", "whatsapp_enabled": False}, partial=True)
    assert data.changes() == {"address": "12 Nile St", "whatsapp_enabled": False}


def test_update_changes_only_given_fields(guardians, guardian_payload):
    created = guardians.resolve(data=guardian_payload)
    updated = guardians.update(created.guardian_id, {"whatsapp_phone": "+20 122 333 4444"})
    assert updated.whatsapp_number == "+20 122 333 4444"
    assert updated.name == created.name
    assert updated.phone == created.phone


def test_update_unknown_guardian(guardians):
    with pytest.raises(NotFoundError):
        guardians.update(7, {"name": "Nobody"})
