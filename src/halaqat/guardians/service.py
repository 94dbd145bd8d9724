from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.validators import optional_text, require_enum, require_non_empty, require_phone
from ..core.constants import DEFAULT_RELATIONSHIP
from ..core.enums import Relationship
from ..core.exceptions import NotFoundError, ValidationError
from .model import Guardian, GuardianData
from .repository import GuardianRepository

logger = logging.getLogger(__name__)


def parse_guardian_data(raw: Mapping[str, Any], *, partial: bool = False) -> GuardianData:
    """Validate guardian input coming from a request body.

    Full data needs name and phone; relationship defaults to father.
    Partial data validates only what is present.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("Guardian data must be an object")

    def present(key: str) -> bool:
        return key in raw and raw[key] is not None

    name = phone = None
    if not partial or present("name"):
        name = require_non_empty(raw.get("name"), "Guardian name")
    if not partial or present("phone"):
        phone = require_phone(raw.get("phone"), "Guardian phone")

    relationship: Optional[Relationship] = None
    if present("relationship") or not partial:
        relationship = require_enum(raw.get("relationship"), Relationship, "relationship", default=DEFAULT_RELATIONSHIP)

    alternate_phone = optional_text(raw.get("alternate_phone"))
    if alternate_phone:
        alternate_phone = require_phone(alternate_phone, "Alternate phone")
    whatsapp_phone = optional_text(raw.get("whatsapp_phone"))
    if whatsapp_phone:
        whatsapp_phone = require_phone(whatsapp_phone, "WhatsApp phone")

    whatsapp_enabled: Optional[bool] = None
    if present("whatsapp_enabled"):
        whatsapp_enabled = bool(raw["whatsapp_enabled"])
    elif not partial:
        whatsapp_enabled = True

    return GuardianData(
        name=name,
        phone=phone,
        relationship=relationship,
        alternate_phone=alternate_phone,
        address=optional_text(raw.get("address")),
        whatsapp_enabled=whatsapp_enabled,
        whatsapp_phone=whatsapp_phone,
    )


class GuardianService:
    """Use case: resolve or create the guardian of an application."""

    def __init__(self, guardians: GuardianRepository):
        self._guardians = guardians

    def get(self, guardian_id: int) -> Guardian:
        guardian = self._guardians.get_by_id(int(guardian_id))
        if not guardian:
            raise NotFoundError(f"Guardian {guardian_id} not found")
        return guardian

    def resolve(
        self,
        *,
        guardian_id: Optional[int] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> Guardian:
        """Reuse an existing guardian by id, or create one from inline data.

        Inline data always creates a new record (no de-duplication by phone or name).
        """
        if guardian_id is not None:
            return self.get(guardian_id)
        if data is None:
            raise ValidationError("Guardian data is required")

        parsed = parse_guardian_data(data)
        new_id = self._guardians.create(parsed)
        logger.info("Guardian %s created", new_id)
        return self.get(new_id)

    def update(self, guardian_id: int, data: Mapping[str, Any]) -> Guardian:
        parsed = parse_guardian_data(data, partial=True)
        if not self._guardians.update(int(guardian_id), parsed):
            raise NotFoundError(f"Guardian {guardian_id} not found")
        return self.get(guardian_id)
