from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Relationship


@dataclass(frozen=True)
class Guardian:
    """Domain entity: the adult responsible for one or more students."""

    guardian_id: int
    name: str
    phone: str
    relationship: Relationship
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    whatsapp_enabled: bool = True
    whatsapp_phone: Optional[str] = None

    @property
    def whatsapp_number(self) -> str:
        return self.whatsapp_phone or self.phone

    def to_dict(self) -> dict:
        return {
            "id": self.guardian_id,
            "name": self.name,
            "phone": self.phone,
            "alternate_phone": self.alternate_phone,
            "relationship": self.relationship.value,
            "address": self.address,
            "whatsapp_enabled": self.whatsapp_enabled,
            "whatsapp_number": self.whatsapp_number,
        }


@dataclass(frozen=True)
class GuardianData:
    """Validated guardian fields; ``None`` means "not provided" on partial updates."""

    name: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[Relationship] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    whatsapp_enabled: Optional[bool] = None
    whatsapp_phone: Optional[str] = None

    def changes(self) -> dict:
        """Only the provided fields, as column -> value."""
        out = {}
        for key in ("name", "phone", "alternate_phone", "address", "whatsapp_enabled", "whatsapp_phone"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        if self.relationship is not None:
            out["relationship"] = self.relationship
        return out
