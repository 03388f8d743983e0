"""Opaque identifiers for events and concepts, validated once at the boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ulid import ULID

from ..errors import ValidationError


@dataclass(frozen=True)
class _Identifier:
    value: str

    prefix: ClassVar[str] = ""
    kind: ClassVar[str] = "Identifier"

    @classmethod
    def generate(cls):
        """New ULID-based identifier, e.g. evt_01HV...."""
        return cls(f"{cls.prefix}_{ULID()}")

    @classmethod
    def parse(cls, value: str):
        """
        Validating factory.

        Raises:
            ValidationError: If the value is empty after trimming.
        """
        trimmed = str(value).strip() if value is not None else ""
        if not trimmed:
            raise ValidationError(f"{cls.kind} cannot be empty", field=cls.kind, value=value)
        return cls(trimmed)

    @classmethod
    def of(cls, value: str):
        return cls(value)

    @property
    def is_ulid(self) -> bool:
        payload = self.value.removeprefix(f"{self.prefix}_")
        try:
            ULID.from_str(payload)
        except ValueError:
            return False
        return True

    def __str__(self) -> str:
        return self.value


class EventId(_Identifier):
    prefix = "evt"
    kind = "EventId"


class ConceptId(_Identifier):
    prefix = "cpt"
    kind = "ConceptId"
