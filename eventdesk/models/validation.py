"""Draft validation.

``validate`` is pure and reports every field on every call. What the user
sees is a separate, derived step: ``visible_errors`` only reports fields
that have been touched, while ``require_valid`` (the submit gate) ignores
the touched set entirely.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import AbstractSet, Dict, Tuple

from eventdesk.models.errors import ValidationError
from eventdesk.models.event import BROWSER_SAFE_COLORS, Event

# +X (XXX) XXX-XXXX, XXX-XXX-XXXX, XXXXXXXXXX and the like.
PHONE_PATTERN = re.compile(r"\+?(?:\d{1,3})?\s?\(?\d{3}\)?[\s-]?\d{3}-?\d{4}")

ERROR_MESSAGES: Dict[str, str] = {
    "name": "Name is required",
    "description": "Description is required",
    "company": "Company is required",
    "color": "Color is required",
    "phone": "Invalid phone format (ex. '+X (XXX) XXX-XXXX')",
}


def is_valid_phone(value: str) -> bool:
    """Phone is optional: the empty string is always valid."""
    if not value:
        return True
    return PHONE_PATTERN.fullmatch(value) is not None


def is_valid_color(value: str) -> bool:
    return bool(value) and value in BROWSER_SAFE_COLORS


@dataclass(frozen=True)
class ValidationResult:
    """Per-field invalid flags. ``True`` means the field is invalid."""

    name: bool = False
    description: bool = False
    company: bool = False
    color: bool = False
    phone: bool = False

    @property
    def invalid_fields(self) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name))

    @property
    def is_valid(self) -> bool:
        return not self.invalid_fields


VALIDATED_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(ValidationResult))


def validate(draft: Event) -> ValidationResult:
    return ValidationResult(
        name=not draft.name,
        description=not draft.description,
        company=not draft.company,
        color=not is_valid_color(draft.color),
        phone=not is_valid_phone(draft.phone),
    )


def visible_errors(result: ValidationResult, touched: AbstractSet[str]) -> Dict[str, str]:
    """Messages for invalid fields the user has already touched."""
    return {
        name: ERROR_MESSAGES[name]
        for name in result.invalid_fields
        if name in touched
    }


def require_valid(draft: Event) -> ValidationResult:
    """Submit gate.

    Raises:
        ValidationError: If any field is invalid, regardless of touched state.
    """
    result = validate(draft)
    if not result.is_valid:
        raise ValidationError(result.invalid_fields)
    return result
