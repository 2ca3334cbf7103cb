"""Per-field validation rules for the landing-page form."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from leadform.services.phone_mask import digits_only

FIELDS = ("name", "email", "phone", "consent")

NAME_MIN_LENGTH = 3
PHONE_MIN_DIGITS = 12  # country code + DDD + 8
PHONE_MAX_DIGITS = 13  # country code + DDD + 9

_NAME_PATTERN = re.compile(r"^[a-zA-ZáàâãéèêíïóôõöúçñÁÀÂÃÉÈÊÍÏÓÔÕÖÚÇÑ\s]+$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class FieldValidationResult:
    valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> "FieldValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "FieldValidationResult":
        return cls(valid=False, message=message)


def validate_name(name: str) -> FieldValidationResult:
    trimmed = name.strip()

    if len(trimmed) < NAME_MIN_LENGTH:
        return FieldValidationResult.fail(f"Nome deve ter pelo menos {NAME_MIN_LENGTH} caracteres")

    if not _NAME_PATTERN.match(trimmed):
        return FieldValidationResult.fail("Nome deve conter apenas letras")

    return FieldValidationResult.ok()


def validate_email(email: str) -> FieldValidationResult:
    trimmed = email.strip().lower()

    if not trimmed:
        return FieldValidationResult.fail("E-mail é obrigatório")

    if not _EMAIL_PATTERN.fullmatch(trimmed):
        return FieldValidationResult.fail("E-mail inválido")

    return FieldValidationResult.ok()


def validate_phone(phone: str, country_code: str = "55") -> FieldValidationResult:
    numbers = digits_only(phone)

    if len(numbers) < PHONE_MIN_DIGITS:
        return FieldValidationResult.fail("Telefone incompleto")

    if len(numbers) > PHONE_MAX_DIGITS:
        return FieldValidationResult.fail("Telefone com muitos dígitos")

    if not numbers.startswith(country_code):
        return FieldValidationResult.fail(f"Telefone deve começar com +{country_code}")

    return FieldValidationResult.ok()


def validate_consent(accepted: bool) -> FieldValidationResult:
    if not accepted:
        return FieldValidationResult.fail("Você deve aceitar a política de privacidade")
    return FieldValidationResult.ok()


_VALIDATORS: Dict[str, Callable[[Any], FieldValidationResult]] = {
    "name": validate_name,
    "email": validate_email,
    "consent": validate_consent,
}


def validate_field(field: str, value: Any, country_code: str = "55") -> FieldValidationResult:
    """Run the rule for a single field, as on blur."""
    if field == "phone":
        return validate_phone(value, country_code=country_code)
    try:
        validator = _VALIDATORS[field]
    except KeyError:
        raise ValueError(f"unknown form field: {field!r}") from None
    return validator(value)


def validate_form(values: Mapping[str, Any], country_code: str = "55") -> Dict[str, FieldValidationResult]:
    """Validate every field; never stops at the first failure."""
    return {
        field: validate_field(field, values[field], country_code=country_code)
        for field in FIELDS
    }
