"""Progressive phone masking for the landing-page phone field."""
from __future__ import annotations

import re
from dataclasses import dataclass

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class MaskedInput:
    value: str
    cursor: int


class PhoneMask:
    """Renders ``+CC (DD) XXXXX-XXXX`` as digits are typed.

    The country code is forced onto the front of whatever the user types and
    the local part is capped at ``max_local_digits``. Up to ten local digits
    render as the legacy ``(DD) XXXX-XXXX`` landline split; the eleventh digit
    switches to the ``(DD) XXXXX-XXXX`` mobile split.
    """

    def __init__(self, country_code: str = "55", max_local_digits: int = 11):
        self.country_code = country_code
        self.max_local_digits = max_local_digits

    @property
    def prefix(self) -> str:
        return f"+{self.country_code}"

    def digits_only(self, value: str) -> str:
        return _NON_DIGITS.sub("", value)

    def local_digits(self, value: str) -> str:
        numbers = self.digits_only(value)
        if not numbers.startswith(self.country_code):
            numbers = self.country_code + numbers
        return numbers[len(self.country_code):][: self.max_local_digits]

    def apply_mask(self, value: str) -> str:
        local = self.local_digits(value)

        formatted = self.prefix
        if not local:
            return formatted

        formatted += " (" + local[:2]
        if len(local) <= 2:
            return formatted

        formatted += ") "
        if len(local) <= 6:
            formatted += local[2:]
        elif len(local) <= 10:
            formatted += local[2:6] + "-" + local[6:10]
        else:
            formatted += local[2:7] + "-" + local[7:11]
        return formatted

    def initial_value(self) -> str:
        """Value the phone control holds before the user types anything."""
        return self.prefix + " "

    def blocks_backspace(self, cursor: int) -> bool:
        # Keeps the "+CC " prefix from being erased.
        return cursor <= len(self.initial_value())

    def reposition_cursor(self, old_value: str, new_value: str, cursor: int) -> int:
        moved = cursor + len(new_value) - len(old_value)
        return max(0, min(moved, len(new_value)))

    def on_input(self, value: str, cursor: int) -> MaskedInput:
        masked = self.apply_mask(value)
        return MaskedInput(value=masked, cursor=self.reposition_cursor(value, masked, cursor))


# Global instance with production defaults
phone_mask = PhoneMask(country_code="55")


def digits_only(value: str) -> str:
    return phone_mask.digits_only(value)


def apply_mask(value: str) -> str:
    return phone_mask.apply_mask(value)
