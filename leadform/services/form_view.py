"""View-update boundary between the submission core and whatever renders the form."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Set


@dataclass(frozen=True)
class RawFormValues:
    name: str = ""
    email: str = ""
    phone: str = ""
    accepted_policy: bool = False

    def as_field_map(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "consent": self.accepted_policy,
        }


class FormView(Protocol):
    def read_values(self) -> RawFormValues:
        ...

    def mark_error(self, field: str, message: str) -> None:
        ...

    def clear_error(self, field: str) -> None:
        ...

    def set_loading(self, loading: bool) -> None:
        """Disable the submit control and show the loading state, or undo both."""
        ...

    def alert(self, message: str) -> None:
        ...

    def navigate(self, url: str) -> None:
        ...


@dataclass
class InMemoryFormView:
    """FormView that records every side effect instead of rendering it."""

    values: RawFormValues = field(default_factory=RawFormValues)
    errors: Dict[str, str] = field(default_factory=dict)
    alerts: List[str] = field(default_factory=list)
    submit_disabled: bool = False
    loading: bool = False
    disable_count: int = 0
    enable_count: int = 0
    navigated_to: Optional[str] = None

    def read_values(self) -> RawFormValues:
        return self.values

    def mark_error(self, field: str, message: str) -> None:
        self.errors[field] = message

    def clear_error(self, field: str) -> None:
        self.errors.pop(field, None)

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        self.submit_disabled = loading
        if loading:
            self.disable_count += 1
        else:
            self.enable_count += 1

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def navigate(self, url: str) -> None:
        self.navigated_to = url

    @property
    def error_fields(self) -> Set[str]:
        return set(self.errors)
