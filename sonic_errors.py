from __future__ import annotations


class SonicAlchemistError(Exception):
    """Base error for the SonicAlchemist service."""


class InputValidationError(SonicAlchemistError):
    """Raised when a request or form payload fails its schema."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        detail = "; ".join(f"{name}: {msg}" for name, msg in self.field_errors.items())
        super().__init__(f"Invalid input ({detail})" if detail else "Invalid input")


class InvocationError(SonicAlchemistError):
    """Raised when the model provider fails to produce a usable response."""


class ContractViolationError(InvocationError):
    """Raised when the provider's reply does not satisfy the output schema."""


class SubmissionInProgressError(SonicAlchemistError):
    """Raised when a form is submitted while a previous submission is loading."""
