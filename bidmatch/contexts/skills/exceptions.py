"""Custom exceptions for the skills context."""

from typing import Any, Optional


class ValidationError(ValueError):
    """
    Raised when a dictionary, JD spec or tech stack input breaks an invariant.

    Raised before any state changes, so a failed mutation leaves the aggregate
    exactly as it was.

    Attributes:
        message: Error description
        field: Name of the offending field (e.g., 'version', 'layer_weights')
        value: The rejected value
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value

        parts = [message]
        if field:
            parts.append(f"Field: {field}")
        if value is not None:
            shown = repr(value)
            parts.append(f"Value: {shown[:200] + '...' if len(shown) > 200 else shown}")

        super().__init__("\n".join(parts))


class ReviewQueueError(ValidationError):
    """Raised for review queue operations on missing or already decided skills."""

    pass
