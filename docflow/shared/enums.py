"""Shared enumerations for docflow.

Cross-cutting enums used by application and infrastructure (approval step
state). Field types live in docflow.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ApprovalStepStatus(_ValuesMixin, str, Enum):
    """Approval step state.

    A rejection closes the chain: later pending levels become SKIPPED.
    Sending the document back to its initial status reopens every step.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SKIPPED = "skipped"
