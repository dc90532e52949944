"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from docflow.shared.enums import ApprovalStepStatus
from docflow.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = [
    "ApprovalStepStatus",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
