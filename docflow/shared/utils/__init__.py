"""Cross-cutting helpers: UTC clock and identifier generation."""

from docflow.shared.utils.datetime import ensure_utc, utc_now
from docflow.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
