"""Primary key generation: every docflow table uses CUID2 string ids."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant id (CUID2, 24 lowercase chars)."""
    return _next_cuid()
