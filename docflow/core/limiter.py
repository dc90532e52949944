"""Per-client write throttling (slowapi, keyed by remote address).

Definition writes get the tighter limit: they change validation for every
document of a type. Reads are not limited.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

DOCUMENT_WRITE_LIMIT = "120/minute"
DEFINITION_WRITE_LIMIT = "30/minute"

limiter = Limiter(key_func=get_remote_address)

limit_writes = limiter.limit(DOCUMENT_WRITE_LIMIT)
limit_definition_writes = limiter.limit(DEFINITION_WRITE_LIMIT)
