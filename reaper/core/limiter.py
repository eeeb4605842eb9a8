"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

MANUAL_REAP_LIMIT = "120/minute"
STATUS_LIMIT = "60/minute"

limit_manual_reap = limiter.limit(MANUAL_REAP_LIMIT)
limit_status = limiter.limit(STATUS_LIMIT)
