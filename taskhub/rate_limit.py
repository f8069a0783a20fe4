"""
Global slowapi rate limiter.

Imported by auth/router.py for per-endpoint limits.  Mounted onto app.state in
main.py so slowapi middleware can find it.

Storage: in-memory by default; point RATE_LIMIT_STORAGE_URI at Redis when
running more than one worker.  RATE_LIMIT_ENABLED=false switches it off.
"""
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

REGISTER_LIMIT = "10/minute"
LOGIN_LIMIT = "10/minute"

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() != "false",
)
