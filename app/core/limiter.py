"""
Shared slowapi rate limiter instance and the app-wide limit dependency.

enforce_rate_limit is installed as a FastAPI app dependency, so every API
route counts against the per-IP ceiling from settings (RATE_LIMIT_MAX_REQUESTS
per RATE_LIMIT_WINDOW_SEC). It runs before route-level dependencies such as
the admin gate. A single instance keeps one in-memory counter store for the
whole process.
"""

import math
import time
from typing import Annotated

from fastapi import Depends, Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import Settings, get_settings
from app.core.errors import RateLimitError

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


def enforce_rate_limit(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Count one hit for the client address; 429 once the window is used up."""
    if not settings.RATE_LIMIT_ENABLED:
        return
    item = parse(settings.rate_limit)
    key = get_remote_address(request)
    if limiter.limiter.hit(item, key):
        return
    reset_at = limiter.limiter.get_window_stats(item, key)[0]
    retry_after = max(1, math.ceil(reset_at - time.time()))
    raise RateLimitError(
        "Too many requests from this IP, please try again later.",
        headers={"Retry-After": str(retry_after)},
    )
