"""Request logging middleware."""
from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger("linkhub.access")


async def access_log(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log method, path, client address, status and duration of each request."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    client = request.client.host if request.client else "-"
    logger.info(
        "%s %s remote=%s status=%d time=%.2fms",
        request.method,
        request.url.path,
        client,
        response.status_code,
        elapsed_ms,
    )
    return response
