"""
Stockroom Backend — Request Logging Middleware
================================================

What:  One structured access-log line for every HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client IP.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Log levels follow the status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

A 401 also names the API-key header the route expected, taken from the
`WWW-Authenticate: ApiKey header="..."` challenge the error handler sets.
The key value itself, like every other header and the request body, is
never logged.
"""

import logging
import re
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from stockroom.middleware.request_id import request_id_var

logger = logging.getLogger("stockroom.access")

_CHALLENGE_HEADER = re.compile(r'header="([^"]+)"')


def expected_key_header(response: Response) -> Optional[str]:
    """Header name from a 401's ApiKey challenge, or None."""
    if response.status_code != 401:
        return None
    match = _CHALLENGE_HEADER.search(response.headers.get("WWW-Authenticate", ""))
    return match.group(1) if match else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Polled by orchestrators
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        level = logging.ERROR if status >= 500 else logging.WARNING if status >= 400 else logging.INFO
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        key_header = expected_key_header(response)

        message = "%s %s %d %.1fms [%s] from %s"
        args = [request.method, request.url.path, status, elapsed_ms, rid, client_ip]
        if key_header:
            message += " (API key header '%s' missing or wrong)"
            args.append(key_header)

        logger.log(
            level,
            message,
            *args,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client_ip,
                "api_key_header": key_header,
            },
        )
        return response
