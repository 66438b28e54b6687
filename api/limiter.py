"""
api/limiter.py -- Shared slowapi rate limiter instance.

Import this in both api/main.py (to mount as middleware) and
api/routes/sessions.py (to apply per-route limits with @limiter.limit()).

Requests reach this service through the mu-identifier and the dispatcher, so
the remote address is the proxy's for every vendor. Counting per address
would throttle all vendors together; counting per Mu-Session-Id throttles
each client separately. The address is the fallback for requests without the
header (those fail the header check anyway).

The limit only holds for a client that keeps its session. One that drops the
identifier cookie gets a new session IRI, and so a new bucket, per request.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from core.models import SESSION_HEADER


def session_or_remote_address(request: Request) -> str:
    return request.headers.get(SESSION_HEADER) or get_remote_address(request)


limiter = Limiter(key_func=session_or_remote_address, storage_uri="memory://")
