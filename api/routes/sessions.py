"""
api/routes/sessions.py -- Vendor login and logout endpoints.

Routes:
  POST   /sessions          -- log a vendor in; 201 with the session document
  DELETE /sessions/current  -- log the session's account out; 204

Both require the Mu-Session-Id header, which the mu-identifier attaches to
every request before it reaches this service. Both answer with
"mu-auth-allow-groups: CLEAR" so mu-authorization recomputes the session's
access groups on the next request.

Security:
  POST /sessions is rate-limited per Mu-Session-Id (LOGIN_RATE_LIMIT, default
  10/minute). This throttles a client that keeps its identifier session. It
  does not stop a client that drops the identifier cookie and gets a fresh
  session IRI on every request; that limit belongs at the perimeter.
  The content type and the header are checked before the body is read, so a
  request that fails them never reaches the store.
  The session header becomes a URIRef only after IRI_RE accepts it; the
  query layer would refuse to serialize anything else.

Store calls block (requests), so they run in a worker thread; the
event loop keeps serving other requests while a login waits on the store.
"""

import asyncio
import json
import re
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from rdflib import URIRef

from api.limiter import limiter
from auth.login import VendorLogin
from auth.validator import validate
from core.codec import decode, encode, enrich_login_document
from core.config import get_settings
from core.contexts import LOGIN_REQUEST_CONTEXT, LOGIN_RESPONSE_CONTEXT, LOGIN_RESPONSE_FRAME
from core.errors import MalformedPayload, MissingHeader
from core.models import ALLOW_GROUPS_CLEAR, ALLOW_GROUPS_HEADER, IRI_RE, SESSION_HEADER
from core.namespaces import RDF, SESSION

router = APIRouter()

_CONTENT_TYPE_RE = re.compile(r"application/(ld\+)?json")


# ---------------------------------------------------------------------------
# Request checks
# ---------------------------------------------------------------------------


def ensure_valid_content_type(content_type: str | None) -> None:
    if not content_type or not _CONTENT_TYPE_RE.search(content_type):
        raise MalformedPayload("Content-Type not valid, only application/json or application/ld+json are accepted")


def session_from_headers(request: Request) -> URIRef:
    """Return the Mu-Session-Id header as an IRI, or raise."""
    value = request.headers.get(SESSION_HEADER, "").strip()
    if not value:
        raise MissingHeader(SESSION_HEADER)
    if not IRI_RE.match(value):
        raise MalformedPayload(f'The "{SESSION_HEADER.lower()}" header is not a valid IRI.')
    return URIRef(value)


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw)
    except ValueError as e:
        raise MalformedPayload("The request body is not valid JSON.") from e


def _vendor_login(request: Request) -> VendorLogin:
    return request.app.state.vendor_login


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/sessions", status_code=201)
@limiter.limit(get_settings().login_rate_limit)
async def login(request: Request) -> JSONResponse:
    """Verify a vendor's API key for an organization and open a session.

    Any session the vendor's account already holds is removed first. The body
    is a JSON-LD login request; plain JSON is accepted and gets the default
    login context and type.
    """
    ensure_valid_content_type(request.headers.get("content-type"))
    session = session_from_headers(request)
    body = await _read_json(request)
    if not isinstance(body, dict):
        raise MalformedPayload("The request body must be a JSON object.")

    graph = decode(enrich_login_document(body), LOGIN_REQUEST_CONTEXT)
    validate(graph)
    graph.add((session, RDF.type, SESSION.Session))

    session_graph = await asyncio.to_thread(_vendor_login(request).login, graph)

    document = encode(session_graph, LOGIN_RESPONSE_CONTEXT, LOGIN_RESPONSE_FRAME)
    return JSONResponse(
        status_code=201,
        content=document,
        headers={ALLOW_GROUPS_HEADER: ALLOW_GROUPS_CLEAR},
    )


@router.delete("/sessions/current", status_code=204)
async def logout(request: Request) -> Response:
    """Remove every session of the account behind the current session."""
    session = session_from_headers(request)
    await asyncio.to_thread(_vendor_login(request).logout, session)
    return Response(status_code=204, headers={ALLOW_GROUPS_HEADER: ALLOW_GROUPS_CLEAR})
