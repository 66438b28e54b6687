"""
api/errors.py -- Render any failure as a JSON-LD error document.

Every error response has the same shape so clients parse one schema:

    {"@context": {...}, "@type": "oslc:Error", "uuid": "...", "errorMessage": "..."}

ServiceError messages are written for clients and go out verbatim. Anything
else is an internal failure: it is logged with its traceback and the client
gets a generic message, never the exception text.
"""

from __future__ import annotations

import logging
import uuid

from fastapi.responses import JSONResponse
from rdflib import BNode, Graph, Literal

from core.codec import encode
from core.contexts import ERROR_RESPONSE_CONTEXT, ERROR_RESPONSE_FRAME
from core.errors import ServiceError
from core.namespaces import MU, OSLC, RDF

logger = logging.getLogger("vendorlogin.api")

GENERIC_MESSAGE = "An unexpected error occurred."
DEFAULT_STATUS = 400


def error_message(exc: Exception) -> str:
    if isinstance(exc, ServiceError):
        return exc.message
    return GENERIC_MESSAGE


def error_status(exc: Exception) -> int:
    """Status hint carried by the error, 400 when it carries none."""
    return getattr(exc, "status_code", None) or DEFAULT_STATUS


def error_to_graph(exc: Exception) -> Graph:
    """Build one oslc:Error record for the exception. Pure; no I/O."""
    graph = Graph()
    error = BNode(str(uuid.uuid4()))
    graph.add((error, RDF.type, OSLC.Error))
    graph.add((error, MU.uuid, Literal(str(uuid.uuid4()))))
    graph.add((error, OSLC.message, Literal(error_message(exc))))
    return graph


def error_response(exc: Exception) -> JSONResponse:
    if not isinstance(exc, ServiceError):
        logger.error("Unhandled exception", exc_info=exc)
    document = encode(error_to_graph(exc), ERROR_RESPONSE_CONTEXT, ERROR_RESPONSE_FRAME)
    return JSONResponse(status_code=error_status(exc), content=document)
