"""
auth/validator.py -- Minimal shape check for a decoded login request.

A login graph must name an organization (pav:createdBy), a publisher
(pav:providedBy) and the publisher's API key (muAccount:key). Only the first
match of each is used; a request is one vendor logging in for one
organization.

The checks run before anything touches the store, so a malformed request
never costs a query.
"""

from __future__ import annotations

from rdflib import Graph, Literal, URIRef

from core.errors import MalformedPayload, MissingField
from core.models import IRI_RE, LoginDetails
from core.namespaces import MU_ACCOUNT, PAV, RDF, SESSION

MISSING_ORGANIZATION = "The payload is missing an organization field"
MISSING_PUBLISHER = "The payload is missing a publisher object with URI and key"
MISSING_KEY = "The payload is missing its API key for the publisher"
INVALID_ORGANIZATION = "The organization is not a valid IRI"
INVALID_PUBLISHER = "The publisher URI is not a valid IRI"


def _first(values):
    return next(iter(values), None)


def _writable(term) -> bool:
    return not isinstance(term, URIRef) or IRI_RE.match(term) is not None


def validate(graph: Graph) -> None:
    """Raise MissingField unless organization, publisher and key are all present.

    The publisher must be an IRI (a blank node cannot identify a vendor in the
    store) and the key must be a literal. An IRI that N-Triples cannot carry
    raises MalformedPayload.
    """
    organization = _first(graph.objects(None, PAV.createdBy))
    if organization is None:
        raise MissingField("organization", MISSING_ORGANIZATION)
    if not _writable(organization):
        raise MalformedPayload(INVALID_ORGANIZATION)

    publisher = _first(graph.objects(None, PAV.providedBy))
    if not isinstance(publisher, URIRef):
        raise MissingField("publisher", MISSING_PUBLISHER)
    if not _writable(publisher):
        raise MalformedPayload(INVALID_PUBLISHER)

    key = _first(graph.objects(publisher, MU_ACCOUNT.key))
    if not isinstance(key, Literal):
        raise MissingField("key", MISSING_KEY)


def extract_login_details(graph: Graph) -> LoginDetails:
    """Pull the login terms out of a validated graph.

    The session subject is the node typed session:Session, which the route
    adds from the Mu-Session-Id header after validation.
    """
    organization = _first(graph.objects(None, PAV.createdBy))
    if not isinstance(organization, URIRef):
        raise MissingField("organization", MISSING_ORGANIZATION)
    publisher = _first(graph.objects(None, PAV.providedBy))
    key = _first(graph.objects(publisher, MU_ACCOUNT.key))
    session = _first(graph.subjects(RDF.type, SESSION.Session))
    return LoginDetails(organization=organization, publisher=publisher, key=key, session=session)
