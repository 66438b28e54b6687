"""Unit tests for core/codec.py -- JSON-LD decode/encode, pure, no I/O.

Covers:
- decode() with the default login context and type
- decode() failures: non-object body, remote @context, empty result
- encode() framing: session and error documents
- encode() then decode() keeps uuid, account and created
"""

import pytest
from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import XSD

from core.codec import decode, encode, enrich_login_document
from core.contexts import (
    ERROR_RESPONSE_CONTEXT,
    ERROR_RESPONSE_FRAME,
    LOGIN_REQUEST_CONTEXT,
    LOGIN_RESPONSE_CONTEXT,
    LOGIN_RESPONSE_FRAME,
)
from core.errors import MalformedPayload
from core.namespaces import DCT, LBLOD_AUTH, MU, MU_ACCOUNT, OSLC, PAV, RDF, SESSION, WOT_SEC

ORG = URIRef("http://data.lblod.info/id/bestuurseenheden/org-1")
PUB = URIRef("http://data.lblod.info/vendors/vendor-1")
SESSION_IRI = URIRef("urn:s1")
CREATED = Literal("2026-10-17T10:00:00+00:00", datatype=XSD.dateTime)


def _login_document():
    return {"organization": str(ORG), "publisher": {"uri": str(PUB), "key": "abc"}}


def _session_graph() -> Graph:
    g = Graph()
    g.add((SESSION_IRI, RDF.type, SESSION.Session))
    g.add((SESSION_IRI, MU.uuid, Literal("session-uuid")))
    g.add((SESSION_IRI, DCT.created, CREATED))
    g.add((SESSION_IRI, MU_ACCOUNT.account, PUB))
    return g


# ---------------------------------------------------------------------------
# enrich_login_document
# ---------------------------------------------------------------------------


class TestEnrichLoginDocument:
    def test_adds_context_and_type(self):
        enriched = enrich_login_document(_login_document())
        assert enriched["@context"] == LOGIN_REQUEST_CONTEXT
        assert enriched["@type"] == ["wotSec:APIKeySecurityScheme", "lblodAuth:LoginRequest"]

    def test_keeps_caller_values(self):
        doc = {**_login_document(), "@type": "lblodAuth:LoginRequest", "@context": {"x": "http://x/"}}
        enriched = enrich_login_document(doc)
        assert enriched["@type"] == "lblodAuth:LoginRequest"
        assert enriched["@context"] == {"x": "http://x/"}

    def test_does_not_mutate_input(self):
        doc = _login_document()
        enrich_login_document(doc)
        assert "@context" not in doc


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------


class TestDecode:
    def test_login_request_statements(self):
        graph = decode(enrich_login_document(_login_document()), LOGIN_REQUEST_CONTEXT)

        assert (None, PAV.createdBy, ORG) in graph
        assert (None, PAV.providedBy, PUB) in graph
        assert (PUB, MU_ACCOUNT.key, Literal("abc")) in graph

    def test_default_types_are_expanded(self):
        graph = decode(enrich_login_document(_login_document()), LOGIN_REQUEST_CONTEXT)
        subject = graph.value(predicate=PAV.createdBy, object=ORG)
        assert isinstance(subject, BNode)
        assert (subject, RDF.type, WOT_SEC.APIKeySecurityScheme) in graph
        assert (subject, RDF.type, LBLOD_AUTH.LoginRequest) in graph

    def test_base_context_used_when_missing(self):
        graph = decode(_login_document(), LOGIN_REQUEST_CONTEXT)
        assert (PUB, MU_ACCOUNT.key, Literal("abc")) in graph

    def test_explicit_context_wins(self):
        doc = {
            "@context": {"ex": "http://example.org/"},
            "@id": "http://example.org/a",
            "ex:name": "A",
        }
        graph = decode(doc, LOGIN_REQUEST_CONTEXT)
        assert (URIRef("http://example.org/a"), URIRef("http://example.org/name"), Literal("A")) in graph

    def test_non_object_rejected(self):
        with pytest.raises(MalformedPayload):
            decode([_login_document()], LOGIN_REQUEST_CONTEXT)

    def test_remote_context_is_not_fetched(self):
        doc = {**_login_document(), "@context": "http://attacker.example/context.jsonld"}
        with pytest.raises(MalformedPayload):
            decode(doc, LOGIN_REQUEST_CONTEXT)

    def test_document_without_statements_rejected(self):
        with pytest.raises(MalformedPayload, match="does not contain any linked data"):
            decode({"unmapped": "value"}, {})


# ---------------------------------------------------------------------------
# encode
# ---------------------------------------------------------------------------


class TestEncode:
    def test_session_document_fields(self):
        doc = encode(_session_graph(), LOGIN_RESPONSE_CONTEXT, LOGIN_RESPONSE_FRAME)
        assert doc["uuid"] == "session-uuid"
        assert doc["account"] == str(PUB)
        assert "created" in doc
        assert doc["@id"] == str(SESSION_IRI)
        assert "@context" in doc

    def test_missing_framed_field_is_present_as_null(self):
        g = _session_graph()
        g.remove((SESSION_IRI, DCT.created, None))
        doc = encode(g, LOGIN_RESPONSE_CONTEXT, LOGIN_RESPONSE_FRAME)
        assert "created" in doc
        assert doc["created"] is None

    def test_error_document_fields(self):
        g = Graph()
        error = BNode()
        g.add((error, RDF.type, OSLC.Error))
        g.add((error, MU.uuid, Literal("error-uuid")))
        g.add((error, OSLC.message, Literal("Something went wrong")))

        doc = encode(g, ERROR_RESPONSE_CONTEXT, ERROR_RESPONSE_FRAME)
        assert doc["uuid"] == "error-uuid"
        assert doc["errorMessage"] == "Something went wrong"

    def test_encode_then_decode_keeps_session_statements(self):
        session_graph = _session_graph()
        doc = encode(session_graph, LOGIN_RESPONSE_CONTEXT, LOGIN_RESPONSE_FRAME)

        decoded = decode(doc, LOGIN_RESPONSE_CONTEXT)
        for predicate in (MU.uuid, MU_ACCOUNT.account, DCT.created):
            assert set(decoded.objects(SESSION_IRI, predicate)) == set(session_graph.objects(SESSION_IRI, predicate))
