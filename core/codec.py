"""
core/codec.py -- JSON-LD <-> RDF graph conversion.

decode() turns a posted JSON-LD document into a flat rdflib Graph; encode()
turns a Graph back into a framed, compacted JSON-LD document for the
response. Both are pure: no store access, no global state.

PyLD does the JSON-LD algorithms (toRdf, fromRdf, frame, compact). Its RDF
dataset is a plain dict of quads, so the bridge to rdflib is a term-by-term
mapping in each direction rather than a serialization round trip.

Security:
  Remote @context documents are never fetched. A vendor-supplied
  "@context": "http://..." would otherwise make the service issue arbitrary
  outbound requests. _refuse_remote_documents replaces PyLD's loader for
  every call made here.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from pyld import jsonld
from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF, XSD
from rdflib.term import Node

from core.contexts import LOGIN_REQUEST_CONTEXT, LOGIN_REQUEST_TYPES
from core.errors import MalformedPayload

logger = logging.getLogger("vendorlogin.codec")

_RDF_LANG_STRING = str(RDF.langString)
_XSD_STRING = str(XSD.string)


def _refuse_remote_documents(url: str, options: dict | None = None) -> dict:
    raise jsonld.JsonLdError(
        "Remote JSON-LD documents are not loaded.",
        "jsonld.LoadDocumentError",
        {"url": url},
        code="loading remote context failed",
    )


_JSONLD_OPTIONS: dict[str, Any] = {"documentLoader": _refuse_remote_documents}


# ---------------------------------------------------------------------------
# Term mapping
# ---------------------------------------------------------------------------


def _from_pyld_term(node: dict[str, Any]) -> Node:
    """Map a PyLD dataset term ({"type", "value", ...}) onto an rdflib term."""
    kind = node["type"]
    value = node["value"]
    if kind == "IRI":
        return URIRef(value)
    if kind == "blank node":
        return BNode(value[2:] if value.startswith("_:") else value)
    language = node.get("language")
    if language:
        return Literal(value, lang=language)
    datatype = node.get("datatype")
    if not datatype or datatype == _XSD_STRING:
        return Literal(value)
    return Literal(value, datatype=URIRef(datatype))


def _to_pyld_term(term: Node) -> dict[str, Any]:
    """Map an rdflib term onto a PyLD dataset term."""
    if isinstance(term, URIRef):
        return {"type": "IRI", "value": str(term)}
    if isinstance(term, BNode):
        return {"type": "blank node", "value": f"_:{term}"}
    if isinstance(term, Literal):
        if term.language:
            return {
                "type": "literal",
                "value": str(term),
                "datatype": _RDF_LANG_STRING,
                "language": term.language,
            }
        return {
            "type": "literal",
            "value": str(term),
            "datatype": str(term.datatype) if term.datatype else _XSD_STRING,
        }
    raise TypeError(f"Cannot convert {type(term).__name__} to a JSON-LD term")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def enrich_login_document(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a login body with the default @context and @type filled in.

    Vendors may post plain JSON ({"organization": ..., "publisher": {...}});
    the defaults turn it into the JSON-LD a login request is expected to be.
    Values the caller did supply are left untouched.
    """
    enriched = dict(document)
    enriched.setdefault("@context", copy.deepcopy(LOGIN_REQUEST_CONTEXT))
    enriched.setdefault("@type", list(LOGIN_REQUEST_TYPES))
    return enriched


def decode(document: Any, base_context: dict[str, Any] | None = None) -> Graph:
    """Expand a JSON-LD document into a flat Graph.

    Statements from every graph of the expanded dataset (default and named)
    are merged; graph names carry no meaning for a login request.

    Raises MalformedPayload if the document is not a JSON object, cannot be
    expanded, or expands to nothing.
    """
    if not isinstance(document, dict):
        raise MalformedPayload("The request body must be a JSON object.")

    if base_context is not None and "@context" not in document:
        document = {**document, "@context": copy.deepcopy(base_context)}

    try:
        dataset = jsonld.to_rdf(document, dict(_JSONLD_OPTIONS))
    except (jsonld.JsonLdError, TypeError, ValueError) as e:
        logger.info("JSON-LD expansion failed: %s", e)
        raise MalformedPayload("The request body could not be interpreted as JSON-LD.") from e

    graph = Graph()
    for quads in dataset.values():
        for quad in quads:
            graph.add(
                (
                    _from_pyld_term(quad["subject"]),
                    _from_pyld_term(quad["predicate"]),
                    _from_pyld_term(quad["object"]),
                )
            )

    if len(graph) == 0:
        raise MalformedPayload("The request body does not contain any linked data.")
    return graph


def encode(graph: Graph, context: dict[str, Any], frame: dict[str, Any]) -> dict[str, Any]:
    """Frame and compact a Graph into a JSON-LD document.

    frame decides the tree shape and which properties are always present;
    context decides the short names. The returned dict carries its @context
    so clients can expand it again.
    """
    dataset = {
        "@default": [
            {
                "subject": _to_pyld_term(s),
                "predicate": _to_pyld_term(p),
                "object": _to_pyld_term(o),
            }
            for s, p, o in graph
        ]
    }
    expanded = jsonld.from_rdf(dataset, dict(_JSONLD_OPTIONS))
    framed = jsonld.frame(expanded, copy.deepcopy(frame), dict(_JSONLD_OPTIONS))
    document = jsonld.compact(framed, {"@context": copy.deepcopy(context)}, dict(_JSONLD_OPTIONS))
    return _fill_framed_fields(document, frame)


def _fill_framed_fields(document: dict[str, Any], frame: dict[str, Any]) -> dict[str, Any]:
    """Put back frame properties that compaction dropped.

    Framing emits null for a frame property the node lacks, but compaction
    expands the document first and expansion discards nulls. Single-node
    documents only; a multi-node @graph is left as compacted.
    """
    if "@graph" in document:
        return document
    for term in frame:
        if not term.startswith("@"):
            document.setdefault(term, None)
    return document
