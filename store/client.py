"""
store/client.py -- Privileged SPARQL client for the triple store.

SudoSparqlClient sends every query with the "mu-auth-sudo: true" header, which
tells mu-authorization to skip per-graph access rules. The vendor login flow
needs this: the vendor's graph is not known to the request and has to be
found by a cross-graph query. Keep the class narrow -- it is constructed once
in api/main.py and handed only to the auth/ components that need it, so every
privileged call site is visible from there.

One requests.Session per client for connection pooling, explicit timeouts,
and requests exceptions translated at the boundary. Failures are NOT
swallowed: a store error during login must abort the login, so every
transport or HTTP error becomes StoreUnavailable. No retries.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from rdflib import BNode, Literal, URIRef
from rdflib.term import Node

from core.config import Settings
from core.errors import StoreUnavailable

logger = logging.getLogger("vendorlogin.sparql")

SPARQL_RESULTS_JSON = "application/sparql-results+json"


def parse_bindings(payload: dict[str, Any]) -> list[dict[str, Node]]:
    """Convert a SPARQL 1.1 JSON results document into rows of rdflib terms.

    Unbound variables are simply absent from a row, as in the JSON format.
    Both "literal" and the legacy "typed-literal" term types are accepted.
    """
    rows: list[dict[str, Node]] = []
    for binding in payload.get("results", {}).get("bindings", []):
        row: dict[str, Node] = {}
        for name, term in binding.items():
            kind = term.get("type")
            value = term.get("value", "")
            if kind == "uri":
                row[name] = URIRef(value)
            elif kind == "bnode":
                row[name] = BNode(value)
            elif kind in ("literal", "typed-literal"):
                datatype = term.get("datatype")
                row[name] = Literal(
                    value,
                    lang=term.get("xml:lang"),
                    datatype=URIRef(datatype) if datatype else None,
                )
            else:
                raise StoreUnavailable(f"Unexpected term type in SPARQL results: {kind}")
        rows.append(row)
    return rows


class SudoSparqlClient:
    """Runs SELECT and UPDATE requests against MU_SPARQL_ENDPOINT with sudo rights.

    Usage:
        client = SudoSparqlClient.from_settings(get_settings())
        rows = client.select(render(VERIFY_PUBLISHER_KEY_ORGANIZATION, ...))
        client.update(render(INSERT_SESSION, ...))
        client.close()
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 60.0,
        log_queries: bool = False,
        log_updates: bool = False,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.log_queries = log_queries
        self.log_updates = log_updates
        self._session = session or requests.Session()
        # The endpoint is fixed configuration; never follow it elsewhere.
        self._session.max_redirects = 0
        self._session.headers.update({"mu-auth-sudo": "true"})

    @classmethod
    def from_settings(cls, settings: Settings) -> "SudoSparqlClient":
        return cls(
            endpoint=settings.mu_sparql_endpoint,
            timeout=settings.sparql_timeout,
            log_queries=settings.log_sparql_queries,
            log_updates=settings.log_sparql_updates,
        )

    def select(self, query: str) -> list[dict[str, Node]]:
        """Run a read query and return its rows."""
        if self.log_queries:
            logger.info("SPARQL query (sudo):\n%s", query)
        resp = self._post({"query": query}, accept=SPARQL_RESULTS_JSON)
        try:
            payload = resp.json()
        except ValueError as e:
            raise StoreUnavailable("The triple store returned an unreadable response.") from e
        return parse_bindings(payload)

    def update(self, query: str) -> None:
        """Run a write query. The store's response body is not inspected."""
        if self.log_updates:
            logger.info("SPARQL update (sudo):\n%s", query)
        self._post({"update": query}, accept=SPARQL_RESULTS_JSON)

    def _post(self, form: dict[str, str], accept: str) -> requests.Response:
        try:
            resp = self._session.post(
                self.endpoint,
                data=form,
                headers={"Accept": accept},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("SPARQL request to %s failed: %s", self.endpoint, e)
            raise StoreUnavailable("The triple store could not process the request.") from e
        return resp

    def close(self) -> None:
        self._session.close()
