"""
tests/conftest.py -- Shared test fixtures for the vendor login service.

This module provides:
  - FakeSparqlStore: an in-memory triple store with the SudoSparqlClient
    interface (select/update) that executes the real query text with rdflib
  - sparql_store: a FakeSparqlStore seeded with one authorized vendor
  - api_client: TestClient whose lifespan wires the fake store into the app

Design: the fake store runs the exact SPARQL the service renders, so route
and component tests cover the queries too. Data lives in a named graph
(ORG_GRAPH) because the service never names a graph itself -- it finds the
graph through GRAPH ?g patterns, as it must against the real store.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient
from rdflib import Dataset, Literal, URIRef
from rdflib.term import Node

from api.limiter import limiter
from api.main import app
from auth.login import VendorLogin
from core.namespaces import FOAF, MU, MU_ACCOUNT, RDF, SESSION

# ---------------------------------------------------------------------------
# Test vocabulary
# ---------------------------------------------------------------------------

ORG_GRAPH = URIRef("http://mu.semte.ch/graphs/organizations/org-1")
ORG1 = URIRef("http://data.lblod.info/id/bestuurseenheden/org-1")
ORG1_UUID = Literal("org-1-uuid")
ORG2 = URIRef("http://data.lblod.info/id/bestuurseenheden/org-2")
PUB1 = URIRef("http://data.lblod.info/vendors/vendor-1")
PUB1_KEY = Literal("abc")
UNKNOWN_PUB = URIRef("http://data.lblod.info/vendors/unknown")
SESSION1 = URIRef("urn:s1")
SESSION2 = URIRef("urn:s2")


class FakeSparqlStore:
    """Stand-in for SudoSparqlClient backed by an rdflib Dataset.

    Every query and update is recorded so tests can assert on what did (or
    did not) reach the store.
    """

    def __init__(self) -> None:
        self.dataset = Dataset(default_union=True)
        self.queries: list[str] = []
        self.updates: list[str] = []

    def graph(self, identifier: URIRef = ORG_GRAPH):
        return self.dataset.graph(identifier)

    def select(self, query: str) -> list[dict[str, Node]]:
        self.queries.append(query)
        return [{str(name): value for name, value in row.asdict().items()} for row in self.dataset.query(query)]

    def update(self, query: str) -> None:
        self.updates.append(query)
        self.dataset.update(query)

    def close(self) -> None:
        pass

    @property
    def calls(self) -> int:
        return len(self.queries) + len(self.updates)

    def sessions_of(self, account: URIRef) -> set[Node]:
        return {
            s for s in self.dataset.subjects(MU_ACCOUNT.account, account) if (s, RDF.type, SESSION.Session) in self.dataset
        }


def seed_vendor(store: FakeSparqlStore) -> None:
    """PUB1 holds key "abc" and may act for ORG1. ORG2 exists but is not granted."""
    g = store.graph()
    g.add((PUB1, RDF.type, FOAF.Agent))
    g.add((PUB1, MU_ACCOUNT.key, PUB1_KEY))
    g.add((PUB1, MU_ACCOUNT.canActOnBehalfOf, ORG1))
    g.add((ORG1, MU.uuid, ORG1_UUID))
    g.add((ORG2, MU.uuid, Literal("org-2-uuid")))


def seed_session(store: FakeSparqlStore, session: URIRef, account: URIRef = PUB1) -> None:
    g = store.graph()
    g.add((session, RDF.type, SESSION.Session))
    g.add((session, MU.uuid, Literal(f"uuid-of-{session}")))
    g.add((session, MU_ACCOUNT.account, account))
    g.add((session, MU_ACCOUNT.canActOnBehalfOf, ORG1))


def login_body(organization=ORG1, publisher=PUB1, key="abc") -> dict:
    """Plain JSON login body, as vendors post it."""
    return {"organization": str(organization), "publisher": {"uri": str(publisher), "key": key}}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sparql_store() -> FakeSparqlStore:
    store = FakeSparqlStore()
    seed_vendor(store)
    return store


def _patch_lifespan(store: FakeSparqlStore):
    """Return a lifespan that wires the fake store in place of the HTTP client."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.sparql = store
        app.state.vendor_login = VendorLogin(store)
        yield

    return test_lifespan


@pytest.fixture
def api_client(sparql_store: FakeSparqlStore) -> Generator[tuple[TestClient, FakeSparqlStore], None, None]:
    """Yield (client, store) with rate limiting off.

    Function-scoped: every test gets a freshly seeded store, since login and
    logout mutate it.
    """
    app.router.lifespan_context = _patch_lifespan(sparql_store)
    limiter.enabled = False
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, sparql_store
    limiter.enabled = True
