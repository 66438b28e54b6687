"""
auth/sessions.py -- Session records in the triple store.

A session is the IRI the mu-identifier attached to the request, typed
session:Session and linked to the vendor account and the organization it
acts for:

    <session> a session:Session ;
        mu:uuid "..." ;
        dct:created "..."^^xsd:dateTime ;
        muAccount:account <account> ;
        muAccount:canActOnBehalfOf <organization> .

An account holds at most one live session. Removal is therefore scoped by
account, not by session IRI: a vendor reconnecting through another
identifier instance gets a new session IRI, and removing only that IRI would
leave the old session behind.

Concurrency: removal and creation are two separate update requests. Two
logins for the same account running at the same time can interleave
(remove, remove, create, create) and leave two sessions, or one login's
removal can delete the session the other just created. Nothing here locks
per account; the store is the only synchronization point.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from rdflib import Graph, Literal, URIRef
from rdflib.namespace import XSD

from core.namespaces import DCT, MU, MU_ACCOUNT, RDF, SESSION
from store.client import SudoSparqlClient
from store.queries import (
    DELETE_SESSIONS_OF_ACCOUNT,
    DELETE_SESSIONS_OF_SESSION_ACCOUNT,
    INSERT_SESSION,
    render,
)

logger = logging.getLogger("vendorlogin.sessions")


def _now() -> Literal:
    return Literal(datetime.now(timezone.utc).isoformat(), datatype=XSD.dateTime)


class SessionLifecycle:
    """Remove and create session records. Both writes are idempotent no-ops
    when their WHERE clause matches nothing."""

    def __init__(self, client: SudoSparqlClient) -> None:
        self.client = client

    def remove_all(self, session: URIRef) -> None:
        """Delete every session of the account the given session belongs to.

        An unknown session matches nothing, so logging out twice is fine.
        """
        logger.info("Removing sessions for the account of %s", session)
        self.client.update(render(DELETE_SESSIONS_OF_SESSION_ACCOUNT, session=session))

    def remove_all_for_account(self, account: URIRef) -> None:
        """Delete every session linked to the account."""
        logger.info("Removing sessions of account %s", account)
        self.client.update(render(DELETE_SESSIONS_OF_ACCOUNT, account=account))

    def create(self, session: URIRef, account: URIRef, organization: URIRef) -> Graph:
        """Write a fresh session record and return it as a Graph for the response.

        The insert only fires if the account is typed somewhere in the store;
        its graph is where the session is written.
        """
        session_id = Literal(str(uuid.uuid4()))
        created = _now()

        self.client.update(
            render(
                INSERT_SESSION,
                session=session,
                uuid=session_id,
                created=created,
                account=account,
                organization=organization,
            )
        )
        logger.info("Created session %s for account %s", session, account)

        graph = Graph()
        graph.add((session, RDF.type, SESSION.Session))
        graph.add((session, MU.uuid, session_id))
        graph.add((session, DCT.created, created))
        graph.add((session, MU_ACCOUNT.account, account))
        return graph
