"""
auth/login.py -- The vendor login and logout use cases.

login():  verify credentials -> remove the account's sessions -> create one.
logout(): remove the sessions of the account behind the session IRI.

Each step blocks until the store answers; a step starts only after the
previous one succeeded. A failed verification therefore never deletes or
creates anything.

logout() performs no credential check. The session IRI comes from the
Mu-Session-Id header, which the mu-identifier at the perimeter attaches.
"""

from __future__ import annotations

import logging

from rdflib import Graph, URIRef

from auth.credentials import CredentialVerifier
from auth.sessions import SessionLifecycle
from auth.validator import extract_login_details
from core.errors import MissingHeader
from core.models import SESSION_HEADER
from store.client import SudoSparqlClient

logger = logging.getLogger("vendorlogin.login")


class VendorLogin:
    """Usage:
    vendor_login = VendorLogin(SudoSparqlClient.from_settings(get_settings()))
    session_graph = vendor_login.login(request_graph)
    vendor_login.logout(URIRef("http://mu.semte.ch/sessions/..."))
    """

    def __init__(self, client: SudoSparqlClient) -> None:
        self.verifier = CredentialVerifier(client)
        self.sessions = SessionLifecycle(client)

    def login(self, graph: Graph) -> Graph:
        """Log a vendor in from a validated login graph; return the new session graph."""
        details = extract_login_details(graph)
        if details.session is None:
            raise MissingHeader(SESSION_HEADER)

        self.verifier.verify(details.publisher, details.key, details.organization)

        # Scoped by account: sessions the vendor holds under other session
        # IRIs go too.
        self.sessions.remove_all_for_account(details.publisher)

        session_graph = self.sessions.create(details.session, details.publisher, details.organization)
        logger.info("Vendor %s logged in for organization %s", details.publisher, details.organization)
        return session_graph

    def logout(self, session: URIRef) -> None:
        self.sessions.remove_all(session)
        logger.info("Session %s logged out", session)
