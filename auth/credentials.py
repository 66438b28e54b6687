"""
auth/credentials.py -- Verify a vendor's (publisher, key, organization) claim.

One privileged read query checks three things at once: the publisher is a
foaf:Agent, it holds the key, and it may act on behalf of the organization.
It also resolves the organization's mu:uuid, which is what a successful
verification returns.

Wrong key, unknown publisher and missing authorization all produce the same
AuthenticationFailed.
"""

from __future__ import annotations

import logging

from rdflib import Literal, URIRef

from core.errors import AuthenticationFailed
from store.client import SudoSparqlClient
from store.queries import VERIFY_PUBLISHER_KEY_ORGANIZATION, render

logger = logging.getLogger("vendorlogin.credentials")


class CredentialVerifier:
    def __init__(self, client: SudoSparqlClient) -> None:
        self.client = client

    def verify(self, publisher: URIRef, key: Literal, organization: URIRef) -> Literal:
        """Return the organization's mu:uuid, or raise AuthenticationFailed.

        With several matching rows the first one wins and a warning is logged.
        """
        rows = self.client.select(
            render(
                VERIFY_PUBLISHER_KEY_ORGANIZATION,
                publisher=publisher,
                key=key,
                organization=organization,
            )
        )
        if not rows:
            logger.info("Credential check failed for publisher %s on organization %s", publisher, organization)
            raise AuthenticationFailed()
        if len(rows) > 1:
            logger.warning(
                "Organization %s resolved to %d identifiers; using the first",
                organization,
                len(rows),
            )
        organization_id = rows[0].get("organizationID")
        if organization_id is None:
            raise AuthenticationFailed()
        return organization_id
