import re
from dataclasses import dataclass

from rdflib import Literal, URIRef

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

SESSION_HEADER = "Mu-Session-Id"
ALLOW_GROUPS_HEADER = "mu-auth-allow-groups"
# Tells mu-authorization to drop any cached group memberships for the session.
ALLOW_GROUPS_CLEAR = "CLEAR"

# Scheme, colon, then no whitespace and none of the characters N-Triples
# forbids inside <...>. A URIRef that fails this cannot be written into a query.
IRI_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*:[^\s<>"{}|\\^`]+$')


@dataclass(frozen=True)
class LoginDetails:
    """The terms a login request resolves to once its graph is validated."""

    organization: URIRef
    publisher: URIRef
    key: Literal
    session: URIRef
