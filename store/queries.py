"""
store/queries.py -- Fixed SPARQL templates and typed-term substitution.

Every query this service sends is one of the templates below. Callers never
format query text themselves: they pass rdflib terms to render(), which
serializes each with Term.n3(). That is the only injection defense between a
vendor-supplied value and the store, so render() refuses anything that is not
a URIRef or a Literal:

  - raw str: would be pasted verbatim into the query.
  - BNode:   "_:b0" is a variable in a SPARQL pattern and matches anything.

IRIs containing characters that cannot appear inside <...> are refused
before URIRef.n3() sees them, so a crafted value cannot close the IRI early.

Graphs are absent from the templates (or matched as ?g): vendor
and session data is written per organization graph, which is unknown to the
request, so these queries only make sense with sudo privileges.
"""

from __future__ import annotations

from string import Template

from rdflib import Literal, URIRef

from core.errors import MalformedPayload
from core.models import IRI_RE
from core.namespaces import SPARQL_PREFIXES

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

VERIFY_PUBLISHER_KEY_ORGANIZATION = Template(
    """
SELECT DISTINCT ?organizationID WHERE {
  $publisher
    a foaf:Agent ;
    muAccount:key $key ;
    muAccount:canActOnBehalfOf $organization .
  $organization
    mu:uuid ?organizationID .
}
"""
)

# Removes every session of the account the given session belongs to, not just
# the given session, so a vendor reconnecting through another identifier
# instance cannot leave stale sessions behind.
DELETE_SESSIONS_OF_SESSION_ACCOUNT = Template(
    """
DELETE {
  GRAPH ?g {
    ?session ?p ?o .
  }
}
WHERE {
  GRAPH ?g {
    $session
      a session:Session ;
      muAccount:account ?account .
    ?session
      a session:Session ;
      muAccount:account ?account ;
      ?p ?o .
  }
}
"""
)

DELETE_SESSIONS_OF_ACCOUNT = Template(
    """
DELETE {
  GRAPH ?g {
    ?session ?p ?o .
  }
}
WHERE {
  GRAPH ?g {
    ?session
      a session:Session ;
      muAccount:account $account ;
      ?p ?o .
  }
}
"""
)

# The WHERE clause doubles as an existence check: no triple typing the account
# means no graph binding, which means nothing is inserted.
INSERT_SESSION = Template(
    """
INSERT {
  GRAPH ?g {
    $session
      a session:Session ;
      mu:uuid $uuid ;
      dct:created $created ;
      muAccount:account $account ;
      muAccount:canActOnBehalfOf $organization .
  }
}
WHERE {
  GRAPH ?g {
    $account a ?type .
  }
}
"""
)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render(template: Template, **terms: URIRef | Literal) -> str:
    """Substitute typed terms into a template and prepend the PREFIX header.

    Raises TypeError for any value that is not a URIRef or Literal,
    MalformedPayload for a URIRef that cannot be written between <...>, and
    KeyError if the template references a name that was not supplied.
    """
    serialized: dict[str, str] = {}
    for name, term in terms.items():
        if not isinstance(term, (URIRef, Literal)):
            raise TypeError(f"Query parameter {name!r} must be a URIRef or Literal, got {type(term).__name__}")
        if isinstance(term, URIRef) and not IRI_RE.match(term):
            raise MalformedPayload(f"The {name} IRI cannot be used in a query.")
        serialized[name] = term.n3()
    return SPARQL_PREFIXES + "\n" + template.substitute(serialized)
