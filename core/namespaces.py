"""
core/namespaces.py -- Vocabulary prefixes shared by every IRI and query builder.

The prefix table is built once at import and exposed read-only. Components
import the Namespace objects (MU, SESSION, ...) to mint IRIs and
SPARQL_PREFIXES to head every query; nothing mutates either at runtime.
"""

from types import MappingProxyType

from rdflib import Namespace
from rdflib.namespace import RDF, XSD

PREFIXES = MappingProxyType(
    {
        "rdf": str(RDF),
        "xsd": str(XSD),
        "mu": "http://mu.semte.ch/vocabularies/core/",
        "foaf": "http://xmlns.com/foaf/0.1/",
        "muAccount": "http://mu.semte.ch/vocabularies/account/",
        "wotSec": "https://www.w3.org/2019/wot/security#",
        "lblodAuth": "http://lblod.data.gift/vocabularies/authentication/",
        "pav": "http://purl.org/pav/",
        "session": "http://mu.semte.ch/vocabularies/session/",
        "oslc": "http://open-services.net/ns/core#",
        "dct": "http://purl.org/dc/terms/",
    }
)

MU = Namespace(PREFIXES["mu"])
FOAF = Namespace(PREFIXES["foaf"])
MU_ACCOUNT = Namespace(PREFIXES["muAccount"])
WOT_SEC = Namespace(PREFIXES["wotSec"])
LBLOD_AUTH = Namespace(PREFIXES["lblodAuth"])
PAV = Namespace(PREFIXES["pav"])
SESSION = Namespace(PREFIXES["session"])
OSLC = Namespace(PREFIXES["oslc"])
DCT = Namespace(PREFIXES["dct"])

SPARQL_PREFIXES = "\n".join(f"PREFIX {prefix}: <{iri}>" for prefix, iri in PREFIXES.items())

__all__ = [
    "DCT",
    "FOAF",
    "LBLOD_AUTH",
    "MU",
    "MU_ACCOUNT",
    "OSLC",
    "PAV",
    "PREFIXES",
    "RDF",
    "SESSION",
    "SPARQL_PREFIXES",
    "WOT_SEC",
    "XSD",
]
