"""
core/contexts.py -- Static JSON-LD contexts and frames.

These are conversion parameters for core/codec.py, not logic. The request
context maps the short field names vendors post ("organization", "publisher",
"key", "uri") onto vocabulary IRIs; the response contexts and frames shape
what goes back out.

Frame properties marked "@embed": "@always" appear in every framed document,
as null when the graph has no value for them.
"""

from core.namespaces import PREFIXES

LOGIN_REQUEST_TYPES = ["wotSec:APIKeySecurityScheme", "lblodAuth:LoginRequest"]

LOGIN_REQUEST_CONTEXT = {
    "muAccount": PREFIXES["muAccount"],
    "pav": PREFIXES["pav"],
    "wotSec": PREFIXES["wotSec"],
    "lblodAuth": PREFIXES["lblodAuth"],
    "organization": {"@id": "pav:createdBy", "@type": "@id"},
    "publisher": {"@id": "pav:providedBy"},
    "key": "muAccount:key",
    "uri": "@id",
}

LOGIN_RESPONSE_CONTEXT = {
    "muAccount": PREFIXES["muAccount"],
    "mu": PREFIXES["mu"],
    "xsd": PREFIXES["xsd"],
    "session": PREFIXES["session"],
    "dct": PREFIXES["dct"],
    "uuid": {"@id": "mu:uuid"},
    "account": {"@id": "muAccount:account", "@type": "@id"},
    "created": {"@id": "dct:created"},
}

LOGIN_RESPONSE_FRAME = {
    "@context": LOGIN_RESPONSE_CONTEXT,
    "uuid": {"@embed": "@always"},
    "account": {"@embed": "@always"},
    "created": {"@embed": "@always"},
}

ERROR_RESPONSE_CONTEXT = {
    "xsd": PREFIXES["xsd"],
    "oslc": PREFIXES["oslc"],
    "mu": PREFIXES["mu"],
    "uuid": {"@id": "mu:uuid"},
    "errorMessage": {"@id": "oslc:message"},
}

ERROR_RESPONSE_FRAME = {
    "@context": ERROR_RESPONSE_CONTEXT,
    "uuid": {"@embed": "@always"},
    "errorMessage": {"@embed": "@always"},
}
