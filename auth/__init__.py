"""auth/ -- Vendor authentication: payload validation, credential checks, sessions.

Layer rule: auth/ imports from core/ and store/ only.
It does NOT import from api/. api/ imports from auth/, not the other way around.
"""
