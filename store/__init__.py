"""store/ -- Triple store access: query templates and the sudo SPARQL client.

Layer rule: store/ imports from core/ only. auth/ and api/ import from store/.
"""
