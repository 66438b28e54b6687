"""
core/errors.py -- Error taxonomy for the login/logout protocol.

Every failure the service reports to a client is a ServiceError subclass.
status_code is a hint for the transport layer (api/errors.py picks it up);
the core itself never builds HTTP responses.

All kinds default to 400, including AuthenticationFailed and
StoreUnavailable. Existing vendor integrations were built against that
behaviour, so it is kept even where 401/502 would be the textbook choice.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for failures that are safe to show to the client verbatim."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedPayload(ServiceError):
    """Unsupported content type, or a body that does not expand to a graph."""


class MissingHeader(ServiceError):
    """A header the identifier is supposed to attach is absent."""

    def __init__(self, header: str) -> None:
        super().__init__(
            f'The required "{header.lower()}" header could not be found. '
            "This is usually attached to the request by the mu-identifier."
        )
        self.header = header


class MissingField(ServiceError):
    """The login payload lacks the organization, the publisher or the key."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class AuthenticationFailed(ServiceError):
    """Credentials did not resolve to an authorized organization.

    The message is fixed and does not say which part of the
    (publisher, key, organization) combination was wrong.
    """

    MESSAGE = (
        "Authentication failed, vendor does not have access to the organization or does not exist. "
        "If this should not be the case, please contact us at digitaalABB@vlaanderen.be for login credentials."
    )

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)


class StoreUnavailable(ServiceError):
    """The triple store could not be reached or rejected the query."""


class RateLimited(ServiceError):
    """Too many login attempts from one client."""

    status_code = 429

    def __init__(self) -> None:
        super().__init__("Too many login attempts, try again later.")
