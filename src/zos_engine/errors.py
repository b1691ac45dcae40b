"""
Error taxonomy for the z/OSMF client.

Every error raised by the engine derives from ZosClientError so the CLI can
report it uniformly.
"""

from typing import Any


class ZosClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, msg: str, **details: Any) -> None:
        super().__init__(msg)
        self.msg = msg
        self.details: dict[str, Any] = {"msg": msg, **details}


class ValidationError(ZosClientError):
    """Exception raised when a required parameter is missing or invalid."""

    pass


class NotAFileError(ZosClientError):
    """Exception raised when a local path does not point to a regular file."""

    pass


class PathNotFoundError(ZosClientError):
    """Exception raised when a local path cannot be opened."""

    pass


class TransportError(ZosClientError):
    """
    Exception raised for failed REST calls.

    Carries the HTTP status code (None when no response was received),
    the response body and the resource that was requested.
    """

    def __init__(
        self,
        msg: str,
        status_code: int | None = None,
        body: str = "",
        resource: str | None = None,
    ) -> None:
        super().__init__(msg, errorCode=status_code, causeErrors=body, resource=resource)
        self.status_code = status_code
        self.body = body
        self.resource = resource


class TokenAlreadyInvalidError(ZosClientError):
    """Raised inside logout when the token is already expired or invalid."""

    pass
