"""
APIML logout.

Invalidates an APIML token. A token that is already expired or invalid
counts as a successful logout.
"""

import json
import logging
import re
from enum import Enum
from typing import Any, Iterator

import httpx

from .errors import TokenAlreadyInvalidError, TransportError, ValidationError
from .models import Session
from .rest_client import (
    HTTP_STATUS_204,
    HTTP_STATUS_401,
    HTTP_STATUS_500,
    ZosmfRestClient,
)

logger = logging.getLogger(__name__)

APIML_V1_RESOURCE = "/api/v1/gateway/auth/logout"
APIML_TOKEN_TYPE_PATTERN = re.compile(r"^apimlAuthenticationToken.*")

# Dotted identifiers such as org.zowe.apiml.security.query.invalidToken
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")


class TokenErrorKind(Enum):
    """Known markers reported by APIML for a token that cannot be logged out."""

    INVALID_TOKEN = "org.zowe.apiml.security.query.invalidToken"
    TOKEN_NOT_PROVIDED = "org.zowe.apiml.security.query.tokenNotProvided"
    EXPIRED_TOKEN = "org.zowe.apiml.security.expiredToken"
    V1_TOKEN_EXPIRED = "TokenExpireException"


# Markers that mean the token is already unusable (APIML v2 gateway)
APIML_V2_LOGOUT_ERRORS = frozenset(
    {
        TokenErrorKind.INVALID_TOKEN,
        TokenErrorKind.TOKEN_NOT_PROVIDED,
        TokenErrorKind.EXPIRED_TOKEN,
    }
)
# Marker sent by the APIML v1 gateway with a 500 status
APIML_V1_TOKEN_EXPIRED_ERRORS = frozenset({TokenErrorKind.V1_TOKEN_EXPIRED})

_MARKERS = {kind.value: kind for kind in TokenErrorKind}


def _string_values(payload: Any) -> Iterator[str]:
    """Yield every string value nested in a decoded JSON document."""
    if isinstance(payload, str):
        yield payload
    elif isinstance(payload, dict):
        for value in payload.values():
            yield from _string_values(value)
    elif isinstance(payload, list):
        for value in payload:
            yield from _string_values(value)


def classify_error_body(body: str | None) -> set[TokenErrorKind]:
    """
    Find the known token error markers carried by an error body.

    JSON bodies are searched through every string value they hold, at any
    depth (messages[].messageKey, exception, message and so on). Other
    bodies are searched as a whole. Each dotted identifier found counts
    together with its last segment, and a marker only matches as a whole
    token.

    Args:
        body: Response body or error message

    Returns:
        Set of recognized markers
    """
    if not body:
        return set()

    try:
        texts = list(_string_values(json.loads(body)))
    except ValueError:
        texts = [body]

    candidates: set[str] = set()
    for text in texts:
        for identifier in _IDENTIFIER.findall(text):
            candidates.add(identifier)
            candidates.add(identifier.rsplit(".", 1)[-1])

    return {_MARKERS[c] for c in candidates if c in _MARKERS}


def _validate_session(session: Session | None) -> None:
    if session is None:
        raise ValidationError("Required session must be defined")
    token_type = session.token_type
    if token_type is None or not APIML_TOKEN_TYPE_PATTERN.match(token_type):
        raise ValidationError(
            f"Token type ({token_type}) for API ML logout must start with "
            "'apimlAuthenticationToken'."
        )
    if session.token_value is None:
        raise ValidationError("Session token not populated. Unable to log out.")


async def apiml_logout(
    session: Session | None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """
    Perform APIML logout to invalidate an LTPA2 or JWT token.

    Args:
        session: Session holding an apimlAuthenticationToken
        transport: Optional httpx transport (used by tests)

    Raises:
        ValidationError: If the session cannot be used for APIML logout
        TransportError: If APIML rejects the logout for another reason
    """
    logger.debug("apiml_logout()")
    _validate_session(session)

    client = ZosmfRestClient(session, transport=transport)
    try:
        try:
            response = await client.request("POST", APIML_V1_RESOURCE)
        except TransportError as err:
            if classify_error_body(err.body or err.msg) & APIML_V2_LOGOUT_ERRORS:
                raise TokenAlreadyInvalidError(err.msg)
            raise

        if response.status_code in (HTTP_STATUS_204, HTTP_STATUS_401):
            return
        if response.status_code == HTTP_STATUS_500 and (
            classify_error_body(response.text) & APIML_V1_TOKEN_EXPIRED_ERRORS
        ):
            raise TokenAlreadyInvalidError(response.text)
        if classify_error_body(response.text) & APIML_V2_LOGOUT_ERRORS:
            raise TokenAlreadyInvalidError(response.text)

        ZosmfRestClient.raise_for_unexpected(
            response, APIML_V1_RESOURCE, (HTTP_STATUS_204, HTTP_STATUS_401)
        )
    except TokenAlreadyInvalidError as err:
        logger.info("Token was already invalid, treating logout as successful: %s", err.msg)
