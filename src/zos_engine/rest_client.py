"""
REST client for z/OSMF and APIML endpoints.

Wraps httpx with the headers, authentication and error mapping that every
z/OSMF call needs. Does not retry.
"""

import json
import logging
from typing import Any, Iterable

import httpx

from .errors import TransportError
from .logging_config import log_timing
from .models import RestResponse, Session

logger = logging.getLogger(__name__)

CSRF_HEADER = {"X-CSRF-ZOSMF-HEADER": "true"}
APPLICATION_JSON = {"Content-Type": "application/json"}

HTTP_STATUS_200 = 200
HTTP_STATUS_201 = 201
HTTP_STATUS_204 = 204
HTTP_STATUS_401 = 401
HTTP_STATUS_500 = 500


class ZosmfRestClient:
    """
    Issues requests against a Session.

    One httpx.AsyncClient is opened per request so no connection state is
    shared between operations.
    """

    def __init__(
        self,
        session: Session,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the REST client.

        Args:
            session: Connection and credential details
            timeout: Default timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.session = session
        self.timeout = timeout
        self.transport = transport

    def _build_client(self, timeout: float | None) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {
            "base_url": self.session.base_url,
            "timeout": timeout if timeout is not None else self.timeout,
            "verify": self.session.reject_unauthorized,
            "headers": dict(CSRF_HEADER),
        }
        if self.session.uses_token:
            kwargs["cookies"] = {self.session.token_type: self.session.token_value}
        elif self.session.user and self.session.password:
            kwargs["auth"] = httpx.BasicAuth(self.session.user, self.session.password)
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def request(
        self,
        method: str,
        resource: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
        timeout: float | None = None,
    ) -> RestResponse:
        """
        Send a request and return the response whatever its status.

        Args:
            method: HTTP method
            resource: Path relative to the session's base URL
            headers: Extra request headers
            payload: JSON body (optional)
            timeout: Timeout in seconds, overriding the client default

        Returns:
            RestResponse with status, body and headers

        Raises:
            TransportError: If no response was received
        """
        logger.debug("%s %s", method, resource)
        try:
            async with self._build_client(timeout) as client:
                with log_timing(logger, f"{method} {resource}"):
                    response = await client.request(
                        method, resource, headers=headers, json=payload
                    )
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout calling {resource}: {e}", resource=resource)
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", resource=resource)

        logger.debug("%s %s -> %d", method, resource, response.status_code)
        return RestResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    @staticmethod
    def raise_for_unexpected(
        response: RestResponse, resource: str, expected: Iterable[int]
    ) -> None:
        """Raise TransportError unless the response status is one of expected."""
        if response.status_code not in tuple(expected):
            raise TransportError(
                f"REST API Failure with HTTP(S) status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
                resource=resource,
            )

    async def get_expect_buffer(
        self,
        resource: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> bytes:
        """GET a resource and return its raw body, expecting 200."""
        response = await self.request("GET", resource, headers=headers, timeout=timeout)
        self.raise_for_unexpected(response, resource, (HTTP_STATUS_200,))
        return response.content

    async def post_expect_json(
        self,
        resource: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> dict:
        """POST to a resource and return the decoded JSON body, expecting 200 or 201."""
        response = await self.request(
            "POST", resource, headers={**APPLICATION_JSON, **(headers or {})}, payload=payload
        )
        self.raise_for_unexpected(response, resource, (HTTP_STATUS_200, HTTP_STATUS_201))
        try:
            return json.loads(response.content)
        except ValueError:
            raise TransportError(
                f"Unable to parse JSON response from {resource}",
                status_code=response.status_code,
                body=response.text,
                resource=resource,
            )

    async def delete_expect_status(
        self,
        resource: str,
        expected: Iterable[int] = (HTTP_STATUS_204,),
    ) -> RestResponse:
        """DELETE a resource, expecting one of the given statuses."""
        response = await self.request("DELETE", resource)
        self.raise_for_unexpected(response, resource, expected)
        return response
