"""
Shared pytest fixtures for all tests.
"""

from typing import Callable

import httpx
import pytest

from zos_engine.models import Session


@pytest.fixture
def session() -> Session:
    """A basic-auth z/OSMF session."""
    return Session(hostname="zosmf.example.com", port=443, user="ibmuser", password="secret")


@pytest.fixture
def token_session() -> Session:
    """An APIML session holding a JWT token."""
    return Session(
        hostname="apiml.example.com",
        port=7554,
        token_type="apimlAuthenticationToken",
        token_value="eyJhbGciOiJSUzI1NiJ9.token",
    )


@pytest.fixture
def recorder() -> Callable:
    """
    Build an httpx.MockTransport that answers every request with one response.

    The returned transport exposes the received requests in its `requests` list.
    """

    def build(status_code: int = 200, content: bytes = b"", json=None, headers=None):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if json is not None:
                return httpx.Response(status_code, json=json, headers=headers)
            return httpx.Response(status_code, content=content, headers=headers)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return build
