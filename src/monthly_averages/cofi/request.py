#!/usr/bin/env python3
"""
JSON Request Helpers

Thin wrapper over ``requests`` for the upstream API. Every response must be
HTTP 200 with a JSON object body whose ``error`` field is ``no-error``;
anything else is raised as a TransportError. No retries are attempted.
"""

import logging
from typing import Any

import requests

from ..core.errors import TransportError

logger = logging.getLogger(__name__)

# Valid HTTP response codes
VALID_RESPONSE_CODES = frozenset({200})

# Valid upstream error codes
VALID_ERROR_CODES = frozenset({"no-error"})

DEFAULT_TIMEOUT = 30.0


def invoke(
    method: str,
    url: str,
    body: dict[str, Any] | None = None,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    Make a JSON request and validate the response.

    Args:
        method: HTTP method
        url: Absolute URL
        body: JSON body to send
        session: Session to send with (default: a one-off request)
        timeout: Request timeout in seconds

    Returns:
        The decoded response body

    Raises:
        TransportError: On transport failure, a bad status, a malformed body
                        or an upstream error code
    """
    logger.debug("Invoking %s %s", method, url)
    sender = session if session is not None else requests

    try:
        response = sender.request(method, url, json=body, headers={"Accept": "application/json"}, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"Request failed for url: {url}: {e}") from e

    if response.status_code not in VALID_RESPONSE_CODES:
        raise TransportError(
            f"Invalid response code: {response.status_code} for url: {url}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise TransportError("Body is not valid", status_code=response.status_code) from e

    if not isinstance(payload, dict) or not payload.get("error"):
        raise TransportError("Body is not valid", status_code=response.status_code)

    if payload["error"] not in VALID_ERROR_CODES:
        raise TransportError(
            f"Invalid error code: {payload['error']}",
            status_code=response.status_code,
            error_code=str(payload["error"]),
        )

    return payload


def get(url: str, **kwargs: Any) -> dict[str, Any]:
    """Make a GET request."""
    return invoke("GET", url, **kwargs)


def post(url: str, body: dict[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
    """Make a POST request."""
    return invoke("POST", url, body=body, **kwargs)
