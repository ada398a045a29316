from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import requests

from .errors import GraphQLResponseError, MalformedResponse, TransportError

__all__ = ["execute_graphql"]

_BASE_HEADERS = {"Content-Type": "application/json"}


def execute_graphql(
    endpoint: str,
    query: str,
    variables: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    *,
    timeout: Optional[float] = None,
) -> Any:
    """POST ``{query, variables}`` to *endpoint* and return the ``data`` member.

    Caller headers are laid over ``Content-Type: application/json``.  Raises
    :class:`TransportError` for non-2xx statuses and connection failures,
    :class:`MalformedResponse` when the body is not a JSON object and
    :class:`GraphQLResponseError` when the body carries a non-empty
    ``errors`` list (even if ``data`` is also present).
    """
    payload = {"query": query, "variables": dict(variables or {})}
    merged: Dict[str, str] = {**_BASE_HEADERS, **(headers or {})}

    try:
        resp = requests.post(endpoint, json=payload, headers=merged, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(None, f"Request to {endpoint} failed: {exc}") from exc

    if not 200 <= resp.status_code < 300:
        raise TransportError(resp.status_code, resp.reason or "")

    try:
        body = resp.json()
    except ValueError as exc:  # requests' JSONDecodeError subclasses ValueError
        raise MalformedResponse(f"Response from {endpoint} is not valid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise MalformedResponse(f"Expected a JSON object from {endpoint}, got {type(body).__name__}")

    if body.get("errors"):
        raise GraphQLResponseError(body["errors"])
    return body.get("data")
