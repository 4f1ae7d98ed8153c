"""Sends a prepared request and classifies the response.

Order matters here: a 500 is rejected before the body is looked at, but every
other response is decoded into the result container *before* the status is
checked. Error responses from the API carry error details (and, for list
endpoints, still-useful data) in the body, and ``APIError.result`` hands that
decoded container back to the caller.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional
from urllib.parse import urlsplit

import requests

from .resources import DEFAULT_SUCCESS
from ..common.exceptions import (
    APIError,
    ResponseDecodeError,
    ServerUnavailableError,
    TransportError,
)
from ..common.logging import logger
from ..common.timing import timed


def decode_into(result: Any, body: bytes) -> Any:
    """Decodes ``body`` into ``result`` in place.

    ``result`` is a ``Model`` (anything with ``load()``), a plain ``dict``
    or a plain ``list``.
    """
    if not (hasattr(result, "load") or isinstance(result, (dict, list))):
        raise TypeError(f"Cannot decode a response into {type(result).__name__}")

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise ResponseDecodeError(f"Response is not valid JSON: {e}") from e

    if isinstance(result, dict):
        if not isinstance(payload, dict):
            raise ResponseDecodeError(f"Expected a JSON object, got {type(payload).__name__}")
        result.update(payload)
    elif isinstance(result, list):
        if not isinstance(payload, list):
            raise ResponseDecodeError(f"Expected a JSON array, got {type(payload).__name__}")
        result[:] = payload
    else:
        result.load(payload)
    return result


def dispatch(
    session: requests.Session,
    request: requests.PreparedRequest,
    result: Optional[Any] = None,
    *,
    timeout: Optional[float] = None,
    debug_log=None,
    success: Iterable[int] = DEFAULT_SUCCESS,
) -> None:
    """
    Sends ``request`` over ``session`` and fills ``result`` in place.

    Raises:
        TransportError: sending or reading the body failed.
        ServerUnavailableError: HTTP 500, ``result`` was not touched.
        ResponseDecodeError: the body did not decode into ``result``.
        APIError: any other non-success status; ``result`` is already populated.
    """
    extra = {"method": request.method, "path": urlsplit(request.url or "").path}
    try:
        with timed("http_request", logger=logger, component="messagebird", extra=extra):
            response = session.send(request, timeout=timeout)
            body = response.content or b""
    except requests.RequestException as e:
        raise TransportError(f"MessageBird request failed: {e}") from e

    if debug_log is not None:
        debug_log.info({"msg": "HTTP RESPONSE", "status": response.status_code, "body": body.decode("utf-8", errors="replace")})

    # 500: nothing sensible can be done with the body
    if response.status_code == 500:
        raise ServerUnavailableError()

    if result is not None:
        decode_into(result, body)

    if response.status_code in success:
        return

    raise APIError(
        status_code=response.status_code,
        result=result,
        errors=getattr(result, "errors", None),
    )
