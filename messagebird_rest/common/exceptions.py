"""Errors raised by the MessageBird client.

Every failure of an API call surfaces as one of these, so callers can branch
on the category:

- ``TransportError``: the request never got a readable response (DNS, connect,
  TLS, timeout, body read). The underlying ``requests`` error is chained.
- ``ServerUnavailableError``: HTTP 500. The body is not trusted, nothing was
  decoded.
- ``APIError``: any other non-2xx status. The body was still decoded into the
  result container, available as ``.result``.
- ``ResponseDecodeError``: the body could not be decoded into the container.
- ``MalformedURLError``: endpoint + path do not form a usable URL. Raised
  before anything is sent.
"""

from __future__ import annotations

from typing import Any


class MessageBirdError(Exception):
    """Base class for all client errors."""


class TransportError(MessageBirdError):
    """Network-level failure while sending the request or reading the response."""


class ServerUnavailableError(MessageBirdError):
    """The MessageBird API is currently unavailable (HTTP 500)."""

    def __init__(self, message: str = "The MessageBird API is currently unavailable", *, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code


class APIError(MessageBirdError):
    """The API answered, but with a non-success status.

    ``result`` holds whatever the body decoded into, ``errors`` the
    ``ErrorDetail`` entries the API reported.
    """

    def __init__(
        self,
        message: str = "The MessageBird API returned an error",
        *,
        status_code: int | None = None,
        result: Any = None,
        errors: list | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.result = result
        self.errors = list(errors or [])

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is None:
            return base
        detail = "; ".join(str(e) for e in self.errors)
        if detail:
            return f"{base} (HTTP {self.status_code}): {detail}"
        return f"{base} (HTTP {self.status_code})"


class ResponseDecodeError(MessageBirdError):
    """Response body is not valid JSON or does not fit the result container."""


class MalformedURLError(MessageBirdError, ValueError):
    """Endpoint and path could not be combined into a request URL."""


class ParameterError(MessageBirdError, ValueError):
    """Invalid or missing parameters, detected before any request is made."""


class EmptyResultError(MessageBirdError):
    """A single-resource call got back a list wrapper without any items."""
