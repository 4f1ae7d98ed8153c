"""Builds authenticated requests for the MessageBird API.

``build_request`` only prepares the request, sending it is
``dispatcher.dispatch``. Query strings are the caller's job: append an
encoded ``?...`` to ``path`` before building, the builder never moves
parameters between the body and the URL.
"""

from __future__ import annotations

import platform
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit

import requests

from .resources import CLIENT_VERSION
from ..common.exceptions import MalformedURLError
from ..common.logging_utils import mask_phone, shorten_body
from ..common.utils import to_json

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

USER_AGENT = f"MessageBird/ApiClient/{CLIENT_VERSION} Python/{platform.python_version()}"

# form fields holding phone numbers, masked in debug records
PHONE_FIELDS = ("recipients", "recipient", "msisdn")


def build_url(endpoint: str, path: str) -> str:
    url = endpoint.rstrip("/") + "/" + path.lstrip("/")
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise MalformedURLError(f"Invalid URL {url!r}: {e}") from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise MalformedURLError(f"Invalid URL {url!r}: expected an absolute http(s) URL")
    return url


def _loggable_form(body: str) -> str:
    parts = []
    for k, v in parse_qsl(body, keep_blank_values=True):
        if k in PHONE_FIELDS:
            v = ",".join(mask_phone(p) for p in v.split(","))
        elif k == "body":
            v = shorten_body(v)
        parts.append(f"{k}={v}")
    return "&".join(parts)


def _json_body(params: Any) -> bytes:
    payload = params.to_payload() if hasattr(params, "to_payload") else params
    return to_json(payload).encode("utf-8")


def build_request(
    access_key: str,
    method: str,
    endpoint: str,
    path: str,
    params: Optional[Any] = None,
    *,
    as_json: bool = False,
    debug_log=None,
) -> requests.PreparedRequest:
    """
    Prepares one API request.

    Args:
        access_key: MessageBird access key, sent as ``Authorization: AccessKey <key>``.
        method: GET / POST / DELETE.
        endpoint: base endpoint, e.g. ``https://rest.messagebird.com``.
        path: resource path, optionally with an encoded query string.
        params: ``None`` for no body; a form mapping (values may be lists)
            or sequence of pairs; with ``as_json`` a mapping or an object with
            ``to_payload()``.
        as_json: send ``params`` as a JSON body instead of a form body.
        debug_log: optional logger receiving an ``HTTP REQUEST`` record.

    Raises:
        MalformedURLError: endpoint + path is not a usable URL.
    """
    url = build_url(endpoint, path)

    headers = {
        "Accept": JSON_CONTENT_TYPE,
        "Authorization": f"AccessKey {access_key}",
        "User-Agent": USER_AGENT,
    }

    body: Optional[Any] = None
    log_body: Optional[str] = None
    if params is not None:
        if as_json:
            body = _json_body(params)
            headers["Content-Type"] = JSON_CONTENT_TYPE
        else:
            items = params.items() if isinstance(params, Mapping) else params
            body = urlencode(list(items), doseq=True)
            log_body = _loggable_form(body)
            headers["Content-Type"] = FORM_CONTENT_TYPE

    try:
        prepared = requests.Request(method.upper(), url, headers=headers, data=body).prepare()
    except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema) as e:
        raise MalformedURLError(f"Invalid URL {url!r}: {e}") from e

    if debug_log is not None:
        record = {"msg": "HTTP REQUEST", "method": prepared.method, "url": prepared.url}
        if log_body is not None:
            record["body"] = log_body
        debug_log.info(record)

    return prepared
