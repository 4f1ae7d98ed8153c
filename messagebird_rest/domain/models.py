"""Result containers for MessageBird API responses.

Each container is a dataclass that is created empty and filled in place by
``load(payload)`` with the decoded JSON body. JSON keys are the camelCase form
of the field name unless the field says otherwise (``_links``, ``links``).

Every container has an ``errors`` list, so the ``{"errors": [...]}`` body that
accompanies a non-2xx status is readable from the same object.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass, field, fields
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional, get_args, get_origin, get_type_hints

from ..common.exceptions import ResponseDecodeError
from ..common.utils import camel_case


def _key_dict(name: str) -> Any:
    return field(default_factory=dict, metadata={"json": name})


@lru_cache(maxsize=None)
def _hints(cls: type) -> Dict[str, Any]:
    return get_type_hints(cls)


def _fail(where: str, expected: str, value: Any) -> ResponseDecodeError:
    return ResponseDecodeError(f"{where}: expected {expected}, got {type(value).__name__}")


def _decode(tp: Any, value: Any, where: str) -> Any:
    if value is None or tp is Any:
        return value

    origin = get_origin(tp)
    if origin in (typing.Union, types.UnionType):
        args = [a for a in get_args(tp) if a is not type(None)]
        return _decode(args[0], value, where) if len(args) == 1 else value

    if origin in (list, List):
        if not isinstance(value, list):
            raise _fail(where, "a list", value)
        (item_tp,) = get_args(tp) or (Any,)
        return [_decode(item_tp, v, f"{where}[{i}]") for i, v in enumerate(value)]

    if origin in (dict, Dict):
        if not isinstance(value, dict):
            raise _fail(where, "an object", value)
        return dict(value)

    if tp is datetime:
        if not isinstance(value, str):
            raise _fail(where, "a timestamp", value)
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ResponseDecodeError(f"{where}: invalid timestamp {value!r}") from e

    if isinstance(tp, type) and issubclass(tp, Model):
        return tp().load(value, where=where)

    # bool is an int subclass, json true/false never counts as a number
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _fail(where, "a number", value)
        return float(value)
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _fail(where, "an integer", value)
        return value
    if tp is str:
        if not isinstance(value, str):
            raise _fail(where, "a string", value)
        return value
    if tp is bool:
        if not isinstance(value, bool):
            raise _fail(where, "a boolean", value)
        return value

    return value


class Model:
    """Base for all result containers."""

    def load(self, payload: Any, *, where: str | None = None):
        """Fill this container in place from a decoded JSON value.

        Keys that are missing leave the current value alone, unknown keys are
        ignored. ``null`` is a no-op, like decoding ``null`` into an object.
        """
        where = where or type(self).__name__
        if payload is None:
            return self
        if not isinstance(payload, dict):
            raise _fail(where, "an object", payload)

        hints = _hints(type(self))
        for f in fields(self):
            key = f.metadata.get("json") or camel_case(f.name)
            if key in payload:
                setattr(self, f.name, _decode(hints[f.name], payload[key], f"{where}.{f.name}"))
        return self

    @classmethod
    def from_payload(cls, payload: Any):
        return cls().load(payload)


@dataclass
class ErrorDetail(Model):
    code: Optional[int] = None
    description: Optional[str] = None
    parameter: Optional[str] = None
    message: Optional[str] = None

    def __str__(self) -> str:
        text = self.description or self.message or ""
        if self.parameter:
            text = f"{text} (parameter: {self.parameter})"
        return f"{self.code}: {text}" if self.code is not None else text


# --------------------------------------------------------------------------- #
# REST API (rest.messagebird.com)
# --------------------------------------------------------------------------- #

@dataclass
class Balance(Model):
    payment: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[float] = None
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class HLR(Model):
    id: Optional[str] = None
    href: Optional[str] = None
    msisdn: Optional[int] = None
    network: Optional[int] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    created_datetime: Optional[datetime] = None
    status_datetime: Optional[datetime] = None
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class HLRList(Model):
    offset: Optional[int] = None
    limit: Optional[int] = None
    count: Optional[int] = None
    total_count: Optional[int] = None
    links: Dict[str, Optional[str]] = _key_dict("links")
    items: List[HLR] = field(default_factory=list)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Recipient(Model):
    recipient: Optional[int] = None
    status: Optional[str] = None
    status_datetime: Optional[datetime] = None


@dataclass
class Recipients(Model):
    total_count: Optional[int] = None
    total_sent_count: Optional[int] = None
    total_delivered_count: Optional[int] = None
    total_delivery_failed_count: Optional[int] = None
    items: List[Recipient] = field(default_factory=list)


@dataclass
class Message(Model):
    id: Optional[str] = None
    href: Optional[str] = None
    direction: Optional[str] = None
    type: Optional[str] = None
    originator: Optional[str] = None
    body: Optional[str] = None
    reference: Optional[str] = None
    validity: Optional[int] = None
    gateway: Optional[int] = None
    type_details: Dict[str, Any] = field(default_factory=dict)
    datacoding: Optional[str] = None
    mclass: Optional[int] = None
    scheduled_datetime: Optional[datetime] = None
    created_datetime: Optional[datetime] = None
    recipients: Optional[Recipients] = None
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class MessageList(Model):
    offset: Optional[int] = None
    limit: Optional[int] = None
    count: Optional[int] = None
    total_count: Optional[int] = None
    links: Dict[str, Optional[str]] = _key_dict("links")
    items: List[Message] = field(default_factory=list)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class MMSMessage(Model):
    id: Optional[str] = None
    href: Optional[str] = None
    direction: Optional[str] = None
    originator: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    media_urls: List[str] = field(default_factory=list)
    reference: Optional[str] = None
    scheduled_datetime: Optional[datetime] = None
    created_datetime: Optional[datetime] = None
    recipients: Optional[Recipients] = None
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class VoiceMessage(Model):
    id: Optional[str] = None
    href: Optional[str] = None
    originator: Optional[str] = None
    body: Optional[str] = None
    reference: Optional[str] = None
    language: Optional[str] = None
    voice: Optional[str] = None
    repeat: Optional[int] = None
    if_machine: Optional[str] = None
    machine_timeout: Optional[int] = None
    scheduled_datetime: Optional[datetime] = None
    created_datetime: Optional[datetime] = None
    recipients: Optional[Recipients] = None
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class VoiceMessageList(Model):
    offset: Optional[int] = None
    limit: Optional[int] = None
    count: Optional[int] = None
    total_count: Optional[int] = None
    links: Dict[str, Optional[str]] = _key_dict("links")
    items: List[VoiceMessage] = field(default_factory=list)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Verify(Model):
    id: Optional[str] = None
    href: Optional[str] = None
    recipient: Optional[int] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    messages: Dict[str, Any] = field(default_factory=dict)
    created_datetime: Optional[datetime] = None
    valid_until_datetime: Optional[datetime] = None
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class LookupFormats(Model):
    e164: Optional[str] = None
    international: Optional[str] = None
    national: Optional[str] = None
    rfc3966: Optional[str] = None


@dataclass
class Lookup(Model):
    href: Optional[str] = None
    country_code: Optional[str] = None
    country_prefix: Optional[int] = None
    phone_number: Optional[int] = None
    type: Optional[str] = None
    formats: Optional[LookupFormats] = None
    hlr: Optional[HLR] = None
    errors: List[ErrorDetail] = field(default_factory=list)


# --------------------------------------------------------------------------- #
# Voice API (voice.messagebird.com)
# Single resources come back wrapped as {"data": [...], "_links": ..., "pagination": ...}
# --------------------------------------------------------------------------- #

@dataclass
class Step(Model):
    id: Optional[str] = None
    action: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CallFlow(Model):
    id: Optional[str] = None
    title: Optional[str] = None
    steps: List[Step] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class CallFlowList(Model):
    data: List[CallFlow] = field(default_factory=list)
    links: Dict[str, Optional[str]] = _key_dict("_links")
    pagination: Dict[str, int] = field(default_factory=dict)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Call(Model):
    id: Optional[str] = None
    number_id: Optional[str] = None
    status: Optional[str] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    links: Dict[str, Optional[str]] = _key_dict("_links")


@dataclass
class CallList(Model):
    data: List[Call] = field(default_factory=list)
    links: Dict[str, Optional[str]] = _key_dict("_links")
    pagination: Dict[str, int] = field(default_factory=dict)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Leg(Model):
    id: Optional[str] = None
    call_id: Optional[str] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    status: Optional[str] = None
    direction: Optional[str] = None
    cost: Optional[float] = None
    currency: Optional[str] = None
    duration: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None


@dataclass
class LegList(Model):
    data: List[Leg] = field(default_factory=list)
    links: Dict[str, Optional[str]] = _key_dict("_links")
    pagination: Dict[str, int] = field(default_factory=dict)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Recording(Model):
    id: Optional[str] = None
    format: Optional[str] = None
    leg_id: Optional[str] = None
    status: Optional[str] = None
    duration: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Dict[str, Optional[str]] = _key_dict("_links")


@dataclass
class RecordingList(Model):
    data: List[Recording] = field(default_factory=list)
    links: Dict[str, Optional[str]] = _key_dict("_links")
    pagination: Dict[str, int] = field(default_factory=dict)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Transcription(Model):
    id: Optional[str] = None
    recording_id: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Dict[str, Optional[str]] = _key_dict("_links")


@dataclass
class TranscriptionList(Model):
    data: List[Transcription] = field(default_factory=list)
    links: Dict[str, Optional[str]] = _key_dict("_links")
    pagination: Dict[str, int] = field(default_factory=dict)
    errors: List[ErrorDetail] = field(default_factory=list)


@dataclass
class Webhook(Model):
    id: Optional[str] = None
    url: Optional[str] = None
    token: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Dict[str, Optional[str]] = _key_dict("_links")


@dataclass
class WebhookList(Model):
    data: List[Webhook] = field(default_factory=list)
    links: Dict[str, Optional[str]] = _key_dict("_links")
    pagination: Dict[str, int] = field(default_factory=dict)
    errors: List[ErrorDetail] = field(default_factory=list)
