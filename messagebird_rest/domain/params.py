"""Request parameters for MessageBird API calls.

Two kinds of input live here:

- form parameters for the REST API (messages, MMS, voice messages, verify,
  lookup). ``params_for_*`` turn the optional fields that are set into an
  ordered ``{name: value | [values]}`` mapping; unset fields are left out.
- JSON payloads for the Voice API (call flows, calls, webhooks). They expose
  ``to_payload()`` with the camelCase body the API expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from ..common.exceptions import ParameterError

FormValue = Union[str, List[str]]
FormParams = Dict[str, FormValue]

MESSAGE_TYPES = ("sms", "binary", "premium", "flash")


def rfc3339(dt: datetime) -> str:
    # naive datetimes are taken as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat(timespec="seconds")


def join_recipients(recipients: List[Union[str, int]]) -> str:
    if isinstance(recipients, (str, int)):
        recipients = [recipients]
    cleaned = [str(r).strip() for r in recipients or [] if str(r).strip()]
    if not cleaned:
        raise ParameterError("At least one recipient is required")
    return ",".join(cleaned)


# --------------------------------------------------------------------------- #
# REST API form parameters
# --------------------------------------------------------------------------- #

@dataclass
class MessageParams:
    type: Optional[str] = None
    reference: Optional[str] = None
    validity: Optional[int] = None
    gateway: Optional[int] = None
    type_details: Dict[str, Union[str, int]] = field(default_factory=dict)
    data_coding: Optional[str] = None
    scheduled_datetime: Optional[datetime] = None


@dataclass
class MMSMessageParams:
    body: Optional[str] = None
    media_urls: List[str] = field(default_factory=list)
    subject: Optional[str] = None
    reference: Optional[str] = None
    scheduled_datetime: Optional[datetime] = None


@dataclass
class VoiceMessageParams:
    originator: Optional[str] = None
    reference: Optional[str] = None
    language: Optional[str] = None
    voice: Optional[str] = None
    repeat: Optional[int] = None
    if_machine: Optional[str] = None
    machine_timeout: Optional[int] = None
    scheduled_datetime: Optional[datetime] = None


@dataclass
class VerifyParams:
    originator: Optional[str] = None
    reference: Optional[str] = None
    type: Optional[str] = None
    template: Optional[str] = None
    data_coding: Optional[str] = None
    voice: Optional[str] = None
    language: Optional[str] = None
    timeout: Optional[int] = None
    token_length: Optional[int] = None


@dataclass
class LookupParams:
    country_code: Optional[str] = None
    reference: Optional[str] = None


def params_for_message(params: Optional[MessageParams]) -> FormParams:
    form: FormParams = {}
    if params is None:
        return form

    if params.type:
        if params.type not in MESSAGE_TYPES:
            raise ParameterError(f"Unknown message type {params.type!r}, expected one of {', '.join(MESSAGE_TYPES)}")
        form["type"] = params.type
        if params.type == "flash":
            form["mclass"] = "0"
    if params.reference:
        form["reference"] = params.reference
    if params.validity:
        form["validity"] = str(params.validity)
    if params.gateway:
        form["gateway"] = str(params.gateway)
    for k, v in (params.type_details or {}).items():
        if isinstance(v, bool) or not isinstance(v, (str, int)):
            raise ParameterError(f"Unsupported value type for typeDetails[{k}]: {type(v).__name__}")
        form[f"typeDetails[{k}]"] = str(v)
    if params.data_coding:
        form["datacoding"] = params.data_coding
    if params.scheduled_datetime is not None:
        form["scheduledDatetime"] = rfc3339(params.scheduled_datetime)
    return form


def params_for_mms_message(params: Optional[MMSMessageParams]) -> FormParams:
    if params is None:
        raise ParameterError("MMS parameters are required")
    if not params.body and not params.media_urls:
        raise ParameterError("Body or MediaUrls is required")

    form: FormParams = {}
    if params.body:
        form["body"] = params.body
    if params.media_urls:
        form["mediaUrls[]"] = list(params.media_urls)
    if params.subject:
        form["subject"] = params.subject
    if params.reference:
        form["reference"] = params.reference
    if params.scheduled_datetime is not None:
        form["scheduledDatetime"] = rfc3339(params.scheduled_datetime)
    return form


def params_for_voice_message(params: Optional[VoiceMessageParams]) -> FormParams:
    form: FormParams = {}
    if params is None:
        return form

    if params.originator:
        form["originator"] = params.originator
    if params.reference:
        form["reference"] = params.reference
    if params.language:
        form["language"] = params.language
    if params.voice:
        form["voice"] = params.voice
    if params.repeat:
        form["repeat"] = str(params.repeat)
    if params.if_machine:
        form["ifMachine"] = params.if_machine
    if params.machine_timeout:
        form["machineTimeout"] = str(params.machine_timeout)
    if params.scheduled_datetime is not None:
        form["scheduledDatetime"] = rfc3339(params.scheduled_datetime)
    return form


def params_for_verify(params: Optional[VerifyParams]) -> FormParams:
    form: FormParams = {}
    if params is None:
        return form

    if params.originator:
        form["originator"] = params.originator
    if params.reference:
        form["reference"] = params.reference
    if params.type:
        form["type"] = params.type
    if params.template:
        form["template"] = params.template
    if params.data_coding:
        form["datacoding"] = params.data_coding
    if params.voice:
        form["voice"] = params.voice
    if params.language:
        form["language"] = params.language
    if params.timeout:
        form["timeout"] = str(params.timeout)
    if params.token_length:
        form["tokenLength"] = str(params.token_length)
    return form


def params_for_lookup(params: Optional[LookupParams]) -> FormParams:
    form: FormParams = {}
    if params is None:
        return form

    if params.country_code:
        form["countryCode"] = params.country_code
    if params.reference:
        form["reference"] = params.reference
    return form


# --------------------------------------------------------------------------- #
# Voice API JSON payloads
# --------------------------------------------------------------------------- #

@dataclass
class StepParams:
    action: str
    options: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {"action": self.action, "options": dict(self.options)}


@dataclass
class CallFlowParams:
    title: str = ""
    steps: List[StepParams] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "steps": [s.to_payload() for s in self.steps],
        }


@dataclass
class CallParams:
    source: str
    destination: str
    call_flow: CallFlowParams = field(default_factory=CallFlowParams)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "destination": self.destination,
            "callFlow": self.call_flow.to_payload(),
        }


@dataclass
class WebhookParams:
    url: str
    title: str = ""
    token: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {"title": self.title, "url": self.url, "token": self.token}
