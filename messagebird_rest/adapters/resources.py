"""Routing table for every MessageBird API operation.

A ``Route`` says where an operation goes and what comes back: HTTP method,
which base endpoint, the path template, how parameters travel (none, form
body, JSON body) and the container the response is decoded into. The Voice
API wraps even single resources in a list, those routes set ``first_item``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..domain import models

CLIENT_VERSION = "3.0.0"

REST_ENDPOINT = "https://rest.messagebird.com"
VOICE_ENDPOINT = "https://voice.messagebird.com"

# REST API
BALANCE_PATH = "balance"
HLR_PATH = "hlr"
MESSAGE_PATH = "messages"
MMS_PATH = "mms"
VOICE_MESSAGE_PATH = "voicemessages"
VERIFY_PATH = "verify"
LOOKUP_PATH = "lookup"

# Voice API
CALL_FLOW_PATH = "call-flows"
CALL_PATH = "calls"
LEG_PATH = "legs"
RECORDING_PATH = "recordings"
TRANSCRIPTION_PATH = "transcriptions"
WEBHOOK_PATH = "webhooks"

GET = "GET"
POST = "POST"
DELETE = "DELETE"

DEFAULT_SUCCESS = (200, 201)


class Base(str, Enum):
    REST = "rest"
    VOICE = "voice"


class Payload(str, Enum):
    NONE = "none"
    FORM = "form"
    JSON = "json"


@dataclass(frozen=True)
class Route:
    method: str
    base: Base
    path: str
    result: Optional[type] = None
    payload: Payload = Payload.NONE
    first_item: bool = False
    success: Tuple[int, ...] = DEFAULT_SUCCESS


_LEG = f"{CALL_PATH}/{{call_id}}/{LEG_PATH}"
_RECORDING = f"{_LEG}/{{leg_id}}/{RECORDING_PATH}"
_TRANSCRIPTION = f"{_RECORDING}/{{recording_id}}/{TRANSCRIPTION_PATH}"


ROUTES: Dict[str, Route] = {
    # --- REST: balance / HLR
    "balance": Route(GET, Base.REST, BALANCE_PATH, models.Balance),
    "hlr": Route(GET, Base.REST, f"{HLR_PATH}/{{id}}", models.HLR),
    "hlrs": Route(GET, Base.REST, HLR_PATH, models.HLRList),
    "new_hlr": Route(POST, Base.REST, HLR_PATH, models.HLR, Payload.FORM),

    # --- REST: messages
    "message": Route(GET, Base.REST, f"{MESSAGE_PATH}/{{id}}", models.Message),
    "messages": Route(GET, Base.REST, MESSAGE_PATH, models.MessageList),
    "new_message": Route(POST, Base.REST, MESSAGE_PATH, models.Message, Payload.FORM),
    "mms_message": Route(GET, Base.REST, f"{MMS_PATH}/{{id}}", models.MMSMessage),
    "new_mms_message": Route(POST, Base.REST, MMS_PATH, models.MMSMessage, Payload.FORM),
    "voice_message": Route(GET, Base.REST, f"{VOICE_MESSAGE_PATH}/{{id}}", models.VoiceMessage),
    "voice_messages": Route(GET, Base.REST, VOICE_MESSAGE_PATH, models.VoiceMessageList),
    "new_voice_message": Route(POST, Base.REST, VOICE_MESSAGE_PATH, models.VoiceMessage, Payload.FORM),

    # --- REST: verify / lookup
    "new_verify": Route(POST, Base.REST, VERIFY_PATH, models.Verify, Payload.FORM),
    "verify_token": Route(GET, Base.REST, f"{VERIFY_PATH}/{{id}}", models.Verify),
    "lookup": Route(GET, Base.REST, f"{LOOKUP_PATH}/{{phone_number}}", models.Lookup),
    "new_lookup_hlr": Route(POST, Base.REST, f"{LOOKUP_PATH}/{{phone_number}}/hlr", models.HLR, Payload.FORM),
    "lookup_hlr": Route(GET, Base.REST, f"{LOOKUP_PATH}/{{phone_number}}/hlr", models.HLR),

    # --- Voice: call flows / calls
    "call_flow": Route(GET, Base.VOICE, f"{CALL_FLOW_PATH}/{{id}}", models.CallFlowList, first_item=True),
    "call_flows": Route(GET, Base.VOICE, CALL_FLOW_PATH, models.CallFlowList),
    "new_call_flow": Route(POST, Base.VOICE, CALL_FLOW_PATH, models.CallFlowList, Payload.JSON, first_item=True),
    "call": Route(GET, Base.VOICE, f"{CALL_PATH}/{{id}}", models.CallList, first_item=True),
    "calls": Route(GET, Base.VOICE, CALL_PATH, models.CallList),
    "new_call": Route(POST, Base.VOICE, CALL_PATH, models.CallList, Payload.JSON, first_item=True),

    # --- Voice: legs / recordings / transcriptions
    "leg": Route(GET, Base.VOICE, f"{_LEG}/{{leg_id}}", models.LegList, first_item=True),
    "legs": Route(GET, Base.VOICE, _LEG, models.LegList),
    "recording": Route(GET, Base.VOICE, f"{_RECORDING}/{{recording_id}}", models.RecordingList, first_item=True),
    "recordings": Route(GET, Base.VOICE, _RECORDING, models.RecordingList),
    "transcription": Route(
        GET, Base.VOICE, f"{_TRANSCRIPTION}/{{transcription_id}}", models.TranscriptionList, first_item=True
    ),
    "transcriptions": Route(GET, Base.VOICE, _TRANSCRIPTION, models.TranscriptionList),
    "new_transcription_request": Route(
        POST, Base.VOICE, _TRANSCRIPTION, models.TranscriptionList, Payload.JSON, first_item=True
    ),

    # --- Voice: webhooks
    "webhook": Route(GET, Base.VOICE, f"{WEBHOOK_PATH}/{{id}}", models.WebhookList, first_item=True),
    "webhooks": Route(GET, Base.VOICE, WEBHOOK_PATH, models.WebhookList),
    "new_webhook": Route(POST, Base.VOICE, WEBHOOK_PATH, models.WebhookList, Payload.JSON, first_item=True),
    # the Voice API answers a delete with 204 and no body
    "delete_webhook": Route(DELETE, Base.VOICE, f"{WEBHOOK_PATH}/{{id}}", None, success=(200, 201, 204)),
}
