"""MessageBird API client.

Every public method is a thin wrapper: it picks its ``Route`` from
``resources.ROUTES``, prepares parameters and hands over to ``call_route``,
which builds the request, dispatches it and unwraps the result.

Error contract (see ``common.exceptions``): on ``APIError`` the decoded
container is available as ``err.result``; for Voice API single-resource calls
that is the first element of the returned list (or ``None``).

Usage::

    client = Client("live_xxx")
    msg = client.new_message("MessageBird", ["31612345678"], "Hello")
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union
from urllib.parse import quote, urlencode

import requests

from .dispatcher import dispatch
from .request_builder import build_request
from .resources import ROUTES, Base, Payload, Route
from ..common.config import settings
from ..common.exceptions import APIError, EmptyResultError, ParameterError
from ..common.http_client import get_session
from ..common.logging import logger
from ..common.logging_utils import mask_access_key
from ..domain import models
from ..domain.params import (
    CallFlowParams,
    CallParams,
    LookupParams,
    MessageParams,
    MMSMessageParams,
    VerifyParams,
    VoiceMessageParams,
    WebhookParams,
    join_recipients,
    params_for_lookup,
    params_for_message,
    params_for_mms_message,
    params_for_verify,
    params_for_voice_message,
)

Recipients = Union[List[Union[str, int]], str, int]


def _first(container: Any) -> Any:
    data = getattr(container, "data", None) or []
    return data[0] if data else None


class Client:
    """
    Client for the MessageBird REST and Voice APIs.

    Holds only the access key, endpoints and a shared ``requests.Session``;
    nothing changes per call, so one instance can serve many threads.
    """

    def __init__(
        self,
        access_key: str | None = None,
        *,
        session: requests.Session | None = None,
        rest_endpoint: str | None = None,
        voice_endpoint: str | None = None,
        timeout: float | None = None,
        debug_log=None,
    ) -> None:
        self.access_key = (access_key or settings.access_key or "").strip()
        if not self.access_key:
            raise ParameterError("Missing access key: pass access_key or set MESSAGEBIRD_ACCESS_KEY")

        self.session = session if session is not None else get_session()
        self.rest_endpoint = (rest_endpoint or settings.rest_endpoint).strip()
        self.voice_endpoint = (voice_endpoint or settings.voice_endpoint).strip()
        self.timeout = timeout if timeout is not None else settings.http_timeout_s

        if debug_log is None and settings.debug_http:
            debug_log = logger
        self.debug_log = debug_log

    @classmethod
    def from_config(cls, cfg: dict, **kwargs: Any) -> "Client":
        mb = (cfg or {}).get("messagebird") or {}
        if not isinstance(mb, dict):
            mb = {}
        timeout = mb.get("timeout_s")
        return cls(
            access_key=mb.get("access_key"),
            rest_endpoint=mb.get("rest_endpoint"),
            voice_endpoint=mb.get("voice_endpoint"),
            timeout=float(timeout) if timeout not in (None, "") else None,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"Client(access_key={mask_access_key(self.access_key)!r})"

    # ------------------------------------------------------------------ #
    # Generic call
    # ------------------------------------------------------------------ #

    def _endpoint(self, base: Base) -> str:
        return self.voice_endpoint if base is Base.VOICE else self.rest_endpoint

    def call_route(
        self,
        route: Route,
        *,
        path_args: Optional[Mapping[str, Any]] = None,
        params: Optional[Any] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Runs one API operation described by ``route``.

        Returns the decoded container, its first element for ``first_item``
        routes, or ``None`` for routes without a result.
        """
        path = route.path.format(**{k: quote(str(v), safe="+") for k, v in (path_args or {}).items()})
        if query:
            encoded = urlencode(list(query.items()), doseq=True)
            if encoded:
                path = f"{path}?{encoded}"

        request = build_request(
            self.access_key,
            route.method,
            self._endpoint(route.base),
            path,
            params if route.payload is not Payload.NONE else None,
            as_json=route.payload is Payload.JSON,
            debug_log=self.debug_log,
        )

        container = route.result() if route.result is not None else None
        try:
            dispatch(
                self.session,
                request,
                container,
                timeout=self.timeout,
                debug_log=self.debug_log,
                success=route.success,
            )
        except APIError as e:
            if route.first_item:
                e.result = _first(container)
            raise

        if not route.first_item:
            return container

        item = _first(container)
        if item is None:
            raise EmptyResultError(f"{route.method} {path}: response contained no items")
        return item

    def _call(self, name: str, **kwargs: Any) -> Any:
        return self.call_route(ROUTES[name], **kwargs)

    # ------------------------------------------------------------------ #
    # Balance / HLR
    # ------------------------------------------------------------------ #

    def balance(self) -> models.Balance:
        """Balance of the account that owns the access key."""
        return self._call("balance")

    def hlr(self, id: str) -> models.HLR:
        return self._call("hlr", path_args={"id": id})

    def hlrs(self) -> models.HLRList:
        return self._call("hlrs")

    def new_hlr(self, msisdn: str | int, reference: str) -> models.HLR:
        """Requests a new HLR lookup for ``msisdn``."""
        return self._call("new_hlr", params={"msisdn": str(msisdn), "reference": reference})

    # ------------------------------------------------------------------ #
    # Messages
    # ------------------------------------------------------------------ #

    def message(self, id: str) -> models.Message:
        return self._call("message", path_args={"id": id})

    def messages(self) -> models.MessageList:
        return self._call("messages")

    def new_message(
        self,
        originator: str,
        recipients: Recipients,
        body: str,
        params: MessageParams | None = None,
    ) -> models.Message:
        """Sends an SMS to one or more recipients."""
        form = params_for_message(params)
        form["originator"] = originator
        form["body"] = body
        form["recipients"] = join_recipients(recipients)
        return self._call("new_message", params=form)

    def mms_message(self, id: str) -> models.MMSMessage:
        return self._call("mms_message", path_args={"id": id})

    def new_mms_message(
        self,
        originator: str,
        recipients: Recipients,
        params: MMSMessageParams,
    ) -> models.MMSMessage:
        form = params_for_mms_message(params)
        form["originator"] = originator
        form["recipients"] = join_recipients(recipients)
        return self._call("new_mms_message", params=form)

    def voice_message(self, id: str) -> models.VoiceMessage:
        return self._call("voice_message", path_args={"id": id})

    def voice_messages(self) -> models.VoiceMessageList:
        return self._call("voice_messages")

    def new_voice_message(
        self,
        recipients: Recipients,
        body: str,
        params: VoiceMessageParams | None = None,
    ) -> models.VoiceMessage:
        """Text-to-speech message to one or more recipients."""
        form = params_for_voice_message(params)
        form["body"] = body
        form["recipients"] = join_recipients(recipients)
        return self._call("new_voice_message", params=form)

    # ------------------------------------------------------------------ #
    # Verify / Lookup
    # ------------------------------------------------------------------ #

    def new_verify(self, recipient: str | int, params: VerifyParams | None = None) -> models.Verify:
        """Generates a one-time password and sends it to ``recipient``."""
        form = params_for_verify(params)
        form["recipient"] = str(recipient)
        return self._call("new_verify", params=form)

    def verify_token(self, id: str, token: str) -> models.Verify:
        """Checks ``token`` against the verification ``id``."""
        return self._call("verify_token", path_args={"id": id}, query={"token": token})

    def lookup(self, phone_number: str | int, params: LookupParams | None = None) -> models.Lookup:
        return self._call(
            "lookup",
            path_args={"phone_number": phone_number},
            query=params_for_lookup(params),
        )

    def new_lookup_hlr(self, phone_number: str | int, params: LookupParams | None = None) -> models.HLR:
        return self._call(
            "new_lookup_hlr",
            path_args={"phone_number": phone_number},
            params=params_for_lookup(params),
        )

    def lookup_hlr(self, phone_number: str | int, params: LookupParams | None = None) -> models.HLR:
        return self._call(
            "lookup_hlr",
            path_args={"phone_number": phone_number},
            query=params_for_lookup(params),
        )

    # ------------------------------------------------------------------ #
    # Voice: call flows / calls
    # ------------------------------------------------------------------ #

    def call_flow(self, id: str) -> models.CallFlow:
        return self._call("call_flow", path_args={"id": id})

    def call_flows(self) -> models.CallFlowList:
        return self._call("call_flows")

    def new_call_flow(self, params: CallFlowParams) -> models.CallFlow:
        return self._call("new_call_flow", params=params)

    def call(self, id: str) -> models.Call:
        return self._call("call", path_args={"id": id})

    def calls(self) -> models.CallList:
        return self._call("calls")

    def new_call(self, params: CallParams) -> models.Call:
        """Starts an outbound call that runs ``params.call_flow``."""
        return self._call("new_call", params=params)

    # ------------------------------------------------------------------ #
    # Voice: legs / recordings / transcriptions
    # ------------------------------------------------------------------ #

    def leg(self, call_id: str, leg_id: str) -> models.Leg:
        return self._call("leg", path_args={"call_id": call_id, "leg_id": leg_id})

    def legs(self, call_id: str) -> models.LegList:
        return self._call("legs", path_args={"call_id": call_id})

    def recording(self, call_id: str, leg_id: str, recording_id: str) -> models.Recording:
        return self._call(
            "recording",
            path_args={"call_id": call_id, "leg_id": leg_id, "recording_id": recording_id},
        )

    def recordings(self, call_id: str, leg_id: str) -> models.RecordingList:
        return self._call("recordings", path_args={"call_id": call_id, "leg_id": leg_id})

    def transcription(
        self,
        call_id: str,
        leg_id: str,
        recording_id: str,
        transcription_id: str,
    ) -> models.Transcription:
        return self._call(
            "transcription",
            path_args={
                "call_id": call_id,
                "leg_id": leg_id,
                "recording_id": recording_id,
                "transcription_id": transcription_id,
            },
        )

    def transcriptions(self, call_id: str, leg_id: str, recording_id: str) -> models.TranscriptionList:
        return self._call(
            "transcriptions",
            path_args={"call_id": call_id, "leg_id": leg_id, "recording_id": recording_id},
        )

    def new_transcription_request(self, call_id: str, leg_id: str, recording_id: str) -> models.Transcription:
        """Asks the Voice API to transcribe an existing recording."""
        return self._call(
            "new_transcription_request",
            path_args={"call_id": call_id, "leg_id": leg_id, "recording_id": recording_id},
            params={},
        )

    # ------------------------------------------------------------------ #
    # Voice: webhooks
    # ------------------------------------------------------------------ #

    def webhook(self, id: str) -> models.Webhook:
        return self._call("webhook", path_args={"id": id})

    def webhooks(self) -> models.WebhookList:
        return self._call("webhooks")

    def new_webhook(self, params: WebhookParams) -> models.Webhook:
        return self._call("new_webhook", params=params)

    def delete_webhook(self, id: str) -> None:
        self._call("delete_webhook", path_args={"id": id})
