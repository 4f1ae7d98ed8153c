"""messagebird_rest.common.config

Client settings come from the environment only. A ``.env`` file next to the
embedding application is picked up when present, nothing is fetched remotely.

Values are read once at import; tests and embedders that need different
values either pass them to ``Client(...)`` directly or patch ``settings``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv())


@dataclass
class Settings:
    """
    Connection settings for the MessageBird client.

    Every field can be overridden per client instance, these are only defaults.
    """

    access_key: str = os.getenv("MESSAGEBIRD_ACCESS_KEY", "")

    # base endpoints (REST: messages/hlr/lookup/verify, Voice: call flows/calls/webhooks)
    rest_endpoint: str = os.getenv("MESSAGEBIRD_REST_ENDPOINT", "https://rest.messagebird.com")
    voice_endpoint: str = os.getenv("MESSAGEBIRD_VOICE_ENDPOINT", "https://voice.messagebird.com")

    http_timeout_s: float = float(os.getenv("MESSAGEBIRD_TIMEOUT_S", "10"))

    # HTTP REQUEST / HTTP RESPONSE trace lines
    debug_http: bool = os.getenv("MESSAGEBIRD_DEBUG", "false").lower() == "true"


settings = Settings()
