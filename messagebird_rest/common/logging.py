"""Structured logger used across the client.

Records are passed as dicts. With ``aws-lambda-powertools`` installed they go
out through its ``Logger`` as structured JSON; without it a small stdlib
wrapper renders each dict as one JSON line.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

try:
    from aws_lambda_powertools import Logger as _PowertoolsLogger
except ImportError:
    _PowertoolsLogger = None

SERVICE_NAME = os.getenv("POWERTOOLS_SERVICE_NAME", "messagebird")


class JsonLogger:
    """Stdlib fallback: dict records are serialized to JSON strings."""

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _render(self, msg: Any) -> Any:
        if isinstance(msg, dict):
            return json.dumps(msg, ensure_ascii=False, default=str)
        return msg

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(self._render(msg), *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._logger.info(self._render(msg), *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(self._render(msg), *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._logger.error(self._render(msg), *args, **kwargs)

    def exception(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._logger.exception(self._render(msg), *args, **kwargs)


def get_logger(name: str = SERVICE_NAME, handler: logging.Handler | None = None):
    """Powertools ``Logger`` for ``name``, or the stdlib ``JsonLogger`` fallback.

    ``handler`` replaces the default stdout handler (powertools only).
    """
    if _PowertoolsLogger is not None:
        return _PowertoolsLogger(service=name, logger_handler=handler)
    return JsonLogger(name)


logger = get_logger()
