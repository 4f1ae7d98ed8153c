import json
import re
from typing import Any

_CAMEL_RE = re.compile(r"_([a-z0-9])")


def to_json(o: Any) -> str:
    return json.dumps(o, ensure_ascii=False, separators=(",", ":"))


def camel_case(name: str) -> str:
    """created_datetime -> createdDatetime"""
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)
