import pathlib

import pytest

import messagebird_rest.common.http_client as http_client
from messagebird_rest.common.config import settings
from tests.helpers.fakes import DummyResp, DummySession


# ----------------------------
#  Auto-mark tests by folder
# ----------------------------

def pytest_collection_modifyitems(config, items):
    for item in items:
        p = pathlib.Path(str(item.fspath)).as_posix()
        if "/tests/unit/" in p:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in p:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_http_session_singleton():
    http_client._SESSION = None
    yield
    http_client._SESSION = None


@pytest.fixture(autouse=True)
def env_setup(monkeypatch):
    # ensure tests never use real vendor secrets or endpoints
    monkeypatch.delenv("MESSAGEBIRD_ACCESS_KEY", raising=False)
    monkeypatch.delenv("MESSAGEBIRD_REST_ENDPOINT", raising=False)
    monkeypatch.delenv("MESSAGEBIRD_VOICE_ENDPOINT", raising=False)

    monkeypatch.setattr(settings, "access_key", "", raising=False)
    monkeypatch.setattr(settings, "rest_endpoint", "https://rest.messagebird.com", raising=False)
    monkeypatch.setattr(settings, "voice_endpoint", "https://voice.messagebird.com", raising=False)
    monkeypatch.setattr(settings, "http_timeout_s", 10.0, raising=False)
    monkeypatch.setattr(settings, "debug_http", False, raising=False)


@pytest.fixture()
def make_client():
    """Client wired to a DummySession answering with the given response."""
    from messagebird_rest.adapters.rest_client import Client

    def _make(status_code=200, json_payload=None, content=None, **kwargs):
        sess = DummySession(DummyResp(status_code=status_code, json_payload=json_payload, content=content))
        return Client("test_accesskey", session=sess, **kwargs), sess

    return _make
