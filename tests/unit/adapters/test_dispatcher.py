import pytest
import requests

from messagebird_rest.adapters.dispatcher import dispatch
from messagebird_rest.adapters.request_builder import build_request
from messagebird_rest.common.exceptions import (
    APIError,
    ResponseDecodeError,
    ServerUnavailableError,
    TransportError,
)
from messagebird_rest.domain.models import Balance, CallList, WebhookList
from tests.helpers.fakes import DummyResp, DummySession, ListLogger


def _get(path="calls", endpoint="https://voice.messagebird.com"):
    return build_request("test_key", "GET", endpoint, path)


def test_success_decodes_call_list():
    body = {"data": [{"id": "call-1", "status": "ended"}], "_links": {"self": "/calls/call-1"}}
    sess = DummySession(DummyResp(status_code=200, json_payload=body))
    calls = CallList()

    dispatch(sess, _get("calls/call-1"), calls, timeout=5)

    assert calls.data[0].id == "call-1"
    assert calls.data[0].status == "ended"
    assert calls.links == {"self": "/calls/call-1"}
    assert sess.calls[0]["timeout"] == 5


def test_201_is_success():
    sess = DummySession(DummyResp(status_code=201, json_payload={"data": [{"id": "wh-1"}]}))
    hooks = WebhookList()

    dispatch(sess, _get("webhooks"), hooks)

    assert hooks.data[0].id == "wh-1"


def test_500_leaves_container_untouched_and_skips_decoding():
    sess = DummySession(DummyResp(status_code=500, content=b'"internal error'))
    hooks = WebhookList()

    with pytest.raises(ServerUnavailableError):
        dispatch(sess, build_request("k", "POST", "https://voice.messagebird.com", "webhooks", {"url": "x"}, as_json=True), hooks)

    assert hooks == WebhookList()


@pytest.mark.parametrize("status", [400, 401, 404, 422])
def test_error_status_still_populates_container(status):
    body = {"data": [{"id": "x"}], "errors": [{"code": 13, "message": "Not found"}]}
    sess = DummySession(DummyResp(status_code=status, json_payload=body))
    calls = CallList()

    with pytest.raises(APIError) as e:
        dispatch(sess, _get(), calls)

    assert calls.data[0].id == "x"
    assert e.value.status_code == status
    assert e.value.result is calls
    assert e.value.errors[0].code == 13
    assert "Not found" in str(e.value)


def test_rest_error_body_is_exposed_through_errors():
    body = {"errors": [{"code": 2, "description": "Request not allowed (incorrect access_key)", "parameter": "access_key"}]}
    sess = DummySession(DummyResp(status_code=401, json_payload=body))
    balance = Balance()

    with pytest.raises(APIError) as e:
        dispatch(sess, _get("balance", "https://rest.messagebird.com"), balance)

    assert balance.errors[0].parameter == "access_key"
    assert "HTTP 401" in str(e.value)
    assert "incorrect access_key" in str(e.value)


def test_invalid_json_is_a_decode_error_even_on_error_status():
    sess = DummySession(DummyResp(status_code=404, content=b"<html>not found</html>"))

    with pytest.raises(ResponseDecodeError):
        dispatch(sess, _get(), CallList())


def test_invalid_json_on_success_is_a_decode_error():
    sess = DummySession(DummyResp(status_code=200, content=b"{"))

    with pytest.raises(ResponseDecodeError):
        dispatch(sess, _get(), CallList())


def test_shape_mismatch_is_a_decode_error():
    sess = DummySession(DummyResp(status_code=200, json_payload={"data": "not-a-list"}))

    with pytest.raises(ResponseDecodeError):
        dispatch(sess, _get(), CallList())


def test_no_container_skips_decoding():
    sess = DummySession(DummyResp(status_code=200, content=b"not json at all"))

    dispatch(sess, _get(), None)


def test_no_container_error_status_raises_api_error():
    sess = DummySession(DummyResp(status_code=404, content=b""))

    with pytest.raises(APIError) as e:
        dispatch(sess, _get("webhooks/abc"), None)

    assert e.value.result is None
    assert e.value.errors == []


def test_custom_success_statuses():
    sess = DummySession(DummyResp(status_code=204, content=b""))

    dispatch(sess, _get("webhooks/abc"), None, success=(200, 201, 204))


def test_transport_failure_wraps_cause():
    cause = requests.ConnectionError("dns failure")
    sess = DummySession(error=cause)

    with pytest.raises(TransportError) as e:
        dispatch(sess, _get(), CallList())

    assert e.value.__cause__ is cause


def test_body_read_failure_is_transport_error():
    resp = DummyResp(status_code=200, read_error=requests.exceptions.ChunkedEncodingError("connection broken"))
    sess = DummySession(resp)

    with pytest.raises(TransportError):
        dispatch(sess, _get(), CallList())


def test_debug_log_gets_raw_response():
    log = ListLogger()
    sess = DummySession(DummyResp(status_code=500, content=b"internal error"))

    with pytest.raises(ServerUnavailableError):
        dispatch(sess, _get(), CallList(), debug_log=log)

    assert log.records == [{"msg": "HTTP RESPONSE", "status": 500, "body": "internal error"}]


def test_plain_dict_container_is_filled_in_place():
    sess = DummySession(DummyResp(status_code=200, json_payload={"data": [{"id": "x"}]}))
    raw = {}

    dispatch(sess, _get(), raw)

    assert raw == {"data": [{"id": "x"}]}


def test_plain_list_container_is_filled_in_place():
    sess = DummySession(DummyResp(status_code=200, json_payload=[{"id": "a"}, {"id": "b"}]))
    raw = ["stale"]

    dispatch(sess, _get(), raw)

    assert raw == [{"id": "a"}, {"id": "b"}]


def test_plain_dict_container_on_error_status_is_exposed():
    sess = DummySession(DummyResp(status_code=422, json_payload={"errors": [{"code": 9}]}))
    raw = {}

    with pytest.raises(APIError) as e:
        dispatch(sess, _get(), raw)

    assert e.value.result == {"errors": [{"code": 9}]}


def test_plain_container_shape_mismatch_is_a_decode_error():
    sess = DummySession(DummyResp(status_code=200, json_payload=[1, 2]))

    with pytest.raises(ResponseDecodeError):
        dispatch(sess, _get(), {})


def test_unsupported_container_type_is_rejected():
    sess = DummySession(DummyResp(status_code=200, json_payload={}))

    with pytest.raises(TypeError):
        dispatch(sess, _get(), "not a container")
