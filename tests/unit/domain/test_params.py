from datetime import datetime, timezone

import pytest

from messagebird_rest.common.exceptions import ParameterError
from messagebird_rest.domain.params import (
    CallFlowParams,
    CallParams,
    LookupParams,
    MessageParams,
    MMSMessageParams,
    StepParams,
    VerifyParams,
    VoiceMessageParams,
    WebhookParams,
    join_recipients,
    params_for_lookup,
    params_for_message,
    params_for_mms_message,
    params_for_verify,
    params_for_voice_message,
    rfc3339,
)


def test_unset_fields_are_omitted():
    assert params_for_message(None) == {}
    assert params_for_message(MessageParams()) == {}
    assert params_for_voice_message(VoiceMessageParams()) == {}
    assert params_for_verify(VerifyParams()) == {}
    assert params_for_lookup(LookupParams()) == {}


def test_message_params_full():
    form = params_for_message(
        MessageParams(
            type="premium",
            reference="ref",
            validity=3600,
            gateway=10,
            type_details={"tariff": 150, "shortcode": "1008"},
            data_coding="unicode",
            scheduled_datetime=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )
    )
    assert form == {
        "type": "premium",
        "reference": "ref",
        "validity": "3600",
        "gateway": "10",
        "typeDetails[tariff]": "150",
        "typeDetails[shortcode]": "1008",
        "datacoding": "unicode",
        "scheduledDatetime": "2024-01-02T03:04:05+00:00",
    }


def test_flash_message_sets_mclass_zero():
    assert params_for_message(MessageParams(type="flash")) == {"type": "flash", "mclass": "0"}


def test_unknown_message_type_rejected():
    with pytest.raises(ParameterError):
        params_for_message(MessageParams(type="fax"))


def test_type_details_value_type_checked():
    with pytest.raises(ParameterError):
        params_for_message(MessageParams(type_details={"x": 1.5}))


def test_rfc3339_treats_naive_as_utc():
    assert rfc3339(datetime(2024, 5, 6, 7, 8, 9)) == "2024-05-06T07:08:09+00:00"


def test_mms_requires_body_or_media():
    with pytest.raises(ParameterError):
        params_for_mms_message(None)
    with pytest.raises(ParameterError):
        params_for_mms_message(MMSMessageParams(subject="nothing to send"))


def test_mms_params():
    form = params_for_mms_message(
        MMSMessageParams(body="look", media_urls=["https://a.example/1.jpg", "https://a.example/2.gif"], reference="r")
    )
    assert form == {
        "body": "look",
        "mediaUrls[]": ["https://a.example/1.jpg", "https://a.example/2.gif"],
        "reference": "r",
    }


def test_voice_message_params():
    form = params_for_voice_message(
        VoiceMessageParams(originator="MB", language="nl-nl", voice="female", repeat=2, if_machine="hangup", machine_timeout=5000)
    )
    assert form == {
        "originator": "MB",
        "language": "nl-nl",
        "voice": "female",
        "repeat": "2",
        "ifMachine": "hangup",
        "machineTimeout": "5000",
    }


def test_verify_params():
    form = params_for_verify(
        VerifyParams(originator="Code", type="tts", template="Your code is %token", language="en-gb", timeout=60, token_length=8)
    )
    assert form == {
        "originator": "Code",
        "type": "tts",
        "template": "Your code is %token",
        "language": "en-gb",
        "timeout": "60",
        "tokenLength": "8",
    }


def test_lookup_params():
    assert params_for_lookup(LookupParams(country_code="NL", reference="r")) == {"countryCode": "NL", "reference": "r"}


def test_join_recipients():
    assert join_recipients(["31612345678", 31687654321]) == "31612345678,31687654321"
    assert join_recipients("31612345678") == "31612345678"
    with pytest.raises(ParameterError):
        join_recipients([])
    with pytest.raises(ParameterError):
        join_recipients(["  "])


def test_json_payloads():
    call = CallParams(
        source="31644556677",
        destination="31612345678",
        call_flow=CallFlowParams(title="t", steps=[StepParams("transfer", {"destination": "31600000000"})]),
    )
    assert call.to_payload()["callFlow"]["steps"][0] == {"action": "transfer", "options": {"destination": "31600000000"}}
    assert WebhookParams(url="https://x.example").to_payload() == {"title": "", "url": "https://x.example", "token": ""}
