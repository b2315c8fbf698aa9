import asyncio
import base64

import httpx
import pytest

from services.notifications.sms import HubtelSmsClient

SMS_URL = "https://sms.example.test/v1/messages/send"


def _build(transport, client_id="client-id", client_secret="client-secret", sender_id="UncleBens"):
    return HubtelSmsClient(
        client_id,
        client_secret,
        sender_id,
        url=SMS_URL,
        http_client=transport.client(),
    )


def test_send_posts_expected_payload(make_transport):
    transport = make_transport(body={"messageId": "abc-123", "status": 0})
    client = _build(transport)

    result = asyncio.run(client.send("0244000000", "  Your table is ready  "))

    assert result.success is True
    assert result.error is None
    assert result.message_id == "abc-123"
    assert len(transport.requests) == 1
    request = transport.requests[0]
    assert request.method == "POST"
    assert str(request.url) == SMS_URL
    expected_auth = base64.b64encode(b"client-id:client-secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected_auth}"
    assert transport.sent_json() == {
        "From": "UncleBens",
        "To": "+233244000000",
        "Content": "Your table is ready",
        "Type": 0,
        "RegisteredDelivery": 1,
    }


def test_success_does_not_depend_on_body(make_transport):
    transport = make_transport(content=b"accepted")
    result = asyncio.run(_build(transport).send("+233244000000", "hi"))
    assert result.success is True
    assert result.message_id is None


@pytest.mark.parametrize(
    "overrides",
    [{"client_id": None}, {"client_secret": ""}, {"sender_id": None}],
)
def test_missing_credentials_short_circuit(make_transport, overrides):
    transport = make_transport()
    client = _build(transport, **overrides)

    result = asyncio.run(client.send("0244000000", "hello"))

    assert result.success is False
    assert "credentials not configured" in result.error
    assert transport.requests == []


@pytest.mark.parametrize("phone", [None, "", "   ", 244000000])
def test_invalid_phone_returns_failure_instead_of_raising(make_transport, phone):
    transport = make_transport()
    result = asyncio.run(_build(transport).send(phone, "hello"))
    assert result.success is False
    assert result.error.startswith("Invalid phone number")
    assert transport.requests == []


@pytest.mark.parametrize("message", ["", "   ", None])
def test_empty_message_is_rejected(make_transport, message):
    transport = make_transport()
    result = asyncio.run(_build(transport).send("0244000000", message))
    assert result.success is False
    assert result.error == "Message cannot be empty"
    assert transport.requests == []


def test_error_message_taken_from_response_body(make_transport):
    transport = make_transport(status_code=400, body={"message": "Invalid sender id"})
    result = asyncio.run(_build(transport).send("0244000000", "hello"))
    assert result.success is False
    assert result.error == "Invalid sender id"


def test_error_falls_back_to_status_line(make_transport):
    transport = make_transport(status_code=503, content=b"<html>down</html>")
    result = asyncio.run(_build(transport).send("0244000000", "hello"))
    assert result.success is False
    assert result.error == "HTTP 503: Service Unavailable"


def test_transport_exception_becomes_failure(make_transport):
    transport = make_transport(error=httpx.ConnectError("connection refused"))
    result = asyncio.run(_build(transport).send("0244000000", "hello"))
    assert result.success is False
    assert result.error == "connection refused"


def test_http_client_must_be_injected():
    with pytest.raises(TypeError):
        HubtelSmsClient("client-id", "client-secret", "UncleBens")
