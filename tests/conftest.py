import json

import httpx
import pytest

from schemas import VerificationResult


class StubVerifier:
    def __init__(self, result=None, error=None):
        self.result = result or VerificationResult(verified=True, paid_amount_minor_units=5000)
        self.error = error
        self.calls = []

    async def verify(self, reference):
        self.calls.append(reference)
        if self.error is not None:
            raise self.error
        return self.result


class StubOrderStore:
    def __init__(self, error=None):
        self.error = error
        self.inserted = []

    def insert_order(self, record):
        self.inserted.append(record)
        if self.error is not None:
            raise self.error
        return {"id": 1, **record}


class RecordingTransport:
    """httpx transport that records requests and replies with a fixed response."""

    def __init__(self, status_code=200, body=None, content=None, error=None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body if self.body is not None else {})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def sent_json(self, index=0):
        return json.loads(self.requests[index].content)


@pytest.fixture
def stub_verifier():
    return StubVerifier()


@pytest.fixture
def stub_store():
    return StubOrderStore()


def _valid_payload(total=50.00, reference="ref_123"):
    return {
        "reference": reference,
        "order": {
            "customer_name": "Ama",
            "items": [{"name": "Pepperoni", "qty": 1}],
            "total": total,
        },
    }


@pytest.fixture
def make_payload():
    return _valid_payload


@pytest.fixture
def make_transport():
    return RecordingTransport
