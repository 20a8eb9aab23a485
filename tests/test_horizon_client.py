"""
Tests for HorizonHttpClient: canned Horizon responses, no network.

Uses a FakeTransport that returns pre-built HttpResponses, exercising
the parsing logic in horizon_client.py.

Test plan:
- Account: 200 parses sequence, 404 → found=False, 500 → SERVER_ERROR,
  malformed 200 → SERVER_ERROR, URL shape
- Submit: 200 accepted with hash + ledger, 400 tx_bad_seq / tx_failed
  with operation codes, 504 → TIMEOUT, malformed → SERVER_ERROR,
  form field is "tx"
- Transport: TransportError propagates to the caller
"""

from typing import Any

import pytest

from stellar_wallet.client import HorizonClient
from stellar_wallet.errors import TransportError
from stellar_wallet.horizon_client import HorizonHttpClient
from stellar_wallet.transport import HttpResponse

HORIZON = "https://horizon.example.org"
ACCOUNT = "GABC"
TX_HASH = "a" * 64

# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Returns a canned HttpResponse for every call."""

    def __init__(self, status_code: int, body: dict[str, Any]) -> None:
        self._response = HttpResponse(status_code=status_code, body=body)
        self.gets: list[str] = []
        self.posts: list[tuple[str, dict[str, str]]] = []

    def get_json(self, url: str) -> HttpResponse:
        self.gets.append(url)
        return self._response

    def post_form(self, url: str, form: dict[str, str]) -> HttpResponse:
        self.posts.append((url, form))
        return self._response


class ErrorTransport:
    """Raises on every call to simulate transport failures."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def get_json(self, url: str) -> HttpResponse:
        raise self._exc

    def post_form(self, url: str, form: dict[str, str]) -> HttpResponse:
        raise self._exc


# ---------------------------------------------------------------------------
# Canned responses
# ---------------------------------------------------------------------------

ACCOUNT_OK = {
    "id": ACCOUNT,
    "account_id": ACCOUNT,
    "sequence": "41",
    "subentry_count": 0,
    "balances": [{"balance": "10.0000000", "asset_type": "native"}],
}

NOT_FOUND = {
    "type": "https://stellar.org/horizon-errors/not_found",
    "title": "Resource Missing",
    "status": 404,
    "detail": "The resource at the url requested was not found.",
}

SERVER_ERROR = {
    "type": "https://stellar.org/horizon-errors/server_error",
    "title": "Internal Server Error",
    "status": 500,
}

SUBMIT_OK = {
    "successful": True,
    "hash": TX_HASH,
    "ledger": 1234,
    "envelope_xdr": "AAAA",
    "result_xdr": "AAAA",
}

SUBMIT_BAD_SEQ = {
    "type": "https://stellar.org/horizon-errors/transaction_failed",
    "title": "Transaction Failed",
    "status": 400,
    "detail": "The transaction failed when submitted to the stellar network.",
    "extras": {
        "envelope_xdr": "AAAA",
        "result_codes": {"transaction": "tx_bad_seq"},
        "result_xdr": "AAAA",
    },
}

SUBMIT_OP_FAILED = {
    "type": "https://stellar.org/horizon-errors/transaction_failed",
    "title": "Transaction Failed",
    "status": 400,
    "extras": {
        "hash": TX_HASH,
        "result_codes": {
            "transaction": "tx_failed",
            "operations": ["op_success", "op_low_reserve", "op_success"],
        },
    },
}

SUBMIT_TIMEOUT = {
    "type": "https://stellar.org/horizon-errors/timeout",
    "title": "Timeout",
    "status": 504,
}


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class TestProtocol:
    def test_implements_horizon_client(self) -> None:
        client = HorizonHttpClient(HORIZON, transport=FakeTransport(200, ACCOUNT_OK))
        assert isinstance(client, HorizonClient)

    def test_url_trailing_slash_stripped(self) -> None:
        client = HorizonHttpClient(HORIZON + "/", transport=FakeTransport(200, ACCOUNT_OK))
        assert client.url == HORIZON


# ---------------------------------------------------------------------------
# Account lookup
# ---------------------------------------------------------------------------


class TestAccountSequence:
    def test_found(self) -> None:
        transport = FakeTransport(200, ACCOUNT_OK)
        result = HorizonHttpClient(HORIZON, transport=transport).get_account_sequence(ACCOUNT)
        assert result.found
        assert result.sequence == 41
        assert result.error_code is None
        assert transport.gets == [f"{HORIZON}/accounts/{ACCOUNT}"]

    def test_large_sequence(self) -> None:
        body = {**ACCOUNT_OK, "sequence": "103420918407103888"}
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(200, body)).get_account_sequence(
            ACCOUNT
        )
        assert result.sequence == 103420918407103888

    def test_not_found(self) -> None:
        result = HorizonHttpClient(
            HORIZON, transport=FakeTransport(404, NOT_FOUND)
        ).get_account_sequence(ACCOUNT)
        assert not result.found
        assert result.sequence is None
        assert result.error_code is None

    def test_server_error(self) -> None:
        result = HorizonHttpClient(
            HORIZON, transport=FakeTransport(500, SERVER_ERROR)
        ).get_account_sequence(ACCOUNT)
        assert not result.found
        assert result.error_code == "SERVER_ERROR"
        assert "500" in (result.detail or "")

    def test_malformed_sequence(self) -> None:
        body = {**ACCOUNT_OK, "sequence": 41}
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(200, body)).get_account_sequence(
            ACCOUNT
        )
        assert result.error_code == "SERVER_ERROR"

    def test_missing_sequence(self) -> None:
        result = HorizonHttpClient(
            HORIZON, transport=FakeTransport(200, {"account_id": ACCOUNT})
        ).get_account_sequence(ACCOUNT)
        assert not result.found
        assert result.error_code == "SERVER_ERROR"


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------


class TestSubmit:
    def test_success(self) -> None:
        transport = FakeTransport(200, SUBMIT_OK)
        result = HorizonHttpClient(HORIZON, transport=transport).submit("AAAA")
        assert result.accepted
        assert result.tx_hash == TX_HASH
        assert result.ledger == 1234
        assert result.error_code is None

    def test_posts_tx_form_field(self) -> None:
        transport = FakeTransport(200, SUBMIT_OK)
        HorizonHttpClient(HORIZON, transport=transport).submit("AAAA")
        assert transport.posts == [(f"{HORIZON}/transactions", {"tx": "AAAA"})]

    def test_bad_seq(self) -> None:
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(400, SUBMIT_BAD_SEQ)).submit(
            "AAAA"
        )
        assert not result.accepted
        assert result.result_code == "tx_bad_seq"
        assert result.error_code == "TRANSACTION_FAILED"
        assert result.operation_codes == ()

    def test_operation_codes(self) -> None:
        result = HorizonHttpClient(
            HORIZON, transport=FakeTransport(400, SUBMIT_OP_FAILED)
        ).submit("AAAA")
        assert result.result_code == "tx_failed"
        assert result.operation_codes == ("op_success", "op_low_reserve", "op_success")
        assert result.tx_hash == TX_HASH

    def test_timeout(self) -> None:
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(504, SUBMIT_TIMEOUT)).submit(
            "AAAA"
        )
        assert not result.accepted
        assert result.error_code == "TIMEOUT"

    def test_unsuccessful_200(self) -> None:
        body = {**SUBMIT_OK, "successful": False}
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(200, body)).submit("AAAA")
        assert not result.accepted
        assert result.error_code == "TRANSACTION_FAILED"

    def test_malformed_success(self) -> None:
        result = HorizonHttpClient(
            HORIZON, transport=FakeTransport(200, {"successful": True})
        ).submit("AAAA")
        assert not result.accepted
        assert result.error_code == "SERVER_ERROR"

    def test_malformed_error(self) -> None:
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(400, {"oops": 1})).submit(
            "AAAA"
        )
        assert result.error_code == "SERVER_ERROR"

    def test_400_without_result_codes(self) -> None:
        body = {"type": "bad_request", "title": "Bad Request", "status": 400}
        result = HorizonHttpClient(HORIZON, transport=FakeTransport(400, body)).submit("AAAA")
        assert result.error_code == "SERVER_ERROR"
        assert result.result_code is None


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------


class TestTransportFailure:
    def test_lookup_propagates(self) -> None:
        client = HorizonHttpClient(
            HORIZON, transport=ErrorTransport(TransportError("down", error_code="CONNECTION_FAILED"))
        )
        with pytest.raises(TransportError):
            client.get_account_sequence(ACCOUNT)

    def test_submit_propagates(self) -> None:
        client = HorizonHttpClient(
            HORIZON, transport=ErrorTransport(TransportError("slow", error_code="TIMEOUT"))
        )
        with pytest.raises(TransportError) as excinfo:
            client.submit("AAAA")
        assert excinfo.value.error_code == "TIMEOUT"
