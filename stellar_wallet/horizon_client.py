"""
Horizon HTTP client: real network implementation of HorizonClient.

Translates Horizon JSON responses into SequenceResult/SubmitResult.
Uses an injectable transport (HttpTransport) so the HTTP layer can be
swapped for test fakes without changing parsing logic.

No retry loops. No secrets. No Stellar logic beyond response parsing.

Response parsing targets Horizon conventions:
    - GET /accounts/{id}: 200 account resource, 404 problem document
    - POST /transactions (form field ``tx``): 200 transaction resource,
      400 ``transaction_failed`` problem with ``extras.result_codes``,
      504 ``timeout`` problem (the transaction may still land)
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from stellar_wallet.client import SequenceResult, SubmitResult
from stellar_wallet.errors import classify_result_code
from stellar_wallet.logging_config import get_logger
from stellar_wallet.schema import (
    ACCOUNT_SCHEMA,
    PROBLEM_SCHEMA,
    TRANSACTION_SUCCESS_SCHEMA,
    is_valid,
)
from stellar_wallet.transport import HttpResponse, HttpTransport, HttpxTransport

logger = get_logger(__name__)


class HorizonHttpClient:
    """Horizon client implementing the HorizonClient protocol.

    Args:
        url: Horizon base URL (e.g. "https://horizon-testnet.stellar.org").
        transport: Injectable transport. Defaults to HttpxTransport.
    """

    def __init__(self, url: str, transport: HttpTransport | None = None) -> None:
        self._url = url.rstrip("/")
        self._transport = transport or HttpxTransport()

    @property
    def url(self) -> str:
        """The Horizon base URL."""
        return self._url

    # -----------------------------------------------------------------
    # HorizonClient protocol methods
    # -----------------------------------------------------------------

    def get_account_sequence(self, address: str) -> SequenceResult:
        """Fetch ``/accounts/{address}`` and read its sequence number.

        Transport exceptions propagate to the caller.
        """
        response = self._transport.get_json(f"{self._url}/accounts/{quote(address, safe='')}")
        result = _parse_account_response(response)
        if result.found:
            logger.debug("account_sequence.fetched", address=address, sequence=result.sequence)
        elif result.error_code is None:
            logger.info("account_sequence.not_found", address=address)
        return result

    def submit(self, signed_envelope_xdr: str) -> SubmitResult:
        """POST the envelope to ``/transactions``.

        Transport exceptions propagate to the caller.
        """
        response = self._transport.post_form(
            f"{self._url}/transactions", {"tx": signed_envelope_xdr}
        )
        result = _parse_submit_response(response)
        if result.accepted:
            logger.info("transaction.submitted", tx_hash=result.tx_hash, ledger=result.ledger)
        else:
            logger.warning(
                "transaction.rejected",
                error_code=result.error_code,
                result_code=result.result_code,
                category=classify_result_code(result.result_code),
                operation_codes=list(result.operation_codes),
            )
        return result


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _problem_detail(body: dict[str, Any]) -> str:
    return str(body.get("detail") or body.get("title") or "unknown server error")


def _parse_account_response(response: HttpResponse) -> SequenceResult:
    """Parse a Horizon account response into SequenceResult.

    Handles:
        - 200 with a well-formed account resource
        - 404 (account does not exist yet)
        - Anything else, or a malformed 200 (SERVER_ERROR)
    """
    body = response.body

    if response.status_code == 404:
        return SequenceResult(found=False, detail=_problem_detail(body))

    if response.status_code != 200:
        return SequenceResult(
            found=False,
            error_code="SERVER_ERROR",
            detail=f"HTTP {response.status_code}: {_problem_detail(body)}",
        )

    if not is_valid(body, ACCOUNT_SCHEMA):
        return SequenceResult(
            found=False,
            error_code="SERVER_ERROR",
            detail="malformed account response",
        )

    return SequenceResult(found=True, sequence=int(body["sequence"]))


def _parse_submit_response(response: HttpResponse) -> SubmitResult:
    """Parse a Horizon transaction submission response into SubmitResult.

    Handles:
        - 200 transaction resource (accepted unless ``successful`` is False)
        - 400 transaction_failed with result codes
        - 504 timeout (outcome unknown, caller may query later)
        - Server-level errors and malformed bodies (SERVER_ERROR)
    """
    body = response.body

    if response.status_code == 200:
        if not is_valid(body, TRANSACTION_SUCCESS_SCHEMA):
            return SubmitResult(
                accepted=False,
                error_code="SERVER_ERROR",
                detail="malformed transaction response",
            )
        successful = bool(body.get("successful", True))
        return SubmitResult(
            accepted=successful,
            tx_hash=body["hash"],
            ledger=body.get("ledger"),
            error_code=None if successful else "TRANSACTION_FAILED",
        )

    if not is_valid(body, PROBLEM_SCHEMA):
        return SubmitResult(
            accepted=False,
            error_code="SERVER_ERROR",
            detail=f"HTTP {response.status_code}: malformed error response",
        )

    if response.status_code == 504:
        return SubmitResult(accepted=False, error_code="TIMEOUT", detail=_problem_detail(body))

    extras = body.get("extras") or {}
    result_codes = extras.get("result_codes") or {}
    result_code = result_codes.get("transaction")
    if response.status_code == 400 and result_code:
        return SubmitResult(
            accepted=False,
            tx_hash=extras.get("hash"),
            result_code=result_code,
            operation_codes=tuple(result_codes.get("operations") or ()),
            error_code="TRANSACTION_FAILED",
            detail=_problem_detail(body),
        )

    return SubmitResult(
        accepted=False,
        error_code="SERVER_ERROR",
        detail=f"HTTP {response.status_code}: {_problem_detail(body)}",
    )
