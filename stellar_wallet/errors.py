"""
Error taxonomy and Horizon result-code mapping.

Two layers, two styles:
    - The pure layer (operations, sponsorship) raises ``ValueError``
      subclasses for malformed input. These are detected locally,
      before any network round-trip.
    - The impure layer (assembly, submission) never raises for expected
      failures. It returns result objects carrying a ``WalletError``.

Horizon transaction result codes (``extras.result_codes.transaction``):
    - tx_success / tx_fee_bump_inner_success: applied
    - tx_failed: one of the operations failed (see operation codes)
    - tx_bad_seq: stale sequence number, rebuild and resubmit
    - tx_bad_auth / tx_bad_auth_extra: missing or extra signatures
    - tx_insufficient_balance / tx_insufficient_fee: funding problems
    - tx_too_early / tx_too_late: time bounds

Reference:
    https://developers.stellar.org/docs/data/apis/horizon/api-reference/errors/result-codes/transactions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """What went wrong, coarse enough to branch on."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    SUBMISSION_REJECTED = "SUBMISSION_REJECTED"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"


# Kinds detected before any network call.
_PRE_FLIGHT_KINDS = frozenset({ErrorKind.INVALID_AMOUNT, ErrorKind.INVALID_ARGUMENT})


class ResultCategory(StrEnum):
    """Coarse grouping of Horizon transaction result codes."""

    BAD_SEQUENCE = "BAD_SEQUENCE"
    BAD_AUTH = "BAD_AUTH"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INSUFFICIENT_FEE = "INSUFFICIENT_FEE"
    OPERATION_FAILED = "OPERATION_FAILED"
    EXPIRED = "EXPIRED"
    MALFORMED = "MALFORMED"
    UNKNOWN = "UNKNOWN"


# =========================================================================
# Exceptions (pure layer + transport)
# =========================================================================


class InvalidAmountError(ValueError):
    """An amount could not be parsed, or is below the allowed floor."""

    def __init__(self, message: str, *, amount: str | None = None) -> None:
        super().__init__(message)
        self.amount = amount


class TransportError(Exception):
    """The HTTP exchange with Horizon failed before a usable response.

    Attributes:
        error_code: One of TIMEOUT, CONNECTION_FAILED, HTTP_ERROR,
            INVALID_JSON.
        details: Diagnostic context (url, status code). No secrets.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


# =========================================================================
# Result error value (impure layer)
# =========================================================================


@dataclass(frozen=True)
class WalletError:
    """Explicit error carried by assembly and submission results.

    Attributes:
        kind: Machine-readable category.
        message: Human-readable description.
        result_code: Horizon transaction result code (e.g. "tx_bad_seq")
            when the network rejected a submission.
        operation_codes: Per-operation result codes, in operation order.
    """

    kind: ErrorKind
    message: str
    result_code: str | None = None
    operation_codes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def pre_flight(self) -> bool:
        """True if the error was detected locally, before any network call."""
        return self.kind in _PRE_FLIGHT_KINDS

    @classmethod
    def from_validation(cls, exc: ValueError) -> WalletError:
        kind = (
            ErrorKind.INVALID_AMOUNT
            if isinstance(exc, InvalidAmountError)
            else ErrorKind.INVALID_ARGUMENT
        )
        return cls(kind=kind, message=str(exc))

    @classmethod
    def from_transport(cls, exc: TransportError) -> WalletError:
        kind = ErrorKind.TIMEOUT if exc.error_code == "TIMEOUT" else ErrorKind.BACKEND_UNAVAILABLE
        return cls(kind=kind, message=str(exc))


# =========================================================================
# Result code -> ResultCategory
# =========================================================================

_RESULT_CODE_MAP: dict[str, ResultCategory] = {
    "tx_bad_seq": ResultCategory.BAD_SEQUENCE,
    "tx_bad_auth": ResultCategory.BAD_AUTH,
    "tx_bad_auth_extra": ResultCategory.BAD_AUTH,
    "tx_insufficient_balance": ResultCategory.INSUFFICIENT_BALANCE,
    "tx_insufficient_fee": ResultCategory.INSUFFICIENT_FEE,
    "tx_failed": ResultCategory.OPERATION_FAILED,
    "tx_too_early": ResultCategory.EXPIRED,
    "tx_too_late": ResultCategory.EXPIRED,
    "tx_missing_operation": ResultCategory.MALFORMED,
    "tx_malformed": ResultCategory.MALFORMED,
    "tx_no_source_account": ResultCategory.MALFORMED,
    "tx_bad_sponsorship": ResultCategory.OPERATION_FAILED,
}


def classify_result_code(result_code: str | None) -> ResultCategory:
    """Map a Horizon transaction result code to a ResultCategory.

    Args:
        result_code: Horizon ``extras.result_codes.transaction`` value.
            None means Horizon sent no code.

    Returns:
        ResultCategory. UNKNOWN for unrecognized codes, for None, and
        for success codes (callers check success first).
    """
    if result_code is None:
        return ResultCategory.UNKNOWN
    return _RESULT_CODE_MAP.get(result_code, ResultCategory.UNKNOWN)
