"""
Horizon client protocol: the network boundary.

Defines the interface the assembler and the wallet depend on, not a
concrete implementation. This keeps them testable and keeps
``httpx`` out of transaction-building logic.

Concrete implementations:
    - HorizonHttpClient (real)
    - FakeClient (tests)

The protocol has exactly two methods:
    - get_account_sequence(address) → SequenceResult
    - submit(signed_envelope_xdr) → SubmitResult

Both return frozen dataclasses. No exceptions for "expected" failures
(missing account, rejected transaction); those are captured in the
result objects. Transport failures raise TransportError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

# =========================================================================
# Result types
# =========================================================================


@dataclass(frozen=True)
class SequenceResult:
    """Result of looking up an account's current sequence number.

    Attributes:
        found: Whether the account exists on the ledger.
        sequence: Current sequence number. None if not found.
        error_code: "SERVER_ERROR" when Horizon answered with something
            other than an account or a 404. None otherwise.
        detail: Human-readable detail for diagnostics.
    """

    found: bool
    sequence: int | None = None
    error_code: str | None = None
    detail: str | None = None


@dataclass(frozen=True)
class SubmitResult:
    """Result of submitting a signed envelope to Horizon.

    Attributes:
        accepted: Whether the transaction was applied in a ledger.
        tx_hash: Transaction hash (64 hex chars), when Horizon reports one.
        ledger: Ledger sequence that included the transaction.
        result_code: Transaction result code on rejection
            (e.g. "tx_bad_seq", "tx_failed").
        operation_codes: Per-operation result codes on rejection.
        error_code: "TRANSACTION_FAILED", "TIMEOUT" or "SERVER_ERROR"
            when accepted is False.
        detail: Human-readable detail for diagnostics.
    """

    accepted: bool
    tx_hash: str | None = None
    ledger: int | None = None
    result_code: str | None = None
    operation_codes: tuple[str, ...] = field(default_factory=tuple)
    error_code: str | None = None
    detail: str | None = None


# =========================================================================
# Protocol
# =========================================================================


@runtime_checkable
class HorizonClient(Protocol):
    """Interface for Stellar network operations."""

    def get_account_sequence(self, address: str) -> SequenceResult:
        """Fetch the current sequence number of ``address``.

        Returns:
            SequenceResult with found=False when the account does not
            exist yet.
        """
        ...

    def submit(self, signed_envelope_xdr: str) -> SubmitResult:
        """Submit a signed transaction envelope (base64 XDR).

        Returns:
            SubmitResult. Never raises for network-side rejection.
            No retries: a stale sequence number comes back as
            result_code "tx_bad_seq" and the caller rebuilds.
        """
        ...
