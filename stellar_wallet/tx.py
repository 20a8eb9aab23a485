"""
Transaction assembly.

Combines a source address, an ordered operation sequence and a network
context into an unsigned Transaction. The only network call is the
read-only sequence lookup; it is repeated on every assembly (no caching),
so concurrent builders for one source account race on sequence numbers.

The assembler enforces:
    - Operations keep the exact order supplied: no reordering, no
      deduplication, no merging.
    - sequence = current on-ledger sequence + 1
    - fee = BASE_FEE * number of operations
    - The context's network passphrase is embedded.

Signing happens outside this package: ``to_envelope()`` produces the
``stellar_sdk`` envelope to sign, and its ``to_xdr()`` is what
``HorizonClient.submit`` takes.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from stellar_sdk import Account, TransactionBuilder, TransactionEnvelope

from stellar_wallet.client import HorizonClient
from stellar_wallet.errors import ErrorKind, TransportError, WalletError
from stellar_wallet.logging_config import get_logger
from stellar_wallet.network import BASE_FEE, NetworkContext
from stellar_wallet.operations import Operation

logger = get_logger(__name__)

# Default validity window of a built transaction, seconds.
DEFAULT_TX_TIMEOUT = 180


@dataclass(frozen=True)
class Transaction:
    """An unsigned Stellar transaction.

    Attributes:
        source: Source account (pays the fee, consumes the sequence).
        sequence: Sequence number this transaction will consume.
        network_passphrase: Identifies the network it is valid on.
        operations: Ordered operations.
        fee: Total fee in stroops.
        timeout: Validity window in seconds, applied when the envelope
            is built.
    """

    source: str
    sequence: int
    network_passphrase: str
    operations: tuple[Operation, ...]
    fee: int
    timeout: int = DEFAULT_TX_TIMEOUT

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_account": self.source,
            "sequence": str(self.sequence),
            "network_passphrase": self.network_passphrase,
            "fee": self.fee,
            "operations": [op.to_dict() for op in self.operations],
        }

    def digest(self) -> str:
        """sha256 over canonical JSON of to_dict(); equal shapes, equal digests."""
        canonical = json.dumps(
            self.to_dict(),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return f"sha256:{hashlib.sha256(canonical.encode('utf-8')).hexdigest()}"


@dataclass(frozen=True)
class AssemblyResult:
    """Result of assemble_transaction(): a transaction or an error, never both."""

    transaction: Transaction | None = None
    error: WalletError | None = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None


def check_assembly_inputs(source: str, operations: Sequence[Operation]) -> tuple[Operation, ...]:
    """Local checks run before any sequence lookup.

    Raises:
        ValueError: If ``source`` is blank or ``operations`` is empty.
    """
    if not source:
        raise ValueError("source must be non-empty")
    ops = tuple(operations)
    if not ops:
        raise ValueError("transaction needs at least one operation")
    return ops


def assemble_transaction(
    source: str,
    operations: Sequence[Operation],
    client: HorizonClient,
    network: NetworkContext,
    *,
    timeout: int = DEFAULT_TX_TIMEOUT,
) -> AssemblyResult:
    """Build an unsigned Transaction for ``source``.

    Args:
        source: Source account address.
        operations: Non-empty, ordered operations.
        client: Horizon client used for the sequence lookup.
        network: Network context whose passphrase is embedded.
        timeout: Validity window in seconds.

    Returns:
        AssemblyResult with the transaction, or with an error of kind
        ACCOUNT_NOT_FOUND, BACKEND_UNAVAILABLE or TIMEOUT.

    Raises:
        ValueError: If ``operations`` is empty or ``source`` is blank.
            Checked before the network call.
    """
    ops = check_assembly_inputs(source, operations)

    try:
        seq = client.get_account_sequence(source)
    except TransportError as e:
        return AssemblyResult(error=WalletError.from_transport(e))

    if not seq.found or seq.sequence is None:
        if seq.error_code is not None:
            return AssemblyResult(
                error=WalletError(
                    kind=ErrorKind.BACKEND_UNAVAILABLE,
                    message=seq.detail or "sequence lookup failed",
                )
            )
        return AssemblyResult(
            error=WalletError(
                kind=ErrorKind.ACCOUNT_NOT_FOUND,
                message=f"source account {source} does not exist",
            )
        )

    tx = Transaction(
        source=source,
        sequence=seq.sequence + 1,
        network_passphrase=network.network_passphrase,
        operations=ops,
        fee=BASE_FEE * len(ops),
        timeout=timeout,
    )
    logger.info(
        "transaction.assembled",
        source=source,
        sequence=tx.sequence,
        operation_count=len(ops),
        digest=tx.digest(),
    )
    return AssemblyResult(transaction=tx)


def to_envelope(transaction: Transaction) -> TransactionEnvelope:
    """Build the unsigned ``stellar_sdk`` envelope for ``transaction``.

    The builder increments the account sequence, so it is seeded with
    ``sequence - 1``.
    """
    account = Account(transaction.source, transaction.sequence - 1)
    builder = TransactionBuilder(
        source_account=account,
        network_passphrase=transaction.network_passphrase,
        base_fee=transaction.fee // len(transaction.operations),
    )
    for op in transaction.operations:
        builder.append_operation(op.to_sdk())
    builder.set_timeout(transaction.timeout)
    return builder.build()
