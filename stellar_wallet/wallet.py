"""
Wallet facade: account, trustline and signer helpers.

Composes the pure layer (operations.py, sponsorship.py) with the
impure network boundary (client.py) to produce unsigned transactions
and submission outcomes.

Each helper:
    1. builds one operation (local validation, no I/O),
    2. brackets it when a Sponsored(...) sponsorship is given,
    3. assembles a transaction with a fresh sequence lookup.

Validation errors come back as pre-flight WalletErrors and no network
call is made. Signing is the caller's job: sign ``to_envelope(tx)``
and hand the signed envelope (or its XDR) to ``submit_transaction``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from stellar_sdk import TransactionEnvelope

from stellar_wallet.client import HorizonClient
from stellar_wallet.config import WalletSettings
from stellar_wallet.errors import ErrorKind, TransportError, WalletError
from stellar_wallet.horizon_client import HorizonHttpClient
from stellar_wallet.keys import AccountKeypair, create_keypair
from stellar_wallet.logging_config import get_logger
from stellar_wallet.network import TESTNET, NetworkContext
from stellar_wallet.operations import (
    DEFAULT_TRUST_LIMIT,
    Operation,
    build_change_trust,
    build_create_account,
    build_set_signer,
)
from stellar_wallet.sponsorship import UNSPONSORED, Sponsorship, apply_sponsorship
from stellar_wallet.transport import HttpxTransport
from stellar_wallet.tx import (
    DEFAULT_TX_TIMEOUT,
    AssemblyResult,
    assemble_transaction,
    check_assembly_inputs,
)

logger = get_logger(__name__)


# =========================================================================
# Submission
# =========================================================================


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of submit_transaction().

    Attributes:
        success: True if the network applied the transaction.
        tx_hash: Transaction hash when known.
        ledger: Ledger that included the transaction.
        error: SUBMISSION_REJECTED (with result_code), TIMEOUT or
            BACKEND_UNAVAILABLE when success is False.
    """

    success: bool
    tx_hash: str | None = None
    ledger: int | None = None
    error: WalletError | None = None


def submit_transaction(
    client: HorizonClient,
    signed: TransactionEnvelope | str,
) -> SubmissionOutcome:
    """Submit a signed envelope (object or base64 XDR) once. No retries."""
    xdr = signed.to_xdr() if isinstance(signed, TransactionEnvelope) else signed

    try:
        result = client.submit(xdr)
    except TransportError as e:
        return SubmissionOutcome(success=False, error=WalletError.from_transport(e))

    if result.accepted:
        return SubmissionOutcome(success=True, tx_hash=result.tx_hash, ledger=result.ledger)

    if result.error_code == "TIMEOUT":
        error = WalletError(
            kind=ErrorKind.TIMEOUT,
            message=result.detail or "submission timed out",
        )
    elif result.error_code == "TRANSACTION_FAILED":
        message = "Transaction failed"
        if result.result_code:
            message += f": {result.result_code}"
        error = WalletError(
            kind=ErrorKind.SUBMISSION_REJECTED,
            message=message,
            result_code=result.result_code,
            operation_codes=result.operation_codes,
        )
    else:
        error = WalletError(
            kind=ErrorKind.BACKEND_UNAVAILABLE,
            message=result.detail or "unexpected Horizon response",
        )
    return SubmissionOutcome(success=False, tx_hash=result.tx_hash, error=error)


# =========================================================================
# Wallet
# =========================================================================


class Wallet:
    """Convenience helpers bound to one network context and client.

    Args:
        network: Network context. Defaults to TESTNET.
        client: Horizon client. Defaults to an HorizonHttpClient for
            ``network.horizon_url``.
        tx_timeout: Validity window of built transactions, seconds.
    """

    def __init__(
        self,
        network: NetworkContext = TESTNET,
        client: HorizonClient | None = None,
        *,
        tx_timeout: int = DEFAULT_TX_TIMEOUT,
    ) -> None:
        self._network = network
        self._client = client or HorizonHttpClient(network.horizon_url)
        self._tx_timeout = tx_timeout

    @classmethod
    def from_settings(cls, settings: WalletSettings) -> Wallet:
        network = NetworkContext.from_settings(settings)
        client = HorizonHttpClient(
            network.horizon_url,
            transport=HttpxTransport(timeout_s=settings.timeout_s),
        )
        return cls(network, client, tx_timeout=settings.tx_timeout)

    @property
    def network(self) -> NetworkContext:
        return self._network

    @property
    def client(self) -> HorizonClient:
        return self._client

    def create(self) -> AccountKeypair:
        """Generate keys for a new account. The account is not on-ledger until funded."""
        return create_keypair()

    def fund(
        self,
        source: str,
        destination: str,
        starting_balance: str = "1",
        sponsorship: Sponsorship = UNSPONSORED,
    ) -> AssemblyResult:
        """Create (activate) ``destination``, funded by ``source``.

        With a sponsor, the destination starts at 0 XLM and is the
        sponsored account, so it must co-sign.

        Note:
            The sponsored bracket makes ``destination`` the source of the
            inner CreateAccount as well as of the End operation. The
            account does not exist until this transaction applies, so a
            live Horizon may reject the envelope (e.g. ``op_no_account``).
            Fund unsponsored, or build the operations yourself with the
            funder as the inner source, when that matters.
        """
        return self._build(
            source,
            destination,
            sponsorship,
            lambda: build_create_account(
                source, destination, starting_balance, sponsorship=sponsorship
            ),
        )

    def add_asset_support(
        self,
        source: str,
        asset_code: str,
        asset_issuer: str,
        limit: str = DEFAULT_TRUST_LIMIT,
        sponsorship: Sponsorship = UNSPONSORED,
    ) -> AssemblyResult:
        """Add or update a trustline on ``source``."""
        return self._build(
            source,
            source,
            sponsorship,
            lambda: build_change_trust(source, asset_code, asset_issuer, limit),
        )

    def remove_asset_support(
        self, source: str, asset_code: str, asset_issuer: str
    ) -> AssemblyResult:
        return self.add_asset_support(source, asset_code, asset_issuer, limit="0")

    def add_account_signer(
        self,
        source: str,
        signer_address: str,
        weight: int,
        sponsorship: Sponsorship = UNSPONSORED,
    ) -> AssemblyResult:
        """Add ``signer_address`` to ``source`` with ``weight``."""
        return self._build(
            source,
            source,
            sponsorship,
            lambda: build_set_signer(source, signer_address, weight),
        )

    def remove_account_signer(self, source: str, signer_address: str) -> AssemblyResult:
        return self.add_account_signer(source, signer_address, weight=0)

    def submit_transaction(self, signed: TransactionEnvelope | str) -> SubmissionOutcome:
        return submit_transaction(self._client, signed)

    def _build(
        self,
        source: str,
        sponsored: str,
        sponsorship: Sponsorship,
        make_operation: Callable[[], Operation],
    ) -> AssemblyResult:
        try:
            operation = make_operation()
            operations = check_assembly_inputs(
                source, apply_sponsorship(sponsorship, sponsored, operation)
            )
        except ValueError as e:
            logger.info("transaction.invalid", source=source, error=str(e))
            return AssemblyResult(error=WalletError.from_validation(e))

        return assemble_transaction(
            source,
            operations,
            self._client,
            self._network,
            timeout=self._tx_timeout,
        )
