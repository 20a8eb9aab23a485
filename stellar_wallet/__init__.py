"""
Stellar wallet helpers: accounts, trustlines, signers, sponsored reserves.

Public API:

    Pure layer (no I/O):
        - Operation factory: ``build_create_account``, ``build_change_trust``,
          ``build_set_signer``.
        - Sponsorship: ``wrap_with_sponsorship``, ``apply_sponsorship``,
          ``Sponsored``, ``Unsponsored``, ``UNSPONSORED``.

    Impure layer (network I/O):
        - ``assemble_transaction()``: sequence lookup + unsigned Transaction.
        - ``submit_transaction()``: submit a signed envelope once.
        - ``Wallet``: fund / asset support / signers over one context.

    Protocols (for dependency injection):
        - ``HorizonClient``: network boundary (sequence lookup, submit).
        - ``HttpTransport``: HTTP seam under the Horizon client.

    Errors:
        - ``ErrorKind``, ``WalletError``: explicit result errors.
        - ``InvalidAmountError``: raised by the pure layer.
        - ``classify_result_code()``: Horizon result code → ResultCategory.
"""

from stellar_wallet.client import HorizonClient, SequenceResult, SubmitResult
from stellar_wallet.config import WalletSettings, load_settings
from stellar_wallet.errors import (
    ErrorKind,
    InvalidAmountError,
    ResultCategory,
    TransportError,
    WalletError,
    classify_result_code,
)
from stellar_wallet.horizon_client import HorizonHttpClient
from stellar_wallet.keys import AccountKeypair, create_keypair
from stellar_wallet.network import BASE_FEE, PUBLIC, TESTNET, NetworkContext
from stellar_wallet.operations import (
    DEFAULT_TRUST_LIMIT,
    MIN_STARTING_BALANCE,
    BeginSponsoringFutureReserves,
    ChangeTrust,
    CreateAccount,
    EndSponsoringFutureReserves,
    Operation,
    SetOptions,
    build_change_trust,
    build_create_account,
    build_set_signer,
)
from stellar_wallet.sponsorship import (
    UNSPONSORED,
    Sponsored,
    Sponsorship,
    Unsponsored,
    apply_sponsorship,
    wrap_with_sponsorship,
)
from stellar_wallet.transport import HttpResponse, HttpTransport, HttpxTransport
from stellar_wallet.tx import AssemblyResult, Transaction, assemble_transaction, to_envelope
from stellar_wallet.wallet import SubmissionOutcome, Wallet, submit_transaction

__all__ = [
    "AccountKeypair",
    "AssemblyResult",
    "BASE_FEE",
    "BeginSponsoringFutureReserves",
    "ChangeTrust",
    "CreateAccount",
    "DEFAULT_TRUST_LIMIT",
    "EndSponsoringFutureReserves",
    "ErrorKind",
    "HorizonClient",
    "HorizonHttpClient",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "InvalidAmountError",
    "MIN_STARTING_BALANCE",
    "NetworkContext",
    "Operation",
    "PUBLIC",
    "ResultCategory",
    "SequenceResult",
    "SetOptions",
    "Sponsored",
    "Sponsorship",
    "SubmissionOutcome",
    "SubmitResult",
    "TESTNET",
    "Transaction",
    "TransportError",
    "UNSPONSORED",
    "Unsponsored",
    "Wallet",
    "WalletError",
    "WalletSettings",
    "apply_sponsorship",
    "assemble_transaction",
    "build_change_trust",
    "build_create_account",
    "build_set_signer",
    "classify_result_code",
    "create_keypair",
    "load_settings",
    "submit_transaction",
    "to_envelope",
    "wrap_with_sponsorship",
]
