"""
Stellar operation values and the operation factory.

Operations are frozen dataclasses: pure, deterministic, no secrets,
no network calls. Each carries an optional ``source`` override; None
means "use the transaction source".

Every variant can be rendered two ways:
    - ``to_dict()``: Horizon-style JSON shape, for logs and digests.
    - ``to_sdk()``: the matching ``stellar_sdk`` operation, for
      building an XDR envelope.

The factory functions enforce:
    - Amounts parse as non-negative decimals with at most 7 fractional
      digits and fit in a signed 64-bit stroop count. They are stored in
      canonical form (format_amount), so equal amounts give equal
      operations.
    - Unsponsored CreateAccount starts with at least MIN_STARTING_BALANCE.
    - Sponsored CreateAccount always starts with "0".
    - Signer weight is a non-negative int (upper bound is the network's).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Union

import stellar_sdk

from stellar_wallet.errors import InvalidAmountError

if TYPE_CHECKING:
    from stellar_wallet.sponsorship import Sponsorship

# Minimum reserve for a fresh, unsponsored account, in XLM.
MIN_STARTING_BALANCE = Decimal("1")

# Largest representable amount: (2**63 - 1) stroops.
MAX_AMOUNT = Decimal("922337203685.4775807")
DEFAULT_TRUST_LIMIT = str(MAX_AMOUNT)

# 1 XLM = 10**7 stroops.
_AMOUNT_PRECISION = 7


def parse_amount(value: str, *, field_name: str = "amount") -> Decimal:
    """Parse a Stellar amount string.

    Raises:
        InvalidAmountError: If the value is not a finite, non-negative
            decimal with at most 7 fractional digits, or exceeds MAX_AMOUNT.
    """
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidAmountError(
            f"{field_name} is not a decimal: {value!r}", amount=value
        ) from None

    if not amount.is_finite():
        raise InvalidAmountError(f"{field_name} must be finite: {value!r}", amount=value)
    if amount < 0:
        raise InvalidAmountError(f"{field_name} must be non-negative: {value!r}", amount=value)
    exponent = amount.as_tuple().exponent
    if isinstance(exponent, int) and -exponent > _AMOUNT_PRECISION:
        raise InvalidAmountError(
            f"{field_name} has more than {_AMOUNT_PRECISION} decimal places: {value!r}",
            amount=value,
        )
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"{field_name} exceeds {MAX_AMOUNT}: {value!r}", amount=value)
    return amount


def format_amount(amount: Decimal) -> str:
    """Canonical plain-decimal string: no exponent, no trailing zeros.

    >>> format_amount(Decimal("1E+3"))
    '1000'
    >>> format_amount(Decimal("5.0000000"))
    '5'
    """
    if amount.is_zero():
        return "0"
    return format(amount.normalize(), "f")


# =========================================================================
# Operation variants
# =========================================================================


@dataclass(frozen=True)
class CreateAccount:
    destination: str
    starting_balance: str
    source: str | None = None

    def with_source(self, source: str) -> CreateAccount:
        return replace(self, source=source)

    def to_dict(self) -> dict[str, Any]:
        return _with_source(
            {
                "type": "create_account",
                "destination": self.destination,
                "starting_balance": self.starting_balance,
            },
            self.source,
        )

    def to_sdk(self) -> stellar_sdk.CreateAccount:
        return stellar_sdk.CreateAccount(
            destination=self.destination,
            starting_balance=self.starting_balance,
            source=self.source,
        )


@dataclass(frozen=True)
class ChangeTrust:
    """Create, update (limit > 0) or remove (limit == "0") a trustline."""

    asset_code: str
    asset_issuer: str
    limit: str
    source: str | None = None

    def with_source(self, source: str) -> ChangeTrust:
        return replace(self, source=source)

    def to_dict(self) -> dict[str, Any]:
        return _with_source(
            {
                "type": "change_trust",
                "asset_code": self.asset_code,
                "asset_issuer": self.asset_issuer,
                "limit": self.limit,
            },
            self.source,
        )

    def to_sdk(self) -> stellar_sdk.ChangeTrust:
        return stellar_sdk.ChangeTrust(
            asset=stellar_sdk.Asset(self.asset_code, self.asset_issuer),
            limit=self.limit,
            source=self.source,
        )


@dataclass(frozen=True)
class SetOptions:
    """Set-options restricted to a single ed25519 signer; weight 0 removes it."""

    signer_key: str
    signer_weight: int
    source: str | None = None

    def with_source(self, source: str) -> SetOptions:
        return replace(self, source=source)

    def to_dict(self) -> dict[str, Any]:
        return _with_source(
            {
                "type": "set_options",
                "signer_key": self.signer_key,
                "signer_weight": self.signer_weight,
            },
            self.source,
        )

    def to_sdk(self) -> stellar_sdk.SetOptions:
        signer = stellar_sdk.Signer.ed25519_public_key(self.signer_key, self.signer_weight)
        return stellar_sdk.SetOptions(signer=signer, source=self.source)


@dataclass(frozen=True)
class BeginSponsoringFutureReserves:
    sponsored_id: str
    source: str | None = None

    def with_source(self, source: str) -> BeginSponsoringFutureReserves:
        return replace(self, source=source)

    def to_dict(self) -> dict[str, Any]:
        return _with_source(
            {"type": "begin_sponsoring_future_reserves", "sponsored_id": self.sponsored_id},
            self.source,
        )

    def to_sdk(self) -> stellar_sdk.BeginSponsoringFutureReserves:
        return stellar_sdk.BeginSponsoringFutureReserves(
            sponsored_id=self.sponsored_id,
            source=self.source,
        )


@dataclass(frozen=True)
class EndSponsoringFutureReserves:
    source: str | None = None

    def with_source(self, source: str) -> EndSponsoringFutureReserves:
        return replace(self, source=source)

    def to_dict(self) -> dict[str, Any]:
        return _with_source({"type": "end_sponsoring_future_reserves"}, self.source)

    def to_sdk(self) -> stellar_sdk.EndSponsoringFutureReserves:
        return stellar_sdk.EndSponsoringFutureReserves(source=self.source)


Operation = Union[
    CreateAccount,
    ChangeTrust,
    SetOptions,
    BeginSponsoringFutureReserves,
    EndSponsoringFutureReserves,
]


def _with_source(body: dict[str, Any], source: str | None) -> dict[str, Any]:
    if source is not None:
        body["source_account"] = source
    return body


# =========================================================================
# Factory
# =========================================================================


def build_create_account(
    source: str,
    destination: str,
    starting_balance: str = "1",
    *,
    sponsorship: Sponsorship | None = None,
) -> CreateAccount:
    """Build a CreateAccount operation funded by ``source``.

    A sponsored account starts with a zero balance: the sponsor's
    bracket operations cover the reserve instead. The caller-supplied
    balance must still parse.

    Args:
        source: Funding account (operation source).
        destination: Address of the account to create.
        starting_balance: XLM to transfer. Default "1".
        sponsorship: Sponsored(...) or UNSPONSORED (the default).

    Returns:
        CreateAccount with ``source`` set.

    Raises:
        InvalidAmountError: If the balance does not parse, or if the
            account is unsponsored and the balance is below 1.
    """
    balance = parse_amount(starting_balance, field_name="starting_balance")

    if sponsorship is not None and sponsorship.is_sponsored:
        return CreateAccount(destination=destination, starting_balance="0", source=source)

    if balance < MIN_STARTING_BALANCE:
        raise InvalidAmountError(
            f"starting balance must be at least {MIN_STARTING_BALANCE} XLM "
            f"for non-sponsored accounts, got {starting_balance!r}",
            amount=starting_balance,
        )
    return CreateAccount(
        destination=destination, starting_balance=format_amount(balance), source=source
    )


def build_change_trust(
    source: str,
    asset_code: str,
    asset_issuer: str,
    limit: str = DEFAULT_TRUST_LIMIT,
) -> ChangeTrust:
    """Build a ChangeTrust operation. ``limit="0"`` removes the trustline.

    Removing a trustline that does not exist is left to the network.

    Raises:
        InvalidAmountError: If ``limit`` does not parse as an amount.
        ValueError: If asset code or issuer is empty.
    """
    if not asset_code:
        raise ValueError("asset_code must be non-empty")
    if not asset_issuer:
        raise ValueError("asset_issuer must be non-empty")
    amount = parse_amount(limit, field_name="limit")
    return ChangeTrust(
        asset_code=asset_code,
        asset_issuer=asset_issuer,
        limit=format_amount(amount),
        source=source,
    )


def build_set_signer(source: str, signer_address: str, weight: int) -> SetOptions:
    """Build a SetOptions operation adding (or, with weight 0, removing) a signer.

    Raises:
        ValueError: If weight is not a non-negative int.
    """
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise ValueError(f"signer weight must be an int, got {type(weight).__name__}")
    if weight < 0:
        raise ValueError(f"signer weight must be non-negative, got {weight}")
    if not signer_address:
        raise ValueError("signer_address must be non-empty")
    return SetOptions(signer_key=signer_address, signer_weight=weight, source=source)
