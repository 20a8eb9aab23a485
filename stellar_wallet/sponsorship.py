"""
Sponsored-reserve bracketing.

A sponsor pays the reserve of another (sponsored) account by wrapping
the operations that create reserve obligations:

    BeginSponsoringFutureReserves   source = sponsor, sponsored_id = sponsored
    <inner operation(s)>            source = sponsored
    EndSponsoringFutureReserves     source = sponsored

Getting the source attribution wrong is not caught locally: Horizon
rejects the transaction at submission time. The bracket therefore has
exactly one shape and is built in one place.

``Sponsored`` / ``Unsponsored`` replace the "blank sponsor string means
no sponsor" convention. The wrapper itself does no blank checks: whether
to sponsor is the caller's decision.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from stellar_wallet.operations import (
    BeginSponsoringFutureReserves,
    EndSponsoringFutureReserves,
    Operation,
)


@dataclass(frozen=True)
class Sponsored:
    """Reserves are paid by ``sponsor``."""

    sponsor: str

    def __post_init__(self) -> None:
        if not self.sponsor or not self.sponsor.strip():
            raise ValueError("sponsor must be non-empty")

    @property
    def is_sponsored(self) -> bool:
        return True


@dataclass(frozen=True)
class Unsponsored:
    """Reserves are paid by the account itself."""

    @property
    def is_sponsored(self) -> bool:
        return False


Sponsorship = Union[Sponsored, Unsponsored]

UNSPONSORED = Unsponsored()


def wrap_with_sponsorship(
    sponsor: str,
    sponsored: str,
    inner: Operation | Sequence[Operation],
) -> tuple[Operation, ...]:
    """Bracket ``inner`` with begin/end sponsoring operations.

    Args:
        sponsor: Account paying the reserve (source of Begin).
        sponsored: Account whose reserve is waived (source of the inner
            operations and of End, so it must co-sign).
        inner: One operation, or a non-empty sequence of operations,
            kept in the given order.

    Returns:
        ``(Begin, *inner, End)``, length is ``len(inner) + 2``.

    Raises:
        ValueError: If ``inner`` is an empty sequence.
    """
    inner_ops: tuple[Operation, ...] = (
        tuple(inner) if isinstance(inner, Sequence) else (inner,)
    )
    if not inner_ops:
        raise ValueError("sponsorship bracket needs at least one inner operation")

    return (
        BeginSponsoringFutureReserves(sponsored_id=sponsored, source=sponsor),
        *(op.with_source(sponsored) for op in inner_ops),
        EndSponsoringFutureReserves(source=sponsored),
    )


def apply_sponsorship(
    sponsorship: Sponsorship,
    sponsored: str,
    inner: Operation,
) -> tuple[Operation, ...]:
    """Return ``(inner,)`` when unsponsored, the full bracket when sponsored."""
    if isinstance(sponsorship, Sponsored):
        return wrap_with_sponsorship(sponsorship.sponsor, sponsored, inner)
    return (inner,)
