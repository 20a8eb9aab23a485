"""
Account key generation.

Ed25519 seeds come from ``cryptography``; ``stellar_sdk`` encodes them
as strkeys (G... public key, S... secret seed). The secret is returned
to the caller and never logged.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)
from stellar_sdk import Keypair


@dataclass(frozen=True)
class AccountKeypair:
    public_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"AccountKeypair(public_key={self.public_key!r}, secret_key='***')"


def create_keypair() -> AccountKeypair:
    """Generate a fresh, not-yet-funded account keypair."""
    seed = Ed25519PrivateKey.generate().private_bytes(
        encoding=Encoding.Raw,
        format=PrivateFormat.Raw,
        encryption_algorithm=NoEncryption(),
    )
    keypair = Keypair.from_raw_ed25519_seed(seed)
    return AccountKeypair(public_key=keypair.public_key, secret_key=keypair.secret)
