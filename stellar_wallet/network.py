"""
Network identity and endpoint.

A NetworkContext is passed explicitly to everything that needs it. The
passphrase is embedded in every built transaction and must match the
Horizon endpoint's network, or submission fails deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass

from stellar_sdk import Network

from stellar_wallet.config import WalletSettings

# Per-operation base fee in stroops (the network minimum).
BASE_FEE = 100


@dataclass(frozen=True)
class NetworkContext:
    horizon_url: str
    network_passphrase: str

    def __post_init__(self) -> None:
        if not self.horizon_url:
            raise ValueError("horizon_url must be non-empty")
        if not self.network_passphrase:
            raise ValueError("network_passphrase must be non-empty")

    @classmethod
    def from_settings(cls, settings: WalletSettings) -> NetworkContext:
        return cls(
            horizon_url=settings.horizon_url,
            network_passphrase=settings.network_passphrase,
        )


TESTNET = NetworkContext(
    horizon_url="https://horizon-testnet.stellar.org",
    network_passphrase=Network.TESTNET_NETWORK_PASSPHRASE,
)

PUBLIC = NetworkContext(
    horizon_url="https://horizon.stellar.org",
    network_passphrase=Network.PUBLIC_NETWORK_PASSPHRASE,
)
