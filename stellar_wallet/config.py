from __future__ import annotations

import os
from dataclasses import dataclass

from stellar_sdk import Network

DEFAULT_HORIZON_URL = "https://horizon-testnet.stellar.org"


def _get_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return int(val)


def _get_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return float(val)


def _get_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class WalletSettings:
    horizon_url: str = DEFAULT_HORIZON_URL
    network_passphrase: str = Network.TESTNET_NETWORK_PASSPHRASE

    # HTTP timeout for Horizon calls, seconds.
    timeout_s: float = 30.0
    # Validity window of built transactions, seconds.
    tx_timeout: int = 180

    log_level: str = "INFO"
    log_json: bool = True


def load_settings() -> WalletSettings:
    """Read settings from STELLAR_WALLET_* environment variables."""
    return WalletSettings(
        horizon_url=os.getenv("STELLAR_WALLET_HORIZON_URL") or DEFAULT_HORIZON_URL,
        network_passphrase=(
            os.getenv("STELLAR_WALLET_NETWORK_PASSPHRASE") or Network.TESTNET_NETWORK_PASSPHRASE
        ),
        timeout_s=_get_float("STELLAR_WALLET_TIMEOUT_S", 30.0),
        tx_timeout=_get_int("STELLAR_WALLET_TX_TIMEOUT", 180),
        log_level=os.getenv("STELLAR_WALLET_LOG_LEVEL", "INFO"),
        log_json=_get_bool("STELLAR_WALLET_LOG_JSON", True),
    )
