"""Wallet generation for EVM and Stellar networks."""

from walletrix.hdwallet.base import NetworkFamily, WalletInfo, WalletProvider
from walletrix.hdwallet.factory import get_supported_networks, get_wallet_provider

__all__ = [
    "NetworkFamily",
    "WalletInfo",
    "WalletProvider",
    "get_supported_networks",
    "get_wallet_provider",
]
