"""Wallet provider factory.

Maps each network family to its provider class.
"""

from walletrix.errors import UnsupportedNetworkError
from walletrix.hdwallet.base import NetworkFamily, WalletProvider
from walletrix.hdwallet.evm import EVMWallet
from walletrix.hdwallet.stellar import StellarWallet

WALLET_CLASSES: dict[NetworkFamily, type[WalletProvider]] = {
    NetworkFamily.EVM: EVMWallet,
    NetworkFamily.STELLAR: StellarWallet,
}


def get_supported_networks() -> list[str]:
    """Get list of supported network family names."""
    return [family.value for family in WALLET_CLASSES]


def get_wallet_provider(network: "str | NetworkFamily") -> WalletProvider:
    """Get the wallet provider for a network family.

    Raises:
        UnsupportedNetworkError: If the family is unknown
    """
    family = NetworkFamily.parse(network)
    wallet_class = WALLET_CLASSES.get(family)
    if wallet_class is None:
        raise UnsupportedNetworkError(network)
    return wallet_class()
