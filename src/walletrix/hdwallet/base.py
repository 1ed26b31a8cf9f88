"""Wallet provider base interface.

Each network family (EVM, Stellar) has one provider that creates, recovers and
imports key material and checks address formats. Unlike an xpub-only deposit
wallet, these providers hold private keys: the backend is custodial.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from walletrix.errors import UnsupportedNetworkError


class NetworkFamily(str, Enum):
    """Protocol family a wallet belongs to."""

    EVM = "evm"
    STELLAR = "stellar"

    @classmethod
    def parse(cls, value: "str | NetworkFamily") -> "NetworkFamily":
        """Parse a family name, case-insensitively.

        Raises:
            UnsupportedNetworkError: If the name is not a known family
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedNetworkError(value) from None


@dataclass
class WalletInfo:
    """Key material for one generated, recovered or imported wallet."""

    address: str
    public_key: str
    private_key: str
    network: NetworkFamily
    mnemonic: Optional[str] = None

    @property
    def secret(self) -> Optional[str]:
        """Stellar secret seed (S...), None for other families."""
        if self.network is NetworkFamily.STELLAR:
            return self.private_key
        return None


class WalletProvider(ABC):
    """Abstract base class for per-family wallet providers.

    Usage:
        provider = EVMWallet()
        wallet = provider.generate()
        same = provider.recover(wallet.mnemonic)
    """

    address_pattern: re.Pattern

    @property
    @abstractmethod
    def network(self) -> NetworkFamily:
        """Network family served by this provider."""
        pass

    @abstractmethod
    def generate(self, mnemonic: Optional[str] = None) -> WalletInfo:
        """Create a wallet, from a mnemonic if given, else from fresh entropy."""
        pass

    @abstractmethod
    def recover(self, mnemonic: str) -> WalletInfo:
        """Recover a wallet deterministically from a mnemonic."""
        pass

    @abstractmethod
    def import_secret(self, secret: str) -> WalletInfo:
        """Wrap existing key material without generating entropy."""
        pass

    @abstractmethod
    def validate_mnemonic(self, mnemonic: str) -> bool:
        """Check whether a mnemonic can be used by this provider."""
        pass

    def validate_address(self, address: str) -> bool:
        """Check address format only (no checksum or network check)."""
        if not isinstance(address, str):
            return False
        return self.address_pattern.fullmatch(address) is not None
