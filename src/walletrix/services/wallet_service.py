"""Wallet service: generation, recovery, import and validation.

All generation, recovery and import failures are reported as
WalletGenerationError with the originating cause message; the cause itself is
chained for logging.
"""

import logging
from typing import Optional

from walletrix.errors import (
    BatchGenerationFailedError,
    InvalidCountError,
    UnsupportedNetworkError,
    WalletGenerationError,
)
from walletrix.hdwallet import NetworkFamily, WalletInfo, WalletProvider, get_wallet_provider

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


class WalletService:
    """Service for creating custodial wallets across network families."""

    def __init__(self, providers: Optional[dict[NetworkFamily, WalletProvider]] = None):
        self._providers = providers or {
            family: get_wallet_provider(family) for family in NetworkFamily
        }

    def _provider(self, network: "str | NetworkFamily") -> WalletProvider:
        family = NetworkFamily.parse(network)
        provider = self._providers.get(family)
        if provider is None:
            raise UnsupportedNetworkError(network)
        return provider

    def generate(
        self,
        network: "str | NetworkFamily" = NetworkFamily.EVM,
        mnemonic: Optional[str] = None,
    ) -> WalletInfo:
        """Generate a new wallet.

        Args:
            network: Network family (evm or stellar)
            mnemonic: Optional phrase to derive from instead of fresh entropy

        Returns:
            WalletInfo with address, keys and mnemonic

        Raises:
            UnsupportedNetworkError: If the family is unknown
            WalletGenerationError: If key derivation fails
        """
        provider = self._provider(network)
        try:
            return provider.generate(mnemonic)
        except WalletGenerationError:
            logger.error("%s wallet generation failed", provider.network.value)
            raise
        except Exception as e:
            logger.error(f"{provider.network.value} wallet generation failed: {e}")
            raise WalletGenerationError(
                f"{provider.network.value.upper()} wallet generation failed: {e}"
            ) from e

    def recover_from_mnemonic(
        self,
        mnemonic: str,
        network: "str | NetworkFamily" = NetworkFamily.EVM,
    ) -> WalletInfo:
        """Recover a wallet from its mnemonic. Deterministic."""
        provider = self._provider(network)
        try:
            return provider.recover(mnemonic)
        except Exception as e:
            raise WalletGenerationError(f"Wallet recovery failed: {e}") from e

    def import_from_secret(
        self,
        secret: str,
        network: "str | NetworkFamily" = NetworkFamily.EVM,
    ) -> WalletInfo:
        """Import a wallet from an EVM private key or Stellar secret."""
        provider = self._provider(network)
        try:
            return provider.import_secret(secret)
        except Exception as e:
            raise WalletGenerationError(f"Wallet import failed: {e}") from e

    def validate_address(self, address: str, network: "str | NetworkFamily") -> bool:
        """Check address format for a family. Never raises."""
        try:
            return self._provider(network).validate_address(address)
        except UnsupportedNetworkError:
            return False

    def validate_mnemonic(
        self,
        mnemonic: str,
        network: "str | NetworkFamily" = NetworkFamily.EVM,
    ) -> bool:
        """Check whether a mnemonic is usable for a family. Never raises."""
        try:
            provider = self._provider(network)
        except UnsupportedNetworkError:
            return False
        return provider.validate_mnemonic(mnemonic)

    def generate_batch(
        self,
        count: int,
        network: "str | NetworkFamily" = NetworkFamily.EVM,
    ) -> list[WalletInfo]:
        """Generate several wallets sequentially.

        Raises:
            InvalidCountError: If count is not in 1..100
            BatchGenerationFailedError: On the first failing wallet; no
                partial results are returned
        """
        if count <= 0:
            raise InvalidCountError("Count must be greater than 0")
        if count > MAX_BATCH_SIZE:
            raise InvalidCountError(
                f"Cannot generate more than {MAX_BATCH_SIZE} wallets at once"
            )

        wallets = []
        for i in range(count):
            try:
                wallets.append(self.generate(network))
            except WalletGenerationError as e:
                logger.error(f"Failed to generate wallet {i + 1}: {e}")
                raise BatchGenerationFailedError(i + 1, e.message) from e

        return wallets
