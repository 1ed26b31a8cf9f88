"""Multi-network balance aggregation.

Resolves a chain selector and dispatches to the EVM service or a Stellar
session depending on the wallet's network family.
"""

import logging
from typing import Callable, NoReturn, Optional

from walletrix.contracts.balances import BalanceEntry
from walletrix.errors import (
    InvalidAddressFormatError,
    InvalidChainSelectorError,
    UnsupportedNetworkError,
    WalletGenerationError,
)
from walletrix.hdwallet import NetworkFamily
from walletrix.services.evm_balance import EVMBalanceService
from walletrix.services.stellar_balance import StellarBalanceSession, network_name_for_chain_id

logger = logging.getLogger(__name__)

DEFAULT_STELLAR_NETWORKS = ["testnet", "mainnet"]

StellarSessionFactory = Callable[[str, list[str]], StellarBalanceSession]


def parse_chain_ids(raw: Optional[str]) -> Optional[list[int]]:
    """Parse a comma-separated chain selector ("8453,1,137").

    Returns None for an empty selector so callers fall back to defaults.

    Raises:
        InvalidChainSelectorError: If any element is not an integer
    """
    if raw is None or not raw.strip():
        return None

    chain_ids = []
    for part in raw.split(","):
        part = part.strip()
        try:
            chain_ids.append(int(part))
        except ValueError:
            raise InvalidChainSelectorError(f"Invalid chain ID: {part!r}") from None
    return chain_ids


def _unsupported_family(family: NoReturn) -> NoReturn:
    raise UnsupportedNetworkError(family)


class BalanceAggregator:
    """Single entry point for balance queries across network families."""

    def __init__(
        self,
        evm_service: EVMBalanceService,
        stellar_session_factory: Optional[StellarSessionFactory] = None,
    ):
        self.evm_service = evm_service
        self._stellar_session_factory = stellar_session_factory or StellarBalanceSession

    async def get_evm_balances(
        self,
        address: str,
        chain_ids: Optional[list[int]] = None,
    ) -> list[BalanceEntry]:
        return await self.evm_service.get_balances(address, chain_ids)

    async def get_stellar_balances(
        self,
        secret: str,
        chain_ids: Optional[list[int]] = None,
    ) -> list[BalanceEntry]:
        """Get Stellar balances for the networks named by synthetic ids.

        Raises:
            UnsupportedNetworkError: If an id is not 1, 2 or 3
        """
        if chain_ids:
            networks = [network_name_for_chain_id(chain_id) for chain_id in chain_ids]
        else:
            networks = list(DEFAULT_STELLAR_NETWORKS)

        async with self._stellar_session_factory(secret, networks) as session:
            return await session.get_balances_for_all_networks()

    async def get_balances(
        self,
        family: NetworkFamily,
        *,
        address: Optional[str] = None,
        secret: Optional[str] = None,
        chain_ids: Optional[list[int]] = None,
    ) -> list[BalanceEntry]:
        """Get balances for a wallet of the given family.

        EVM wallets are identified by address, Stellar wallets by secret.
        """
        match family:
            case NetworkFamily.EVM:
                if not address:
                    raise InvalidAddressFormatError("EVM balance query requires an address")
                return await self.get_evm_balances(address, chain_ids)
            case NetworkFamily.STELLAR:
                if not secret:
                    raise WalletGenerationError("Stellar balance query requires a secret")
                return await self.get_stellar_balances(secret, chain_ids)
            case _:
                _unsupported_family(family)
