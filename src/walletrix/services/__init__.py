"""Wallet and balance services."""

from walletrix.services.aggregator import BalanceAggregator, parse_chain_ids
from walletrix.services.evm_balance import EVMBalanceService, format_units
from walletrix.services.stellar_balance import StellarBalanceSession, StellarNetworkConfig
from walletrix.services.wallet_service import WalletService

__all__ = [
    "BalanceAggregator",
    "EVMBalanceService",
    "StellarBalanceSession",
    "StellarNetworkConfig",
    "WalletService",
    "format_units",
    "parse_chain_ids",
]
