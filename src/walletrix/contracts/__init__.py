"""Request and response contracts for the HTTP layer.

Wire field names follow the camelCase convention of existing API clients.
"""

from walletrix.contracts.balances import (
    BalanceEntry,
    BalanceResponse,
    BalancesResponse,
    NativeBalance,
)
from walletrix.contracts.chains import (
    ChainInfo,
    NativeCurrencyInfo,
    SupportedChainsResponse,
)

__all__ = [
    # Balance contracts
    "BalanceEntry",
    "BalanceResponse",
    "BalancesResponse",
    "NativeBalance",
    # Chain contracts
    "ChainInfo",
    "NativeCurrencyInfo",
    "SupportedChainsResponse",
]
