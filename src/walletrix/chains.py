"""Registry of supported EVM chains.

Static table keyed by EVM chain id. RPC endpoints can be overridden per chain
with RPC_URL_<chain_id> environment variables, read once at import.
"""

import os
from dataclasses import dataclass
from typing import Optional

from walletrix.errors import UnsupportedChainError


@dataclass(frozen=True)
class NativeCurrency:
    """Native currency of a chain."""

    name: str
    symbol: str
    decimals: int = 18


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for an EVM chain."""

    chain_id: int
    name: str
    rpc_url: str
    explorer_url: str
    native_currency: NativeCurrency
    testnet: bool = False


def _rpc(chain_id: int, default: str) -> str:
    return os.getenv(f"RPC_URL_{chain_id}", default)


ETHER = NativeCurrency(name="Ether", symbol="ETH", decimals=18)
SEPOLIA_ETHER = NativeCurrency(name="Sepolia Ether", symbol="ETH", decimals=18)

# Base mainnet, used when a single-chain request names no chain
DEFAULT_CHAIN_ID = 8453


# ======================
# Chain Configurations
# ======================

_CHAIN_LIST: tuple[ChainConfig, ...] = (
    ChainConfig(
        chain_id=8453,
        name="Base",
        rpc_url=_rpc(8453, "https://mainnet.base.org"),
        explorer_url="https://basescan.org",
        native_currency=ETHER,
    ),
    ChainConfig(
        chain_id=84532,
        name="Base Sepolia",
        rpc_url=_rpc(84532, "https://sepolia.base.org"),
        explorer_url="https://sepolia.basescan.org",
        native_currency=SEPOLIA_ETHER,
        testnet=True,
    ),
    ChainConfig(
        chain_id=1,
        name="Ethereum",
        rpc_url=_rpc(1, "https://eth.llamarpc.com"),
        explorer_url="https://etherscan.io",
        native_currency=ETHER,
    ),
    ChainConfig(
        chain_id=11155111,
        name="Sepolia",
        rpc_url=_rpc(11155111, "https://ethereum-sepolia-rpc.publicnode.com"),
        explorer_url="https://sepolia.etherscan.io",
        native_currency=SEPOLIA_ETHER,
        testnet=True,
    ),
    ChainConfig(
        chain_id=137,
        name="Polygon",
        rpc_url=_rpc(137, "https://polygon-rpc.com"),
        explorer_url="https://polygonscan.com",
        native_currency=NativeCurrency(name="POL", symbol="POL", decimals=18),
    ),
    ChainConfig(
        chain_id=56,
        name="BNB Smart Chain",
        rpc_url=_rpc(56, "https://bsc-dataseed.binance.org"),
        explorer_url="https://bscscan.com",
        native_currency=NativeCurrency(name="BNB", symbol="BNB", decimals=18),
    ),
    ChainConfig(
        chain_id=42161,
        name="Arbitrum One",
        rpc_url=_rpc(42161, "https://arb1.arbitrum.io/rpc"),
        explorer_url="https://arbiscan.io",
        native_currency=ETHER,
    ),
    ChainConfig(
        chain_id=10,
        name="OP Mainnet",
        rpc_url=_rpc(10, "https://mainnet.optimism.io"),
        explorer_url="https://optimistic.etherscan.io",
        native_currency=ETHER,
    ),
    ChainConfig(
        chain_id=43114,
        name="Avalanche",
        rpc_url=_rpc(43114, "https://api.avax.network/ext/bc/C/rpc"),
        explorer_url="https://snowtrace.io",
        native_currency=NativeCurrency(name="Avalanche", symbol="AVAX", decimals=18),
    ),
)

CHAINS: dict[int, ChainConfig] = {chain.chain_id: chain for chain in _CHAIN_LIST}

if len(CHAINS) != len(_CHAIN_LIST):
    raise RuntimeError("Duplicate chain id in chain registry")


def find_chain(chain_id: int) -> Optional[ChainConfig]:
    """Get chain configuration, or None if not registered."""
    return CHAINS.get(chain_id)


def get_chain(chain_id: int) -> ChainConfig:
    """Get chain configuration.

    Raises:
        UnsupportedChainError: If the chain id is not registered
    """
    chain = CHAINS.get(chain_id)
    if chain is None:
        raise UnsupportedChainError(chain_id)
    return chain


def list_chains() -> list[ChainConfig]:
    """Get all chain configurations in registry order."""
    return list(CHAINS.values())


def get_chain_ids() -> list[int]:
    """Get all registered chain ids in registry order."""
    return list(CHAINS.keys())
