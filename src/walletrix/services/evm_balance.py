"""Native balance queries for EVM chains.

Uses one long-lived httpx client per registered chain and the standard
eth_getBalance JSON-RPC method.
"""

import asyncio
import logging
import re
from typing import Optional

import httpx

from walletrix.chains import ChainConfig, list_chains
from walletrix.config import get_settings
from walletrix.contracts.balances import BalanceEntry
from walletrix.contracts.chains import ChainInfo
from walletrix.errors import (
    BalanceFetchError,
    InvalidAddressFormatError,
    UnsupportedChainError,
    WalletrixError,
)

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def format_units(value: int, decimals: int) -> str:
    """Format an integer amount of smallest units as a decimal string.

    Trailing zeros are dropped, as is the point for whole amounts:
    format_units(125000000000000000, 18) == "0.125"
    """
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if decimals == 0:
        return f"{sign}{digits}"

    digits = digits.rjust(decimals + 1, "0")
    integer, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
    if fraction:
        return f"{sign}{integer}.{fraction}"
    return f"{sign}{integer}"


class EVMBalanceService:
    """Service for native balances on EVM chains.

    Clients are created once at construction and reused for every request;
    each call is an independent stateless RPC request.
    """

    def __init__(
        self,
        chains: Optional[list[ChainConfig]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize clients for every chain.

        Args:
            chains: Chains to serve (defaults to the whole registry)
            timeout: Per-call timeout in seconds (defaults to settings)
            transport: Optional httpx transport, used by tests
        """
        if timeout is None:
            timeout = get_settings().rpc_timeout

        self._chains: dict[int, ChainConfig] = {
            chain.chain_id: chain for chain in (chains if chains is not None else list_chains())
        }
        self._clients: dict[int, httpx.AsyncClient] = {
            chain_id: httpx.AsyncClient(timeout=timeout, transport=transport)
            for chain_id in self._chains
        }

    async def aclose(self) -> None:
        """Close all RPC clients."""
        for client in self._clients.values():
            await client.aclose()

    def _get_chain(self, chain_id: int) -> ChainConfig:
        chain = self._chains.get(chain_id)
        if chain is None:
            raise UnsupportedChainError(chain_id)
        return chain

    def get_supported_chains(self) -> list[ChainInfo]:
        """Get metadata for all chains this service can query."""
        return [ChainInfo.from_config(chain) for chain in self._chains.values()]

    async def get_balance(self, address: str, chain_id: int) -> BalanceEntry:
        """Get native balance for an address on one chain.

        Raises:
            InvalidAddressFormatError: If the address is not 0x + 40 hex
            UnsupportedChainError: If the chain is not registered
            BalanceFetchError: If the RPC query fails (not retried)
        """
        if not _ADDRESS_RE.fullmatch(address):
            raise InvalidAddressFormatError(f"Invalid EVM address: {address}")

        chain = self._get_chain(chain_id)
        currency = chain.native_currency

        try:
            raw = await self._fetch_native_balance(chain, address)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise BalanceFetchError(chain_id, address, str(e) or type(e).__name__) from e

        return BalanceEntry(
            balance=str(raw),
            formatted=format_units(raw, currency.decimals),
            chain_id=chain_id,
            currency=currency.symbol,
            decimals=currency.decimals,
            chain_name=chain.name,
        )

    async def get_balances(
        self,
        address: str,
        chain_ids: Optional[list[int]] = None,
    ) -> list[BalanceEntry]:
        """Get native balances across several chains.

        Chains are queried concurrently; the result keeps the requested
        order. A chain that fails is logged and left out of the result.

        Raises:
            InvalidAddressFormatError: If the address is not 0x + 40 hex
        """
        if not _ADDRESS_RE.fullmatch(address):
            raise InvalidAddressFormatError(f"Invalid EVM address: {address}")

        chains_to_check = chain_ids if chain_ids is not None else list(self._chains)

        async def fetch(chain_id: int) -> Optional[BalanceEntry]:
            try:
                return await self.get_balance(address, chain_id)
            except WalletrixError as e:
                logger.error(f"Error fetching balance for chain {chain_id}: {e}")
                return None
            except Exception as e:
                logger.exception(f"Unexpected error fetching balance for chain {chain_id}: {e}")
                return None

        results = await asyncio.gather(*(fetch(chain_id) for chain_id in chains_to_check))
        return [entry for entry in results if entry is not None]

    async def _fetch_native_balance(self, chain: ChainConfig, address: str) -> int:
        """Call eth_getBalance and return the balance in wei."""
        client = self._clients[chain.chain_id]
        response = await client.post(
            chain.rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": "eth_getBalance",
                "params": [address, "latest"],
                "id": 1,
            },
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected JSON-RPC response: {data!r}")
        if data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise ValueError(f"RPC error: {message}")

        result = data["result"]
        if not isinstance(result, str) or not result.startswith("0x"):
            raise ValueError(f"Unexpected eth_getBalance result: {result!r}")
        return int(result, 16)
