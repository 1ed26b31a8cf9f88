"""Stellar balance queries across mainnet, testnet and futurenet.

A session is bound to one secret and a fixed set of network variants. Each
variant is queried through its Horizon server:

- account found: one entry per balance line (native XLM and issued assets)
- account missing on testnet: fund via Friendbot, wait, reload once;
  if that still fails the network contributes no entries
- any other failure (including a missing account on mainnet/futurenet):
  one zero-balance placeholder entry
"""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Awaitable, Callable, Optional

import httpx

from walletrix.config import Settings, get_settings
from walletrix.contracts.balances import BalanceEntry
from walletrix.errors import (
    FaucetFundingError,
    UnsupportedNetworkError,
    WalletGenerationError,
    WalletrixError,
)
from walletrix.hdwallet.stellar import StellarWallet

logger = logging.getLogger(__name__)

NATIVE_ASSET_CODE = "XLM"
# Issued assets are reported with the native precision as well
STELLAR_DECIMALS = 7

DEFAULT_NETWORKS = ["testnet"]

# Synthetic chain ids for Stellar network variants
STELLAR_CHAIN_IDS: dict[str, int] = {
    "mainnet": 1,
    "testnet": 2,
    "futurenet": 3,
}

_DISPLAY_NAMES = {
    "mainnet": "Stellar Mainnet",
    "testnet": "Stellar Testnet",
    "futurenet": "Stellar Futurenet",
}

_FETCH_ERRORS = (
    httpx.HTTPError,
    ValueError,
    KeyError,
    TypeError,
    InvalidOperation,
    WalletrixError,
)


class AccountNotFoundError(Exception):
    """Raised when Horizon reports no account for the address."""


@dataclass(frozen=True)
class StellarNetworkConfig:
    """Configuration for one Stellar network variant."""

    chain_id: int
    name: str
    display_name: str
    horizon_url: str
    has_faucet: bool = False


def resolve_network(name: str, settings: Optional[Settings] = None) -> StellarNetworkConfig:
    """Resolve a variant name (mainnet/testnet/futurenet) to its config.

    Raises:
        UnsupportedNetworkError: If the name is unknown
    """
    settings = settings or get_settings()
    key = name.strip().lower()
    chain_id = STELLAR_CHAIN_IDS.get(key)
    if chain_id is None:
        raise UnsupportedNetworkError(name)

    return StellarNetworkConfig(
        chain_id=chain_id,
        name=key,
        display_name=_DISPLAY_NAMES[key],
        horizon_url=settings.get_horizon_url(key),
        has_faucet=key == "testnet",
    )


def network_name_for_chain_id(chain_id: int) -> str:
    """Map a synthetic Stellar chain id back to its variant name.

    Raises:
        UnsupportedNetworkError: If the id is not 1, 2 or 3
    """
    for name, known_id in STELLAR_CHAIN_IDS.items():
        if known_id == chain_id:
            return name
    raise UnsupportedNetworkError(chain_id)


class StellarBalanceSession:
    """Balance session for one Stellar account on a fixed set of networks.

    Usage:
        async with StellarBalanceSession(secret, ["testnet", "mainnet"]) as session:
            balances = await session.get_balances_for_all_networks()
    """

    def __init__(
        self,
        secret: str,
        networks: Optional[list[str]] = None,
        *,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Resolve networks and open one Horizon client per network.

        Args:
            secret: Stellar secret seed (S...)
            networks: Variant names, defaults to ["testnet"]
            settings: Settings override
            transport: Optional httpx transport, used by tests
            sleep: Coroutine used for the faucet settle delay

        Raises:
            UnsupportedNetworkError: If a variant name is unknown
            WalletGenerationError: If the secret cannot be decoded
        """
        settings = settings or get_settings()
        self._networks = tuple(
            resolve_network(name, settings) for name in (networks or DEFAULT_NETWORKS)
        )

        try:
            self.address = StellarWallet().import_secret(secret).address
        except ValueError as e:
            raise WalletGenerationError(f"Invalid Stellar secret: {e}") from e

        self._friendbot_url = settings.friendbot_url
        self._settle_delay = settings.faucet_settle_delay
        self._sleep = sleep

        self._clients: dict[int, httpx.AsyncClient] = {
            network.chain_id: httpx.AsyncClient(
                base_url=network.horizon_url,
                timeout=settings.rpc_timeout,
                transport=transport,
            )
            for network in self._networks
        }
        self._faucet_client = httpx.AsyncClient(timeout=settings.rpc_timeout, transport=transport)

    @property
    def networks(self) -> tuple[StellarNetworkConfig, ...]:
        return self._networks

    async def __aenter__(self) -> "StellarBalanceSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close all Horizon and faucet clients."""
        for client in self._clients.values():
            await client.aclose()
        await self._faucet_client.aclose()

    async def load_account(self, network: StellarNetworkConfig) -> list[dict]:
        """Load the account's balance lines from Horizon.

        Raises:
            AccountNotFoundError: If Horizon answers 404
            httpx.HTTPError: On transport errors or other HTTP errors
        """
        client = self._clients[network.chain_id]
        response = await client.get(f"/accounts/{self.address}")
        if response.status_code == 404:
            raise AccountNotFoundError(f"Account {self.address} not found on {network.name}")
        response.raise_for_status()
        return response.json()["balances"]

    async def fund_account(self) -> None:
        """Ask Friendbot to create and fund the account (testnet only).

        Raises:
            FaucetFundingError: If the faucet call fails
        """
        try:
            response = await self._faucet_client.get(
                self._friendbot_url, params={"addr": self.address}
            )
        except httpx.HTTPError as e:
            raise FaucetFundingError(self.address, reason=str(e)) from e

        if not response.is_success:
            raise FaucetFundingError(self.address, status_code=response.status_code)

        logger.info(f"Friendbot funding successful for {self.address}")

    async def get_balances_for_all_networks(self) -> list[BalanceEntry]:
        """Get balance entries for every configured network, in order."""
        results: list[BalanceEntry] = []
        for network in self._networks:
            results.extend(await self._get_network_balances(network))
        return results

    async def _get_network_balances(self, network: StellarNetworkConfig) -> list[BalanceEntry]:
        try:
            lines = await self.load_account(network)
            return self._to_entries(lines, network)
        except AccountNotFoundError:
            if network.has_faucet:
                logger.info("Account not found, attempting to fund with Friendbot...")
                return await self._fund_and_retry(network)
            logger.warning(f"Account {self.address} not found on {network.name}")
            return [self._placeholder(network)]
        except _FETCH_ERRORS as e:
            logger.error(f"Error loading account on {network.name}: {e}")
            return [self._placeholder(network)]

    async def _fund_and_retry(self, network: StellarNetworkConfig) -> list[BalanceEntry]:
        try:
            await self.fund_account()
            await self._sleep(self._settle_delay)
            lines = await self.load_account(network)
            return self._to_entries(lines, network)
        except (AccountNotFoundError, *_FETCH_ERRORS) as e:
            logger.error(f"Funded reload failed on {network.name}: {e}")
            return []

    @staticmethod
    def _to_entries(lines: list[dict], network: StellarNetworkConfig) -> list[BalanceEntry]:
        entries = []
        for line in lines:
            if not isinstance(line, dict):
                raise ValueError(f"Unexpected balance line: {line!r}")
            if line.get("asset_type") == "native":
                currency = NATIVE_ASSET_CODE
            else:
                currency = line.get("asset_code") or line["asset_type"]

            amount = Decimal(line["balance"])
            entries.append(
                BalanceEntry(
                    balance=str(int(amount.scaleb(STELLAR_DECIMALS))),
                    formatted=f"{amount:.{STELLAR_DECIMALS}f}",
                    chain_id=network.chain_id,
                    currency=currency,
                    decimals=STELLAR_DECIMALS,
                    chain_name=network.display_name,
                )
            )
        return entries

    @staticmethod
    def _placeholder(network: StellarNetworkConfig) -> BalanceEntry:
        return BalanceEntry(
            balance="0",
            formatted=f"{Decimal(0):.{STELLAR_DECIMALS}f}",
            chain_id=network.chain_id,
            currency=NATIVE_ASSET_CODE,
            decimals=STELLAR_DECIMALS,
            chain_name=network.display_name,
        )
