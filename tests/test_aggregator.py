"""Tests for balance aggregation across network families."""

import httpx
import pytest
import pytest_asyncio

from conftest import EVM_ADDRESS, horizon_account, native_line, rpc_chain_id, rpc_result
from walletrix.errors import (
    InvalidAddressFormatError,
    InvalidChainSelectorError,
    UnsupportedNetworkError,
    WalletGenerationError,
)
from walletrix.hdwallet import NetworkFamily
from walletrix.hdwallet.stellar import StellarWallet
from walletrix.services.aggregator import BalanceAggregator, parse_chain_ids
from walletrix.services.evm_balance import EVMBalanceService
from walletrix.services.stellar_balance import StellarBalanceSession


class RecordingSessionFactory:
    """Builds real sessions over a mock transport and records their networks."""

    def __init__(self, handler):
        self.transport = httpx.MockTransport(handler)
        self.calls: list[list[str]] = []

    def __call__(self, secret, networks):
        self.calls.append(list(networks))

        async def no_sleep(delay):
            return None

        return StellarBalanceSession(secret, networks, transport=self.transport, sleep=no_sleep)


def handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "rpc.test":
        return rpc_result(request, hex(rpc_chain_id(request)))
    return httpx.Response(200, json=horizon_account([native_line("5.0000000")]))


@pytest_asyncio.fixture
async def aggregator():
    evm = EVMBalanceService(timeout=5.0, transport=httpx.MockTransport(handler))
    yield BalanceAggregator(evm, RecordingSessionFactory(handler))
    await evm.aclose()


class TestParseChainIds:
    """Tests for chain selector parsing."""

    def test_parse(self):
        assert parse_chain_ids("8453, 1,137") == [8453, 1, 137]

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_selector(self, raw):
        assert parse_chain_ids(raw) is None

    @pytest.mark.parametrize("raw", ["8453,abc", "1,,2", "base"])
    def test_invalid_selector(self, raw):
        with pytest.raises(InvalidChainSelectorError):
            parse_chain_ids(raw)


class TestAggregator:
    """Tests for family dispatch."""

    @pytest.mark.asyncio
    async def test_evm_dispatch(self, aggregator):
        entries = await aggregator.get_balances(
            NetworkFamily.EVM, address=EVM_ADDRESS, chain_ids=[10, 8453]
        )

        assert [entry.chain_id for entry in entries] == [10, 8453]

    @pytest.mark.asyncio
    async def test_stellar_default_networks(self, aggregator):
        secret = StellarWallet().generate().secret
        entries = await aggregator.get_balances(NetworkFamily.STELLAR, secret=secret)

        assert aggregator._stellar_session_factory.calls == [["testnet", "mainnet"]]
        assert [entry.chain_id for entry in entries] == [2, 1]
        assert all(entry.formatted == "5.0000000" for entry in entries)

    @pytest.mark.asyncio
    async def test_stellar_chain_ids_map_to_networks(self, aggregator):
        secret = StellarWallet().generate().secret
        entries = await aggregator.get_stellar_balances(secret, [3, 1])

        assert aggregator._stellar_session_factory.calls == [["futurenet", "mainnet"]]
        assert [entry.chain_name for entry in entries] == ["Stellar Futurenet", "Stellar Mainnet"]

    @pytest.mark.asyncio
    async def test_stellar_unknown_chain_id(self, aggregator):
        secret = StellarWallet().generate().secret
        with pytest.raises(UnsupportedNetworkError):
            await aggregator.get_stellar_balances(secret, [8453])

    @pytest.mark.asyncio
    async def test_missing_identity(self, aggregator):
        with pytest.raises(InvalidAddressFormatError):
            await aggregator.get_balances(NetworkFamily.EVM)
        with pytest.raises(WalletGenerationError):
            await aggregator.get_balances(NetworkFamily.STELLAR)

    @pytest.mark.asyncio
    async def test_unknown_family(self, aggregator):
        with pytest.raises(UnsupportedNetworkError):
            await aggregator.get_balances("solana", address=EVM_ADDRESS)
