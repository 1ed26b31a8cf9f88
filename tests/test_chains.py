"""Tests for the chain registry."""

import pytest

from walletrix.chains import CHAINS, DEFAULT_CHAIN_ID, find_chain, get_chain, get_chain_ids, list_chains
from walletrix.errors import UnsupportedChainError


class TestChainRegistry:
    """Tests for chain lookups."""

    def test_get_chain_returns_matching_id(self):
        for chain_id in get_chain_ids():
            assert get_chain(chain_id).chain_id == chain_id

    def test_default_chain_is_base(self):
        assert DEFAULT_CHAIN_ID == 8453
        assert get_chain(DEFAULT_CHAIN_ID).name == "Base"

    def test_unknown_chain_raises(self):
        with pytest.raises(UnsupportedChainError) as exc_info:
            get_chain(999999)

        assert exc_info.value.chain_id == 999999
        assert "999999" in exc_info.value.message

    def test_find_chain_returns_none_for_unknown(self):
        assert find_chain(999999) is None

    def test_list_preserves_registry_order(self):
        ids = [chain.chain_id for chain in list_chains()]
        assert ids == get_chain_ids()
        assert ids[0] == 8453
        assert len(ids) == len(set(ids)) == len(CHAINS)

    def test_native_currency_decimals(self):
        for chain in list_chains():
            assert chain.native_currency.decimals == 18
            assert chain.native_currency.symbol

    def test_rpc_override_from_environment(self):
        # conftest points every chain at the test RPC host
        assert get_chain(8453).rpc_url == "https://rpc.test/8453"

    def test_testnet_flags(self):
        assert get_chain(84532).testnet is True
        assert get_chain(11155111).testnet is True
        assert get_chain(1).testnet is False
