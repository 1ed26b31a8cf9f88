"""Balance endpoints for the authenticated wallet.

EVM wallets are queried by address over JSON-RPC. Stellar wallets are
queried with the stored secret through Horizon; Stellar chain ids are the
synthetic ids 1 (mainnet), 2 (testnet) and 3 (futurenet).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from walletrix.api.app import Services
from walletrix.api.deps import get_services, require_wallet
from walletrix.api.errors import http_error
from walletrix.config import get_settings
from walletrix.contracts.balances import BalanceResponse, BalancesResponse, NativeBalance
from walletrix.contracts.chains import SupportedChainsResponse
from walletrix.errors import WalletrixError
from walletrix.hdwallet import NetworkFamily
from walletrix.ledger.models import Wallet
from walletrix.services.aggregator import parse_chain_ids

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/balance")


@router.get("/chains", response_model=SupportedChainsResponse)
async def get_supported_chains(
    wallet: Wallet = Depends(require_wallet),
    services: Services = Depends(get_services),
) -> SupportedChainsResponse:
    """List EVM chains available for balance queries."""
    return SupportedChainsResponse(chains=services.evm_balance.get_supported_chains())


@router.get("/native", response_model=BalanceResponse)
async def get_native_balance(
    chain_id: Optional[int] = Query(None, alias="chainId"),
    wallet: Wallet = Depends(require_wallet),
    services: Services = Depends(get_services),
) -> BalanceResponse:
    """Native balance of the wallet on one EVM chain (default: Base)."""
    target_chain_id = chain_id or get_settings().default_chain_id

    try:
        entry = await services.evm_balance.get_balance(wallet.address, target_chain_id)
    except WalletrixError as e:
        logger.error(f"Error fetching native balance: {e}")
        raise http_error(e)

    return BalanceResponse(
        wallet_address=wallet.address,
        native_balance=NativeBalance(
            balance=entry.balance,
            formatted=entry.formatted,
            currency=entry.currency,
            decimals=entry.decimals,
        ),
        chain_id=entry.chain_id,
        chain_name=entry.chain_name,
    )


@router.get("/balances", response_model=BalancesResponse)
async def get_balances(
    chain_ids: Optional[str] = Query(None, alias="chainIds"),
    network: Optional[str] = Query(None),
    wallet: Wallet = Depends(require_wallet),
    services: Services = Depends(get_services),
) -> BalancesResponse:
    """Balances across several chains.

    Chains that fail are left out (EVM) or reported as zero (Stellar).
    """
    try:
        family = NetworkFamily.parse(network) if network else NetworkFamily.EVM
        selected = parse_chain_ids(chain_ids)

        if family is NetworkFamily.STELLAR:
            if wallet.network != NetworkFamily.STELLAR.value:
                raise HTTPException(
                    status_code=400,
                    detail={
                        "code": "MISSING_SECRET_KEY",
                        "message": "Secret key is required for stellar",
                    },
                )
            balances = await services.aggregator.get_balances(
                family, secret=wallet.encrypted_private_key, chain_ids=selected
            )
        else:
            balances = await services.aggregator.get_balances(
                family, address=wallet.address, chain_ids=selected
            )
    except WalletrixError as e:
        logger.error(f"Error fetching balances: {e}")
        raise http_error(e)

    return BalancesResponse(
        wallet_address=wallet.address,
        balances=balances,
        network=family.value,
    )
