"""Balance contracts.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BalanceEntry(BaseModel):
    """One native (or Stellar balance line) holding on one chain."""

    model_config = ConfigDict(populate_by_name=True)

    balance: str = Field(..., description="Raw balance in smallest units")
    formatted: str = Field(..., description="Balance in human-readable units")
    chain_id: int = Field(..., alias="chainId", description="Chain id")
    currency: str = Field(..., description="Currency symbol (ETH, XLM, ...)")
    decimals: int = Field(..., description="Currency decimals")
    chain_name: str = Field(..., alias="chainName", description="Chain display name")


class NativeBalance(BaseModel):
    """Native balance without chain metadata."""

    balance: str
    formatted: str
    currency: str
    decimals: int


class BalanceResponse(BaseModel):
    """Single-chain native balance response."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    wallet_address: str = Field(..., alias="walletAddress")
    native_balance: NativeBalance = Field(..., alias="nativeBalance")
    chain_id: int = Field(..., alias="chainId")
    chain_name: str = Field(..., alias="chainName")


class BalancesResponse(BaseModel):
    """Multi-chain balance response. Failed chains are simply absent."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    wallet_address: str = Field(..., alias="walletAddress")
    balances: list[BalanceEntry] = Field(default_factory=list)
    network: Optional[str] = Field(None, description="Network family queried")
