"""Chain information contracts."""

from pydantic import BaseModel, ConfigDict, Field

from walletrix.chains import ChainConfig


class NativeCurrencyInfo(BaseModel):
    """Native currency metadata."""

    name: str
    symbol: str
    decimals: int


class ChainInfo(BaseModel):
    """Information about a supported chain."""

    model_config = ConfigDict(populate_by_name=True)

    chain_id: int = Field(..., alias="chainId", description="EVM chain id")
    name: str = Field(..., description="Chain display name")
    testnet: bool = Field(default=False, description="Whether this is a testnet")
    currency: str = Field(..., description="Native currency symbol")
    explorer_url: str = Field(..., alias="explorerUrl", description="Block explorer URL")
    rpc_url: str = Field(..., alias="rpcUrl", description="RPC endpoint")
    native_currency: NativeCurrencyInfo = Field(..., alias="nativeCurrency")

    @classmethod
    def from_config(cls, config: ChainConfig) -> "ChainInfo":
        currency = config.native_currency
        return cls(
            chain_id=config.chain_id,
            name=config.name,
            testnet=config.testnet,
            currency=currency.symbol,
            explorer_url=config.explorer_url,
            rpc_url=config.rpc_url,
            native_currency=NativeCurrencyInfo(
                name=currency.name,
                symbol=currency.symbol,
                decimals=currency.decimals,
            ),
        )


class SupportedChainsResponse(BaseModel):
    """Response containing list of supported chains."""

    success: bool = True
    chains: list[ChainInfo] = Field(default_factory=list)
