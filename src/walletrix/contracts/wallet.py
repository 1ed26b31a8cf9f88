"""Wallet validation contracts.

These never carry private keys or mnemonics back to the client.
"""

from pydantic import BaseModel, Field

from walletrix.hdwallet import NetworkFamily


class ValidateAddressRequest(BaseModel):
    """Request to check an address format."""

    address: str = Field(..., description="Address to check")
    network: NetworkFamily = Field(default=NetworkFamily.EVM)


class ValidateMnemonicRequest(BaseModel):
    """Request to check a mnemonic phrase."""

    mnemonic: str = Field(..., description="Mnemonic phrase to check")
    network: NetworkFamily = Field(default=NetworkFamily.EVM)


class ValidationResponse(BaseModel):
    """Result of a format check."""

    valid: bool
    network: NetworkFamily


class NetworkListResponse(BaseModel):
    """Supported network families."""

    networks: list[str] = Field(default_factory=list)
