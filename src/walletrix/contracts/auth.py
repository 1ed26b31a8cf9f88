"""Email/OTP authentication contracts."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from walletrix.hdwallet import NetworkFamily


class EmailLoginRequest(BaseModel):
    """Login or register with an email address."""

    email: str
    network: NetworkFamily = NetworkFamily.EVM


class EmailLoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    is_active: Optional[bool] = Field(None, alias="isActive")
    wallet_exists: Optional[bool] = Field(None, alias="walletExists")
    network: Optional[NetworkFamily] = None


class VerifyOTPRequest(BaseModel):
    email: str
    otp: str
    network: NetworkFamily = NetworkFamily.EVM


class WalletData(BaseModel):
    """Public view of a stored wallet."""

    model_config = ConfigDict(populate_by_name=True)

    wallet_address: str = Field(..., alias="walletAddress")
    social_type: str = Field(..., alias="socialType")
    user_data: Optional[str] = Field(None, alias="userData")
    network: NetworkFamily


class VerifyOTPResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    data: Optional[WalletData] = None
    is_active: Optional[bool] = Field(None, alias="isActive")
    token: Optional[str] = None


class ResendOTPRequest(BaseModel):
    email: str
    network: NetworkFamily = NetworkFamily.EVM


class ResendOTPResponse(BaseModel):
    success: bool = True
    message: str
