"""Wallet format checks.

These endpoints never return key material.
"""

from fastapi import APIRouter, Depends

from walletrix.api.app import Services
from walletrix.api.deps import get_services, require_app
from walletrix.contracts.wallet import (
    NetworkListResponse,
    ValidateAddressRequest,
    ValidateMnemonicRequest,
    ValidationResponse,
)
from walletrix.hdwallet import get_supported_networks
from walletrix.ledger.models import App

router = APIRouter(prefix="/wallet")


@router.post("/validate-address", response_model=ValidationResponse)
async def validate_address(
    request: ValidateAddressRequest,
    app: App = Depends(require_app),
    services: Services = Depends(get_services),
) -> ValidationResponse:
    """Check an address against its network's format."""
    valid = services.wallet_service.validate_address(request.address, request.network)
    return ValidationResponse(valid=valid, network=request.network)


@router.post("/validate-mnemonic", response_model=ValidationResponse)
async def validate_mnemonic(
    request: ValidateMnemonicRequest,
    app: App = Depends(require_app),
    services: Services = Depends(get_services),
) -> ValidationResponse:
    """Check whether a mnemonic phrase is usable for a network."""
    valid = services.wallet_service.validate_mnemonic(request.mnemonic, request.network)
    return ValidationResponse(valid=valid, network=request.network)


@router.get("/networks", response_model=NetworkListResponse)
async def list_networks() -> NetworkListResponse:
    """List supported network families."""
    return NetworkListResponse(networks=get_supported_networks())
