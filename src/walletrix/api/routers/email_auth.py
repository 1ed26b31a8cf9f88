"""Email/OTP login endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from walletrix.api.app import Services
from walletrix.api.deps import bearer_token, get_repository, get_services, require_app
from walletrix.api.errors import http_error
from walletrix.auth.service import EmailAuthService
from walletrix.contracts.auth import (
    EmailLoginRequest,
    EmailLoginResponse,
    ResendOTPRequest,
    ResendOTPResponse,
    VerifyOTPRequest,
    VerifyOTPResponse,
)
from walletrix.errors import WalletrixError
from walletrix.ledger.models import App
from walletrix.ledger.repository import WalletRepository

router = APIRouter(prefix="/auth/email")


async def get_auth_service(
    repository: WalletRepository = Depends(get_repository),
    services: Services = Depends(get_services),
) -> EmailAuthService:
    return EmailAuthService(repository, services.wallet_service, services.email_sender)


@router.post("/login", response_model=EmailLoginResponse)
async def login(
    request: EmailLoginRequest,
    app: App = Depends(require_app),
    token: Optional[str] = Depends(bearer_token),
    auth: EmailAuthService = Depends(get_auth_service),
) -> EmailLoginResponse:
    """Create or refresh a wallet for an email and send an OTP."""
    try:
        return await auth.login(app.app_id, request.email, request.network, token)
    except WalletrixError as e:
        raise http_error(e)


@router.post("/verify", response_model=VerifyOTPResponse)
async def verify(
    request: VerifyOTPRequest,
    app: App = Depends(require_app),
    token: Optional[str] = Depends(bearer_token),
    auth: EmailAuthService = Depends(get_auth_service),
) -> VerifyOTPResponse:
    """Verify an OTP and issue a bearer token."""
    try:
        return await auth.verify(app.app_id, request.email, request.otp, request.network, token)
    except WalletrixError as e:
        raise http_error(e)


@router.post("/resend-otp", response_model=ResendOTPResponse)
async def resend_otp(
    request: ResendOTPRequest,
    app: App = Depends(require_app),
    auth: EmailAuthService = Depends(get_auth_service),
) -> ResendOTPResponse:
    """Send a fresh OTP for an existing wallet."""
    try:
        return await auth.resend(app.app_id, request.email, request.network)
    except WalletrixError as e:
        raise http_error(e)
