"""Email/OTP login flow.

A login either creates a wallet for a new email or refreshes the OTP of an
existing one. Verifying the OTP activates the wallet and issues a bearer token.
"""

import json
import logging
import re
from typing import Optional

from walletrix.auth.email import EmailSender
from walletrix.auth.otp import generate_otp, otp_expiry, verify_otp
from walletrix.auth.tokens import create_access_token, decode_access_token
from walletrix.config import Settings, get_settings
from walletrix.contracts.auth import (
    EmailLoginResponse,
    ResendOTPResponse,
    VerifyOTPResponse,
    WalletData,
)
from walletrix.errors import InvalidEmailError, InvalidTokenError, WalletNotFoundError
from walletrix.hdwallet import NetworkFamily
from walletrix.ledger.models import Wallet
from walletrix.ledger.repository import WalletRepository
from walletrix.services.wallet_service import WalletService

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    """Lower-case and validate an email address.

    Raises:
        InvalidEmailError: If the address is malformed
    """
    email = email.strip().lower()
    if not _EMAIL_RE.match(email):
        raise InvalidEmailError("Invalid email format")
    return email


def wallet_data(wallet: Wallet) -> WalletData:
    """Public view of a wallet record, without key material."""
    user_data = None
    if wallet.user_data:
        data = json.loads(wallet.user_data)
        data.pop("secret", None)
        user_data = json.dumps(data)

    return WalletData(
        wallet_address=wallet.address,
        social_type=wallet.social_type,
        user_data=user_data,
        network=NetworkFamily(wallet.network),
    )


class EmailAuthService:
    """Login, OTP verification and OTP resend for one request."""

    def __init__(
        self,
        repository: WalletRepository,
        wallet_service: WalletService,
        email_sender: EmailSender,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.wallet_service = wallet_service
        self.email_sender = email_sender
        self.settings = settings or get_settings()

    def _token_matches(self, token: Optional[str], wallet: Wallet) -> bool:
        if not token:
            return False
        try:
            payload = decode_access_token(token, self.settings)
        except InvalidTokenError:
            return False
        return payload["address"] == wallet.address and payload["network"] == wallet.network

    async def _send_otp(self, email: str, otp: str) -> None:
        await self.email_sender.send_otp(email, otp, self.settings.otp_expiry_minutes)

    async def _get_wallet(self, app_id: str, email: str, network: NetworkFamily) -> Wallet:
        wallet = await self.repository.find_by_email(app_id, email, network)
        if wallet is None:
            raise WalletNotFoundError("Wallet not found. Please login first.")
        return wallet

    async def login(
        self,
        app_id: str,
        email: str,
        network: NetworkFamily = NetworkFamily.EVM,
        token: Optional[str] = None,
    ) -> EmailLoginResponse:
        """Create or refresh a wallet for an email and send an OTP.

        Raises:
            InvalidEmailError: If the address is malformed
            WalletGenerationError: If a new wallet cannot be generated
            EmailDeliveryError: If the OTP email cannot be sent
        """
        email = normalize_email(email)
        wallet = await self.repository.find_by_email(app_id, email, network)

        if wallet is not None and wallet.is_active and self._token_matches(token, wallet):
            return EmailLoginResponse(
                message="Already logged in",
                is_active=True,
                wallet_exists=True,
                network=network,
            )

        otp = generate_otp(self.settings.otp_length)
        expiry = otp_expiry(self.settings.otp_expiry_minutes)

        if wallet is not None:
            await self.repository.set_otp(wallet, otp, expiry)
            await self._send_otp(email, otp)
            return EmailLoginResponse(
                message="OTP sent to your email",
                is_active=wallet.is_active,
                wallet_exists=True,
                network=network,
            )

        info = self.wallet_service.generate(network)
        user_data = {"email": email, "network": network.value}
        if info.secret is not None:
            user_data["secret"] = info.secret

        await self.repository.create_wallet(
            app_id,
            info,
            email=email,
            user_data=json.dumps(user_data),
            otp=otp,
            otp_expiry=expiry,
        )
        await self._send_otp(email, otp)
        logger.info(f"Created {network.value} wallet {info.address} for app {app_id}")

        return EmailLoginResponse(
            message="Wallet created. OTP sent to your email",
            is_active=False,
            wallet_exists=False,
            network=network,
        )

    async def verify(
        self,
        app_id: str,
        email: str,
        otp: str,
        network: NetworkFamily = NetworkFamily.EVM,
        token: Optional[str] = None,
    ) -> VerifyOTPResponse:
        """Verify an OTP, activate the wallet and issue a token.

        Raises:
            WalletNotFoundError: If no wallet exists for the email
            InvalidOTPError: If the OTP does not match
            OTPExpiredError: If the OTP has expired
        """
        email = normalize_email(email)
        wallet = await self._get_wallet(app_id, email, network)

        if wallet.is_active and self._token_matches(token, wallet):
            return VerifyOTPResponse(
                message="Already logged in",
                data=wallet_data(wallet),
                is_active=True,
                token=token,
            )

        verify_otp(wallet.otp, otp, wallet.otp_expiry)
        await self.repository.activate(wallet)

        return VerifyOTPResponse(
            message="OTP verified successfully",
            data=wallet_data(wallet),
            is_active=True,
            token=create_access_token(wallet.address, network, self.settings),
        )

    async def resend(
        self,
        app_id: str,
        email: str,
        network: NetworkFamily = NetworkFamily.EVM,
    ) -> ResendOTPResponse:
        """Issue and send a new OTP for an existing wallet."""
        email = normalize_email(email)
        wallet = await self._get_wallet(app_id, email, network)

        otp = generate_otp(self.settings.otp_length)
        await self.repository.set_otp(wallet, otp, otp_expiry(self.settings.otp_expiry_minutes))
        await self._send_otp(email, otp)

        return ResendOTPResponse(message="OTP resent successfully")
