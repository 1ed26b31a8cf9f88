"""Repository for tenant and wallet records."""

import secrets
from datetime import datetime
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from walletrix.hdwallet import NetworkFamily, WalletInfo
from walletrix.ledger.models import App, Wallet


class WalletRepository:
    """Repository for app and wallet database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # App operations
    async def get_app_by_api_key(self, api_key: str) -> Optional[App]:
        """Get an active app by its API key."""
        stmt = select(App).where(App.api_key == api_key, App.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_app(self, name: str) -> App:
        """Register a new app with a fresh id and API key."""
        app = App(
            app_id=secrets.token_hex(8),
            name=name,
            api_key=secrets.token_urlsafe(32),
        )
        self.session.add(app)
        await self.session.flush()
        return app

    # Wallet lookups
    async def find_by_address(
        self,
        address: str,
        network: Optional[NetworkFamily] = None,
    ) -> Optional[Wallet]:
        """Find a wallet by address, optionally restricted to one network."""
        stmt = select(Wallet).where(Wallet.address == address)
        if network is not None:
            stmt = stmt.where(Wallet.network == NetworkFamily(network).value)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def find_by_email(
        self,
        app_id: str,
        email: str,
        network: NetworkFamily,
    ) -> Optional[Wallet]:
        """Find a wallet by app, email and network."""
        stmt = select(Wallet).where(
            Wallet.app_id == app_id,
            Wallet.email == email.lower(),
            Wallet.network == NetworkFamily(network).value,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_identifier(
        self,
        app_id: str,
        identifier: str,
        network: NetworkFamily,
    ) -> Optional[Wallet]:
        """Find a wallet by email or phone number."""
        stmt = select(Wallet).where(
            Wallet.app_id == app_id,
            Wallet.network == NetworkFamily(network).value,
            or_(Wallet.email == identifier.lower(), Wallet.phone_number == identifier),
        )
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    # Wallet writes
    async def create_wallet(
        self,
        app_id: str,
        wallet_info: WalletInfo,
        *,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        social_type: str = "email",
        user_data: Optional[str] = None,
        otp: Optional[str] = None,
        otp_expiry: Optional[datetime] = None,
    ) -> Wallet:
        """Store a freshly generated wallet, inactive until verified."""
        wallet = Wallet(
            app_id=app_id,
            email=email.lower() if email else None,
            phone_number=phone_number,
            social_type=social_type,
            network=wallet_info.network.value,
            address=wallet_info.address,
            public_key=wallet_info.public_key,
            encrypted_private_key=wallet_info.private_key,
            encryption_salt=secrets.token_hex(16),
            user_data=user_data,
            is_active=False,
            otp=otp,
            otp_expiry=otp_expiry,
        )
        self.session.add(wallet)
        await self.session.flush()
        return wallet

    async def set_otp(self, wallet: Wallet, otp: str, expiry: datetime) -> Wallet:
        """Replace the pending OTP for a wallet."""
        wallet.otp = otp
        wallet.otp_expiry = expiry
        await self.session.flush()
        return wallet

    async def activate(self, wallet: Wallet) -> Wallet:
        """Mark a wallet active and clear its OTP."""
        wallet.is_active = True
        wallet.otp = None
        wallet.otp_expiry = None
        await self.session.flush()
        return wallet
