"""Tests for tenant and wallet persistence."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from walletrix.hdwallet import NetworkFamily
from walletrix.services.wallet_service import WalletService


@pytest.fixture
def wallets() -> WalletService:
    return WalletService()


class TestApps:
    """Tests for app tenants."""

    @pytest.mark.asyncio
    async def test_create_and_lookup_by_api_key(self, wallet_repo):
        app = await wallet_repo.create_app("dapp")

        assert app.is_active is True
        assert len(app.app_id) == 16
        found = await wallet_repo.get_app_by_api_key(app.api_key)
        assert found.app_id == app.app_id

    @pytest.mark.asyncio
    async def test_unknown_or_inactive_key(self, wallet_repo):
        app = await wallet_repo.create_app("dapp")
        assert await wallet_repo.get_app_by_api_key("nope") is None

        app.is_active = False
        await wallet_repo.session.flush()
        assert await wallet_repo.get_app_by_api_key(app.api_key) is None


class TestWallets:
    """Tests for wallet records."""

    @pytest.mark.asyncio
    async def test_create_wallet_stores_key_material(self, wallet_repo, test_app_record, wallets):
        info = wallets.generate(NetworkFamily.STELLAR)
        wallet = await wallet_repo.create_wallet(
            test_app_record.app_id, info, email="User@Example.com"
        )

        assert wallet.email == "user@example.com"
        assert wallet.network == "stellar"
        assert wallet.encrypted_private_key == info.secret
        assert len(wallet.encryption_salt) == 32
        assert wallet.is_active is False

    @pytest.mark.asyncio
    async def test_find_by_email_and_address(self, wallet_repo, test_app_record, wallets):
        info = wallets.generate(NetworkFamily.EVM)
        await wallet_repo.create_wallet(test_app_record.app_id, info, email="a@b.io")

        by_email = await wallet_repo.find_by_email(test_app_record.app_id, "A@B.io", "evm")
        assert by_email.address == info.address

        assert (await wallet_repo.find_by_address(info.address)).email == "a@b.io"
        assert await wallet_repo.find_by_address(info.address, NetworkFamily.STELLAR) is None
        assert await wallet_repo.find_by_email(test_app_record.app_id, "a@b.io", "stellar") is None

    @pytest.mark.asyncio
    async def test_find_by_identifier_matches_phone(self, wallet_repo, test_app_record, wallets):
        info = wallets.generate(NetworkFamily.EVM)
        await wallet_repo.create_wallet(
            test_app_record.app_id, info, phone_number="+15550100", social_type="phone"
        )

        found = await wallet_repo.find_by_identifier(test_app_record.app_id, "+15550100", "evm")
        assert found.address == info.address

    @pytest.mark.asyncio
    async def test_email_unique_per_app_and_network(self, wallet_repo, test_app_record, wallets):
        await wallet_repo.create_wallet(
            test_app_record.app_id, wallets.generate("evm"), email="dup@b.io"
        )
        # Same email on another network is allowed
        await wallet_repo.create_wallet(
            test_app_record.app_id, wallets.generate("stellar"), email="dup@b.io"
        )

        with pytest.raises(IntegrityError):
            await wallet_repo.create_wallet(
                test_app_record.app_id, wallets.generate("evm"), email="dup@b.io"
            )

    @pytest.mark.asyncio
    async def test_otp_and_activation(self, wallet_repo, test_app_record, wallets):
        wallet = await wallet_repo.create_wallet(
            test_app_record.app_id, wallets.generate("evm"), email="otp@b.io"
        )
        expiry = datetime.now(timezone.utc) + timedelta(minutes=10)

        await wallet_repo.set_otp(wallet, "123456", expiry)
        assert wallet.otp == "123456"

        await wallet_repo.activate(wallet)
        assert wallet.is_active is True
        assert wallet.otp is None
        assert wallet.otp_expiry is None
