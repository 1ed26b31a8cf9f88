"""Tests for OTPs, bearer tokens, email delivery and the login flow."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from walletrix.auth.email import DryRunEmailSender, HttpEmailSender, get_email_sender
from walletrix.auth.otp import generate_otp, is_expired, otp_expiry, verify_otp
from walletrix.auth.service import EmailAuthService, normalize_email
from walletrix.auth.tokens import create_access_token, decode_access_token
from walletrix.config import Settings, get_settings
from walletrix.errors import (
    EmailDeliveryError,
    InvalidEmailError,
    InvalidOTPError,
    InvalidTokenError,
    OTPExpiredError,
    WalletNotFoundError,
)
from walletrix.hdwallet import NetworkFamily
from walletrix.services.wallet_service import WalletService


class TestOTP:
    """Tests for one-time passcodes."""

    def test_generate_six_digits(self):
        for _ in range(50):
            otp = generate_otp(6)
            assert len(otp) == 6
            assert otp.isdigit()
            assert otp[0] != "0"

    def test_expiry_window(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        expiry = otp_expiry(10, now)

        assert expiry == now + timedelta(minutes=10)
        assert is_expired(expiry, now + timedelta(minutes=9)) is False
        assert is_expired(expiry, now + timedelta(minutes=11)) is True

    def test_naive_expiry_read_as_utc(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert is_expired(datetime(2024, 1, 1, 0, 5), now) is False

    def test_verify(self):
        future = datetime.now(timezone.utc) + timedelta(minutes=5)
        past = datetime.now(timezone.utc) - timedelta(minutes=5)

        verify_otp("123456", "123456", future)
        with pytest.raises(InvalidOTPError):
            verify_otp("123456", "654321", future)
        with pytest.raises(InvalidOTPError):
            verify_otp(None, "123456", future)
        with pytest.raises(InvalidOTPError):
            verify_otp("123456", "12345\u00e9", future)
        with pytest.raises(OTPExpiredError):
            verify_otp("123456", "123456", past)


class TestTokens:
    """Tests for bearer tokens."""

    def test_round_trip(self):
        token = create_access_token("0xabc", NetworkFamily.EVM)
        assert decode_access_token(token) == {"address": "0xabc", "network": "evm"}

    def test_wrong_secret(self):
        other = Settings(jwt_secret_key="other")
        token = create_access_token("0xabc", NetworkFamily.EVM, other)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_expired(self):
        expired = Settings(jwt_secret_key=get_settings().jwt_secret_key, jwt_expiration_hours=-1)
        token = create_access_token("0xabc", NetworkFamily.EVM, expired)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not-a-token")


class TestEmailSenders:
    """Tests for email backends."""

    def test_default_backend_is_dry_run(self):
        assert get_email_sender().name == "dryrun"

    def test_http_backend_without_url_falls_back(self):
        settings = Settings(email_backend="http", email_api_url="")
        assert isinstance(get_email_sender(settings), DryRunEmailSender)

    @pytest.mark.asyncio
    async def test_http_sender_posts_message(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202, json={"id": "msg-1"})

        sender = HttpEmailSender(
            "https://mail.test/send", "key-1", "no-reply@test", transport=httpx.MockTransport(handler)
        )
        await sender.send_otp("user@test.io", "123456", 10)
        await sender.aclose()

        body = json.loads(requests[0].content)
        assert body["to"] == "user@test.io"
        assert "123456" in body["text"]
        assert requests[0].headers["Authorization"] == "Bearer key-1"

    @pytest.mark.asyncio
    async def test_http_sender_failure(self):
        sender = HttpEmailSender(
            "https://mail.test/send",
            "key-1",
            "no-reply@test",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(EmailDeliveryError):
            await sender.send_otp("user@test.io", "123456", 10)
        await sender.aclose()


class FailingEmailSender(DryRunEmailSender):
    async def send_otp(self, email, otp, expiry_minutes):
        raise EmailDeliveryError("Failed to send OTP email")


@pytest_asyncio.fixture
async def auth(wallet_repo):
    return EmailAuthService(wallet_repo, WalletService(), DryRunEmailSender())


class TestEmailAuthFlow:
    """Tests for login, verify and resend."""

    def test_normalize_email(self):
        assert normalize_email("  User@Example.COM ") == "user@example.com"
        with pytest.raises(InvalidEmailError):
            normalize_email("not-an-email")

    @pytest.mark.asyncio
    async def test_login_creates_inactive_wallet(self, auth, test_app_record):
        response = await auth.login(test_app_record.app_id, "New@User.io", NetworkFamily.EVM)

        assert response.wallet_exists is False
        assert response.is_active is False

        wallet = await auth.repository.find_by_email(test_app_record.app_id, "new@user.io", "evm")
        assert wallet.is_active is False
        assert auth.email_sender.sent == [("new@user.io", wallet.otp)]
        assert json.loads(wallet.user_data) == {"email": "new@user.io", "network": "evm"}

    @pytest.mark.asyncio
    async def test_stellar_login_keeps_secret_in_user_data(self, auth, test_app_record):
        await auth.login(test_app_record.app_id, "xlm@user.io", NetworkFamily.STELLAR)

        wallet = await auth.repository.find_by_email(
            test_app_record.app_id, "xlm@user.io", "stellar"
        )
        assert json.loads(wallet.user_data)["secret"] == wallet.encrypted_private_key

    @pytest.mark.asyncio
    async def test_full_flow(self, auth, test_app_record):
        app_id = test_app_record.app_id
        await auth.login(app_id, "flow@user.io", NetworkFamily.STELLAR)
        _, otp = auth.email_sender.sent[-1]

        verified = await auth.verify(app_id, "flow@user.io", otp, NetworkFamily.STELLAR)

        assert verified.is_active is True
        assert decode_access_token(verified.token)["address"] == verified.data.wallet_address
        # Key material is never echoed back
        assert "secret" not in json.loads(verified.data.user_data)

        again = await auth.login(app_id, "flow@user.io", NetworkFamily.STELLAR, verified.token)
        assert again.message == "Already logged in"

        relogin = await auth.login(app_id, "flow@user.io", NetworkFamily.STELLAR)
        assert relogin.wallet_exists is True
        assert relogin.is_active is True

    @pytest.mark.asyncio
    async def test_verify_wrong_otp(self, auth, test_app_record):
        await auth.login(test_app_record.app_id, "wrong@user.io")
        _, otp = auth.email_sender.sent[-1]
        bad = "1" * 6 if otp != "1" * 6 else "2" * 6

        with pytest.raises(InvalidOTPError):
            await auth.verify(test_app_record.app_id, "wrong@user.io", bad)

    @pytest.mark.asyncio
    async def test_verify_expired_otp(self, auth, test_app_record):
        app_id = test_app_record.app_id
        await auth.login(app_id, "late@user.io")
        wallet = await auth.repository.find_by_email(app_id, "late@user.io", "evm")
        await auth.repository.set_otp(
            wallet, "123456", datetime.now(timezone.utc) - timedelta(minutes=1)
        )

        with pytest.raises(OTPExpiredError):
            await auth.verify(app_id, "late@user.io", "123456")

    @pytest.mark.asyncio
    async def test_verify_and_resend_unknown_wallet(self, auth, test_app_record):
        with pytest.raises(WalletNotFoundError):
            await auth.verify(test_app_record.app_id, "ghost@user.io", "123456")
        with pytest.raises(WalletNotFoundError):
            await auth.resend(test_app_record.app_id, "ghost@user.io")

    @pytest.mark.asyncio
    async def test_resend_replaces_otp(self, auth, test_app_record):
        app_id = test_app_record.app_id
        await auth.login(app_id, "again@user.io")
        await auth.resend(app_id, "again@user.io")

        wallet = await auth.repository.find_by_email(app_id, "again@user.io", "evm")
        assert len(auth.email_sender.sent) == 2
        assert auth.email_sender.sent[-1][1] == wallet.otp

    @pytest.mark.asyncio
    async def test_email_failure_propagates(self, wallet_repo, test_app_record):
        auth = EmailAuthService(wallet_repo, WalletService(), FailingEmailSender())

        with pytest.raises(EmailDeliveryError):
            await auth.login(test_app_record.app_id, "mail@user.io")
