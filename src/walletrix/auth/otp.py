"""One-time passcodes for email login."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from walletrix.errors import InvalidOTPError, OTPExpiredError


def generate_otp(length: int = 6) -> str:
    """Generate a numeric OTP with no leading zero."""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def otp_expiry(minutes: int, now: Optional[datetime] = None) -> datetime:
    """Expiry timestamp ``minutes`` from now (UTC)."""
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=minutes)


def is_expired(expiry: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Check an expiry timestamp. Naive timestamps are read as UTC."""
    if expiry is None:
        return True
    if expiry.tzinfo is None:
        # SQLite drops tzinfo on the way back
        expiry = expiry.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return now > expiry


def verify_otp(
    expected: Optional[str],
    submitted: str,
    expiry: Optional[datetime],
    now: Optional[datetime] = None,
) -> None:
    """Check a submitted OTP against the stored one.

    Raises:
        InvalidOTPError: If there is no pending OTP or it does not match
        OTPExpiredError: If the OTP matches but has expired
    """
    if not expected or not secrets.compare_digest(
        expected.encode("utf-8"), submitted.strip().encode("utf-8")
    ):
        raise InvalidOTPError("Invalid OTP")
    if is_expired(expiry, now):
        raise OTPExpiredError("OTP has expired")
