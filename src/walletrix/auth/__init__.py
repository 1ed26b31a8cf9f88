"""Email/OTP authentication and bearer tokens."""

from walletrix.auth.email import (
    DryRunEmailSender,
    EmailSender,
    HttpEmailSender,
    get_email_sender,
)
from walletrix.auth.service import EmailAuthService
from walletrix.auth.tokens import create_access_token, decode_access_token

__all__ = [
    "DryRunEmailSender",
    "EmailAuthService",
    "EmailSender",
    "HttpEmailSender",
    "create_access_token",
    "decode_access_token",
    "get_email_sender",
]
