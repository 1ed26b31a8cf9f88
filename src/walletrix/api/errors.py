"""Mapping of domain errors to HTTP errors."""

from fastapi import HTTPException

from walletrix.errors import (
    AuthError,
    BalanceFetchError,
    EmailDeliveryError,
    InvalidCountError,
    WalletGenerationError,
    WalletNotFoundError,
    WalletrixError,
)


def error_status(error: WalletrixError) -> int:
    """HTTP status code for a domain error."""
    if isinstance(error, AuthError):
        return 401
    if isinstance(error, WalletNotFoundError):
        return 404
    if isinstance(error, InvalidCountError):
        return 400
    if isinstance(error, (EmailDeliveryError, BalanceFetchError, WalletGenerationError)):
        return 500
    return 400


def http_error(error: WalletrixError) -> HTTPException:
    """Build an HTTPException with a ``{"code", "message"}`` detail."""
    code = "BALANCE_ERROR" if isinstance(error, BalanceFetchError) else error.code
    return HTTPException(
        status_code=error_status(error),
        detail={"code": code, "message": error.message},
    )
