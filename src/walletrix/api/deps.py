"""Request dependencies: services, database sessions and authentication."""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from walletrix.api.app import Services
from walletrix.api.errors import http_error
from walletrix.auth.tokens import decode_access_token
from walletrix.errors import InvalidAPIKeyError, InvalidTokenError, WalletrixError
from walletrix.ledger.database import get_db
from walletrix.ledger.models import App, Wallet
from walletrix.ledger.repository import WalletRepository


def get_services(request: Request) -> Services:
    """Services built by the app lifespan."""
    return request.app.state.services


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One database session per request, committed when the request succeeds."""
    async with get_db() as session:
        yield session


async def get_repository(session: AsyncSession = Depends(get_session)) -> WalletRepository:
    return WalletRepository(session)


async def require_app(
    x_api_key: Optional[str] = Header(None),
    repository: WalletRepository = Depends(get_repository),
) -> App:
    """Resolve the calling app from the X-API-Key header."""
    if not x_api_key:
        raise http_error(InvalidAPIKeyError("API key required"))

    app = await repository.get_app_by_api_key(x_api_key)
    if app is None:
        raise http_error(InvalidAPIKeyError("Invalid API key"))
    return app


def bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Extract a bearer token from the Authorization header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_wallet(
    app: App = Depends(require_app),
    token: Optional[str] = Depends(bearer_token),
    repository: WalletRepository = Depends(get_repository),
) -> Wallet:
    """Resolve the active wallet named by the bearer token."""
    if token is None:
        raise http_error(InvalidTokenError("Bearer token required"))

    try:
        payload = decode_access_token(token)
    except WalletrixError as e:
        raise http_error(e)

    wallet = await repository.find_by_address(payload["address"], payload["network"])
    if wallet is None or wallet.app_id != app.app_id or not wallet.is_active:
        raise http_error(InvalidTokenError("Wallet not found or inactive"))
    return wallet
