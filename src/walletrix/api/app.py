"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import partial
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from walletrix import __version__
from walletrix.auth.email import EmailSender, get_email_sender
from walletrix.config import get_settings
from walletrix.ledger.database import close_db, init_db
from walletrix.services.aggregator import BalanceAggregator
from walletrix.services.evm_balance import EVMBalanceService
from walletrix.services.stellar_balance import StellarBalanceSession
from walletrix.services.wallet_service import WalletService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Long-lived services shared by all requests."""

    wallet_service: WalletService
    evm_balance: EVMBalanceService
    aggregator: BalanceAggregator
    email_sender: EmailSender

    async def aclose(self) -> None:
        await self.evm_balance.aclose()
        await self.email_sender.aclose()


def build_services(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    email_sender: Optional[EmailSender] = None,
) -> Services:
    """Build services from settings.

    Args:
        transport: Optional httpx transport for RPC and Horizon calls
        email_sender: Optional email backend override
    """
    settings = get_settings()
    evm_balance = EVMBalanceService(timeout=settings.rpc_timeout, transport=transport)
    stellar_factory = partial(StellarBalanceSession, settings=settings, transport=transport)

    return Services(
        wallet_service=WalletService(),
        evm_balance=evm_balance,
        aggregator=BalanceAggregator(evm_balance, stellar_factory),
        email_sender=email_sender or get_email_sender(settings),
    )


def create_app(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    email_sender: Optional[EmailSender] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        await init_db()
        app.state.services = build_services(transport, email_sender)
        logger.info(f"Email backend: {app.state.services.email_sender.name}")
        yield
        # Shutdown
        await app.state.services.aclose()
        await close_db()

    app = FastAPI(
        title="Walletrix API",
        description="Custodial multi-chain wallet backend",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from walletrix.api.routers import balance, email_auth, wallet
    from walletrix.api.routes import health

    app.include_router(health.router, tags=["Health"])
    app.include_router(balance.router, tags=["Balance"])
    app.include_router(email_auth.router, tags=["Email Auth"])
    app.include_router(wallet.router, tags=["Wallet"])

    return app
