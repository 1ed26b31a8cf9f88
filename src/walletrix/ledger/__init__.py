"""Ledger module for tenants and wallet records."""

from walletrix.ledger.database import close_db, get_db, init_db
from walletrix.ledger.models import App, Base, Wallet
from walletrix.ledger.repository import WalletRepository

__all__ = [
    # Models
    "App",
    "Base",
    "Wallet",
    # Database
    "close_db",
    "get_db",
    "init_db",
    "WalletRepository",
]
