"""SQLAlchemy models for tenants and custodial wallets."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class App(Base):
    """Application tenant that owns wallets and authenticates by API key."""

    __tablename__ = "apps"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    app_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    api_key: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<App {self.app_id} {self.name}>"


class Wallet(Base):
    """Custodial wallet belonging to one end user of an app."""

    __tablename__ = "wallets"
    __table_args__ = (
        Index("ix_wallets_app_address_network", "app_id", "address", "network", unique=True),
        Index("ix_wallets_app_email_network", "app_id", "email", "network", unique=True),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    app_id: Mapped[str] = mapped_column(ForeignKey("apps.app_id"), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    subname: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    social_type: Mapped[str] = mapped_column(String(20), default="email", nullable=False)
    network: Mapped[str] = mapped_column(String(20), nullable=False)  # evm, stellar
    address: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    public_key: Mapped[str] = mapped_column(String(256), nullable=False)
    # Stored as generated; the salt is reserved for at-rest encryption
    encrypted_private_key: Mapped[str] = mapped_column(Text, nullable=False)
    encryption_salt: Mapped[str] = mapped_column(String(64), nullable=False)
    user_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # JSON
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    otp: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    otp_expiry: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Wallet {self.network}:{self.address}>"
