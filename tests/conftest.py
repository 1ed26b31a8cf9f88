"""Pytest configuration and fixtures."""

import json
import os
from typing import AsyncGenerator

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "true"
os.environ["EMAIL_BACKEND"] = "dryrun"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["FAUCET_SETTLE_DELAY"] = "0"
os.environ["STELLAR_MAINNET_HORIZON_URL"] = "https://horizon-mainnet.test"
os.environ["STELLAR_TESTNET_HORIZON_URL"] = "https://horizon-testnet.test"
os.environ["STELLAR_FUTURENET_HORIZON_URL"] = "https://horizon-futurenet.test"
os.environ["FRIENDBOT_URL"] = "https://friendbot.test/"

RPC_HOST = "rpc.test"
for _chain_id in (8453, 84532, 1, 11155111, 137, 56, 42161, 10, 43114):
    os.environ[f"RPC_URL_{_chain_id}"] = f"https://{RPC_HOST}/{_chain_id}"

from walletrix.ledger.models import Base
from walletrix.ledger.repository import WalletRepository

EVM_ADDRESS = "0x9858EfFD232B4033E47d90003D41EC34EcaEda94"
TEST_MNEMONIC = "abandon " * 11 + "about"


def rpc_chain_id(request: httpx.Request) -> int:
    """Chain id encoded in a test RPC URL path."""
    return int(request.url.path.strip("/"))


def rpc_result(request: httpx.Request, result) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


def horizon_account(balances: list[dict]) -> dict:
    return {"id": "G", "sequence": "1", "balances": balances}


def native_line(amount: str) -> dict:
    return {"balance": amount, "asset_type": "native"}


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def wallet_repo(db_session: AsyncSession) -> WalletRepository:
    """Create wallet repository for testing."""
    return WalletRepository(db_session)


@pytest_asyncio.fixture
async def test_app_record(wallet_repo: WalletRepository):
    """A registered app tenant."""
    return await wallet_repo.create_app("test-app")
