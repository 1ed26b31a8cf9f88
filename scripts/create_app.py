#!/usr/bin/env python3
"""Register an app tenant and print its API key."""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from walletrix.ledger.database import close_db, get_db, init_db
from walletrix.ledger.repository import WalletRepository


async def create_app(name: str):
    await init_db()
    try:
        async with get_db() as session:
            app = await WalletRepository(session).create_app(name)
            print(f"Created app '{app.name}'")
            print(f"App ID:  {app.app_id}")
            print(f"API key: {app.api_key}")
    finally:
        await close_db()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python create_app.py <name>")
        print("Example: python create_app.py my-dapp")
        sys.exit(1)

    asyncio.run(create_app(sys.argv[1]))
