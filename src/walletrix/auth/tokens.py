"""Bearer tokens for activated wallets.

Tokens are HS256 JWTs carrying the wallet address and network family.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from walletrix.config import Settings, get_settings
from walletrix.errors import InvalidTokenError
from walletrix.hdwallet import NetworkFamily


def create_access_token(
    address: str,
    network: NetworkFamily,
    settings: Optional[Settings] = None,
) -> str:
    """Create a signed token for a wallet.

    Args:
        address: Wallet address
        network: Network family of the wallet
        settings: Settings override

    Returns:
        Encoded JWT string
    """
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expiration_hours)

    payload = {
        "address": address,
        "network": NetworkFamily(network).value,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> dict[str, str]:
    """Decode and validate a token.

    Returns:
        Dictionary with ``address`` and ``network``

    Raises:
        InvalidTokenError: If the token is expired, malformed or incomplete
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token has expired") from None
    except JWTError:
        raise InvalidTokenError("Invalid token") from None

    address = payload.get("address")
    network = payload.get("network")
    if not address or not network:
        raise InvalidTokenError("Invalid token payload")

    return {"address": address, "network": network}
