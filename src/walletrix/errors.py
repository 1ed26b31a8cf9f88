"""Exception hierarchy for wallet generation, balance queries and auth.

Every error carries a stable ``code`` string so the HTTP layer can report it
without inspecting message text.
"""

from typing import Optional


class WalletrixError(Exception):
    """Base class for all walletrix errors."""

    code = "WALLETRIX_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedChainError(WalletrixError):
    """Raised when a chain id is not in the registry."""

    code = "UNSUPPORTED_CHAIN"

    def __init__(self, chain_id: int):
        super().__init__(f"Chain with ID {chain_id} is not supported")
        self.chain_id = chain_id


class UnsupportedNetworkError(WalletrixError):
    """Raised for an unknown network family or Stellar network variant."""

    code = "UNSUPPORTED_NETWORK"

    def __init__(self, network: object):
        super().__init__(f"Unsupported network: {network}")
        self.network = network


class InvalidAddressFormatError(WalletrixError):
    """Raised when an address does not match its family's format."""

    code = "INVALID_ADDRESS"


class InvalidChainSelectorError(WalletrixError):
    """Raised when a comma-separated chain id selector cannot be parsed."""

    code = "INVALID_CHAIN_IDS"


class WalletGenerationError(WalletrixError):
    """Raised when generating, recovering or importing a wallet fails.

    The originating exception, if any, is chained as ``__cause__``.
    """

    code = "WALLET_GENERATION_FAILED"


class InconsistentDerivationError(WalletGenerationError):
    """Raised when mnemonic and private-key derivations disagree."""

    code = "INCONSISTENT_DERIVATION"


class InvalidCountError(WalletGenerationError):
    """Raised when a batch size is outside 1..100."""

    code = "INVALID_COUNT"


class BatchGenerationFailedError(WalletGenerationError):
    """Raised when one wallet of a batch fails to generate."""

    code = "BATCH_GENERATION_FAILED"

    def __init__(self, index: int, reason: str = ""):
        message = f"Failed to generate wallet {index}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.index = index


class BalanceFetchError(WalletrixError):
    """Raised when a single native balance query fails."""

    code = "BALANCE_FETCH_FAILED"

    def __init__(self, chain_id: int, address: str, reason: str):
        super().__init__(
            f"Failed to get balance for address {address} on chain {chain_id}: {reason}"
        )
        self.chain_id = chain_id
        self.address = address
        self.reason = reason


class FaucetFundingError(WalletrixError):
    """Raised when the Stellar testnet faucet does not fund an account."""

    code = "FAUCET_FUNDING_FAILED"

    def __init__(self, address: str, status_code: Optional[int] = None, reason: str = ""):
        detail = f"status {status_code}" if status_code is not None else reason
        super().__init__(f"Account funding failed for {address}: {detail}")
        self.address = address
        self.status_code = status_code


class AuthError(WalletrixError):
    """Base class for authentication failures."""

    code = "AUTH_ERROR"


class InvalidOTPError(AuthError):
    """Raised when a submitted OTP does not match."""

    code = "INVALID_OTP"


class OTPExpiredError(AuthError):
    """Raised when a submitted OTP is past its expiry."""

    code = "OTP_EXPIRED"


class InvalidTokenError(AuthError):
    """Raised when a bearer token is missing, malformed or expired."""

    code = "INVALID_TOKEN"


class EmailDeliveryError(WalletrixError):
    """Raised when an OTP email could not be sent."""

    code = "EMAIL_SEND_FAILED"


class InvalidAPIKeyError(AuthError):
    """Raised when the X-API-Key header is missing or unknown."""

    code = "INVALID_API_KEY"


class InvalidEmailError(WalletrixError):
    """Raised when an email address is malformed."""

    code = "INVALID_EMAIL"


class WalletNotFoundError(WalletrixError):
    """Raised when no wallet exists for the given identity."""

    code = "WALLET_NOT_FOUND"
