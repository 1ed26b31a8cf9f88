"""Stellar (XLM) wallet provider.

Address format: strkey base32 with 'G' prefix (public key)
Secret format:  strkey base32 with 'S' prefix (Ed25519 seed)

Mnemonic mode is NOT SEP-0005: the Ed25519 seed is the SHA-256 digest of the
mnemonic text. Wallets created this way cannot be recovered by standard Stellar
HD tooling, and existing secrets depend on it, so it must stay as is.
"""

import hashlib
import re
import secrets
from typing import Optional

from bip_utils import (
    Base32Decoder,
    Base32Encoder,
    Ed25519PrivateKey,
    XlmAddrEncoder,
    XlmAddrTypes,
)
from bip_utils.utils.crypto import XModemCrc

from walletrix.hdwallet.base import NetworkFamily, WalletInfo, WalletProvider

SEED_LENGTH = 32
STRKEY_LENGTH = 56


def _checksum(payload: bytes) -> bytes:
    # CRC16-XModem, little endian
    return XModemCrc.QuickDigest(payload)[::-1]


def encode_secret_seed(seed: bytes) -> str:
    """Encode a raw 32-byte Ed25519 seed as an S... strkey."""
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"Stellar seed must be {SEED_LENGTH} bytes")
    payload = bytes([XlmAddrTypes.PRIV_KEY]) + seed
    return Base32Encoder.EncodeNoPadding(payload + _checksum(payload))


def decode_secret_seed(secret: str) -> bytes:
    """Decode an S... strkey into the raw 32-byte seed.

    Raises:
        ValueError: If the prefix, length, version byte or checksum is wrong
    """
    secret = secret.strip()
    if len(secret) != STRKEY_LENGTH or not secret.startswith("S"):
        raise ValueError("Invalid Stellar secret seed")

    raw = Base32Decoder.Decode(secret)
    payload, checksum = raw[:-2], raw[-2:]
    if payload[0] != XlmAddrTypes.PRIV_KEY:
        raise ValueError("Invalid Stellar secret seed version byte")
    if _checksum(payload) != checksum:
        raise ValueError("Invalid Stellar secret seed checksum")
    return payload[1:]


def public_address(seed: bytes) -> str:
    """Get the G... account address for a raw seed."""
    pub_key = Ed25519PrivateKey.FromBytes(seed).PublicKey()
    return XlmAddrEncoder.EncodeKey(pub_key, addr_type=XlmAddrTypes.PUB_KEY)


def seed_from_mnemonic(mnemonic: str) -> bytes:
    """Non-standard mnemonic derivation: SHA-256 of the phrase, 32 bytes."""
    return hashlib.sha256(mnemonic.encode("utf-8")).digest()[:SEED_LENGTH]


class StellarWallet(WalletProvider):
    """Stellar wallet provider.

    Example:
        wallet = StellarWallet().generate()
        # WalletInfo(address="G...", private_key="S...", ...)
    """

    address_pattern = re.compile(r"^G[A-Z0-9]{55}$")

    @property
    def network(self) -> NetworkFamily:
        return NetworkFamily.STELLAR

    def generate(self, mnemonic: Optional[str] = None) -> WalletInfo:
        """Generate a random keypair, or a hashed-mnemonic keypair if given."""
        if mnemonic:
            return self._from_seed(seed_from_mnemonic(mnemonic), mnemonic)
        return self._from_seed(secrets.token_bytes(SEED_LENGTH), "")

    def recover(self, mnemonic: str) -> WalletInfo:
        if not self.validate_mnemonic(mnemonic):
            raise ValueError("Mnemonic must not be empty")
        return self._from_seed(seed_from_mnemonic(mnemonic), mnemonic)

    def import_secret(self, secret: str) -> WalletInfo:
        """Import an existing S... secret seed."""
        return self._from_seed(decode_secret_seed(secret), None)

    def validate_mnemonic(self, mnemonic: str) -> bool:
        # Any phrase hashes to a valid seed
        return isinstance(mnemonic, str) and bool(mnemonic.strip())

    def _from_seed(self, seed: bytes, mnemonic: Optional[str]) -> WalletInfo:
        address = public_address(seed)
        return WalletInfo(
            address=address,
            public_key=address,
            private_key=encode_secret_seed(seed),
            network=self.network,
            mnemonic=mnemonic,
        )
