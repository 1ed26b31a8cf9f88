"""EVM wallet provider using BIP39/BIP44.

Derivation path: m/44'/60'/0'/0/0
Address format: 0x... (checksum encoded)

Works for every chain in the registry; all EVM chains share coin type 60.
"""

import logging
import re
from typing import Optional

from bip_utils import (
    Bip39MnemonicGenerator,
    Bip39MnemonicValidator,
    Bip39SeedGenerator,
    Bip39WordsNum,
    Bip44,
    Bip44Changes,
    Bip44Coins,
    Secp256k1PrivateKey,
)
from eth_account import Account

from walletrix.errors import InconsistentDerivationError
from walletrix.hdwallet.base import NetworkFamily, WalletInfo, WalletProvider

logger = logging.getLogger(__name__)

# 128 bits of entropy
MNEMONIC_WORDS = Bip39WordsNum.WORDS_NUM_12

DERIVATION_PATH = "m/44'/60'/0'/0/0"

_PRIVATE_KEY_RE = re.compile(r"[0-9a-fA-F]{64}")


def _to_hex(raw: bytes) -> str:
    return "0x" + raw.hex()


class EVMWallet(WalletProvider):
    """EVM wallet provider.

    Example:
        wallet = EVMWallet().generate()
        # WalletInfo(address="0x...", mnemonic="word word ...", ...)
    """

    address_pattern = re.compile(r"^0x[a-fA-F0-9]{40}$")

    @property
    def network(self) -> NetworkFamily:
        return NetworkFamily.EVM

    def generate(self, mnemonic: Optional[str] = None) -> WalletInfo:
        """Generate a wallet, creating a 12-word mnemonic if none is given.

        The account address is derived twice, once through the HD path and
        once from the raw private key, and the two must agree.
        """
        phrase = mnemonic or self.new_mnemonic()
        wallet = self._derive(phrase)
        self._check_consistency(wallet)
        return wallet

    def recover(self, mnemonic: str) -> WalletInfo:
        """Recover the first account of a BIP39 mnemonic."""
        return self._derive(mnemonic)

    def import_secret(self, secret: str) -> WalletInfo:
        """Import a raw 32-byte hex private key (with or without 0x)."""
        key_hex = secret.strip()
        if key_hex.lower().startswith("0x"):
            key_hex = key_hex[2:]
        if not _PRIVATE_KEY_RE.fullmatch(key_hex):
            raise ValueError("Private key must be 32 bytes of hex")

        key_bytes = bytes.fromhex(key_hex)
        public_key = Secp256k1PrivateKey.FromBytes(key_bytes).PublicKey()
        account = Account.from_key(key_bytes)

        return WalletInfo(
            address=account.address,
            public_key=_to_hex(public_key.RawUncompressed().ToBytes()),
            private_key=_to_hex(key_bytes),
            network=self.network,
        )

    def validate_mnemonic(self, mnemonic: str) -> bool:
        return Bip39MnemonicValidator().IsValid(mnemonic)

    @staticmethod
    def new_mnemonic() -> str:
        """Create a fresh English BIP39 mnemonic from 128 bits of entropy."""
        return Bip39MnemonicGenerator().FromWordsNumber(MNEMONIC_WORDS).ToStr()

    def _derive(self, mnemonic: str) -> WalletInfo:
        """Derive the account at m/44'/60'/0'/0/0."""
        phrase = " ".join(mnemonic.split())
        seed = Bip39SeedGenerator(phrase).Generate()
        addr_ctx = (
            Bip44.FromSeed(seed, Bip44Coins.ETHEREUM)
            .Purpose()
            .Coin()
            .Account(0)
            .Change(Bip44Changes.CHAIN_EXT)
            .AddressIndex(0)
        )

        return WalletInfo(
            address=addr_ctx.PublicKey().ToAddress(),
            public_key=_to_hex(addr_ctx.PublicKey().RawUncompressed().ToBytes()),
            private_key=_to_hex(addr_ctx.PrivateKey().Raw().ToBytes()),
            network=self.network,
            mnemonic=phrase,
        )

    @staticmethod
    def _check_consistency(wallet: WalletInfo) -> None:
        """Re-derive the address from the private key and compare."""
        key_address = Account.from_key(wallet.private_key).address
        if key_address.lower() != wallet.address.lower():
            logger.error(
                "Address mismatch: HD path gave %s, private key gave %s",
                wallet.address,
                key_address,
            )
            raise InconsistentDerivationError(
                "Address mismatch between mnemonic and private key derivation"
            )
