"""Walletrix - custodial multi-chain wallet backend for EVM and Stellar."""

__version__ = "0.1.0"
