"""Sui Ed25519 keypair — secret key decoding and transaction signing."""
from __future__ import annotations

import base64
import hashlib
import logging
import os

import bech32
from nacl.signing import SigningKey

logger = logging.getLogger(__name__)

SUI_PRIVATE_KEY_PREFIX = "suiprivkey"
ED25519_FLAG = 0x00
ED25519_SEED_LENGTH = 32

# IntentScope::TransactionData, IntentVersion::V0, AppId::Sui
_TRANSACTION_INTENT = bytes([0, 0, 0])

_SCHEME_NAMES = {0x00: "ED25519", 0x01: "Secp256k1", 0x02: "Secp256r1"}


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def decode_sui_private_key(value: str) -> bytes:
    """Decode a Bech32 ``suiprivkey1...`` string into the raw Ed25519 seed.

    Raises:
        ValueError: malformed string, wrong prefix, or a non-Ed25519 scheme.
    """
    decoded = bech32.bech32_decode(value)
    hrp, data = decoded[0], decoded[1]
    if hrp is None or data is None:
        raise ValueError("Invalid Bech32 private key")
    if hrp != SUI_PRIVATE_KEY_PREFIX:
        raise ValueError(f"Unexpected private key prefix '{hrp}'")

    payload = bech32.convertbits(data, 5, 8, False)
    if payload is None or len(payload) != ED25519_SEED_LENGTH + 1:
        raise ValueError("Invalid private key length")

    flag = payload[0]
    if flag != ED25519_FLAG:
        scheme = _SCHEME_NAMES.get(flag, f"0x{flag:02x}")
        raise ValueError(
            f"Unsupported key scheme {scheme}; only ED25519 keys are supported"
        )
    return bytes(payload[1:])


class SuiKeypair:
    """Ed25519 signing key with its derived Sui address."""

    def __init__(self, seed: bytes) -> None:
        if len(seed) != ED25519_SEED_LENGTH:
            raise ValueError(
                f"Ed25519 seed must be {ED25519_SEED_LENGTH} bytes, got {len(seed)}"
            )
        self._signing_key = SigningKey(seed)
        self._public_key = self._signing_key.verify_key.encode()
        self._address = "0x" + _blake2b_256(
            bytes([ED25519_FLAG]) + self._public_key
        ).hex()

    @classmethod
    def from_secret(cls, value: str) -> SuiKeypair:
        """Build a keypair from a ``suiprivkey1...`` string or a hex seed."""
        value = value.strip()
        if value.lower().startswith(SUI_PRIVATE_KEY_PREFIX):
            return cls(decode_sui_private_key(value))

        hex_value = value[2:] if value.lower().startswith("0x") else value
        try:
            seed = bytes.fromhex(hex_value)
        except ValueError:
            raise ValueError("Private key is neither Bech32 nor hex encoded") from None
        return cls(seed)

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @property
    def address(self) -> str:
        return self._address

    def sign_transaction(self, tx_bytes: str) -> str:
        """Sign base64 transaction bytes, returning a serialized Sui signature.

        The signature covers blake2b-256 of the intent-prefixed transaction
        and is encoded as base64(flag || signature || public key).
        """
        intent_message = _TRANSACTION_INTENT + base64.b64decode(tx_bytes)
        signature = self._signing_key.sign(_blake2b_256(intent_message)).signature
        serialized = bytes([ED25519_FLAG]) + signature + self._public_key
        return base64.b64encode(serialized).decode("ascii")

    def __repr__(self) -> str:
        return f"SuiKeypair(address={self._address})"


def load_keypair_from_env(env_var: str) -> SuiKeypair:
    """Load the signing key from an environment variable."""
    value = os.environ.get(env_var, "")
    if not value.strip():
        raise ValueError(f"Environment variable {env_var} is not set")

    keypair = SuiKeypair.from_secret(value)
    logger.info("Loaded signing key for address %s", keypair.address)
    return keypair
