"""
zkeychain

Hierarchical key chain for a shielded-and-transparent wallet: spending and
viewing keys from a seed, diversified payment addresses, note commitments
and nullifiers, transparent addresses and signatures.
"""

from typing import Union

from .constants import Network
from .diagnostics import initialize
from .exceptions import (
    KeychainError,
    ValidationError,
    InputTooShortError,
    InvalidInputError,
    CryptoError,
    InvalidScalarError,
    InvalidPointError,
    InvalidDiversifierError,
    InvalidKeyError,
    EncodingError,
)
from .crypto import (
    generate_spending_key,
    derive_viewing_key,
    derive_payment_address,
    generate_transparent_address,
    compute_note_commitment,
    compute_nullifier,
    sign_transparent,
    verify_transparent,
    random_bytes,
    random_scalar,
)
from .keychain import KeyChain
from .types import SpendingKey, ViewingKey, PaymentAddress, Note
from .types.common import BytesLike, SaplingAddress
from .utils.encoding import blake2b_hash

__version__ = "0.1.0"

__all__ = [
    # Operations
    "generate_spending_key",
    "derive_viewing_key",
    "derive_payment_address",
    "generate_sapling_address",
    "generate_transparent_address",
    "compute_note_commitment",
    "compute_nullifier",
    "sign_transparent",
    "verify_transparent",
    "hash_data",
    "blake2b_hash",
    "random_bytes",
    "random_scalar",

    # Facade and types
    "KeyChain",
    "SpendingKey",
    "ViewingKey",
    "PaymentAddress",
    "Note",
    "Network",

    # Exceptions
    "KeychainError",
    "ValidationError",
    "InputTooShortError",
    "InvalidInputError",
    "CryptoError",
    "InvalidScalarError",
    "InvalidPointError",
    "InvalidDiversifierError",
    "InvalidKeyError",
    "EncodingError",
]


def hash_data(data: Union[bytes, str], personalization: bytes = b"") -> bytes:
    """
    General-purpose domain-separated hash.

    BLAKE2b-256 with the personalization zero-padded or truncated to 16 bytes.
    Text input is hashed as its UTF-8 encoding.
    """
    return blake2b_hash(data, personalization)


def generate_sapling_address(
    spending_key: BytesLike,
    network: Network = Network.MAINNET
) -> SaplingAddress:
    """Derive the viewing key for ``spending_key`` and return its index-0 address."""
    return derive_payment_address(derive_viewing_key(spending_key), 0, network)


initialize()
