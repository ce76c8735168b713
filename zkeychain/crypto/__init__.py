"""Cryptographic primitives for zkeychain."""

from ..crypto.keys import generate_spending_key, derive_viewing_key, crh_ivk
from ..crypto.jubjub import JubjubPoint, decode_scalar, encode_scalar
from ..crypto.address import (
    diversifier_from_index,
    find_valid_diversifier,
    diversifier_to_point,
    derive_payment_address,
    derive_payment_address_parts,
    encode_payment_address,
    decode_payment_address,
    generate_transparent_address,
    decode_transparent_address,
)
from ..crypto.notes import compute_note_commitment, compute_nullifier
from ..crypto.signature import (
    sign_transparent,
    verify_transparent,
    transparent_public_key,
)
from ..crypto.randomness import random_bytes, random_scalar

__all__ = [
    # Keys
    "generate_spending_key",
    "derive_viewing_key",
    "crh_ivk",

    # Curve
    "JubjubPoint",
    "decode_scalar",
    "encode_scalar",

    # Addresses
    "diversifier_from_index",
    "find_valid_diversifier",
    "diversifier_to_point",
    "derive_payment_address",
    "derive_payment_address_parts",
    "encode_payment_address",
    "decode_payment_address",
    "generate_transparent_address",
    "decode_transparent_address",

    # Notes
    "compute_note_commitment",
    "compute_nullifier",

    # Signatures
    "sign_transparent",
    "verify_transparent",
    "transparent_public_key",

    # Randomness
    "random_bytes",
    "random_scalar",
]
