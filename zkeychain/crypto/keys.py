"""Shielded key derivation for zkeychain."""

import logging

from ..constants import (
    KEY_COMPONENT_LENGTH,
    PERSONAL_IVK,
    SEED_LENGTH,
    SPENDING_KEY_LENGTH,
)
from ..types.common import (
    BytesLike,
    PointBytes,
    ScalarBytes,
    SpendingKeyBytes,
    ViewingKeyBytes,
)
from ..utils.encoding import blake2s_hash, prf_expand
from ..utils.validation import require_length, require_min_length
from .jubjub import GENERATOR, decode_scalar

__all__ = [
    "EXPAND_TAG_ASK",
    "EXPAND_TAG_NSK",
    "EXPAND_TAG_OVK",
    "generate_spending_key",
    "derive_viewing_key",
    "crh_ivk",
]

logger = logging.getLogger(__name__)

# SeedExpander lanes
EXPAND_TAG_ASK = 0x00
EXPAND_TAG_NSK = 0x01
EXPAND_TAG_OVK = 0x02


def generate_spending_key(seed: BytesLike) -> SpendingKeyBytes:
    """
    Derive an expanded spending key from a seed.

    Only the first 32 bytes of the seed are used; anything after is ignored.

    Args:
        seed: Secret seed, at least 32 bytes

    Returns:
        96-byte spending key ask || nsk || ovk

    Raises:
        InputTooShortError: If seed is shorter than 32 bytes
    """
    seed = require_min_length(seed, SEED_LENGTH, "seed")[:SEED_LENGTH]

    ask = prf_expand(seed, EXPAND_TAG_ASK)
    nsk = prf_expand(seed, EXPAND_TAG_NSK)
    ovk = prf_expand(seed, EXPAND_TAG_OVK)

    logger.debug("Derived spending key from seed")
    return SpendingKeyBytes(ask + nsk + ovk)


def crh_ivk(ak: bytes, nk: bytes) -> ScalarBytes:
    """
    Compress (ak, nk) into the incoming viewing key.

    BLAKE2s-256 personalized with ``Zcashivk`` over ``ak || nk``, then the
    top five bits of the last byte are cleared. This keeps the value below
    2^251 (and thus below r); it is not a reduction modulo r.

    Args:
        ak: 32-byte spend validating key
        nk: 32-byte nullifier deriving key

    Returns:
        32-byte ivk
    """
    ak = require_length(ak, 32, "ak")
    nk = require_length(nk, 32, "nk")
    ivk = bytearray(blake2s_hash(ak + nk, PERSONAL_IVK))
    ivk[31] &= 0x07
    return ScalarBytes(bytes(ivk))


def derive_viewing_key(spending_key: BytesLike) -> ViewingKeyBytes:
    """
    Derive a full viewing key from a spending key.

    Args:
        spending_key: Spending key, at least 96 bytes

    Returns:
        128-byte viewing key ak || nk || ivk || ovk

    Raises:
        InputTooShortError: If spending key is shorter than 96 bytes
        InvalidScalarError: If ask or nsk is not a canonical scalar
    """
    spending_key = require_min_length(spending_key, SPENDING_KEY_LENGTH, "spending_key")

    ask = spending_key[0:KEY_COMPONENT_LENGTH]
    nsk = spending_key[KEY_COMPONENT_LENGTH:2 * KEY_COMPONENT_LENGTH]
    ovk = spending_key[2 * KEY_COMPONENT_LENGTH:3 * KEY_COMPONENT_LENGTH]

    # ak = ask * G (spend validating key)
    ak = PointBytes((GENERATOR * decode_scalar(ask, "ask")).to_bytes())

    # nk = nsk * G (nullifier deriving key)
    nk = PointBytes((GENERATOR * decode_scalar(nsk, "nsk")).to_bytes())

    ivk = crh_ivk(ak, nk)

    logger.debug(f"Derived viewing key ak={ak.hex()[:16]}...")
    return ViewingKeyBytes(ak + nk + ivk + ovk)
