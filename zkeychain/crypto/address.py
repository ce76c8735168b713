"""Shielded and transparent address derivation for zkeychain."""

import logging
from typing import List, Tuple

from ..constants import (
    DIVERSIFIER_LENGTH,
    PERSONAL_DIVERSIFIER,
    RAW_ADDRESS_LENGTH,
    SAPLING_HRP,
    TRANSPARENT_P2PKH_PREFIX,
    VIEWING_KEY_LENGTH,
    Network,
)
from ..exceptions import EncodingError, InvalidInputError, InvalidPointError, InvalidDiversifierError
from ..types.common import (
    BytesLike,
    Diversifier,
    PointBytes,
    SaplingAddress,
    TransparentAddress,
)
from ..types.keys import PaymentAddress
from ..utils.encoding import (
    blake2s_hash,
    decode_base58,
    decode_bech32,
    encode_base58,
    encode_bech32,
    hash160,
)
from ..utils.validation import require_length, require_min_length, to_bytes, validate_network, validate_uint
from .jubjub import JubjubPoint, decode_scalar

__all__ = [
    "diversifier_from_index",
    "find_valid_diversifier",
    "diversifier_to_point",
    "derive_payment_address",
    "derive_payment_address_parts",
    "encode_payment_address",
    "decode_payment_address",
    "generate_transparent_address",
    "decode_transparent_address",
]

logger = logging.getLogger(__name__)


def diversifier_from_index(index: int) -> Diversifier:
    """
    Build the diversifier for an address index.

    Args:
        index: Address index (u32)

    Returns:
        11 bytes: little-endian index followed by seven zero bytes

    Raises:
        InvalidInputError: If index does not fit in 32 bits
    """
    validate_uint(index, 32, "index")
    return Diversifier(index.to_bytes(4, "little") + bytes(DIVERSIFIER_LENGTH - 4))


def find_valid_diversifier(diversifier: BytesLike) -> Diversifier:
    """
    Return the diversifier to use for an address.

    This is a pass-through: no search for the next diversifier that maps to
    a valid point is performed. A diversifier that does not map to a point
    fails later in :func:`diversifier_to_point`.
    """
    return Diversifier(require_length(diversifier, DIVERSIFIER_LENGTH, "diversifier"))


def diversifier_to_point(diversifier: BytesLike) -> JubjubPoint:
    """
    Map a diversifier to a point of the prime-order subgroup.

    The BLAKE2s-256 hash (personalization ``Zcash_gd``) of the diversifier is
    read directly as a compressed point encoding.

    Args:
        diversifier: 11-byte diversifier

    Returns:
        Diversified base point g_d

    Raises:
        InvalidDiversifierError: If the hash is not a valid subgroup point
    """
    diversifier = require_length(diversifier, DIVERSIFIER_LENGTH, "diversifier")
    digest = blake2s_hash(diversifier, PERSONAL_DIVERSIFIER)
    try:
        return JubjubPoint.from_bytes(digest, subgroup=True)
    except InvalidPointError as e:
        logger.debug(f"Diversifier {diversifier.hex()} rejected: {e}")
        raise InvalidDiversifierError(diversifier) from e


def encode_payment_address(raw: BytesLike, network: Network = Network.MAINNET) -> SaplingAddress:
    """
    Encode a raw 43-byte payment address as Bech32.

    Every byte is reduced modulo 32 to form one 5-bit symbol; the top three
    bits of each byte are dropped, so the raw address cannot be recovered
    from the string.

    Args:
        raw: diversifier || pk_d
        network: Target network

    Returns:
        Bech32 string under the network's Sapling HRP

    Raises:
        InvalidInputError: If network is unknown
        EncodingError: If the encoder rejects the input
    """
    raw = to_bytes(raw, "raw_address")
    symbols = [byte % 32 for byte in raw]
    return SaplingAddress(encode_bech32(SAPLING_HRP[validate_network(network)], symbols))


def decode_payment_address(address: str) -> Tuple[str, List[int]]:
    """
    Decode a payment address string into its HRP and 5-bit symbols.

    The symbols are the raw address bytes modulo 32, not the bytes themselves.

    Args:
        address: Bech32 payment address

    Returns:
        Tuple of (hrp, symbols)

    Raises:
        EncodingError: If the string is not valid Bech32 or has an unknown HRP
    """
    hrp, symbols = decode_bech32(address)
    if hrp not in SAPLING_HRP.values():
        raise EncodingError(f"Unknown payment address HRP: {hrp}")
    if len(symbols) != RAW_ADDRESS_LENGTH:
        raise EncodingError(f"Invalid payment address length: {len(symbols)} symbols")
    return hrp, symbols


def derive_payment_address_parts(
    viewing_key: BytesLike,
    index: int,
    network: Network = Network.MAINNET
) -> PaymentAddress:
    """
    Derive the diversified payment address for an index.

    Args:
        viewing_key: Viewing key, at least 128 bytes
        index: Diversifier index (u32)
        network: Target network

    Returns:
        PaymentAddress with diversifier, pk_d and encoded string

    Raises:
        InputTooShortError: If viewing key is shorter than 128 bytes
        InvalidDiversifierError: If the index's diversifier has no point
        InvalidScalarError: If ivk is not a canonical scalar
        EncodingError: If address encoding fails
    """
    viewing_key = require_min_length(viewing_key, VIEWING_KEY_LENGTH, "viewing_key")
    network = validate_network(network)
    ivk = viewing_key[64:96]

    diversifier = find_valid_diversifier(diversifier_from_index(index))

    # pk_d = g_d * ivk (diversified transmission key)
    g_d = diversifier_to_point(diversifier)
    pk_d = PointBytes((g_d * decode_scalar(ivk, "ivk")).to_bytes())

    encoded = encode_payment_address(diversifier + pk_d, network)
    logger.debug(f"Derived payment address for index {index}: {encoded}")
    return PaymentAddress(diversifier, pk_d, encoded)


def derive_payment_address(
    viewing_key: BytesLike,
    index: int,
    network: Network = Network.MAINNET
) -> SaplingAddress:
    """
    Derive the encoded payment address string for an index.

    See :func:`derive_payment_address_parts` for arguments and errors.
    """
    return SaplingAddress(derive_payment_address_parts(viewing_key, index, network).encoded)


def generate_transparent_address(
    public_key: BytesLike,
    network: Network = Network.MAINNET
) -> TransparentAddress:
    """
    Derive a transparent P2PKH address from a public key.

    The payload is the two-byte version prefix followed by
    RIPEMD160(SHA256(public_key)), Base58 encoded without a checksum.

    Args:
        public_key: Serialized public key
        network: Target network

    Returns:
        Transparent address string

    Raises:
        InvalidInputError: If network is unknown
    """
    public_key = to_bytes(public_key, "public_key")
    payload = TRANSPARENT_P2PKH_PREFIX[validate_network(network)] + hash160(public_key)
    return TransparentAddress(encode_base58(payload))


def decode_transparent_address(address: str) -> Tuple[Network, bytes]:
    """
    Decode a transparent address produced by :func:`generate_transparent_address`.

    Args:
        address: Base58 address string

    Returns:
        Tuple of (network, 20-byte public key hash)

    Raises:
        ValidationError: If the string is not Base58
        InvalidInputError: If length or version prefix is unknown
    """
    data = decode_base58(address)
    if len(data) != 22:
        raise InvalidInputError(
            f"Transparent address payload must be 22 bytes, got {len(data)}",
            field="address",
            expected=22,
            actual=len(data),
        )
    prefix, key_hash = data[:2], data[2:]
    for network, expected in TRANSPARENT_P2PKH_PREFIX.items():
        if prefix == expected:
            return network, key_hash
    raise InvalidInputError(f"Unknown address version: {prefix.hex()}", field="address")
