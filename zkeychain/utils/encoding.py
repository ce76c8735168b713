"""Hashing and encoding utilities for zkeychain."""

import hashlib
from typing import List, Sequence, Tuple, Union

from ..constants import PERSONAL_EXPAND_SEED
from ..exceptions import EncodingError, ValidationError
from ..types.common import BytesLike
from .validation import to_payload

__all__ = [
    "blake2b_hash",
    "blake2s_hash",
    "prf_expand",
    "sha256",
    "hash160",
    "le64",
    "encode_base58",
    "decode_base58",
    "encode_bech32",
    "decode_bech32",
]

# Constants
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_CONST = 1
BECH32_MAX_LENGTH = 90

BLAKE2B_PERSON_SIZE = hashlib.blake2b.PERSON_SIZE
BLAKE2S_PERSON_SIZE = hashlib.blake2s.PERSON_SIZE


def _personal(personalization: BytesLike, size: int) -> bytes:
    """Zero-pad or truncate a personalization string to ``size`` bytes."""
    if isinstance(personalization, str):
        personalization = personalization.encode("ascii")
    return bytes(personalization[:size]).ljust(size, b"\x00")


def blake2b_hash(
    data: BytesLike,
    personalization: Union[bytes, str] = b"",
    digest_size: int = 32
) -> bytes:
    """
    Domain-separated BLAKE2b hash.

    Args:
        data: Data to hash; text is hashed as UTF-8
        personalization: Up to 16 bytes; shorter is zero-padded, longer truncated
        digest_size: Output length in bytes

    Returns:
        BLAKE2b digest
    """
    return hashlib.blake2b(
        to_payload(data),
        digest_size=digest_size,
        person=_personal(personalization, BLAKE2B_PERSON_SIZE),
    ).digest()


def blake2s_hash(data: BytesLike, personalization: Union[bytes, str] = b"") -> bytes:
    """Domain-separated BLAKE2s-256 hash with an 8-byte personalization."""
    return hashlib.blake2s(
        to_payload(data),
        digest_size=32,
        person=_personal(personalization, BLAKE2S_PERSON_SIZE),
    ).digest()


def prf_expand(key: bytes, tag: Union[int, bytes]) -> bytes:
    """
    Expand key material into one domain-separated 32-byte lane.

    Computes BLAKE2b-512 personalized with ``Zcash_ExpandSeed`` over
    ``key || tag`` and keeps the first 32 bytes.

    Args:
        key: 32-byte key
        tag: Lane tag as an int (0-255) or bytes

    Returns:
        32 bytes of derived key material
    """
    if isinstance(tag, int):
        tag = bytes([tag])
    return blake2b_hash(key + tag, PERSONAL_EXPAND_SEED, digest_size=64)[:32]


def sha256(data: bytes) -> bytes:
    """Perform single SHA256 hash."""
    return hashlib.sha256(data).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    return hashlib.new("ripemd160", sha256(data)).digest()


def le64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer little-endian."""
    return value.to_bytes(8, "little")


def encode_base58(data: bytes) -> str:
    """
    Encode bytes as Base58 string.

    Args:
        data: Bytes to encode

    Returns:
        Base58 encoded string
    """
    n = int.from_bytes(data, "big")

    encoded = ""
    while n:
        n, remainder = divmod(n, 58)
        encoded = BASE58_ALPHABET[remainder] + encoded

    # Add leading zeros
    for byte in data:
        if byte == 0:
            encoded = "1" + encoded
        else:
            break

    return encoded


def decode_base58(string: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Args:
        string: Base58 string

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If string contains invalid characters
    """
    n = 0
    for char in string:
        try:
            n = n * 58 + BASE58_ALPHABET.index(char)
        except ValueError:
            raise ValidationError(f"Invalid Base58 character: {char}")

    body = n.to_bytes((n.bit_length() + 7) // 8, "big")

    # Add leading zeros
    leading_zeros = len(string) - len(string.lstrip("1"))
    return b"\x00" * leading_zeros + body


def _bech32_polymod(values: List[int]) -> int:
    """Compute Bech32 checksum polymod."""
    generator = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def _bech32_hrp_expand(hrp: str) -> List[int]:
    """Expand human-readable part for Bech32."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _check_hrp(hrp: str) -> str:
    if not hrp:
        raise EncodingError("Invalid Bech32 HRP: empty")
    if any(ord(c) < 33 or ord(c) > 126 for c in hrp):
        raise EncodingError(f"Invalid Bech32 HRP character in {hrp!r}")
    if hrp.lower() != hrp and hrp.upper() != hrp:
        raise EncodingError(f"Invalid Bech32 HRP: mixed case in {hrp!r}")
    return hrp.lower()


def encode_bech32(hrp: str, data: Sequence[int]) -> str:
    """
    Encode 5-bit symbols as a Bech32 string.

    The symbols are taken as given; no 8-to-5 bit regrouping happens here.

    Args:
        hrp: Human-readable part
        data: Sequence of values in range 0-31

    Returns:
        Bech32 encoded string

    Raises:
        EncodingError: If the HRP, a symbol, or the total length is invalid
    """
    hrp = _check_hrp(hrp)
    values = list(data)
    for v in values:
        if not 0 <= v < 32:
            raise EncodingError(f"Invalid Bech32 symbol: {v}")

    length = len(hrp) + 1 + len(values) + 6
    if length > BECH32_MAX_LENGTH:
        raise EncodingError(
            f"Bech32 string too long: {length} > {BECH32_MAX_LENGTH}"
        )

    polymod = _bech32_polymod(_bech32_hrp_expand(hrp) + values + [0, 0, 0, 0, 0, 0]) ^ BECH32_CONST
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]

    return hrp + "1" + "".join(BECH32_CHARSET[v] for v in values + checksum)


def decode_bech32(string: str) -> Tuple[str, List[int]]:
    """
    Decode Bech32 string.

    Args:
        string: Bech32 string

    Returns:
        Tuple of (hrp, 5-bit data symbols without checksum)

    Raises:
        EncodingError: If the string is malformed or the checksum is invalid
    """
    if string.lower() != string and string.upper() != string:
        raise EncodingError("Invalid Bech32 string: mixed case")
    if len(string) > BECH32_MAX_LENGTH:
        raise EncodingError(f"Bech32 string too long: {len(string)}")
    string = string.lower()

    pos = string.rfind("1")
    if pos < 1 or pos + 7 > len(string):
        raise EncodingError("Invalid Bech32 string: bad separator position")

    hrp = _check_hrp(string[:pos])

    values = []
    for char in string[pos + 1:]:
        try:
            values.append(BECH32_CHARSET.index(char))
        except ValueError:
            raise EncodingError(f"Invalid Bech32 character: {char}")

    if _bech32_polymod(_bech32_hrp_expand(hrp) + values) != BECH32_CONST:
        raise EncodingError("Invalid Bech32 checksum")

    return hrp, values[:-6]
