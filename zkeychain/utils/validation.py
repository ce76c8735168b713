"""Validation utilities for zkeychain."""

import re
from typing import Union

from ..constants import SECP256K1_N, Network
from ..exceptions import (
    InputTooShortError,
    InvalidInputError,
    InvalidKeyError,
    ValidationError,
)
from ..types.common import BytesLike

__all__ = [
    "to_bytes",
    "to_payload",
    "require_min_length",
    "require_length",
    "validate_uint",
    "validate_network",
    "validate_private_key",
    "validate_public_key",
]

# Regex patterns
HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def to_bytes(data: BytesLike, field: str = "data") -> bytes:
    """
    Normalize bytes-like or hex string input to bytes.

    Args:
        data: Bytes, bytearray, memoryview or hex string (with or without 0x)
        field: Field name used in error messages

    Returns:
        Input as immutable bytes

    Raises:
        ValidationError: If a string is not valid hex or the type is unsupported
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        if data.startswith("0x"):
            data = data[2:]
        if not HEX_PATTERN.match(data) or len(data) % 2:
            raise ValidationError(f"{field} must be hexadecimal", field=field)
        return bytes.fromhex(data)
    raise ValidationError(
        f"{field} must be bytes or hex string, got {type(data).__name__}",
        field=field,
    )


def to_payload(data: Union[bytes, bytearray, memoryview, str], field: str = "data") -> bytes:
    """
    Normalize message or hash input to bytes.

    Unlike :func:`to_bytes`, strings are text, not hex: they are encoded as
    UTF-8.

    Raises:
        InvalidInputError: If the type is unsupported
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise InvalidInputError(
        f"{field} must be bytes or text, got {type(data).__name__}",
        field=field,
    )


def require_min_length(data: BytesLike, length: int, field: str) -> bytes:
    """
    Validate that input holds at least ``length`` bytes.

    Raises:
        InputTooShortError: If input is shorter than ``length``
    """
    data = to_bytes(data, field)
    if len(data) < length:
        raise InputTooShortError(field, length, len(data))
    return data


def require_length(data: BytesLike, length: int, field: str) -> bytes:
    """
    Validate that input is exactly ``length`` bytes.

    Raises:
        InvalidInputError: If input length differs from ``length``
    """
    data = to_bytes(data, field)
    if len(data) != length:
        raise InvalidInputError(
            f"{field} must be {length} bytes, got {len(data)}",
            field=field,
            expected=length,
            actual=len(data),
        )
    return data


def validate_uint(value: int, bits: int, field: str) -> int:
    """
    Validate an unsigned integer of the given bit width.

    Raises:
        InvalidInputError: If value is not an int or out of range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{field} must be an integer", field=field)
    if not 0 <= value < (1 << bits):
        raise InvalidInputError(f"{field} must fit in u{bits}, got {value}", field=field)
    return value


def validate_network(network: Union[Network, str]) -> Network:
    """
    Validate a network selector.

    Raises:
        InvalidInputError: If network is not a known Network value
    """
    try:
        return Network(network)
    except ValueError as e:
        raise InvalidInputError(f"Unknown network: {network!r}", field="network") from e


def validate_private_key(key: Union[str, bytes]) -> bytes:
    """
    Validate secp256k1 private key and return as bytes.

    Args:
        key: Private key as hex string or bytes

    Returns:
        Private key as 32 bytes

    Raises:
        InvalidKeyError: If private key is invalid
    """
    try:
        key = to_bytes(key, "private_key")
    except ValidationError as e:
        raise InvalidKeyError(f"Invalid private key: {e}") from e

    if len(key) != 32:
        raise InvalidKeyError(f"Private key must be 32 bytes, got {len(key)}")

    key_int = int.from_bytes(key, "big")
    if key_int == 0:
        raise InvalidKeyError("Private key cannot be zero")
    if key_int >= SECP256K1_N:
        raise InvalidKeyError("Private key exceeds curve order")

    return key


def validate_public_key(key: Union[str, bytes]) -> bytes:
    """
    Validate secp256k1 public key and return as bytes.

    Args:
        key: Public key as hex string or bytes

    Returns:
        Public key bytes (33 or 65 bytes)

    Raises:
        ValidationError: If public key is invalid
    """
    key = to_bytes(key, "public_key")

    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise ValidationError("Compressed public key must start with 0x02 or 0x03")
    elif len(key) == 65:
        if key[0] != 0x04:
            raise ValidationError("Uncompressed public key must start with 0x04")
    else:
        raise ValidationError(f"Public key must be 33 or 65 bytes, got {len(key)}")

    return key
