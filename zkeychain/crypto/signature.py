"""Transparent (secp256k1) signing for zkeychain."""

import logging
from typing import Optional, Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..exceptions import CryptoError, InvalidKeyError, ValidationError
from ..types.common import BytesLike, CompactSignature
from ..utils.encoding import sha256
from ..utils.validation import require_length, to_payload, validate_private_key, validate_public_key

__all__ = [
    "message_digest",
    "sign_transparent",
    "verify_transparent",
    "transparent_public_key",
    "compact_to_der",
    "encode_der_signature",
]

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 32


def message_digest(message: BytesLike) -> bytes:
    """
    Return the 32-byte digest that gets signed for ``message``.

    Text messages are encoded as UTF-8 first, never parsed as hex.
    A message of exactly 32 bytes is taken to be a digest already and is
    returned unchanged. Anything else is hashed with SHA256. A 32-byte
    plaintext is therefore never hashed; callers signing arbitrary data of
    that length must hash it themselves.
    """
    message = to_payload(message, "message")
    if len(message) == DIGEST_LENGTH:
        return message
    return sha256(message)


def _load_private_key(private_key: Union[str, bytes]) -> SecpPrivateKey:
    secret = validate_private_key(private_key)
    try:
        return SecpPrivateKey(secret)
    except ValueError as e:
        raise InvalidKeyError(f"Invalid private key: {e}") from e


def sign_transparent(message: BytesLike, private_key: Union[str, bytes]) -> CompactSignature:
    """
    Sign a message with a secp256k1 private key.

    Signing is deterministic (RFC 6979) and produces low-S signatures.

    Args:
        message: 32-byte digest, or arbitrary data to be SHA256 hashed
        private_key: 32-byte secret key

    Returns:
        64-byte compact signature r || s

    Raises:
        InvalidKeyError: If the private key is malformed or out of range
        CryptoError: If signing fails
    """
    key = _load_private_key(private_key)
    digest = message_digest(message)

    try:
        recoverable = key.sign_recoverable(digest, hasher=None)
    except Exception as e:
        logger.error(f"Transparent signing failed: {e}")
        raise CryptoError(f"Signing failed: {e}") from e

    # Drop the trailing recovery id
    return CompactSignature(recoverable[:64])


def transparent_public_key(private_key: Union[str, bytes], compressed: bool = True) -> bytes:
    """
    Get the serialized public key for a secp256k1 private key.

    Args:
        private_key: 32-byte secret key
        compressed: Return 33-byte compressed form, else 65-byte

    Returns:
        Serialized public key

    Raises:
        InvalidKeyError: If the private key is malformed or out of range
    """
    return _load_private_key(private_key).public_key.format(compressed=compressed)


def verify_transparent(
    message: BytesLike,
    signature: BytesLike,
    public_key: Union[str, bytes]
) -> bool:
    """
    Verify a compact signature produced by :func:`sign_transparent`.

    The message is digested with the same rule used for signing.

    Args:
        message: Signed message or digest
        signature: 64-byte compact signature
        public_key: Serialized secp256k1 public key

    Returns:
        True if signature is valid
    """
    try:
        signature = require_length(signature, 64, "signature")
        key = SecpPublicKey(validate_public_key(public_key))
    except (ValidationError, ValueError):
        return False

    try:
        return key.verify(compact_to_der(signature), message_digest(message), hasher=None)
    except Exception:
        return False


def compact_to_der(signature: bytes) -> bytes:
    """Convert a 64-byte compact signature to DER."""
    signature = require_length(signature, 64, "signature")
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    if r == 0 or s == 0:
        raise CryptoError("Invalid compact signature: zero component")
    return encode_der_signature(r, s)


def encode_der_signature(r: int, s: int, sighash_type: Optional[int] = None) -> bytes:
    """
    Encode signature as DER.

    Args:
        r: Signature r value
        s: Signature s value
        sighash_type: Optional sighash type to append

    Returns:
        DER-encoded signature
    """
    def _encode_int(value: int) -> bytes:
        value_bytes = value.to_bytes((value.bit_length() + 7) // 8, "big")
        if value_bytes[0] & 0x80:
            value_bytes = b"\x00" + value_bytes
        return b"\x02" + bytes([len(value_bytes)]) + value_bytes

    sequence = _encode_int(r) + _encode_int(s)
    result = b"\x30" + bytes([len(sequence)]) + sequence

    if sighash_type is not None:
        result += bytes([sighash_type])

    return result
