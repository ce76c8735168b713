"""Secure randomness for zkeychain."""

import os
import secrets

from ..constants import JUBJUB_R
from ..diagnostics import error_line
from ..types.common import ScalarBytes
from ..utils.validation import validate_uint
from .jubjub import encode_scalar

__all__ = ["random_bytes", "random_scalar"]

# Bytes drawn for a scalar before reduction mod r, keeping the bias negligible
WIDE_SCALAR_LENGTH = 64


def random_bytes(length: int) -> bytes:
    """
    Draw bytes from the operating system's secure randomness source.

    If the source is unavailable the failure is reported to the host error
    line and the process aborts. Weak randomness is never returned.

    Args:
        length: Number of bytes

    Returns:
        ``length`` random bytes

    Raises:
        InvalidInputError: If length is negative or not an integer
    """
    validate_uint(length, 64, "length")
    try:
        return secrets.token_bytes(length)
    except (NotImplementedError, OSError) as e:
        error_line(f"Secure randomness source unavailable: {e}")
        os.abort()


def random_scalar() -> ScalarBytes:
    """
    Draw a uniformly random Jubjub scalar.

    Returns:
        Canonical 32-byte encoding of a value below r
    """
    wide = int.from_bytes(random_bytes(WIDE_SCALAR_LENGTH), "little")
    return encode_scalar(wide % JUBJUB_R)
