"""Type definitions for zkeychain."""

from .common import (
    BytesLike,
    ScalarBytes,
    PointBytes,
    SpendingKeyBytes,
    ViewingKeyBytes,
    Diversifier,
    NoteCommitment,
    Nullifier,
    SaplingAddress,
    TransparentAddress,
    CompactSignature,
)
from .keys import SpendingKey, ViewingKey, PaymentAddress, Note

__all__ = [
    # Common
    "BytesLike",
    "ScalarBytes",
    "PointBytes",
    "SpendingKeyBytes",
    "ViewingKeyBytes",
    "Diversifier",
    "NoteCommitment",
    "Nullifier",
    "SaplingAddress",
    "TransparentAddress",
    "CompactSignature",

    # Value objects
    "SpendingKey",
    "ViewingKey",
    "PaymentAddress",
    "Note",
]
