"""Common type definitions for zkeychain."""

from typing import NewType, Union

__all__ = [
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
]

# Basic types
BytesLike = Union[bytes, bytearray, memoryview, str]
"""Raw bytes, or a hex string to be decoded."""

# Key material
ScalarBytes = NewType("ScalarBytes", bytes)
"""32-byte little-endian Jubjub scalar."""

PointBytes = NewType("PointBytes", bytes)
"""32-byte compressed Jubjub point."""

SpendingKeyBytes = NewType("SpendingKeyBytes", bytes)
"""96 bytes: ask || nsk || ovk."""

ViewingKeyBytes = NewType("ViewingKeyBytes", bytes)
"""128 bytes: ak || nk || ivk || ovk."""

Diversifier = NewType("Diversifier", bytes)
"""11-byte address diversifier."""

# Note outputs
NoteCommitment = NewType("NoteCommitment", bytes)
"""32-byte note commitment."""

Nullifier = NewType("Nullifier", bytes)
"""32-byte nullifier."""

# Addresses
SaplingAddress = NewType("SaplingAddress", str)
"""Bech32 encoded shielded payment address."""

TransparentAddress = NewType("TransparentAddress", str)
"""Base58 encoded transparent address."""

CompactSignature = NewType("CompactSignature", bytes)
"""64-byte secp256k1 signature r || s."""
