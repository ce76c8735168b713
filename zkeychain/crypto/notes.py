"""Note commitments and nullifiers for zkeychain."""

from ..constants import (
    DIVERSIFIER_LENGTH,
    PERSONAL_NOTE_COMMITMENT,
    PERSONAL_NULLIFIER,
)
from ..types.common import BytesLike, NoteCommitment, Nullifier
from ..utils.encoding import blake2b_hash, blake2s_hash, le64
from ..utils.validation import require_length, validate_uint

__all__ = ["compute_note_commitment", "compute_nullifier"]


def compute_note_commitment(
    diversifier: BytesLike,
    pk_d: BytesLike,
    value: int,
    rcm: BytesLike
) -> NoteCommitment:
    """
    Commit to a note's contents.

    BLAKE2s-256 personalized with ``Zcash_PH`` over the 83 bytes
    ``diversifier || pk_d || LE64(value) || rcm``. This is a hash
    commitment; it has none of the homomorphic structure of a Pedersen
    commitment.

    Args:
        diversifier: 11-byte diversifier
        pk_d: 32-byte diversified transmission key
        value: Note value (u64)
        rcm: 32-byte commitment randomness

    Returns:
        32-byte note commitment

    Raises:
        InvalidInputError: If a field has the wrong length or value is out of range
    """
    diversifier = require_length(diversifier, DIVERSIFIER_LENGTH, "diversifier")
    pk_d = require_length(pk_d, 32, "pk_d")
    rcm = require_length(rcm, 32, "rcm")
    validate_uint(value, 64, "value")

    data = diversifier + pk_d + le64(value) + rcm
    return NoteCommitment(blake2s_hash(data, PERSONAL_NOTE_COMMITMENT))


def compute_nullifier(commitment: BytesLike, nk: BytesLike, position: int) -> Nullifier:
    """
    Derive the nullifier of a note.

    BLAKE2b-256 personalized with ``Zcash_nf`` over
    ``nk || commitment || LE64(position)``.

    Args:
        commitment: 32-byte note commitment
        nk: 32-byte nullifier deriving key
        position: Note position in the commitment tree (u64)

    Returns:
        32-byte nullifier

    Raises:
        InvalidInputError: If a field has the wrong length or position is out of range
    """
    commitment = require_length(commitment, 32, "commitment")
    nk = require_length(nk, 32, "nk")
    validate_uint(position, 64, "position")

    return Nullifier(blake2b_hash(nk + commitment + le64(position), PERSONAL_NULLIFIER))
