import hashlib
import random

import pytest

from zkeychain.crypto.notes import compute_note_commitment, compute_nullifier
from zkeychain.exceptions import InvalidInputError
from zkeychain.types import Note

DIVERSIFIER = bytes(range(11))
PK_D = b"\x22" * 32
RCM = b"\x33" * 32


def _hamming(a, b):
    return sum(bin(x ^ y).count("1") for x, y in zip(a, b))


def test_note_commitment_matches_hash():
    value = 123456789
    data = DIVERSIFIER + PK_D + value.to_bytes(8, "little") + RCM
    assert len(data) == 83
    expected = hashlib.blake2s(data, digest_size=32, person=b"Zcash_PH").digest()
    assert compute_note_commitment(DIVERSIFIER, PK_D, value, RCM) == expected


def test_note_commitment_value_range():
    assert len(compute_note_commitment(DIVERSIFIER, PK_D, 0, RCM)) == 32
    assert len(compute_note_commitment(DIVERSIFIER, PK_D, 2**64 - 1, RCM)) == 32
    with pytest.raises(InvalidInputError):
        compute_note_commitment(DIVERSIFIER, PK_D, 2**64, RCM)
    with pytest.raises(InvalidInputError):
        compute_note_commitment(DIVERSIFIER, PK_D, -1, RCM)


@pytest.mark.parametrize("field,args", [
    ("diversifier", (bytes(10), PK_D, 1, RCM)),
    ("diversifier", (bytes(12), PK_D, 1, RCM)),
    ("pk_d", (DIVERSIFIER, bytes(31), 1, RCM)),
    ("rcm", (DIVERSIFIER, PK_D, 1, bytes(33))),
])
def test_note_commitment_rejects_bad_lengths(field, args):
    with pytest.raises(InvalidInputError) as excinfo:
        compute_note_commitment(*args)
    assert excinfo.value.field == field


def test_note_commitment_avalanche():
    rng = random.Random(0x5eed)
    distances = []
    for _ in range(128):
        diversifier = bytes(rng.getrandbits(8) for _ in range(11))
        pk_d = bytes(rng.getrandbits(8) for _ in range(32))
        value = rng.getrandbits(64)
        rcm = bytes(rng.getrandbits(8) for _ in range(32))
        base = compute_note_commitment(diversifier, pk_d, value, rcm)

        data = bytearray(diversifier + pk_d + value.to_bytes(8, "little") + rcm)
        bit = rng.randrange(len(data) * 8)
        data[bit // 8] ^= 1 << (bit % 8)
        flipped = compute_note_commitment(
            bytes(data[:11]),
            bytes(data[11:43]),
            int.from_bytes(data[43:51], "little"),
            bytes(data[51:]),
        )
        assert flipped != base
        distances.append(_hamming(base, flipped))

    mean = sum(distances) / len(distances)
    assert 118 < mean < 138


def test_nullifier_matches_hash():
    commitment = b"\x44" * 32
    nk = b"\x55" * 32
    position = 2**40 + 7
    expected = hashlib.blake2b(
        nk + commitment + position.to_bytes(8, "little"),
        digest_size=32,
        person=b"Zcash_nf",
    ).digest()
    assert compute_nullifier(commitment, nk, position) == expected


def test_nullifier_depends_on_every_input():
    commitment, nk = b"\x44" * 32, b"\x55" * 32
    base = compute_nullifier(commitment, nk, 0)
    assert compute_nullifier(commitment, nk, 1) != base
    assert compute_nullifier(b"\x45" + commitment[1:], nk, 0) != base
    assert compute_nullifier(commitment, b"\x56" + nk[1:], 0) != base
    assert compute_nullifier(commitment, nk, 0) == base


def test_nullifier_rejects_bad_input():
    with pytest.raises(InvalidInputError):
        compute_nullifier(bytes(31), bytes(32), 0)
    with pytest.raises(InvalidInputError):
        compute_nullifier(bytes(32), bytes(33), 0)
    with pytest.raises(InvalidInputError):
        compute_nullifier(bytes(32), bytes(32), 2**64)


def test_note_value_object():
    note = Note(DIVERSIFIER, PK_D, 5000, RCM)
    assert note.commitment() == compute_note_commitment(DIVERSIFIER, PK_D, 5000, RCM)
    with pytest.raises(InvalidInputError):
        Note(DIVERSIFIER, PK_D, -5, RCM)
    with pytest.raises(InvalidInputError):
        Note(bytes(3), PK_D, 5, RCM)
