import pytest

from zkeychain.crypto.address import diversifier_from_index, diversifier_to_point
from zkeychain.crypto.jubjub import encode_scalar
from zkeychain.crypto.keys import derive_viewing_key
from zkeychain.exceptions import InvalidDiversifierError


def _usable_indices(limit=256):
    usable = []
    for index in range(limit):
        try:
            diversifier_to_point(diversifier_from_index(index))
        except InvalidDiversifierError:
            continue
        usable.append(index)
    return usable


@pytest.fixture(scope="session")
def usable_indices():
    indices = _usable_indices()
    assert indices, "no usable diversifier index in range"
    return indices


@pytest.fixture(scope="session")
def unusable_index():
    for index in range(256):
        try:
            diversifier_to_point(diversifier_from_index(index))
        except InvalidDiversifierError:
            return index
    pytest.fail("every diversifier index in range was usable")


@pytest.fixture
def spending_key():
    # ask = 3, nsk = 5, ovk = 0x07 * 32
    return encode_scalar(3) + encode_scalar(5) + b"\x07" * 32


@pytest.fixture
def viewing_key(spending_key):
    return derive_viewing_key(spending_key)
