import pytest

from zkeychain import KeyChain, Network, Note
from zkeychain.crypto.address import derive_payment_address
from zkeychain.crypto.keys import derive_viewing_key, generate_spending_key
from zkeychain.crypto.notes import compute_nullifier
from zkeychain.exceptions import InputTooShortError, InvalidInputError, InvalidScalarError
from zkeychain.types import SpendingKey


def test_keychain_addresses(spending_key, usable_indices, unusable_index):
    chain = KeyChain(SpendingKey(spending_key))
    assert chain.viewing_key.data == derive_viewing_key(spending_key)

    index = usable_indices[0]
    assert chain.address(index).encoded == derive_payment_address(chain.viewing_key.data, index)

    found = dict(chain.addresses(0, 256))
    assert sorted(found) == usable_indices
    assert unusable_index not in found

    first_index, first = chain.first_address()
    assert first_index == usable_indices[0]
    assert first == chain.address(first_index)


def test_keychain_testnet(spending_key, usable_indices):
    chain = KeyChain(SpendingKey(spending_key), Network.TESTNET)
    assert chain.address(usable_indices[0]).encoded.startswith("ztestsapling1")


def test_keychain_nullifier(spending_key, usable_indices):
    chain = KeyChain(SpendingKey(spending_key))
    address = chain.address(usable_indices[0])
    note = Note.for_address(address, 10_000, b"\x09" * 32)
    expected = compute_nullifier(note.commitment(), chain.viewing_key.nk, 42)
    assert chain.nullifier(note, 42) == expected
    assert chain.nullifier(note, 43) != expected


def test_keychain_from_seed():
    with pytest.raises(InputTooShortError):
        KeyChain.from_seed(bytes(31))
    with pytest.raises(InvalidScalarError):
        KeyChain.from_seed(bytes(range(32)))

    seed = b"\x01" * 32
    chain = KeyChain.from_seed(seed)
    assert chain.spending_key.data == generate_spending_key(seed)
    index, address = chain.first_address()
    assert index == 7
    assert address.encoded == "zs18qqqqqqqqqquenkvtt7epv97p3u6p3cs9mds4r3zjfr454keq"


def test_keychain_accepts_raw_key_bytes(spending_key):
    chain = KeyChain(spending_key)
    assert chain.spending_key == SpendingKey(spending_key)
    assert chain.viewing_key == KeyChain(SpendingKey(spending_key)).viewing_key
    assert KeyChain(spending_key.hex()).spending_key.data == spending_key
    with pytest.raises(InvalidInputError):
        KeyChain(spending_key[:95])


def test_keychain_rejects_unknown_network(spending_key):
    with pytest.raises(InvalidInputError):
        KeyChain(spending_key, "regtest")
    assert KeyChain(spending_key, "testnet").network is Network.TESTNET
