import hashlib

import pytest

from zkeychain.constants import Network
from zkeychain.crypto.address import (
    decode_payment_address,
    decode_transparent_address,
    derive_payment_address,
    derive_payment_address_parts,
    diversifier_from_index,
    diversifier_to_point,
    encode_payment_address,
    find_valid_diversifier,
    generate_transparent_address,
)
from zkeychain.crypto.jubjub import JubjubPoint, decode_scalar
from zkeychain.utils.encoding import decode_base58, hash160
from zkeychain.exceptions import (
    EncodingError,
    InputTooShortError,
    InvalidDiversifierError,
    InvalidInputError,
    InvalidPointError,
)

G_PUBKEY = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")

# Indices below 256 whose diversifier hashes to a subgroup point
USABLE_INDICES = [7, 35, 57, 101, 112, 114, 125, 127, 138, 159, 172, 195, 220, 231, 236, 238, 246]

# pk_d and address at index 7 for the ask = 3, nsk = 5 fixture key
FIXTURE_PK_D = "b3341b635efed671fe722d481b425a86b1353cec0b2ed8e7a62c995e588fb65b"
FIXTURE_ADDRESS = "zs18qqqqqqqqqqn5mr77k37jdgmz6x34uvtwc8xve7c0km5e82nt"
FIXTURE_TESTNET_ADDRESS = "ztestsapling18qqqqqqqqqqn5mr77k37jdgmz6x34uvtwc8xve7c0km8ycnz3"


def test_diversifier_from_index():
    assert diversifier_from_index(0) == bytes(11)
    assert diversifier_from_index(1) == b"\x01" + bytes(10)
    assert diversifier_from_index(0x01020304) == b"\x04\x03\x02\x01" + bytes(7)
    assert diversifier_from_index(2**32 - 1) == b"\xff" * 4 + bytes(7)
    with pytest.raises(InvalidInputError):
        diversifier_from_index(2**32)
    with pytest.raises(InvalidInputError):
        diversifier_from_index(-1)


def test_find_valid_diversifier_is_pass_through():
    for index in range(8):
        d = diversifier_from_index(index)
        assert find_valid_diversifier(d) == d
    with pytest.raises(InvalidInputError):
        find_valid_diversifier(bytes(10))


def test_usable_diversifier_indices(usable_indices, unusable_index):
    assert usable_indices == USABLE_INDICES
    assert unusable_index == 0


def test_diversifier_to_point_matches_hash(usable_indices, unusable_index):
    d = diversifier_from_index(usable_indices[0])
    digest = hashlib.blake2s(d, digest_size=32, person=b"Zcash_gd").digest()
    g_d = diversifier_to_point(d)
    assert g_d.to_bytes() == digest
    assert g_d.is_torsion_free()

    bad = diversifier_from_index(unusable_index)
    with pytest.raises(InvalidDiversifierError) as excinfo:
        diversifier_to_point(bad)
    assert isinstance(excinfo.value, InvalidPointError)
    assert excinfo.value.diversifier == bad


def test_payment_address(viewing_key, usable_indices):
    index = usable_indices[0]
    address = derive_payment_address(viewing_key, index)
    assert address.startswith("zs1")
    assert len(address) == 2 + 1 + 43 + 6

    d = diversifier_from_index(index)
    pk_d = (diversifier_to_point(d) * decode_scalar(viewing_key[64:96])).to_bytes()
    hrp, symbols = decode_payment_address(address)
    assert hrp == "zs"
    assert symbols == [byte % 32 for byte in d + pk_d]

    parts = derive_payment_address_parts(viewing_key, index)
    assert parts.encoded == address
    assert parts.diversifier == d
    assert parts.pk_d == pk_d
    assert parts.raw == d + pk_d
    assert JubjubPoint.from_bytes(parts.pk_d).is_torsion_free()


def test_payment_address_known_answer(viewing_key):
    parts = derive_payment_address_parts(viewing_key, 7)
    assert parts.diversifier == b"\x07" + bytes(10)
    assert parts.pk_d.hex() == FIXTURE_PK_D
    assert parts.encoded == FIXTURE_ADDRESS
    assert derive_payment_address(viewing_key, 7, Network.TESTNET) == FIXTURE_TESTNET_ADDRESS


def test_payment_address_is_deterministic(viewing_key, usable_indices):
    first = [derive_payment_address(viewing_key, i) for i in usable_indices[:2]]
    second = [derive_payment_address(viewing_key, i) for i in usable_indices[:2]]
    assert first == second
    if len(first) == 2:
        assert first[0] != first[1]


def test_payment_address_testnet(viewing_key, usable_indices):
    address = derive_payment_address(viewing_key, usable_indices[0], Network.TESTNET)
    assert address.startswith("ztestsapling1")
    assert decode_payment_address(address)[0] == "ztestsapling"


def test_payment_address_errors(viewing_key, unusable_index):
    with pytest.raises(InputTooShortError):
        derive_payment_address(viewing_key[:127], 0)
    with pytest.raises(InvalidDiversifierError):
        derive_payment_address(viewing_key, unusable_index)
    with pytest.raises(InvalidInputError):
        derive_payment_address(viewing_key, 2**32)


def test_unknown_network_rejected(viewing_key):
    with pytest.raises(InvalidInputError) as excinfo:
        encode_payment_address(bytes(43), "regtest")
    assert excinfo.value.field == "network"
    with pytest.raises(InvalidInputError):
        derive_payment_address(viewing_key, 7, "regtest")
    with pytest.raises(InvalidInputError):
        generate_transparent_address(G_PUBKEY, "regtest")
    assert encode_payment_address(bytes(43), "testnet").startswith("ztestsapling1")


def test_address_encoding_is_lossy():
    raw = bytes([200]) + bytes(range(42))
    _, symbols = decode_payment_address(encode_payment_address(raw))
    assert symbols[0] == 200 % 32
    assert symbols[0] != raw[0]
    assert bytes(symbols) != raw

    # Bytes that differ only in their top three bits encode identically
    assert encode_payment_address(bytes([1]) * 43) == encode_payment_address(bytes([33]) * 43)


def test_address_encoding_errors():
    with pytest.raises(EncodingError):
        encode_payment_address(bytes(100))
    with pytest.raises(EncodingError):
        decode_payment_address("a12uel5l")
    with pytest.raises(EncodingError):
        decode_payment_address(encode_payment_address(bytes(10)))


def test_transparent_address():
    address = generate_transparent_address(G_PUBKEY)
    assert address == "8o7cgevaigeXU5gmRfQ3JzoE1qQ1cH"
    network, key_hash = decode_transparent_address(address)
    assert network == Network.MAINNET
    assert key_hash.hex() == "751e76e8199196d454941c45d1b3a323f1433bd6"

    testnet = generate_transparent_address(G_PUBKEY, Network.TESTNET)
    assert testnet == "8upNANs1ASGXYPtbGhZLUi3pSqGcn1"
    assert decode_transparent_address(testnet) == (Network.TESTNET, key_hash)


def test_transparent_address_has_no_checksum():
    address = generate_transparent_address(G_PUBKEY)
    assert decode_base58(address) == b"\x1c\xb8" + hash160(G_PUBKEY)
    assert generate_transparent_address(G_PUBKEY.hex()) == address
