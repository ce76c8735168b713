"""Constants and network parameters for zkeychain."""

from enum import Enum

__all__ = [
    "Network",
    "SAPLING_HRP",
    "TRANSPARENT_P2PKH_PREFIX",
    "PERSONAL_EXPAND_SEED",
    "PERSONAL_IVK",
    "PERSONAL_DIVERSIFIER",
    "PERSONAL_NOTE_COMMITMENT",
    "PERSONAL_NULLIFIER",
    "JUBJUB_Q",
    "JUBJUB_R",
    "SECP256K1_N",
    "SEED_LENGTH",
    "KEY_COMPONENT_LENGTH",
    "SPENDING_KEY_LENGTH",
    "VIEWING_KEY_LENGTH",
    "DIVERSIFIER_LENGTH",
    "RAW_ADDRESS_LENGTH",
]


class Network(str, Enum):
    """Supported networks."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


# Bech32 human-readable parts for Sapling payment addresses
SAPLING_HRP = {
    Network.MAINNET: "zs",
    Network.TESTNET: "ztestsapling",
}

# Two-byte version prefixes for transparent P2PKH addresses (t1... / tm...)
TRANSPARENT_P2PKH_PREFIX = {
    Network.MAINNET: b"\x1c\xb8",
    Network.TESTNET: b"\x1d\x25",
}

# BLAKE2 personalization strings
PERSONAL_EXPAND_SEED = b"Zcash_ExpandSeed"
PERSONAL_IVK = b"Zcashivk"
PERSONAL_DIVERSIFIER = b"Zcash_gd"
PERSONAL_NOTE_COMMITMENT = b"Zcash_PH"
PERSONAL_NULLIFIER = b"Zcash_nf"

# Jubjub base field modulus (the BLS12-381 scalar field)
JUBJUB_Q = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001

# Order of the Jubjub prime-order subgroup
JUBJUB_R = 0x0E7DB4EA6533AFA906673B0101343B00A6682093CCC81082D0970E5ED6F72CB7

# secp256k1 group order
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Byte lengths
SEED_LENGTH = 32
KEY_COMPONENT_LENGTH = 32
SPENDING_KEY_LENGTH = 96
VIEWING_KEY_LENGTH = 128
DIVERSIFIER_LENGTH = 11
RAW_ADDRESS_LENGTH = 43
