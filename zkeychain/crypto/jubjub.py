"""Jubjub curve arithmetic for zkeychain.

Jubjub is the twisted Edwards curve ``-u^2 + v^2 = 1 + d*u^2*v^2`` over the
BLS12-381 scalar field, with ``d = -(10240/10241)``. Points are held in
extended coordinates and serialized in the 32-byte compressed form: the
little-endian ``v`` coordinate with the low bit of ``u`` stored in the top
bit of the last byte.
"""

import logging
from typing import Optional, Tuple

from ..constants import JUBJUB_Q, JUBJUB_R
from ..exceptions import InvalidInputError, InvalidPointError, InvalidScalarError
from ..types.common import BytesLike, PointBytes, ScalarBytes
from ..utils.validation import require_length

__all__ = [
    "Q",
    "R",
    "D",
    "JubjubPoint",
    "GENERATOR",
    "decode_scalar",
    "encode_scalar",
    "is_canonical_scalar",
]

logger = logging.getLogger(__name__)

Q = JUBJUB_Q
R = JUBJUB_R
D = (-10240 * pow(10241, Q - 2, Q)) % Q


def _inv(x: int) -> int:
    return pow(x, Q - 2, Q)


def _find_non_residue() -> int:
    z = 2
    while pow(z, (Q - 1) // 2, Q) != Q - 1:
        z += 1
    return z


# Q - 1 = 2^S * T with T odd
_S = ((Q - 1) & -(Q - 1)).bit_length() - 1
_T = (Q - 1) >> _S
_Z = _find_non_residue()


def sqrt_mod_q(x: int) -> Optional[int]:
    """
    Square root in the base field (Tonelli-Shanks).

    Args:
        x: Field element

    Returns:
        A root of ``x``, or None if ``x`` is not a quadratic residue
    """
    x %= Q
    if x == 0:
        return 0
    if pow(x, (Q - 1) // 2, Q) != 1:
        return None

    m = _S
    c = pow(_Z, _T, Q)
    t = pow(x, _T, Q)
    root = pow(x, (_T + 1) // 2, Q)

    while t != 1:
        i = 1
        t2 = t * t % Q
        while t2 != 1:
            t2 = t2 * t2 % Q
            i += 1
        b = pow(c, 1 << (m - i - 1), Q)
        m = i
        c = b * b % Q
        t = t * c % Q
        root = root * b % Q

    return root


class JubjubPoint:
    """
    Jubjub curve point in extended twisted Edwards coordinates.

    Instances are immutable; arithmetic returns new points.
    """

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int = 1, t: Optional[int] = None) -> None:
        self._x = x % Q
        self._y = y % Q
        self._z = z % Q
        self._t = (x * y * _inv(z)) % Q if t is None else t % Q

    @classmethod
    def identity(cls) -> "JubjubPoint":
        """Return the neutral element (0, 1)."""
        return cls(0, 1, 1, 0)

    @classmethod
    def from_affine(cls, u: int, v: int) -> "JubjubPoint":
        """
        Create point from affine coordinates.

        Raises:
            InvalidPointError: If (u, v) is not on the curve
        """
        u %= Q
        v %= Q
        if (-u * u + v * v - 1 - D * u * u * v * v) % Q != 0:
            raise InvalidPointError("Point is not on the Jubjub curve")
        return cls(u, v, 1, u * v)

    @classmethod
    def from_bytes(cls, data: BytesLike, subgroup: bool = False) -> "JubjubPoint":
        """
        Decode a 32-byte compressed point.

        Non-canonical ``v`` encodings and the encoding of ``u = 0`` with the
        sign bit set are rejected.

        Args:
            data: 32-byte compressed encoding
            subgroup: Also require membership of the prime-order subgroup

        Returns:
            Decoded point

        Raises:
            InvalidPointError: If the bytes do not encode a valid point
        """
        data = bytearray(require_length(data, 32, "point"))
        sign = data[31] >> 7
        data[31] &= 0x7F
        v = int.from_bytes(data, "little")
        if v >= Q:
            raise InvalidPointError("Non-canonical point encoding")

        v2 = v * v % Q
        u2 = (v2 - 1) * _inv(1 + D * v2) % Q
        u = sqrt_mod_q(u2)
        if u is None:
            raise InvalidPointError("Point is not on the Jubjub curve")
        if u == 0 and sign:
            raise InvalidPointError("Non-canonical encoding of u = 0")
        if (u & 1) != sign:
            u = Q - u

        point = cls(u, v, 1, u * v)
        if subgroup and not point.is_torsion_free():
            raise InvalidPointError("Point is not in the prime-order subgroup")
        return point

    def to_affine(self) -> Tuple[int, int]:
        """Return affine (u, v) coordinates."""
        zinv = _inv(self._z)
        return self._x * zinv % Q, self._y * zinv % Q

    def to_bytes(self) -> PointBytes:
        """Encode as 32-byte compressed point."""
        u, v = self.to_affine()
        encoded = bytearray(v.to_bytes(32, "little"))
        encoded[31] |= (u & 1) << 7
        return PointBytes(bytes(encoded))

    def __add__(self, other: "JubjubPoint") -> "JubjubPoint":
        # Unified addition for a = -1 (Hisil-Wong-Carter-Dawson)
        a = self._x * other._x % Q
        b = self._y * other._y % Q
        c = D * self._t * other._t % Q
        d = self._z * other._z % Q
        e = ((self._x + self._y) * (other._x + other._y) - a - b) % Q
        f = (d - c) % Q
        g = (d + c) % Q
        h = (b + a) % Q
        return JubjubPoint(e * f, g * h, f * g, e * h)

    def __neg__(self) -> "JubjubPoint":
        return JubjubPoint(-self._x, self._y, self._z, -self._t)

    def double(self) -> "JubjubPoint":
        return self + self

    def __mul__(self, scalar: int) -> "JubjubPoint":
        if not isinstance(scalar, int):
            return NotImplemented
        if scalar < 0:
            return (-self) * -scalar

        result = JubjubPoint.identity()
        for bit in bin(scalar)[2:]:
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    __rmul__ = __mul__

    def is_identity(self) -> bool:
        return self._x == 0 and self._y == self._z

    def is_torsion_free(self) -> bool:
        """Check membership of the prime-order subgroup."""
        return (self * R).is_identity()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JubjubPoint):
            return False
        # Compare projectively: X1*Z2 == X2*Z1 and Y1*Z2 == Y2*Z1
        return (
            (self._x * other._z - other._x * self._z) % Q == 0
            and (self._y * other._z - other._y * self._z) % Q == 0
        )

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"JubjubPoint({self.to_bytes().hex()})"


# Fixed base generator: the point with v = 11 and even u
GENERATOR = JubjubPoint.from_bytes(bytes([11]) + bytes(31))


def is_canonical_scalar(data: bytes) -> bool:
    """Check that 32 bytes encode an integer strictly below the group order."""
    return len(data) == 32 and int.from_bytes(data, "little") < R


def decode_scalar(data: BytesLike, field: str = "scalar") -> int:
    """
    Decode a canonical 32-byte little-endian Jubjub scalar.

    Args:
        data: 32 bytes
        field: Field name used in error messages

    Returns:
        Scalar as an integer in range [0, r)

    Raises:
        InvalidInputError: If input is not 32 bytes
        InvalidScalarError: If the value is not strictly below r
    """
    data = require_length(data, 32, field)
    if not is_canonical_scalar(data):
        logger.debug(f"Rejected non-canonical scalar for {field}")
        raise InvalidScalarError(field)
    return int.from_bytes(data, "little")


def encode_scalar(scalar: int) -> ScalarBytes:
    """
    Encode a scalar as 32 bytes little-endian.

    Raises:
        InvalidInputError: If scalar is not in range [0, r)
    """
    if isinstance(scalar, bool) or not isinstance(scalar, int) or not 0 <= scalar < R:
        raise InvalidInputError("Scalar must be an integer in range [0, r)", field="scalar")
    return ScalarBytes(scalar.to_bytes(32, "little"))
