"""Key and note value objects for zkeychain."""

from dataclasses import dataclass

from ..constants import (
    DIVERSIFIER_LENGTH,
    SPENDING_KEY_LENGTH,
    VIEWING_KEY_LENGTH,
)
from ..utils.validation import require_length, validate_uint
from .common import (
    Diversifier,
    PointBytes,
    ScalarBytes,
    SpendingKeyBytes,
    ViewingKeyBytes,
)

__all__ = ["SpendingKey", "ViewingKey", "PaymentAddress", "Note"]


@dataclass(frozen=True)
class SpendingKey:
    """
    Expanded spending key: ask || nsk || ovk.

    Attributes:
        data: 96 raw key bytes
    """

    data: SpendingKeyBytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "data", SpendingKeyBytes(require_length(self.data, SPENDING_KEY_LENGTH, "spending_key"))
        )

    @property
    def ask(self) -> ScalarBytes:
        """Spend authorizing key."""
        return ScalarBytes(self.data[0:32])

    @property
    def nsk(self) -> ScalarBytes:
        """Nullifier private key."""
        return ScalarBytes(self.data[32:64])

    @property
    def ovk(self) -> bytes:
        """Outgoing viewing key."""
        return self.data[64:96]

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return "SpendingKey(...)"


@dataclass(frozen=True)
class ViewingKey:
    """
    Full viewing key: ak || nk || ivk || ovk.

    Attributes:
        data: 128 raw key bytes
    """

    data: ViewingKeyBytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "data", ViewingKeyBytes(require_length(self.data, VIEWING_KEY_LENGTH, "viewing_key"))
        )

    @property
    def ak(self) -> PointBytes:
        """Spend validating key."""
        return PointBytes(self.data[0:32])

    @property
    def nk(self) -> PointBytes:
        """Nullifier deriving key."""
        return PointBytes(self.data[32:64])

    @property
    def ivk(self) -> ScalarBytes:
        """Incoming viewing key."""
        return ScalarBytes(self.data[64:96])

    @property
    def ovk(self) -> bytes:
        """Outgoing viewing key."""
        return self.data[96:128]

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"ViewingKey(ak={self.ak.hex()[:8]}...)"


@dataclass(frozen=True)
class PaymentAddress:
    """Raw shielded payment address and its encoded form."""

    diversifier: Diversifier
    pk_d: PointBytes
    encoded: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "diversifier", Diversifier(require_length(self.diversifier, DIVERSIFIER_LENGTH, "diversifier"))
        )
        object.__setattr__(self, "pk_d", PointBytes(require_length(self.pk_d, 32, "pk_d")))

    @property
    def raw(self) -> bytes:
        """43-byte diversifier || pk_d."""
        return self.diversifier + self.pk_d

    def __str__(self) -> str:
        return self.encoded


@dataclass(frozen=True)
class Note:
    """Shielded output note."""

    diversifier: Diversifier
    pk_d: PointBytes
    value: int
    rcm: ScalarBytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "diversifier", Diversifier(require_length(self.diversifier, DIVERSIFIER_LENGTH, "diversifier"))
        )
        object.__setattr__(self, "pk_d", PointBytes(require_length(self.pk_d, 32, "pk_d")))
        object.__setattr__(self, "rcm", ScalarBytes(require_length(self.rcm, 32, "rcm")))
        validate_uint(self.value, 64, "value")

    @classmethod
    def for_address(cls, address: PaymentAddress, value: int, rcm: bytes) -> "Note":
        """Create a note paying ``value`` to ``address``."""
        return cls(address.diversifier, address.pk_d, value, rcm)

    def commitment(self) -> bytes:
        """Compute this note's commitment."""
        from ..crypto.notes import compute_note_commitment
        return compute_note_commitment(self.diversifier, self.pk_d, self.value, self.rcm)
