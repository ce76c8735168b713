"""Key chain facade for zkeychain."""

import logging
from typing import Iterator, Optional, Tuple, Union

from .constants import Network
from .crypto.address import derive_payment_address_parts
from .crypto.keys import derive_viewing_key, generate_spending_key
from .crypto.notes import compute_nullifier
from .exceptions import InvalidDiversifierError
from .types.common import BytesLike, Nullifier
from .types.keys import Note, PaymentAddress, SpendingKey, ViewingKey
from .utils.validation import validate_network

__all__ = ["KeyChain"]

logger = logging.getLogger(__name__)


class KeyChain:
    """
    Shielded key chain derived from one seed.

    Holds the spending key and viewing key and derives payment addresses
    and nullifiers from them. Instances never change after construction.
    """

    def __init__(
        self,
        spending_key: Union[SpendingKey, BytesLike],
        network: Network = Network.MAINNET
    ) -> None:
        """
        Initialize key chain.

        Args:
            spending_key: Expanded spending key, as a SpendingKey or 96 raw bytes
            network: Network used for address encoding

        Raises:
            InvalidInputError: If the key is not 96 bytes or the network is unknown
            InvalidScalarError: If the spending key has non-canonical scalars
        """
        if not isinstance(spending_key, SpendingKey):
            spending_key = SpendingKey(spending_key)
        self.network = validate_network(network)
        self._spending_key = spending_key
        self._viewing_key = ViewingKey(derive_viewing_key(spending_key.data))
        self._logger = logging.getLogger(f"{__name__}.KeyChain")

    @classmethod
    def from_seed(cls, seed: BytesLike, network: Network = Network.MAINNET) -> "KeyChain":
        """
        Create key chain from a seed.

        Args:
            seed: Secret seed, at least 32 bytes
            network: Network used for address encoding

        Returns:
            New KeyChain instance

        Raises:
            InputTooShortError: If seed is shorter than 32 bytes
            InvalidScalarError: If the seed yields a non-canonical ask or nsk
        """
        return cls(SpendingKey(generate_spending_key(seed)), network)

    @property
    def spending_key(self) -> SpendingKey:
        return self._spending_key

    @property
    def viewing_key(self) -> ViewingKey:
        return self._viewing_key

    def address(self, index: int = 0) -> PaymentAddress:
        """
        Derive the payment address at ``index``.

        Raises:
            InvalidDiversifierError: If the index's diversifier has no point
        """
        address = derive_payment_address_parts(self._viewing_key.data, index, self.network)
        self._logger.info(f"Derived address {index}: {address.encoded}")
        return address

    def addresses(self, start: int = 0, count: int = 1) -> Iterator[Tuple[int, PaymentAddress]]:
        """
        Iterate over the usable addresses among ``count`` consecutive indices.

        Indices whose diversifier does not map to a point are skipped.

        Yields:
            Tuples of (index, address)
        """
        for index in range(start, start + count):
            try:
                yield index, self.address(index)
            except InvalidDiversifierError:
                self._logger.debug(f"No address at index {index}")

    def first_address(self, start: int = 0, limit: int = 256) -> Optional[Tuple[int, PaymentAddress]]:
        """Return the first usable address at or after ``start``, if any within ``limit`` indices."""
        return next(self.addresses(start, limit), None)

    def nullifier(self, note: Note, position: int) -> Nullifier:
        """
        Compute the nullifier of a note owned by this key chain.

        Args:
            note: The note being spent
            position: Note position in the commitment tree

        Returns:
            32-byte nullifier
        """
        return compute_nullifier(note.commitment(), self._viewing_key.nk, position)

    def __repr__(self) -> str:
        return f"KeyChain(network={self.network.value}, {self._viewing_key!r})"
