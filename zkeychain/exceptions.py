"""zkeychain exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "KeychainError",
    "ValidationError",
    "InputTooShortError",
    "InvalidInputError",
    "CryptoError",
    "InvalidScalarError",
    "InvalidPointError",
    "InvalidDiversifierError",
    "InvalidKeyError",
    "EncodingError",
]


class KeychainError(Exception):
    """Base exception for all zkeychain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(KeychainError):
    """Raised when an input fails shape validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.actual = actual


class InputTooShortError(ValidationError):
    """Raised when a field is shorter than its minimum length."""

    def __init__(self, field: str, expected: int, actual: int) -> None:
        super().__init__(
            f"{field} must be at least {expected} bytes, got {actual}",
            field=field,
            expected=expected,
            actual=actual,
        )


class InvalidInputError(ValidationError):
    """Raised when a field has the wrong exact length or is out of range."""
    pass


class CryptoError(KeychainError):
    """Raised when a cryptographic operation fails."""
    pass


class InvalidScalarError(CryptoError):
    """Raised when bytes do not encode a canonical Jubjub scalar."""

    def __init__(self, field: str = "scalar") -> None:
        super().__init__(f"Invalid scalar: {field} is not below the group order")
        self.field = field


class InvalidPointError(CryptoError):
    """Raised when bytes do not decode to a valid curve point."""
    pass


class InvalidDiversifierError(InvalidPointError):
    """Raised when a diversifier does not map to a prime-order subgroup point."""

    def __init__(self, diversifier: bytes) -> None:
        super().__init__(f"Invalid diversifier: {diversifier.hex()}")
        self.diversifier = diversifier


class InvalidKeyError(CryptoError):
    """Raised when signing key bytes do not parse to a valid secret."""
    pass


class EncodingError(KeychainError):
    """Raised when a text encoder rejects its input."""
    pass
