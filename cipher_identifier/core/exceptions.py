from typing import Any


class CipherIdentifierError(Exception):
    """Base exception for all cipher identification errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(CipherIdentifierError):
    """Raised when the static reference data is missing or inconsistent."""

    pass


class ProfileStoreError(ConfigurationError):
    """Raised when the reference profile table cannot be loaded."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Cannot load cipher profiles from {source}: {reason}",
            {"source": source, "reason": reason},
        )


class UnknownCipherError(ConfigurationError):
    """Raised when a cipher name is not present in the profile store."""

    def __init__(self, cipher_name: str):
        self.cipher_name = cipher_name
        super().__init__(
            f"Cipher '{cipher_name}' not found in the reference profiles",
            {"cipher_name": cipher_name},
        )


class ValidationError(CipherIdentifierError):
    """Raised when input validation fails."""

    pass


class CiphertextTooLongError(ValidationError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class DatasetError(CipherIdentifierError):
    """Raised when a benchmark or calibration dataset cannot be read."""

    pass


class InvalidSymbolError(ValidationError):
    """Raised when a pre-encoded stream holds a code outside the alphabet."""

    def __init__(self, code: object, position: int, alphabet_size: int):
        super().__init__(
            f"Symbol code {code!r} at position {position} is outside 0..{alphabet_size - 1}",
            {"code": repr(code), "position": position},
        )


class IdentificationNotFoundError(CipherIdentifierError):
    """Raised when a stored identification does not exist."""

    def __init__(self, identification_id: int):
        super().__init__(
            f"Identification with ID {identification_id} not found",
            {"identification_id": identification_id},
        )
