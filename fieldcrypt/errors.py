"""
Error types for the field encryption service.
"""


class CryptoServiceError(Exception):
    """Base exception for all field encryption operations."""
    pass


class InvalidKeySize(CryptoServiceError):
    """Raised when a configured key is not exactly 32 bytes."""

    def __init__(self, data_type: str, size: int | None):
        self.data_type = data_type
        self.size = size
        if size is None:
            super().__init__(f"Invalid key for data type {data_type}: expected 32 raw bytes")
        else:
            super().__init__(f"Invalid key size for data type {data_type}: expected 32 bytes, got {size}")


class UnknownDataType(CryptoServiceError):
    """Raised when a data type label has no entry in the relevant table."""

    def __init__(self, data_type: str, message: str | None = None):
        self.data_type = data_type
        super().__init__(message or f"Unknown data type: {data_type}")


class MissingKey(UnknownDataType):
    """Raised when a data type is hashable but no key was registered for it."""

    def __init__(self, data_type: str):
        super().__init__(data_type, f"Missing key for data type: {data_type}")


class DecryptionFailed(CryptoServiceError):
    """
    Raised when decryption cannot produce a trustworthy plaintext.

    Covers tag mismatch, bad padding and bad ciphertext length alike.
    The message is fixed so callers cannot tell these apart.
    """

    def __init__(self):
        super().__init__("Decryption failed")


class MalformedPayload(CryptoServiceError):
    """Raised when decrypted data is not the expected structure."""
    pass


class MalformedInput(CryptoServiceError):
    """Raised when an input field is not valid hex."""
    pass


class NonceSizeMismatch(MalformedInput):
    """Raised when a nonce or IV has the wrong length."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid IV size: expected {expected}, got {actual}")
