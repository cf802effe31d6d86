"""
Field encryption core.

Handles:
- Per-data-type key validation (AES-256)
- Keyed layered hashing of sensitive fields
- Field encryption (AES-256-GCM, 16-byte nonce)
- Decryption of frontend AES-256-CBC payloads
"""

from .key_store import KeyStore
from .hashing import HashComposition, HashEngine, HASH_CONFIG
from .aead import AeadCipher, EncryptedEnvelope
from .legacy_cbc import LegacyCBCDecoder
from .service import CryptoService
from .errors import (
    CryptoServiceError,
    InvalidKeySize,
    UnknownDataType,
    MissingKey,
    DecryptionFailed,
    MalformedPayload,
    MalformedInput,
    NonceSizeMismatch,
)

__all__ = [
    "KeyStore",
    "HashComposition",
    "HashEngine",
    "HASH_CONFIG",
    "AeadCipher",
    "EncryptedEnvelope",
    "LegacyCBCDecoder",
    "CryptoService",
    "CryptoServiceError",
    "InvalidKeySize",
    "UnknownDataType",
    "MissingKey",
    "DecryptionFailed",
    "MalformedPayload",
    "MalformedInput",
    "NonceSizeMismatch",
]
