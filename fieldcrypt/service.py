"""
Crypto service facade.

Binds the key store to the hash engine, the GCM cipher and the frontend
CBC decoder. Holds no mutable state after construction, so one instance
can be shared across threads and requests.
"""

from typing import Any, Mapping

from .aead import AeadCipher, EncryptedEnvelope
from .hashing import HashEngine
from .key_store import KeyStore
from .legacy_cbc import LegacyCBCDecoder


class CryptoService:
    """Hashing, encryption and decryption of sensitive fields by data type."""

    def __init__(self, keys: Mapping[str, bytes] | KeyStore):
        """
        Initialize the service.

        Args:
            keys: Mapping of data type label to 32-byte key, or a KeyStore

        Raises:
            InvalidKeySize: If any key is not exactly 32 bytes
        """
        self._key_store = keys if isinstance(keys, KeyStore) else KeyStore(keys)
        self._hash_engine = HashEngine(self._key_store)
        self._cipher = AeadCipher(self._key_store)
        self._cbc_decoder = LegacyCBCDecoder(self._key_store)

    @property
    def data_types(self) -> frozenset[str]:
        """Data types usable for encryption and decryption."""
        return self._key_store.data_types

    @property
    def hashable_data_types(self) -> frozenset[str]:
        """Data types usable for hashing."""
        return self._hash_engine.data_types

    def hash_data(self, text: str, data_type: str) -> str:
        """Hash text with the composition and key bound to data_type."""
        return self._hash_engine.hash(text, data_type)

    def encrypt(self, plaintext: str, data_type: str) -> EncryptedEnvelope:
        """Encrypt plaintext with AES-256-GCM under the data type's key."""
        return self._cipher.encrypt(plaintext, data_type)

    def decrypt(self, encrypted: str, iv: str, auth_tag: str, data_type: str) -> str:
        """Decrypt hex-encoded GCM fields produced by encrypt."""
        return self._cipher.decrypt(EncryptedEnvelope(encrypted, iv, auth_tag), data_type)

    def decrypt_envelope(self, envelope: EncryptedEnvelope, data_type: str) -> str:
        """Decrypt an EncryptedEnvelope produced by encrypt."""
        return self._cipher.decrypt(envelope, data_type)

    def decrypt_front_cbc(self, encrypted_hex: str, iv_hex: str, data_type: str) -> dict[str, Any]:
        """Decrypt a frontend AES-CBC payload and parse it as a JSON object."""
        return self._cbc_decoder.decrypt(encrypted_hex, iv_hex, data_type)
