"""
Field encryption with AES-256-GCM.

Uses a 16-byte nonce instead of the usual 12 so envelopes stay compatible
with the existing backend. Ciphertext, nonce and tag travel as separate
lowercase hex strings.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .encoding import decode_hex, encode_text
from .errors import DecryptionFailed, MalformedInput, MalformedPayload, NonceSizeMismatch, UnknownDataType
from .key_store import KeyStore

logger = logging.getLogger(__name__)

GCM_NONCE_SIZE = 16
GCM_TAG_SIZE = 16


@dataclass(frozen=True)
class EncryptedEnvelope:
    """Ciphertext, nonce and authentication tag, each hex-encoded."""
    encrypted: str
    iv: str
    auth_tag: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON wire format."""
        return {
            "encrypted": self.encrypted,
            "iv": self.iv,
            "authTag": self.auth_tag,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EncryptedEnvelope":
        """
        Reconstruct from the JSON wire format.

        Raises:
            MalformedInput: If a field is missing
        """
        try:
            return cls(
                encrypted=data["encrypted"],
                iv=data["iv"],
                auth_tag=data["authTag"],
            )
        except KeyError as e:
            raise MalformedInput(f"Envelope field missing: {e.args[0]}") from None


class AeadCipher:
    """Encrypts and decrypts text fields under per-data-type keys."""

    def __init__(self, key_store: KeyStore):
        self._key_store = key_store

    def _key_for(self, data_type: str) -> bytes:
        key = self._key_store.get(data_type)
        if key is None:
            raise UnknownDataType(data_type)
        return key

    def encrypt(self, plaintext: str, data_type: str) -> EncryptedEnvelope:
        """
        Encrypt a UTF-8 string.

        A fresh random nonce is drawn for every call, so encrypting the
        same plaintext twice gives different envelopes.

        Args:
            plaintext: Text to encrypt
            data_type: Label selecting the key

        Returns:
            EncryptedEnvelope with hex-encoded ciphertext, nonce and tag

        Raises:
            UnknownDataType: If no key is registered for data_type
            MalformedInput: If plaintext cannot be encoded as UTF-8
        """
        key = self._key_for(data_type)

        nonce = os.urandom(GCM_NONCE_SIZE)
        aesgcm = AESGCM(key)
        # AESGCM.encrypt returns ciphertext || tag
        ciphertext_with_tag = aesgcm.encrypt(nonce, encode_text(plaintext, "plaintext"), None)

        ciphertext = ciphertext_with_tag[:-GCM_TAG_SIZE]
        auth_tag = ciphertext_with_tag[-GCM_TAG_SIZE:]

        return EncryptedEnvelope(
            encrypted=ciphertext.hex(),
            iv=nonce.hex(),
            auth_tag=auth_tag.hex(),
        )

    def decrypt(self, envelope: EncryptedEnvelope, data_type: str) -> str:
        """
        Decrypt and authenticate an envelope.

        Args:
            envelope: Output of encrypt (or the same format from the backend)
            data_type: Label selecting the key

        Returns:
            The original plaintext

        Raises:
            UnknownDataType: If no key is registered for data_type
            MalformedInput: If a field is not valid hex
            NonceSizeMismatch: If the nonce is not 16 bytes
            DecryptionFailed: If authentication fails for any reason
            MalformedPayload: If the authenticated plaintext is not UTF-8
        """
        key = self._key_for(data_type)

        ciphertext = decode_hex(envelope.encrypted, "encrypted")
        nonce = decode_hex(envelope.iv, "iv")
        auth_tag = decode_hex(envelope.auth_tag, "authTag")

        if len(nonce) != GCM_NONCE_SIZE:
            raise NonceSizeMismatch(GCM_NONCE_SIZE, len(nonce))

        aesgcm = AESGCM(key)
        try:
            # Wrong key, tampered data and a bad tag all end up here
            plaintext = aesgcm.decrypt(nonce, ciphertext + auth_tag, None)
        except InvalidTag:
            logger.warning(f"GCM authentication failed for data type {data_type}")
            raise DecryptionFailed() from None

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedPayload("Decrypted data is not valid UTF-8") from None
