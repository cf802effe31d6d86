"""
Decryption of payloads encrypted by the frontend with AES-256-CBC.

The frontend pads with PKCS#7 and sends ciphertext and IV as hex. CBC has
no authentication tag, so the padding check is the only integrity check
available. A wrong key usually fails that check, but can occasionally pass
it and yield garbage; callers cannot distinguish that case.
"""

import json
import logging
from typing import Any

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .encoding import decode_hex
from .errors import DecryptionFailed, MalformedPayload, NonceSizeMismatch, UnknownDataType
from .key_store import KeyStore

logger = logging.getLogger(__name__)

BLOCK_SIZE = 16  # AES block size in bytes


def strip_pkcs7(data: bytes) -> bytes:
    """
    Remove PKCS#7 padding.

    Raises:
        DecryptionFailed: If the padding is absent or inconsistent
    """
    if not data:
        raise DecryptionFailed()

    padding = data[-1]
    if padding == 0 or padding > len(data):
        raise DecryptionFailed()
    if data[-padding:] != bytes([padding]) * padding:
        raise DecryptionFailed()

    return data[:-padding]


class LegacyCBCDecoder:
    """Decrypts frontend CBC payloads and parses them as JSON objects."""

    def __init__(self, key_store: KeyStore):
        self._key_store = key_store

    def decrypt(self, encrypted_hex: str, iv_hex: str, data_type: str) -> dict[str, Any]:
        """
        Decrypt a frontend payload and parse it.

        Args:
            encrypted_hex: Ciphertext as hex
            iv_hex: 16-byte IV as hex
            data_type: Label selecting the key (e.g. "FRONT_KEY_1")

        Returns:
            The decrypted JSON object

        Raises:
            UnknownDataType: If no key is registered for data_type
            MalformedInput: If ciphertext or IV is not valid hex
            NonceSizeMismatch: If the IV is not one block long
            DecryptionFailed: If the ciphertext length or padding is invalid
            MalformedPayload: If the plaintext is not a JSON object
        """
        key = self._key_store.get(data_type)
        if key is None:
            raise UnknownDataType(data_type)

        encrypted = decode_hex(encrypted_hex, "encrypted")
        iv = decode_hex(iv_hex, "iv")

        if len(iv) != BLOCK_SIZE:
            raise NonceSizeMismatch(BLOCK_SIZE, len(iv))

        if len(encrypted) == 0 or len(encrypted) % BLOCK_SIZE != 0:
            logger.warning(f"CBC ciphertext length invalid for data type {data_type}")
            raise DecryptionFailed()

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        decrypted = decryptor.update(encrypted) + decryptor.finalize()

        try:
            plaintext = strip_pkcs7(decrypted)
        except DecryptionFailed:
            logger.warning(f"CBC padding invalid for data type {data_type}")
            raise

        try:
            payload = json.loads(plaintext)
        except (ValueError, RecursionError):
            raise MalformedPayload("Decrypted payload is not valid JSON") from None

        if not isinstance(payload, dict):
            raise MalformedPayload("Decrypted payload is not a JSON object")

        return payload
