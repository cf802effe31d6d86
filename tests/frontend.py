"""
Helpers that encrypt payloads the way the frontend does.
"""

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes


def encrypt_front_cbc(plaintext: bytes, key: bytes, iv: bytes) -> str:
    """AES-256-CBC with PKCS#7 padding, hex output."""
    padder = padding.PKCS7(128).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return (encryptor.update(padded) + encryptor.finalize()).hex()


def encrypt_raw_cbc(data: bytes, key: bytes, iv: bytes) -> str:
    """AES-256-CBC over block-aligned data with no padding, hex output."""
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return (encryptor.update(data) + encryptor.finalize()).hex()
