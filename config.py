"""
Configuration for the Fieldcrypt service.
"""

import os
from dataclasses import dataclass
from typing import Mapping

from fieldcrypt.key_store import KeyStore

# Application version - update this for each release
VERSION = "1.0.0"


@dataclass
class Config:
    """Application configuration."""

    # Server settings
    HOST: str = os.getenv("FIELDCRYPT_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("FIELDCRYPT_PORT", "18422"))

    # Keys are read from FIELDCRYPT_KEY_<DATA_TYPE>=<64 hex chars>
    KEY_ENV_PREFIX: str = "FIELDCRYPT_KEY_"

    # Logging
    LOG_LEVEL: str = os.getenv("FIELDCRYPT_LOG_LEVEL", "info")


def load_hex_keys(environ: Mapping[str, str], prefix: str) -> dict[str, str]:
    """
    Collect hex-encoded keys from environment-style variables.

    Args:
        environ: Variables to scan (usually os.environ)
        prefix: Variable name prefix; the remainder is the data type label

    Returns:
        Mapping of data type label to hex key
    """
    hex_keys = {}
    for name, value in environ.items():
        if name.startswith(prefix) and len(name) > len(prefix):
            hex_keys[name[len(prefix):]] = value
    return hex_keys


def load_key_store(environ: Mapping[str, str], prefix: str) -> KeyStore:
    """
    Build a validated key store from environment-style variables.

    Raises:
        MalformedInput: If a key is not valid hex
        InvalidKeySize: If a key does not decode to 32 bytes
    """
    return KeyStore.from_hex(load_hex_keys(environ, prefix))


# Global config instance
config = Config()
