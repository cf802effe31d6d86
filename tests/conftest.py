"""
Shared fixtures and Hypothesis profiles for the Fieldcrypt tests.
"""

import os

import pytest
from hypothesis import settings, Verbosity

from fieldcrypt import CryptoService


settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None,
)

settings.register_profile(
    "ci",
    max_examples=50,
    deadline=None,
)

settings.register_profile(
    "dev",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


# ============ Shared Fixtures ============

@pytest.fixture
def sequential_key() -> bytes:
    """32-byte key 0x01..0x20."""
    return bytes(range(1, 33))


@pytest.fixture
def zero_key() -> bytes:
    return bytes(32)


@pytest.fixture
def service(sequential_key) -> CryptoService:
    """Service with one hashable data type per composition plus encryption-only labels."""
    keys = {
        "USER_NAME": bytes((i * 3) % 256 for i in range(32)),
        "USER_EMAIL": sequential_key,
        "USER_PHONE": bytes(range(32, 64)),
        "API_KEY": bytes(range(100, 132)),
        "EMAIL": sequential_key,
        "FRONT_KEY_1": bytes(32),
    }
    return CryptoService(keys)
