"""
Tests for key validation and lookup.
"""

import pytest

from fieldcrypt import CryptoService, KeyStore, InvalidKeySize, MalformedInput


class TestKeyStore:

    def test_valid_keys(self):
        store = KeyStore({"A": bytes(32), "B": bytes(32)})
        assert len(store) == 2
        assert store.data_types == frozenset({"A", "B"})

    def test_short_key_rejected(self):
        with pytest.raises(InvalidKeySize) as exc_info:
            KeyStore({"SHORT": b"12345"})
        assert exc_info.value.data_type == "SHORT"
        assert exc_info.value.size == 5

    def test_empty_key_rejected(self):
        with pytest.raises(InvalidKeySize) as exc_info:
            KeyStore({"EMPTY": b""})
        assert exc_info.value.size == 0

    @pytest.mark.parametrize("size", [16, 24, 31, 33, 64])
    def test_other_sizes_rejected(self, size):
        with pytest.raises(InvalidKeySize):
            KeyStore({"KEY": bytes(size)})

    def test_one_bad_key_rejects_whole_store(self):
        with pytest.raises(InvalidKeySize) as exc_info:
            KeyStore({"GOOD": bytes(32), "BAD": bytes(10), "ALSO_GOOD": bytes(32)})
        assert exc_info.value.data_type == "BAD"

    def test_non_bytes_key_rejected(self):
        with pytest.raises(InvalidKeySize):
            KeyStore({"TEXT": "0" * 32})

    def test_lookup(self, sequential_key):
        store = KeyStore({"EMAIL": sequential_key})
        assert store.get("EMAIL") == sequential_key
        assert store.get("OTHER") is None
        assert "EMAIL" in store
        assert "OTHER" not in store

    def test_later_mutation_of_input_has_no_effect(self):
        source = {"A": bytearray(32)}
        store = KeyStore(source)
        source["A"][0] = 0xFF
        source["B"] = bytes(32)
        assert store.get("A") == bytes(32)
        assert "B" not in store

    def test_repr_hides_key_material(self, sequential_key):
        store = KeyStore({"EMAIL": sequential_key})
        assert sequential_key.hex() not in repr(store)
        assert "EMAIL" in repr(store)

    def test_from_hex(self, sequential_key):
        store = KeyStore.from_hex({"EMAIL": sequential_key.hex()})
        assert store.get("EMAIL") == sequential_key

    def test_from_hex_invalid(self):
        with pytest.raises(MalformedInput):
            KeyStore.from_hex({"EMAIL": "zz" * 32})

    def test_from_hex_wrong_size(self):
        with pytest.raises(InvalidKeySize):
            KeyStore.from_hex({"EMAIL": "ab" * 16})


class TestServiceConstruction:

    def test_valid_keys(self):
        service = CryptoService({"A": bytes(32), "B": bytes(32)})
        assert service.data_types == frozenset({"A", "B"})

    def test_invalid_key_length(self):
        with pytest.raises(InvalidKeySize):
            CryptoService({"SHORT": b"12345"})

    def test_empty_key(self):
        with pytest.raises(InvalidKeySize):
            CryptoService({"EMPTY": b""})

    def test_accepts_prebuilt_store(self):
        store = KeyStore({"A": bytes(32)})
        service = CryptoService(store)
        assert service.data_types == frozenset({"A"})
