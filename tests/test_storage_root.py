"""
Tests for account storage trie roots and slot value handling.
"""

import random

import pytest
import rlp
from eth_utils import keccak
from trie import HexaryTrie

from trie_roots import (
    EMPTY_ROOT_HASH,
    StorageValue,
    UnsortedKeysError,
    ValidationError,
    storage_root,
    storage_root_unhashed,
    storage_root_unsorted,
)
from trie_roots.constants import UINT256_MAX
from trie_roots.nibbles import unpack_nibbles


def slot(n: int) -> bytes:
    return n.to_bytes(32, 'big')


def reference_storage_root(entries):
    trie = HexaryTrie({})
    for key, value in entries:
        trie.set(key, rlp.encode(value))
    return trie.root_hash


class TestStorageValue:
    """Test slot value coercion"""

    def test_bare_integer_is_public(self):
        value = StorageValue.coerce(42)
        assert (value.value, value.is_private) == (42, False)

    def test_pair_carries_flag(self):
        assert StorageValue.coerce((42, True)) == StorageValue(42, True)
        assert StorageValue.coerce((42, False)) == StorageValue(42, False)

    def test_existing_value_passes_through(self):
        original = StorageValue(7, True)
        assert StorageValue.coerce(original) is original

    def test_out_of_range_values_rejected(self):
        """Values must fit in 256 unsigned bits"""
        with pytest.raises(ValidationError):
            StorageValue(-1)
        with pytest.raises(ValidationError):
            StorageValue(UINT256_MAX + 1)
        assert StorageValue(UINT256_MAX).value == UINT256_MAX

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError):
            StorageValue.coerce("42")
        with pytest.raises(ValidationError):
            StorageValue.coerce(True)
        with pytest.raises(ValidationError):
            StorageValue.coerce((1, True, False))


class TestStorageRoot:
    """Test the sorted storage root tier"""

    def test_empty_storage(self):
        """No slots yields the empty root"""
        assert storage_root([]) == EMPTY_ROOT_HASH
        assert storage_root_unsorted([]) == EMPTY_ROOT_HASH
        assert storage_root_unhashed({}) == EMPTY_ROOT_HASH

    def test_single_slot_matches_leaf_node_hash(self):
        """One slot 0x00..01 = 42 hashes to its lone leaf node"""
        key = b'\x00' * 31 + b'\x01'
        leaf_node = rlp.encode([b'\x20' + key, rlp.encode(42)])

        root = storage_root([(key, 42)])

        assert root == keccak(leaf_node)
        assert root.hex() == "ab258c19528d48cbaec06f25996b9e8e45df4aaf84a5ee22ccf0b38de2fc296f"

    def test_builder_module_importable(self):
        """The storage module is reachable by name next to the re-exported function"""
        import trie_roots
        import trie_roots.storage as storage_module

        assert storage_module.storage_root is trie_roots.storage_root
        assert hasattr(storage_module, 'HashBuilder')

    def test_matches_direct_trie(self):
        entries = sorted((keccak(slot(i)), i * 1000 + 1) for i in range(40))
        assert storage_root(entries) == reference_storage_root(entries)

    def test_value_shapes_are_equivalent(self):
        """Bare ints, public pairs and StorageValue give the same root"""
        keys = sorted(keccak(slot(i)) for i in range(5))
        as_ints = [(k, 10 + n) for n, k in enumerate(keys)]
        as_pairs = [(k, (10 + n, False)) for n, k in enumerate(keys)]
        as_values = [(k, StorageValue(10 + n)) for n, k in enumerate(keys)]

        assert storage_root(as_ints) == storage_root(as_pairs) == storage_root(as_values)

    def test_zero_value_slot(self):
        key = slot(1)
        assert storage_root([(key, 0)]) == keccak(rlp.encode([b'\x20' + key, b'\x80']))

    def test_hex_string_keys(self):
        key = slot(5)
        assert storage_root([('0x' + key.hex(), 9)]) == storage_root([(key, 9)])

    def test_out_of_order_keys_abort(self):
        """Descending keys break the sorted contract"""
        with pytest.raises(UnsortedKeysError) as exc_info:
            storage_root([(slot(2), 1), (slot(1), 1)])

        error = exc_info.value
        assert error.error_code == 'UnsortedKeysError'
        assert error.context['previous'] == slot(2).hex()
        assert error.context['current'] == slot(1).hex()

    def test_repeated_key_aborts(self):
        with pytest.raises(UnsortedKeysError):
            storage_root([(slot(1), 1), (slot(1), 2)])

    def test_wrong_key_width_rejected(self):
        with pytest.raises(ValidationError):
            storage_root([(b'\x01' * 20, 1)])

    def test_privacy_flag_forwarded(self, recording_builder):
        """Each leaf keeps its own privacy flag"""
        entries = [(slot(1), (5, True)), (slot(2), 6), (slot(3), (7, False))]
        storage_root(entries)

        builder = recording_builder[0]
        assert [flag for _, _, flag in builder.leaves] == [True, False, False]
        assert builder.private_paths == [unpack_nibbles(slot(1))]

    def test_privacy_does_not_change_root(self):
        public = storage_root([(slot(1), 5)])
        private = storage_root([(slot(1), (5, True))])
        assert public == private


class TestStorageRootUnsorted:
    """Test the sorting and hashing tiers"""

    def test_permutation_invariance(self):
        """Distinct keys give the same root in any order"""
        entries = [(keccak(slot(i)), i + 1) for i in range(64)]
        expected = storage_root(sorted(entries))

        rng = random.Random(1234)
        for _ in range(5):
            shuffled = list(entries)
            rng.shuffle(shuffled)
            assert storage_root_unsorted(shuffled) == expected

    def test_accepts_generators(self):
        entries = [(keccak(slot(i)), i + 1) for i in range(10)]
        assert storage_root_unsorted(iter(reversed(entries))) == storage_root(sorted(entries))

    def test_duplicate_keys_rejected(self):
        """Callers must deduplicate before computing a root"""
        key = keccak(slot(1))
        with pytest.raises(UnsortedKeysError):
            storage_root_unsorted([(key, 1), (key, 2)])

    def test_unhashed_equals_hashed_unsorted(self):
        raw = {slot(i): i * 3 + 1 for i in range(20)}
        hashed = [(keccak(k), v) for k, v in raw.items()]

        assert storage_root_unhashed(raw) == storage_root_unsorted(hashed)
        assert storage_root_unhashed(list(raw.items())) == storage_root_unsorted(hashed)

    def test_unhashed_matches_direct_secure_trie(self):
        raw = [(slot(0), 0x15), (slot(1), 0x2121245DCAD697F11244068AAD6ECBC301811239)]
        expected = reference_storage_root((keccak(k), v) for k, v in raw)
        assert storage_root_unhashed(raw) == expected

    def test_unhashed_keeps_privacy(self, recording_builder):
        storage_root_unhashed([(slot(9), (1, True))])
        assert recording_builder[0].private_paths == [unpack_nibbles(keccak(slot(9)))]
