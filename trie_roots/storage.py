"""
Account storage trie roots.

Three entry points, from least to most normalisation:

- ``storage_root``: keys already hashed and sorted
- ``storage_root_unsorted``: keys hashed, any order
- ``storage_root_unhashed``: raw slot keys, any order

Slot values are ``int``, ``(int, is_private)`` or ``StorageValue``.
"""

import logging
from typing import Iterable, Mapping, Tuple, Union

import rlp
from eth_utils import keccak

from .error_handling import Validator
from .hash_builder import HashBuilder
from .nibbles import unpack_nibbles
from .storage_value import StorageValue

logger = logging.getLogger(__name__)

StorageInput = Union[StorageValue, int, Tuple[int, bool]]
StorageEntries = Union[Mapping[bytes, StorageInput], Iterable[Tuple[bytes, StorageInput]]]


def _entries(storage: StorageEntries) -> Iterable[Tuple[bytes, StorageInput]]:
    if isinstance(storage, Mapping):
        return storage.items()
    return storage


def storage_root_unhashed(storage: StorageEntries) -> bytes:
    """
    Hash storage keys, sort them and calculate the root of the storage trie.
    See ``storage_root_unsorted``.
    """
    return storage_root_unsorted(
        (keccak(Validator.to_key_bytes(slot)), value)
        for slot, value in _entries(storage)
    )


def storage_root_unsorted(storage: StorageEntries) -> bytes:
    """
    Sort hashed storage keys and calculate the root of the storage trie.
    See ``storage_root``.

    Only keys are compared. Keys must be unique; duplicates are rejected by
    the trie engine.
    """
    entries = [
        (Validator.to_key_bytes(key), value)
        for key, value in _entries(storage)
    ]
    entries.sort(key=lambda entry: entry[0])
    return storage_root(entries)


def storage_root(storage: StorageEntries) -> bytes:
    """
    Calculate the root of an account storage trie.

    Args:
        storage: ``(hashed_slot, value)`` pairs in strictly ascending key order

    Raises:
        UnsortedKeysError: If the keys are not in strictly ascending order
    """
    hb = HashBuilder()
    for hashed_slot, raw_value in _entries(storage):
        slot_value = StorageValue.coerce(raw_value)
        hb.add_leaf(
            unpack_nibbles(Validator.to_key_bytes(hashed_slot)),
            rlp.encode(slot_value.value),
            slot_value.is_private,
        )
    logger.debug(f"Storage root over {hb.leaf_count} slots")
    return hb.root()
