"""
World state trie roots.

Mirrors ``storage_root`` with accounts in place of slot values:

- ``state_root``: keys already hashed and sorted
- ``state_root_unsorted``: keys hashed, any order
- ``state_root_unhashed`` / ``state_root_ref_unhashed``: raw addresses, any order

Account leaves are always public.
"""

import copy
import logging
from typing import Any, Callable, Iterable, Iterator, Mapping, Tuple, Union

import rlp
from eth_utils import keccak

from .constants import ADDRESS_LENGTH
from .error_handling import Validator
from .hash_builder import HashBuilder
from .nibbles import unpack_nibbles
from .trie_account import to_trie_account

logger = logging.getLogger(__name__)

StateEntries = Union[Mapping[bytes, Any], Iterable[Tuple[bytes, Any]]]


def _entries(state: StateEntries) -> Iterable[Tuple[bytes, Any]]:
    if isinstance(state, Mapping):
        return state.items()
    return state


def _hashed_accounts(state: StateEntries,
                     prepare: Callable[[Any], Any]) -> Iterator[Tuple[bytes, Any]]:
    for address, account in _entries(state):
        address = Validator.to_key_bytes(address, ADDRESS_LENGTH)
        yield keccak(address), prepare(account)


def _take(account: Any) -> Any:
    return account


def state_root_unhashed(state: StateEntries) -> bytes:
    """
    Hash and sort account addresses, then calculate the state root.
    Accounts are handed to conversion as given. See ``state_root_unsorted``.
    """
    return state_root_unsorted(_hashed_accounts(state, _take))


def state_root_ref_unhashed(state: StateEntries) -> bytes:
    """
    Same as ``state_root_unhashed`` but converts a deep copy of every account,
    leaving the caller's account objects untouched.
    """
    return state_root_unsorted(_hashed_accounts(state, copy.deepcopy))


def state_root_unsorted(state: StateEntries) -> bytes:
    """
    Sort hashed account keys and calculate the state root.
    See ``state_root``.
    """
    entries = [
        (Validator.to_key_bytes(key), account)
        for key, account in _entries(state)
    ]
    entries.sort(key=lambda entry: entry[0])
    return state_root(entries)


def state_root(state: StateEntries) -> bytes:
    """
    Calculate the root of the state trie.

    Corresponds to geth's ``deriveHash`` over a genesis allocation.

    Args:
        state: ``(hashed_address, account)`` pairs in strictly ascending key order

    Raises:
        UnsortedKeysError: If the keys are not in strictly ascending order
    """
    hb = HashBuilder()
    for hashed_key, account in _entries(state):
        account_rlp = rlp.encode(to_trie_account(account))
        hb.add_leaf(unpack_nibbles(Validator.to_key_bytes(hashed_key)), account_rlp, False)
    logger.debug(f"State root over {hb.leaf_count} accounts")
    return hb.root()
