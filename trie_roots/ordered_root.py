"""
Roots over ordered collections (transactions, receipts, withdrawals).

Each item is stored under the RLP encoding of its list position. The loop
walks positions in the order their encoded keys sort (1..127, then 0, then
128 upward) so leaves reach the trie engine already sorted.
"""

import logging
from typing import Any, Callable, Sequence

import rlp

from .constants import EMPTY_ROOT_HASH, RLP_SINGLE_BYTE_MAX
from .hash_builder import HashBuilder
from .nibbles import unpack_nibbles

logger = logging.getLogger(__name__)

Encoder = Callable[[Any, bytearray], None]


def adjust_index_for_rlp(i: int, length: int) -> int:
    """Map loop position ``i`` of a ``length``-item list to the index whose item is inserted next."""
    if i > RLP_SINGLE_BYTE_MAX:
        return i
    if i == RLP_SINGLE_BYTE_MAX or i + 1 == length:
        return 0
    return i + 1


def ordered_trie_root_with_encoder(items: Sequence[Any], encode: Encoder) -> bytes:
    """
    Compute the trie root of an ordered collection with a custom encoder.

    Args:
        items: The collection, indexed by list position
        encode: Called as ``encode(item, buf)``; appends the item's bytes to
            ``buf``, which is cleared before every call

    Returns:
        32-byte root hash, EMPTY_ROOT_HASH for an empty collection

    Raises:
        ValidationError: If ``encode`` writes zero bytes for an item. The
            trie cannot hold an empty leaf value.
    """
    items_len = len(items)
    if items_len == 0:
        return EMPTY_ROOT_HASH

    hb = HashBuilder()
    value_buffer = bytearray()
    for i in range(items_len):
        index = adjust_index_for_rlp(i, items_len)
        index_buffer = rlp.encode(index)

        value_buffer.clear()
        encode(items[index], value_buffer)

        # Ordered roots carry no private leaves
        hb.add_leaf(unpack_nibbles(index_buffer), bytes(value_buffer), False)

    logger.debug(f"Ordered trie root over {items_len} items")
    return hb.root()


def _rlp_encoder(item: Any, buf: bytearray):
    buf.extend(rlp.encode(item))


def ordered_trie_root(items: Sequence[Any]) -> bytes:
    """Compute the trie root of a collection of RLP-encodable items."""
    return ordered_trie_root_with_encoder(items, _rlp_encoder)
