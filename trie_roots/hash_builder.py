import logging
from typing import List, Optional, Sequence, Tuple

from trie import HexaryTrie

from .error_handling import TrieRootError, UnsortedKeysError, ValidationError
from .nibbles import pack_nibbles

logger = logging.getLogger(__name__)


class HashBuilder:
    """
    Single-use trie engine: leaves go in through add_leaf, the Merkle root
    comes out of root().

    Leaves are stored in a Hexary Merkle-Patricia-Trie (like Ethereum) backed by
    an in-memory dict. Paths must arrive in strictly ascending order unless
    order checking is switched off. Private leaves are hashed exactly like
    public ones; their paths are recorded in ``private_paths``.
    """

    def __init__(self, check_order: bool = True):
        """
        Args:
            check_order: Enforce strictly ascending leaf paths. The root
                functions always leave this on.
        """
        self.db: dict = {}
        self.trie = HexaryTrie(self.db)
        self.check_order = check_order
        self.private_paths: List[Tuple[int, ...]] = []
        self.leaf_count = 0
        self._last_path: Optional[Tuple[int, ...]] = None
        self._consumed = False

    def add_leaf(self, path: Sequence[int], value: bytes, is_private: bool = False):
        """
        Insert a leaf.

        Args:
            path: Nibble path of the leaf key
            value: Leaf payload, already serialized
            is_private: Privacy flag of the leaf

        Raises:
            UnsortedKeysError: If ``path`` does not sort after the previous path
            ValidationError: If ``value`` is empty
        """
        if self._consumed:
            raise TrieRootError("HashBuilder already produced its root")

        path = tuple(path)
        if self.check_order and self._last_path is not None and path <= self._last_path:
            raise UnsortedKeysError(
                "Leaf paths must be strictly ascending",
                context={
                    'previous': pack_nibbles(self._last_path).hex(),
                    'current': pack_nibbles(path).hex(),
                },
            )
        if not value:
            # An empty value would delete the key instead of inserting it
            raise ValidationError(
                "Leaf value must not be empty",
                context={'path': pack_nibbles(path).hex()},
            )

        self.trie.set(pack_nibbles(path), bytes(value))
        self._last_path = path
        self.leaf_count += 1
        if is_private:
            self.private_paths.append(path)

    def root(self) -> bytes:
        """Finalize and return the 32-byte root over all inserted leaves."""
        self._consumed = True
        root = self.trie.root_hash
        if callable(root):
            root = root()
        logger.debug(
            f"Computed trie root 0x{root.hex()} over {self.leaf_count} leaves "
            f"({len(self.private_paths)} private)"
        )
        return bytes(root)
