"""
trie-roots: Merkle-Patricia-Trie root hashes for ordered lists, account
storage and world state, bit-compatible with Ethereum's derivation.
"""

from .constants import EMPTY_ROOT_HASH, KECCAK_EMPTY
from .config_manager import (
    TrieRootConfig,
    TrieRootConfigManager,
    setup_logging,
)
from .error_handling import (
    ErrorSeverity,
    TrieRootError,
    ConfigurationError,
    ValidationError,
    UnsortedKeysError,
    Validator,
)
from .hash_builder import HashBuilder
from .ordered_root import (
    adjust_index_for_rlp,
    ordered_trie_root,
    ordered_trie_root_with_encoder,
)
from .storage_value import StorageValue
from .storage import (
    storage_root,
    storage_root_unsorted,
    storage_root_unhashed,
)
from .trie_account import TrieAccount, to_trie_account
from .state import (
    state_root,
    state_root_unsorted,
    state_root_unhashed,
    state_root_ref_unhashed,
)

__version__ = "0.1.0"
__all__ = [
    # Constants
    "EMPTY_ROOT_HASH",
    "KECCAK_EMPTY",
    # Configuration
    "TrieRootConfig",
    "TrieRootConfigManager",
    "setup_logging",
    # Errors
    "ErrorSeverity",
    "TrieRootError",
    "ConfigurationError",
    "ValidationError",
    "UnsortedKeysError",
    "Validator",
    # Trie engine
    "HashBuilder",
    # Ordered roots
    "adjust_index_for_rlp",
    "ordered_trie_root",
    "ordered_trie_root_with_encoder",
    # Storage roots
    "StorageValue",
    "storage_root",
    "storage_root_unsorted",
    "storage_root_unhashed",
    # State roots
    "TrieAccount",
    "to_trie_account",
    "state_root",
    "state_root_unsorted",
    "state_root_unhashed",
    "state_root_ref_unhashed",
]
