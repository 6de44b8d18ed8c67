"""
Canonical account record stored in the state trie.
"""

from typing import Any, Mapping

import rlp
from rlp.sedes import Binary, big_endian_int

from .constants import EMPTY_ROOT_HASH, HASH_LENGTH, KECCAK_EMPTY
from .error_handling import ValidationError, Validator

hash32 = Binary.fixed_length(HASH_LENGTH)


class TrieAccount(rlp.Serializable):
    """
    RLP-serializable ``[nonce, balance, storage_root, code_hash]`` record.
    """
    fields = [
        ('nonce', big_endian_int),
        ('balance', big_endian_int),
        ('storage_root', hash32),
        ('code_hash', hash32),
    ]

    def __init__(self, nonce: int = 0, balance: int = 0,
                 storage_root: bytes = EMPTY_ROOT_HASH, code_hash: bytes = KECCAK_EMPTY):
        for name, number in (('nonce', nonce), ('balance', balance)):
            if not Validator.validate_uint256(number):
                raise ValidationError(
                    f"Account {name} must be an unsigned 256-bit integer, got {number!r}"
                )
        super().__init__(
            nonce,
            balance,
            Validator.to_key_bytes(storage_root),
            Validator.to_key_bytes(code_hash),
        )


def to_trie_account(account: Any) -> TrieAccount:
    """
    Convert an account representation into its canonical trie record.

    Accepts a TrieAccount, an object with a ``to_trie_account()`` method, a
    mapping with ``nonce``/``balance`` and optional ``storage_root``/``code_hash``
    keys, or a ``(nonce, balance, storage_root, code_hash)`` tuple.

    Raises:
        ValidationError: If the account cannot be converted
    """
    if isinstance(account, TrieAccount):
        return account

    converter = getattr(account, 'to_trie_account', None)
    if callable(converter):
        converted = converter()
        if not isinstance(converted, TrieAccount):
            raise ValidationError(
                f"{type(account).__name__}.to_trie_account() returned {type(converted).__name__}"
            )
        return converted

    if isinstance(account, Mapping):
        try:
            return TrieAccount(
                nonce=account['nonce'],
                balance=account['balance'],
                storage_root=account.get('storage_root', EMPTY_ROOT_HASH),
                code_hash=account.get('code_hash', KECCAK_EMPTY),
            )
        except KeyError as e:
            raise ValidationError(f"Account mapping missing field: {e.args[0]}") from e

    if isinstance(account, (tuple, list)) and len(account) == 4:
        return TrieAccount(*account)

    raise ValidationError(
        f"Cannot convert {type(account).__name__} into a trie account",
        context={'account': repr(account)},
    )
