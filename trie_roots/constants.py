"""
Well-known constants for Merkle-Patricia-Trie root computation.
"""

# keccak256(rlp(b'')): root of a trie with no leaves
EMPTY_ROOT_HASH = bytes.fromhex(
    "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
)

# keccak256(b''): code hash of an account without code
KECCAK_EMPTY = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)

HASH_LENGTH = 32
ADDRESS_LENGTH = 20

UINT256_MAX = 2 ** 256 - 1

# Largest index whose RLP encoding is a single byte
RLP_SINGLE_BYTE_MAX = 0x7f
