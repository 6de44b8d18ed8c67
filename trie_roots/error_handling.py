"""
Error types and input validation for trie root computation.
Provides the exception hierarchy raised by the root builders and the
normalisation helpers used for keys, addresses and slot values.
"""

import time
from typing import Any, Dict, Optional, Union
from enum import Enum

from eth_utils import is_hex, to_bytes

from .constants import HASH_LENGTH, UINT256_MAX


class ErrorSeverity(Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TrieRootError(Exception):
    """Base exception for trie root computation errors"""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 error_code: Optional[str] = None, context: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = time.time()


class ConfigurationError(TrieRootError):
    """Configuration-related errors"""
    pass


class ValidationError(TrieRootError):
    """Malformed keys, addresses, values or accounts"""
    pass


class UnsortedKeysError(TrieRootError):
    """
    Leaves were not presented in strictly ascending path order.

    This is a broken caller contract on the sorted tiers, not a recoverable
    condition. Use one of the ``*_unsorted`` functions when order is not
    guaranteed.
    """

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, severity=ErrorSeverity.CRITICAL, context=context)


class Validator:
    """Validation utilities for trie keys and values"""

    @staticmethod
    def _as_bytes(value: Any) -> Optional[bytes]:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, str) and is_hex(value):
            return to_bytes(hexstr=value)
        return None

    @staticmethod
    def validate_uint256(value: Any) -> bool:
        """Validate an unsigned 256-bit integer"""
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 0 <= value <= UINT256_MAX

    @staticmethod
    def to_key_bytes(key: Union[bytes, bytearray, str], length: Optional[int] = HASH_LENGTH) -> bytes:
        """
        Normalise a key or address to bytes.

        Args:
            key: Raw bytes or a hex string
            length: Required width in bytes, or None to accept any width

        Raises:
            ValidationError: If the key is not bytes-like or has the wrong width
        """
        raw = Validator._as_bytes(key)
        if raw is None:
            raise ValidationError(
                f"Key must be bytes or a hex string, got {type(key).__name__}",
                context={'key': repr(key)},
            )
        if length is not None and len(raw) != length:
            raise ValidationError(
                f"Key must be {length} bytes, got {len(raw)}",
                context={'key': raw.hex()},
            )
        return raw
