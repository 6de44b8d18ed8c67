from dataclasses import dataclass
from typing import Tuple, Union

from .error_handling import ValidationError, Validator


@dataclass(frozen=True)
class StorageValue:
    """
    A storage slot value together with its privacy flag.

    Slots may be given either as a bare integer (always public) or as an
    ``(integer, is_private)`` pair; ``coerce`` turns both into this shape.
    """
    value: int
    is_private: bool = False

    def __post_init__(self):
        if not Validator.validate_uint256(self.value):
            raise ValidationError(
                f"Storage value must be an unsigned 256-bit integer, got {self.value!r}",
                context={'value': repr(self.value)},
            )

    @classmethod
    def coerce(cls, raw: Union["StorageValue", int, Tuple[int, bool]]) -> "StorageValue":
        if isinstance(raw, StorageValue):
            return raw
        if isinstance(raw, tuple):
            if len(raw) != 2:
                raise ValidationError(
                    f"Storage value pair must be (value, is_private), got {len(raw)} elements"
                )
            value, is_private = raw
            return cls(value, bool(is_private))
        return cls(raw)
