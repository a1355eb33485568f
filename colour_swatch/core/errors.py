"""Error taxonomy for swatch loading and segmentation.

Every failure is a SwatchError tagged with an ErrorKind and the context
needed to describe it (path, key, strip index, offending value). Message
text is built on demand in __str__ so callers can present errors however
they like.

Validation rules return a Check instead of raising, so each rule can be
tested on its own. The loader unwraps them, which raises on the first
failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class ErrorKind(str, Enum):
    MISSING_FILE = 'missing-file'
    MISSING_KEY = 'missing-key'
    INVALID_COLOR = 'invalid-color'
    INVALID_VALUE = 'invalid-value'
    COUNT_MISMATCH = 'count-mismatch'
    MISSING_LABEL = 'missing-label'
    SIZE_MISMATCH = 'size-mismatch'
    MASK_DECODE_ERROR = 'mask-decode-error'
    INCONSISTENT_STATE = 'inconsistent-state'
    PRECONDITION_VIOLATION = 'precondition-violation'


_MESSAGES = {
    ErrorKind.MISSING_FILE: 'The specified file does not exist',
    ErrorKind.MISSING_KEY: 'Mandatory key is missing',
    ErrorKind.INVALID_COLOR: 'The specified color is invalid',
    ErrorKind.INVALID_VALUE: 'Value cannot be parsed',
    ErrorKind.COUNT_MISMATCH: 'Section does not have the same reflectances and ISCC-NBS count',
    ErrorKind.MISSING_LABEL: 'Patch will not have any ISCC-NBS colour',
    ErrorKind.SIZE_MISMATCH: "Image file and mask image haven't the same size",
    ErrorKind.MASK_DECODE_ERROR: 'Mask image cannot be loaded',
    ErrorKind.INCONSISTENT_STATE: 'Mask loaded but not applied as image file not loaded',
    ErrorKind.PRECONDITION_VIOLATION: 'Operation prerequisites not met',
}


class SwatchError(Exception):
    """A swatch configuration or processing failure."""

    def __init__(
        self,
        kind: ErrorKind,
        *,
        path: str | None = None,
        key: str | None = None,
        strip: int | None = None,
        value: Any = None,
        detail: str | None = None,
    ):
        self.kind = kind
        self.path = path
        self.key = key
        self.strip = strip
        self.value = value
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        parts = [_MESSAGES[self.kind]]
        if self.strip is not None:
            parts.append(f'strip:{self.strip}')
        if self.key is not None:
            parts.append(f'key {self.key!r}')
        if self.value is not None:
            parts.append(f'value [{self.value}]')
        if self.path is not None:
            parts.append(f': {self.path}')
        text = ' '.join(parts)
        if self.detail:
            text += f' ({self.detail})'
        return text

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            'kind': self.kind.value,
            'message': self.message,
            'path': self.path,
            'key': self.key,
            'strip': self.strip,
            'value': self.value,
        }


@dataclass(frozen=True)
class Check(Generic[T]):
    """Outcome of one validation rule: either a value or an error."""

    value: T | None = None
    error: SwatchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Check[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, **context: Any) -> Check[T]:
        return cls(error=SwatchError(kind, **context))

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
