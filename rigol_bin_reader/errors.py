"""Error taxonomy for the .bin decoder.

- :class:`RigolBinIOError`: the source cannot be opened or a fixed region is cut short.
- :class:`FormatError`: the content is structurally malformed.
- :class:`CompatibilityWarning`: non-fatal; collected on the decoded result, never raised.

Every error carries a ``kind`` and, where known, the absolute byte ``offset`` at
which the failing check was made.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class IOErrorKind(Enum):
    NOT_FOUND = "NotFound"
    PERMISSION_DENIED = "PermissionDenied"
    TRUNCATED = "Truncated"


class FormatErrorKind(Enum):
    BAD_SIGNATURE = "BadSignature"
    UNKNOWN_UNIT_CODE = "UnknownUnitCode"
    INVALID_DESCRIPTOR = "InvalidDescriptor"
    TRUNCATED_CHANNEL_DATA = "TruncatedChannelData"


class CompatibilityKind(Enum):
    VERSION_MISMATCH = "VersionMismatch"


class RigolBinError(Exception):
    """Base class for decode failures."""

    def __init__(self, kind: Enum, message: str, offset: Optional[int] = None) -> None:
        self.kind = kind
        self.message = message
        self.offset = offset
        super().__init__(self._render())

    def _render(self) -> str:
        txt = f"{self.kind.value}: {self.message}"
        if self.offset is not None:
            txt += f" (at byte offset {self.offset})"
        return txt

    def __str__(self) -> str:
        return self._render()


class RigolBinIOError(RigolBinError, OSError):
    kind: IOErrorKind


class FormatError(RigolBinError, ValueError):
    kind: FormatErrorKind


class CompatibilityWarning(UserWarning):
    """Format compatibility finding that does not stop the decode."""

    def __init__(self, kind: CompatibilityKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}")
