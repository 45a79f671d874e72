"""Exception types raised by the rendering engine.

Two kinds of failure are surfaced to callers as ordinary, recoverable errors
(:class:`ActivityProviderNotFound`, :class:`ImageExportError`). Everything
else that indicates a bug in the calling code is a :class:`ContractViolation`,
which deliberately derives from ``AssertionError`` so it is never mistaken for
a recoverable condition.
"""

from typing import Optional


class ContractViolation(AssertionError):
    """Caller broke a usage contract (bad coordinate, nested acquire, ...)."""


class ActivityProviderNotFound(LookupError):
    """No constraint exposing per-pixel activity values is available."""


class ImageExportError(OSError):
    """Writing a raster snapshot to ``path`` failed.

    Attributes:
        path: Target file that could not be written.
    """

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        self.path = path
        if message is None:
            message = (
                f"cannot write to file {path}, are you sure the directory exists?"
            )
        super().__init__(message)
