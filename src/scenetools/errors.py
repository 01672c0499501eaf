"""Error types raised by scenetools.

Hard failures derive from SceneToolsError and from the closest builtin
exception, so callers can catch either.
"""

from __future__ import annotations

from enum import Enum


class MissingAttribute(Enum):
    """Which optional geometry stream was requested but absent."""

    NO_NORMAL = "normal"
    NO_UV = "uv"
    NO_INDEX = "index"


class SceneToolsError(Exception):
    """Base class for all scenetools errors."""


class NotBufferGeometryError(SceneToolsError, TypeError):
    def __init__(self, obj: object) -> None:
        super().__init__(f"Not a buffer geometry: {type(obj).__name__}")
        self.obj = obj


class NotObjectError(SceneToolsError, TypeError):
    def __init__(self, obj: object) -> None:
        super().__init__(f"Not a scene node: {type(obj).__name__}")
        self.obj = obj


class MissingAttributeError(SceneToolsError, LookupError):
    def __init__(self, kind: MissingAttribute) -> None:
        super().__init__(f"No {kind.value} attribute found")
        self.kind = kind


class IndexOutOfRangeError(SceneToolsError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index {index} out of range [0, {size})")
        self.index = index
        self.size = size


class MalformedGeometryError(SceneToolsError, ValueError):
    """Attribute streams that cannot describe whole triangles."""


class ResourceDisposedError(SceneToolsError, RuntimeError):
    """A disposed resource was used or disposed again."""


class ResourceInUseError(SceneToolsError, RuntimeError):
    """A resource was disposed while other objects still reference it."""
