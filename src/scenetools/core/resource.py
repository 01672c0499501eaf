"""Reference-counted base class for disposable GPU-side resources."""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import ResourceDisposedError, ResourceInUseError

logger = logging.getLogger(__name__)


class Resource:
    """A resource that may be shared by several owners.

    Owners call acquire() when they start referencing the resource and
    release() when they stop. The resource is disposed when the last
    reference is released. Calling dispose() directly is only allowed once
    no referrer remains.

    Example:
        geometry.acquire()          # mesh A
        geometry.acquire()          # mesh B
        geometry.release()          # still alive, mesh B holds it
        geometry.release()          # disposed
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._ref_count = 0
        self._disposed = False
        self._listeners: list[Callable[[Resource], None]] = []

    @property
    def ref_count(self) -> int:
        """Number of owners currently referencing this resource."""
        return self._ref_count

    @property
    def is_shared(self) -> bool:
        """True if more than one owner references this resource."""
        return self._ref_count > 1

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on_dispose(self, callback: Callable[[Resource], None]) -> None:
        """Register a callback run once when the resource is disposed."""
        self._listeners.append(callback)

    def acquire(self) -> Resource:
        """Register a new owner.

        Returns:
            The resource itself (for chaining)

        Raises:
            ResourceDisposedError: If the resource was already disposed
        """
        self._check_alive()
        self._ref_count += 1
        return self

    def release(self) -> bool:
        """Drop one owner, disposing the resource when none remain.

        Returns:
            True if this call disposed the resource

        Raises:
            ResourceDisposedError: If the resource was already disposed
        """
        self._check_alive()
        if self._ref_count > 0:
            self._ref_count -= 1
        if self._ref_count > 0:
            logger.debug(
                "%s kept alive, %d referrer(s) remain", self, self._ref_count
            )
            return False
        self.dispose()
        return True

    def dispose(self, force: bool = False) -> None:
        """Free the resource.

        Args:
            force: Dispose even if owners still reference it

        Raises:
            ResourceDisposedError: If already disposed
            ResourceInUseError: If owners remain and force is False
        """
        self._check_alive()
        if self._ref_count > 0 and not force:
            raise ResourceInUseError(
                f"{self} still has {self._ref_count} referrer(s)"
            )
        self._ref_count = 0
        self._disposed = True
        self._free()
        for callback in self._listeners:
            callback(self)
        self._listeners.clear()
        logger.debug("Disposed %s", self)

    def _free(self) -> None:
        """Release the payload. Subclasses override."""

    def _check_alive(self) -> None:
        if self._disposed:
            raise ResourceDisposedError(f"{self} has already been disposed")

    def __repr__(self) -> str:
        state = ", disposed" if self._disposed else f", refs={self._ref_count}"
        return f"{type(self).__name__}({self.name!r}{state})"
