#!/usr/bin/env python3
"""
Scoped resource release and best-effort finalization

``ResourceScope`` releases everything acquired in it in reverse order on
every exit path. ``register_finalizer`` is only a background safety net for
abandoned objects: the garbage collector decides when (and on some runtimes
whether) it fires, so nothing timing-sensitive may depend on it.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

import itertools
import weakref
from collections.abc import Callable
from typing import Any, TypeVar

from .utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ResourceScope:
    """
    Deterministic, reverse-order release of acquired resources

    Example:
        with ResourceScope("report") as scope:
            source = scope.acquire(open(src))
            target = scope.acquire(open(dst, "w"))
            ...
        # target released, then source, before any enclosing handler runs
    """

    def __init__(self, name: str = "scope"):
        self.name = name
        self._releases: list[tuple[str, Callable[[], Any]]] = []
        self._closed = False

    def __len__(self) -> int:
        return len(self._releases)

    @property
    def closed(self) -> bool:
        return self._closed

    def acquire(self, resource: T, release: Callable[[], Any] | None = None, label: str = "") -> T:
        """
        Register a resource for release when the scope exits

        Args:
            resource: The acquired object, returned unchanged
            release: Release callable, defaults to ``resource.close``
            label: Name used in logs

        Returns:
            ``resource``
        """
        if self._closed:
            raise RuntimeError(f"Resource scope '{self.name}' is already closed")

        if release is None:
            release = getattr(resource, "close", None)
            if not callable(release):
                raise TypeError(f"{type(resource).__name__} has no close(); pass release explicitly")

        self._releases.append((label or type(resource).__name__, release))
        return resource

    def close(self) -> None:
        """
        Release every registered resource, most recent first

        Each release runs exactly once. A failing release does not stop the
        others; the last failure is raised once all have run and any earlier
        ones are logged.
        """
        if self._closed:
            return
        self._closed = True

        failure: BaseException | None = None
        while self._releases:
            label, release = self._releases.pop()
            try:
                release()
                logger.debug(f"{self.name}: released {label}")
            except BaseException as exc:
                if failure is not None:
                    logger.warning(
                        f"{self.name}: release of {label} raised {type(exc).__name__}, "
                        f"replacing earlier {type(failure).__name__}: {failure}"
                    )
                    exc.__context__ = failure
                failure = exc

        if failure is not None:
            raise failure

    def __enter__(self) -> "ResourceScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is not None:
            try:
                self.close()
            except BaseException as release_error:
                logger.warning(
                    f"{self.name}: release raised {type(release_error).__name__}, "
                    f"replacing propagating {type(exc).__name__}: {exc}"
                )
                raise
            return False

        self.close()
        return False


def register_finalizer(obj: Any, callback: Callable[..., Any], *args: Any) -> weakref.finalize:
    """
    Attach a best-effort reclamation hook to an object

    The callback runs when the object is garbage collected or at interpreter
    exit, whichever comes first. Its timing is unordered relative to program
    logic; use ResourceScope for anything that must happen at a known point.
    """
    finalizer = weakref.finalize(obj, callback, *args)
    finalizer.atexit = True
    return finalizer


class FinalizerProbe:
    """Object that reports its construction and background reclamation"""

    _ids = itertools.count(1)

    def __init__(self, sink: Callable[[str], Any] | None = None):
        self.probe_id = next(self._ids)
        self._sink = sink or logger.info
        self._sink(f"Starting probe {self.probe_id}...")
        self.finalizer = register_finalizer(self, self._sink, f"Ending probe {self.probe_id}...")