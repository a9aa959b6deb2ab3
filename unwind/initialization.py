#!/usr/bin/env python3
"""One-time process-wide initialization with a cached result."""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar

from .error_handling.condition import ErrorCondition, InitializationFailed
from .error_handling.kinds import ErrorKind
from .utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class InitState(Enum):
    """Lifecycle of a OnceInitializer"""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class OnceInitializer(Generic[T]):
    """
    Run an initializer at most once and cache its result for the process

    A failure is cached too: every dependent calling ``get()`` afterwards
    receives ``InitializationFailed`` with kind INITIALIZATION_FAILURE, and
    the initializer is never retried.
    """

    def __init__(self, name: str, init: Callable[[], T]):
        self.name = name
        self._init = init
        self._state = InitState.PENDING
        self._value: T | None = None
        self._failure: ErrorCondition | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def failure(self) -> ErrorCondition | None:
        return self._failure

    def get(self) -> T:
        """Return the initialized value, initializing on first use"""
        with self._lock:
            if self._state == InitState.PENDING:
                self._initialize()

            if self._failure is not None:
                raise InitializationFailed(self._failure) from self._failure.cause

            return self._value  # type: ignore[return-value]

    def _initialize(self) -> None:
        try:
            self._value = self._init()
        except Exception as exc:
            original = ErrorCondition.from_exception(exc)
            attributes: dict[str, Any] = {
                "initializer": self.name,
                "original_kind": original.kind.value,
            }
            self._failure = ErrorCondition(
                kind=ErrorKind.INITIALIZATION_FAILURE,
                attributes=attributes,
                message=f"Initializer '{self.name}' failed: {original.message}",
                cause=exc,
            )
            self._state = InitState.FAILED
            logger.error(f"Initialization of '{self.name}' failed, dependents are poisoned: {original.message}")
            return

        self._state = InitState.READY
        logger.debug(f"Initialization of '{self.name}' succeeded")

    def reset(self) -> None:
        """Forget the cached result (tests only)"""
        with self._lock:
            self._state = InitState.PENDING
            self._value = None
            self._failure = None


__all__ = ["InitState", "InitializationFailed", "OnceInitializer"]
