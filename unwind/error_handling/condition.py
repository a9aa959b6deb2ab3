#!/usr/bin/env python3
"""
Error Conditions

Immutable error values plus the exceptions that carry them through the
call stack.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, NoReturn

from .kinds import ErrorKind, kind_for_exception


def _describe(exception: BaseException) -> str:
    try:
        text = str(exception)
    except Exception:
        text = ""
    return text or type(exception).__name__


@dataclass(frozen=True)
class ErrorCondition:
    """
    A raised error, tagged with its kind

    Attributes:
        kind: Category used for handler matching
        attributes: Read-only classification metadata (e.g. ``status``)
        message: Human readable description
        cause: Native exception the condition was built from, if any
    """

    kind: ErrorKind
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)
    message: str = ""
    cause: BaseException | None = field(default=None, compare=False, repr=False)
    timestamp: float = field(default_factory=time.time, compare=False, repr=False)
    thread_id: int = field(default_factory=threading.get_ident, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.kind, ErrorKind):
            raise TypeError(f"kind must be an ErrorKind, got {type(self.kind).__name__}")
        # Freeze a private copy so callers cannot mutate the condition afterwards
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_exception(cls, exception: BaseException, **attributes: Any) -> ErrorCondition:
        """
        Build a condition from a native exception

        A ``ConditionRaised`` already carries its condition, which is returned
        unchanged so that propagation never re-classifies it.
        """
        if isinstance(exception, ConditionRaised):
            return exception.condition

        carried = getattr(exception, "attributes", None)
        merged = dict(carried) if isinstance(carried, Mapping) else {}
        merged.update(attributes)
        return cls(
            kind=kind_for_exception(exception),
            attributes=merged,
            message=_describe(exception),
            cause=exception,
        )

    def raise_(self) -> NoReturn:
        """Raise this condition as a ``ConditionRaised``"""
        raise ConditionRaised(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization"""
        return {
            "kind": self.kind.value,
            "attributes": dict(self.attributes),
            "message": self.message,
            "cause": type(self.cause).__name__ if self.cause is not None else None,
            "timestamp": self.timestamp,
            "thread_id": self.thread_id,
        }


class ConditionRaised(Exception):
    """Carries an ErrorCondition up the call stack"""

    def __init__(self, condition: ErrorCondition):
        super().__init__(condition.message or condition.kind.value)
        self.condition = condition

    @property
    def kind(self) -> ErrorKind:
        return self.condition.kind


class InitializationFailed(ConditionRaised):
    """Raised to every dependent of a failed one-time initialization"""


class FatalTermination(Exception):
    """A condition escaped every protected region of its unit of execution"""

    def __init__(self, condition: ErrorCondition, unit: str = "main"):
        super().__init__(f"Unhandled {condition.kind.value} in unit '{unit}': {condition.message}")
        self.condition = condition
        self.unit = unit


def raise_condition(kind: ErrorKind, message: str = "", **attributes: Any) -> NoReturn:
    """Shortcut for ``ErrorCondition(kind, attributes, message).raise_()``"""
    ErrorCondition(kind=kind, attributes=attributes, message=message).raise_()
