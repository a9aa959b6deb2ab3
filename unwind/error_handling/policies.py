#!/usr/bin/env python3
"""
Handler Policies

Declarative handler specs and the ordered chains that group them per
protected region.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..utils.logger import get_logger
from .condition import ErrorCondition
from .kinds import ErrorKind, is_a

logger = get_logger(__name__)

Predicate = Callable[[Mapping[str, Any]], bool]
Action = Callable[[ErrorCondition], Any]


@dataclass(frozen=True)
class HandlerSpec:
    """
    One entry of a handler chain

    Attributes:
        match_kind: Kind accepted, including every specialization of it
        action: Callback invoked with the condition when selected
        predicate: Optional filter over the condition attributes
        name: Label used in logs and reports
    """

    match_kind: ErrorKind
    action: Action
    predicate: Predicate | None = None
    name: str = ""

    def __post_init__(self):
        """Validate handler configuration"""
        if not isinstance(self.match_kind, ErrorKind):
            raise TypeError("match_kind must be an ErrorKind")

        if not callable(self.action):
            raise TypeError("action must be callable")

        if self.predicate is not None and not callable(self.predicate):
            raise TypeError("predicate must be callable or None")

        if not self.name:
            suffix = " (filtered)" if self.predicate is not None else ""
            object.__setattr__(self, "name", f"{self.match_kind.value}{suffix}")

    @property
    def guarded(self) -> bool:
        return self.predicate is not None

    def matches(self, condition: ErrorCondition) -> bool:
        """
        Check whether this handler accepts a condition

        The kind check runs first, so the predicate only ever sees
        attributes of conditions the handler structurally accepts. A predicate
        that raises is not swallowed.
        """
        if not is_a(condition.kind, self.match_kind):
            return False
        if self.predicate is None:
            return True
        return bool(self.predicate(condition.attributes))


def catch(
    kind: ErrorKind,
    action: Action,
    when: Predicate | None = None,
    name: str = "",
) -> HandlerSpec:
    """Build a HandlerSpec, reading like a catch clause"""
    return HandlerSpec(match_kind=kind, action=action, predicate=when, name=name)


@dataclass(frozen=True)
class HandlerChain:
    """
    Ordered handler specs for one protected region

    Entries should be ordered most specific kind first, with any catch-all
    last. An out-of-order chain is accepted, but the shadowed entries are
    reported through ``unreachable_handlers`` and logged as a warning.
    """

    handlers: tuple[HandlerSpec, ...] = field(default_factory=tuple)
    name: str = "chain"

    def __post_init__(self):
        handlers = tuple(self.handlers)
        for handler in handlers:
            if not isinstance(handler, HandlerSpec):
                raise TypeError(f"HandlerChain entries must be HandlerSpec, got {type(handler).__name__}")
        object.__setattr__(self, "handlers", handlers)

        for index, shadowed_by in self.unreachable_handlers():
            logger.warning(
                f"Handler '{handlers[index].name}' at position {index} in {self.name} is unreachable, "
                f"shadowed by '{handlers[shadowed_by].name}' at position {shadowed_by}"
            )

    @classmethod
    def of(cls, *handlers: HandlerSpec, name: str = "chain") -> "HandlerChain":
        return cls(handlers=handlers, name=name)

    @classmethod
    def empty(cls, name: str = "chain") -> "HandlerChain":
        return cls(handlers=(), name=name)

    def __iter__(self) -> Iterator[HandlerSpec]:
        return iter(self.handlers)

    def __len__(self) -> int:
        return len(self.handlers)

    def __getitem__(self, index: int) -> HandlerSpec:
        return self.handlers[index]

    def unreachable_handlers(self) -> list[tuple[int, int]]:
        """
        Find entries that can never be selected

        An entry is shadowed when an earlier, unguarded entry accepts a kind
        equal to or more general than its own.

        Returns:
            List of ``(index, shadowed_by_index)`` pairs
        """
        shadowed = []
        for index, handler in enumerate(self.handlers):
            for earlier_index in range(index):
                earlier = self.handlers[earlier_index]
                if not earlier.guarded and is_a(handler.match_kind, earlier.match_kind):
                    shadowed.append((index, earlier_index))
                    break
        return shadowed

    def is_well_ordered(self) -> bool:
        """True when every entry is reachable"""
        return not self.unreachable_handlers()

    def extended(self, handlers: Iterable[HandlerSpec]) -> "HandlerChain":
        """Return a new chain with extra entries appended"""
        return HandlerChain(handlers=self.handlers + tuple(handlers), name=self.name)
