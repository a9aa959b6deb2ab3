#!/usr/bin/env python3
"""
Error Recovery Policy Evaluator

Selects the first matching handler of a chain for a raised condition and
invokes it.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..utils.logger import get_logger
from .condition import ErrorCondition
from .policies import HandlerChain, HandlerSpec

logger = get_logger(__name__)


class OutcomeStatus(Enum):
    """Result of evaluating a region or unit"""

    COMPLETED = "completed"  # Body finished without raising
    HANDLED = "handled"  # A handler action ran, control resumes after the region
    UNHANDLED = "unhandled"  # No handler matched, condition propagates outward
    FATAL = "fatal"  # Escaped the outermost region


@dataclass(frozen=True)
class Outcome:
    """What happened to a protected region or unit of execution"""

    status: OutcomeStatus
    condition: ErrorCondition | None = None
    handler: HandlerSpec | None = None
    result: Any = None

    @property
    def handled(self) -> bool:
        return self.status == OutcomeStatus.HANDLED

    @property
    def fatal(self) -> bool:
        return self.status == OutcomeStatus.FATAL

    @property
    def ok(self) -> bool:
        """True when control resumed normally after the region"""
        return self.status in (OutcomeStatus.COMPLETED, OutcomeStatus.HANDLED)

    @classmethod
    def completed(cls, result: Any = None) -> "Outcome":
        return cls(status=OutcomeStatus.COMPLETED, result=result)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "condition": self.condition.to_dict() if self.condition else None,
            "handler": self.handler.name if self.handler else None,
            "result": self.result,
        }


def select_handler(condition: ErrorCondition, chain: HandlerChain) -> HandlerSpec | None:
    """
    Pick the first handler of the chain that accepts the condition

    Args:
        condition: Raised condition
        chain: Handlers of the innermost enclosing region

    Returns:
        The selected handler, or None when nothing matches at this level
    """
    for position, handler in enumerate(chain):
        if handler.matches(condition):
            logger.debug(
                f"{chain.name}: {condition.kind.value} matched handler '{handler.name}' at position {position}"
            )
            return handler
    return None


def evaluate(condition: ErrorCondition, chain: HandlerChain) -> Outcome:
    """
    Evaluate a condition against a handler chain

    Exactly one action is invoked when the result is HANDLED; none when it
    is UNHANDLED. Later entries are skipped even if they would also match.
    Exceptions raised by the action propagate to the caller.

    Args:
        condition: Raised condition
        chain: Ordered handler chain

    Returns:
        Outcome with status HANDLED or UNHANDLED
    """
    handler = select_handler(condition, chain)
    if handler is None:
        logger.debug(f"{chain.name}: no handler for {condition.kind.value}, propagating")
        return Outcome(status=OutcomeStatus.UNHANDLED, condition=condition)

    result = handler.action(condition)
    return Outcome(status=OutcomeStatus.HANDLED, condition=condition, handler=handler, result=result)
