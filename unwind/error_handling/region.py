#!/usr/bin/env python3
"""
Protected Regions

A protected region runs a block of logic against its handler chain and
guarantees its cleanup action runs exactly once on every exit path. Regions
nest through the ordinary call stack: a condition left unhandled by an inner
region is re-raised after the inner cleanup and evaluated by the next
enclosing region.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..utils.logger import get_logger
from .condition import ErrorCondition, FatalTermination
from .evaluator import Outcome, OutcomeStatus, evaluate
from .policies import HandlerChain

logger = get_logger(__name__)

CleanupAction = Callable[[], Any]


def _describe(exception: BaseException) -> str:
    if isinstance(exception, Exception):
        condition = ErrorCondition.from_exception(exception)
        return f"{condition.kind.value} ({condition.message})"
    return type(exception).__name__


class ProtectedRegion:
    """
    Handler chain plus optional cleanup action for one block of logic

    The definition is static: nothing on the instance changes while a body
    runs, so the same region may be entered from several threads or
    recursively.

    Example:
        region = ProtectedRegion(
            HandlerChain.of(catch(ErrorKind.DIVISION_BY_ZERO, report)),
            cleanup=handle.close,
        )
        outcome = region.run(divide, 98, 0)
    """

    def __init__(
        self,
        chain: HandlerChain | None = None,
        cleanup: CleanupAction | None = None,
        name: str = "region",
    ):
        if cleanup is not None and not callable(cleanup):
            raise TypeError("cleanup must be callable or None")
        self.name = name
        self.chain = chain if chain is not None else HandlerChain.empty(name=name)
        self.cleanup = cleanup

    def __repr__(self) -> str:
        return f"ProtectedRegion(name={self.name!r}, handlers={len(self.chain)}, cleanup={self.cleanup is not None})"

    def _dispatch(self, exception: BaseException) -> tuple[Outcome | None, BaseException | None]:
        """
        Evaluate an exception raised by the body

        Returns:
            ``(outcome, pending)`` where ``pending`` is the exception that must
            leave the region once cleanup has run, or None when handled
        """
        if not isinstance(exception, Exception):
            # KeyboardInterrupt, SystemExit and friends are never evaluated
            return None, exception

        condition = ErrorCondition.from_exception(exception)
        try:
            outcome = evaluate(condition, self.chain)
        except BaseException as action_error:
            logger.debug(f"{self.name}: handler for {condition.kind.value} raised {type(action_error).__name__}")
            return None, action_error

        if outcome.handled:
            return outcome, None
        return outcome, exception

    def _run_cleanup(self, in_flight: BaseException | None) -> None:
        """Run the cleanup action; anything it raises replaces ``in_flight``"""
        if self.cleanup is None:
            return
        try:
            self.cleanup()
        except BaseException as cleanup_error:
            if in_flight is not None:
                logger.warning(
                    f"{self.name}: cleanup raised {type(cleanup_error).__name__}, "
                    f"replacing propagating {_describe(in_flight)}"
                )
                cleanup_error.__context__ = in_flight
            raise

    def run(self, body: Callable[..., Any], *args: Any, propagate: bool = True, **kwargs: Any) -> Outcome:
        """
        Run ``body`` inside this region

        Args:
            body: Protected logic
            *args: Positional arguments for body
            propagate: Re-raise unhandled conditions after cleanup (default).
                When False, an UNHANDLED outcome is returned instead.
            **kwargs: Keyword arguments for body

        Returns:
            COMPLETED or HANDLED outcome (or UNHANDLED when ``propagate`` is off)

        Raises:
            The unhandled exception, an exception raised by a handler action,
            or an exception raised by the cleanup action
        """
        outcome: Outcome | None = None
        pending: BaseException | None = None
        try:
            try:
                outcome = Outcome.completed(body(*args, **kwargs))
            except BaseException as exc:
                pending = exc
                outcome, pending = self._dispatch(exc)
        finally:
            self._run_cleanup(pending)

        if pending is not None:
            if not propagate and outcome is not None and outcome.status == OutcomeStatus.UNHANDLED:
                return outcome
            raise pending
        return outcome

    def __enter__(self) -> "ProtectedRegion":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None:
            self._run_cleanup(None)
            return False

        pending: BaseException | None = exc
        try:
            _, pending = self._dispatch(exc)
        finally:
            self._run_cleanup(pending)

        if pending is None:
            return True
        if pending is exc:
            return False
        raise pending


def _terminate(
    condition: ErrorCondition, name: str, raise_on_fatal: bool, cause: BaseException | None = None
) -> Outcome:
    logger.critical(f"Fatal termination of unit '{name}': unhandled {condition.kind.value}: {condition.message}")
    if raise_on_fatal:
        raise FatalTermination(condition, unit=name) from (cause or condition.cause)
    return Outcome(status=OutcomeStatus.FATAL, condition=condition)


def run_unit(body: Callable[[], Any], name: str = "main", raise_on_fatal: bool = False) -> Outcome:
    """
    Run ``body`` as the outermost boundary of a unit of execution

    A condition that escapes every protected region inside ``body`` is a fatal
    termination of this unit. It is logged and reported as a FATAL outcome,
    never silently dropped.

    Args:
        body: Unit entry point
        name: Unit name used in logs
        raise_on_fatal: Raise FatalTermination instead of returning FATAL

    Returns:
        The body's own Outcome if it returns one, else COMPLETED or FATAL.
        A returned UNHANDLED outcome left the outermost region, so it is
        reported as FATAL as well.
    """
    try:
        result = body()
    except Exception as exc:
        return _terminate(ErrorCondition.from_exception(exc), name, raise_on_fatal, exc)

    if isinstance(result, Outcome):
        if result.status == OutcomeStatus.UNHANDLED and result.condition is not None:
            return _terminate(result.condition, name, raise_on_fatal)
        return result
    return Outcome.completed(result)


def run_units(bodies: Mapping[str, Callable[[], Any]], max_workers: int = 4) -> dict[str, Outcome]:
    """
    Run independent units of execution concurrently

    Each unit evaluates its own regions; a fatal outcome ends only that unit.

    Args:
        bodies: Unit name to entry point
        max_workers: Thread pool size

    Returns:
        Unit name to Outcome, in the order given
    """
    if max_workers < 1:
        raise ValueError("max_workers must be positive")

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="unwind-unit") as executor:
        futures = {name: executor.submit(run_unit, body, name) for name, body in bodies.items()}
        return {name: future.result() for name, future in futures.items()}
