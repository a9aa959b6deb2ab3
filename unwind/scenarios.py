#!/usr/bin/env python3
"""
unwind Scenarios

Small, self-contained walkthroughs of the recovery model: handler ordering,
attribute filters, nested regions, cleanup timing and initialization
failures. Each scenario runs as its own unit of execution and returns a
report of what it printed and how it ended.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .adapters.file_system import FileSystemAdapter, WriteHandle
from .config import Config
from .error_handling import (
    ErrorCondition,
    ErrorKind,
    HandlerChain,
    Outcome,
    ProtectedRegion,
    catch,
    raise_condition,
    run_unit,
    run_units,
)
from .initialization import OnceInitializer
from .resources import FinalizerProbe, ResourceScope
from .utils.logger import get_logger

logger = get_logger(__name__)

MISSING_DIRECTORY = "missing-directory"


@dataclass
class ScenarioContext:
    """Collaborators handed to every scenario"""

    config: Config
    fs: FileSystemAdapter
    messages: list[str] = field(default_factory=list)

    def say(self, message: str) -> None:
        self.messages.append(message)
        logger.info(message)


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    run: Callable[[ScenarioContext], Any]
    fatal: bool = False  # Ends in fatal termination by design


@dataclass
class ScenarioReport:
    name: str
    description: str
    messages: list[str]
    outcome: Outcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "messages": list(self.messages),
            "outcome": self.outcome.to_dict(),
        }


SCENARIOS: dict[str, Scenario] = {}


def scenario(name: str, description: str, fatal: bool = False):
    """Register a scenario function under ``name``"""

    def decorator(func: Callable[[ScenarioContext], Any]) -> Callable[[ScenarioContext], Any]:
        SCENARIOS[name] = Scenario(name=name, description=description, run=func, fatal=fatal)
        return func

    return decorator


def safe_division(x: float, y: float) -> float:
    """Divide, raising DIVISION_BY_ZERO instead of returning inf/nan"""
    if y == 0:
        raise_condition(ErrorKind.DIVISION_BY_ZERO, "Attempted to divide by zero.", dividend=x)
    return x / y


@scenario("division", "Catch a division by zero with a single matching handler")
def division_scenario(ctx: ScenarioContext) -> Outcome:
    a = ctx.config.get("scenarios", "dividend", 98.0)
    b = ctx.config.get("scenarios", "divisor", 0.0)

    def body() -> float:
        result = safe_division(a, b)
        ctx.say(f"{a} divided by {b} = {result}")
        return result

    region = ProtectedRegion(
        HandlerChain.of(
            catch(ErrorKind.DIVISION_BY_ZERO, lambda c: ctx.say("Attempted divide by zero.")),
            name="division",
        ),
        name="division",
    )
    return region.run(body)


@scenario("status-filter", "Filter a domain error on its status before a generic handler")
def status_filter_scenario(ctx: ScenarioContext) -> Outcome:
    status = ctx.config.get("scenarios", "status", 404)

    def body() -> None:
        ctx.say("Do something")
        raise_condition(ErrorKind.DOMAIN_SPECIFIC, "Custom Exception", status=status)

    region = ProtectedRegion(
        HandlerChain.of(
            catch(
                ErrorKind.DOMAIN_SPECIFIC,
                lambda c: ctx.say("Handle something very specific"),
                when=lambda attrs: attrs.get("status") == 500,
                name="status-500",
            ),
            catch(ErrorKind.DOMAIN_SPECIFIC, lambda c: ctx.say("Handle a generic error"), name="generic"),
            name="status-filter",
        ),
        name="status-filter",
    )
    return region.run(body)


def _report(prefix: str, ctx: ScenarioContext) -> Callable[[ErrorCondition], None]:
    return lambda c: ctx.say(f"{prefix}: {c.message}")


@scenario("io-ordering", "Order IO handlers from most to least specific")
def io_ordering_scenario(ctx: ScenarioContext) -> Outcome:
    target = ctx.config.get_workdir() / MISSING_DIRECTORY / "test.txt"

    region = ProtectedRegion(
        HandlerChain.of(
            # More specific kinds first
            catch(ErrorKind.DIRECTORY_NOT_FOUND, _report("Directory not found", ctx)),
            catch(ErrorKind.FILE_NOT_FOUND, _report("File not found", ctx)),
            # Least specific last
            catch(ErrorKind.IO_FAILURE, _report("IO failure", ctx)),
            name="io-ordering",
        ),
        name="io-ordering",
    )
    outcome = region.run(ctx.fs.write_text, target, "Hello")
    ctx.say("Done")
    return outcome


@scenario("finally-reopen", "Release a handle in cleanup so the file can be reopened at once")
def finally_reopen_scenario(ctx: ScenarioContext) -> Outcome:
    workdir = ctx.config.get_workdir()
    workdir.mkdir(parents=True, exist_ok=True)
    path = workdir / "file.txt"
    handle: WriteHandle | None = None

    def first_write() -> None:
        nonlocal handle
        handle = ctx.fs.open_write(path)
        handle.write_byte(0x0F)

    def release() -> None:
        # Without this the reopen below fails with ACCESS_CONFLICT
        if handle is not None:
            handle.close()

    ProtectedRegion(cleanup=release, name="first-write").run(first_write)

    def reopen() -> None:
        with ResourceScope("reopen") as scope:
            scope.acquire(ctx.fs.open_write(path), label=str(path))
            ctx.say("OpenWrite() succeeded")

    region = ProtectedRegion(
        HandlerChain.of(catch(ErrorKind.IO_FAILURE, lambda c: ctx.say("OpenWrite() failed")), name="reopen"),
        name="reopen",
    )
    return region.run(reopen)


@scenario("finalizers", "Abandon objects and leave their reclamation to the garbage collector")
def finalizers_scenario(ctx: ScenarioContext) -> Outcome:
    probes = [FinalizerProbe(ctx.say), FinalizerProbe(ctx.say)]
    ctx.say(f"Created {len(probes)} probes; abandoning them")
    del probes
    # Reclamation may already have happened, may happen later, or only at exit
    ctx.say("Finalizer timing is not part of program order")
    return Outcome.completed()


@scenario("nested", "An inner region that cannot handle a condition defers to the outer one")
def nested_scenario(ctx: ScenarioContext) -> Outcome:
    def inner_body() -> None:
        raise_condition(ErrorKind.ARITHMETIC, "Overflow or underflow in the arithmetic operation.")

    inner = ProtectedRegion(
        HandlerChain.of(catch(ErrorKind.DIVISION_BY_ZERO, lambda c: ctx.say("Oops, divide by zero")), name="inner"),
        cleanup=lambda: ctx.say("Inner cleanup"),
        name="inner",
    )
    outer = ProtectedRegion(
        HandlerChain.of(catch(ErrorKind.GENERIC_FAILURE, lambda c: ctx.say("Something bad happened")), name="outer"),
        name="outer",
    )
    return outer.run(inner.run, inner_body)


@scenario("fatal", "A condition no region handles terminates its unit", fatal=True)
def fatal_scenario(ctx: ScenarioContext) -> Outcome:
    def body() -> None:
        raise_condition(ErrorKind.DOMAIN_SPECIFIC, "Custom Exception", status=500)

    region = ProtectedRegion(
        HandlerChain.of(
            catch(
                ErrorKind.DOMAIN_SPECIFIC,
                lambda c: ctx.say("Handle a not found status"),
                when=lambda attrs: attrs.get("status") == 404,
            ),
            name="fatal",
        ),
        cleanup=lambda: ctx.say("Cleanup still runs"),
        name="fatal",
    )
    return region.run(body)


@scenario("initialization", "A failed one-time initialization poisons every dependent unit")
def initialization_scenario(ctx: ScenarioContext) -> Outcome:
    settings_path = ctx.config.get_workdir() / MISSING_DIRECTORY / "settings.json"
    settings = OnceInitializer("settings", lambda: ctx.fs.read_text(settings_path))

    dependents = {f"dependent-{index}": settings.get for index in (1, 2)}
    outcomes = run_units(dependents, max_workers=ctx.config.get("execution", "max_workers", 4))

    summary = {}
    for unit, unit_outcome in outcomes.items():
        kind = unit_outcome.condition.kind.value if unit_outcome.condition else "none"
        ctx.say(f"{unit}: {unit_outcome.status.value} ({kind})")
        summary[unit] = unit_outcome.status.value
    return Outcome.completed(summary)


def list_scenarios() -> list[Scenario]:
    return list(SCENARIOS.values())


def default_scenarios() -> list[str]:
    """Scenario names run when none are requested, fatal ones excluded"""
    return [name for name, entry in SCENARIOS.items() if not entry.fatal]


def run_scenario(
    name: str,
    config: Config | None = None,
    fs: FileSystemAdapter | None = None,
) -> ScenarioReport:
    """
    Run one registered scenario as its own unit of execution

    Raises:
        KeyError: Unknown scenario name
    """
    entry = SCENARIOS[name]
    ctx = ScenarioContext(config=config or Config(create=False), fs=fs or FileSystemAdapter())
    outcome = run_unit(lambda: entry.run(ctx), name=name)
    return ScenarioReport(name=name, description=entry.description, messages=ctx.messages, outcome=outcome)
