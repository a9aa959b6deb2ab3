"""Tests for unwind/resources.py."""

from __future__ import annotations

import logging

import pytest

from unwind.error_handling import ErrorKind, HandlerChain, ProtectedRegion, catch, raise_condition
from unwind.resources import FinalizerProbe, ResourceScope, register_finalizer


class Handle:
    def __init__(self, name: str, events: list[str], fail: bool = False):
        self.name = name
        self.events = events
        self.fail = fail

    def close(self):
        self.events.append(f"close {self.name}")
        if self.fail:
            raise OSError(f"{self.name} close failed")


def test_releases_in_reverse_acquisition_order():
    events: list[str] = []
    with ResourceScope("scope") as scope:
        scope.acquire(Handle("a", events))
        scope.acquire(Handle("b", events))
        scope.acquire(Handle("c", events))
        assert len(scope) == 3

    assert events == ["close c", "close b", "close a"]
    assert scope.closed


def test_releases_on_propagating_error():
    events: list[str] = []
    with pytest.raises(ValueError):
        with ResourceScope() as scope:
            scope.acquire(Handle("a", events))
            raise ValueError("boom")
    assert events == ["close a"]


def test_releases_on_early_return():
    events: list[str] = []

    def work():
        with ResourceScope() as scope:
            scope.acquire(Handle("a", events))
            return "early"

    assert work() == "early"
    assert events == ["close a"]


def test_release_happens_before_enclosing_handler_observes_exit():
    events: list[str] = []

    def body():
        with ResourceScope() as scope:
            scope.acquire(Handle("file", events))
            raise_condition(ErrorKind.IO_FAILURE)

    region = ProtectedRegion(
        HandlerChain.of(catch(ErrorKind.IO_FAILURE, lambda c: events.append("handler"))),
    )
    region.run(body)
    assert events == ["close file", "handler"]


def test_each_release_runs_once():
    events: list[str] = []
    scope = ResourceScope()
    scope.acquire(Handle("a", events))
    scope.close()
    scope.close()
    assert events == ["close a"]


def test_acquire_after_close_is_rejected():
    scope = ResourceScope("done")
    scope.close()
    with pytest.raises(RuntimeError, match="already closed"):
        scope.acquire(Handle("late", []))


def test_explicit_release_callable():
    released = []
    with ResourceScope() as scope:
        token = scope.acquire(object(), release=lambda: released.append("token"))
    assert token is not None
    assert released == ["token"]


def test_acquire_requires_close_or_release():
    with pytest.raises(TypeError, match="close"):
        ResourceScope().acquire(object())


def test_failing_release_does_not_stop_others(caplog):
    caplog.set_level(logging.WARNING, logger="unwind")
    events: list[str] = []
    scope = ResourceScope("partial")
    scope.acquire(Handle("a", events, fail=True))
    scope.acquire(Handle("b", events))
    scope.acquire(Handle("c", events, fail=True))

    with pytest.raises(OSError, match="a close failed") as exc_info:
        scope.close()

    assert events == ["close c", "close b", "close a"]
    assert isinstance(exc_info.value.__context__, OSError)
    assert "replacing earlier OSError" in caplog.text


def test_release_error_replaces_propagating_error(caplog):
    caplog.set_level(logging.WARNING, logger="unwind")
    with pytest.raises(OSError, match="close failed"):
        with ResourceScope("hazard") as scope:
            scope.acquire(Handle("a", [], fail=True))
            raise ValueError("original")
    assert "replacing propagating ValueError" in caplog.text


def test_register_finalizer_runs_callback_once_when_invoked():
    calls = []

    class Thing:
        pass

    thing = Thing()
    finalizer = register_finalizer(thing, calls.append, "reclaimed")
    assert finalizer.alive

    finalizer()
    finalizer()

    assert calls == ["reclaimed"]
    assert not finalizer.alive


def test_finalizer_probe_reports_construction():
    messages: list[str] = []
    probe = FinalizerProbe(messages.append)

    assert messages == [f"Starting probe {probe.probe_id}..."]
    probe.finalizer()
    assert messages[-1] == f"Ending probe {probe.probe_id}..."
