"""Tests for unwind/error_handling/evaluator.py."""

from __future__ import annotations

import pytest

from unwind.error_handling.condition import ErrorCondition
from unwind.error_handling.evaluator import Outcome, OutcomeStatus, evaluate, select_handler
from unwind.error_handling.kinds import ErrorKind
from unwind.error_handling.policies import HandlerChain, catch


class Recorder:
    """Collects which handler actions ran."""

    def __init__(self):
        self.calls: list[str] = []

    def action(self, label: str, result=None):
        def _action(condition):
            self.calls.append(label)
            return result

        return _action


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


def _io_chain(recorder: Recorder) -> HandlerChain:
    return HandlerChain.of(
        catch(ErrorKind.DIRECTORY_NOT_FOUND, recorder.action("directory")),
        catch(ErrorKind.FILE_NOT_FOUND, recorder.action("file")),
        catch(ErrorKind.IO_FAILURE, recorder.action("io")),
    )


def test_directory_not_found_invokes_only_first_action(recorder):
    outcome = evaluate(ErrorCondition(ErrorKind.DIRECTORY_NOT_FOUND), _io_chain(recorder))

    assert outcome.status is OutcomeStatus.HANDLED
    assert outcome.handler.match_kind is ErrorKind.DIRECTORY_NOT_FOUND
    assert recorder.calls == ["directory"]


def test_file_not_found_skips_more_specific_entry(recorder):
    evaluate(ErrorCondition(ErrorKind.FILE_NOT_FOUND), _io_chain(recorder))
    assert recorder.calls == ["file"]


def test_access_conflict_falls_through_to_generic_io(recorder):
    evaluate(ErrorCondition(ErrorKind.ACCESS_CONFLICT), _io_chain(recorder))
    assert recorder.calls == ["io"]


def test_status_404_skips_guarded_entry_and_matches_generic(recorder):
    chain = HandlerChain.of(
        catch(ErrorKind.DOMAIN_SPECIFIC, recorder.action("500"), when=lambda a: a.get("status") == 500),
        catch(ErrorKind.DOMAIN_SPECIFIC, recorder.action("generic")),
    )

    outcome = evaluate(ErrorCondition(ErrorKind.DOMAIN_SPECIFIC, {"status": 404}), chain)

    assert outcome.handled
    assert recorder.calls == ["generic"]


def test_status_500_matches_guarded_entry(recorder):
    chain = HandlerChain.of(
        catch(ErrorKind.DOMAIN_SPECIFIC, recorder.action("500"), when=lambda a: a.get("status") == 500),
        catch(ErrorKind.DOMAIN_SPECIFIC, recorder.action("generic")),
    )

    evaluate(ErrorCondition(ErrorKind.DOMAIN_SPECIFIC, {"status": 500}), chain)
    assert recorder.calls == ["500"]


def test_no_match_is_unhandled_and_invokes_nothing(recorder):
    chain = HandlerChain.of(catch(ErrorKind.DIVISION_BY_ZERO, recorder.action("zero")))

    outcome = evaluate(ErrorCondition(ErrorKind.ARITHMETIC), chain)

    assert outcome.status is OutcomeStatus.UNHANDLED
    assert outcome.handler is None
    assert outcome.condition.kind is ErrorKind.ARITHMETIC
    assert recorder.calls == []


def test_empty_chain_is_unhandled():
    outcome = evaluate(ErrorCondition(ErrorKind.GENERIC_FAILURE), HandlerChain.empty())
    assert outcome.status is OutcomeStatus.UNHANDLED


def test_action_result_is_returned(recorder):
    chain = HandlerChain.of(catch(ErrorKind.GENERIC_FAILURE, recorder.action("any", result=42)))
    outcome = evaluate(ErrorCondition(ErrorKind.IO_FAILURE), chain)
    assert outcome.result == 42


def test_action_error_propagates():
    def failing(condition):
        raise RuntimeError("handler broke")

    chain = HandlerChain.of(catch(ErrorKind.GENERIC_FAILURE, failing))
    with pytest.raises(RuntimeError, match="handler broke"):
        evaluate(ErrorCondition(ErrorKind.IO_FAILURE), chain)


def test_first_match_wins_even_when_chain_is_out_of_order(recorder):
    chain = HandlerChain.of(
        catch(ErrorKind.GENERIC_FAILURE, recorder.action("generic")),
        catch(ErrorKind.DIVISION_BY_ZERO, recorder.action("zero")),
    )
    evaluate(ErrorCondition(ErrorKind.DIVISION_BY_ZERO), chain)
    assert recorder.calls == ["generic"]


def test_select_handler_is_pure(recorder):
    chain = _io_chain(recorder)
    handler = select_handler(ErrorCondition(ErrorKind.FILE_NOT_FOUND), chain)

    assert handler is chain[1]
    assert recorder.calls == []


def test_outcome_helpers():
    completed = Outcome.completed("value")
    assert completed.ok
    assert not completed.handled
    assert completed.to_dict() == {"status": "completed", "condition": None, "handler": None, "result": "value"}

    fatal = Outcome(status=OutcomeStatus.FATAL, condition=ErrorCondition(ErrorKind.IO_FAILURE))
    assert fatal.fatal
    assert not fatal.ok
