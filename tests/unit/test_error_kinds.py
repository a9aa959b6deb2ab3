"""Tests for unwind/error_handling/kinds.py."""

from __future__ import annotations

import pytest

from unwind.error_handling.kinds import SPECIALIZES, ErrorKind, is_a, kind_for_exception, lineage


def test_every_kind_reaches_generic_failure():
    for kind in ErrorKind:
        assert lineage(kind)[-1] is ErrorKind.GENERIC_FAILURE


def test_generic_failure_has_no_parent():
    assert ErrorKind.GENERIC_FAILURE not in SPECIALIZES
    assert lineage(ErrorKind.GENERIC_FAILURE) == (ErrorKind.GENERIC_FAILURE,)


def test_directory_not_found_lineage():
    assert lineage(ErrorKind.DIRECTORY_NOT_FOUND) == (
        ErrorKind.DIRECTORY_NOT_FOUND,
        ErrorKind.FILE_NOT_FOUND,
        ErrorKind.RESOURCE_NOT_FOUND,
        ErrorKind.IO_FAILURE,
        ErrorKind.GENERIC_FAILURE,
    )


def test_is_a_accepts_equal_kind():
    assert is_a(ErrorKind.ARITHMETIC, ErrorKind.ARITHMETIC)


def test_is_a_accepts_ancestor():
    assert is_a(ErrorKind.DIVISION_BY_ZERO, ErrorKind.ARITHMETIC)
    assert is_a(ErrorKind.DIVISION_BY_ZERO, ErrorKind.GENERIC_FAILURE)


def test_is_a_rejects_descendant():
    assert not is_a(ErrorKind.ARITHMETIC, ErrorKind.DIVISION_BY_ZERO)


def test_is_a_rejects_sibling_branch():
    assert not is_a(ErrorKind.ACCESS_CONFLICT, ErrorKind.FILE_NOT_FOUND)
    assert not is_a(ErrorKind.DOMAIN_SPECIFIC, ErrorKind.IO_FAILURE)


@pytest.mark.parametrize(
    ("exception", "expected"),
    [
        (ZeroDivisionError("x"), ErrorKind.DIVISION_BY_ZERO),
        (OverflowError("x"), ErrorKind.ARITHMETIC),
        (FileNotFoundError("x"), ErrorKind.FILE_NOT_FOUND),
        (NotADirectoryError("x"), ErrorKind.DIRECTORY_NOT_FOUND),
        (PermissionError("x"), ErrorKind.ACCESS_CONFLICT),
        (IsADirectoryError("x"), ErrorKind.IO_FAILURE),
        (OSError("x"), ErrorKind.IO_FAILURE),
        (ValueError("x"), ErrorKind.GENERIC_FAILURE),
    ],
)
def test_kind_for_exception(exception, expected):
    assert kind_for_exception(exception) is expected


def test_kind_for_exception_walks_inheritance_for_subclasses():
    class CustomZero(ZeroDivisionError):
        pass

    assert kind_for_exception(CustomZero()) is ErrorKind.DIVISION_BY_ZERO
