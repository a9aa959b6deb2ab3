#!/usr/bin/env python3
"""
Error Kinds

Enumerated error categories and the explicit specialization graph used for
hierarchical handler matching.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from enum import Enum


class ErrorKind(Enum):
    """Error categories understood by handler chains"""

    GENERIC_FAILURE = "generic_failure"  # Root of the graph, catch-all
    ARITHMETIC = "arithmetic"
    DIVISION_BY_ZERO = "division_by_zero"
    IO_FAILURE = "io_failure"
    RESOURCE_NOT_FOUND = "resource_not_found"
    FILE_NOT_FOUND = "file_not_found"
    DIRECTORY_NOT_FOUND = "directory_not_found"
    ACCESS_CONFLICT = "access_conflict"
    DOMAIN_SPECIFIC = "domain_specific"  # Carries a status attribute
    INITIALIZATION_FAILURE = "initialization_failure"


# Each kind maps to the kind it specializes. GENERIC_FAILURE has no parent.
SPECIALIZES: dict[ErrorKind, ErrorKind] = {
    ErrorKind.ARITHMETIC: ErrorKind.GENERIC_FAILURE,
    ErrorKind.DIVISION_BY_ZERO: ErrorKind.ARITHMETIC,
    ErrorKind.IO_FAILURE: ErrorKind.GENERIC_FAILURE,
    ErrorKind.RESOURCE_NOT_FOUND: ErrorKind.IO_FAILURE,
    ErrorKind.FILE_NOT_FOUND: ErrorKind.RESOURCE_NOT_FOUND,
    ErrorKind.DIRECTORY_NOT_FOUND: ErrorKind.FILE_NOT_FOUND,
    ErrorKind.ACCESS_CONFLICT: ErrorKind.IO_FAILURE,
    ErrorKind.DOMAIN_SPECIFIC: ErrorKind.GENERIC_FAILURE,
    ErrorKind.INITIALIZATION_FAILURE: ErrorKind.GENERIC_FAILURE,
}

# Native exception mapping, most specific types first
EXCEPTION_MAPPING: dict[type[BaseException], ErrorKind] = {
    ZeroDivisionError: ErrorKind.DIVISION_BY_ZERO,
    NotADirectoryError: ErrorKind.DIRECTORY_NOT_FOUND,
    FileNotFoundError: ErrorKind.FILE_NOT_FOUND,
    PermissionError: ErrorKind.ACCESS_CONFLICT,
    BlockingIOError: ErrorKind.ACCESS_CONFLICT,
    ArithmeticError: ErrorKind.ARITHMETIC,
    OSError: ErrorKind.IO_FAILURE,
}


def lineage(kind: ErrorKind) -> tuple[ErrorKind, ...]:
    """Return the kind followed by each of its ancestors up to the root"""
    chain = [kind]
    while chain[-1] in SPECIALIZES:
        chain.append(SPECIALIZES[chain[-1]])
    return tuple(chain)


def is_a(kind: ErrorKind, base: ErrorKind) -> bool:
    """
    Check whether a kind is equal to or a specialization of another

    Args:
        kind: Kind of the raised condition
        base: Kind declared by a handler

    Returns:
        True if ``kind`` is ``base`` or descends from it
    """
    return base in lineage(kind)


def kind_for_exception(exception: BaseException) -> ErrorKind:
    """Classify a native exception, exact type first, then by inheritance"""
    exc_type = type(exception)
    if exc_type in EXCEPTION_MAPPING:
        return EXCEPTION_MAPPING[exc_type]

    for mapped_type, kind in EXCEPTION_MAPPING.items():
        if isinstance(exception, mapped_type):
            return kind

    return ErrorKind.GENERIC_FAILURE
