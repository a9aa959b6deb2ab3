#!/usr/bin/env python3
"""
Error Recovery for unwind

This package provides deterministic, specificity-ordered error recovery:
conditions are matched against ordered handler chains, the first match wins,
and each protected region's cleanup runs exactly once on every exit path.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

Author: Marc Rivero Lopez
"""

from .condition import (
    ConditionRaised,
    ErrorCondition,
    FatalTermination,
    InitializationFailed,
    raise_condition,
)
from .evaluator import Outcome, OutcomeStatus, evaluate, select_handler
from .kinds import ErrorKind, is_a, kind_for_exception, lineage
from .policies import HandlerChain, HandlerSpec, catch
from .region import ProtectedRegion, run_unit, run_units

__all__ = [
    "ConditionRaised",
    "ErrorCondition",
    "ErrorKind",
    "FatalTermination",
    "HandlerChain",
    "HandlerSpec",
    "InitializationFailed",
    "Outcome",
    "OutcomeStatus",
    "ProtectedRegion",
    "catch",
    "evaluate",
    "is_a",
    "kind_for_exception",
    "lineage",
    "raise_condition",
    "run_unit",
    "run_units",
    "select_handler",
]

