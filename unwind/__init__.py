#!/usr/bin/env python3
"""
unwind - deterministic, specificity-ordered error recovery with guaranteed cleanup

Author: Marc Rivero (@seifreed)
License: GPL-3.0
"""

from .__version__ import __author__, __author_email__, __license__, __url__, __version__

__description__ = "Deterministic, specificity-ordered error recovery with guaranteed cleanup"

from .error_handling import (
    ConditionRaised,
    ErrorCondition,
    ErrorKind,
    FatalTermination,
    HandlerChain,
    HandlerSpec,
    InitializationFailed,
    Outcome,
    OutcomeStatus,
    ProtectedRegion,
    catch,
    evaluate,
    raise_condition,
    run_unit,
    run_units,
)
from .initialization import OnceInitializer
from .resources import ResourceScope, register_finalizer

__all__ = [
    "ConditionRaised",
    "ErrorCondition",
    "ErrorKind",
    "FatalTermination",
    "HandlerChain",
    "HandlerSpec",
    "InitializationFailed",
    "OnceInitializer",
    "Outcome",
    "OutcomeStatus",
    "ProtectedRegion",
    "ResourceScope",
    "catch",
    "evaluate",
    "raise_condition",
    "register_finalizer",
    "run_unit",
    "run_units",
    "__version__",
    "__author__",
    "__author_email__",
    "__license__",
    "__url__",
    "__description__",
]
