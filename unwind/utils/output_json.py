#!/usr/bin/env python3
"""JSON rendering of scenario reports."""

from __future__ import annotations

import json
from collections import Counter
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from ..scenarios import ScenarioReport


class JsonOutputFormatter:
    """Render a run of scenario reports as one JSON document."""

    def __init__(self, reports: Iterable[ScenarioReport]):
        self.reports = list(reports)

    def summary(self) -> dict[str, Any]:
        """Outcome counts per status, plus whether any unit ended fatally"""
        counts = Counter(report.outcome.status.value for report in self.reports)
        return {
            "total": len(self.reports),
            "statuses": dict(sorted(counts.items())),
            "fatal": any(report.outcome.fatal for report in self.reports),
        }

    def to_payload(self) -> dict[str, Any]:
        return {
            "scenarios": [report.to_dict() for report in self.reports],
            "summary": self.summary(),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize the reports; results carried in outcomes fall back to ``str``"""
        try:
            return json.dumps(self.to_payload(), indent=indent, default=str)
        except (TypeError, ValueError) as e:
            return json.dumps(
                {
                    "error": f"JSON serialization failed: {e}",
                    "scenarios": [report.name for report in self.reports],
                },
                indent=indent,
            )
