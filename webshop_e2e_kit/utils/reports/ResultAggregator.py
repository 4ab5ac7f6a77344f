"""
Scenario classification and pass/fail/skip aggregation over cucumber JSON.

Result document shape (one per browser run):
    [ {"name": ..., "elements": [ {"name": ..., "steps": [
        {"result": {"status": "passed", "duration": 1200000}} ]} ]} ]

Durations are nanoseconds.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, List

NANOSECONDS_PER_SECOND = 1_000_000_000
TWO_PLACES = Decimal("0.01")

SKIP_STATUSES = ("skipped", "undefined")


class ScenarioOutcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class BrowserSummary:
    browser: str
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def status(self) -> str:
        return "failed" if self.failed > 0 else "passed"

    def to_dict(self):
        return {
            "browser": self.browser,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "total": self.total,
            "duration": f"{self.duration_seconds:.2f}",
            "status": self.status,
        }


@dataclass(frozen=True)
class AggregateSummary:
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0

    @property
    def success_rate(self) -> str:
        """Passed share of all scenarios as a one-decimal percentage, "0" when empty."""
        if self.total == 0:
            return "0"
        return f"{self.passed / self.total * 100:.1f}"

    @property
    def status(self) -> str:
        return "failed" if self.failed > 0 else "passed"

    def to_dict(self):
        return {
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "total": self.total,
            "rate": self.success_rate,
            "status": self.status,
        }


def step_status(step) -> str:
    """Status of a step, "undefined" when the result is missing."""
    result = step.get("result") if isinstance(step, dict) else None
    if not isinstance(result, dict):
        return "undefined"
    status = result.get("status")
    if not isinstance(status, str) or not status:
        return "undefined"
    return status.lower()


def step_duration(step) -> int:
    """Step duration in nanoseconds; anything non-numeric counts as zero."""
    result = step.get("result") if isinstance(step, dict) else None
    if not isinstance(result, dict):
        return 0
    duration = result.get("duration", 0)
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        return 0
    if not math.isfinite(duration):
        return 0
    return max(duration, 0)


def to_seconds(nanoseconds) -> float:
    """Nanoseconds to seconds, two decimals, halves rounded up."""
    seconds = Decimal(nanoseconds / NANOSECONDS_PER_SECOND)
    return float(seconds.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def _steps(scenario) -> List[dict]:
    steps = scenario.get("steps") if isinstance(scenario, dict) else None
    return steps if isinstance(steps, list) else []


def classify_scenario(scenario) -> ScenarioOutcome:
    """
    Classify a scenario from its steps.

    Any failed step makes it FAILED; otherwise any skipped or undefined step
    makes it SKIPPED; otherwise it PASSED.
    """
    statuses = [step_status(step) for step in _steps(scenario)]
    if "failed" in statuses:
        return ScenarioOutcome.FAILED
    if any(status in SKIP_STATUSES for status in statuses):
        return ScenarioOutcome.SKIPPED
    return ScenarioOutcome.PASSED


def summarize(document, browser: str = "") -> BrowserSummary:
    """Count scenario outcomes and total step duration for one browser run."""
    counts = {outcome: 0 for outcome in ScenarioOutcome}
    total_ns = 0

    for feature in document or []:
        elements = feature.get("elements") if isinstance(feature, dict) else None
        if not isinstance(elements, list):
            continue
        for scenario in elements:
            counts[classify_scenario(scenario)] += 1
            total_ns += sum(step_duration(step) for step in _steps(scenario))

    return BrowserSummary(
        browser=browser,
        passed=counts[ScenarioOutcome.PASSED],
        failed=counts[ScenarioOutcome.FAILED],
        skipped=counts[ScenarioOutcome.SKIPPED],
        duration_seconds=to_seconds(total_ns),
    )


def combine(summaries: Iterable[BrowserSummary]) -> AggregateSummary:
    passed = failed = skipped = 0
    for summary in summaries:
        passed += summary.passed
        failed += summary.failed
        skipped += summary.skipped
    return AggregateSummary(
        passed=passed,
        failed=failed,
        skipped=skipped,
        total=passed + failed + skipped,
    )
