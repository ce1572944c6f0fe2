from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Outcome(str, Enum):
    PASSED = "PASSED"
    WARNING = "WARNING"
    FAILED = "FAILED"


@dataclass(frozen=True)
class CheckResult:
    domain: str
    name: str
    outcome: Outcome
    message: str


@dataclass
class ResultLog:
    """Ordered check results for one domain or for a whole run.

    Domain checks each build their own log; the runner merges them with
    ``extend`` so a domain can be exercised in isolation.
    """

    domain: str = ""
    results: List[CheckResult] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    warned: int = 0

    def record(self, outcome: Outcome, name: str, message: str) -> CheckResult:
        result = CheckResult(domain=self.domain, name=name, outcome=outcome, message=message)
        self._append(result)
        return result

    def ok(self, name: str, message: str) -> CheckResult:
        return self.record(Outcome.PASSED, name, message)

    def warn(self, name: str, message: str) -> CheckResult:
        return self.record(Outcome.WARNING, name, message)

    def fail(self, name: str, message: str) -> CheckResult:
        return self.record(Outcome.FAILED, name, message)

    def extend(self, other: "ResultLog") -> None:
        for result in other.results:
            self._append(result)

    def _append(self, result: CheckResult) -> None:
        self.results.append(result)
        if result.outcome is Outcome.PASSED:
            self.passed += 1
        elif result.outcome is Outcome.FAILED:
            self.failed += 1
        else:
            self.warned += 1

    def by_outcome(self, outcome: Outcome) -> List[CheckResult]:
        return [result for result in self.results if result.outcome is outcome]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed > 0 else 0
