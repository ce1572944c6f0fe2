"""
Console reporting
=================

Check logic only produces ``CheckResult`` values; everything printed to the
terminal goes through a ``Reporter``. The base class prints nothing, which is
what tests and library callers use.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from webapp_smoke.config import DeploymentContext
from webapp_smoke.results import CheckResult, Outcome, ResultLog


class Colors:
    """ANSI color codes for terminal output"""
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    RESET = "\033[0m"


GLYPHS = {
    Outcome.PASSED: ("✓", Colors.GREEN),
    Outcome.FAILED: ("✗", Colors.RED),
    Outcome.WARNING: ("⚠", Colors.YELLOW),
}

RULE = "━" * 64


class Reporter:
    def banner(self) -> None:
        pass

    def context(self, context: DeploymentContext) -> None:
        pass

    def domain(self, title: str) -> None:
        pass

    def result(self, result: CheckResult) -> None:
        pass

    def summary(self, log: ResultLog) -> None:
        pass

    def error(self, message: str, hint: Optional[str] = None) -> None:
        pass


class ConsoleReporter(Reporter):
    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color
        self._section: Optional[str] = None

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def banner(self) -> None:
        self._print(self._paint("╔═══════════════════════════════════════════════════════════════╗", Colors.CYAN))
        self._print(self._paint("║        WEBAPP SMOKE TEST - Infrastructure Validation          ║", Colors.CYAN))
        self._print(self._paint("╚═══════════════════════════════════════════════════════════════╝", Colors.CYAN))
        self._print()

    def context(self, context: DeploymentContext) -> None:
        self._print(f"  Deployment ID: {self._paint(context.deployment_id, Colors.CYAN)}")
        self._print(f"  Region: {self._paint(context.region, Colors.CYAN)}")
        self._print(f"  Domain: {self._paint(context.domain, Colors.CYAN)}")

    def domain(self, title: str) -> None:
        self._section = None
        self._print()
        self._print(self._paint(RULE, Colors.BLUE))
        self._print(self._paint(f"  {title}", Colors.BLUE))
        self._print(self._paint(RULE, Colors.BLUE))

    def result(self, result: CheckResult) -> None:
        if result.name != self._section:
            self._section = result.name
            self._print()
            self._print(self._paint(f"▶ {result.name}", Colors.YELLOW))
        glyph, color = GLYPHS[result.outcome]
        self._print(f"  {self._paint(glyph, color)} {result.message}")

    def summary(self, log: ResultLog) -> None:
        self.domain("TEST SUMMARY")
        self._print()
        self._print(f"  {self._paint('✓ Passed:', Colors.GREEN)}   {log.passed}")
        self._print(f"  {self._paint('✗ Failed:', Colors.RED)}   {log.failed}")
        self._print(f"  {self._paint('⚠ Warnings:', Colors.YELLOW)} {log.warned}")
        self._print("  ─────────────────")
        self._print(f"  Total:     {log.total}")
        self._print()
        if log.failed == 0:
            self._print(self._paint("✓ All critical checks passed!", Colors.GREEN))
        else:
            self._print(self._paint("✗ Some checks failed. Review output above.", Colors.RED))
        self._print()

    def error(self, message: str, hint: Optional[str] = None) -> None:
        self._print(self._paint(f"✗ {message}", Colors.RED))
        if hint:
            self._print(f"  {hint}")


def summarize(log: ResultLog, reporter: Reporter) -> int:
    reporter.summary(log)
    return log.exit_code
