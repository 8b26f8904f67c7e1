"""Diagnostic model and reporter seam for namespace validation.

The validation core never prints or logs findings itself; it hands every
Diagnostic to a Reporter. ValidationResult is the reporter used for a single
verification run and keeps the diagnostics in emission order.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..bundle import BundleView

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Diagnostic severity. Only errors fail a build."""
    ERROR = "error"
    WARNING = "warning"
    TRACE = "trace"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding: severity, message template and its parameters."""
    severity: Severity
    template: str
    params: tuple = ()
    rule: str | None = None

    @property
    def message(self) -> str:
        return self.template % self.params if self.params else self.template

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        if self.rule:
            prefix += f" {self.rule}:"
        return f"{prefix} {self.message}"


class Reporter(ABC):
    """Sink for diagnostics."""

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        """Receive one diagnostic."""
        pass

    def error(self, template: str, *params, rule: str | None = None) -> None:
        self.report(Diagnostic(Severity.ERROR, template, tuple(params), rule))

    def warning(self, template: str, *params, rule: str | None = None) -> None:
        self.report(Diagnostic(Severity.WARNING, template, tuple(params), rule))

    def trace(self, template: str, *params, rule: str | None = None) -> None:
        self.report(Diagnostic(Severity.TRACE, template, tuple(params), rule))


class LoggingReporter(Reporter):
    """Forward diagnostics to the standard logging system."""

    _LEVELS = {
        Severity.ERROR: logging.ERROR,
        Severity.WARNING: logging.WARNING,
        Severity.TRACE: logging.DEBUG,
    }

    def __init__(self, target: logging.Logger | None = None):
        self.logger = target or logger

    def report(self, diagnostic: Diagnostic) -> None:
        self.logger.log(self._LEVELS[diagnostic.severity], diagnostic.template, *diagnostic.params)


@dataclass
class ValidationResult(Reporter):
    """Diagnostics and counters of one verification run."""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)
    sink: Reporter | None = None

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.sink is not None:
            self.sink.report(diagnostic)

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def by_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    @property
    def errors(self) -> list[Diagnostic]:
        return self.by_severity(Severity.ERROR)

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.by_severity(Severity.WARNING)

    @property
    def traces(self) -> list[Diagnostic]:
        return self.by_severity(Severity.TRACE)

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 1 when any error was reported."""
        return 1 if self.errors else 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "exit_code": self.exit_code,
            "counters": self.counters,
            "diagnostics": [
                {
                    "severity": d.severity.value,
                    "rule": d.rule,
                    "message": d.message,
                    "template": d.template,
                    "params": list(d.params),
                }
                for d in self.diagnostics
            ],
        }


class ValidationRule(ABC):
    """Base class for bundle-level validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def validate(self, bundle: "BundleView", result: ValidationResult) -> None:
        """Execute validation rule.

        Args:
            bundle: Bundle under verification
            result: Validation result to update with diagnostics/counters
        """
        pass
