"""Assertion aggregation.

Every registered assertion runs against the single outcome, each inside its
own try/except, so one fixture run reveals every broken expectation instead
of only the first.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .errors import AggregateAssertionError

logger = logging.getLogger(__name__)

# Never collected. Test-runner outcomes such as pytest.fail() derive from
# BaseException too and are collected like any assertion error.
PROPAGATED = (KeyboardInterrupt, SystemExit, GeneratorExit, asyncio.CancelledError)


@dataclass(frozen=True)
class Report:
    """Violations collected for one outcome, in assertion order."""

    violations: tuple[BaseException, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_exception(self) -> BaseException | None:
        """Return the error to raise, or None when nothing failed.

        A single violation is returned unchanged; several are wrapped in an
        AggregateAssertionError.
        """
        if not self.violations:
            return None
        if len(self.violations) == 1:
            return self.violations[0]
        return AggregateAssertionError(self.violations)

    def raise_for_violations(self) -> None:
        """Raise the report's error, if any."""
        error = self.to_exception()
        if error is not None:
            raise error

    def merge(self, other: "Report") -> "Report":
        return Report(self.violations + other.violations)


def run_all(value: Any, assertions: Iterable[Callable[[Any], Any]]) -> Report:
    """Run every assertion against ``value`` and collect what they raise.

    Args:
        value: The act step's result, or the captured exception when a
            failure was expected.
        assertions: Callables taking the value; raising means violation.

    Returns:
        Report with one entry per assertion that raised.
    """
    violations: list[BaseException] = []
    for assertion in assertions:
        try:
            assertion(value)
        except PROPAGATED:
            raise
        except BaseException as e:
            logger.debug(f"Assertion {_name_of(assertion)} failed: {e}")
            violations.append(e)
    return Report(tuple(violations))


def _name_of(assertion: Callable[..., Any]) -> str:
    return getattr(assertion, "__qualname__", None) or repr(assertion)
