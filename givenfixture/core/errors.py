"""Error taxonomy for the fixture engine.

Two families live here:

- Protocol misuse (``ConfigurationError``): programmer errors in the fluent
  configuration. Always raised immediately, never aggregated.
- Test outcome failures (``AssertionViolation`` and friends): subclasses of
  ``AssertionError`` so test runners report them as ordinary failures.
"""

from collections.abc import Sequence
from typing import Any

from .models import Expectation


class GivenFixtureError(Exception):
    """Base class for errors raised by the fixture itself."""


class ConfigurationError(GivenFixtureError):
    """Raised when the fluent fixture protocol is misused.

    Examples: configuring a second act step, running without an act step,
    calling ``run`` for an async act step, or a subject configurator whose
    declared type does not match the built subject.
    """


class AssertionViolation(AssertionError):
    """A single failed assertion raised by the fixture's own checks."""


class DidNotFail(AssertionViolation):
    """The fixture expected the act step to fail but it returned a value."""

    def __init__(self, result: Any):
        shown = "<None>" if result is None else repr(result)
        super().__init__(f"Expected to fail but did not. Subject returned {shown}")
        self.result = result


class AggregateAssertionError(AssertionViolation):
    """Several assertions failed for the same outcome.

    Attributes:
        violations: The underlying errors, in assertion registration order.
    """

    def __init__(self, violations: Sequence[BaseException]):
        self.violations = tuple(violations)
        lines = [f"{len(self.violations)} assertions failed:"]
        for index, violation in enumerate(self.violations, start=1):
            lines.append(f"  {index}. {type(violation).__name__}: {violation}")
        super().__init__("\n".join(lines))


class VerificationError(AssertionError):
    """One or more expectations that had to be met were never called.

    Attributes:
        unmet: The expectations that did not fire.
    """

    def __init__(self, unmet: Sequence[Expectation]):
        self.unmet = tuple(unmet)
        lines = ["Expected calls were not received:"]
        for expectation in self.unmet:
            line = f"  {expectation.describe()}"
            if expectation.because:
                line += f" because {expectation.because}"
            lines.append(line)
        super().__init__("\n".join(lines))


class UnexpectedCallError(AssertionError):
    """A strict double was called without a matching expectation."""

    def __init__(self, capability: type, method: str, args: tuple, kwargs: dict[str, Any]):
        rendered = ", ".join(
            [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
        )
        super().__init__(
            f"Unexpected call to strict double {capability.__name__}.{method}({rendered})"
        )
        self.capability = capability
        self.method = method
        self.call_args = args
        self.call_kwargs = kwargs


__all__ = [
    "AggregateAssertionError",
    "AssertionViolation",
    "ConfigurationError",
    "DidNotFail",
    "GivenFixtureError",
    "UnexpectedCallError",
    "VerificationError",
]
