"""Wrappers turning user checks into assertions the aggregator can run.

A check may signal failure either by raising (plain ``assert`` statements,
pytest helpers, ...) or, for the convenience of lambdas, by returning the
literal ``False``. Any other return value counts as success.
"""

from collections.abc import Callable
from typing import Any

from .errors import AssertionViolation

Assertion = Callable[[Any], None]


def describe_check(check: Callable[..., Any]) -> str:
    """Human-readable name for a check callable."""
    name = getattr(check, "__qualname__", None)
    if not name:
        return repr(check)
    if name.endswith("<lambda>"):
        code = getattr(check, "__code__", None)
        if code is not None:
            return f"<lambda at {code.co_filename}:{code.co_firstlineno}>"
    return name


def predicate(check: Callable[[Any], Any]) -> Assertion:
    """Wrap ``check`` so a ``False`` return raises AssertionViolation."""

    def assertion(value: Any) -> None:
        if check(value) is False:
            raise AssertionViolation(
                f"Check {describe_check(check)} returned False for {value!r}"
            )

    assertion.__qualname__ = describe_check(check)
    return assertion


def of_type(expected_type: type, check: Callable[[Any], Any] | None = None) -> Assertion:
    """Assert the value is an instance of ``expected_type``, then run ``check``.

    The check only runs once the type is confirmed; a mismatch is itself
    the violation.
    """
    inner = predicate(check) if check is not None else None

    def assertion(value: Any) -> None:
        if not isinstance(value, expected_type):
            raise AssertionViolation(
                f"Expected {_type_name(expected_type)} but got "
                f"{type(value).__name__}: {value!r}"
            )
        if inner is not None:
            inner(value)

    assertion.__qualname__ = (
        f"of_type({_type_name(expected_type)})"
        if check is None
        else f"of_type({_type_name(expected_type)}, {describe_check(check)})"
    )
    return assertion


def ignoring_outcome(check: Callable[[], Any]) -> Assertion:
    """Assertion that runs ``check()`` without looking at the outcome."""

    def assertion(_value: Any) -> None:
        if check() is False:
            raise AssertionViolation(f"Check {describe_check(check)} returned False")

    assertion.__qualname__ = describe_check(check)
    return assertion


def _type_name(expected_type: type) -> str:
    return getattr(expected_type, "__name__", repr(expected_type))
