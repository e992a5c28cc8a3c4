"""Ready-made assertions for common results and errors."""

import dataclasses
import re
from collections.abc import Collection, Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from givenfixture.core.errors import AssertionViolation
from givenfixture.core.fixture import Fixture

F = TypeVar("F", bound="AssertionExtensions")


class AssertionExtensions(Fixture):
    """Assertion shortcuts on top of should_return() and should_raise()."""

    def should_return_same_as(self: F, expected: Any) -> F:
        """The result must be the very object ``expected``."""

        def same_as(result: Any) -> None:
            if result is not expected:
                raise AssertionViolation(
                    f"Expected the same object as {expected!r} but got {result!r}"
                )

        return self.should_return(same_as)

    def should_return_equal(self: F, expected: Any) -> F:
        """The result must compare equal to ``expected``."""

        def equal(result: Any) -> None:
            if result != expected:
                raise AssertionViolation(f"Expected {expected!r} but got {result!r}")

        return self.should_return(equal)

    def should_return_equivalent(self: F, expected: Any) -> F:
        """The result must have the same public structure as ``expected``.

        Dataclasses, pydantic models, mappings, sequences and plain objects
        are compared field by field; their classes need not match.
        """

        def equivalent(result: Any) -> None:
            if comparable(result) != comparable(expected):
                raise AssertionViolation(
                    f"Expected an equivalent of {expected!r} but got {result!r}"
                )

        return self.should_return(equivalent)

    def should_return_none(self: F) -> F:
        def none(result: Any) -> None:
            if result is not None:
                raise AssertionViolation(f"Expected None but got {result!r}")

        return self.should_return(none)

    def should_return_true(self: F) -> F:
        def is_true(result: bool) -> None:
            if result is not True:
                raise AssertionViolation(f"Expected True but got {result!r}")

        return self.should_return(is_true, result_type=bool)

    def should_return_false(self: F) -> F:
        def is_false(result: bool) -> None:
            if result is not False:
                raise AssertionViolation(f"Expected False but got {result!r}")

        return self.should_return(is_false, result_type=bool)

    def should_return_empty_collection(self: F) -> F:
        return self.should_return_collection_with_count(0)

    def should_return_collection_with_count(self: F, count: int) -> F:
        """The result must be a sized collection of ``count`` items."""

        def has_count(result: Collection[Any]) -> None:
            if len(result) != count:
                raise AssertionViolation(
                    f"Expected a collection of {count} item(s) but got "
                    f"{len(result)}: {result!r}"
                )

        return self.should_return(has_count, result_type=Collection)

    def should_return_collection_with_same_count(self: F, other: Collection[Any]) -> F:
        return self.should_return_collection_with_count(len(other))

    def should_raise_with_message(
        self: F, error_type: type[BaseException], pattern: str | None = None
    ) -> F:
        """Expect ``error_type`` whose message matches ``pattern`` (re.search)."""
        if pattern is None:
            return self.should_raise(error_type)

        def message_matches(error: BaseException) -> None:
            if not re.search(pattern, str(error)):
                raise AssertionViolation(
                    f"Expected {error_type.__name__} message to match {pattern!r} "
                    f"but it was {str(error)!r}"
                )

        return self.should_raise(error_type, message_matches)

    def should_raise_value_error(self: F, pattern: str | None = None) -> F:
        return self.should_raise_with_message(ValueError, pattern)

    def should_raise_type_error(self: F, pattern: str | None = None) -> F:
        return self.should_raise_with_message(TypeError, pattern)


def comparable(value: Any) -> Any:
    """Reduce ``value`` to builtin containers for structural comparison."""
    if isinstance(value, Enum):
        return value
    if isinstance(value, BaseModel):
        return comparable(value.model_dump())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: comparable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {k: comparable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [comparable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return value
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {
            k: comparable(v) for k, v in vars(value).items() if not k.startswith("_")
        }
    return value
