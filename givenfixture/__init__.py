"""givenfixture - fluent Arrange/Act/Assert fixtures for Python tests.

Example:

    await (
        given.fixture()
        .having_mocked(Repository, "get", 1, returns=item)
        .when_async(Service, lambda s: s.load(1))
        .should_return_equal(item)
        .run_async()
    )
"""

from unittest.mock import ANY

from . import given
from .core import (
    AggregateAssertionError,
    AssertionViolation,
    ConfigurationError,
    DidNotFail,
    FixtureState,
    Match,
    NamedParameter,
    TypedParameter,
    UnexpectedCallError,
    VerificationError,
)
from .given import FluentFixture

__version__ = "0.1.0"

__all__ = [
    "ANY",
    "AggregateAssertionError",
    "AssertionViolation",
    "ConfigurationError",
    "DidNotFail",
    "FixtureState",
    "FluentFixture",
    "Match",
    "NamedParameter",
    "TypedParameter",
    "UnexpectedCallError",
    "VerificationError",
    "given",
]
