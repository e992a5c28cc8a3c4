"""Core orchestration logic for givenfixture.

This package has zero third-party dependencies. The mocking and random
instance libraries are reached only through the ports in ports.py; their
implementations live in the adapters package.
"""

from .aggregator import Report, run_all
from .errors import (
    AggregateAssertionError,
    AssertionViolation,
    ConfigurationError,
    DidNotFail,
    GivenFixtureError,
    UnexpectedCallError,
    VerificationError,
)
from .fixture import Fixture
from .models import (
    ActKind,
    CallPattern,
    Computes,
    DoesNothing,
    Expectation,
    Failure,
    FixtureState,
    Match,
    NamedParameter,
    Raises,
    Returns,
    TypedParameter,
    Value,
)

__all__ = [
    "ActKind",
    "AggregateAssertionError",
    "AssertionViolation",
    "CallPattern",
    "Computes",
    "ConfigurationError",
    "DidNotFail",
    "DoesNothing",
    "Expectation",
    "Failure",
    "Fixture",
    "FixtureState",
    "GivenFixtureError",
    "Match",
    "NamedParameter",
    "Raises",
    "Report",
    "Returns",
    "TypedParameter",
    "UnexpectedCallError",
    "Value",
    "VerificationError",
    "run_all",
]
