"""Fake implementations of core ports for testing.

These in-memory implementations allow the orchestration core to be tested
without unittest.mock autospec or hypothesis:

- FakeDoubleProvider: Inert doubles and recorded expectations
- FakeInstanceBuilder: Deterministic instance construction
"""

from .builder import FakeInstanceBuilder
from .doubles import FakeDouble, FakeDoubleProvider

__all__ = [
    "FakeDouble",
    "FakeDoubleProvider",
    "FakeInstanceBuilder",
]
