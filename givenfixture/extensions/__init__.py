"""Fluent extensions layered on the core Fixture.

Each module contributes one Fixture subclass; givenfixture.given combines
them into FluentFixture.
"""

from .assertions import AssertionExtensions, comparable
from .convenience import ConvenienceExtensions
from .doubles import DoubleExtensions, DoubleSetup, ExpectationSetup
from .models import ModelExtensions

__all__ = [
    "AssertionExtensions",
    "ConvenienceExtensions",
    "DoubleExtensions",
    "DoubleSetup",
    "ExpectationSetup",
    "ModelExtensions",
    "comparable",
]
