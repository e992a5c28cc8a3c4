"""Composition root for givenfixture.

This module is the ONLY location that imports both the core and the concrete
adapters. Every fixture factory wires a fresh double provider and instance
builder into a FluentFixture, so nothing is shared between tests.

Example:
    >>> from givenfixture import given
    >>> given.fixture().when_static(lambda: 1 + 1).should_return_equal(2).run()
"""

import logging
import sys
from typing import TypeVar

from givenfixture.adapters.builders import HypothesisInstanceBuilder
from givenfixture.adapters.doubles import AutoMockProvider
from givenfixture.config import Settings, load_settings
from givenfixture.extensions import (
    AssertionExtensions,
    ConvenienceExtensions,
    DoubleExtensions,
    ModelExtensions,
)

PACKAGE_LOGGER = "givenfixture"

FX = TypeVar("FX", bound="FluentFixture")


class FluentFixture(
    AssertionExtensions,
    DoubleExtensions,
    ModelExtensions,
    ConvenienceExtensions,
):
    """Fixture with every fluent extension available."""


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure the givenfixture logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.WARNING)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_givenfixture", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_str))
    handler._givenfixture = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def create_fixture(
    strict: bool | None = None,
    verify_all_expectations: bool | None = None,
    settings: Settings | None = None,
    fixture_type: type[FX] = FluentFixture,  # type: ignore[assignment]
) -> FX:
    """Wire a new fixture.

    Args:
        strict: Strict doubles; defaults to settings.strict.
        verify_all_expectations: Verify every expectation; defaults to
            settings.verify_all_expectations.
        settings: Settings to use instead of loading them from environment.
        fixture_type: FluentFixture subclass to instantiate.

    Returns:
        A fixture_type instance in the UNCONFIGURED state.
    """
    settings = settings or load_settings()
    doubles = AutoMockProvider(
        strict=settings.strict if strict is None else strict,
        verify_all_expectations=(
            settings.verify_all_expectations
            if verify_all_expectations is None
            else verify_all_expectations
        ),
    )
    builder = HypothesisInstanceBuilder(collection_size=settings.collection_size)
    return fixture_type(doubles, builder)


def fixture(settings: Settings | None = None) -> FluentFixture:
    """A fixture configured from settings (strict, verifying flagged expectations by default)."""
    return create_fixture(settings=settings)


def strict_fixture(settings: Settings | None = None) -> FluentFixture:
    """A strict fixture that only verifies expectations flagged as verifiable."""
    return create_fixture(strict=True, verify_all_expectations=False, settings=settings)


def strict_fully_verified_fixture(settings: Settings | None = None) -> FluentFixture:
    """A strict fixture that verifies every expectation."""
    return create_fixture(strict=True, verify_all_expectations=True, settings=settings)


def loose_fixture(settings: Settings | None = None) -> FluentFixture:
    """A loose fixture that only verifies expectations flagged as verifiable."""
    return create_fixture(strict=False, verify_all_expectations=False, settings=settings)


def loose_fully_verified_fixture(settings: Settings | None = None) -> FluentFixture:
    """A loose fixture that verifies every expectation."""
    return create_fixture(strict=False, verify_all_expectations=True, settings=settings)


__all__ = [
    "FluentFixture",
    "configure_logging",
    "create_fixture",
    "fixture",
    "loose_fixture",
    "loose_fully_verified_fixture",
    "strict_fixture",
    "strict_fully_verified_fixture",
]
