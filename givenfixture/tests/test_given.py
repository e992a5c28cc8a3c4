"""Tests for the composition root.

These tests verify that the fixture factories wire the adapters with the
requested strictness and verification mode, and that logging is configured
on the package logger.
"""

import logging
from abc import ABC, abstractmethod

import pytest

from givenfixture import UnexpectedCallError, VerificationError, given
from givenfixture.adapters.builders import HypothesisInstanceBuilder
from givenfixture.adapters.doubles import AutoMockProvider
from givenfixture.config import Settings
from givenfixture.core.models import FixtureState


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str) -> bool:
        """Send a message."""


class Alarm:
    def __init__(self, notifier: Notifier):
        self.notifier = notifier

    def ring(self) -> bool | None:
        return self.notifier.notify("ring")


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


# ============================================================================
# Wiring
# ============================================================================


class TestCreateFixture:
    """Test adapter wiring."""

    def test_fresh_fixture(self, settings: Settings) -> None:
        fixture = given.fixture(settings=settings)

        assert isinstance(fixture, given.FluentFixture)
        assert isinstance(fixture.doubles, AutoMockProvider)
        assert isinstance(fixture.builder, HypothesisInstanceBuilder)
        assert fixture.state == FixtureState.UNCONFIGURED

    def test_fixtures_share_nothing(self, settings: Settings) -> None:
        first, second = given.fixture(settings=settings), given.fixture(settings=settings)
        assert first.doubles is not second.doubles
        assert first.builder is not second.builder

    def test_settings_decide_defaults(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, strict=False, verify_all_expectations=True, collection_size=2
        )
        fixture = given.fixture(settings=settings)

        assert fixture.doubles.strict is False
        assert fixture.doubles.verify_all_expectations is True
        assert fixture.builder.collection_size == 2

    def test_explicit_options_override_settings(self, settings: Settings) -> None:
        fixture = given.create_fixture(strict=False, settings=settings)
        assert fixture.doubles.strict is False
        assert fixture.doubles.verify_all_expectations is False

    def test_fixture_type(self, settings: Settings) -> None:
        class CustomFixture(given.FluentFixture):
            pass

        fixture = given.create_fixture(settings=settings, fixture_type=CustomFixture)
        assert isinstance(fixture, CustomFixture)

    @pytest.mark.parametrize(
        ("factory", "strict", "verify_all"),
        [
            (given.strict_fixture, True, False),
            (given.strict_fully_verified_fixture, True, True),
            (given.loose_fixture, False, False),
            (given.loose_fully_verified_fixture, False, True),
        ],
    )
    def test_factory_variants(self, settings: Settings, factory, strict, verify_all) -> None:
        fixture = factory(settings=settings)
        assert fixture.doubles.strict is strict
        assert fixture.doubles.verify_all_expectations is verify_all


# ============================================================================
# Strict and loose behaviour end to end
# ============================================================================


class TestVariants:
    """Test the variants against a subject."""

    def test_strict_fixture_fails_on_unconfigured_call(self, settings: Settings) -> None:
        fixture = given.strict_fixture(settings=settings).when(Alarm, lambda a: a.ring())
        with pytest.raises(UnexpectedCallError, match=r"Notifier\.notify\('ring'\)"):
            fixture.run()

    def test_loose_fixture_returns_none(self, settings: Settings) -> None:
        (
            given.loose_fixture(settings=settings)
            .when(Alarm, lambda a: a.ring())
            .should_return_none()
            .run()
        )

    def test_loose_fixture_ignores_unused_setup(self, settings: Settings) -> None:
        (
            given.loose_fixture(settings=settings)
            .having_mock(Notifier, lambda m: m.setup("notify", "other").returns(True))
            .when(Alarm, lambda a: a.ring())
            .should_return_none()
            .run()
        )

    def test_fully_verified_fixture_verifies_unflagged_setup(self, settings: Settings) -> None:
        fixture = (
            given.loose_fully_verified_fixture(settings=settings)
            .having_mock(Notifier, lambda m: m.setup("notify", "other").returns(True))
            .when(Alarm, lambda a: a.ring())
        )
        with pytest.raises(VerificationError, match=r"Notifier\.notify\('other'\)"):
            fixture.run()

    def test_mocked_call_is_verified(self, settings: Settings) -> None:
        (
            given.strict_fixture(settings=settings)
            .having_mocked(Notifier, "notify", "ring", returns=True)
            .when(Alarm, lambda a: a.ring())
            .should_return_true()
            .run()
        )


# ============================================================================
# Logging
# ============================================================================


class TestConfigureLogging:
    """Test logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger(given.PACKAGE_LOGGER)
        level, handlers = logger.level, list(logger.handlers)
        yield
        logger.setLevel(level)
        logger.handlers = handlers

    def test_sets_level_and_handler(self) -> None:
        given.configure_logging("DEBUG", "text")
        logger = logging.getLogger(given.PACKAGE_LOGGER)

        assert logger.level == logging.DEBUG
        assert any(getattr(h, "_givenfixture", False) for h in logger.handlers)

    def test_reconfiguring_replaces_handler(self) -> None:
        given.configure_logging("INFO", "text")
        given.configure_logging("ERROR", "json")
        logger = logging.getLogger(given.PACKAGE_LOGGER)

        ours = [h for h in logger.handlers if getattr(h, "_givenfixture", False)]
        assert len(ours) == 1
        assert ours[0].formatter._fmt.startswith('{"time"')
        assert logger.level == logging.ERROR
