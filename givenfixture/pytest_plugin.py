"""Pytest plugin exposing givenfixture fixtures.

Registered through the ``pytest11`` entry point, so installing the package
is enough:

Fixtures:
    given_fixture: Fresh strict FluentFixture for the test.
    loose_given_fixture: Fresh loose FluentFixture for the test.
    givenfixture_settings: Settings loaded once per session.
"""

import pytest

from givenfixture import given
from givenfixture.config import Settings, load_settings


def pytest_configure(config: pytest.Config) -> None:
    settings = load_settings()
    given.configure_logging(settings.log_level, settings.log_format)


@pytest.fixture(scope="session")
def givenfixture_settings() -> Settings:
    return load_settings()


@pytest.fixture
def given_fixture(givenfixture_settings: Settings) -> given.FluentFixture:
    """Create a fresh strict fixture for the test."""
    return given.strict_fixture(settings=givenfixture_settings)


@pytest.fixture
def loose_given_fixture(givenfixture_settings: Settings) -> given.FluentFixture:
    """Create a fresh loose fixture for the test."""
    return given.loose_fixture(settings=givenfixture_settings)
