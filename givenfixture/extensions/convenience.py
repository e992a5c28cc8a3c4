"""Small arrange helpers that keep a test in one fluent chain."""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from givenfixture.core.fixture import Fixture
from givenfixture.core.ports import InstanceBuilderPort

F = TypeVar("F", bound="ConvenienceExtensions")


class ConvenienceExtensions(Fixture):
    def having(self: F, action: Callable[[], Any]) -> F:
        """Run an arbitrary arrange action."""
        self._ensure_configurable()
        action()
        return self

    def having_value(self: F, key: str, factory: Callable[[], Any]) -> F:
        self._ensure_configurable()
        self.properties[key] = factory()
        return self

    def having_random(self: F, key: str, choices: Sequence[Any]) -> F:
        """Store one of ``choices``, picked at random."""
        self._ensure_configurable()
        self.properties[key] = self.builder.pick(choices)
        return self

    def having_fake(self: F, key: str, factory: Callable[[InstanceBuilderPort], Any]) -> F:
        """Store whatever ``factory`` makes from the instance builder."""
        self._ensure_configurable()
        self.properties[key] = factory(self.builder)
        return self
