"""Arrange helpers for random model instances."""

from collections.abc import Callable
from typing import Any, TypeVar

from givenfixture.core.fixture import Fixture
from givenfixture.core.ports import InstanceBuilderPort

T = TypeVar("T")
F = TypeVar("F", bound="ModelExtensions")


class ModelExtensions(Fixture):
    """Random instances for arrange steps, stored in ``properties`` by key."""

    def create(self, model_type: type[T], **overrides: Any) -> T:
        return self.builder.create(model_type, **overrides)

    def create_many(self, model_type: type[T], count: int | None = None, **overrides: Any) -> list[T]:
        return self.builder.create_many(model_type, count, **overrides)

    def having_builder(self: F, configure: Callable[[InstanceBuilderPort], Any]) -> F:
        self._ensure_configurable()
        configure(self.builder)
        return self

    def having_strategy(self: F, model_type: type, strategy: Any) -> F:
        """Generate ``model_type`` instances with a custom strategy."""
        self._ensure_configurable()
        self.builder.register(model_type, strategy)
        return self

    def having_model(self: F, key: str, model_type: type, **overrides: Any) -> F:
        self._ensure_configurable()
        self.properties[key] = self.builder.create(model_type, **overrides)
        return self

    def having_models(
        self: F, key: str, model_type: type, count: int | None = None, **overrides: Any
    ) -> F:
        self._ensure_configurable()
        self.properties[key] = self.builder.create_many(model_type, count, **overrides)
        return self
