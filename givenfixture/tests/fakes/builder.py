"""Fake InstanceBuilderPort implementation for testing."""

from collections.abc import Sequence
from typing import Any

from givenfixture.core.ports import InstanceBuilderPort


class FakeInstanceBuilder(InstanceBuilderPort):
    """Deterministic instance builder for testing.

    Builds instances by calling the type with the overrides plus any
    defaults configured with set_defaults(). Records every call.
    """

    def __init__(self) -> None:
        """Initialize with no defaults."""
        self.defaults: dict[type, dict[str, Any]] = {}
        self.strategies: dict[type, Any] = {}
        self.create_calls: list[tuple[type, dict[str, Any]]] = []
        self.collection_size = 3

    def set_defaults(self, model_type: type, **values: Any) -> None:
        """Set constructor values used for model_type."""
        self.defaults[model_type] = values

    def register(self, model_type: type, strategy: Any) -> None:
        self.strategies[model_type] = strategy

    def create(self, model_type: type, **overrides: Any) -> Any:
        self.create_calls.append((model_type, overrides))
        if model_type in self.strategies:
            return self.strategies[model_type]()
        return model_type(**{**self.defaults.get(model_type, {}), **overrides})

    def create_many(self, model_type: type, count: int | None = None, **overrides: Any) -> list[Any]:
        size = self.collection_size if count is None else count
        return [self.create(model_type, **overrides) for _ in range(size)]

    def pick(self, choices: Sequence[Any]) -> Any:
        """Always pick the first choice."""
        return choices[0]
