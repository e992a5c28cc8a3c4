"""Random instance builder backed by hypothesis strategies.

Instances are drawn with ``SearchStrategy.example()``. That is meant for
exploration rather than property tests, so the builder must not be used
inside a ``@hypothesis.given`` test.
"""

import dataclasses
import logging
import warnings
from collections.abc import Sequence
from typing import Any, TypeVar

from hypothesis import strategies as st
from hypothesis.errors import NonInteractiveExampleWarning
from pydantic import BaseModel

from givenfixture.core.errors import ConfigurationError
from givenfixture.core.ports import InstanceBuilderPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_COLLECTION_SIZE = 3


class HypothesisInstanceBuilder(InstanceBuilderPort):
    """Builds structurally valid random instances from type hints.

    Attributes:
        collection_size: Number of instances create_many() builds by default.
    """

    def __init__(self, collection_size: int = DEFAULT_COLLECTION_SIZE):
        if collection_size <= 0:
            raise ValueError("collection_size must be positive")
        self.collection_size = collection_size
        self._strategies: dict[type, st.SearchStrategy[Any]] = {}

    def register(self, model_type: type, strategy: Any) -> None:
        if not isinstance(strategy, st.SearchStrategy):
            raise ConfigurationError(
                f"Strategy for {model_type.__name__} must be a hypothesis "
                f"SearchStrategy, got {type(strategy).__name__}"
            )
        self._strategies[model_type] = strategy

    def create(self, model_type: type[T], **overrides: Any) -> T:
        return _draw(self._strategy_for(model_type, overrides))

    def create_many(
        self, model_type: type[T], count: int | None = None, **overrides: Any
    ) -> list[T]:
        size = self.collection_size if count is None else count
        if size < 0:
            raise ValueError("count must be non-negative")
        strategy = self._strategy_for(model_type, overrides)
        return [_draw(strategy) for _ in range(size)]

    def pick(self, choices: Sequence[T]) -> T:
        if not choices:
            raise ValueError("Cannot pick from an empty sequence")
        return _draw(st.sampled_from(list(choices)))

    def _strategy_for(
        self, model_type: type[T], overrides: dict[str, Any]
    ) -> st.SearchStrategy[T]:
        registered = self._strategies.get(model_type)
        if registered is not None:
            if not overrides:
                return registered
            return registered.map(lambda instance: _with_overrides(instance, overrides))
        if not overrides:
            return st.from_type(model_type)
        return st.builds(model_type, **{k: st.just(v) for k, v in overrides.items()})


def _draw(strategy: st.SearchStrategy[T]) -> T:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonInteractiveExampleWarning)
        return strategy.example()


def _with_overrides(instance: Any, overrides: dict[str, Any]) -> Any:
    """Copy ``instance`` with ``overrides`` applied."""
    if dataclasses.is_dataclass(instance) and not isinstance(instance, type):
        return dataclasses.replace(instance, **overrides)
    if isinstance(instance, BaseModel):
        return instance.model_copy(update=overrides)
    for name, value in overrides.items():
        setattr(instance, name, value)
    return instance
