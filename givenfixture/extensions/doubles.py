"""Arrange helpers for collaborator doubles.

The ``having_mocked*`` helpers take the method name followed by the call's
expected arguments. Their own options (``returns``, ``error``, ``model``,
``key``, ``overrides``, ``count``, ``because``) are keyword-only; every other
keyword argument is part of the expected call.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from givenfixture.core.fixture import Fixture
from givenfixture.core.models import (
    CallPattern,
    Computes,
    DoesNothing,
    Effect,
    Expectation,
    Raises,
    Returns,
)
from givenfixture.core.ports import DoubleProviderPort

F = TypeVar("F", bound="DoubleExtensions")


class DoubleSetup:
    """Expectation registration for one capability.

    Passed to the configure callback of ``having_mock``:

        fixture.having_mock(
            Repository,
            lambda m: m.setup("get", 1).returns(item),
        )
    """

    def __init__(self, doubles: DoubleProviderPort, capability: type):
        self._doubles = doubles
        self.capability = capability

    @property
    def proxy(self) -> Any:
        """The double injected into the subject."""
        return self._doubles.resolve(self.capability)

    def setup(self, method: str, *args: Any, **kwargs: Any) -> "ExpectationSetup":
        return ExpectationSetup(self._doubles, self.capability, CallPattern(method, args, kwargs))


class ExpectationSetup:
    """Chooses the effect of one call pattern and registers it."""

    def __init__(self, doubles: DoubleProviderPort, capability: type, pattern: CallPattern):
        self._doubles = doubles
        self._capability = capability
        self._pattern = pattern

    def returns(self, value: Any, *, verifiable: bool = False, because: str | None = None) -> Expectation:
        return self._register(Returns(value), verifiable, because)

    def raises(
        self, error: BaseException, *, verifiable: bool = False, because: str | None = None
    ) -> Expectation:
        return self._register(Raises(error), verifiable, because)

    def computes(
        self, func: Callable[..., Any], *, verifiable: bool = False, because: str | None = None
    ) -> Expectation:
        return self._register(Computes(func), verifiable, because)

    def does_nothing(self, *, verifiable: bool = False, because: str | None = None) -> Expectation:
        return self._register(DoesNothing(), verifiable, because)

    def _register(self, effect: Effect, verifiable: bool, because: str | None) -> Expectation:
        return self._doubles.register_expectation(
            self._capability, self._pattern, effect, must_verify=verifiable, because=because
        )


class DoubleExtensions(Fixture):
    """Fluent arrange steps for doubles; every ``having_mocked*`` call is verifiable."""

    def having_mock(self: F, capability: type, configure: Callable[[DoubleSetup], Any]) -> F:
        """Configure the double for ``capability`` freely."""
        self._ensure_configurable()
        configure(DoubleSetup(self.doubles, capability))
        return self

    def having_provided(self: F, capability: type, instance: Any) -> F:
        """Inject ``instance`` instead of a generated double."""
        self._ensure_configurable()
        self.doubles.provide(capability, instance)
        return self

    def having_mocked(
        self: F,
        capability: type,
        method: str,
        *args: Any,
        returns: Any = None,
        because: str | None = None,
        **kwargs: Any,
    ) -> F:
        """Expect ``method(*args, **kwargs)`` and return ``returns``."""
        return self._expect(capability, CallPattern(method, args, kwargs), Returns(returns), because)

    def having_mocked_call(
        self: F,
        capability: type,
        method: str,
        *args: Any,
        because: str | None = None,
        **kwargs: Any,
    ) -> F:
        """Expect ``method(*args, **kwargs)`` and do nothing."""
        return self._expect(capability, CallPattern(method, args, kwargs), DoesNothing(), because)

    def having_mock_raise(
        self: F,
        capability: type,
        method: str,
        *args: Any,
        error: BaseException | type[BaseException],
        key: str | None = None,
        because: str | None = None,
        **kwargs: Any,
    ) -> F:
        """Expect ``method(*args, **kwargs)`` and raise ``error``.

        An exception class is instantiated without arguments. With ``key``,
        the raised instance is stored in ``properties``.
        """
        self._ensure_configurable()
        instance = error() if isinstance(error, type) else error
        if key is not None:
            self.properties[key] = instance
        return self._expect(capability, CallPattern(method, args, kwargs), Raises(instance), because)

    def having_mocked_model(
        self: F,
        capability: type,
        method: str,
        *args: Any,
        model: type,
        key: str | None = None,
        overrides: dict[str, Any] | None = None,
        because: str | None = None,
        **kwargs: Any,
    ) -> F:
        """Expect the call and return a random ``model`` instance.

        The instance is stored in ``properties[key]`` when a key is given.
        """
        self._ensure_configurable()
        instance = self.builder.create(model, **(overrides or {}))
        if key is not None:
            self.properties[key] = instance
        return self._expect(capability, CallPattern(method, args, kwargs), Returns(instance), because)

    def having_mocked_models(
        self: F,
        capability: type,
        method: str,
        *args: Any,
        model: type,
        key: str | None = None,
        count: int | None = None,
        overrides: dict[str, Any] | None = None,
        because: str | None = None,
        **kwargs: Any,
    ) -> F:
        """Expect the call and return a list of random ``model`` instances."""
        self._ensure_configurable()
        instances = self.builder.create_many(model, count, **(overrides or {}))
        if key is not None:
            self.properties[key] = instances
        return self._expect(capability, CallPattern(method, args, kwargs), Returns(instances), because)

    def _expect(
        self: F, capability: type, pattern: CallPattern, effect: Effect, because: str | None
    ) -> F:
        self._ensure_configurable()
        self.doubles.register_expectation(
            capability, pattern, effect, must_verify=True, because=because
        )
        return self
