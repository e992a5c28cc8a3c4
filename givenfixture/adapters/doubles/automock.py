"""Collaborator doubles backed by ``unittest.mock``.

Each capability gets one autospecced mock, created the first time it is
resolved. Every public method of the capability is routed through a
dispatcher that matches incoming calls against the registered expectations,
most recently registered first, and applies the matching effect.

Strict doubles raise UnexpectedCallError for calls nothing expects; loose
doubles return None.
"""

import inspect
import logging
from typing import Any, TypeVar
from unittest.mock import create_autospec

from givenfixture.core.errors import ConfigurationError, UnexpectedCallError, VerificationError
from givenfixture.core.models import CallPattern, Effect, Expectation, apply_effect
from givenfixture.core.ports import DoubleProviderPort

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AutoMockDouble:
    """One autospecced mock plus the expectations registered against it."""

    def __init__(self, capability: type, strict: bool):
        self.capability = capability
        self.strict = strict
        self.proxy = create_autospec(capability, instance=True)
        self._signatures: dict[str, inspect.Signature] = {}
        self._expectations: dict[str, list[tuple[dict[str, Any], Expectation]]] = {}

        for name in dir(capability):
            if name.startswith("_"):
                continue
            signature = _method_signature(capability, name)
            if signature is None:
                continue
            self._signatures[name] = signature
            getattr(self.proxy, name).side_effect = self._dispatcher(name)

    @property
    def expectations(self) -> list[Expectation]:
        """All expectations, in registration order per method."""
        return [e for entries in self._expectations.values() for _, e in entries]

    def register(
        self,
        pattern: CallPattern,
        effect: Effect,
        must_verify: bool,
        because: str | None = None,
    ) -> Expectation:
        """Add an expectation for ``pattern``.

        Raises:
            ConfigurationError: If the method does not exist or the
                pattern's arguments do not fit its signature.
        """
        if pattern.method not in self._signatures:
            raise ConfigurationError(
                f"{self.capability.__name__} has no public method {pattern.method!r}"
            )
        try:
            expected = self._bind(pattern.method, pattern.args, dict(pattern.kwargs))
        except TypeError as e:
            raise ConfigurationError(
                f"Call pattern {pattern.describe()} does not match the signature of "
                f"{self.capability.__name__}.{pattern.method}: {e}"
            ) from e

        expectation = Expectation(
            capability=self.capability,
            pattern=pattern,
            effect=effect,
            must_verify=must_verify,
            because=because,
        )
        self._expectations.setdefault(pattern.method, []).append((expected, expectation))
        logger.debug(f"Registered expectation {expectation.describe()} -> {effect}")
        return expectation

    def _bind(self, method: str, args: tuple, kwargs: dict[str, Any]) -> dict[str, Any]:
        bound = self._signatures[method].bind(*args, **kwargs)
        bound.apply_defaults()
        return dict(bound.arguments)

    def _dispatcher(self, method: str):
        def dispatch(*args: Any, **kwargs: Any) -> Any:
            actual = self._bind(method, args, kwargs)
            for expected, expectation in reversed(self._expectations.get(method, [])):
                if _arguments_match(expected, actual):
                    expectation.record_call()
                    logger.debug(f"Call matched expectation {expectation.describe()}")
                    return apply_effect(expectation.effect, args, kwargs)
            if self.strict:
                raise UnexpectedCallError(self.capability, method, args, kwargs)
            logger.debug(
                f"Loose double {self.capability.__name__}.{method} returned None "
                f"for an unexpected call"
            )
            return None

        return dispatch


class AutoMockProvider(DoubleProviderPort):
    """Capability-keyed registry of autospecced doubles.

    Attributes:
        strict: Unexpected calls raise instead of returning None.
        verify_all_expectations: Verify every expectation, not only the
            ones registered with must_verify.
    """

    def __init__(self, strict: bool = True, verify_all_expectations: bool = False):
        self.strict = strict
        self.verify_all_expectations = verify_all_expectations
        self._doubles: dict[type, AutoMockDouble] = {}
        self._provided: dict[type, Any] = {}

    def resolve(self, capability: type[T]) -> T:
        if capability in self._provided:
            return self._provided[capability]
        return self._double(capability).proxy

    def provide(self, capability: type[T], instance: T) -> None:
        if capability in self._doubles:
            raise ConfigurationError(
                f"A double for {capability.__name__} was already created; "
                f"provide the instance before configuring or resolving it"
            )
        self._provided[capability] = instance

    def register_expectation(
        self,
        capability: type,
        pattern: CallPattern,
        effect: Effect,
        must_verify: bool,
        because: str | None = None,
    ) -> Expectation:
        if capability in self._provided:
            raise ConfigurationError(
                f"{capability.__name__} was provided as a real instance and "
                f"cannot take expectations"
            )
        return self._double(capability).register(pattern, effect, must_verify, because)

    def verify_all(self) -> None:
        unmet = [
            expectation
            for expectation in self.expectations
            if (expectation.must_verify or self.verify_all_expectations)
            and not expectation.fired
        ]
        if unmet:
            raise VerificationError(unmet)

    @property
    def expectations(self) -> list[Expectation]:
        return [e for double in self._doubles.values() for e in double.expectations]

    def _double(self, capability: type) -> AutoMockDouble:
        double = self._doubles.get(capability)
        if double is None:
            if not isinstance(capability, type):
                raise ConfigurationError(f"Cannot create a double for {capability!r}")
            double = AutoMockDouble(capability, self.strict)
            self._doubles[capability] = double
            logger.debug(
                f"Created {'strict' if self.strict else 'loose'} double for "
                f"{capability.__name__}"
            )
        return double


def _method_signature(capability: type, name: str) -> inspect.Signature | None:
    """Signature of a public method as called on an instance, or None."""
    static = inspect.getattr_static(capability, name)
    if isinstance(static, staticmethod):
        return inspect.signature(static.__func__)
    if isinstance(static, classmethod):
        return inspect.signature(getattr(capability, name))
    if not inspect.isfunction(static):
        return None
    signature = inspect.signature(static)
    parameters = list(signature.parameters.values())[1:]
    return signature.replace(parameters=parameters)


def _arguments_match(expected: dict[str, Any], actual: dict[str, Any]) -> bool:
    if expected.keys() != actual.keys():
        return False
    # Expected values on the left so ANY and Match drive the comparison.
    return all(expected[name] == actual[name] for name in expected)
