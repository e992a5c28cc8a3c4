"""Fake DoubleProviderPort implementation for testing."""

from typing import Any

from givenfixture.core.errors import VerificationError
from givenfixture.core.models import CallPattern, Effect, Expectation
from givenfixture.core.ports import DoubleProviderPort


class FakeDouble:
    """Inert stand-in recording which capability it replaces."""

    def __init__(self, capability: type):
        self.capability = capability

    def __repr__(self) -> str:
        return f"FakeDouble({self.capability.__name__})"


class FakeDoubleProvider(DoubleProviderPort):
    """In-memory double provider for testing.

    Creates one FakeDouble per capability and tracks every call for test
    assertions. Expectations never fire on their own; tests mark them with
    fire() or make verification fail with fail_verification().
    """

    def __init__(self) -> None:
        """Initialize with no doubles."""
        self.doubles: dict[type, Any] = {}
        self.resolve_calls: list[type] = []
        self.expectations: list[Expectation] = []
        self.verify_all_call_count = 0
        self.forced_unmet: list[Expectation] = []

    def resolve(self, capability: type) -> Any:
        """Return the (possibly new) fake double for capability."""
        self.resolve_calls.append(capability)
        if capability not in self.doubles:
            self.doubles[capability] = FakeDouble(capability)
        return self.doubles[capability]

    def provide(self, capability: type, instance: Any) -> None:
        """Use instance as the double for capability."""
        self.doubles[capability] = instance

    def register_expectation(
        self,
        capability: type,
        pattern: CallPattern,
        effect: Effect,
        must_verify: bool,
        because: str | None = None,
    ) -> Expectation:
        """Record the expectation without any matching behaviour."""
        expectation = Expectation(capability, pattern, effect, must_verify, because)
        self.expectations.append(expectation)
        return expectation

    def verify_all(self) -> None:
        """Fail for unfired verifiable expectations and forced failures."""
        self.verify_all_call_count += 1
        unmet = [e for e in self.expectations if e.must_verify and not e.fired]
        unmet += self.forced_unmet
        if unmet:
            raise VerificationError(unmet)

    def fail_verification(self, capability: type, method: str = "missing") -> None:
        """Make the next verify_all() report an unmet expectation."""
        self.forced_unmet.append(
            Expectation(capability, CallPattern(method), effect=None, must_verify=True)  # type: ignore[arg-type]
        )
