"""Port interfaces for the fixture engine.

These abstract base classes define the boundaries between the core
orchestration logic and the libraries that back it. Implementations live
in the adapters/ package.

Port Interface Categories:

1. **DoubleProviderPort**: Controllable stand-ins for the subject's
   collaborators, expectation registration and call verification.
2. **InstanceBuilderPort**: Structurally valid random instances of value
   types, optionally with named fields overridden.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, TypeVar

from .models import CallPattern, Effect, Expectation

T = TypeVar("T")


class DoubleProviderPort(ABC):
    """Port for creating collaborator doubles and verifying their use.

    A provider is owned by exactly one fixture. Expectation state (call
    counts, configured effects) is mutable and scoped to that fixture's test.

    Implementations must handle:
    - Deferred creation (a double is materialised on first resolution)
    - Matching calls against registered patterns, most recent first
    - Either verifying only flagged expectations or all of them
    """

    @abstractmethod
    def resolve(self, capability: type[T]) -> T:
        """Return the double standing in for ``capability``.

        The same object is returned for every resolution of the same
        capability within one provider.

        Args:
            capability: Interface or class the subject depends on.

        Returns:
            The double, or an instance previously registered with provide().
        """

    @abstractmethod
    def provide(self, capability: type[T], instance: T) -> None:
        """Use ``instance`` instead of a generated double for ``capability``.

        Raises:
            ConfigurationError: If the capability was already resolved.
        """

    @abstractmethod
    def register_expectation(
        self,
        capability: type,
        pattern: CallPattern,
        effect: Effect,
        must_verify: bool,
        because: str | None = None,
    ) -> Expectation:
        """Register a call pattern, its effect and whether it must fire.

        Args:
            capability: Interface whose double receives the call.
            pattern: Method name and expected arguments.
            effect: What the double does when the pattern matches.
            must_verify: If True, verify_all() fails unless the call happened.
            because: Optional reason shown when verification fails.

        Returns:
            The registered expectation.

        Raises:
            ConfigurationError: If the pattern does not fit the method's
                signature or the capability was provided as a real instance.
        """

    @abstractmethod
    def verify_all(self) -> None:
        """Check that every expectation requiring verification fired.

        Raises:
            VerificationError: Naming every unmet call pattern.
        """


class InstanceBuilderPort(ABC):
    """Port for producing random but structurally valid instances."""

    @abstractmethod
    def create(self, model_type: type[T], **overrides: Any) -> T:
        """Create one instance with the given fields overridden."""

    @abstractmethod
    def create_many(
        self, model_type: type[T], count: int | None = None, **overrides: Any
    ) -> list[T]:
        """Create several instances.

        Args:
            model_type: Type to build.
            count: Number of instances (builder default if None).
            **overrides: Field values shared by every instance.
        """

    @abstractmethod
    def pick(self, choices: Sequence[T]) -> T:
        """Return one element of ``choices`` at random."""

    @abstractmethod
    def register(self, model_type: type, strategy: Any) -> None:
        """Use a custom generation strategy for ``model_type``."""
