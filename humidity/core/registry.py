"""
Service kind registry for strategy lookup.

Each deployable service kind ("aws_upload", "instant_database", ...) is a
strategy class that knows how to bring one service up and tear it down.
Strategies register themselves under their kind tag when their module is
imported:

    # In services/__init__.py
    from humidity.core.registry import ServiceKindRegistry
    from .aws_upload import AWSUploadService
    ServiceKindRegistry.register("aws_upload", AWSUploadService)

The orchestrator then resolves a kind tag (from the CLI on ``up``, or from a
record's ``serviceType`` on ``down``) to a strategy instance.
"""

from typing import Dict, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from humidity.services.base import ServiceStrategy
    from humidity.providers.aws.provider import AWSProvider

from .exceptions import ServiceKindNotFoundError


class ServiceKindRegistry:
    """
    Central registry for service kind strategies.

    Class-level state, since strategies register at import time before any
    orchestrator exists. Lookups are read-only.

    Example Usage:
        ServiceKindRegistry.register("aws_upload", AWSUploadService)

        strategy = ServiceKindRegistry.get("aws_upload", provider)
        record = strategy.up(display_name, payload, settings)

        ServiceKindRegistry.list_kinds()  # ["aws_upload", "instant_database"]
    """

    # Key: kind tag, Value: strategy class (not instance)
    _kinds: Dict[str, Type['ServiceStrategy']] = {}

    @classmethod
    def register(cls, kind: str, strategy_class: Type['ServiceStrategy']) -> None:
        """
        Register a strategy class under a kind tag.

        Registering the same class twice is allowed; a different class under
        an existing tag raises.

        Raises:
            ValueError: If kind is already registered with a different class
        """
        if kind in cls._kinds:
            existing_class = cls._kinds[kind]
            if existing_class is not strategy_class:
                raise ValueError(
                    f"Service kind '{kind}' is already registered with {existing_class.__name__}. "
                    f"Cannot re-register with {strategy_class.__name__}."
                )
            return

        cls._kinds[kind] = strategy_class

    @classmethod
    def get(cls, kind: str, provider: 'AWSProvider') -> 'ServiceStrategy':
        """
        Get a new strategy instance for the kind, bound to a provider.

        Raises:
            ServiceKindNotFoundError: If no strategy is registered for the kind
        """
        return cls.get_class(kind)(provider)

    @classmethod
    def get_class(cls, kind: str) -> Type['ServiceStrategy']:
        if kind not in cls._kinds:
            raise ServiceKindNotFoundError(kind, cls.list_kinds())
        return cls._kinds[kind]

    @classmethod
    def list_kinds(cls) -> list[str]:
        """Registered kind tags, sorted alphabetically."""
        return sorted(cls._kinds.keys())

    @classmethod
    def is_registered(cls, kind: str) -> bool:
        return kind in cls._kinds

    @classmethod
    def clear(cls) -> None:
        """
        Remove all registered kinds.

        Only intended for tests that need a clean registry.
        """
        cls._kinds.clear()
