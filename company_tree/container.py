"""Dependency injection container.

Collaborators are registered against a port type and resolved on
demand. There is no process-wide instance: callers create a container,
usually through Container.create_default(), and pass it where needed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(CompanyTreeService)

        # Testing
        container = Container.create_default()
        container.register(RecordFetcherPort, lambda: InMemoryRecordFetcher(...))
        service = container.resolve(CompanyTreeService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Re-registering a type replaces its factory and drops any
        instance already built from the previous one.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        self._factories[port_type] = factory
        self._singletons.pop(port_type, None)
        if singleton:
            self._singleton_types.add(port_type)
        else:
            self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        if port_type not in self._factories:
            raise KeyError(f"Type not registered: {port_type}")

        if port_type in self._singleton_types:
            if port_type not in self._singletons:
                self._singletons[port_type] = self._factories[port_type]()
            return self._singletons[port_type]

        return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons."""
        self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        self._factories.clear()
        self._singletons.clear()
        self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.fetch import HttpRecordFetcher, JsonFileRecordFetcher
        from .adapters.serialization import JsonTreeSerializer
        from .ports.records import RecordFetcherPort
        from .ports.serialization import TreeSerializerPort
        from .services import CompanyTreeService, CostAggregator, HierarchyBuilder

        config = config or get_config()
        container = cls(config=config)

        # Record source based on config
        def create_fetcher() -> RecordFetcherPort:
            if config.source.kind == "file":
                return JsonFileRecordFetcher(config.source)
            return HttpRecordFetcher(config.source)

        container.register(RecordFetcherPort, create_fetcher)

        # Core
        container.register(HierarchyBuilder, lambda: HierarchyBuilder(config.tree))
        container.register(CostAggregator, lambda: CostAggregator())

        # Output
        container.register(
            TreeSerializerPort,
            lambda: JsonTreeSerializer(config.output),
        )

        def create_company_tree_service() -> CompanyTreeService:
            return CompanyTreeService(
                fetcher=container.resolve(RecordFetcherPort),
                builder=container.resolve(HierarchyBuilder),
                aggregator=container.resolve(CostAggregator),
                serializer=container.resolve(TreeSerializerPort),
                source=config.source,
            )

        # Main service (not cached)
        container.register(
            CompanyTreeService, create_company_tree_service, singleton=False
        )

        return container
