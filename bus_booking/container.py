"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

The container also owns the state lifecycle: ``create_default`` restores
the booking state from the configured snapshot (if any) and ``shutdown``
saves it back.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import AppConfig, get_config

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(BookingService)

        # Testing
        container = Container()
        container.register(ClockPort, lambda: FixedClock(start_ns=0))
        clock = container.resolve(ClockPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _shutdown_hooks: list[Callable[[], None]] = field(default_factory=list, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def on_shutdown(self, hook: Callable[[], None]) -> None:
        """Register a callable to run when the container shuts down."""
        with self._lock:
            self._shutdown_hooks.append(hook)

    def shutdown(self) -> None:
        """Run shutdown hooks in reverse registration order."""
        with self._lock:
            hooks = list(reversed(self._shutdown_hooks))
            self._shutdown_hooks.clear()
        for hook in hooks:
            hook()

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations, singletons and shutdown hooks."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()
            self._shutdown_hooks.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Logging is configured from ``config.observability``. When a
        snapshot path is configured the booking state is restored
        from it, saved again on ``shutdown`` and, with autosave, after every
        successful mutation.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.

        Raises:
            StorageError: If the configured snapshot exists but is unreadable.
        """
        from .adapters.clock import SystemClock
        from .adapters.snapshot import JsonSnapshotRepository
        from .api.dispatcher import BookingDispatcher
        from .monitoring import configure_logging
        from .ports.clock import ClockPort
        from .ports.snapshot import SnapshotRepositoryPort
        from .services import BookingService, BookingState

        config = config or get_config()
        container = cls(config=config)
        configure_logging(config.observability)
        logger = logging.getLogger(__name__)

        container.register(ClockPort, lambda: SystemClock())

        snapshot_path = config.store.snapshot_path
        repository: Optional[JsonSnapshotRepository] = None
        if snapshot_path is not None:
            repository = JsonSnapshotRepository(snapshot_path)
            container.register(SnapshotRepositoryPort, lambda: repository)

        state = (repository.load() if repository else None) or BookingState.empty()
        container.register(BookingState, lambda: state)

        def create_booking_service() -> BookingService:
            on_commit = repository.save if repository and config.store.autosave else None
            return BookingService(
                state=container.resolve(BookingState),
                clock=container.resolve(ClockPort),
                on_commit=on_commit,
            )

        container.register(BookingService, create_booking_service)
        container.register(
            BookingDispatcher,
            lambda: BookingDispatcher(service=container.resolve(BookingService)),
        )

        if repository is not None:
            container.on_shutdown(lambda: repository.save(container.resolve(BookingState)))

        logger.info(
            "Container ready",
            extra={
                "persistent": config.store.persistent,
                "autosave": config.store.autosave,
                "id_counter": state.ids.current,
            },
        )
        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Shut down and drop the default container."""
    global _default_container
    with _container_lock:
        container, _default_container = _default_container, None
    if container is not None:
        container.shutdown()
