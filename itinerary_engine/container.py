"""Dependency injection container.

Wires the engine components, the segment repository and the consistency
service together. Registration is explicit and factories run lazily on
first resolve; tests swap a binding by registering their own factory.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Registry of factories keyed by component class or port.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(ItineraryConsistencyService)

        # Testing
        container = Container()
        container.register(SegmentRepositoryPort, lambda: FakeRepository())
        repository = container.resolve(SegmentRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        key: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind ``key`` (a component class or port Protocol) to a factory.

        Singleton bindings build one instance on first resolve.
        """
        with self._lock:
            self._factories[key] = factory
            if singleton:
                self._singleton_types.add(key)
            else:
                self._singleton_types.discard(key)
            self._singletons.pop(key, None)

    def resolve(self, key: type[Any]) -> Any:
        """Build or fetch the instance bound to ``key``.

        Raises:
            KeyError: If nothing is bound to ``key``.
        """
        with self._lock:
            factory = self._factories.get(key)
            if factory is None:
                raise KeyError(f"Nothing bound to {key!r}")
            if key not in self._singleton_types:
                return factory()
            if key not in self._singletons:
                self._singletons[key] = factory()
            return self._singletons[key]

    def clear_all(self) -> None:
        """Drop every binding and cached instance."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind the engine components, an in-memory segment repository
        and the consistency service, all built from ``config``."""
        from .adapters.storage import InMemorySegmentRepository
        from .ports.segments import SegmentRepositoryPort
        from .services import (
            CascadeAdjuster,
            DurationInferencer,
            GapDetector,
            GapFiller,
            ItineraryConsistencyService,
            LocationMatcher,
        )

        config = config or get_config()
        container = cls(config=config)

        # Engine components
        container.register(LocationMatcher, lambda: LocationMatcher(config.matching))
        container.register(
            GapDetector,
            lambda: GapDetector(
                config=config.gaps,
                matcher=container.resolve(LocationMatcher),
            ),
        )
        container.register(DurationInferencer, lambda: DurationInferencer())
        container.register(CascadeAdjuster, lambda: CascadeAdjuster(config.cascade))
        container.register(
            GapFiller,
            lambda: GapFiller(durations=container.resolve(DurationInferencer)),
        )

        # Storage
        container.register(SegmentRepositoryPort, lambda: InMemorySegmentRepository())

        # Main service; no geocoder is bound by default
        def create_consistency_service() -> ItineraryConsistencyService:
            return ItineraryConsistencyService(
                repository=container.resolve(SegmentRepositoryPort),
                gap_detector=container.resolve(GapDetector),
                cascade_adjuster=container.resolve(CascadeAdjuster),
                gap_filler=container.resolve(GapFiller),
            )

        container.register(ItineraryConsistencyService, create_consistency_service)

        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Process-wide container, created from get_config() on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Drop the process-wide container; the next get_container() rebuilds it."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
