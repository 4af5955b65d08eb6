"""Registry: explicit driver registration and mount lifecycle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modelscope_store._config import RegistryConfig

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from modelscope_store._driver import Driver

log = logging.getLogger(__name__)


class Registry:
    """Maps driver type names to factories and owns the mounted drivers.

    Nothing is registered implicitly: the host's bootstrap code calls
    :meth:`register` (or :func:`register_builtin_drivers`) before mounting.

    :param config: Optional configuration. Validates immediately.
    :raises ValueError: If config is invalid.
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._config = config or RegistryConfig()
        self._config.validate()
        self._factories: dict[str, Callable[..., Driver]] = {}
        self._drivers: dict[str, Driver] = {}

    def __repr__(self) -> str:
        return f"Registry(mounts={sorted(self._config.mounts.keys())!r}, types={self.types!r})"

    @property
    def types(self) -> list[str]:
        """Registered driver type names, sorted."""
        return sorted(self._factories.keys())

    def register(self, type_name: str, factory: Callable[..., Driver]) -> None:
        """Register a driver constructor for a type name.

        :param type_name: The type identifier (e.g. ``"modelscope"``).
        :param factory: Callable accepting the mount's options as keywords.
        :raises ValueError: If ``type_name`` is already registered.
        """
        if type_name in self._factories:
            raise ValueError(f"Driver type '{type_name}' is already registered")
        self._factories[type_name] = factory

    def get_driver(self, name: str) -> Driver:
        """Get the driver mounted under ``name``, instantiating it on first use.

        :param name: The mount name.
        :raises KeyError: If no mount with this name exists.
        :raises ValueError: If the mount's type is unregistered or its options are invalid.
        """
        if name not in self._config.mounts:
            available = sorted(self._config.mounts.keys())
            raise KeyError(f"Unknown mount '{name}'. Available mounts: {available}")
        if name not in self._drivers:
            self._drivers[name] = self._create(name)
        return self._drivers[name]

    def _create(self, name: str) -> Driver:
        cfg = self._config.mounts[name]
        if cfg.type not in self._factories:
            raise ValueError(f"Unknown driver type '{cfg.type}'. Registered types: {self.types}")
        factory = self._factories[cfg.type]
        try:
            driver = factory(**cfg.options)
        except TypeError as exc:
            raise ValueError(
                f"Invalid options for mount '{name}' (type={cfg.type!r}): {exc}. "
                f"Provided options: {sorted(cfg.options.keys())}"
            ) from exc
        log.info("Mounted %s driver as %r", cfg.type, name)
        return driver

    def close(self) -> None:
        """Close all instantiated drivers."""
        for driver in self._drivers.values():
            driver.close()
        self._drivers.clear()

    def __enter__(self) -> Registry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


def register_builtin_drivers(registry: Registry) -> None:
    """Register the drivers shipped with this package."""
    from modelscope_store.drivers._modelscope import ModelScopeDriver

    registry.register("modelscope", ModelScopeDriver)
