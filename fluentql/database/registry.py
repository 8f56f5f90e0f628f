"""Driver registry.

Maps ``DatabaseConfig.driver`` names to :class:`~fluentql.database.base.Database`
subclasses, so new backends can be plugged in without touching this package::

    from fluentql.database.registry import DriverFactory

    @DriverFactory.register("mysql")
    class MySQLDatabase(Database):
        ...

    db = DriverFactory.create("main", {"driver": "mysql", ...})
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from fluentql.config import DatabaseConfig, load_config
from fluentql.database.base import Database
from fluentql.errors import ConfigurationError


class DriverFactory:
    """Registry mapping driver names to :class:`Database` classes."""

    _drivers: ClassVar[dict[str, type[Database]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Database]], type[Database]]:
        """Decorator that registers a driver class under ``name``."""

        def decorator(driver_cls: type[Database]) -> type[Database]:
            cls._drivers[name] = driver_cls
            return driver_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, driver_cls: type[Database]) -> None:
        """Register a driver class without using the decorator form."""
        cls._drivers[name] = driver_cls

    @classmethod
    def create(
        cls,
        name: str = "default",
        config: DatabaseConfig | dict[str, Any] | None = None,
    ) -> Database:
        """Instantiate the driver named by ``config.driver``.

        Args:
            name: Instance name for the new database.
            config: Configuration; dicts are validated.

        Returns:
            A new, not yet connected, :class:`Database`.

        Raises:
            ConfigurationError: If the config is invalid or the driver is unknown.
        """
        cfg = load_config(config)
        driver_cls = cls._drivers.get(cfg.driver)
        if driver_cls is None:
            raise ConfigurationError(
                f"Database driver '{cfg.driver}' is not registered. "
                f"Registered drivers: {cls.registered_drivers()}.",
                details={"driver": cfg.driver},
            )
        return driver_cls(name, cfg)

    @classmethod
    def registered_drivers(cls) -> list[str]:
        """Return the sorted list of registered driver names."""
        return sorted(cls._drivers)
