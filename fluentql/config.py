"""Pydantic models describing a database connection.

A :class:`DatabaseConfig` is everything a driver needs to open a connection
and to quote identifiers the same way on every compile call::

    from fluentql.config import DatabaseConfig

    config = DatabaseConfig(
        driver="sqlite",
        connection={"database": ":memory:"},
        table_prefix="app_",
    )

Configs can also be given as plain dicts wherever a ``DatabaseConfig`` is
accepted; :func:`load_config` performs the validation.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fluentql.errors import ConfigurationError


class ConnectionConfig(BaseModel):
    """Backend connection parameters.

    Attributes:
        database: Database name, or a file path / ``:memory:`` for SQLite.
        hostname: Server host for network backends.
        port: Server port for network backends.
        username: Login user.
        password: Login password.
        persistent: Keep the connection open across requests.
        dsn: Full data source name; drivers that accept one prefer it over the
            individual fields.
    """

    model_config = ConfigDict(extra="forbid")

    database: str = ""
    hostname: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    persistent: bool = False
    dsn: str | None = None


class DatabaseConfig(BaseModel):
    """Configuration for one named database instance.

    Attributes:
        driver: Registered driver name (see :class:`~fluentql.database.registry.DriverFactory`).
        connection: Connection parameters passed to the driver.
        table_prefix: Prefix prepended to every quoted table name.
        identifier: Identifier quote character override.  ``None`` keeps the
            driver default.
        charset: Character set applied after connecting, when supported.
    """

    model_config = ConfigDict(extra="forbid")

    driver: str = "sqlite"
    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    table_prefix: str = ""
    identifier: str | None = None
    charset: str | None = None


def load_config(config: DatabaseConfig | dict[str, Any] | None) -> DatabaseConfig:
    """Return a validated :class:`DatabaseConfig`.

    Args:
        config: An existing config, a raw mapping, or ``None`` for defaults.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If ``config`` does not match the model.
    """
    if config is None:
        return DatabaseConfig()
    if isinstance(config, DatabaseConfig):
        return config
    try:
        return DatabaseConfig.model_validate(config)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid database configuration: {exc}",
            details={"errors": exc.errors()},
        ) from exc
