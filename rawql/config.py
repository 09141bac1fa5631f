"""Engine configuration.

Create a config through the builder, or from the environment::

    from rawql import EngineConfig, LogLevel

    config = (
        EngineConfig.builder("sqlite:///gee.db")
        .log_level(LogLevel.ERROR)
        .build()
    )

    # RAWQL_DATABASE_URL=sqlite:///gee.db RAWQL_LOG_LEVEL=error
    config = EngineConfig.from_env()
"""
from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from rawql.errors import ConfigError
from rawql.log import LogLevel

#: Environment variable holding the SQLAlchemy database URL.
ENV_DATABASE_URL = "RAWQL_DATABASE_URL"

#: Environment variable holding the log level name.
ENV_LOG_LEVEL = "RAWQL_LOG_LEVEL"


class EngineConfig(BaseModel):
    """Everything needed to open an :class:`~rawql.engine.Engine`.

    Attributes:
        url: SQLAlchemy database URL (e.g. ``sqlite:///gee.db``).
        log_level: Output level applied to the engine's log sink.
        echo: Forwarded to :func:`sqlalchemy.create_engine`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str
    log_level: LogLevel = LogLevel.INFO
    echo: bool = False

    @classmethod
    def builder(cls, url: str) -> "EngineConfigBuilder":
        """Return an :class:`EngineConfigBuilder` for ``url``."""
        return EngineConfigBuilder(url)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        """Build a config from ``RAWQL_DATABASE_URL`` and ``RAWQL_LOG_LEVEL``.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.

        Raises:
            ConfigError: If the URL is missing or the level name is unknown.
        """
        env = os.environ if environ is None else environ
        builder = cls.builder(env.get(ENV_DATABASE_URL, ""))
        level_name = env.get(ENV_LOG_LEVEL)
        if level_name:
            try:
                builder.log_level(LogLevel.parse(level_name))
            except ValueError as exc:
                raise ConfigError(str(exc), field="log_level") from exc
        return builder.build()


class EngineConfigBuilder:
    """Fluent builder for :class:`EngineConfig`.

    Always obtained via :meth:`EngineConfig.builder`.
    """

    def __init__(self, url: str) -> None:
        self._url = url
        self._log_level = LogLevel.INFO
        self._echo = False

    def log_level(self, level: LogLevel | int) -> "EngineConfigBuilder":
        """Set the output level of the engine's log sink."""
        self._log_level = LogLevel(level)
        return self

    def echo(self, enabled: bool = True) -> "EngineConfigBuilder":
        """Turn on SQLAlchemy's own statement echo."""
        self._echo = enabled
        return self

    def build(self) -> EngineConfig:
        """Validate and return the :class:`EngineConfig`.

        Raises:
            ConfigError: If no database URL was given.
        """
        if not self._url or not self._url.strip():
            raise ConfigError(
                f"No database URL specified. Pass one to EngineConfig.builder() "
                f"or set {ENV_DATABASE_URL}.",
                field="url",
            )
        return EngineConfig(
            url=self._url.strip(),
            log_level=self._log_level,
            echo=self._echo,
        )
