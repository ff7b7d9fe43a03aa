"""Configuration facade and the process-wide configuration handle.

A FlexibleConfiguration answers property lookups from an optional store
first and from the merged static properties second. The module keeps one
current handle for the process, replaced atomically by
new_flexible_configuration() and created lazily by get_configuration().
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flexconfig.errors import (
    ConfigError,
    FlexConfigError,
    InvalidApplicationNameError,
    InvalidEnvPrefixError,
    StoreError,
)
from flexconfig.keys import canonical_key, is_valid_name, is_valid_property_key
from flexconfig.merge import read_static_configuration
from flexconfig.sources.files import DEFAULT_SUFFIXES
from flexconfig.store.base import Store

__all__ = [
    "ConfigurationParameters",
    "FlexibleConfiguration",
    "new_flexible_configuration",
    "get_configuration",
    "reset_configuration",
    "get_property",
    "set_property",
    "property_exists",
]

logger = logging.getLogger(__name__)


class ConfigurationParameters(BaseModel):
    """Initialization parameters for a FlexibleConfiguration.

    ``args`` and ``environ`` default to the running process's command line
    and environment when left as None.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    application_name: str = ""
    directories: list[str | Path] = Field(default_factory=list)
    environment_variable_prefixes: list[str] = Field(default_factory=list)
    accepted_file_suffixes: list[str] = Field(default_factory=list)
    ini_name_prefix: str = ""
    configuration_store: Store | None = None
    args: list[str] | None = None
    environ: dict[str, str] | None = None

    def effective_suffixes(self) -> list[str]:
        """Accepted file suffixes, falling back to the defaults when none are set."""
        return list(self.accepted_file_suffixes) or list(DEFAULT_SUFFIXES)


def _validate_names(parameters: ConfigurationParameters) -> None:
    if not is_valid_name(parameters.application_name):
        raise InvalidApplicationNameError(parameters.application_name)
    for prefix in parameters.environment_variable_prefixes:
        if not is_valid_name(prefix):
            raise InvalidEnvPrefixError(prefix)


class FlexibleConfiguration:
    """Layered property lookup over a store and static configuration.

    Lookups never raise: an empty or unknown key reads as ``""`` and does not
    exist. Keys are trimmed and lowercased before use.

    Thread safety:
        Reads and writes on a handle are not synchronized. Hosts that call
        set() concurrently with other calls must serialize access.
    """

    def __init__(
        self,
        properties: Mapping[str, str] | None = None,
        store: Store | None = None,
        application_name: str = "",
    ) -> None:
        self._properties: dict[str, str] = dict(properties or {})
        self._store = store
        self._application_name = application_name

    @classmethod
    def from_parameters(cls, parameters: ConfigurationParameters) -> FlexibleConfiguration:
        """Build a handle by reading every static source named by parameters.

        Raises:
            InvalidApplicationNameError: If the application name is malformed.
            InvalidEnvPrefixError: If an environment variable prefix is malformed.
        """
        _validate_names(parameters)
        properties = read_static_configuration(parameters)
        return cls(
            properties=properties,
            store=parameters.configuration_store,
            application_name=parameters.application_name,
        )

    @property
    def application_name(self) -> str:
        return self._application_name

    @property
    def store(self) -> Store | None:
        """The attached store, or None."""
        return self._store

    def properties(self) -> dict[str, str]:
        """Return a copy of the static properties, including values written with set()."""
        return dict(self._properties)

    def _store_get(self, key: str) -> str | None:
        if self._store is None:
            return None
        try:
            return self._store.get(key)
        except StoreError as e:
            logger.debug("Store lookup of '%s' failed, using static value: %s", key, e)
            return None

    def get(self, key: str) -> str:
        """Return the value of a property, or '' when it is not defined.

        A non-empty store value takes precedence over the static value.
        """
        key = canonical_key(key)
        if not key:
            return ""
        value = self._store_get(key)
        if value:
            return value
        return self._properties.get(key, "")

    def exists(self, key: str) -> bool:
        """Return True if the property has a non-empty value."""
        return self.get(key) != ""

    def set(self, key: str, value: str) -> None:
        """Define a property for the lifetime of this handle.

        Keys must start with a letter or underscore and use only letters,
        digits, ``_``, ``.`` and ``-``; other keys are ignored. With a store
        attached the value is written there too, and a store failure does
        not undo the in-memory write.
        """
        key = key.strip()
        if not is_valid_property_key(key):
            logger.debug("Ignoring set of invalid property key '%s'", key)
            return
        key = key.lower()
        self._properties[key] = value
        if self._store is None:
            return
        try:
            self._store.set(key, value)
        except StoreError as e:
            logger.warning("Failed to write property '%s' to store: %s", key, e)

    def __repr__(self) -> str:
        return (
            f"FlexibleConfiguration(application_name={self._application_name!r}, "
            f"properties={len(self._properties)}, store={self._store is not None})"
        )


_configuration: FlexibleConfiguration | None = None
_lock = threading.Lock()


def _coerce_parameters(
    parameters: ConfigurationParameters | Mapping[str, Any] | None,
) -> ConfigurationParameters:
    if parameters is None:
        return ConfigurationParameters()
    if isinstance(parameters, ConfigurationParameters):
        return parameters
    if isinstance(parameters, Mapping):
        try:
            return ConfigurationParameters.model_validate(dict(parameters))
        except ValidationError as e:
            raise ConfigError(
                "Invalid configuration parameters",
                details={"errors": e.errors(include_url=False)},
                cause=e,
            ) from e
    raise ConfigError(
        f"Configuration parameters must be a mapping, got {type(parameters).__name__}",
        details={"type": type(parameters).__name__},
    )


def new_flexible_configuration(
    parameters: ConfigurationParameters | Mapping[str, Any] | None = None,
) -> FlexibleConfiguration:
    """Create a configuration handle and make it the process-wide current one.

    On failure the previous current handle stays in place.

    Raises:
        ConfigError: If parameters are malformed, including an invalid
            application name or environment variable prefix.
    """
    global _configuration
    params = _coerce_parameters(parameters)
    configuration = FlexibleConfiguration.from_parameters(params)
    with _lock:
        _configuration = configuration
    logger.info(
        "Configuration initialized for '%s': %d properties, store %s",
        params.application_name,
        len(configuration.properties()),
        "attached" if params.configuration_store is not None else "not attached",
    )
    return configuration


def get_configuration() -> FlexibleConfiguration:
    """Return the current handle, creating a default one on first use."""
    global _configuration
    with _lock:
        if _configuration is not None:
            return _configuration
    try:
        configuration = FlexibleConfiguration.from_parameters(ConfigurationParameters())
    except FlexConfigError as e:
        logger.warning("Default configuration failed, using an empty one: %s", e)
        configuration = FlexibleConfiguration()
    with _lock:
        if _configuration is None:
            _configuration = configuration
        return _configuration


def reset_configuration() -> None:
    """Forget the current handle; the next get_configuration() builds a new one."""
    global _configuration
    with _lock:
        _configuration = None


def get_property(key: str) -> str:
    """Shortcut for get_configuration().get(key)."""
    return get_configuration().get(key)


def set_property(key: str, value: str) -> None:
    """Shortcut for get_configuration().set(key, value)."""
    get_configuration().set(key, value)


def property_exists(key: str) -> bool:
    """Shortcut for get_configuration().exists(key)."""
    return get_configuration().exists(key)
