"""flexconfig - Layered application configuration from files, environment, command line and stores."""

from __future__ import annotations

# Facade
from flexconfig.config import (
    ConfigurationParameters,
    FlexibleConfiguration,
    get_configuration,
    get_property,
    new_flexible_configuration,
    property_exists,
    reset_configuration,
    set_property,
)

# Errors
from flexconfig.errors import (
    ConfigError,
    ErrorCodes,
    FlexConfigError,
    InvalidApplicationNameError,
    InvalidEnvPrefixError,
    SourceParseError,
    StoreError,
    StoreKeyRequiredError,
    StoreTransportError,
    UnsupportedStoreTypeError,
    UnsupportedStructureError,
)

# Flattening
from flexconfig.flatten import NodeKind, classify, flatten, parse_structured

# Sources
from flexconfig.merge import merge_layers, read_static_configuration
from flexconfig.sources import (
    CONFIG_FILE_ENV_VAR,
    CONFIG_FILE_FLAG,
    ParseOutcome,
    parse_config_text,
    standard_search_path,
)

# Stores
from flexconfig.store import EtcdStore, KeyValue, MemoryStore, Store, StoreType, new_store

__version__ = "0.1.0"

__all__ = [
    # Facade
    "ConfigurationParameters",
    "FlexibleConfiguration",
    "new_flexible_configuration",
    "get_configuration",
    "reset_configuration",
    "get_property",
    "set_property",
    "property_exists",
    # Errors
    "FlexConfigError",
    "ConfigError",
    "InvalidApplicationNameError",
    "InvalidEnvPrefixError",
    "SourceParseError",
    "UnsupportedStructureError",
    "StoreError",
    "StoreKeyRequiredError",
    "StoreTransportError",
    "UnsupportedStoreTypeError",
    "ErrorCodes",
    # Flattening
    "NodeKind",
    "classify",
    "flatten",
    "parse_structured",
    # Sources
    "CONFIG_FILE_FLAG",
    "CONFIG_FILE_ENV_VAR",
    "ParseOutcome",
    "parse_config_text",
    "standard_search_path",
    "merge_layers",
    "read_static_configuration",
    # Stores
    "Store",
    "KeyValue",
    "StoreType",
    "MemoryStore",
    "EtcdStore",
    "new_store",
]
