"""Error hierarchy for the flexconfig library."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
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
]


class FlexConfigError(Exception):
    """Base error for all flexconfig errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigError(FlexConfigError):
    """Raised when initialization parameters are invalid."""

    def __init__(self, message: str, code: str = "CONFIG_INVALID", **kwargs: Any) -> None:
        super().__init__(code=code, message=message, **kwargs)


class InvalidApplicationNameError(ConfigError):
    """Raised when the application name does not follow the identifier grammar."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            code="PARM_NAME_NOT_VALID",
            message=(
                f"Application name not valid: '{name}'. "
                "Use a letter followed by letters, digits, or underscores."
            ),
            details={"application_name": name},
            **kwargs,
        )

    @property
    def application_name(self) -> str:
        """The rejected application name."""
        return self.details["application_name"]


class InvalidEnvPrefixError(ConfigError):
    """Raised when an environment variable prefix does not follow the identifier grammar."""

    def __init__(self, prefix: str, **kwargs: Any) -> None:
        super().__init__(
            code="PARM_ENV_PREFIX_NOT_VALID",
            message=(
                f"Environment variable prefix not valid: '{prefix}'. "
                "Use a letter followed by letters, digits, or underscores."
            ),
            details={"prefix": prefix},
            **kwargs,
        )

    @property
    def prefix(self) -> str:
        """The rejected environment variable prefix."""
        return self.details["prefix"]


class SourceParseError(FlexConfigError):
    """Raised when source text cannot be parsed by a given format parser."""

    def __init__(
        self,
        message: str,
        source_format: str | None = None,
        code: str = "SOURCE_PARSE_ERROR",
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", None) or {}
        details.setdefault("format", source_format)
        super().__init__(code=code, message=message, details=details, **kwargs)

    @property
    def source_format(self) -> str | None:
        """Name of the parser that rejected the text."""
        return self.details["format"]


class UnsupportedStructureError(SourceParseError):
    """Raised when a parsed document contains a node the flattener cannot represent."""

    def __init__(self, path: str, type_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="UNSUPPORTED_STRUCTURE",
            message=f"Unsupported structure at '{path or '<root>'}': {type_name}",
            source_format="structured",
            details={"path": path, "type_name": type_name},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """Dotted path of the offending node ('' for the document root)."""
        return self.details["path"]


class StoreError(FlexConfigError):
    """Base error for configuration store failures."""

    def __init__(self, message: str, code: str = "STORE_ERROR", **kwargs: Any) -> None:
        super().__init__(code=code, message=message, **kwargs)


class StoreKeyRequiredError(StoreError):
    """Raised when a store operation is called without a property key."""

    def __init__(self, operation: str, **kwargs: Any) -> None:
        super().__init__(
            code="STORE_KEY_REQUIRED",
            message=f"Key is required for store {operation}",
            details={"operation": operation},
            **kwargs,
        )


class StoreTransportError(StoreError):
    """Raised when the store backend cannot be reached or answers with an error."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="STORE_TRANSPORT_ERROR", message=message, **kwargs)


class UnsupportedStoreTypeError(FlexConfigError):
    """Raised when the store factory is asked for a backend it does not know."""

    def __init__(self, store_type: object, **kwargs: Any) -> None:
        super().__init__(
            code="STORE_UNSUPPORTED_TYPE",
            message=f"Unsupported store type: {store_type}",
            details={"store_type": str(store_type)},
            **kwargs,
        )


class ErrorCodes:
    """All library error codes as constants.

    Use these instead of hardcoding error code strings.

    Example:
        if error.code == ErrorCodes.STORE_KEY_REQUIRED:
            handle_missing_key()
    """

    CONFIG_INVALID = "CONFIG_INVALID"
    PARM_NAME_NOT_VALID = "PARM_NAME_NOT_VALID"
    PARM_ENV_PREFIX_NOT_VALID = "PARM_ENV_PREFIX_NOT_VALID"
    SOURCE_PARSE_ERROR = "SOURCE_PARSE_ERROR"
    UNSUPPORTED_STRUCTURE = "UNSUPPORTED_STRUCTURE"
    STORE_ERROR = "STORE_ERROR"
    STORE_KEY_REQUIRED = "STORE_KEY_REQUIRED"
    STORE_TRANSPORT_ERROR = "STORE_TRANSPORT_ERROR"
    STORE_UNSUPPORTED_TYPE = "STORE_UNSUPPORTED_TYPE"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
