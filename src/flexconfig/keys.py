"""Property key validation and canonicalization."""

from __future__ import annotations

import re

__all__ = [
    "KEY_CHARACTERS",
    "PROPERTY_KEY_PATTERN",
    "NAME_PATTERN",
    "conforms_to_key",
    "is_valid_name",
    "is_valid_property_key",
    "canonical_key",
    "env_name_to_key",
    "dots_to_slash",
    "slash_to_dots",
    "normalize_namespace",
]

KEY_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyz.-_0123456789")

PROPERTY_KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")

NAME_PATTERN = re.compile(r"(?:[A-Za-z][A-Za-z0-9_]*)?")


def conforms_to_key(name: str) -> bool:
    """Return True if name is non-empty and uses only canonical key characters."""
    if not name:
        return False
    return all(c in KEY_CHARACTERS for c in name)


def is_valid_name(name: str) -> bool:
    """Check an application name or environment variable prefix.

    The empty string is accepted; otherwise the name must start with a
    letter and continue with letters, digits, or underscores.
    """
    return NAME_PATTERN.fullmatch(name) is not None


def is_valid_property_key(key: str) -> bool:
    """Check whether key may be written through the configuration facade."""
    return PROPERTY_KEY_PATTERN.fullmatch(key) is not None


def canonical_key(key: str) -> str:
    """Trim surrounding whitespace and lowercase a property key."""
    return key.strip().lower()


def env_name_to_key(name: str) -> str:
    """Convert an environment variable name to canonical key form.

    Example:
        >>> env_name_to_key("MYAPP_LOG_LEVEL")
        'myapp.log.level'
    """
    return name.lower().replace("_", ".")


def dots_to_slash(key: str) -> str:
    """Convert a dotted key to a slash-delimited path with one leading slash."""
    if not key:
        return key
    path = key.replace(".", "/")
    if not path.startswith("/"):
        path = "/" + path
    return path


def slash_to_dots(path: str) -> str:
    """Convert a slash-delimited path back to dotted key form."""
    if not path:
        return path
    return path.replace("/", ".")


def normalize_namespace(prefix: str) -> str:
    """Normalize a store namespace to start with, and never end with, a slash.

    An empty namespace (or a bare '/') means the store root and is returned
    as the empty string.
    """
    prefix = prefix.strip().rstrip("/")
    if not prefix:
        return ""
    if not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix
