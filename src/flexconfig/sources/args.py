"""Command-line argument scanning for ``--<key>=<value>`` property definitions."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping, Sequence

from flexconfig.keys import conforms_to_key

__all__ = [
    "ARGS_TERMINATOR",
    "strip_quotes",
    "parse_argument",
    "read_command_line_args",
    "search_argument",
]

logger = logging.getLogger(__name__)

ARGS_TERMINATOR = "--"

_QUOTES = ('"', "'")


def strip_quotes(value: str) -> str:
    """Remove one matching pair of surrounding double or single quotes."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_argument(token: str) -> tuple[str, str] | None:
    """Parse a single ``--<key>=<value>`` token.

    Returns:
        The (key, value) pair with quotes stripped from the value, or None if
        the token is not a property definition: single-dash flags, long
        flags without ``=``, and names using characters outside the key
        alphabet are all rejected.
    """
    if not token.startswith("--"):
        return None
    name, sep, value = token[2:].partition("=")
    if not sep or not conforms_to_key(name):
        return None
    return name, strip_quotes(value)


def read_command_line_args(target: MutableMapping[str, str], args: Sequence[str]) -> int:
    """Add property definitions found in a command line to target.

    The first element is the program name and is always skipped. Scanning
    stops at the first bare ``--``.

    Returns:
        Number of properties written.
    """
    count = 0
    for token in args[1:]:
        if token == ARGS_TERMINATOR:
            break
        parsed = parse_argument(token)
        if parsed is None:
            continue
        key, value = parsed
        target[key] = value
        count += 1
    logger.debug("Read %d properties from command-line arguments", count)
    return count


def search_argument(args: Sequence[str], name: str) -> str:
    """Return the raw value of ``--<name>=<value>`` in args, or '' if absent."""
    if not name:
        return ""
    flag = f"--{name}="
    for token in args[1:]:
        if token == ARGS_TERMINATOR:
            break
        if token.startswith(flag):
            return token[len(flag):]
    return ""
