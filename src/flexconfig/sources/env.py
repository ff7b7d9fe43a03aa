"""Environment variable scanning for prefixed property definitions."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, MutableMapping, Sequence

from flexconfig.keys import env_name_to_key

__all__ = ["matching_prefix", "read_env_vars"]

logger = logging.getLogger(__name__)


def matching_prefix(name: str, prefixes: Sequence[str]) -> str | None:
    """Return the first prefix that name starts with, or None.

    The empty prefix matches every name.
    """
    for prefix in prefixes:
        if name.startswith(prefix):
            return prefix
    return None


def read_env_vars(
    target: MutableMapping[str, str],
    prefixes: Sequence[str],
    environ: Mapping[str, str] | None = None,
) -> int:
    """Add environment variables with an accepted prefix to target.

    Prefixes are matched against the raw variable name before it is
    converted to canonical key form: with prefix ``SUN_``, ``SUN_A`` is read
    as ``sun.a`` while ``SUNSHINE_B`` is ignored.

    Args:
        target: Mapping receiving the properties.
        prefixes: Accepted name prefixes, checked in order. No prefixes
            means no variables are read; an empty prefix accepts every
            variable.
        environ: Optional mapping to use instead of os.environ.

    Returns:
        Number of properties written.
    """
    if not prefixes:
        return 0
    env = environ if environ is not None else os.environ

    count = 0
    for name in sorted(env):
        if matching_prefix(name, prefixes) is None:
            continue
        target[env_name_to_key(name)] = env[name]
        count += 1
    logger.debug("Read %d properties from environment variables", count)
    return count
