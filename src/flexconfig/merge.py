"""Layering of static configuration sources.

Sources are applied lowest priority first: configuration files, then
environment variables, then command-line arguments. A later layer
overwrites any key an earlier layer defined; nothing else is reconciled.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING

from flexconfig.sources.args import read_command_line_args
from flexconfig.sources.env import read_env_vars
from flexconfig.sources.files import read_config_files

if TYPE_CHECKING:
    from flexconfig.config import ConfigurationParameters

__all__ = ["merge_layers", "read_static_configuration"]

logger = logging.getLogger(__name__)


def merge_layers(*layers: Mapping[str, str]) -> dict[str, str]:
    """Merge property mappings into a new dict; later layers win on equal keys."""
    merged: dict[str, str] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def read_static_configuration(parameters: ConfigurationParameters) -> dict[str, str]:
    """Read files, environment variables and command-line arguments into one mapping.

    Args:
        parameters: Initialization parameters. ``args`` defaults to
            ``sys.argv`` and ``environ`` to ``os.environ``.

    Returns:
        The merged static properties.
    """
    args = parameters.args if parameters.args is not None else sys.argv
    environ = parameters.environ if parameters.environ is not None else os.environ

    files: dict[str, str] = {}
    count = read_config_files(
        files,
        application_name=parameters.application_name,
        directories=parameters.directories,
        suffixes=parameters.effective_suffixes(),
        ini_prefix=parameters.ini_name_prefix,
        args=args,
        environ=environ,
    )
    logger.debug("Configuration files supplied %d properties", count)

    env_vars: dict[str, str] = {}
    count = read_env_vars(env_vars, parameters.environment_variable_prefixes, environ)
    logger.debug("Environment supplied %d properties", count)

    arguments: dict[str, str] = {}
    count = read_command_line_args(arguments, args)
    logger.debug("Command line supplied %d properties", count)

    return merge_layers(files, env_vars, arguments)
