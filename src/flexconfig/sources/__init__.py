"""Readers for static configuration sources: files, environment, command line.

Each reader writes into a caller-supplied mapping and returns the number of
properties it wrote, so sources can be applied one after another in
priority order.
"""

from __future__ import annotations

from flexconfig.sources.args import (
    parse_argument,
    read_command_line_args,
    search_argument,
    strip_quotes,
)
from flexconfig.sources.env import read_env_vars
from flexconfig.sources.files import (
    CONFIG_FILE_ENV_VAR,
    CONFIG_FILE_FLAG,
    DEFAULT_SUFFIXES,
    ParseOutcome,
    parse_config_text,
    read_config_file,
    read_config_files,
    read_directory,
    standard_search_path,
)
from flexconfig.sources.ini import parse_ini

__all__ = [
    "CONFIG_FILE_ENV_VAR",
    "CONFIG_FILE_FLAG",
    "DEFAULT_SUFFIXES",
    "ParseOutcome",
    "parse_argument",
    "parse_config_text",
    "parse_ini",
    "read_command_line_args",
    "read_config_file",
    "read_config_files",
    "read_directory",
    "read_env_vars",
    "search_argument",
    "standard_search_path",
    "strip_quotes",
]
