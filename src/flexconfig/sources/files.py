"""Configuration file discovery and parsing.

Files are read from an ordered list of directories, lowest priority first.
Each accepted file is tried as YAML/JSON and then as INI; the first parser
that accepts the text supplies the file's properties, and a file no parser
accepts is skipped.

A single file can replace the whole directory search, either with the
command-line flag ``--flexconfig.configuration.file.location=<path>`` or
with the ``FLEXCONFIG_CONFIGURATION_FILE_LOCATION`` environment variable.
The flag wins when both are given.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from flexconfig.errors import SourceParseError
from flexconfig.flatten import parse_structured
from flexconfig.sources.args import search_argument
from flexconfig.sources.ini import parse_ini

__all__ = [
    "CONFIG_FILE_FLAG",
    "CONFIG_FILE_ENV_VAR",
    "DEFAULT_SUFFIXES",
    "ParseOutcome",
    "parse_config_text",
    "standard_search_path",
    "config_file_override",
    "read_config_file",
    "read_directory",
    "read_config_files",
]

logger = logging.getLogger(__name__)

CONFIG_FILE_FLAG = "flexconfig.configuration.file.location"
CONFIG_FILE_ENV_VAR = "FLEXCONFIG_CONFIGURATION_FILE_LOCATION"
DEFAULT_SUFFIXES: tuple[str, ...] = (".conf",)


@dataclass
class ParseOutcome:
    """Result of one parser attempt on a file's text."""

    format: str
    properties: dict[str, str] = field(default_factory=dict)
    error: SourceParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


_Parser = Callable[[str, str], dict[str, str]]

# Tried in order; the first parser that accepts the text wins.
_PARSE_ATTEMPTS: tuple[tuple[str, _Parser], ...] = (
    ("structured", lambda text, ini_prefix: parse_structured(text)),
    ("ini", parse_ini),
)


def _attempt(source_format: str, parse: _Parser, text: str, ini_prefix: str) -> ParseOutcome:
    try:
        return ParseOutcome(format=source_format, properties=parse(text, ini_prefix))
    except SourceParseError as e:
        return ParseOutcome(format=source_format, error=e)


def parse_config_text(text: str, ini_prefix: str = "") -> ParseOutcome:
    """Parse configuration text with each known format in priority order.

    Returns:
        The first successful outcome, or the last failed one when no format
        accepts the text.
    """
    outcomes: list[ParseOutcome] = []
    for source_format, parse in _PARSE_ATTEMPTS:
        outcome = _attempt(source_format, parse, text, ini_prefix)
        if outcome.ok:
            return outcome
        logger.debug("Parse as %s failed: %s", source_format, outcome.error)
        outcomes.append(outcome)
    return outcomes[-1]


def standard_search_path(name: str, home: str | None = None) -> list[Path]:
    """Return the default configuration directories for an application, lowest priority first.

    Args:
        name: Application name.
        home: Home directory; defaults to $HOME. The per-user directory is
            omitted when no home directory is known.
    """
    if home is None:
        home = os.environ.get("HOME", "")

    dirs = [
        Path("/usr/local/etc") / name,
        Path("/opt/etc") / name,
        Path("/opt") / name / "etc",
        Path("/etc/opt") / name,
        Path("/etc") / name,
    ]
    if home:
        dirs.append(Path(home) / f".{name}")
    dirs.append(Path(f".{name}"))
    return dirs


def config_file_override(args: Sequence[str], environ: Mapping[str, str]) -> str:
    """Return the single-file location requested by flag or environment, or ''."""
    location = search_argument(args, CONFIG_FILE_FLAG)
    if location:
        return location
    return environ.get(CONFIG_FILE_ENV_VAR, "")


def read_config_file(
    path: Path,
    target: MutableMapping[str, str],
    ini_prefix: str = "",
) -> int:
    """Parse one configuration file and add its properties to target.

    Unreadable files and files no parser accepts are skipped.

    Returns:
        Number of properties written.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable configuration file %s: %s", path, e)
        return 0

    outcome = parse_config_text(text, ini_prefix)
    if not outcome.ok:
        logger.debug("Skipping configuration file %s: no parser accepted it", path)
        return 0

    for key, value in outcome.properties.items():
        target[key.lower()] = value
    logger.debug("Read %d properties from %s (%s)", len(outcome.properties), path, outcome.format)
    return len(outcome.properties)


def read_directory(
    directory: Path,
    target: MutableMapping[str, str],
    suffixes: Sequence[str] = DEFAULT_SUFFIXES,
    ini_prefix: str = "",
) -> int:
    """Read every accepted file in one directory, in lexicographic filename order.

    Only regular files whose names end with one of the suffixes are read.
    A missing directory contributes nothing.

    Returns:
        Number of properties written.
    """
    try:
        entries = list(os.scandir(directory))
    except FileNotFoundError:
        return 0
    except NotADirectoryError:
        return 0
    except PermissionError as e:
        logger.warning("Permission denied scanning %s: %s", directory, e)
        return 0
    except OSError as e:
        logger.warning("OS error scanning %s: %s", directory, e)
        return 0

    count = 0
    for entry in sorted(entries, key=lambda e: e.name):
        if not any(entry.name.endswith(suffix) for suffix in suffixes):
            continue
        try:
            is_file = entry.is_file()
        except OSError as e:
            logger.debug("OS error accessing %s: %s", entry.path, e)
            continue
        if not is_file:
            continue
        count += read_config_file(Path(entry.path), target, ini_prefix)
    return count


def read_config_files(
    target: MutableMapping[str, str],
    application_name: str = "",
    directories: Sequence[str | Path] | None = None,
    suffixes: Sequence[str] | None = None,
    ini_prefix: str = "",
    args: Sequence[str] = (),
    environ: Mapping[str, str] | None = None,
) -> int:
    """Read file-based properties into target.

    An explicit single-file location replaces the directory search unless
    that file yields no properties. Otherwise explicit directories are read
    in the given order; without them, the standard search path for
    application_name is used; with neither, no directories are read.

    Returns:
        Number of properties written.
    """
    env = environ if environ is not None else os.environ
    suffixes = list(suffixes) if suffixes else list(DEFAULT_SUFFIXES)

    location = config_file_override(args, env)
    if location:
        count = read_config_file(Path(location), target, ini_prefix)
        if count > 0:
            logger.info("Using configuration file %s; directory search skipped", location)
            return count
        logger.warning("Configuration file %s yielded no properties; searching directories", location)

    if directories:
        search_dirs = [Path(d) for d in directories]
    elif application_name:
        search_dirs = standard_search_path(application_name)
    else:
        return 0

    count = 0
    for directory in search_dirs:
        count += read_directory(directory, target, suffixes, ini_prefix)
    return count
