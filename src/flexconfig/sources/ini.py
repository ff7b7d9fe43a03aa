"""INI file parsing into dotted property keys."""

from __future__ import annotations

import configparser

from flexconfig.errors import SourceParseError

__all__ = ["parse_ini", "ini_key"]

# Name given to entries above the first section header. It is also the
# name of an explicit "[DEFAULT]" section; both are excluded from results.
_IMPLICIT_SECTION = "DEFAULT"

# configparser propagates its default section into every other section;
# point that machinery at a name no file can declare.
_UNUSED_DEFAULT_SECTION = "\x00"


def ini_key(prefix: str, section: str, key: str) -> str:
    """Build the property key for an INI section entry."""
    return prefix + section.lower() + "." + key.lower()


def parse_ini(text: str, prefix: str = "") -> dict[str, str]:
    """Parse INI text into a mapping of ``<prefix><section>.<key>`` properties.

    Section and key names are lowercased. A non-empty prefix is given a
    trailing dot if it lacks one. Entries that appear before any section
    header belong to the implicit default section and are not returned.

    Raises:
        SourceParseError: If the text is not valid INI.
    """
    if prefix and not prefix.endswith("."):
        prefix += "."

    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section=_UNUSED_DEFAULT_SECTION,
    )
    try:
        parser.read_string(f"[{_IMPLICIT_SECTION}]\n{text}")
    except configparser.Error as e:
        raise SourceParseError(
            message=f"Invalid INI: {e}",
            source_format="ini",
            cause=e,
        ) from e

    properties: dict[str, str] = {}
    for section in parser.sections():
        if section == _IMPLICIT_SECTION:
            continue
        for key, value in parser.items(section, raw=True):
            properties[ini_key(prefix, section, key)] = value if value is not None else ""
    return properties
