"""Parsing of data source specifications.

This module turns --from-file, --from-literal and --from-env-file values
into key/value information, following kubectl's conventions.
"""

import os
import posixpath
import re

from kmanifest import console
from kmanifest.exceptions import InvalidSourceError
from kmanifest.fs import FileSystem

_ENV_VAR_NAME_PATTERN = re.compile(r"^[-._a-zA-Z][-._a-zA-Z0-9]*$")
_UTF8_BOM = "\ufeff"


def parse_file_source(source: str) -> tuple[str, str]:
    """Split a ``[key=]path`` file source.

    Args:
        source: The raw --from-file value.

    Returns:
        Tuple of (key, path). Without an explicit key, the key is the
        base name of the path.

    Raises:
        InvalidSourceError: If the key or path is empty, or the value
            contains more than one '='.

    """
    if "=" not in source:
        return posixpath.basename(source.rstrip("/")), source

    key, _, path = source.partition("=")
    if not key or not path:
        raise InvalidSourceError(f"invalid file source '{source}': key names or file paths cannot be empty")
    if "=" in path:
        raise InvalidSourceError(f"invalid file source '{source}': key names or file paths cannot contain '='")
    return key, path


def parse_literal_source(source: str) -> tuple[str, str]:
    """Split a ``key=value`` literal source on its first '='.

    One pair of matching surrounding quotes is removed from the value.

    Raises:
        InvalidSourceError: If there is no '=' or the key is empty.

    """
    key, sep, value = source.partition("=")
    if not sep or not key:
        raise InvalidSourceError(f"invalid literal source '{source}', expected key=value")
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def read_env_file(path: str, fs: FileSystem) -> list[tuple[str, str]]:
    """Read ``KEY=value`` pairs from an env file.

    Blank lines and lines starting with '#' are skipped. A line holding
    only a variable name takes its value from the process environment and
    is skipped when that variable is unset.

    Args:
        path: Path to the env file.
        fs: Storage capability used to read the file.

    Returns:
        List of (key, value) pairs in file order.

    Raises:
        InvalidSourceError: If the file cannot be read or a line holds an
            invalid variable name.

    """
    try:
        content = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as err:
        raise InvalidSourceError(f"cannot read env file '{path}': {err}") from err

    pairs: list[tuple[str, str]] = []
    for number, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.removeprefix(_UTF8_BOM) if number == 1 else raw_line
        line = line.lstrip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            key = key.rstrip()
        if not _ENV_VAR_NAME_PATTERN.match(key):
            raise InvalidSourceError(f"env file '{path}', line {number}: '{key}' is not a valid env var name")

        if sep:
            pairs.append((key, value))
        elif key in os.environ:
            pairs.append((key, os.environ[key]))
        else:
            console.warning(f"Skipping {console.highlight(key)} from {path}: not set in the environment")

    return pairs
