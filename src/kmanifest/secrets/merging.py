"""Merging of new data sources into a generic secret.

Sources are expanded into one DataSource per key and appended after the
existing ones, files first, then literals, then env-file entries. Any key
that is already present, or that appears twice in the same request, is
rejected; identical values are not treated specially.
"""

import posixpath
from collections.abc import Sequence

from icecream import ic

from kmanifest.exceptions import InvalidSourceError, MergeConflictError
from kmanifest.fs import FileSystem
from kmanifest.models import DataSource
from kmanifest.secrets.config import GenericSourceConfig
from kmanifest.secrets.parsing import parse_file_source, parse_literal_source, read_env_file


def _expand_file_source(source: str, fs: FileSystem) -> list[DataSource]:
    """Expand one --from-file value, listing directories file by file.

    Raises:
        InvalidSourceError: If an explicit key is given for a directory.

    """
    key, path = parse_file_source(source)

    if not fs.is_dir(path):
        return [DataSource.file(key, path)]

    if "=" in source:
        raise InvalidSourceError(f"cannot give a key name for a directory path '{path}'")
    return [DataSource.file(name, posixpath.join(path, name)) for name in fs.list_dir(path)]


def collect_data_sources(config: GenericSourceConfig, fs: FileSystem) -> list[DataSource]:
    """Turn the sources requested in ``config`` into DataSource entries.

    Args:
        config: Generic secret options.
        fs: Storage capability used for directories and env files.

    Returns:
        New entries in the order files, literals, env-file pairs.

    Raises:
        InvalidSourceError: If a source specification is malformed.

    """
    sources: list[DataSource] = []
    for file_source in config.file_sources:
        sources.extend(_expand_file_source(file_source, fs))
    for literal_source in config.literal_sources:
        sources.append(DataSource.literal(*parse_literal_source(literal_source)))
    if config.env_file_source:
        for key, value in read_env_file(config.env_file_source, fs):
            sources.append(DataSource.from_env_file(key, value, config.env_file_source))
    return sources


def merge_data_sources(
    existing: Sequence[DataSource],
    config: GenericSourceConfig,
    fs: FileSystem,
) -> list[DataSource]:
    """Merge the sources requested in ``config`` into ``existing``.

    ``existing`` is left untouched; the merged result is a new list.

    Args:
        existing: Current data sources of the secret.
        config: Generic secret options holding the new sources.
        fs: Storage capability used for directories and env files.

    Returns:
        The existing sources followed by the new ones.

    Raises:
        InvalidSourceError: If a source specification is malformed.
        MergeConflictError: If a new key is already present or repeated.

    """
    new_sources = collect_data_sources(config, fs)
    ic(new_sources)

    existing_keys = {source.key for source in existing}
    seen: set[str] = set()
    for source in new_sources:
        if source.key in existing_keys:
            raise MergeConflictError(f"key '{source.key}' already exists in secret '{config.name}'")
        if source.key in seen:
            raise MergeConflictError(f"key '{source.key}' is specified more than once")
        seen.add(source.key)

    return [*existing, *new_sources]
