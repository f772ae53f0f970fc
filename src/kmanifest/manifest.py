"""Manifest file loading and writing.

This module reads the manifest YAML document into a Manifest and writes
it back, keeping any fields it does not manage untouched.
"""

from typing import Any

import yaml
from icecream import ic

from kmanifest.exceptions import ManifestParsingError
from kmanifest.fs import FileSystem
from kmanifest.models import GenericSecret, Manifest, TLSSecret

MANIFEST_FILENAME = "Kube-manifest.yaml"

_GENERIC_SECRETS = "genericSecrets"
_TLS_SECRETS = "tlsSecrets"


def manifest_from_dict(document: dict[str, Any]) -> Manifest:
    """Convert a parsed manifest document into a Manifest.

    Args:
        document: The YAML mapping.

    Returns:
        The Manifest; unknown top-level fields land in ``extra``.

    Raises:
        ValueError: If a secret collection or entry is malformed.

    """
    extra = {k: v for k, v in document.items() if k not in (_GENERIC_SECRETS, _TLS_SECRETS)}

    generic = document.get(_GENERIC_SECRETS)
    tls = document.get(_TLS_SECRETS)
    generic = [] if generic is None else generic
    tls = [] if tls is None else tls
    for field_name, value in ((_GENERIC_SECRETS, generic), (_TLS_SECRETS, tls)):
        if not isinstance(value, list):
            raise ValueError(f"'{field_name}' must be a list")

    manifest = Manifest(
        generic_secrets=[GenericSecret.from_dict(entry) for entry in generic],
        tls_secrets=[TLSSecret.from_dict(entry) for entry in tls],
        extra=extra,
    )
    _check_unique_names(_GENERIC_SECRETS, [secret.name for secret in manifest.generic_secrets])
    _check_unique_names(_TLS_SECRETS, [secret.name for secret in manifest.tls_secrets])
    return manifest


def _check_unique_names(field_name: str, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"'{field_name}' contains more than one secret named '{name}'")
        seen.add(name)


def manifest_to_dict(manifest: Manifest) -> dict[str, Any]:
    """Convert a Manifest back into its YAML mapping; empty collections are omitted."""
    document: dict[str, Any] = dict(manifest.extra)
    if manifest.generic_secrets:
        document[_GENERIC_SECRETS] = [secret.to_dict() for secret in manifest.generic_secrets]
    if manifest.tls_secrets:
        document[_TLS_SECRETS] = [secret.to_dict() for secret in manifest.tls_secrets]
    return document


class ManifestLoader:
    """Reads and writes manifest files through a FileSystem.

    Attributes:
        fs: Storage capability used for all file access.

    """

    def __init__(self, fs: FileSystem) -> None:
        self.fs = fs

    def read(self, path: str) -> Manifest:
        """Read and parse a manifest file.

        Args:
            path: Path to the manifest file.

        Returns:
            The parsed Manifest. An empty file yields an empty Manifest.

        Raises:
            ManifestParsingError: If the file does not exist, contains multiple
                documents, malformed YAML, or does not match the manifest layout.

        """
        try:
            content = self.fs.read_text(path)
        except FileNotFoundError as err:
            raise ManifestParsingError(f"Manifest file '{path}' does not exist") from err
        except OSError as err:
            raise ManifestParsingError(f"Cannot read manifest file '{path}': {err.strerror}") from err

        try:
            docs = [doc for doc in yaml.safe_load_all(content) if doc is not None]
        except yaml.YAMLError as err:
            raise ManifestParsingError(f"Manifest file '{path}' contains malformed YAML: {err}") from err

        if len(docs) > 1:
            raise ManifestParsingError(
                f"File '{path}' contains multiple YAML documents. Only single document manifests are supported."
            )
        if not docs:
            return Manifest()
        if not isinstance(docs[0], dict):
            raise ManifestParsingError(f"File '{path}' does not contain a valid YAML mapping.")

        try:
            manifest = manifest_from_dict(docs[0])
        except (ValueError, AttributeError, TypeError) as err:
            raise ManifestParsingError(f"Manifest file '{path}' is invalid: {err}") from err

        ic(manifest)
        return manifest

    def write(self, path: str, manifest: Manifest) -> None:
        """Serialize a manifest and write it to ``path``.

        Raises:
            ManifestParsingError: If the file cannot be written.

        """
        content = yaml.safe_dump(manifest_to_dict(manifest), sort_keys=False, default_flow_style=False)
        try:
            self.fs.write_text(path, content)
        except OSError as err:
            raise ManifestParsingError(f"Cannot write manifest file '{path}': {err.strerror}") from err
