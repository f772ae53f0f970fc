"""kmanifest: add secret definitions to a Kubernetes manifest.

This package registers generic and TLS secrets in a Kube-manifest.yaml
file, merging data sources into existing generic secrets and rejecting
duplicate TLS secrets.

Example usage:
    from kmanifest import GenericSourceConfig, ManifestLoader, LocalFileSystem, add_generic_secret

    fs = LocalFileSystem(".")
    loader = ManifestLoader(fs)
    manifest = loader.read("Kube-manifest.yaml")

    config = GenericSourceConfig(literal_sources=["user=admin"])
    config.validate(["app-secret"])
    add_generic_secret(manifest, config, fs)
    loader.write("Kube-manifest.yaml", manifest)
"""

__version__ = "0.1.0"

from kmanifest.exceptions import (
    DuplicateSecretError,
    InputValidationError,
    InvalidSourceError,
    KmanifestError,
    ManifestParsingError,
    MergeConflictError,
    SecretBuildError,
)
from kmanifest.fs import FileSystem, LocalFileSystem, MemoryFileSystem
from kmanifest.manifest import MANIFEST_FILENAME, ManifestLoader
from kmanifest.models import DataSource, GenericSecret, Manifest, SourceKind, TLSSecret
from kmanifest.secrets import (
    AddedSecret,
    GenericSourceConfig,
    TLSSourceConfig,
    add_generic_secret,
    add_tls_secret_to_manifest,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "DataSource",
    "GenericSecret",
    "Manifest",
    "SourceKind",
    "TLSSecret",
    # Manifest files
    "MANIFEST_FILENAME",
    "ManifestLoader",
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    # Secrets
    "AddedSecret",
    "GenericSourceConfig",
    "TLSSourceConfig",
    "add_generic_secret",
    "add_tls_secret_to_manifest",
    # Exceptions
    "KmanifestError",
    "InputValidationError",
    "InvalidSourceError",
    "MergeConflictError",
    "DuplicateSecretError",
    "SecretBuildError",
    "ManifestParsingError",
]
