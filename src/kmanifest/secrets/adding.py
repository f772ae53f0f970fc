"""Registration of secrets in a manifest.

Both add operations work on a staged copy of the affected collection and
commit it to the manifest only after the secret builds successfully, so
a failed add leaves the manifest exactly as it was.
"""

import copy
from typing import NamedTuple

from icecream import ic

from kmanifest.exceptions import DuplicateSecretError
from kmanifest.fs import FileSystem
from kmanifest.models import GenericSecret, Manifest, TLSSecret
from kmanifest.secrets.building import build_generic_secret, build_tls_secret
from kmanifest.secrets.config import GenericSourceConfig, TLSSourceConfig
from kmanifest.secrets.merging import merge_data_sources
from kmanifest.secrets.registry import find_or_create_generic, tls_secret_exists


class AddedSecret(NamedTuple):
    """Outcome of a successful add.

    Attributes:
        secret: The committed manifest entry.
        generated_name: Name of the Secret the entry materializes as.
        created: False when data was merged into an existing entry.

    """

    secret: GenericSecret | TLSSecret
    generated_name: str
    created: bool


def add_generic_secret(manifest: Manifest, config: GenericSourceConfig, fs: FileSystem) -> AddedSecret:
    """Add or extend a generic secret in ``manifest``.

    Args:
        manifest: Manifest to update.
        config: Validated generic secret options.
        fs: Storage capability used to read sources.

    Returns:
        AddedSecret describing the committed entry.

    Raises:
        InvalidSourceError: If a source specification is malformed.
        MergeConflictError: If a key collides with an existing or new key.
        SecretBuildError: If the merged secret cannot be built.

    """
    staged = Manifest(generic_secrets=copy.deepcopy(manifest.generic_secrets))
    created = all(secret.name != config.name for secret in staged.generic_secrets)

    secret = find_or_create_generic(staged, config.name)
    secret.data_sources = merge_data_sources(secret.data_sources, config, fs)

    generated_name, _ = build_generic_secret(secret, fs)

    manifest.generic_secrets[:] = staged.generic_secrets
    ic(secret)
    return AddedSecret(secret=secret, generated_name=generated_name, created=created)


def add_tls_secret_to_manifest(manifest: Manifest, config: TLSSourceConfig, fs: FileSystem) -> AddedSecret:
    """Append a new TLS secret to ``manifest``.

    Args:
        manifest: Manifest to update.
        config: Validated TLS secret options.
        fs: Storage capability used to read the certificate and key.

    Returns:
        AddedSecret describing the committed entry.

    Raises:
        DuplicateSecretError: If a TLS secret with the same name exists.
        SecretBuildError: If the certificate or key cannot be used.

    """
    if tls_secret_exists(manifest, config.name):
        raise DuplicateSecretError("TLS Secret already exists")

    staged = [*manifest.tls_secrets, TLSSecret(name=config.name, cert_path=config.cert, key_path=config.key)]
    secret = staged[-1]

    generated_name, _ = build_tls_secret(secret, fs)

    manifest.tls_secrets[:] = staged
    ic(secret)
    return AddedSecret(secret=secret, generated_name=generated_name, created=True)
