"""Lookups over the manifest's secret collections.

Secret collections hold tens of entries at most, so lookups are plain
linear scans by exact name.
"""

from kmanifest.models import GenericSecret, Manifest


def find_or_create_generic(manifest: Manifest, name: str) -> GenericSecret:
    """Return the generic secret called ``name``, appending it if missing.

    This is the only place generic secrets are created, which keeps names
    unique within ``manifest.generic_secrets``.

    Args:
        manifest: Manifest to search and possibly extend.
        name: Exact, case-sensitive secret name.

    Returns:
        The existing entry, or the newly appended one with no data sources.

    """
    for secret in manifest.generic_secrets:
        if secret.name == name:
            return secret

    secret = GenericSecret(name=name)
    manifest.generic_secrets.append(secret)
    return secret


def tls_secret_exists(manifest: Manifest, name: str) -> bool:
    """Return True if a TLS secret called ``name`` is registered."""
    return any(secret.name == name for secret in manifest.tls_secrets)
