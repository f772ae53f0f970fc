"""Materialization of secret definitions into Kubernetes Secrets.

Building a secret reads every referenced file and checks every key, so a
successful build proves a definition is well-formed. Generated Secrets
carry a name suffixed with a hash of their content, the way kubectl and
kustomize name generated objects.
"""

import base64
import hashlib
import json
import re

from icecream import ic
from kubernetes import client

from kmanifest.exceptions import SecretBuildError
from kmanifest.fs import FileSystem
from kmanifest.models import GenericSecret, SourceKind, TLSSecret

OPAQUE_TYPE = "Opaque"
TLS_TYPE = "kubernetes.io/tls"
TLS_CERT_KEY = "tls.crt"
TLS_PRIVATE_KEY_KEY = "tls.key"

# Secret data keys, as validated by the API server
_SECRET_KEY_MAX_LENGTH = 253
_SECRET_KEY_PATTERN = re.compile(r"^[-._a-zA-Z0-9]+$")

_PEM_CERTIFICATE = re.compile(rb"-----BEGIN CERTIFICATE-----")
_PEM_PRIVATE_KEY = re.compile(rb"-----BEGIN ([A-Z]+ )?PRIVATE KEY-----")

_HASH_LENGTH = 10
# Keeps generated suffixes from spelling words
_HASH_TRANSLATION = str.maketrans({"0": "g", "1": "h", "3": "k", "a": "m", "e": "t"})


def validate_secret_key(key: str) -> None:
    """Check that ``key`` is usable as a Secret data key.

    Raises:
        SecretBuildError: If the key is too long, is '.' or '..', or holds
            characters other than alphanumerics, '-', '_' and '.'.

    """
    if len(key) > _SECRET_KEY_MAX_LENGTH:
        raise SecretBuildError(f"'{key}' is not a valid key name: must be no more than 253 characters")
    if key in (".", ".."):
        raise SecretBuildError(f"'{key}' is not a valid key name: must not be '.' or '..'")
    if not _SECRET_KEY_PATTERN.match(key):
        raise SecretBuildError(
            f"'{key}' is not a valid key name: must consist of alphanumeric characters, '-', '_' or '.'"
        )


def secret_hash(name: str, secret_type: str, data: dict[str, str]) -> str:
    """Return the content hash used to suffix a generated Secret name.

    Args:
        name: The secret's base name.
        secret_type: The Secret type.
        data: Base64 encoded Secret data.

    Returns:
        A 10 character hash derived from the SHA-256 of the content.

    """
    encoded = json.dumps(
        {"kind": "Secret", "name": name, "type": secret_type, "data": data},
        sort_keys=True,
        separators=(",", ":"),
    )
    digest = hashlib.sha256(encoded.encode()).hexdigest()
    return digest[:_HASH_LENGTH].translate(_HASH_TRANSLATION)


def _read_file(path: str, fs: FileSystem) -> bytes:
    try:
        return fs.read_bytes(path)
    except FileNotFoundError as err:
        raise SecretBuildError(f"file '{path}' does not exist") from err
    except OSError as err:
        raise SecretBuildError(f"cannot read file '{path}': {err.strerror}") from err


def _encode(value: bytes) -> str:
    return base64.b64encode(value).decode()


def _make_secret(name: str, secret_type: str, data: dict[str, str]) -> tuple[str, client.V1Secret]:
    generated_name = f"{name}-{secret_hash(name, secret_type, data)}"
    ic(generated_name)
    secret = client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(name=generated_name),
        type=secret_type,
        data=data,
    )
    return generated_name, secret


def build_generic_secret(secret: GenericSecret, fs: FileSystem) -> tuple[str, client.V1Secret]:
    """Materialize a generic secret definition.

    Args:
        secret: The definition to build.
        fs: Storage capability used to read file sources.

    Returns:
        Tuple of (generated name, V1Secret).

    Raises:
        SecretBuildError: If a file cannot be read, a key is invalid,
            or two sources produce the same key.

    """
    data: dict[str, str] = {}
    for source in secret.data_sources:
        validate_secret_key(source.key)
        if source.key in data:
            raise SecretBuildError(
                f"cannot add key '{source.key}', another key by that name already exists in secret '{secret.name}'"
            )
        if source.kind == SourceKind.FILE:
            data[source.key] = _encode(_read_file(source.path or "", fs))
        else:
            data[source.key] = _encode((source.value or "").encode())

    return _make_secret(secret.name, OPAQUE_TYPE, data)


def build_tls_secret(secret: TLSSecret, fs: FileSystem) -> tuple[str, client.V1Secret]:
    """Materialize a TLS secret definition.

    Args:
        secret: The definition to build.
        fs: Storage capability used to read the certificate and key.

    Returns:
        Tuple of (generated name, V1Secret).

    Raises:
        SecretBuildError: If either file cannot be read or is not PEM encoded.

    """
    cert = _read_file(secret.cert_path, fs)
    if not _PEM_CERTIFICATE.search(cert):
        raise SecretBuildError(f"certificate '{secret.cert_path}' does not contain a PEM encoded certificate")

    key = _read_file(secret.key_path, fs)
    if not _PEM_PRIVATE_KEY.search(key):
        raise SecretBuildError(f"key '{secret.key_path}' does not contain a PEM encoded private key")

    data = {TLS_CERT_KEY: _encode(cert), TLS_PRIVATE_KEY_KEY: _encode(key)}
    return _make_secret(secret.name, TLS_TYPE, data)
