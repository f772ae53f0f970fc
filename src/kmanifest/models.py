"""Data models for kmanifest.

This module provides the in-memory representation of a manifest and the
secret definitions it holds, along with their YAML mapping form.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SourceKind(str, Enum):
    """Origin of a generic secret data source.

    Inherits from str to allow direct use in string contexts
    (e.g., console output, YAML documents).
    """

    FILE = "file"
    LITERAL = "literal"
    ENV_FILE = "env-file"


@dataclass(slots=True)
class DataSource:
    """A single key contributed to a generic secret.

    Attributes:
        key: The data key this source produces.
        kind: Where the value comes from.
        value: The literal value (literal and env-file sources).
        path: Path of the file whose content is the value (file sources).
        env_file: Env file the pair was read from (env-file sources).

    """

    key: str
    kind: SourceKind
    value: str | None = None
    path: str | None = None
    env_file: str | None = None

    @classmethod
    def file(cls, key: str, path: str) -> "DataSource":
        return cls(key=key, kind=SourceKind.FILE, path=path)

    @classmethod
    def literal(cls, key: str, value: str) -> "DataSource":
        return cls(key=key, kind=SourceKind.LITERAL, value=value)

    @classmethod
    def from_env_file(cls, key: str, value: str, env_file: str) -> "DataSource":
        return cls(key=key, kind=SourceKind.ENV_FILE, value=value, env_file=env_file)

    def to_dict(self) -> dict[str, str]:
        """Return the manifest mapping form of this source.

        Returns:
            A mapping with ``key`` and either ``path`` or ``value``
            (plus ``envFile`` for env-file sources).

        """
        match self.kind:
            case SourceKind.FILE:
                return {"key": self.key, "path": self.path or ""}
            case SourceKind.ENV_FILE:
                return {"key": self.key, "value": self.value or "", "envFile": self.env_file or ""}
            case _:
                return {"key": self.key, "value": self.value or ""}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DataSource":
        """Build a data source from its manifest mapping form.

        The kind is inferred from the fields present: ``path`` marks a file
        source, ``envFile`` an env-file source, anything else a literal.

        Args:
            data: The mapping read from the manifest.

        Returns:
            The corresponding DataSource.

        Raises:
            ValueError: If the mapping has no key.

        """
        key = data.get("key")
        if not key:
            raise ValueError("data source is missing a key")
        if "path" in data:
            return cls.file(str(key), str(data["path"]))
        if "envFile" in data:
            return cls.from_env_file(str(key), str(data.get("value", "")), str(data["envFile"]))
        return cls.literal(str(key), str(data.get("value", "")))


@dataclass(slots=True)
class GenericSecret:
    """A generic (Opaque) secret definition.

    Attributes:
        name: The secret name, unique among generic secrets.
        data_sources: Ordered sources contributing the secret's keys.

    """

    name: str
    data_sources: list[DataSource] = field(default_factory=list)

    def keys(self) -> list[str]:
        return [source.key for source in self.data_sources]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "dataSources": [source.to_dict() for source in self.data_sources],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenericSecret":
        name = data.get("name")
        if not name:
            raise ValueError("generic secret is missing a name")
        sources = data.get("dataSources") or []
        if not isinstance(sources, list):
            raise ValueError(f"dataSources of generic secret '{name}' must be a list")
        return cls(name=str(name), data_sources=[DataSource.from_dict(source) for source in sources])


@dataclass(slots=True)
class TLSSecret:
    """A TLS secret definition referencing a certificate and private key.

    Attributes:
        name: The secret name, unique among TLS secrets.
        cert_path: Path to the PEM encoded certificate.
        key_path: Path to the PEM encoded private key.

    """

    name: str
    cert_path: str
    key_path: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "certPath": self.cert_path, "keyPath": self.key_path}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TLSSecret":
        name = data.get("name")
        if not name:
            raise ValueError("TLS secret is missing a name")
        return cls(
            name=str(name),
            cert_path=str(data.get("certPath", "")),
            key_path=str(data.get("keyPath", "")),
        )


@dataclass(slots=True)
class Manifest:
    """Root aggregate of a manifest document.

    Attributes:
        generic_secrets: Generic secrets, names unique within the list.
        tls_secrets: TLS secrets, names unique within the list.
        extra: Any other top-level manifest fields, kept verbatim.

    """

    generic_secrets: list[GenericSecret] = field(default_factory=list)
    tls_secrets: list[TLSSecret] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
