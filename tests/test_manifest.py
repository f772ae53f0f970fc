"""Tests for manifest.py module."""

import pytest
import yaml

from kmanifest.exceptions import ManifestParsingError
from kmanifest.fs import MemoryFileSystem
from kmanifest.manifest import ManifestLoader
from kmanifest.models import DataSource, GenericSecret, Manifest, SourceKind, TLSSecret


class TestManifestRead:
    """Tests for reading manifests."""

    def test_read_sample(self, sample_manifest_yaml):
        """Test secrets and extra fields are parsed."""
        loader = ManifestLoader(MemoryFileSystem({"Kube-manifest.yaml": sample_manifest_yaml}))

        manifest = loader.read("Kube-manifest.yaml")

        assert manifest.extra == {"namePrefix": "staging-", "resources": ["deployment.yaml"]}
        assert manifest.tls_secrets == [
            TLSSecret(name="site-tls", cert_path="certs/site.crt", key_path="certs/site.key")
        ]
        sources = manifest.generic_secrets[0].data_sources
        assert [s.kind for s in sources] == [SourceKind.LITERAL, SourceKind.FILE, SourceKind.ENV_FILE]
        assert sources[2] == DataSource.from_env_file("DB_HOST", "localhost", "app.env")

    def test_empty_file(self):
        """Test an empty file is an empty manifest."""
        loader = ManifestLoader(MemoryFileSystem({"m.yaml": ""}))
        assert loader.read("m.yaml") == Manifest()

    def test_missing_file(self):
        """Test error when the manifest does not exist."""
        with pytest.raises(ManifestParsingError, match="does not exist"):
            ManifestLoader(MemoryFileSystem()).read("m.yaml")

    def test_malformed_yaml(self):
        """Test error on malformed YAML."""
        loader = ManifestLoader(MemoryFileSystem({"m.yaml": "genericSecrets: [\n"}))
        with pytest.raises(ManifestParsingError, match="malformed YAML"):
            loader.read("m.yaml")

    def test_multiple_documents(self):
        """Test error on multi-document files."""
        loader = ManifestLoader(MemoryFileSystem({"m.yaml": "a: 1\n---\nb: 2\n"}))
        with pytest.raises(ManifestParsingError, match="multiple YAML documents"):
            loader.read("m.yaml")

    def test_not_a_mapping(self):
        """Test error when the document is a list."""
        loader = ManifestLoader(MemoryFileSystem({"m.yaml": "- a\n- b\n"}))
        with pytest.raises(ManifestParsingError, match="valid YAML mapping"):
            loader.read("m.yaml")

    @pytest.mark.parametrize(
        "content",
        [
            "genericSecrets: {}\n",
            "genericSecrets:\n- dataSources: []\n",
            "genericSecrets:\n- name: x\n  dataSources:\n  - value: y\n",
            "tlsSecrets:\n- certPath: a\n",
            "tlsSecrets:\n- just-a-string\n",
            "genericSecrets:\n- name: a\n  dataSources:\n  - key: x\n    value: \"1\"\n- name: a\n  dataSources:\n  - key: y\n    value: \"2\"\n",
            "tlsSecrets:\n- name: t\n  certPath: a.crt\n  keyPath: a.key\n- name: t\n  certPath: b.crt\n  keyPath: b.key\n",
        ],
    )
    def test_invalid_layout(self, content):
        """Test structural problems are reported as parsing errors."""
        loader = ManifestLoader(MemoryFileSystem({"m.yaml": content}))
        with pytest.raises(ManifestParsingError, match="invalid"):
            loader.read("m.yaml")


class TestManifestWrite:
    """Tests for writing manifests."""

    def test_round_trip(self, sample_manifest_yaml):
        """Test reading then writing keeps the document."""
        fs = MemoryFileSystem({"Kube-manifest.yaml": sample_manifest_yaml})
        loader = ManifestLoader(fs)

        loader.write("Kube-manifest.yaml", loader.read("Kube-manifest.yaml"))

        assert yaml.safe_load(fs.read_text("Kube-manifest.yaml")) == yaml.safe_load(sample_manifest_yaml)

    def test_field_order(self):
        """Test extra fields are written before secrets."""
        fs = MemoryFileSystem()
        manifest = Manifest(
            generic_secrets=[GenericSecret("app", [DataSource.literal("user", "admin")])],
            extra={"namePrefix": "dev-"},
        )

        ManifestLoader(fs).write("m.yaml", manifest)

        assert fs.read_text("m.yaml") == (
            "namePrefix: dev-\n"
            "genericSecrets:\n"
            "- name: app\n"
            "  dataSources:\n"
            "  - key: user\n"
            "    value: admin\n"
        )

    def test_empty_collections_omitted(self):
        """Test no secret keys are written for an empty manifest."""
        fs = MemoryFileSystem()
        ManifestLoader(fs).write("m.yaml", Manifest(extra={"resources": []}))
        assert yaml.safe_load(fs.read_text("m.yaml")) == {"resources": []}


class TestManifestNames:
    """Tests for secret name uniqueness on load."""

    def test_duplicate_generic_name_reported(self):
        """Test repeated generic secret names name the offender."""
        content = "genericSecrets:\n- name: a\n- name: b\n- name: a\n"
        loader = ManifestLoader(MemoryFileSystem({"m.yaml": content}))
        with pytest.raises(ManifestParsingError, match="more than one secret named 'a'"):
            loader.read("m.yaml")

    def test_same_name_across_collections(self):
        """Test a generic and a TLS secret may share a name."""
        content = "genericSecrets:\n- name: shared\ntlsSecrets:\n- name: shared\n  certPath: c\n  keyPath: k\n"
        manifest = ManifestLoader(MemoryFileSystem({"m.yaml": content})).read("m.yaml")
        assert manifest.generic_secrets[0].name == manifest.tls_secrets[0].name == "shared"
