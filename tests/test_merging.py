"""Tests for secrets/merging.py module."""

import pytest

from kmanifest.exceptions import InvalidSourceError, MergeConflictError
from kmanifest.models import DataSource, SourceKind
from kmanifest.secrets.config import GenericSourceConfig
from kmanifest.secrets.merging import collect_data_sources, merge_data_sources


def _config(**kwargs) -> GenericSourceConfig:
    config = GenericSourceConfig(**kwargs)
    config.validate(["app-secret"])
    return config


class TestCollectDataSources:
    """Tests for expanding requested sources."""

    def test_order_files_literals_env(self, memory_fs):
        """Test files come first, then literals, then env-file pairs."""
        config = _config(
            file_sources=["config.json"],
            literal_sources=["user=admin"],
            env_file_source="app.env",
        )

        sources = collect_data_sources(config, memory_fs)

        assert [s.key for s in sources] == ["config.json", "user", "DB_HOST", "DB_PORT"]
        assert [s.kind for s in sources] == [
            SourceKind.FILE,
            SourceKind.LITERAL,
            SourceKind.ENV_FILE,
            SourceKind.ENV_FILE,
        ]
        assert sources[2].env_file == "app.env"

    def test_explicit_file_key(self, memory_fs):
        """Test key=path keeps the path and uses the given key."""
        sources = collect_data_sources(_config(file_sources=["settings=config.json"]), memory_fs)
        assert sources == [DataSource.file("settings", "config.json")]

    def test_missing_file_is_not_checked(self, memory_fs):
        """Test nonexistent files are left for the build step."""
        sources = collect_data_sources(_config(file_sources=["nope/missing.txt"]), memory_fs)
        assert sources == [DataSource.file("missing.txt", "nope/missing.txt")]

    def test_directory_expands_to_files(self, memory_fs):
        """Test a directory adds one source per file."""
        sources = collect_data_sources(_config(file_sources=["secrets"]), memory_fs)
        assert sources == [
            DataSource.file("password.txt", "secrets/password.txt"),
            DataSource.file("token", "secrets/token"),
        ]

    def test_directory_with_key_rejected(self, memory_fs):
        """Test an explicit key cannot name a directory."""
        with pytest.raises(InvalidSourceError, match="directory"):
            collect_data_sources(_config(file_sources=["all=secrets"]), memory_fs)


class TestMergeDataSources:
    """Tests for merging into existing sources."""

    def test_appends_after_existing(self, memory_fs):
        """Test new sources follow existing ones."""
        existing = [DataSource.literal("user", "admin")]

        merged = merge_data_sources(existing, _config(literal_sources=["password=hunter2"]), memory_fs)

        assert merged == [DataSource.literal("user", "admin"), DataSource.literal("password", "hunter2")]

    def test_existing_list_untouched(self, memory_fs):
        """Test the input list is not modified."""
        existing = [DataSource.literal("user", "admin")]
        merge_data_sources(existing, _config(literal_sources=["password=hunter2"]), memory_fs)
        assert existing == [DataSource.literal("user", "admin")]

    def test_duplicate_literals_in_one_call(self, memory_fs):
        """Test two literals with the same key conflict."""
        with pytest.raises(MergeConflictError, match="more than once"):
            merge_data_sources([], _config(literal_sources=["user=a", "user=b"]), memory_fs)

    def test_file_key_collides_with_existing(self, memory_fs):
        """Test a file whose derived key exists conflicts."""
        existing = [DataSource.literal("config.json", "inline")]
        with pytest.raises(MergeConflictError, match="already exists"):
            merge_data_sources(existing, _config(file_sources=["config.json"]), memory_fs)

    def test_identical_pair_still_conflicts(self, memory_fs):
        """Test re-supplying the same key and value is rejected."""
        existing = [DataSource.literal("user", "admin")]
        with pytest.raises(MergeConflictError):
            merge_data_sources(existing, _config(literal_sources=["user=admin"]), memory_fs)

    def test_env_key_collides_with_literal(self, memory_fs):
        """Test env-file keys take part in the collision check."""
        config = _config(literal_sources=["DB_HOST=db"], env_file_source="app.env")
        with pytest.raises(MergeConflictError, match="DB_HOST"):
            merge_data_sources([], config, memory_fs)

    def test_malformed_literal(self, memory_fs):
        """Test a malformed literal is reported before merging."""
        with pytest.raises(InvalidSourceError):
            merge_data_sources([], _config(literal_sources=["novalue"]), memory_fs)
