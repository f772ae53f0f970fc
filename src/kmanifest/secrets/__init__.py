"""Secrets subpackage.

This package contains the source configurations, parsing, merging,
building and registration logic for manifest secrets.
"""

from kmanifest.secrets.adding import AddedSecret, add_generic_secret, add_tls_secret_to_manifest
from kmanifest.secrets.building import build_generic_secret, build_tls_secret
from kmanifest.secrets.config import GenericSourceConfig, TLSSourceConfig
from kmanifest.secrets.merging import merge_data_sources
from kmanifest.secrets.parsing import parse_file_source, parse_literal_source, read_env_file
from kmanifest.secrets.registry import find_or_create_generic, tls_secret_exists

__all__ = [
    # adding
    "AddedSecret",
    "add_generic_secret",
    "add_tls_secret_to_manifest",
    # building
    "build_generic_secret",
    "build_tls_secret",
    # config
    "GenericSourceConfig",
    "TLSSourceConfig",
    # merging
    "merge_data_sources",
    # parsing
    "parse_file_source",
    "parse_literal_source",
    "read_env_file",
    # registry
    "find_or_create_generic",
    "tls_secret_exists",
]
