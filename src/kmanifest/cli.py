#!/usr/bin/env python
"""Command-line interface for kmanifest.

This module provides the main CLI entry point, handling command-line
argument parsing and wiring the add secret commands to the manifest
loader and the secret engine.
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

import click
from icecream import ic

from kmanifest import __version__, console
from kmanifest.exceptions import InputValidationError, KmanifestError
from kmanifest.fs import FileSystem, LocalFileSystem
from kmanifest.manifest import MANIFEST_FILENAME, ManifestLoader
from kmanifest.models import GenericSecret, Manifest
from kmanifest.secrets import (
    AddedSecret,
    GenericSourceConfig,
    TLSSourceConfig,
    add_generic_secret,
    add_tls_secret_to_manifest,
)

ConfigT = TypeVar("ConfigT", GenericSourceConfig, TLSSourceConfig)


def _to_click_error(err: KmanifestError) -> click.ClickException:
    """Map a kmanifest error onto the click exception with the right exit code."""
    if isinstance(err, InputValidationError):
        return click.UsageError(str(err))
    return click.ClickException(str(err))


def update_manifest(
    fs: FileSystem,
    manifest_path: str,
    config: ConfigT,
    operation: Callable[[Manifest, ConfigT, FileSystem], AddedSecret],
) -> AddedSecret:
    """Read a manifest, apply one add operation and write it back.

    The manifest is only written when the add succeeds.

    Args:
        fs: Storage capability for the manifest and secret sources.
        manifest_path: Manifest path, relative to the file system root.
        config: Validated source configuration.
        operation: The add operation to apply.

    Returns:
        The result of the add operation.

    Raises:
        KmanifestError: If reading, adding or writing fails.

    """
    loader = ManifestLoader(fs)
    manifest = loader.read(manifest_path)
    result = operation(manifest, config, fs)
    loader.write(manifest_path, manifest)
    return result


def _run_add(
    args: Sequence[str],
    config: ConfigT,
    manifest_file: str,
    operation: Callable[[Manifest, ConfigT, FileSystem], AddedSecret],
) -> AddedSecret:
    try:
        config.validate(args)
    except InputValidationError as err:
        raise _to_click_error(err) from None
    ic(config)

    path = Path(manifest_file)
    fs = LocalFileSystem(path.parent)
    console.step(f"Updating {console.highlight(str(path))}")

    try:
        result = update_manifest(fs, path.name, config, operation)
    except KmanifestError as err:
        raise _to_click_error(err) from None

    console.success(f"Wrote {console.highlight(str(path))}")
    return result


def _print_summary(result: AddedSecret, manifest_file: str) -> None:
    secret = result.secret
    items = {"Name": secret.name, "Generated": result.generated_name}
    if isinstance(secret, GenericSecret):
        items["Keys"] = ", ".join(secret.keys()) or "-"
        title = "Generic Secret Added" if result.created else "Generic Secret Updated"
    else:
        items["Cert"] = secret.cert_path
        items["Key"] = secret.key_path
        title = "TLS Secret Added"
    items["Manifest"] = manifest_file
    console.summary_panel(title, items)


def _split_file_sources(values: Sequence[str]) -> list[str]:
    """Split comma separated --from-file values into single sources."""
    return [part for value in values for part in value.split(",") if part]


manifest_option = click.option(
    "--manifest",
    "-f",
    "manifest_file",
    default=MANIFEST_FILENAME,
    show_default=True,
    help="manifest file to update",
)


@click.group(invoke_without_command=True, help="Manage secret definitions in a Kubernetes manifest")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.pass_context
def cli(ctx: click.Context, version: bool, debug: bool) -> None:
    """Process global options.

    Args:
        ctx: Click context.
        version: Print version and exit.
        debug: Enable debug output.

    """
    if debug:
        ic.enable()
    else:
        ic.disable()

    if version:
        click.echo(__version__)
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.group(help="Adds a resource to the manifest")
def add() -> None:
    pass


@add.group(
    help="Adds a secret using specified subcommand",
    epilog="""\b
Examples:
  kmanifest add secret generic my-secret --from-file=my-key=file/path --from-literal=my-literal=12345
  kmanifest add secret tls my-tls-secret --cert=cert/path.cert --key=key/path.key""",
)
def secret() -> None:
    pass


@secret.command(
    "generic",
    help="Adds a secret from a local file, directory or literal value.",
    epilog="""\b
Examples:
  kmanifest add secret generic my-secret --from-file=my-key=file/path --from-literal=my-literal=12345
  kmanifest add secret generic my-secret --from-file=file/path
  kmanifest add secret generic my-secret --from-env-file=env/path.env""",
)
@click.argument("args", nargs=-1, metavar="NAME")
@click.option(
    "--from-file",
    "file_sources",
    multiple=True,
    help="Key file as [key=]path; the file name is the default key. A directory adds each file in it.",
)
@click.option(
    "--from-literal",
    "literal_sources",
    multiple=True,
    help="Key and literal value to insert in secret (i.e. mykey=somevalue)",
)
@click.option(
    "--from-env-file",
    "env_file_source",
    default="",
    help="File with lines of key=val pairs to create a secret (i.e. a Docker .env file)",
)
@manifest_option
def add_secret_generic(
    args: tuple[str, ...],
    file_sources: tuple[str, ...],
    literal_sources: tuple[str, ...],
    env_file_source: str,
    manifest_file: str,
) -> None:
    """Add a generic secret, merging into an existing one of the same name."""
    config = GenericSourceConfig(
        file_sources=_split_file_sources(file_sources),
        literal_sources=list(literal_sources),
        env_file_source=env_file_source,
    )
    result = _run_add(args, config, manifest_file, add_generic_secret)
    _print_summary(result, manifest_file)


@secret.command(
    "tls",
    help="Adds a TLS secret.",
    epilog="""\b
Examples:
  kmanifest add secret tls my-tls-secret --cert=cert/path.cert --key=key/path.key""",
)
@click.argument("args", nargs=-1, metavar="NAME")
@click.option("--cert", default="", help="Path to PEM encoded public key certificate.")
@click.option("--key", default="", help="Path to private key associated with given certificate.")
@manifest_option
def add_secret_tls(args: tuple[str, ...], cert: str, key: str, manifest_file: str) -> None:
    """Add a TLS secret; fails if one with the same name exists."""
    config = TLSSourceConfig(cert=cert, key=key)
    result = _run_add(args, config, manifest_file, add_tls_secret_to_manifest)
    _print_summary(result, manifest_file)


if __name__ == "__main__":
    cli()
