"""Custom exceptions for kmanifest.

This module defines the exception hierarchy used throughout the application
to provide meaningful error messages and proper error handling.
"""


class KmanifestError(Exception):
    """Base exception for all kmanifest errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all kmanifest errors with a single
    except clause if desired.
    """

    pass


class InputValidationError(KmanifestError):
    """Raised when command arguments are missing or malformed.

    This can occur when:
    - The secret name is not given exactly once
    - A required flag such as --cert or --key is empty
    """

    pass


class InvalidSourceError(InputValidationError):
    """Raised when a data source specification cannot be interpreted.

    This can occur when:
    - A --from-literal value has no '=' separator or an empty key
    - A --from-file value has an empty key or path
    - An env file is missing or contains an invalid variable name
    """

    pass


class MergeConflictError(KmanifestError):
    """Raised when merging data sources would produce a duplicate key."""

    pass


class DuplicateSecretError(KmanifestError):
    """Raised when a TLS secret with the same name is already registered."""

    pass


class SecretBuildError(KmanifestError):
    """Raised when a secret definition cannot be materialized.

    This can occur when:
    - A referenced file does not exist or cannot be read
    - A key is not a valid Secret data key
    - The certificate or private key is not PEM encoded
    """

    pass


class ManifestParsingError(KmanifestError):
    """Raised when the manifest file cannot be read or parsed.

    This can occur when:
    - The file does not exist
    - The file is not valid YAML
    - The YAML does not match the manifest layout
    """

    pass
