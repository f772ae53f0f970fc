"""Source configurations for the add secret commands.

Each configuration collects the option values of one command and checks
them, together with the positional arguments, before any manifest is read.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from kmanifest.exceptions import InputValidationError

_ERR_NAME_ONCE = "name must be specified once"
_ERR_NAME_EMPTY = "name must not be empty"


def _name_from_args(args: Sequence[str]) -> str:
    """Return the secret name from the positional arguments.

    Raises:
        InputValidationError: If there is not exactly one argument, or it is empty.

    """
    if len(args) != 1:
        raise InputValidationError(_ERR_NAME_ONCE)
    if not args[0]:
        raise InputValidationError(_ERR_NAME_EMPTY)
    return args[0]


@dataclass(slots=True)
class GenericSourceConfig:
    """Options for adding a generic secret.

    Attributes:
        name: The secret name, taken from the single positional argument.
        file_sources: ``[key=]path`` entries from --from-file.
        literal_sources: ``key=value`` entries from --from-literal.
        env_file_source: Path from --from-env-file, empty when unset.

    """

    name: str = ""
    file_sources: list[str] = field(default_factory=list)
    literal_sources: list[str] = field(default_factory=list)
    env_file_source: str = ""

    def validate(self, args: Sequence[str]) -> None:
        """Check the positional arguments and assign the secret name.

        Args:
            args: Positional command arguments.

        Raises:
            InputValidationError: If the name is not given exactly once or is empty.

        """
        self.name = _name_from_args(args)


@dataclass(slots=True)
class TLSSourceConfig:
    """Options for adding a TLS secret.

    Attributes:
        name: The secret name, taken from the single positional argument.
        cert: Path to the PEM encoded certificate.
        key: Path to the PEM encoded private key.

    """

    name: str = ""
    cert: str = ""
    key: str = ""

    def validate(self, args: Sequence[str]) -> None:
        """Check required fields are set and assign the secret name.

        Path existence is not checked here; building the secret does that.

        Args:
            args: Positional command arguments.

        Raises:
            InputValidationError: If the name is not given exactly once or is empty,
                or cert or key is empty.

        """
        self.name = _name_from_args(args)
        if not self.cert:
            raise InputValidationError("cert is required")
        if not self.key:
            raise InputValidationError("key is required")
