"""Exception hierarchy for dxlcomplete.

All exceptions inherit from :class:`DxlCompleteError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`dxlcomplete.exit_codes`.
The top-level error handler in :func:`dxlcomplete.app.main` catches
``DxlCompleteError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Failures of the external tool are deliberately absent: they are modelled as
:class:`~dxlcomplete.models.QueryFailure` values, not exceptions.

Subclass hierarchy::

    DxlCompleteError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigError         (exit 3)
"""

from dxlcomplete.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class DxlCompleteError(Exception):
    """Base exception for all dxlcomplete errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(DxlCompleteError):
    """Raised for invalid CLI arguments, e.g. a cursor index outside the line."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(DxlCompleteError):
    """Raised for configuration problems (invalid JSON, failed validation, unknown keys)."""

    exit_code = EXIT_CONFIG_ERROR
