"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~dxlcomplete.exceptions.DxlCompleteError` subclass.
A failing external tool is never one of them: query failures are absorbed
by the engine and only shorten the candidate list.

Example::

    $ dxl-complete complete --cword 9 -- dynamixel-tool
    $ echo $?
    2   # EXIT_INVALID_USAGE -- cursor index outside the command line
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_CONFIG_ERROR = 3
"""The configuration file could not be read or failed validation."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
