"""dxlcomplete -- context-sensitive shell completion for ``dynamixel-tool``.

This package resolves tab-completion candidates for the ``dynamixel-tool``
servo control CLI. Given the words of a partially-typed command line and
the index of the word under the cursor, it returns subcommands, flags and
placeholders from static tables, and live model and register names obtained
by running the tool's own ``list-models`` and ``list-registers`` commands.

Typical usage from a shell hook::

    dxl-complete complete --cword 3 -- dynamixel-tool read-reg 1 AX-1

Modules:
    app: Typer application factory and CLI entry point.
    engine: State resolution, dispatch and dynamic resolvers.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
