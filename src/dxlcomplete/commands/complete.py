"""Completion commands -- answer completion requests and print the shell hook.

* ``dxl-complete complete`` is what the shell calls on every TAB press. It
  prints one candidate per line on stdout (a JSON array with ``--json``)
  and nothing else; diagnostics stay on stderr.
* ``dxl-complete script`` prints a bash function that forwards
  ``COMP_CWORD`` and ``COMP_WORDS`` to ``dxl-complete complete``.
"""

from __future__ import annotations

import re
from typing import Optional

import typer

from dxlcomplete.output import OutputFormat, format_response, get_output, print_data, print_lines


_BASH_HOOK = """\
{function}() {{
    local IFS=$'\\n'
    COMPREPLY=( $(dxl-complete complete{options} --cword "${{COMP_CWORD}}" -- "${{COMP_WORDS[@]}}" 2>/dev/null) )
}}
complete -F {function} -o bashdefault -o default {tool}
"""


def complete_command(
    words: Optional[list[str]] = typer.Argument(
        None, help="Words of the command line, program name first. Pass them after '--'."
    ),
    cword: int = typer.Option(
        ..., "--cword", "-c", help="Index of the word under the cursor."
    ),
    tool: Optional[str] = typer.Option(
        None, "--tool", help="Executable to query for models and registers."
    ),
    state_mode: Optional[str] = typer.Option(
        None, "--state-mode", help="State resolution: scan or strict."
    ),
) -> None:
    """Print completion candidates for a command line.

    Example::

        dxl-complete complete --cword 3 -- dynamixel-tool read-reg 1 AX-1
        dxl-complete --json complete --cword 1 -- dynamixel-tool list
    """
    from dxlcomplete.config import resolve_config
    from dxlcomplete.engine import complete
    from dxlcomplete.models import CompletionRequest

    request = CompletionRequest.from_words(words or [], cword)
    config = resolve_config(cli_tool=tool, cli_state_mode=state_mode)
    candidates = complete(request, config)

    if get_output().format == OutputFormat.JSON:
        format_response(candidates)
    else:
        print_lines(candidates)


def _function_name(tool: str) -> str:
    return "_dxl_complete_" + re.sub(r"\W", "_", tool.rsplit("/", 1)[-1])


def script_command(
    tool: str = typer.Option(
        "dynamixel-tool", "--tool", help="Command name to attach completion to."
    ),
    state_mode: Optional[str] = typer.Option(
        None, "--state-mode", help="Bake a state resolution mode into the hook."
    ),
) -> None:
    """Print the bash completion hook for ``dynamixel-tool``.

    Example::

        eval "$(dxl-complete script)"
        dxl-complete script --tool dxl > ~/.bash_completion.d/dxl
    """
    options = f" --state-mode {state_mode}" if state_mode else ""
    print_data(
        _BASH_HOOK.format(function=_function_name(tool), options=options, tool=tool).rstrip("\n")
    )
