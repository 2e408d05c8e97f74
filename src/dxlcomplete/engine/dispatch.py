"""Completion dispatch: pick a candidate source for the resolved state.

For a given :class:`~dxlcomplete.models.CommandState` the sources are tried
in this order:

1. The word starts with ``-``, or the cursor is where the state's own
   subcommand name goes: the whole option table.
2. The previous word is a flag that takes a value: file names.
3. ``read-reg``/``write-reg`` with the cursor on the register argument:
   qualified register names from the tool.
4. Otherwise the option table. For ``list-registers`` the table is
   extended with the model list from the tool.

Whatever the source, only candidates starting with the current word are
returned. :data:`~dxlcomplete.models.CommandState.UNKNOWN` and the program
name itself complete to nothing.
"""

from __future__ import annotations

from typing import Iterable, Optional

from dxlcomplete.models import CommandState, CompletionRequest, GlobalConfig
from dxlcomplete.output import debug
from dxlcomplete.engine.dynamic import resolve_models, resolve_registers
from dxlcomplete.engine.options import REGISTER_STATES, keywords_for, option_table
from dxlcomplete.engine.paths import complete_path
from dxlcomplete.engine.state import resolve_state
from dxlcomplete.engine.tool import ToolRunner


def filter_prefix(candidates: Iterable[str], prefix: str) -> list[str]:
    """Keep candidates starting with *prefix*, dropping repeats, in order."""
    seen: set[str] = set()
    result = []
    for candidate in candidates:
        if candidate.startswith(prefix) and candidate not in seen:
            seen.add(candidate)
            result.append(candidate)
    return result


def candidates_for(
    state: CommandState,
    request: CompletionRequest,
    runner: ToolRunner,
    register_column_width: int = 10,
) -> list[str]:
    """Return the unfiltered candidates for *request* in *state*."""
    if state is CommandState.UNKNOWN or request.cword == 0:
        return []

    table = option_table(state)
    current = request.current
    words = list(table.words)
    if state is CommandState.LIST_REGISTERS and not current.startswith("-"):
        words.extend(resolve_models(runner))

    if current.startswith("-") or request.cword == table.command_index:
        return words

    if request.previous in table.value_flags:
        return complete_path(current)

    if state in REGISTER_STATES and request.word_at(-2) in keywords_for(state):
        return resolve_registers(current, runner, register_column_width)

    return words


def complete(
    request: CompletionRequest,
    config: Optional[GlobalConfig] = None,
    runner: Optional[ToolRunner] = None,
) -> list[str]:
    """Complete *request*: the engine's entry point.

    Args:
        request: The command line and cursor index.
        config: Effective settings; defaults apply when omitted.
        runner: Tool runner to use instead of the one derived from the
            request and *config*.

    Returns:
        Candidates sharing the current word as a prefix, in source order.
        External tool failures only ever shorten this list.
    """
    config = config or GlobalConfig()
    state = resolve_state(request, config.resolver.state_mode)
    debug(f"State {state.value} at word {request.cword} ({request.current!r})")

    if runner is None:
        runner = ToolRunner.for_request(request, config.tool)
    candidates = candidates_for(
        state, request, runner, config.tool.register_column_width
    )
    return filter_prefix(candidates, request.current)
