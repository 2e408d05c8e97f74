"""Command-path state resolution.

Works out which subcommand the cursor is in. Two strategies exist,
selected by :class:`~dxlcomplete.models.StateMode`:

**Scan** (default) reproduces the completion script that ships with
``dynamixel-tool``. Every word of the line, the one under the cursor
included, is checked: the program name starts a root label and each
subcommand keyword appends its canonical name. Only ``(root,)`` and
``(root, keyword)`` mean something; any other accumulation is
:attr:`~dxlcomplete.models.CommandState.UNKNOWN`. A keyword is therefore
noticed wherever it appears, even after the cursor or as the value of
another argument, and two keywords cancel each other out::

    dynamixel-tool write-reg list-models    -> UNKNOWN
    dynamixel-tool list-models write-reg    -> UNKNOWN

**Strict** is a finite-state machine over ``(state, word)`` transitions,
fed the words before the cursor from left to right. Root flags (and the
value of flags that take one) are skipped, the first positional word picks
the subcommand, and the walk stops there::

    dynamixel-tool write-reg list-models    -> WRITE_REG
"""

from __future__ import annotations

from typing import Sequence

from dxlcomplete.models import CommandState, CompletionRequest, StateMode
from dxlcomplete.engine.options import KEYWORDS, ROOT_VALUE_FLAGS

ROOT_LABEL = "root"

# Accumulated scan labels that select a completion table.
_SCAN_COMBINATIONS: dict[tuple[str, ...], CommandState] = {
    (ROOT_LABEL,): CommandState.ROOT,
    **{(ROOT_LABEL, state.value): state for state in set(KEYWORDS.values())},
}

TRANSITIONS: dict[tuple[CommandState, str], CommandState] = {
    (CommandState.ROOT, word): state for word, state in KEYWORDS.items()
}


def scan_labels(words: Sequence[str]) -> tuple[str, ...]:
    """Accumulate the scan labels for *words*.

    The program name (the first word) resets the label to root wherever it
    appears, matching the shell function it replaces.
    """
    if not words:
        return ()
    program = words[0]
    labels: tuple[str, ...] = ()
    for word in words:
        if word == program:
            labels = (ROOT_LABEL,)
        elif word in KEYWORDS:
            labels += (KEYWORDS[word].value,)
    return labels


def scan_state(words: Sequence[str]) -> CommandState:
    """Resolve the state by keyword presence anywhere in *words*."""
    return _SCAN_COMBINATIONS.get(scan_labels(words), CommandState.UNKNOWN)


def walk_state(words: Sequence[str]) -> CommandState:
    """Resolve the state by walking *words* (program name first) left to right."""
    state = CommandState.ROOT
    pending_values = 0
    for word in words[1:]:
        if pending_values:
            # Shells split "--port=x" into "--port", "=", "x".
            if word != "=":
                pending_values -= 1
            continue
        if word.startswith("-") and word != "-":
            if word in ROOT_VALUE_FLAGS:
                pending_values = 1
            continue
        state = TRANSITIONS.get((state, word), CommandState.UNKNOWN)
        # Every state reachable from ROOT is a leaf.
        break
    return state


def resolve_state(
    request: CompletionRequest, mode: StateMode = StateMode.SCAN
) -> CommandState:
    """Return the :class:`~dxlcomplete.models.CommandState` for *request*."""
    if mode == StateMode.STRICT:
        return walk_state(request.words[: request.cword])
    return scan_state(request.words)
