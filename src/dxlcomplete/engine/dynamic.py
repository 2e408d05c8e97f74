"""Dynamic candidates: device models and their registers.

Both resolvers ask the external tool at request time. A register spec on
the command line has the form ``MODEL/REGISTER``; while it is being typed
the model part is often abbreviated, so :func:`match_model` expands it when
exactly one known model starts with it. An ambiguous or unknown prefix is
passed through unchanged and the tool decides.
"""

from __future__ import annotations

from typing import Sequence

from dxlcomplete.models import ModelMatch, ResolvedModel, UnresolvedModel
from dxlcomplete.output import debug
from dxlcomplete.engine.tool import ToolRunner, collapse

REGISTER_SEPARATOR = "/"
DEFAULT_REGISTER_COLUMN = 10


def resolve_models(runner: ToolRunner) -> list[str]:
    """Return every model the tool knows for the active protocol, or ``[]``."""
    return collapse(runner.list_models())


def match_model(prefix: str, models: Sequence[str]) -> ModelMatch:
    """Expand *prefix* to a full model identifier if it is unambiguous.

    Example::

        >>> match_model("MX-2", ["AX-12A", "MX-28"]).target
        'MX-28'
        >>> match_model("AX-1", ["AX-12A", "AX-18A"]).target
        'AX-1'
    """
    matches = [model for model in models if model.startswith(prefix)]
    if len(matches) == 1:
        return ResolvedModel(identifier=matches[0])
    return UnresolvedModel(raw_prefix=prefix)


def qualify_registers(
    model: str, lines: Sequence[str], column_width: int = DEFAULT_REGISTER_COLUMN
) -> list[str]:
    """Turn ``list-registers`` lines into ``model/register`` candidates.

    Each line starts with a fixed-width column (address, size and access
    mode) that is cut off; lines with nothing after it are skipped.
    """
    qualified = []
    for line in lines:
        name = line[column_width:].rstrip()
        if name:
            qualified.append(f"{model}{REGISTER_SEPARATOR}{name}")
    return qualified


def resolve_registers(
    partial: str,
    runner: ToolRunner,
    column_width: int = DEFAULT_REGISTER_COLUMN,
) -> list[str]:
    """Return qualified register names for the model named in *partial*.

    Falls back to the model list when the register query yields nothing,
    so that a half-typed or misspelled model still completes to something.
    """
    prefix = partial.split(REGISTER_SEPARATOR, 1)[0]
    models = resolve_models(runner)
    match = match_model(prefix, models)
    debug(f"Register spec {partial!r}: {match.kind} model {match.target!r}")

    target = match.target
    return collapse(
        runner.list_registers(target),
        transform=lambda lines: qualify_registers(target, lines, column_width),
        fallback=models,
    )
