"""Completion engine for ``dynamixel-tool`` command lines.

Sub-modules, leaves first:

* :mod:`~dxlcomplete.engine.options` -- static keyword and option tables.
* :mod:`~dxlcomplete.engine.protocol` -- protocol-2 selector detection.
* :mod:`~dxlcomplete.engine.tool` -- child-process queries and the
  fallback rule.
* :mod:`~dxlcomplete.engine.dynamic` -- model and register resolvers.
* :mod:`~dxlcomplete.engine.paths` -- file-name completion.
* :mod:`~dxlcomplete.engine.state` -- command-path state resolution.
* :mod:`~dxlcomplete.engine.dispatch` -- source selection and filtering.

Example::

    from dxlcomplete.engine import complete
    from dxlcomplete.models import CompletionRequest

    request = CompletionRequest.from_words(["dynamixel-tool", "read-reg", "1", "AX-1"], 3)
    complete(request)   # registers of the one model starting with AX-1, else all models
"""

from dxlcomplete.engine.dispatch import candidates_for, complete, filter_prefix
from dxlcomplete.engine.dynamic import match_model, resolve_models, resolve_registers
from dxlcomplete.engine.protocol import protocol_args, uses_protocol_v2
from dxlcomplete.engine.state import resolve_state
from dxlcomplete.engine.tool import ToolRunner, collapse

__all__ = [
    "ToolRunner",
    "candidates_for",
    "collapse",
    "complete",
    "filter_prefix",
    "match_model",
    "protocol_args",
    "resolve_models",
    "resolve_registers",
    "resolve_state",
    "uses_protocol_v2",
]
