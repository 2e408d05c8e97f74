"""Protocol-version detection for external tool queries.

``dynamixel-tool`` keeps a separate model and register database per
protocol version, so ``list-models`` and ``list-registers`` must be run with
the same ``--protocol`` the user is typing. Only version 2 needs a flag;
version 1 is the tool's default.
"""

from __future__ import annotations

import re
from typing import Sequence

PROTOCOL_V2_FLAG = "-P2"

# Matched against the space-joined line, so a value split into its own word
# ("-P 2", "--protocol = 2" after shell word-breaking on '=') still counts.
_PROTOCOL_V2 = re.compile(r"-P\s*2|--protocol[= ]*2")


def uses_protocol_v2(words: Sequence[str]) -> bool:
    """Return True if a protocol-2 selector appears anywhere in *words*."""
    return _PROTOCOL_V2.search(" ".join(words)) is not None


def protocol_args(words: Sequence[str]) -> tuple[str, ...]:
    """Extra arguments that make external queries match the line's protocol."""
    return (PROTOCOL_V2_FLAG,) if uses_protocol_v2(words) else ()
