"""Static completion tables for ``dynamixel-tool``.

Everything here is fixed for the lifetime of the process: which words name
subcommands, what each subcommand offers when the user presses TAB, and
which flags take a value. Dynamic candidates (models, registers) are added
on top of these tables by :mod:`dxlcomplete.engine.dispatch`.
"""

from __future__ import annotations

from dxlcomplete.models import CommandState, OptionTable

# Subcommand keywords, including clap's visible aliases.
KEYWORDS: dict[str, CommandState] = {
    "help": CommandState.HELP,
    "list-models": CommandState.LIST_MODELS,
    "list-registers": CommandState.LIST_REGISTERS,
    "scan": CommandState.SCAN,
    "read-uint8": CommandState.READ_UINT8,
    "readb": CommandState.READ_UINT8,
    "read-uint16": CommandState.READ_UINT16,
    "readh": CommandState.READ_UINT16,
    "read-uint32": CommandState.READ_UINT32,
    "readw": CommandState.READ_UINT32,
    "read-bytes": CommandState.READ_BYTES,
    "reada": CommandState.READ_BYTES,
    "read-bytes-multiple": CommandState.READ_BYTES_MULTIPLE,
    "readm": CommandState.READ_BYTES_MULTIPLE,
    "read-reg": CommandState.READ_REG,
    "write-uint8": CommandState.WRITE_UINT8,
    "writeb": CommandState.WRITE_UINT8,
    "write-uint16": CommandState.WRITE_UINT16,
    "writeh": CommandState.WRITE_UINT16,
    "write-uint32": CommandState.WRITE_UINT32,
    "writew": CommandState.WRITE_UINT32,
    "write-bytes": CommandState.WRITE_BYTES,
    "writea": CommandState.WRITE_BYTES,
    "write-bytes-multiple": CommandState.WRITE_BYTES_MULTIPLE,
    "writem": CommandState.WRITE_BYTES_MULTIPLE,
    "write-reg": CommandState.WRITE_REG,
}

# Root flags whose next word is a value. The tool's values are free-form
# (device paths, numbers), so they are completed as file names.
ROOT_VALUE_FLAGS = frozenset(
    {"-p", "--port", "-b", "--baudrate", "-r", "--retries", "-P", "--protocol"}
)

# Subcommands whose second positional argument is a ``model/register`` spec.
REGISTER_STATES = frozenset({CommandState.READ_REG, CommandState.WRITE_REG})

_HELP = ("-h", "--help")
_SYNC = ("-s", "--sync")

_ROOT_WORDS = (
    "-h", "-V", "-f", "-d", "-p", "-b", "-r", "-j", "-P",
    "--help", "--version", "--force", "--debug", "--port", "--baudrate",
    "--retries", "--json", "--protocol",
    "list-models", "list-registers", "scan",
    "read-uint8", "read-uint16", "read-uint32", "read-bytes",
    "read-bytes-multiple", "read-reg",
    "write-uint8", "write-uint16", "write-uint32", "write-bytes",
    "write-bytes-multiple", "write-reg",
    "help",
)  # fmt: skip

OPTION_TABLES: dict[CommandState, OptionTable] = {
    CommandState.ROOT: OptionTable(
        words=_ROOT_WORDS, value_flags=ROOT_VALUE_FLAGS, command_index=1
    ),
    CommandState.HELP: OptionTable(words=("<SUBCOMMAND>...",)),
    CommandState.LIST_MODELS: OptionTable(words=_HELP),
    CommandState.LIST_REGISTERS: OptionTable(words=_HELP),
    CommandState.SCAN: OptionTable(words=_HELP + ("<SCAN_START>", "<SCAN_END>")),
    CommandState.READ_UINT8: OptionTable(words=_HELP + ("<IDS>", "<ADDRESS>")),
    CommandState.READ_UINT16: OptionTable(words=_HELP + ("<IDS>", "<ADDRESS>")),
    CommandState.READ_UINT32: OptionTable(words=_HELP + ("<IDS>", "<ADDRESS>")),
    CommandState.READ_BYTES: OptionTable(
        words=_HELP + ("<IDS>", "<ADDRESS>", "<COUNT>")
    ),
    CommandState.READ_BYTES_MULTIPLE: OptionTable(words=_HELP + ("<SPECS>...",)),
    CommandState.READ_REG: OptionTable(words=_HELP + ("<IDS>", "<REG>")),
    CommandState.WRITE_UINT8: OptionTable(
        words=_HELP + _SYNC + ("<IDS>", "<ADDRESS>", "<VALUE>...")
    ),
    CommandState.WRITE_UINT16: OptionTable(
        words=_HELP + _SYNC + ("<IDS>", "<ADDRESS>", "<VALUE>...")
    ),
    CommandState.WRITE_UINT32: OptionTable(
        words=_HELP + _SYNC + ("<IDS>", "<ADDRESS>", "<VALUE>...")
    ),
    CommandState.WRITE_BYTES: OptionTable(
        words=_HELP + ("<IDS>", "<ADDRESS>", "<VALUES>...")
    ),
    CommandState.WRITE_BYTES_MULTIPLE: OptionTable(words=_HELP + ("<SPECS>...",)),
    CommandState.WRITE_REG: OptionTable(words=_HELP + ("<IDS>", "<REG>", "<VALUE>")),
    CommandState.UNKNOWN: OptionTable(),
}


def option_table(state: CommandState) -> OptionTable:
    """Return the static table for *state*."""
    return OPTION_TABLES[state]


def keywords_for(state: CommandState) -> frozenset[str]:
    """Return every keyword (canonical name and aliases) that selects *state*."""
    return frozenset(word for word, target in KEYWORDS.items() if target is state)
