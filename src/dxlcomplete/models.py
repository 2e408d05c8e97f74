"""Canonical Pydantic models shared across all dxlcomplete modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`StateMode`, :class:`ToolConfig`, :class:`ResolverConfig` and
    :class:`GlobalConfig`.

**Engine models** -- created and discarded within a single completion
request:
    :class:`CommandState`, :class:`OptionTable`, :class:`CompletionRequest`,
    :class:`QueryFailure`, :class:`QueryResult`, :class:`ResolvedModel`,
    :class:`UnresolvedModel` and the :data:`ModelMatch` union.

All models use Pydantic v2. Engine models are frozen so that nothing
computed for one request can be mutated by the next stage.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from dxlcomplete.exceptions import InvalidUsageError


# --- Configuration ---


class StateMode(str, enum.Enum):
    """How the active subcommand is derived from the command line.

    ``SCAN`` reacts to subcommand keywords anywhere in the line, exactly
    like the completion script shipped with ``dynamixel-tool``. ``STRICT``
    walks positional tokens left to right and stops at the first
    subcommand.
    """

    SCAN = "scan"
    STRICT = "strict"


class ToolConfig(BaseModel):
    """How the external ``dynamixel-tool`` executable is invoked."""

    executable: Optional[str] = Field(
        default=None,
        description="Executable to query; defaults to the first word of the command line",
    )
    timeout_seconds: Optional[float] = Field(
        default=None, gt=0, description="Per-query timeout; unset blocks until the tool exits"
    )
    register_column_width: int = Field(
        default=10,
        ge=0,
        description="Width of the leading column stripped from list-registers output",
    )


class ResolverConfig(BaseModel):
    """Command-state resolution settings."""

    state_mode: StateMode = Field(
        default=StateMode.SCAN, description="State resolution: scan or strict"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/dxlcomplete/config.json``.

    Loaded and saved by :func:`~dxlcomplete.config.load_global_config` and
    :func:`~dxlcomplete.config.save_global_config`. See
    :func:`~dxlcomplete.config.resolve_config` for how environment variables
    and CLI flags override it.
    """

    tool: ToolConfig = Field(default_factory=ToolConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)


# --- Command state ---


class CommandState(str, enum.Enum):
    """The subcommand a command line is positioned in.

    ``ROOT`` means no subcommand has been typed yet. ``UNKNOWN`` is the
    no-op branch for keyword combinations that have no completion table.
    """

    ROOT = "root"
    HELP = "help"
    LIST_MODELS = "list-models"
    LIST_REGISTERS = "list-registers"
    SCAN = "scan"
    READ_UINT8 = "read-uint8"
    READ_UINT16 = "read-uint16"
    READ_UINT32 = "read-uint32"
    READ_BYTES = "read-bytes"
    READ_BYTES_MULTIPLE = "read-bytes-multiple"
    READ_REG = "read-reg"
    WRITE_UINT8 = "write-uint8"
    WRITE_UINT16 = "write-uint16"
    WRITE_UINT32 = "write-uint32"
    WRITE_BYTES = "write-bytes"
    WRITE_BYTES_MULTIPLE = "write-bytes-multiple"
    WRITE_REG = "write-reg"
    UNKNOWN = "unknown"


class OptionTable(BaseModel):
    """Static completion words for one :class:`CommandState`.

    Attributes:
        words: Flags, subcommand names and ``<PLACEHOLDER>`` labels offered
            for the state, in display order.
        value_flags: Flags in this state whose next word is a value,
            completed as a file-system path.
        command_index: Cursor index at which the state's own subcommand
            name is being typed (1 at the root, 2 below it). At that index
            the whole table is offered.
    """

    model_config = ConfigDict(frozen=True)

    words: tuple[str, ...] = ()
    value_flags: frozenset[str] = frozenset()
    command_index: int = 2


class CompletionRequest(BaseModel):
    """The command line being completed.

    ``words`` includes the program name as its first element. ``cword`` is
    the index of the word under the cursor; it may equal ``len(words)``
    when the cursor sits after a trailing space, in which case the word
    under completion is empty.
    """

    model_config = ConfigDict(frozen=True)

    words: tuple[str, ...]
    cword: int

    @classmethod
    def from_words(cls, words: list[str] | tuple[str, ...], cword: int) -> CompletionRequest:
        """Build a request, padding the line with an empty word when needed.

        Raises:
            InvalidUsageError: If *cword* lies outside ``0..len(words)``.
        """
        if cword < 0 or cword > len(words):
            raise InvalidUsageError(
                f"Cursor index {cword} is outside the command line ({len(words)} words)"
            )
        padded = tuple(words)
        if cword == len(padded):
            padded = padded + ("",)
        return cls(words=padded, cword=cword)

    @property
    def program(self) -> str:
        """The first word: the tool as the user typed it."""
        return self.words[0] if self.words else ""

    @property
    def current(self) -> str:
        """The word under the cursor."""
        return self.word_at(0)

    @property
    def previous(self) -> str:
        """The word just before the cursor."""
        return self.word_at(-1)

    def word_at(self, offset: int) -> str:
        """Return the word *offset* positions from the cursor, or ``""``."""
        index = self.cword + offset
        if 0 <= index < len(self.words):
            return self.words[index]
        return ""


# --- External queries ---


class QueryFailure(BaseModel):
    """Why an external listing command produced no usable output."""

    model_config = ConfigDict(frozen=True)

    command: tuple[str, ...]
    reason: str
    returncode: Optional[int] = None


class QueryResult(BaseModel):
    """Outcome of one external listing command.

    Exactly one of ``lines`` (non-empty) or ``failure`` is meaningful.
    Callers never inspect it directly; they go through
    :func:`~dxlcomplete.engine.tool.collapse`.
    """

    model_config = ConfigDict(frozen=True)

    command: tuple[str, ...]
    lines: tuple[str, ...] = ()
    failure: Optional[QueryFailure] = None

    @classmethod
    def succeeded(cls, command: tuple[str, ...], lines: list[str]) -> QueryResult:
        return cls(command=command, lines=tuple(lines))

    @classmethod
    def failed(
        cls, command: tuple[str, ...], reason: str, returncode: Optional[int] = None
    ) -> QueryResult:
        return cls(
            command=command,
            failure=QueryFailure(command=command, reason=reason, returncode=returncode),
        )

    @property
    def ok(self) -> bool:
        return self.failure is None


# --- Model prefix expansion ---


class ResolvedModel(BaseModel):
    """A model prefix that matched exactly one registry entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["resolved"] = "resolved"
    identifier: str

    @property
    def target(self) -> str:
        return self.identifier


class UnresolvedModel(BaseModel):
    """A model prefix that matched zero or several registry entries.

    The raw prefix is passed to ``list-registers`` unchanged; the tool
    decides whether it names a model.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["unresolved"] = "unresolved"
    raw_prefix: str

    @property
    def target(self) -> str:
        return self.raw_prefix


ModelMatch = Annotated[Union[ResolvedModel, UnresolvedModel], Field(discriminator="kind")]
"""Result of unique-prefix expansion; ``.target`` is the name to query."""
