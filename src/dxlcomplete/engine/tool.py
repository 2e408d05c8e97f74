"""Child-process queries against the external ``dynamixel-tool``.

:class:`ToolRunner` runs the tool's read-only listing commands and turns
every outcome into a :class:`~dxlcomplete.models.QueryResult`: it never
raises for a missing executable, a non-zero exit, a timeout or empty
output. :func:`collapse` is the single place where such a result becomes a
candidate list, which keeps the fallback policy in one spot:

* a successful result yields its (optionally transformed) lines;
* a failure, or a transform that leaves nothing, yields the fallback list
  when one is given and an empty list otherwise.

stderr of the tool is discarded. Queries are not cached: every completion
request runs them again.
"""

from __future__ import annotations

import os
import subprocess
from typing import Callable, Optional, Sequence

from dxlcomplete.models import CompletionRequest, QueryResult, ToolConfig
from dxlcomplete.output import debug
from dxlcomplete.engine.protocol import protocol_args


class ToolRunner:
    """Runs listing commands of one ``dynamixel-tool`` executable.

    Args:
        executable: Program to run, as typed on the command line or taken
            from configuration. ``~`` is expanded.
        extra_args: Arguments placed before the subcommand, e.g. ``-P2``.
        timeout: Seconds to wait for each query, or ``None`` to wait
            until the tool exits.
    """

    def __init__(
        self,
        executable: str,
        extra_args: Sequence[str] = (),
        timeout: Optional[float] = None,
    ) -> None:
        self.executable = executable
        self.extra_args = tuple(extra_args)
        self.timeout = timeout

    @classmethod
    def for_request(cls, request: CompletionRequest, config: ToolConfig) -> ToolRunner:
        """Build the runner for *request*, honouring the line's protocol selector."""
        return cls(
            executable=config.executable or request.program,
            extra_args=protocol_args(request.words),
            timeout=config.timeout_seconds,
        )

    def list_models(self) -> QueryResult:
        return self.run("list-models")

    def list_registers(self, model: str) -> QueryResult:
        return self.run("list-registers", model)

    def run(self, *args: str) -> QueryResult:
        """Run the tool with *args* and capture its stdout lines.

        Output is decoded as UTF-8 with undecodable bytes replaced by
        U+FFFD. Blank lines are dropped. Empty output counts as a failure,
        since the tool prints nothing useful when it fails quietly.
        """
        command = (self.executable, *self.extra_args, *args)
        debug(f"Running: {' '.join(command)}")
        try:
            proc = subprocess.run(
                [os.path.expanduser(self.executable), *self.extra_args, *args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return QueryResult.failed(command, "executable not found")
        except subprocess.TimeoutExpired:
            return QueryResult.failed(command, f"timed out after {self.timeout}s")
        except OSError as exc:
            return QueryResult.failed(command, f"cannot execute: {exc}")

        if proc.returncode != 0:
            return QueryResult.failed(
                command, f"exited with status {proc.returncode}", proc.returncode
            )
        lines = [line for line in proc.stdout.splitlines() if line.strip()]
        if not lines:
            return QueryResult.failed(command, "no output", proc.returncode)
        return QueryResult.succeeded(command, lines)


def collapse(
    result: QueryResult,
    transform: Optional[Callable[[Sequence[str]], list[str]]] = None,
    fallback: Sequence[str] = (),
) -> list[str]:
    """Reduce a query result to candidates, applying the fallback rule.

    Args:
        result: Outcome of :meth:`ToolRunner.run`.
        transform: Applied to the lines of a successful result.
        fallback: Returned when the query failed or *transform* produced
            nothing.
    """
    if result.ok:
        lines = transform(result.lines) if transform is not None else list(result.lines)
        if lines:
            return lines
        debug(f"{' '.join(result.command)}: no usable lines")
    else:
        assert result.failure is not None
        debug(f"{' '.join(result.command)}: {result.failure.reason}")
    return list(fallback)
