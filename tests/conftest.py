"""Shared test fixtures for dxlcomplete.

Provides reusable fixtures for isolating configuration, managing output
state, running CLI commands, and standing in for the external
``dynamixel-tool`` -- either in-process (:class:`FakeToolRunner`) or as a
real executable script that the engine runs as a child process.
"""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path
from typing import Optional

import pytest

from dxlcomplete.engine.tool import ToolRunner
from dxlcomplete.models import QueryResult
from dxlcomplete.output import reset_output


def reg_line(address: int, size: int, access: str, name: str) -> str:
    """Format a register the way ``dynamixel-tool list-registers`` prints it."""
    return f"{address:4} {size:1} {access:<2} {name}"


AX_12A_REGISTERS = [
    reg_line(0, 2, "R", "model_number"),
    reg_line(3, 1, "RW", "id"),
    reg_line(30, 2, "RW", "goal_position"),
    reg_line(36, 2, "R", "present_position"),
]

AX_18A_REGISTERS = [
    reg_line(0, 2, "R", "model_number"),
    reg_line(24, 1, "RW", "torque_enable"),
]

XL430_REGISTERS = [
    reg_line(0, 2, "R", "model_number"),
    reg_line(116, 4, "RW", "goal_position"),
]


class FakeToolRunner(ToolRunner):
    """In-process stand-in for ``dynamixel-tool`` that records every query.

    Args:
        models: Lines printed by ``list-models``.
        registers: Lines printed by ``list-registers <model>``, per model.
            A model missing from the mapping behaves like an unknown model
            (non-zero exit, no output).
        extra_args: Protocol arguments, as :meth:`ToolRunner.for_request`
            would pass them.
    """

    def __init__(
        self,
        models: Optional[list[str]] = None,
        registers: Optional[dict[str, list[str]]] = None,
        extra_args: tuple[str, ...] = (),
    ) -> None:
        super().__init__("dynamixel-tool", extra_args)
        self.models = list(models or [])
        self.registers = dict(registers or {})
        self.calls: list[tuple[str, ...]] = []

    def run(self, *args: str) -> QueryResult:
        self.calls.append(args)
        command = (self.executable, *self.extra_args, *args)
        if args[:1] == ("list-models",):
            lines = self.models
        elif args[:1] == ("list-registers",) and len(args) == 2:
            lines = self.registers.get(args[1], [])
        else:
            lines = []
        if not lines:
            return QueryResult.failed(command, "exited with status 1", 1)
        return QueryResult.succeeded(command, list(lines))

    @property
    def register_queries(self) -> list[str]:
        return [call[1] for call in self.calls if call[:1] == ("list-registers",)]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams the
    cached references go stale once the test finishes, so a fresh manager
    is forced for the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Tool fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    """A runner knowing two protocol-1 models that share the prefix ``AX-1``."""
    return FakeToolRunner(
        models=["AX-12A", "AX-18A", "MX-28"],
        registers={"AX-12A": AX_12A_REGISTERS, "AX-18A": AX_18A_REGISTERS},
    )


_FAKE_TOOL_SOURCE = '''\
import json
import os
import sys

args = sys.argv[1:]
with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "calls.log"), "a") as log:
    log.write(json.dumps(args) + "\\n")

protocol = "2" if "-P2" in args else "1"
args = [a for a in args if a != "-P2"]
data = json.loads(@DATA@)
models = data["models"][protocol]
registers = data["registers"][protocol]

if args == ["list-models"]:
    print("\\n".join(models))
elif len(args) == 2 and args[0] == "list-registers" and args[1] in registers:
    print("\\n".join(registers[args[1]]))
else:
    sys.stderr.write("Error: Model not found\\n")
    sys.exit(1)
'''


class FakeTool:
    """An executable fake ``dynamixel-tool`` on disk.

    Attributes:
        path: Absolute path of the executable.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def __str__(self) -> str:
        return str(self.path)

    @property
    def calls(self) -> list[list[str]]:
        """Argument lists of every invocation so far, oldest first."""
        log = self.path.parent / "calls.log"
        if not log.is_file():
            return []
        return [json.loads(line) for line in log.read_text().splitlines()]


@pytest.fixture
def fake_tool(tmp_path: Path) -> FakeTool:
    """Write an executable fake ``dynamixel-tool`` into a fresh directory.

    Protocol 1 knows ``AX-12A``, ``AX-18A`` and ``MX-28`` (the last one has
    no registers); protocol 2 (``-P2``) knows ``XL430-W250``.
    """
    data = {
        "models": {"1": ["AX-12A", "AX-18A", "MX-28"], "2": ["XL430-W250"]},
        "registers": {
            "1": {"AX-12A": AX_12A_REGISTERS, "AX-18A": AX_18A_REGISTERS},
            "2": {"XL430-W250": XL430_REGISTERS},
        },
    }
    tool_dir = tmp_path / "bin"
    tool_dir.mkdir()
    path = tool_dir / "dynamixel-tool"
    source = _FAKE_TOOL_SOURCE.replace("@DATA@", repr(json.dumps(data)))
    path.write_text(f"#!{sys.executable}\n{source}")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return FakeTool(path)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Forces XDG path resolution, points XDG_CONFIG_HOME and XDG_DATA_HOME
    at subdirectories of tmp_path, clears the DXLCOMPLETE_* environment
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("dxlcomplete.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["DXLCOMPLETE_TOOL", "DXLCOMPLETE_STATE_MODE"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
