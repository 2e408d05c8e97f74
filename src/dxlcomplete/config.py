"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles the small amount of persistent state dxlcomplete has:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.dxlcomplete/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~dxlcomplete.models.GlobalConfig`
  JSON file choosing the external executable, an optional query timeout and
  the state resolution mode.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the config file into the effective settings.

Completion requests only ever read configuration. Writes come from the
``dxl-complete config`` commands and use an atomic temp-file-then-rename
strategy (:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from dxlcomplete.exceptions import ConfigError
from dxlcomplete.models import GlobalConfig, StateMode

_APP_NAME = "dxlcomplete"
_CONFIG_FILENAME = "config.json"

ENV_TOOL = "DXLCOMPLETE_TOOL"
ENV_STATE_MODE = "DXLCOMPLETE_STATE_MODE"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory path.

    On Linux/BSD: ``$XDG_CONFIG_HOME/dxlcomplete/`` (default
    ``~/.config/dxlcomplete/``). On macOS/Windows: ``~/.dxlcomplete/``.

    The directory is not created here: completion runs on every keystroke
    and must not touch the disk unless something is written.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/dxlcomplete/`` (default
    ``~/.local/share/dxlcomplete/``). On macOS/Windows: ``~/.dxlcomplete/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the original file is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration.

    Returns:
        The deserialised :class:`~dxlcomplete.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def _parse_state_mode(value: str, source: str) -> StateMode:
    try:
        return StateMode(value.strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in StateMode)
        raise ConfigError(
            f"Invalid state mode '{value}' from {source} (expected one of: {choices})"
        ) from None


def resolve_config(
    cli_tool: Optional[str] = None,
    cli_state_mode: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_tool``, ``cli_state_mode``)
        2. Environment variables (``DXLCOMPLETE_TOOL``, ``DXLCOMPLETE_STATE_MODE``)
        3. User config (``~/.config/dxlcomplete/config.json``)
        4. Defaults

    Returns:
        A fresh :class:`~dxlcomplete.models.GlobalConfig`; the file on disk
        is never modified.
    """
    config = load_global_config()

    env_tool = os.environ.get(ENV_TOOL)
    if env_tool:
        config.tool.executable = env_tool
    if cli_tool is not None:
        config.tool.executable = cli_tool

    env_mode = os.environ.get(ENV_STATE_MODE)
    if env_mode:
        config.resolver.state_mode = _parse_state_mode(env_mode, ENV_STATE_MODE)
    if cli_state_mode is not None:
        config.resolver.state_mode = _parse_state_mode(cli_state_mode, "--state-mode")

    return config
