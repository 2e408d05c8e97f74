"""Config commands -- view and modify the completion settings.

Provides the ``dxl-complete config`` sub-command group for reading,
updating, and resetting the global configuration file
(:class:`~dxlcomplete.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from dxlcomplete.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)

_NULL_VALUES = ("none", "null", "")


@config_app.command("show")
def config_show() -> None:
    """Show the stored configuration.

    Example::

        dxl-complete config show
        dxl-complete --json config show
    """
    from dxlcomplete.config import global_config_path, load_global_config

    config = load_global_config()
    info(f"Config file: {global_config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'resolver.state_mode')."
    ),
    value: str = typer.Argument(help="Value to set; 'none' clears optional keys."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The value is coerced to match the
    existing field's type, then the whole config is validated before it
    is saved.

    Raises:
        typer.Exit: With code 2 if the key path is invalid, the value
            cannot be coerced, or validation fails.

    Example::

        dxl-complete config set resolver.state_mode strict
        dxl-complete config set tool.timeout_seconds 2.5
        dxl-complete config set tool.executable none
    """
    from dxlcomplete.config import load_global_config, save_global_config
    from dxlcomplete.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    current = target[final_key]
    if value.strip().lower() in _NULL_VALUES:
        coerced = None
    elif isinstance(current, int):
        try:
            coerced = int(value)
        except ValueError:
            error(f"Expected integer for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    else:
        # Strings and unset optionals; the model validates the rest.
        coerced = value

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Example::

        dxl-complete config reset --force
    """
    from dxlcomplete.config import save_global_config
    from dxlcomplete.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
