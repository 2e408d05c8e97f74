"""Built-in CLI sub-commands for dxlcomplete.

* :mod:`~dxlcomplete.commands.complete` -- answer completion requests
  (``complete``) and print the bash hook (``script``).
* :mod:`~dxlcomplete.commands.config` -- view and modify settings.

Single commands are exported as plain callback functions registered on the
root app; the ``config`` group is a :class:`typer.Typer` sub-application.
"""
