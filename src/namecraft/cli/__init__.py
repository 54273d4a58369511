"""Command-line interface for namecraft.

The front end runs one subcommand per operation and reads a single JSON
document from stdout. Human-facing messages (errors, version banner) go
through Rich consoles.

- app: the Typer application with every command registered.
- main: console-script entry point.
"""

from namecraft.cli.commands import app, main

__all__ = ["app", "main"]
