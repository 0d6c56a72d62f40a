"""
calceval CLI Package.

- app.py: main Typer application and global options
- repl.py: interactive evaluation loop
- inspect.py: eval and pipeline inspection commands
- utils.py: shared console, logging and version helpers
"""

from calceval.cli.app import app, main
from calceval.cli.repl import run_repl
from calceval.cli.utils import version_callback

__all__ = [
    "app",
    "main",
    "run_repl",
    "version_callback",
]
