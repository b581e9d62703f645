"""Allow ``python -m workspace_console`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m workspace_console`` behaves identically to the
``workspace-console`` console script.
"""

from __future__ import annotations

from workspace_console.cli.app import cli

if __name__ == "__main__":
    cli()
