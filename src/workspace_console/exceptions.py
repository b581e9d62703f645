"""Custom exception hierarchy for workspace-console.

Only start-up conditions are modelled here.  Errors raised by the
workspace client while a command runs are deliberately *not* wrapped:
the console loop reports them verbatim and returns to the prompt.

Hierarchy
---------
WorkspaceConsoleError
├── ConfigurationError
├── EnvironmentError
└── ClientLoadError
"""

from __future__ import annotations


class WorkspaceConsoleError(Exception):
    """Base exception for all workspace-console errors.

    The CLI error boundary renders these as a clean message plus an
    optional hint, without a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Options ---------------------------------------------------------------

class ConfigurationError(WorkspaceConsoleError):
    """Raised when start-up options are missing or malformed."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(WorkspaceConsoleError):
    """Raised when a required runtime dependency is not available."""


# --- Workspace client ------------------------------------------------------

class ClientLoadError(WorkspaceConsoleError):
    """Raised when the workspace client factory cannot be loaded or called."""


def append_factory_hint(hint: str) -> str:
    """Append client-factory configuration guidance to *hint*.

    The guidance is appended only once and preserves the original hint
    content verbatim.
    """
    marker = "Configure the client factory with:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    --client-factory package.module:ClassName",
            "    (or set WORKSPACE_CLIENT_FACTORY)",
        )
    )
