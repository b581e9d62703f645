"""Infrastructure layer — integration with the external client library.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Raw import/construction errors are re-raised as
  :class:`~workspace_console.exceptions.WorkspaceConsoleError` subclasses.
"""

from workspace_console.infra.client_loader import create_workspace_client, load_client_factory

__all__: list[str] = [
    "create_workspace_client",
    "load_client_factory",
]
