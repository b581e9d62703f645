"""Load and construct the external workspace client.

The client library is chosen at run time from a ``module:attribute``
path (``--client-factory`` / ``WORKSPACE_CLIENT_FACTORY``).  This module
is the **only** place that imports it.  Import and construction failures
are caught here and re-raised as typed
:class:`~workspace_console.exceptions.WorkspaceConsoleError` subclasses.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Mapping
from typing import Any

from workspace_console.core.protocols import WorkspaceClient
from workspace_console.exceptions import (
    ClientLoadError,
    ConfigurationError,
    EnvironmentError,
    WorkspaceConsoleError,
    append_factory_hint,
)


def _split_factory_path(factory_path: str) -> tuple[str, str]:
    """Split ``"pkg.module:Attr"`` into its module and attribute parts."""
    module_name, sep, attr_path = factory_path.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(
            f"Invalid client factory: {factory_path!r}",
            hint="Expected the form package.module:ClassName",
        )
    return module_name, attr_path


def load_client_factory(factory_path: str | None) -> Callable[..., Any]:
    """Import and return the callable named by *factory_path*.

    Raises
    ------
    ConfigurationError
        If no path is configured or it is malformed.
    EnvironmentError
        If the module cannot be imported.
    ClientLoadError
        If the attribute is missing or not callable.
    """
    if not factory_path:
        raise ConfigurationError(
            "No workspace client factory configured.",
            hint=append_factory_hint("The console needs a client library to drive."),
        )

    module_name, attr_path = _split_factory_path(factory_path)

    try:
        target: Any = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            f"{module_name} is not installed.",
            hint=append_factory_hint(f"Install the package that provides {module_name}."),
        ) from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ClientLoadError(
                f"{module_name} has no attribute {attr_path!r}.",
            ) from exc

    if not callable(target):
        raise ClientLoadError(f"{factory_path} is not callable.")
    return target


def create_workspace_client(
    factory_path: str | None,
    settings: Mapping[str, Any],
) -> WorkspaceClient:
    """Load the configured factory and call it with *settings*.

    Raises
    ------
    WorkspaceConsoleError
        Any loading failure (see :func:`load_client_factory`), or
        :class:`ClientLoadError` when the factory itself raises.
    """
    factory = load_client_factory(factory_path)
    try:
        client: WorkspaceClient = factory(dict(settings))
    except WorkspaceConsoleError:
        raise
    except Exception as exc:
        raise ClientLoadError(
            f"Workspace client construction failed: {exc}",
        ) from exc
    return client
