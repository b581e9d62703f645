"""workspace-console — interactive console for a telephony workspace client.

Reads operator commands, translates them into client-library calls and
prints the events the library pushes back.
"""

from workspace_console.version import __version__

__all__: list[str] = ["__version__"]
