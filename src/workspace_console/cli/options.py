"""Start-up options for the console.

Options come from the command line; the client factory and secrets may
also come from environment variables so they need not appear in shell
history.  Only presence is checked: values are handed to the workspace
client unvalidated.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

_MASK = "********"

_SECRET_FIELDS: tuple[str, ...] = ("api_key", "password", "client_secret", "token")

_CLIENT_SETTING_FIELDS: tuple[str, ...] = (
    "base_url",
    "auth_base_url",
    "api_key",
    "username",
    "password",
    "client_id",
    "client_secret",
    "token",
    "debug",
)


@dataclass(frozen=True, slots=True)
class ConsoleOptions:
    """Immutable configuration bag supplied at start-up."""

    client_factory: str | None = None
    base_url: str | None = None
    auth_base_url: str | None = None
    api_key: str | None = None
    username: str | None = None
    password: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    token: str | None = None
    default_agent_id: str | None = None
    default_dn: str | None = None
    default_destination: str | None = None
    auto_login: bool = False
    debug: bool = False

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> ConsoleOptions:
        """Build options from parsed arguments, ignoring unrelated attributes."""
        known = cls.__dataclass_fields__
        values = {key: value for key, value in vars(namespace).items() if key in known}
        return cls(**values)

    def client_settings(self) -> dict[str, Any]:
        """Settings handed to the workspace client factory (unmasked)."""
        settings = {name: getattr(self, name) for name in _CLIENT_SETTING_FIELDS}
        return {key: value for key, value in settings.items() if value is not None}

    def as_config_dict(self) -> dict[str, Any]:
        """All options for display, with secrets masked."""
        data = asdict(self)
        for name in _SECRET_FIELDS:
            if data.get(name):
                data[name] = _MASK
        return data


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    return value or None


def add_option_arguments(
    parser: argparse.ArgumentParser,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Register every :class:`ConsoleOptions` field on *parser*."""
    env = os.environ if environ is None else environ

    client = parser.add_argument_group("workspace client")
    client.add_argument(
        "--client-factory",
        default=_env(env, "WORKSPACE_CLIENT_FACTORY"),
        metavar="MODULE:ATTR",
        help="Callable that builds the workspace client "
        "(env: WORKSPACE_CLIENT_FACTORY).",
    )
    client.add_argument("--base-url", help="Workspace API base URL.")
    client.add_argument("--auth-base-url", help="Authentication service base URL.")
    client.add_argument(
        "--api-key",
        default=_env(env, "WORKSPACE_API_KEY"),
        help="API key (env: WORKSPACE_API_KEY).",
    )
    client.add_argument(
        "--debug",
        action="store_true",
        help="Enable client debug output at start-up.",
    )

    credentials = parser.add_argument_group("credentials")
    credentials.add_argument("--username")
    credentials.add_argument(
        "--password",
        default=_env(env, "WORKSPACE_PASSWORD"),
        help="env: WORKSPACE_PASSWORD",
    )
    credentials.add_argument("--client-id")
    credentials.add_argument(
        "--client-secret",
        default=_env(env, "WORKSPACE_CLIENT_SECRET"),
        help="env: WORKSPACE_CLIENT_SECRET",
    )
    credentials.add_argument(
        "--token",
        default=_env(env, "WORKSPACE_TOKEN"),
        help="Pre-issued access token; skips authentication "
        "(env: WORKSPACE_TOKEN).",
    )

    defaults = parser.add_argument_group("agent defaults")
    defaults.add_argument("--default-agent-id", help="Agent id used by activate-channels.")
    defaults.add_argument("--default-dn", help="DN used by activate-channels.")
    defaults.add_argument("--default-destination", help="Destination used by make-call.")
    defaults.add_argument(
        "--auto-login",
        action="store_true",
        help="Initialize and activate channels on start-up.",
    )
