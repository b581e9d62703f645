"""Workspace session — the console's single owned handle on the client.

The session wraps one :class:`~workspace_console.core.protocols.WorkspaceClient`
for the lifetime of the process and tracks an explicit lifecycle::

    UNINITIALIZED ──initialize──▶ INITIALIZED ──destroy──▶ DESTROYED
                                      ▲                        │
                                      └──────initialize────────┘

Guarantees
----------
* No ``print()`` — progress is reported through an optional callback.
* Client errors propagate unchanged; the console reports them verbatim.
* Commands issued before initialization are *not* rejected here; the
  client decides whether they are valid.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any

from workspace_console.core.models import Call, User
from workspace_console.core.parsing import parse_calls, parse_user
from workspace_console.core.protocols import (
    CALL_STATE_CHANGED,
    DN_STATE_CHANGED,
    EventHandler,
    TargetsApi,
    VoiceApi,
    WorkspaceClient,
)


class SessionState(enum.Enum):
    """Lifecycle of a :class:`WorkspaceSession`."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DESTROYED = "destroyed"


class WorkspaceSession:
    """Owns the workspace client and its lifecycle.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`WorkspaceClient` protocol.
    token:
        Pre-issued access token.  When set, :meth:`initialize` skips
        :meth:`WorkspaceClient.authenticate`.
    """

    def __init__(self, client: WorkspaceClient, *, token: str | None = None) -> None:
        self._client: WorkspaceClient = client
        self._token: str | None = token
        self._state: SessionState = SessionState.UNINITIALIZED
        self._subscribed: bool = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def client(self) -> WorkspaceClient:
        return self._client

    @property
    def voice(self) -> VoiceApi:
        return self._client.voice

    @property
    def targets(self) -> TargetsApi:
        return self._client.targets

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(
        self,
        *,
        progress_callback: Callable[[str], None] | None = None,
    ) -> None:
        """Authenticate (unless a token was supplied) and initialize the client."""
        token = self._token
        if not token:
            if progress_callback is not None:
                progress_callback("Authenticating...")
            token = await self._client.authenticate()

        if progress_callback is not None:
            progress_callback("Initializing api...")
        await self._client.initialize(token=token)
        self._state = SessionState.INITIALIZED

    async def destroy(self) -> bool:
        """Tear the client session down once.

        A session this object already destroyed is never destroyed again,
        even if the client still reports itself initialized.  Otherwise
        the client's ``initialized`` flag decides, so a client brought up
        outside this session is still cleaned up.

        Returns ``True`` when the client was actually asked to destroy
        the session, ``False`` when there was nothing to tear down.
        """
        if self._state is SessionState.DESTROYED or not self._client.initialized:
            return False
        await self._client.destroy()
        self._state = SessionState.DESTROYED
        return True

    async def activate_channels(self, agent_id: str, dn: str) -> None:
        await self._client.activate_channels(agent_id, dn)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, on_call_state: EventHandler, on_dn_state: EventHandler) -> None:
        """Register the two push-event handlers.

        Handlers are registered at most once per session; later calls
        are ignored.
        """
        if self._subscribed:
            return
        self._client.on(CALL_STATE_CHANGED, on_call_state)
        self._client.on(DN_STATE_CHANGED, on_dn_state)
        self._subscribed = True

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------

    def toggle_debug(self) -> bool:
        """Flip the client's debug flag and return the new value."""
        self._client.set_debug_enabled(not self._client.is_debug_enabled())
        return self._client.is_debug_enabled()

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------

    def raw_calls(self) -> list[Mapping[str, Any]]:
        """Return the client's active-call mappings, in arrival order."""
        return list(self._client.voice.calls.values())

    def active_calls(self) -> list[Call]:
        return parse_calls(self.raw_calls())

    def raw_dn(self) -> Mapping[str, Any] | None:
        return self._client.voice.dn

    def user(self) -> User | None:
        raw = self._client.user
        return parse_user(raw) if raw else None
