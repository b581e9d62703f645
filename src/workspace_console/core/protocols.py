"""Protocols (interfaces) consumed by the core and CLI layers.

The workspace client library is an external collaborator.  These
protocols describe the subset of its surface the console drives; any
object with matching attributes satisfies them structurally (no
explicit inheritance required).

Entities (calls, the DN, the user profile, push-event messages) are
exchanged as JSON-like mappings keyed by their wire field names.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

EventHandler = Callable[[Mapping[str, Any]], None]
"""Callback invoked by the client with one push-event message."""

CALL_STATE_CHANGED: str = "CallStateChanged"
DN_STATE_CHANGED: str = "DnStateChanged"


class VoiceApi(Protocol):
    """Voice channel: agent state and call control.

    Every coroutine is a single request to the workspace service.  The
    client is the sole judge of success; failures surface as raised
    exceptions, which the console reports verbatim.
    """

    calls: Mapping[str, Mapping[str, Any]]
    """Active calls keyed by connection id, in arrival order."""

    dn: Mapping[str, Any] | None
    """Current DN state, or ``None`` before channels are activated."""

    # --- agent state -------------------------------------------------------

    async def ready(self) -> Any: ...  # pragma: no cover

    async def not_ready(
        self,
        *,
        reason_code: str | None = None,
        work_mode: str | None = None,
    ) -> Any: ...  # pragma: no cover

    async def dnd_on(self) -> Any: ...  # pragma: no cover

    async def dnd_off(self) -> Any: ...  # pragma: no cover

    async def set_forward(self, destination: str) -> Any: ...  # pragma: no cover

    async def cancel_forward(self) -> Any: ...  # pragma: no cover

    async def login(self) -> Any: ...  # pragma: no cover

    async def logout(self) -> Any: ...  # pragma: no cover

    # --- single call -------------------------------------------------------

    async def make_call(self, destination: str) -> Any: ...  # pragma: no cover

    async def answer_call(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def hold_call(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def retrieve_call(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def release_call(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def clear_call(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def redirect_call(self, conn_id: str, destination: str) -> Any: ...  # pragma: no cover

    # --- multi-party -------------------------------------------------------

    async def initiate_conference(self, conn_id: str, destination: str) -> Any: ...  # pragma: no cover

    async def complete_conference(self, conn_id: str, parent_conn_id: str) -> Any: ...  # pragma: no cover

    async def initiate_transfer(self, conn_id: str, destination: str) -> Any: ...  # pragma: no cover

    async def complete_transfer(self, conn_id: str, parent_conn_id: str) -> Any: ...  # pragma: no cover

    async def single_step_transfer(self, conn_id: str, destination: str) -> Any: ...  # pragma: no cover

    async def single_step_conference(self, conn_id: str, destination: str) -> Any: ...  # pragma: no cover

    async def delete_from_conference(self, conn_id: str, dn_to_drop: str) -> Any: ...  # pragma: no cover

    async def alternate_calls(self, conn_id: str, held_conn_id: str) -> Any: ...  # pragma: no cover

    async def merge_calls(self, conn_id: str, other_conn_id: str) -> Any: ...  # pragma: no cover

    async def reconnect_call(self, conn_id: str, held_conn_id: str) -> Any: ...  # pragma: no cover

    # --- call metadata -----------------------------------------------------

    async def attach_user_data(
        self, conn_id: str, user_data: list[dict[str, str]],
    ) -> Any: ...  # pragma: no cover

    async def update_user_data(
        self, conn_id: str, user_data: list[dict[str, str]],
    ) -> Any: ...  # pragma: no cover

    async def delete_user_data_pair(self, conn_id: str, key: str) -> Any: ...  # pragma: no cover

    async def send_dtmf(self, conn_id: str, digits: str) -> Any: ...  # pragma: no cover

    async def start_recording(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def pause_recording(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def resume_recording(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def stop_recording(self, conn_id: str) -> Any: ...  # pragma: no cover

    async def send_user_event(
        self,
        user_data: list[dict[str, str]],
        *,
        call_uuid: str | None = None,
    ) -> Any: ...  # pragma: no cover


class TargetsApi(Protocol):
    """Directory search."""

    async def search(self, search_term: str, limit: int | None = None) -> Any:
        """Return raw, JSON-serialisable search results."""
        ...  # pragma: no cover


class WorkspaceClient(Protocol):
    """Top-level handle on an authenticated workspace session.

    The console holds exactly one of these for its whole lifetime.
    """

    initialized: bool
    user: Mapping[str, Any] | None
    voice: VoiceApi
    targets: TargetsApi

    async def authenticate(self) -> str:
        """Exchange the configured credentials for an access token."""
        ...  # pragma: no cover

    async def initialize(self, *, token: str) -> Any: ...  # pragma: no cover

    async def destroy(self) -> Any: ...  # pragma: no cover

    async def activate_channels(self, agent_id: str, dn: str) -> Any: ...  # pragma: no cover

    def on(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe *handler* to push events named *event_name*."""
        ...  # pragma: no cover

    def is_debug_enabled(self) -> bool: ...  # pragma: no cover

    def set_debug_enabled(self, enabled: bool) -> None: ...  # pragma: no cover


class LineReader(Protocol):
    """Source of operator command lines."""

    async def read_line(self, prompt: str) -> str:
        """Return the next line typed by the operator.

        Raises
        ------
        EOFError
            When the input stream has ended or was closed.
        """
        ...  # pragma: no cover

    def close(self) -> None:
        """Close the input stream; later reads raise ``EOFError``."""
        ...  # pragma: no cover
