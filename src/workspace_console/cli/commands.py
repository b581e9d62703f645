"""Command table — maps command names and aliases to handlers.

Every entry is a :class:`Command` exposing one capability,
:meth:`Command.execute`.  Lookup is a single dict access on the
lower-cased name, so aliases and canonical names resolve identically.
"""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass


class CommandOutcome(enum.Enum):
    """What the console loop does after a command finishes."""

    CONTINUE = "continue"
    EXIT = "exit"


Handler = Callable[[Sequence[str]], Awaitable[CommandOutcome | None]]


@dataclass(frozen=True, slots=True)
class Command:
    """One console command.

    ``usage`` is the argument synopsis shown in help and usage hints,
    e.g. ``"<id> <destination>"``.
    """

    name: str
    handler: Handler
    aliases: tuple[str, ...] = ()
    usage: str = ""

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    @property
    def usage_line(self) -> str:
        return f"Usage: {self.name} {self.usage}".rstrip()

    async def execute(self, args: Sequence[str]) -> CommandOutcome:
        """Run the handler; a ``None`` result means keep looping."""
        outcome = await self.handler(args)
        return outcome or CommandOutcome.CONTINUE


class CommandTable:
    """Ordered registry of commands keyed by every name they answer to."""

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._by_name: dict[str, Command] = {}

    def register(self, command: Command) -> Command:
        """Add *command*; a name or alias may only be claimed once."""
        for name in command.names:
            key = name.lower()
            if key in self._by_name:
                raise ValueError(f"Duplicate command name: {name!r}")
        for name in command.names:
            self._by_name[name.lower()] = command
        self._commands.append(command)
        return command

    def get(self, name: str) -> Command | None:
        return self._by_name.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)
