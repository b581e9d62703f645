"""Operator command-line tokenizer."""

from __future__ import annotations

from workspace_console.core.models import ParsedCommand


def parse_input(line: str | None) -> ParsedCommand | None:
    """Split *line* on whitespace into a command name and its arguments.

    The name is lower-cased; arguments keep their case.  Returns ``None``
    for ``None``, empty or whitespace-only input.
    """
    if not line:
        return None
    tokens = line.split()
    if not tokens:
        return None
    return ParsedCommand(name=tokens[0].lower(), args=tuple(tokens[1:]))
