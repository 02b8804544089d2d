"""In-memory info sources - sync and async.

Replay captured responses, keyed by node then by command. Useful for
offline analysis of collected cluster snapshots and for tests.
"""

from __future__ import annotations

from collections.abc import Mapping

from stat_merge.core.exceptions import SourceError


class StaticInfoSource:
    """Synchronous info source backed by a node -> command -> response map."""

    def __init__(self, responses: Mapping[str, Mapping[str, str]]) -> None:
        self._responses = {node: dict(commands) for node, commands in responses.items()}

    def nodes(self) -> list[str]:
        """Node names in insertion order."""
        return list(self._responses)

    def request(self, node: str, command: str) -> str | None:
        """Return the captured response, or None if the command was not captured."""
        try:
            commands = self._responses[node]
        except KeyError:
            raise SourceError(f"Unknown node: '{node}'") from None
        return commands.get(command)


class AsyncStaticInfoSource:
    """Asynchronous variant of StaticInfoSource."""

    def __init__(self, responses: Mapping[str, Mapping[str, str]]) -> None:
        self._source = StaticInfoSource(responses)

    def nodes(self) -> list[str]:
        """Node names in insertion order."""
        return self._source.nodes()

    async def request_async(self, node: str, command: str) -> str | None:
        """Return the captured response, or None if the command was not captured."""
        return self._source.request(node, command)
