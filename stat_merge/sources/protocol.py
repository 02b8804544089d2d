"""Info source protocols.

An info source knows the cluster's nodes and returns each node's raw
response to an info command. Connection handling, authentication,
timeouts and retries all live behind these protocols.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class InfoSource(Protocol):
    """Synchronous info source protocol."""

    def nodes(self) -> Sequence[str]:
        """Names of the nodes to query."""
        ...

    def request(self, node: str, command: str) -> str | None:
        """Raw response of ``node`` to ``command``, or None if it did not answer."""
        ...


@runtime_checkable
class AsyncInfoSource(Protocol):
    """Asynchronous info source protocol."""

    def nodes(self) -> Sequence[str]:
        """Names of the nodes to query."""
        ...

    async def request_async(self, node: str, command: str) -> str | None:
        """Raw response of ``node`` to ``command``, or None if it did not answer."""
        ...
