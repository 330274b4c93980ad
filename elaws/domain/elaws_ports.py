"""
e-Gov Law API Ports (Interfaces)

Ports define the contract the client needs from its collaborators.
These are Protocol classes following the Ports & Adapters pattern.
Implementations live in the infrastructure layer.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class FetchResult(Protocol):
    """Outcome of one HTTP round trip."""

    @property
    def ok(self) -> bool:
        ...

    @property
    def content(self) -> bytes:
        ...

    @property
    def text(self) -> str:
        ...


@runtime_checkable
class FetcherPort(Protocol):
    """
    Transport port.

    Takes a URL and returns the response body plus an ok/not-ok signal.
    Non-ok responses are returned, not raised; the client decides.
    """

    async def fetch(self, url: str) -> FetchResult:
        """Issue a GET request for url."""
        ...
