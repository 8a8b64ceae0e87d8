"""Core type definitions."""

from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, NewType

# Percent-decoded request path (e.g., "/guide", "/docs/")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)


class Status(IntEnum):
    """Gemini response status codes produced by the resolver."""

    SUCCESS = 20
    TEMPORARY_FAILURE = 40
    NOT_FOUND = 51
    BAD_REQUEST = 59


@dataclass(frozen=True)
class Request:
    """Inbound request as handed over by the transport.

    Attributes:
        url: Raw request target, either a full URL or a bare path
        origin: Peer identifier, used only for logging
    """

    url: str
    origin: str = "-"


@dataclass
class Response:
    """Outcome of resolving a request.

    The body is only set for successful responses. Whoever receives the
    response owns the stream and must close it.
    """

    status: Status
    meta: str
    body: BinaryIO | None = None

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS

    def header(self) -> str:
        """Gemini response header line without the trailing CRLF."""
        return f"{int(self.status)} {self.meta}"

    def close(self) -> None:
        """Release the body stream, if any."""
        if self.body is not None:
            self.body.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
