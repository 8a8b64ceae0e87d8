"""Request URL parsing.

Turns the raw request target into a percent-decoded path. Anything that
cannot be parsed unambiguously is rejected with BadURLError.
"""

import re
from urllib.parse import unquote, urlsplit

from gemserve.core.types import URLPath

_INVALID_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class BadURLError(ValueError):
    """Raised when a request URL cannot be parsed."""


def parse_request_path(url: str) -> URLPath:
    """Extract the decoded path from a request URL.

    Accepts absolute URLs ("gemini://host/docs/?q") and bare paths
    ("/docs/"). Query and fragment are dropped.

    Args:
        url: Raw request target

    Returns:
        Percent-decoded path, possibly empty

    Raises:
        BadURLError: If the URL is malformed
    """
    if _INVALID_CHARS.search(url):
        raise BadURLError(f"invalid character in URL: {url!r}")

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise BadURLError(f"unparsable URL {url!r}: {e}") from e

    if _BAD_ESCAPE.search(parts.path):
        raise BadURLError(f"invalid percent-encoding in {parts.path!r}")

    try:
        path = unquote(parts.path, errors="strict")
    except UnicodeDecodeError as e:
        raise BadURLError(f"path is not valid UTF-8: {parts.path!r}") from e

    if "\x00" in path:
        raise BadURLError(f"NUL byte in path {parts.path!r}")

    return URLPath(path)
