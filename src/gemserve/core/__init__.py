"""Request resolution core.

Maps Gemini request paths onto files under a content root.
"""

from .mime import ContentTypes
from .resolver import Resolver
from .types import Request, Response, Status, URLPath

__all__ = [
    "ContentTypes",
    "Request",
    "Resolver",
    "Response",
    "Status",
    "URLPath",
]
