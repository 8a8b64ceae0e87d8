"""Content-type lookup by file extension.

Uses a private mimetypes registry so gemtext registrations do not leak
into the process-wide mimetypes module.
"""

import mimetypes

GEMINI_CONTENT_TYPE = "text/gemini; charset=utf-8"
GEMINI_EXTENSIONS = (".gem", ".gemini", ".gmi")
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def extension_of(path: str) -> str:
    """Return the last dot-suffix of the final path segment.

    "post.gem" -> ".gem", "archive.tar.gz" -> ".gz", ".hidden" -> ".hidden",
    "post" -> "".
    """
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot:]


def with_charset(content_type: str) -> str:
    """Add "; charset=utf-8" to text types that carry no charset."""
    if content_type.startswith("text/") and "charset=" not in content_type:
        return f"{content_type}; charset=utf-8"
    return content_type


class ContentTypes:
    """Extension to content-type registry seeded for gemtext.

    Text types without an explicit charset are reported as UTF-8.
    """

    def __init__(self, *, default: str = DEFAULT_CONTENT_TYPE) -> None:
        self._types = mimetypes.MimeTypes()
        self._default = default
        for extension in GEMINI_EXTENSIONS:
            self.register(extension, GEMINI_CONTENT_TYPE)

    def register(self, extension: str, content_type: str) -> None:
        """Map an extension (with leading dot) to a content type."""
        if not extension.startswith("."):
            raise ValueError(f"extension must start with '.': {extension!r}")
        self._types.add_type(with_charset(content_type), extension.lower())

    def lookup(self, extension: str) -> str:
        """Return the content type for an extension, or the default."""
        if not extension:
            return self._default
        content_type, _ = self._types.guess_type(f"file{extension.lower()}", strict=False)
        if content_type is None:
            return self._default
        return with_charset(content_type)

    def content_type_for(self, path: str) -> str:
        """Return the content type for a path, based on its extension."""
        return self.lookup(extension_of(path))
