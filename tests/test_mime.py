"""Tests for content-type lookup."""

import mimetypes

import pytest
from gemserve.core.mime import (
    DEFAULT_CONTENT_TYPE,
    GEMINI_CONTENT_TYPE,
    ContentTypes,
    extension_of,
)


class TestExtensionOf:
    """Tests for extension_of()."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("post.gem", ".gem"),
            ("/srv/capsule/post.gmi", ".gmi"),
            ("archive.tar.gz", ".gz"),
            ("post", ""),
            ("/srv/v1.2/post", ""),
            (".hidden", ".hidden"),
            ("trailing.", "."),
        ],
    )
    def test__path__returns_last_suffix(self, path: str, expected: str) -> None:
        """Use the last dot-suffix of the final segment."""
        assert extension_of(path) == expected


class TestContentTypes:
    """Tests for ContentTypes."""

    @pytest.mark.parametrize("extension", [".gem", ".gemini", ".gmi", ".GMI"])
    def test__gemini_extensions__map_to_gemtext(self, extension: str) -> None:
        """Seed the gemtext extensions."""
        assert ContentTypes().lookup(extension) == GEMINI_CONTENT_TYPE

    def test__known_extension__uses_standard_type(self) -> None:
        """Fall through to the standard registry."""
        assert ContentTypes().lookup(".png") == "image/png"

    def test__unknown_extension__returns_default(self) -> None:
        """Return the generic type for unregistered extensions."""
        types = ContentTypes()

        assert types.lookup(".zzqq") == DEFAULT_CONTENT_TYPE
        assert types.lookup("") == DEFAULT_CONTENT_TYPE

    def test__text_types__report_utf8_charset(self) -> None:
        """Add a UTF-8 charset to text types without one."""
        types = ContentTypes()

        assert GEMINI_CONTENT_TYPE == "text/gemini; charset=utf-8"
        assert types.lookup(".txt") == "text/plain; charset=utf-8"
        assert types.lookup(".png") == "image/png"

    def test__register_text_type__adds_charset(self) -> None:
        """Apply the charset rule to registered text types."""
        types = ContentTypes()
        types.register(".zzqq", "text/x-zzqq")
        types.register(".zzlat", "text/x-zzlat; charset=latin-1")

        assert types.lookup(".zzqq") == "text/x-zzqq; charset=utf-8"
        assert types.lookup(".zzlat") == "text/x-zzlat; charset=latin-1"

    def test__custom_default__is_used(self) -> None:
        """Allow overriding the fallback type."""
        assert ContentTypes(default="text/plain").lookup(".zzqq") == "text/plain"

    def test__register__adds_mapping(self) -> None:
        """Register a new extension mapping."""
        types = ContentTypes()
        types.register(".zzqq", "application/x-zzqq")

        assert types.lookup(".zzqq") == "application/x-zzqq"

    def test__register_without_dot__raises_value_error(self) -> None:
        """Require a leading dot on registered extensions."""
        with pytest.raises(ValueError, match="must start with"):
            ContentTypes().register("gem", GEMINI_CONTENT_TYPE)

    def test__registrations__do_not_leak_globally(self) -> None:
        """Keep registrations out of the process-wide mimetypes module."""
        ContentTypes().register(".zzqq", "application/x-zzqq")

        assert mimetypes.guess_type("file.zzqq")[0] is None

    def test__content_type_for__uses_path_extension(self) -> None:
        """Look up by the extension of a path."""
        types = ContentTypes()

        assert types.content_type_for("/capsule/index.gem") == GEMINI_CONTENT_TYPE
        assert types.content_type_for("/capsule/LICENSE") == DEFAULT_CONTENT_TYPE
