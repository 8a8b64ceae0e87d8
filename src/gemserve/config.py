"""Configuration management for gemserve.

Supports TOML configuration format with auto-discovery.
"""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "gemserve.toml"


def _has_separator(name: str) -> bool:
    return "/" in name or os.sep in name or (os.altsep is not None and os.altsep in name)


@dataclass(frozen=True)
class ServerConfig:
    """Gemini listener configuration."""

    address: str = "127.0.0.1:1965"
    cert_file: Path = field(default_factory=lambda: Path("server.cert"))
    key_file: Path = field(default_factory=lambda: Path("server.key"))


@dataclass(frozen=True)
class ResolverConfig:
    """Content resolution configuration.

    Attributes:
        root_dir: Directory requests are resolved against
        default_file: Index basename served for directories, without extension
        extension: Implicit extension for extensionless requests
    """

    root_dir: Path = field(default_factory=lambda: Path("."))
    default_file: str = "index"
    extension: str = ".gem"

    def __post_init__(self) -> None:
        if not str(self.root_dir):
            raise ValueError("content.root_dir must not be empty")
        if not self.default_file:
            raise ValueError("content.default_file must not be empty")
        if _has_separator(self.default_file) or self.default_file in (".", ".."):
            raise ValueError("content.default_file must be a plain file name")
        if not self.extension.startswith(".") or len(self.extension) < 2:
            raise ValueError("content.extension must start with '.'")
        if _has_separator(self.extension):
            raise ValueError("content.extension must not contain path separators")

    @property
    def index_name(self) -> str:
        """Directory index filename (e.g., "index.gem")."""
        return f"{self.default_file}{self.extension}"


@dataclass(frozen=True)
class PreviewConfig:
    """HTTP preview server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ResolverConfig
    preview: PreviewConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for gemserve.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            server=ServerConfig(),
            content=ResolverConfig(),
            preview=PreviewConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server"), config_dir),
            content=cls._parse_content(data.get("content"), config_dir),
            preview=cls._parse_preview(data.get("preview")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object, config_dir: Path) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig(
                cert_file=config_dir / "server.cert",
                key_file=config_dir / "server.key",
            )

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        address = data.get("address", "127.0.0.1:1965")
        if not isinstance(address, str):
            raise ValueError("server.address must be a string")

        cert_file = data.get("cert_file", "server.cert")
        if not isinstance(cert_file, str):
            raise ValueError("server.cert_file must be a string")

        key_file = data.get("key_file", "server.key")
        if not isinstance(key_file, str):
            raise ValueError("server.key_file must be a string")

        return ServerConfig(
            address=address,
            cert_file=config_dir / cert_file,
            key_file=config_dir / key_file,
        )

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ResolverConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ResolverConfig instance
        """
        if data is None:
            return ResolverConfig(root_dir=config_dir)

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        root_dir = data.get("root_dir", ".")
        if not isinstance(root_dir, str) or not root_dir:
            raise ValueError("content.root_dir must be a non-empty string")

        default_file = data.get("default_file", "index")
        if not isinstance(default_file, str):
            raise ValueError("content.default_file must be a string")

        extension = data.get("extension", ".gem")
        if not isinstance(extension, str):
            raise ValueError("content.extension must be a string")

        return ResolverConfig(
            root_dir=config_dir / root_dir,
            default_file=default_file,
            extension=extension,
        )

    @classmethod
    def _parse_preview(cls, data: object) -> PreviewConfig:
        """Parse preview configuration section."""
        if data is None:
            return PreviewConfig()

        if not isinstance(data, dict):
            raise ValueError("preview section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("preview.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("preview.port must be an integer")

        return PreviewConfig(host=host, port=port)

    def with_overrides(
        self,
        *,
        root_dir: Path | None = None,
        default_file: str | None = None,
        extension: str | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            root_dir: Override content.root_dir
            default_file: Override content.default_file
            extension: Override content.extension
            host: Override preview.host
            port: Override preview.port

        Returns:
            New Config instance with overrides applied

        Raises:
            ValueError: If an override breaks a content invariant
        """
        content = self.content
        if root_dir is not None or default_file is not None or extension is not None:
            content = replace(
                self.content,
                root_dir=root_dir if root_dir is not None else self.content.root_dir,
                default_file=(
                    default_file if default_file is not None else self.content.default_file
                ),
                extension=extension if extension is not None else self.content.extension,
            )

        preview = self.preview
        if host is not None or port is not None:
            preview = replace(
                self.preview,
                host=host if host is not None else self.preview.host,
                port=port if port is not None else self.preview.port,
            )

        return replace(self, content=content, preview=preview)
