"""Shared test fixtures."""

from pathlib import Path

import pytest
from gemserve.config import Config, PreviewConfig, ResolverConfig, ServerConfig
from gemserve.core.resolver import Resolver


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create an empty content root."""
    root = tmp_path / "capsule"
    root.mkdir()
    return root


@pytest.fixture
def resolver_config(content_dir: Path) -> ResolverConfig:
    return ResolverConfig(root_dir=content_dir, default_file="index", extension=".gem")


@pytest.fixture
def resolver(resolver_config: ResolverConfig) -> Resolver:
    return Resolver(resolver_config)


@pytest.fixture
def test_config(tmp_path: Path, resolver_config: ResolverConfig) -> Config:
    """Create a test configuration rooted at the content_dir fixture."""
    return Config(
        server=ServerConfig(
            cert_file=tmp_path / "server.cert",
            key_file=tmp_path / "server.key",
        ),
        content=resolver_config,
        preview=PreviewConfig(),
    )
