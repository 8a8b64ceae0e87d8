"""aiohttp preview server for gemserve.

Application factory and route registration for browsing the content
root over HTTP with the same resolution rules as the Gemini server.
"""

import logging

from aiohttp import web

from gemserve.api.documents import create_document_routes
from gemserve.app_keys import config_key, resolver_key
from gemserve.config import Config
from gemserve.core.mime import ContentTypes
from gemserve.core.resolver import Resolver

logger = logging.getLogger(__name__)


def create_app(config: Config, *, content_types: ContentTypes | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        content_types: Extension lookup shared by all requests

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[config_key] = config
    app[resolver_key] = Resolver(config.content, content_types=content_types)

    app.router.add_routes(create_document_routes())

    return app


def run_server(config: Config) -> None:
    """Run the preview server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Previewing {config.content.root_dir} on {config.preview.host}:{config.preview.port}")
    web.run_app(app, host=config.preview.host, port=config.preview.port)
