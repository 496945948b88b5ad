"""aiohttp server for urlshort.

Application factory and resolver chain wiring for standalone server mode.
"""

import logging
from pathlib import Path

from aiohttp import web

from urlshort.app_keys import config_key, resolver_key
from urlshort.config import Config
from urlshort.core.loader import build_mapping, parse_records, usable_records
from urlshort.core.resolver import Handler, PathResolver, map_handler
from urlshort.core.types import Destination, URLPath

logger = logging.getLogger(__name__)


async def default_fallback(request: web.Request) -> web.Response:
    """Respond with JSON 404 for paths no resolver claimed."""
    return web.json_response(
        {"error": "Not found", "path": request.path},
        status=404,
    )


def load_redirects(path: Path) -> dict[URLPath, Destination]:
    """Load a YAML redirects file, dropping unusable entries.

    Args:
        path: Path to YAML redirects file

    Returns:
        Mapping with every entry having a non-empty path and destination

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigParseError: If the file is not a valid record list
    """
    records = usable_records(parse_records(path.read_bytes()), source=str(path))
    mapping = build_mapping(records)

    logger.info(f"Loaded {len(mapping)} redirects from {path}")
    return mapping


def build_resolver(config: Config, fallback: Handler) -> PathResolver:
    """Chain the configured redirect sources in front of a fallback.

    The YAML file is consulted first, then the literal ``paths`` table, then
    the fallback.

    Args:
        config: Application configuration
        fallback: Handler for unmapped paths

    Returns:
        Outermost resolver of the chain
    """
    redirects = config.redirects
    resolver = map_handler(redirects.paths, fallback, redirect_status=redirects.status)
    if redirects.file is not None:
        resolver = map_handler(
            load_redirects(redirects.file),
            resolver,
            redirect_status=redirects.status,
        )
    return resolver


def create_app(config: Config, *, fallback: Handler | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        fallback: Handler for unmapped paths (default: JSON 404)

    Returns:
        Configured aiohttp application

    Raises:
        FileNotFoundError: If the configured redirects file doesn't exist
        ConfigParseError: If the redirects file is malformed
    """
    app = web.Application()

    resolver = build_resolver(config, fallback or default_fallback)

    app[config_key] = config
    app[resolver_key] = resolver

    # Catch-all: every method and path goes through the resolver chain
    app.router.add_route("*", "/{path:.*}", resolver.handle)

    return app


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Enable debug logging of every resolution
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(config)
    logger.info(f"Starting server on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
