"""Application keys for type-safe app configuration access."""

from aiohttp import web

from urlshort.config import Config
from urlshort.core.resolver import PathResolver

config_key = web.AppKey("config", Config)
resolver_key = web.AppKey("resolver", PathResolver)
