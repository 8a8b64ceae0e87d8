"""Application keys for type-safe app configuration access."""

from aiohttp import web

from gemserve.config import Config
from gemserve.core.resolver import Resolver

config_key = web.AppKey("config", Config)
resolver_key = web.AppKey("resolver", Resolver)
