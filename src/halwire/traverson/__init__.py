"""Sequential traversal of HAL resources over a pluggable link resolver."""

from .config import ResolverConfig, load_env_config
from .resolvers import HttpxLinkResolver, LinkResolutionError, httpx_link_resolver
from .traverson import (
    LinkResolver,
    PageHandler,
    Traverson,
    embedded_type_info_for,
    traverson,
)

__all__ = [
    "Traverson",
    "traverson",
    "LinkResolver",
    "PageHandler",
    "embedded_type_info_for",
    # HTTP
    "HttpxLinkResolver",
    "httpx_link_resolver",
    "LinkResolutionError",
    "ResolverConfig",
    "load_env_config",
]
