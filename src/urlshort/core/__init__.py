"""Path resolution and redirect configuration."""

from urlshort.core.loader import (
    ConfigParseError,
    build_mapping,
    parse_records,
    parse_yaml,
    usable_records,
    yaml_handler,
)
from urlshort.core.resolver import (
    REDIRECT_STATUSES,
    Handler,
    InvalidConstructionError,
    PathResolver,
    map_handler,
)
from urlshort.core.types import (
    Destination,
    PathMapping,
    PathUrl,
    URLPath,
    freeze_mapping,
)

__all__ = [
    "REDIRECT_STATUSES",
    "ConfigParseError",
    "Destination",
    "Handler",
    "InvalidConstructionError",
    "PathMapping",
    "PathResolver",
    "PathUrl",
    "URLPath",
    "build_mapping",
    "freeze_mapping",
    "map_handler",
    "parse_records",
    "parse_yaml",
    "usable_records",
    "yaml_handler",
]
