"""urlshort - redirect mapped request paths, delegate everything else."""

from urlshort.core import (
    ConfigParseError,
    InvalidConstructionError,
    PathResolver,
    map_handler,
    parse_yaml,
    yaml_handler,
)

__all__ = [
    "ConfigParseError",
    "InvalidConstructionError",
    "PathResolver",
    "map_handler",
    "parse_yaml",
    "yaml_handler",
]
