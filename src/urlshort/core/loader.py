"""YAML redirect configuration.

Expected document shape:

    - path: /some-path
      url: https://www.some-url.com/demo
    - path: /another
      url: https://www.some-url.com/other

Field names are exactly ``path`` and ``url``. Unknown keys are ignored and
absent or null fields become empty strings. When a path appears more than
once, the later record wins.
"""

import logging
from collections.abc import Iterable

import yaml

from urlshort.core.resolver import Handler, PathResolver, map_handler
from urlshort.core.types import Destination, PathUrl, URLPath

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("path", "url")


class ConfigParseError(ValueError):
    """Redirect configuration bytes are not a well-formed record list."""


def parse_records(data: bytes) -> list[PathUrl]:
    """Deserialize YAML bytes into redirect records in source order.

    Args:
        data: Raw YAML document

    Returns:
        Records in the order they appear in the document

    Raises:
        ConfigParseError: If the bytes are not valid YAML or the document is
            not a list of path/url records
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML: {e}") from e

    if document is None:
        return []
    if not isinstance(document, list):
        raise ConfigParseError(
            f"Expected a list of records, got {type(document).__name__}",
        )

    return [_parse_record(index, item) for index, item in enumerate(document)]


def _parse_record(index: int, item: object) -> PathUrl:
    if not isinstance(item, dict):
        raise ConfigParseError(
            f"Record {index} must be a mapping, got {type(item).__name__}",
        )

    values: dict[str, str] = {}
    for name in RECORD_FIELDS:
        value = item.get(name)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ConfigParseError(
                f"Record {index}: '{name}' must be a string, got {type(value).__name__}",
            )
        values[name] = value

    return PathUrl(path=values["path"], url=values["url"])


def build_mapping(records: Iterable[PathUrl]) -> dict[URLPath, Destination]:
    """Fold records into a mapping, later records overwriting earlier ones."""
    mapping: dict[URLPath, Destination] = {}
    for record in records:
        path = URLPath(record.path)
        if path in mapping:
            logger.debug(
                f"Duplicate path {path}: {mapping[path]} replaced by {record.url}",
            )
        mapping[path] = Destination(record.url)
    return mapping


def usable_records(records: Iterable[PathUrl], source: str = "redirects") -> list[PathUrl]:
    """Drop records with an empty path or url, logging each one skipped.

    Args:
        records: Parsed records in source order
        source: Label naming where the records came from, for log messages

    Returns:
        Records that can be turned into redirects, in source order
    """
    usable: list[PathUrl] = []
    for record in records:
        if not record.is_usable():
            logger.warning(
                f"Skipping redirect with empty path or url in {source}: "
                f"{record.path!r} -> {record.url!r}",
            )
            continue
        usable.append(record)
    return usable


def parse_yaml(data: bytes) -> dict[URLPath, Destination]:
    """Parse YAML bytes into a path to destination mapping.

    Empty ``path`` or ``url`` values are kept; callers decide whether such
    entries are usable.

    Raises:
        ConfigParseError: If the document is malformed
    """
    return build_mapping(parse_records(data))


def yaml_handler(
    data: bytes,
    fallback: Handler,
    *,
    redirect_status: int = 302,
) -> PathResolver:
    """Parse YAML bytes and build a resolver over the result.

    Records with an empty path or url are skipped. No resolver is built when
    parsing fails.

    Args:
        data: Raw YAML document
        fallback: Handler for paths that are not in the document
        redirect_status: Redirection status code used on a match

    Returns:
        Request handler for the parsed mapping

    Raises:
        ConfigParseError: If the document is malformed
    """
    mapping = build_mapping(usable_records(parse_records(data)))
    return map_handler(mapping, fallback, redirect_status=redirect_status)
