"""Core type definitions."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import NewType

# Literal request path used as the lookup key (e.g., "/urlshort")
# Matched exactly: no decoding, no trailing-slash folding
URLPath = NewType("URLPath", str)

# Redirect target, forwarded as-is in the Location header
Destination = NewType("Destination", str)

PathMapping = Mapping[URLPath, Destination]


@dataclass(frozen=True)
class PathUrl:
    """Single redirect record from configuration."""

    path: str = ""
    url: str = ""

    def is_usable(self) -> bool:
        """Return True when both fields are non-empty."""
        return bool(self.path) and bool(self.url)


def freeze_mapping(entries: Mapping[str, str]) -> PathMapping:
    """Copy entries into a read-only mapping.

    Args:
        entries: Path to destination pairs

    Returns:
        Read-only view over a private copy of the entries
    """
    frozen = {URLPath(path): Destination(url) for path, url in entries.items()}
    return MappingProxyType(frozen)
