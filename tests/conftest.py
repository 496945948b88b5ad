"""Shared test fixtures."""

from pathlib import Path

import pytest
from aiohttp import web

from urlshort.config import Config, RedirectsConfig, ServerConfig

GOPHERCISES_YAML = b"""\
- path: /urlshort
  url: https://github.com/gophercises/urlshort
- path: /urlshort-final
  url: https://github.com/gophercises/urlshort/tree/solution
"""


class RecordingFallback:
    """Fallback handler that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[web.Request] = []
        self.response = web.Response(text="fallback")

    async def __call__(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def fallback() -> RecordingFallback:
    return RecordingFallback()


@pytest.fixture
def gophercises_yaml() -> bytes:
    return GOPHERCISES_YAML


@pytest.fixture
def redirects_file(tmp_path: Path) -> Path:
    """Write the gophercises redirects to a YAML file."""
    path = tmp_path / "redirects.yaml"
    path.write_bytes(GOPHERCISES_YAML)
    return path


@pytest.fixture
def test_config(redirects_file: Path) -> Config:
    """Create a test configuration with a YAML file and literal paths.

    The literal table maps /urlshort too, so tests can check that the file wins.
    """
    return Config(
        server=ServerConfig(),
        redirects=RedirectsConfig(
            file=redirects_file,
            paths={
                "/urlshort": "https://example.com/shadowed",
                "/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort",
            },
        ),
    )
