"""Configuration management for urlshort.

Reads the server address and redirect sources from ``urlshort.toml``,
found in the working directory or one of its parents.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from urlshort.core.resolver import REDIRECT_STATUSES

CONFIG_FILENAME = "urlshort.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class RedirectsConfig:
    """Redirect sources configuration.

    Entries from ``file`` take precedence over the literal ``paths`` table.
    """

    file: Path | None = None
    status: int = 302
    paths: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    redirects: RedirectsConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for urlshort.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(server=ServerConfig(), redirects=RedirectsConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        server = cls._parse_server(data.get("server"))
        redirects = cls._parse_redirects(data.get("redirects"), path.parent)

        return cls(server=server, redirects=redirects, config_path=path)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_redirects(cls, data: object, config_dir: Path) -> RedirectsConfig:
        """Parse redirects configuration section.

        Args:
            data: Raw redirects section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            RedirectsConfig instance
        """
        if data is None:
            return RedirectsConfig()

        if not isinstance(data, dict):
            raise ValueError("redirects section must be a dictionary")

        file = data.get("file")
        if file is not None and not isinstance(file, str):
            raise ValueError("redirects.file must be a string")
        file_path = config_dir / file if file is not None else None

        status = data.get("status", 302)
        if not isinstance(status, int) or status not in REDIRECT_STATUSES:
            supported = ", ".join(str(code) for code in REDIRECT_STATUSES)
            raise ValueError(f"redirects.status must be one of {supported}")

        paths = data.get("paths", {})
        if not isinstance(paths, dict):
            raise ValueError("redirects.paths must be a table")
        for path, url in paths.items():
            if not path:
                raise ValueError("redirects.paths keys must be non-empty")
            if not isinstance(url, str):
                raise ValueError(f"redirects.paths.{path} must be a string")
            if not url:
                raise ValueError(f"redirects.paths.{path} must be a non-empty url")

        return RedirectsConfig(file=file_path, status=status, paths=dict(paths))

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        redirects_file: Path | None = None,
    ) -> "Config":
        """Create new config with explicit overrides applied.

        Args:
            host: Override server host
            port: Override server port
            redirects_file: Override YAML redirects file

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        redirects = self.redirects
        if redirects_file is not None:
            redirects = replace(self.redirects, file=redirects_file)

        return replace(self, server=server, redirects=redirects)
