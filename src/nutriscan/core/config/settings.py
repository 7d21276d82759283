"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """NutriScan scoring server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Server
    # Loopback by default; there is no auth layer in front of the tools.
    nutriscan_host: str = "127.0.0.1"
    nutriscan_port: int = 8003
    nutriscan_log_level: str = "info"
    nutriscan_allow_insecure_bind: bool = False
    # "streamable-http" or "stdio"; stdio never binds a socket
    nutriscan_transport: str = "streamable-http"

    # Rule catalogs (empty = catalogs bundled with the package)
    catalog_dir: str = ""


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
