"""NutriScan server entry point: ``nutriscan-server`` or ``python -m nutriscan.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from nutriscan.core.config.settings import Settings, get_settings
from nutriscan.core.server.app import create_app

logger = logging.getLogger(__name__)

TRANSPORTS = ("streamable-http", "stdio")


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_bind(settings: Settings) -> None:
    """Reject unknown transports and unauthenticated non-loopback HTTP binds."""
    if settings.nutriscan_transport not in TRANSPORTS:
        raise ValueError(
            f"Unknown transport {settings.nutriscan_transport!r}; expected one of {TRANSPORTS}"
        )
    if settings.nutriscan_transport == "stdio":
        return
    if not settings.nutriscan_allow_insecure_bind and not _is_loopback_host(settings.nutriscan_host):
        raise RuntimeError(
            f"Refusing to expose the scoring tools on {settings.nutriscan_host}: there is no "
            "auth layer. Set NUTRISCAN_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )


def run() -> None:
    """Validate settings, build the server and serve it on the configured transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.nutriscan_log_level.upper(), logging.INFO))
    check_bind(settings)

    server = create_app()
    if settings.nutriscan_transport == "stdio":
        logger.info("Serving NutriScan scoring tools over stdio")
        server.run(transport="stdio")
        return

    logger.info(
        "Serving NutriScan scoring tools on http://%s:%d",
        settings.nutriscan_host,
        settings.nutriscan_port,
    )
    server.run(
        transport="streamable-http",
        host=settings.nutriscan_host,
        port=settings.nutriscan_port,
    )


if __name__ == "__main__":
    run()
