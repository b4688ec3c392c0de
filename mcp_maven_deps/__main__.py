"""Command-line entry point: pick a transport and serve the MCP tools.

Without --host/--port the server speaks MCP over stdio; giving either one
switches to the HTTP transport.
"""

from __future__ import annotations

from typing import Optional

import click

from . import __version__
from .config import Settings
from .logging_config import configure_logging


def select_transport(settings: Settings, host: Optional[str], port: Optional[int]) -> str:
    """Return "http" when an address was requested, else the configured default."""
    if host is not None or port is not None:
        return "http"
    return settings.TRANSPORT


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--host", default=None, help="Serve over HTTP on this interface.")
@click.option(
    "--port", type=click.IntRange(1, 65535), default=None, help="Serve over HTTP on this port."
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL.",
)
@click.option("--log-json/--no-log-json", default=None, help="Override LOG_JSON.")
@click.version_option(__version__, prog_name="mcp-maven-deps")
def main(
    host: Optional[str],
    port: Optional[int],
    log_level: Optional[str],
    log_json: Optional[bool],
) -> None:
    """Maven Central dependency lookup tools over MCP."""
    settings = Settings()
    configure_logging(
        log_level or settings.LOG_LEVEL,
        json_logs=settings.LOG_JSON if log_json is None else log_json,
    )

    # Imported late so logging is configured before FastMCP sets itself up
    from .server import run

    run(select_transport(settings, host, port), host=host, port=port)


if __name__ == "__main__":  # pragma: no cover
    main()
