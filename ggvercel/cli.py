"""Command-line entry point: ``ggvercel serve``."""

from __future__ import annotations

import logging
import sys

import click
import uvicorn
from dotenv import load_dotenv

from ggvercel.api.main import DASHBOARD_PATH, MCP_PATH, create_app
from ggvercel.config import Settings
from ggvercel.errors import ConfigurationError

logger = logging.getLogger("ggvercel")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx: click.Context) -> None:
    """GGVercel MCP server and AI dashboard."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@main.command()
@click.option("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Port to listen on (default: $PORT or 3000).")
def serve(host: str | None, port: int | None) -> None:
    """Start the HTTP server."""
    load_dotenv()
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    updates = {key: value for key, value in {"host": host, "port": port}.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)

    configure_logging(settings.log_level)
    app = create_app(settings)

    base_url = f"http://localhost:{settings.port}"
    logger.info("🚀 MCP Server running at %s", base_url)
    logger.info("📡 MCP endpoint: %s%s", base_url, MCP_PATH)
    logger.info("📊 Dashboard: %s%s", base_url, DASHBOARD_PATH)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
