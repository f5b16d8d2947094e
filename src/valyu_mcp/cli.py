"""Valyu MCP server commands."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from valyu_mcp.config import ServerConfig
from valyu_mcp.credentials import APICredential
from valyu_mcp.errors import ConfigurationError
from valyu_mcp.server import MCPServer
from valyu_mcp.tools import TOOL_REGISTRY

app = typer.Typer(help="Valyu MCP server")
# stdout is reserved for the stdio transport
console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def start(
    transport: str = typer.Option(None, help="Transport: stdio or sse (overrides config)"),
    host: str = typer.Option(None, help="Server host (SSE only, overrides config)"),
    port: int = typer.Option(None, help="Server port (SSE only, overrides config)"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML settings file"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
):
    """
    Start the MCP server.

    Requires the VALYU_API_KEY environment variable.

    Examples:
        # Serve over stdin/stdout (for Claude Desktop, Cursor, ...)
        valyu-mcp start

        # Serve over SSE
        valyu-mcp start --transport sse --host 0.0.0.0 --port 8000
    """
    _setup_logging(log_level)

    try:
        config = ServerConfig.load(config_file)

        if transport is not None:
            config.transport = transport
        if host is not None:
            config.host = host
        if port is not None:
            config.port = port

        credential = APICredential.from_env()
        server = MCPServer.from_config(config, credential)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    if config.transport == "sse":
        console.print(f"Listening on {config.host}:{config.port}")

    try:
        server.start()
    except RuntimeError as e:
        console.print(f"[red]Failed to start server:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
        raise typer.Exit(0)


@app.command()
def tools():
    """List the tools exposed by the server."""
    table = Table(title="Valyu MCP Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for descriptor in TOOL_REGISTRY.list_tools():
        table.add_row(
            descriptor.name,
            descriptor.description,
            ", ".join(descriptor.input_schema.get("required", [])),
        )

    console.print(table)
