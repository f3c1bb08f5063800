"""CLI commands for pivxrpc.

The CLI is a thin explorer over ``PivxRpcClient``: global options pick the
config file, node URL and log level; command groups register chain and node
commands.
"""

from pathlib import Path

import typer
from rich.console import Console

from pivxrpc import __version__
from pivxrpc.cli.command_groups.chain_commands import register_chain_commands
from pivxrpc.cli.command_groups.node_commands import register_node_commands
from pivxrpc.cli.shared.runner import CliState
from pivxrpc.utils.logging import configure_logging

app = typer.Typer(
    name="pivx-rpc",
    help="pivx-rpc - typed PIVX node JSON-RPC client",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"pivx-rpc v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file (default ~/.pivxrpc/config.json)"),
    url: str | None = typer.Option(None, "--url", help="Node RPC URL, overrides the config file"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for stderr output"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also write a rotating log file"),
    json_output: bool = typer.Option(False, "--json", help="Print results and errors as JSON"),
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True),
) -> None:
    """pivx-rpc - typed PIVX node JSON-RPC client."""
    configure_logging(log_level, log_file)
    ctx.obj = CliState(config_path=config, url=url, json_output=json_output)


register_chain_commands(app, console)
register_node_commands(app, console)


if __name__ == "__main__":
    app()
