"""Node commands: masternodes, staking, raw call."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from pivxrpc.cli.shared.runner import CliState, echo_json, run_with_client
from pivxrpc.client import PivxRpcClient


def parse_param(raw: str) -> Any:
    """Read a CLI parameter as JSON, falling back to the bare string (hashes, addresses)."""
    try:
        return json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError:
        return raw


def register_node_commands(app: typer.Typer, console: Console) -> None:
    """Register masternode, staking and raw-call commands."""

    @app.command("masternodes")
    def masternodes(
        ctx: typer.Context,
        limit: int = typer.Option(20, "--limit", "-n", min=1, help="Rows to show"),
    ) -> None:
        """Show masternode totals and the top of the masternode list."""

        async def fetch(client: PivxRpcClient):
            return await client.getmasternodecount(), await client.listmasternodes()

        count, entries = run_with_client(ctx, console, fetch)
        state: CliState = ctx.obj
        if state.json_output:
            echo_json({"count": count, "masternodes": entries[:limit]})
            return
        console.print(
            f"Masternodes: {count.total} total, {count.enabled} enabled, {count.stable} stable, {count.inqueue} in queue"
        )
        table = Table(title=f"Top {min(limit, len(entries))} of {len(entries)}")
        table.add_column("rank", justify="right")
        table.add_column("status")
        table.add_column("network")
        table.add_column("addr", style="cyan")
        table.add_column("lastpaid", justify="right")
        for entry in sorted(entries, key=lambda e: e.rank)[:limit]:
            status = f"[green]{entry.status}[/green]" if entry.status == "ENABLED" else entry.status
            table.add_row(str(entry.rank), status, entry.network, entry.addr, str(entry.lastpaid))
        console.print(table)

    @app.command("staking")
    def staking(ctx: typer.Context) -> None:
        """Show wallet staking readiness."""
        status = run_with_client(ctx, console, lambda client: client.getstakingstatus())
        state: CliState = ctx.obj
        if state.json_output:
            echo_json(status)
            return
        mark = "[green]✓[/green]"
        miss = "[red]✗[/red]"
        console.print(f"Staking: {mark if status.staking_status else miss}")
        for label, ok in (
            ("Enabled", status.staking_enabled),
            ("Cold staking", status.coldstaking_enabled),
            ("Connections", status.haveconnections),
            ("Masternodes synced", status.mnsync),
            ("Wallet unlocked", status.walletunlocked),
        ):
            console.print(f"  {label}: {mark if ok else miss}")
        console.print(f"Stakeable coins: {status.stakeablecoins}  Balance: {status.stakingbalance}")

    @app.command("call")
    def call(
        ctx: typer.Context,
        method: str = typer.Argument(..., help="RPC method name"),
        params: list[str] | None = typer.Argument(None, help="Positional params, each parsed as JSON"),
    ) -> None:
        """Send any RPC method with raw params and print the JSON result."""
        values = [parse_param(p) for p in params or []]
        result = run_with_client(ctx, console, lambda client: client.call_raw(method, values))
        echo_json(result)
