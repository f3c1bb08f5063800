"""Chain explorer commands: info, block, mempool, tx, txout."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from pivxrpc.cli.shared.runner import CliState, echo_json, run_with_client
from pivxrpc.client import PivxRpcClient
from pivxrpc.models import Block, BlockWithTransactions, Transaction


def _short(value: str, keep: int = 16) -> str:
    return value if len(value) <= keep * 2 else f"{value[:keep]}…{value[-keep:]}"


def _is_height(target: str) -> bool:
    return target.isdigit() and len(target) < 64


def register_chain_commands(app: typer.Typer, console: Console) -> None:
    """Register read-only chain explorer commands."""

    @app.command("info")
    def info(ctx: typer.Context) -> None:
        """Show chain height, tip, difficulty and node summary."""

        async def fetch(client: PivxRpcClient):
            chain = await client.getblockchaininfo()
            node = await client.getinfo()
            return chain, node

        chain, node = run_with_client(ctx, console, fetch)
        state: CliState = ctx.obj
        if state.json_output:
            echo_json({"blockchain": chain, "node": node})
            return
        table = Table(title=f"PIVX node ({chain.chain})")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Blocks", str(chain.blocks))
        table.add_row("Headers", str(chain.headers))
        table.add_row("Best block", chain.bestblockhash)
        table.add_row("Difficulty", str(chain.difficulty))
        table.add_row("Sync progress", f"{chain.verificationprogress:.4%}")
        table.add_row("Version", str(node.version))
        table.add_row("Connections", str(node.connections))
        table.add_row("Money supply", str(node.moneysupply))
        for name, upgrade in chain.upgrades.items():
            table.add_row(f"Upgrade {name}", f"{upgrade.status} @ {upgrade.activationheight}")
        console.print(table)

    @app.command("block")
    def block(
        ctx: typer.Context,
        target: str = typer.Argument(..., help="Block hash or height"),
        verbosity: int = typer.Option(1, "--verbosity", "-v", min=0, max=2, help="0 = hex, 1 = txids, 2 = transactions"),
    ) -> None:
        """Show a block by hash or height."""

        async def fetch(client: PivxRpcClient):
            blockhash = await client.getblockhash(int(target)) if _is_height(target) else target
            return await client.getblock(blockhash, verbosity)

        result = run_with_client(ctx, console, fetch)
        state: CliState = ctx.obj
        if state.json_output or isinstance(result, str):
            if isinstance(result, str):
                typer.echo(result)
            else:
                echo_json(result)
            return
        console.print(f"[bold]Block {result.height}[/bold] {result.hash}")
        console.print(f"Time: {result.time}  Confirmations: {result.confirmations}  Size: {result.size}")
        console.print(f"Difficulty: {result.difficulty}")
        if isinstance(result, BlockWithTransactions):
            table = Table(title=f"{len(result.tx)} transactions")
            table.add_column("txid", style="cyan")
            table.add_column("inputs", justify="right")
            table.add_column("outputs", justify="right")
            table.add_column("total out", justify="right")
            for tx in result.tx:
                table.add_row(_short(tx.txid), str(len(tx.vin)), str(len(tx.vout)), str(tx.total_out))
            console.print(table)
        elif isinstance(result, Block):
            console.print(f"{len(result.tx)} transactions")
            for txid in result.tx:
                console.print(f"  {txid}", markup=False)

    @app.command("mempool")
    def mempool(
        ctx: typer.Context,
        verbose: bool = typer.Option(False, "--verbose", help="Show fee and size per entry"),
    ) -> None:
        """List mempool transactions."""
        result = run_with_client(ctx, console, lambda client: client.getrawmempool(verbose))
        state: CliState = ctx.obj
        if state.json_output:
            echo_json(result)
            return
        if not result:
            console.print("[dim]mempool is empty[/dim]")
            return
        if isinstance(result, list):
            for txid in result:
                console.print(txid, markup=False)
            return
        table = Table(title=f"Mempool ({len(result)} entries)")
        table.add_column("txid", style="cyan")
        table.add_column("size", justify="right")
        table.add_column("fee", justify="right")
        table.add_column("height", justify="right")
        for txid, entry in result.items():
            table.add_row(_short(txid), str(entry.size), str(entry.fee), str(entry.height))
        console.print(table)

    @app.command("tx")
    def tx(
        ctx: typer.Context,
        txid: str = typer.Argument(..., help="Transaction id"),
    ) -> None:
        """Show a decoded transaction."""
        result: Transaction = run_with_client(ctx, console, lambda client: client.getrawtransaction(txid, True))
        state: CliState = ctx.obj
        if state.json_output:
            echo_json(result)
            return
        console.print(f"[bold]Transaction[/bold] {result.txid}")
        if result.blockhash:
            console.print(f"Block: {result.blockhash}  Confirmations: {result.confirmations}")
        console.print(f"Coinbase: {'yes' if result.is_coinbase else 'no'}  Total out: {result.total_out}")
        for out in result.vout:
            addresses = ", ".join(out.script_pub_key.addresses or []) or out.script_pub_key.script_type or "?"
            console.print(f"  #{out.n} {out.value} -> {addresses}", markup=False)

    @app.command("txout")
    def txout(
        ctx: typer.Context,
        txid: str = typer.Argument(..., help="Transaction id"),
        vout: int = typer.Argument(..., min=0, help="Output index"),
        include_mempool: bool = typer.Option(True, "--include-mempool/--no-include-mempool"),
    ) -> None:
        """Show an unspent output, or report that it is spent."""
        result = run_with_client(ctx, console, lambda client: client.gettxout(txid, vout, include_mempool))
        state: CliState = ctx.obj
        if state.json_output:
            echo_json(result)
            return
        if result is None:
            console.print(f"[yellow]{txid}:{vout} is spent or unknown[/yellow]")
            return
        console.print(f"[green]unspent[/green] {result.value} PIV, {result.confirmations} confirmations")
        if result.script_pub_key.addresses:
            console.print(f"Address: {', '.join(result.script_pub_key.addresses)}")
