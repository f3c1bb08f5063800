"""Shared plumbing for CLI commands: config resolution, client lifecycle, output."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import typer
from pydantic import BaseModel
from rich.console import Console

from pivxrpc.client import PivxRpcClient
from pivxrpc.config.loader import load_config
from pivxrpc.config.schema import ClientConfig
from pivxrpc.utils.exceptions import PivxRpcError

T = TypeVar("T")


@dataclass
class CliState:
    """Global options collected by the root callback."""

    config_path: Path | None = None
    url: str | None = None
    json_output: bool = False


def resolve_config(state: CliState) -> ClientConfig:
    config = load_config(state.config_path)
    if state.url:
        config = config.model_copy(update={"url": state.url})
    return config


def to_jsonable(value: Any) -> Any:
    """Models by their wire names; amounts as exact decimal strings."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    return value


def echo_json(value: Any) -> None:
    typer.echo(json.dumps(to_jsonable(value), indent=2, ensure_ascii=False))


def run_with_client(
    ctx: typer.Context,
    console: Console,
    fn: Callable[[PivxRpcClient], Awaitable[T]],
) -> T:
    """Run ``fn`` against a client built from the global options; errors exit with status 1."""
    state: CliState = ctx.obj or CliState()
    try:
        config = resolve_config(state)
    except ValueError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(1) from e

    async def _run() -> T:
        async with PivxRpcClient.from_config(config) as client:
            return await fn(client)

    try:
        return asyncio.run(_run())
    except PivxRpcError as e:
        if state.json_output:
            typer.echo(json.dumps({"error": e.to_dict()}, indent=2, default=str))
        else:
            console.print(str(e), style="red", markup=False)
        raise typer.Exit(1) from e
    except (TypeError, ValueError) as e:
        console.print(f"invalid arguments: {e}", style="red", markup=False)
        raise typer.Exit(1) from e
