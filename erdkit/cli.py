"""Command-line interface for the erdkit argument codec."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.table import Table

from erdkit.abi import AbiRegistry
from erdkit.address import Address
from erdkit.codec import ArgSerializer, native_to_typed_values
from erdkit.constants import ARGUMENTS_SEPARATOR
from erdkit.errors import ErdkitError
from erdkit.typesystem import Type, TypeMapper, parse_type_expression


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Encode and decode smart contract arguments."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _fail(err: Exception) -> NoReturn:
    click.echo(f"Error: {err}", err=True)
    sys.exit(1)


def _parse_cli_value(text: str) -> Any:
    """Interpret an argument as a JSON literal, or as a plain string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _json_default(value: Any) -> Any:
    if isinstance(value, Address):
        return value.to_bech32()
    if isinstance(value, bytes):
        return value.hex()
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


@cli.command("parse-type")
@click.argument("expression")
@click.option("--json", "output_json", is_flag=True, help="Output the parsed descriptor as JSON")
def parse_type(expression: str, output_json: bool) -> None:
    """Parse and resolve a type expression."""
    try:
        descriptor = parse_type_expression(expression)
        mapped = TypeMapper().map_type(descriptor)
    except ErdkitError as err:
        _fail(err)

    if output_json:
        print(descriptor.to_json(indent=2))
    else:
        _output_type_table(mapped)


def _output_type_table(mapped: Type) -> None:
    """Output a resolved type tree using rich text formatting."""
    console = Console()
    console.print(f"[bold cyan]{mapped}[/bold cyan]")

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Type", style="white")
    table.add_column("Kind", style="dim")
    table.add_column("Size", style="yellow", justify="right")

    def add_rows(t: Type, depth: int) -> None:
        fixed = "fixed" if t.is_fixed_size else "variable"
        if t.is_multi_value:
            fixed = "multi-value"
        table.add_row("  " * depth + t.name, t.kind.value, fixed)
        for param in t.params:
            add_rows(param, depth + 1)

    add_rows(mapped, 0)
    console.print(table)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.option("--abi", "abi_file", required=True, type=click.Path(exists=True), help="ABI JSON file")
@click.option("--endpoint", "-e", "endpoint_name", required=True, help="Endpoint name")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.argument("args", nargs=-1)
def encode(abi_file: str, endpoint_name: str, output_json: bool, args: tuple[str, ...]) -> None:
    """Encode call arguments (JSON literals) into transaction data."""
    try:
        endpoint = AbiRegistry.load(abi_file).get_endpoint(endpoint_name)
        typed = native_to_typed_values([_parse_cli_value(arg) for arg in args], endpoint)
        parts = ArgSerializer().values_to_strings(typed)
    except ErdkitError as err:
        _fail(err)

    data = ARGUMENTS_SEPARATOR.join([endpoint_name, *parts])
    if output_json:
        print(json.dumps({"endpoint": endpoint_name, "parts": parts, "data": data}, indent=2))
    else:
        print(data)


@cli.command()
@click.option("--abi", "abi_file", required=True, type=click.Path(exists=True), help="ABI JSON file")
@click.option("--endpoint", "-e", "endpoint_name", required=True, help="Endpoint name")
@click.argument("parts", nargs=-1)
def decode(abi_file: str, endpoint_name: str, parts: tuple[str, ...]) -> None:
    """Decode hex return data parts against the endpoint outputs."""
    try:
        endpoint = AbiRegistry.load(abi_file).get_endpoint(endpoint_name)
        values = ArgSerializer().strings_to_values(parts, endpoint.output_types)
    except ErdkitError as err:
        _fail(err)

    natives = [value.to_native() for value in values]
    print(json.dumps(natives, indent=2, default=_json_default))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
