"""
Command-line interface for pulse-refresh.
Instruments JavaScript/JSX modules for fast refresh and inspects what gets registered.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from pulse_refresh.env import configure_logging, env
from pulse_refresh.errors import RefreshError
from pulse_refresh.nodes import ExprNode, source_text
from pulse_refresh.refresh import RefreshResult, refresh_source

cli = typer.Typer(
	name="pulse-refresh",
	help="Fast-refresh instrumentation for JavaScript and JSX modules",
	no_args_is_help=True,
)


@cli.callback()
def main(
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
	if verbose:
		env.debug = True
	try:
		configure_logging()
	except RefreshError as exc:
		Console(stderr=True, soft_wrap=True).print(f"[red]{exc}[/red]")
		raise typer.Exit(1) from exc


@cli.command("transform")
def transform(
	file: Path = typer.Argument(..., help="JavaScript or JSX module to instrument"),
	output: Path | None = typer.Option(
		None, "--output", "-o", help="Write the result here instead of stdout"
	),
	check: bool = typer.Option(
		False, "--check", help="Exit with 1 if the module would be instrumented"
	),
):
	"""Instrument a module with registration and signature calls."""
	console = Console(stderr=True, soft_wrap=True)
	result = _run(file, console)

	if check:
		if result.changed:
			console.print(
				f"[yellow]{file}[/yellow] would be instrumented: "
				+ f"{len(result.registrations)} registration(s), "
				+ f"{len(result.signatures)} signature(s)"
			)
			raise typer.Exit(1)
		console.print(f"[green]{file}[/green] has nothing to instrument")
		return

	code = result.code
	if output is None:
		typer.echo(code, nl=False)
	else:
		output.write_text(code, encoding="utf-8")
		console.print(
			f"✅ Wrote {output} ({len(result.registrations)} registration(s), "
			+ f"{len(result.signatures)} signature(s))"
		)


@cli.command("inspect")
def inspect(
	file: Path = typer.Argument(..., help="JavaScript or JSX module to inspect"),
):
	"""List the components and hook signatures found in a module."""
	console = Console()
	result = _run(file, Console(stderr=True, soft_wrap=True))

	if not result.changed:
		console.print(f"No components or hook signatures found in {file}")
		return

	if result.registrations:
		table = Table(title="Registrations")
		table.add_column("Handle", style="cyan")
		table.add_column("Persistent ID", style="green")
		for registration in result.registrations:
			table.add_row(registration.handle.name, registration.persistent_id)
		console.print(table)

	if result.signatures:
		table = Table(title="Signatures")
		table.add_column("Function", style="cyan")
		table.add_column("Key")
		table.add_column("Custom hooks", style="magenta")
		for site in result.signatures:
			table.add_row(
				site.name or "(inline)",
				site.signature.key.replace("\n", " | "),
				", ".join(_callee_names(site.signature.custom_hooks)),
			)
		console.print(table)


def _run(file: Path, console: Console) -> RefreshResult:
	if not file.is_file():
		console.print(f"[red]❌ File not found: {file}[/red]")
		raise typer.Exit(1)
	try:
		return refresh_source(file.read_text(encoding="utf-8"))
	except RefreshError as exc:
		console.print(f"[red]❌ {file}: {exc}[/red]")
		raise typer.Exit(1) from exc


def _callee_names(callees: list[ExprNode]) -> list[str]:
	return [source_text(callee) for callee in callees]
