import asyncio
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from import_graph.core.ports.watcher import FileWatcherPort
from import_graph.core.scan import run_scan
from import_graph.core.settings import ScanSettings, load_settings
from import_graph.core.tree import MalformedTreeError
from import_graph.export.graph_data import OutputFormat, write_graph
from import_graph.models import Graph
from import_graph.watcher.watchfiles_adapter import WatchfilesWatcher

console = Console()


def _render_summary(graph: Graph, top: int) -> None:
    console.print(f"[green]Done![/green] {len(graph.nodes)} nodes, {len(graph.links)} edges.")
    ranked = sorted((node for node in graph.nodes if node.degree), key=lambda node: (-node.degree, node.id))
    if not ranked or top <= 0:
        return
    table = Table(title="Most referenced files", show_lines=False)
    table.add_column("file")
    table.add_column("group")
    table.add_column("in-degree", justify="right")
    for node in ranked[:top]:
        table.add_row(node.id, node.group, str(node.degree))
    console.print(table)


async def _scan_once(
    root: Path, settings: ScanSettings, output: Path | None, output_format: OutputFormat, top: int
) -> None:
    with console.status(f"Scanning {root.name or root}...") as status:
        graph = await run_scan(root, settings, on_progress=status.update)
    _render_summary(graph, top)
    if output is not None:
        written = write_graph(graph, output, output_format)
        console.print(f"[green]Wrote[/green] {output_format.value} graph to {written}")


async def _watch(
    root: Path, settings: ScanSettings, output: Path | None, output_format: OutputFormat, top: int
) -> None:
    await _scan_once(root, settings, output, output_format, top)

    async def _on_change(paths: set[Path]) -> None:
        console.print(f"Change detected in {len(paths)} file(s), rescanning...")
        await _scan_once(root, settings, output, output_format, top)

    watcher: FileWatcherPort = WatchfilesWatcher(root, _on_change, exclude_dirs=settings.exclude_dirs)
    await watcher.start()
    console.print(f"Watching {root} for changes (Ctrl+C to stop)")
    try:
        await asyncio.Event().wait()
    finally:
        await watcher.stop()


def scan(
    path: Annotated[
        Path, typer.Argument(help="Project directory to scan.", exists=True, file_okay=False, dir_okay=True)
    ] = Path("."),
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write the graph to this file.")] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Graph file format.")
    ] = OutputFormat.json,
    workers: Annotated[int | None, typer.Option(help="Files scanned in parallel.")] = None,
    exclude: Annotated[list[str] | None, typer.Option("--exclude", "-e", help="Extra directory name to skip.")] = None,
    include_hidden: Annotated[bool, typer.Option(help="Scan dot-files and dot-directories.")] = False,
    max_file_chars: Annotated[int | None, typer.Option(help="Skip files longer than this many characters.")] = None,
    top: Annotated[int, typer.Option(help="Rows in the most-referenced table.")] = 10,
    watch: Annotated[bool, typer.Option(help="Rescan whenever a source file changes.")] = False,
) -> None:
    """Scan a directory and build its file dependency graph."""
    try:
        settings = load_settings(
            workers=workers,
            exclude_dirs=tuple(exclude) if exclude else None,
            include_hidden=include_hidden or None,
            max_file_chars=max_file_chars,
        )
    except ValidationError as exc:
        console.print(f"[red]Invalid settings:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    runner = _watch if watch else _scan_once
    try:
        asyncio.run(runner(path, settings, output, output_format, top))
    except KeyboardInterrupt:
        console.print("Stopped.")
    except (MalformedTreeError, OSError) as exc:
        console.print(f"[red]Scan failed:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc
