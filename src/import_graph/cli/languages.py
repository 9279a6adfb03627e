from rich.console import Console
from rich.table import Table

from import_graph.core.patterns import DEFAULT_CATALOGUE

console = Console()


def languages() -> None:
    """List the file extensions that are scanned for references."""
    table = Table(show_lines=False)
    table.add_column("extension")
    table.add_column("language")
    table.add_column("rules", justify="right")
    for extension, language in DEFAULT_CATALOGUE.extensions.items():
        table.add_row(extension, language, str(len(DEFAULT_CATALOGUE.patterns_for(extension))))
    console.print(table)
    console.print(f"({len(DEFAULT_CATALOGUE.extensions)} extensions)")
