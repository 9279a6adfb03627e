import logging
import os
from typing import Annotated

import typer

from import_graph.cli.languages import languages
from import_graph.cli.scan import scan

app = typer.Typer(
    name="import-graph",
    help="Import Graph CLI: map which files of a project reference which.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log per-file details.")] = False,
) -> None:
    """Configure logging before any command runs."""
    level = logging.DEBUG if verbose else os.getenv("IMPORT_GRAPH_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


app.command("scan")(scan)
app.command("languages")(languages)


def main() -> None:
    app()
