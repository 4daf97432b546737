import json
import logging
import sys
from pathlib import Path

import click

from .batch import BatchRunner
from .pipeline import CodeGeneratorConfig


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for the command line."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s - %(message)s",
    )
    return logging.getLogger("adt_remodel")


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("-v", "--verbose", is_flag=True, help="Log discovered files and completions")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.argument("root", required=False, default=None, type=click.Path(exists=True, file_okay=False, resolve_path=True))
def adt_remodel(config, verbose, debug, root):
    """Generate C# tagged unions from every .adtValue file below ROOT.

    ROOT defaults to the current directory. Each `<Name>.cs` artifact is
    written next to the document declaring `Name`.
    """
    setup_logging(verbose, debug)

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    if root is None:
        root = Path.cwd()

    report = BatchRunner(config).run(Path(root))

    click.echo(f"{len(report.succeeded)} generated, {len(report.failed)} failed", err=True)
    for doc in report.failed:
        click.echo(f"  {doc.path}: {doc.reason}", err=True)

    if not report.ok:
        sys.exit(1)


if __name__ == "__main__":
    adt_remodel()
