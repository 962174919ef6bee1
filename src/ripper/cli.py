"""
Command line front end for File Ripper.

Usage:
    ripper search "query"          - Rank files under the current directory
    ripper search "query" -r DIR   - Rank files under DIR
    ripper ls [DIR]                - Browse a directory
    ripper init-config PATH        - Write a configuration template
"""

import json
import logging
from typing import Optional

import click

from .config.parser import load_config, create_config_template
from .errors import RipperError
from .models.config import RipperConfig
from .tools.search import SearchSession


def _configure_logging(config: RipperConfig, verbose: int) -> None:
    level = config.logging.get_level()
    if verbose == 1:
        level = min(level, logging.INFO)
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False),
              help="Configuration file to use")
@click.option("--verbose", "-v", count=True, help="Increase log output")
@click.pass_context
def cli(ctx, config_path: Optional[str], verbose: int):
    """File Ripper - rank files by name similarity."""
    try:
        result = load_config(config_path)
    except RipperError as e:
        raise click.ClickException(str(e))

    _configure_logging(result.config, verbose)
    for warning in result.warnings:
        logging.getLogger(__name__).info(warning)
    ctx.obj = result.config


@cli.command()
@click.argument("query")
@click.option("--root", "-r", default=".", show_default=True,
              type=click.Path(file_okay=False), help="Directory to search beneath")
@click.option("--threshold", "-t", type=click.FloatRange(0.0, 1.0),
              help="Keep names within this fraction of edits")
@click.option("--limit", "-n", type=click.IntRange(min=1), help="Maximum number of results")
@click.option("--ignore-case", "-i", is_flag=True, help="Compare names case-insensitively")
@click.option("--full-name", is_flag=True, help="Compare the query with names including extensions")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_obj
def search(config: RipperConfig, query: str, root: str, threshold: Optional[float],
           limit: Optional[int], ignore_case: bool, full_name: bool, as_json: bool):
    """Rank every file beneath ROOT by edit distance to QUERY."""
    if threshold is not None:
        config.scoring.threshold = threshold
    if limit is not None:
        config.scoring.max_results = limit
    if ignore_case:
        config.scoring.ignore_case = True
    if full_name:
        config.scoring.compare_stem = False

    session = SearchSession(root, config)
    try:
        results = session.trigger(query)
    except RipperError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(results.to_dict(), indent=2))
        return

    for warning in results.warnings:
        click.echo(f"warning: {warning}", err=True)
    for match in results.matches:
        click.echo(f"{match.score}\t{match.full_path}")


@cli.command(name="ls")
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@click.pass_obj
def list_command(config: RipperConfig, directory: str):
    """List DIRECTORY, subdirectories first."""
    session = SearchSession(directory, config)
    try:
        children = session.list_root()
    except RipperError as e:
        raise click.ClickException(str(e))

    click.echo(session.root)
    click.echo("../")
    for name, is_dir in children:
        click.echo(f"{name}/" if is_dir else name)


@cli.command(name="init-config")
@click.argument("path", type=click.Path(dir_okay=False))
def init_config(path: str):
    """Write a configuration template to PATH."""
    try:
        create_config_template(path)
    except RipperError as e:
        raise click.ClickException(str(e))
    click.echo(f"Configuration template written to {path}")


def main():
    cli()


if __name__ == "__main__":
    main()
