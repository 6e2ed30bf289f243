"""
Main entry point for the phonology CLI.

This module provides the command-line interface for inspecting and checking
feature definition files.
"""

import sys
from pathlib import Path

import click

from phonology.features.analysis import roots, validate_hierarchy
from phonology.features.graph import FeatureGraph
from phonology.utils.config import get_settings
from phonology.utils.errors import PhonologyError
from phonology.utils.logging import configure_root_logging, setup_logging

logger = setup_logging(__name__)

file_option = click.option(
    '--file', 'source', type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Feature definition file (defaults to the bundled feature set)'
)


def load_graph(source: Path | None) -> FeatureGraph:
    """Load a feature graph from a file, or the default set."""
    graph = FeatureGraph()
    try:
        graph.loadfile(source)
    except (OSError, PhonologyError) as e:
        click.echo(f"Error: {e}")
        sys.exit(1)
    return graph


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Phonology - hierarchical feature tooling."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    if verbose:
        settings = get_settings()
        configure_root_logging(
            level="DEBUG",
            structured=settings.log_structured,
            log_file=settings.get_log_file_path(),
        )
        logger.info("Verbose logging enabled")


@cli.group()
def features() -> None:
    """Inspect feature definitions."""


@features.command()
@file_option
def show(source: Path | None) -> None:
    """List every feature with its type and children."""
    graph = load_graph(source)
    for name, definition in graph.all_features().items():
        children = ' '.join(definition.children)
        click.echo(f"{name}\t{definition.type.value}\t{children}".rstrip())


@features.command()
@file_option
def tree(source: Path | None) -> None:
    """Print the feature hierarchy from its undominated features down."""
    graph = load_graph(source)

    def echo_branch(name: str, depth: int, path: frozenset) -> None:
        definition = graph.feature(name)
        label = name if definition.is_node else f"{name} ({definition.type.value})"
        click.echo(f"{'  ' * depth}{label}")
        for child in definition.children:
            if child in path:
                click.echo(f"{'  ' * (depth + 1)}{child} (cycle)")
            elif child in graph:
                echo_branch(child, depth + 1, path | {child})

    for name in roots(graph):
        echo_branch(name, 0, frozenset({name}))


@features.command()
@file_option
def check(source: Path | None) -> None:
    """Check the hierarchy for dangling references and cycles."""
    graph = load_graph(source)
    result = validate_hierarchy(graph)

    for warning in result.warnings:
        click.echo(f"Warning: {warning}")
    for error in result.errors:
        click.echo(f"Error: {error}")

    if not result.valid:
        sys.exit(1)
    click.echo(f"OK: {len(graph)} features")


@features.command()
@click.argument('feature')
@click.argument('value')
@file_option
def coerce(feature: str, value: str, source: Path | None) -> None:
    """Show the numeric and text forms of VALUE for FEATURE."""
    graph = load_graph(source)
    try:
        number = graph.number_form(feature, value)
        text = graph.text_form(feature, number)
    except PhonologyError as e:
        click.echo(f"Error: {e}")
        sys.exit(1)
    click.echo(f"number: {number!r}")
    click.echo(f"text: {text!r}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
