"""CLI entry point for Schema Writer."""

import logging
import os
import sys

import click
import requests

from .config import DEFAULT_EFFECT_TYPE, GenerationConfig
from .errors import SchemaWriterError
from .fetcher import fetch_schema
from .formatter import NoopFormatter, ScalafmtFormatter
from .writer import generate


def parse_pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    """Split repeated `KEY:VALUE` options into a mapping.

    Args:
        values: Raw option values
        option: Option name, for error messages

    Returns:
        Mapping in the order the options were given
    """
    pairs = {}
    for value in values:
        key, sep, mapped = value.partition(":")
        if not sep or not key.strip() or not mapped.strip():
            raise click.BadParameter(f"expected KEY:VALUE, got {value!r}", param_hint=option)
        pairs[key.strip()] = mapped.strip()
    return pairs


def load_source(source: str, headers: dict[str, str]) -> str:
    """Read SDL from a file, or introspect it when given a URL."""
    if source.startswith(("http://", "https://")):
        return fetch_schema(source, headers)
    with open(source, "r", encoding="utf-8") as f:
        return f.read()


@click.command()
@click.argument("source")
@click.option("-o", "--output", default=None, help="Output .scala file (default: stdout)")
@click.option("--package", "package_name", default=None, help="Package of the generated code")
@click.option(
    "--effect",
    "effect_type",
    default=DEFAULT_EFFECT_TYPE,
    help=f"Effect type wrapping resolver results (default: {DEFAULT_EFFECT_TYPE})",
)
@click.option("--abstract-effect", is_flag=True, help="Treat the effect type as an F[_] type parameter")
@click.option("--scalar", "scalars", multiple=True, help="Scalar mapping, e.g. DateTime:java.time.OffsetDateTime")
@click.option("--import", "imports", multiple=True, help="Additional import, may be repeated")
@click.option("--preserve-input-names", is_flag=True, help="Annotate input types with their GraphQL name")
@click.option("--add-derives", is_flag=True, help="Add Scala 3 derives clauses")
@click.option("-H", "--header", "headers", multiple=True, help="HTTP header for URL sources, e.g. Authorization:token")
@click.option("--scalafmt/--no-scalafmt", default=False, help="Format the output with scalafmt")
@click.option("--scalafmt-config", default=None, help="scalafmt configuration file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(
    source: str,
    output: str | None,
    package_name: str | None,
    effect_type: str,
    abstract_effect: bool,
    scalars: tuple[str, ...],
    imports: tuple[str, ...],
    preserve_input_names: bool,
    add_derives: bool,
    headers: tuple[str, ...],
    scalafmt: bool,
    scalafmt_config: str | None,
    verbose: bool,
) -> None:
    """Generate Scala types and resolver signatures from a GraphQL schema.

    SOURCE is a .graphql schema file or the URL of a GraphQL endpoint to introspect.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = GenerationConfig(
        package_name=package_name,
        effect_type=effect_type,
        is_effect_type_abstract=abstract_effect,
        extra_imports=imports,
        scalar_mappings=parse_pairs(scalars, "--scalar"),
        preserve_input_names=preserve_input_names,
        add_derives=add_derives,
    )
    formatter = ScalafmtFormatter(scalafmt_config) if scalafmt or scalafmt_config else NoopFormatter()

    if output:
        click.echo(f"Loading schema from {source}...")
    try:
        schema_text = load_source(source, parse_pairs(headers, "--header"))
    except (OSError, requests.RequestException, SchemaWriterError) as e:
        click.echo(f"Error loading schema: {e}", err=True)
        sys.exit(1)

    try:
        code = generate(schema_text, config, formatter)
    except SchemaWriterError as e:
        click.echo(f"Error generating code: {e}", err=True)
        sys.exit(1)

    if not output:
        click.echo(code, nl=False)
        return

    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(code)
    click.echo(f"  Created: {output}")


if __name__ == "__main__":
    main()
