import json
import logging
import sys
from pathlib import Path

import click

from .config import DereferenceConfig, OutputMode
from .document import OpenApiDocument
from .errors import OpenApiError
from .writer import AtomicWriter


def setup_logging(verbose: bool = False):
    """Send logs to stderr, DEBUG and above when verbose, errors only otherwise."""
    level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr, force=True)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite OUTPUT if it already exists")
@click.option("--indent", default=None, type=int, help="JSON indentation (overrides config file)")
@click.option(
    "--annotate-refs",
    is_flag=True,
    default=False,
    help="Keep the original $ref of resolved objects under the annotation key",
)
@click.option("--servers", is_flag=True, default=False, help="Print the aggregated server URLs instead")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(dir_okay=False, resolve_path=True))
def openapi_deref(config, force, indent, annotate_refs, servers, verbose, path, output):
    """Dereference the internal $refs of the OpenAPI 3.1 document at PATH."""
    setup_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = DereferenceConfig.from_dict(json.load(f))
    else:
        config = DereferenceConfig()

    # CLI flags override the config file
    if force:
        config.output.mode = OutputMode.FORCE
    if indent is not None:
        config.output.indent = indent
    if annotate_refs:
        config.annotate_resolved_refs = True

    try:
        document = OpenApiDocument.from_file(path, config).dereference()
        if servers:
            for server in document.get_servers():
                click.echo(server.url)
            return
        content = document.to_json(indent=config.output.indent)
    except OpenApiError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(content)
        return

    output = Path(output)
    writer = AtomicWriter()
    try:
        if not config.output.atomic_write:
            if config.output.mode == OutputMode.ERROR_IF_EXISTS and output.exists():
                raise FileExistsError(f"Output file already exists: {output}. Use --force to overwrite.")
            output.write_text(content, encoding="utf-8")
        elif config.output.mode == OutputMode.FORCE:
            writer.write(output, content)
        else:
            writer.write_if_not_exists(output, content)
    except (FileExistsError, OpenApiError) as e:
        raise click.ClickException(str(e)) from e
