"""Command-line interface for gql-nestgen."""

import logging
import click
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

from .core.config import GeneratorConfig
from .core.errors import GenerationFailedError, SchemaLoadError
from .core.generator import Generator
from .core.hooks import FilterTypesHook, HookRunner
from .core.parser import SchemaLoader
from .core.scalars import parse_scalar_option
from .core.writer import DeclarationWriter


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def _scalar_callback(ctx, param, values):
    try:
        return dict(parse_scalar_option(value) for value in values)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param)


@click.group()
@click.version_option()
def main():
    """GraphQL to NestJS code generator.

    Generate TypeScript classes, enums and resolver stubs from GraphQL schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output directory for generated code (overrides the config file).",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file.",
)
@click.option("--header", help="Header prepended to every generated file.")
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    callback=_scalar_callback,
    help="Custom scalar mapping NAME=tsType:symbol[:module]. Repeatable.",
)
@click.option("--exclude-prefix", help="Skip types whose name starts with this prefix.")
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Number of parallel workers.")
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str | None,
    config_file: str | None,
    header: str | None,
    scalars: dict,
    exclude_prefix: str | None,
    workers: int | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate NestJS declarations from a GraphQL schema.

    Examples:

        gql-nestgen generate --schema ./schema --output ./src/generated

        gql-nestgen generate -s ./schema.tgz -o ./generated --header "// Generated"

        gql-nestgen generate -s ./schema -c gql-nestgen.json
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s")

    schema_path = Path(schema).resolve()
    temp_dir = None

    try:
        # Handle archives
        actual_schema_path = schema_path
        if schema_path.is_file() and schema_path.name.lower().endswith(
            (".zip", ".tar.gz", ".tgz")
        ):
            click.echo(f"Extracting archive {schema_path.name}...")
            temp_dir = extract_archive(schema_path)
            actual_schema_path = Path(temp_dir)
            if verbose:
                click.echo(f"  Extracted to: {temp_dir}")

        config = GeneratorConfig.from_file(config_file) if config_file else GeneratorConfig()
        input_root = actual_schema_path if actual_schema_path.is_dir() else actual_schema_path.parent
        overrides = {"input_root": str(input_root)}
        if output:
            overrides["output_root"] = str(Path(output).resolve())
        if header:
            overrides["header"] = header
        if scalars:
            overrides["scalars"] = {**config.scalars, **scalars}
        if workers:
            overrides["max_workers"] = workers
        config = config.model_copy(update=overrides)

        if verbose:
            click.echo(f"Schema: {actual_schema_path}")
            click.echo(f"Output: {config.output_root}")

        # Parse schema
        click.echo("Parsing schema...")
        units = SchemaLoader(str(actual_schema_path), config.extensions).load_all()
        if verbose:
            click.echo(f"  Files: {len(units)}")

        hooks = HookRunner()
        if exclude_prefix:
            hooks.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix, root_types=config.root_types))

        # Generate code
        click.echo("Generating code...")
        generator = Generator(config, hooks=hooks, writer=DeclarationWriter(template_dir))
        report = generator.generate(units)

        for warning in report.warnings:
            click.echo(f"Warning: {warning.message}", err=True)
        if verbose:
            for path in report.written:
                click.echo(f"  {path}")
        click.echo(f"Done! Generated {len(report.written)} files in {config.output_root}")
    except SchemaLoadError as e:
        raise click.ClickException(e.message)
    except GenerationFailedError as e:
        for error in e.errors:
            click.echo(f"Error: {error.message}", err=True)
        raise click.ClickException(e.message)
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
