"""CLI entry point for oas-provider-gen."""

import logging
import os
import sys
from pathlib import Path

import click
import yaml

from oas_provider_gen.config.init import init_config
from oas_provider_gen.config.schema import DEFAULT_CONFIG_FILE, read_config
from oas_provider_gen.errors import (
    BindingNotFoundError,
    ConfigError,
    MediaTypeUnresolvedError,
    SpecLoadError,
)
from oas_provider_gen.generator.report import render_examine_table
from oas_provider_gen.generator.schema import ResourceGenerator
from oas_provider_gen.parser.openapi import load_openapi
from oas_provider_gen.probe.attributes import composite_attributes
from oas_provider_gen.probe.diagnostics import Diagnostics
from oas_provider_gen.probe.grouping import probe_resources
from oas_provider_gen.probe.media_type import determine_media_type

EXIT_SPEC_ERROR = 2
EXIT_CONFIG_ERROR = 3


def _fail(message: str, code: int):
    click.echo(message, err=True)
    sys.exit(code)


def _echo_diagnostics(diagnostics: Diagnostics) -> None:
    for diagnostic in diagnostics:
        click.echo(str(diagnostic), err=True)


def _load(spec_path: Path):
    try:
        return load_openapi(spec_path)
    except SpecLoadError as e:
        _fail(str(e), EXIT_SPEC_ERROR)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log probing details.")
def main(verbose: bool):
    """oas-provider-gen: infer REST resources from OpenAPI 3 and prepare provider generation."""
    # Warnings reach the user through the diagnostics summary
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def examine(spec_path: Path):
    """Show the RESTful entities that can be detected in an OpenAPI spec."""
    document = _load(spec_path)
    diagnostics = Diagnostics()
    resources = probe_resources(document, diagnostics)

    click.echo(render_examine_table(resources))
    _echo_diagnostics(diagnostics)


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=DEFAULT_CONFIG_FILE, show_default=True, type=click.Path(path_type=Path), help="Configuration file to write.")
@click.option("--provider", "provider_name", default=None, help="Provider name as namespace/name.")
def init(spec_path: Path, output: Path, provider_name: str | None):
    """Generate an initial binding configuration from an OpenAPI spec."""
    diagnostics = Diagnostics()
    try:
        config = init_config(spec_path, provider_name=provider_name, diagnostics=diagnostics)
    except SpecLoadError as e:
        _fail(str(e), EXIT_SPEC_ERROR)

    # generate resolves the spec path relative to the configuration file
    config.specfile = os.path.relpath(spec_path.resolve(), output.parent.resolve())
    output.parent.mkdir(parents=True, exist_ok=True)
    config.write(output)
    _echo_diagnostics(diagnostics)
    click.echo(f"Configuration with {len(config.output)} entries written to {output}")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("resource_name")
@click.option("--media-type", default=None, help="Override the resolved content media type.")
def attributes(spec_path: Path, resource_name: str, media_type: str | None):
    """Print the composite attribute tree of one probed resource."""
    document = _load(spec_path)
    diagnostics = Diagnostics()
    resources = probe_resources(document, diagnostics)

    resource = resources.get(resource_name)
    if resource is None:
        _fail(f"resource {resource_name} not found, known resources: {', '.join(resources)}", 1)

    if media_type is None:
        media_type = determine_media_type(resource, diagnostics)
    result = composite_attributes(resource, media_type, diagnostics)

    data = [a.model_dump(mode="json", exclude_none=True) for a in result]
    click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
    _echo_diagnostics(diagnostics)


@main.command()
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_FILE, show_default=True, type=click.Path(path_type=Path), help="Binding configuration file.")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for generated resource definitions.")
def generate(config_path: Path, output: Path):
    """Generate resource definitions from a binding configuration."""
    try:
        config = read_config(config_path)
    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG_ERROR)

    # The spec path is relative to the configuration file
    spec_path = Path(config.specfile)
    if not spec_path.is_absolute():
        spec_path = config_path.parent / spec_path
    document = _load(spec_path)

    diagnostics = Diagnostics()
    try:
        files = ResourceGenerator(document, config).generate(diagnostics)
    except (ConfigError, BindingNotFoundError, MediaTypeUnresolvedError) as e:
        _fail(str(e), EXIT_CONFIG_ERROR)

    output.mkdir(parents=True, exist_ok=True)
    for filename, content in files.items():
        file_path = output / filename
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}")

    _echo_diagnostics(diagnostics)
    click.echo(f"Generated {len(files)} files in {output}")
