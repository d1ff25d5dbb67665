"""CLI entry point for swaggergen."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
import yaml

from .config import GeneratorConfig
from .errors import ConfigError, GenerationError
from .orchestrator import generate

# Exit codes for error reporting
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_DOCUMENT = 2
EXIT_GENERATION_ERROR = 3
EXIT_CONFIG_ERROR = 4


def _fail(message: str, code: int) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


@click.command()
@click.option("--yaml-path", required=True, type=click.Path(path_type=Path), help="Swagger document (YAML or JSON).")
@click.option("--namespace", required=True, help="Python package the generated code belongs to, e.g. acme.petstore.")
@click.option("--dir", "output_dir", required=True, type=click.Path(path_type=Path), help="Directory of the namespace package.")
@click.option("--more-specificity", is_flag=True, help="Keep path parameter names in request class names.")
@click.option("-v", "--verbose", is_flag=True, help="Log each generated class.")
def main(yaml_path: Path, namespace: str, output_dir: Path, more_specificity: bool, verbose: bool) -> None:
    """Generate model and request classes from a Swagger 2.0 document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = GeneratorConfig.create(namespace, yaml_path, output_dir, more_specificity)
    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG_ERROR)

    click.echo(
        f"Generating models under namespace '{config.namespace}' from the YAML file "
        f"at '{config.yaml_path}', will save to {config.output_dir}"
    )

    try:
        summary = generate(config)
    except FileNotFoundError:
        _fail(f"Specification file not found: {yaml_path}", EXIT_FILE_NOT_FOUND)
    except yaml.YAMLError as e:
        _fail(f"Invalid YAML in specification file: {e}", EXIT_INVALID_DOCUMENT)
    except GenerationError as e:
        _fail(str(e), EXIT_GENERATION_ERROR)

    click.echo(f"Saved {summary.saved_models} model classes")
    click.echo(f"Saved {summary.saved_requests} request classes")
    click.echo("Done")
