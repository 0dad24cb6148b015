"""Command-line interface for bootmap.

Provides CLI commands for writing and previewing bootstrap modules.
"""

import os
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from bootmap import __version__
from bootmap.io.logging import add_file_handler, setup_console_logging


def _load_inputs(root: str, manifest: Optional[str]):
    """Load project config and Builder for a root directory."""
    from bootmap.config import ProjectConfig
    from bootmap.core.builder import ManifestBuilder

    project = ProjectConfig.find(root)
    manifest_path = Path(manifest) if manifest else project.manifest_path(root)
    builder = ManifestBuilder.from_file(manifest_path, root=root)
    return project, builder


def _fail(error: Exception) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="bootmap")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """bootmap: compile an autoload map into a bootstrap module.

    Reads the file list and autoload map from a manifest and writes
    autoload.py (plus legacy shims) into the output directory.

    Examples:

        # Write vendor/autoload.py for the current project
        bootmap write --root .

        # Production build with a failure handler
        bootmap write --root . --prod --failure-handler app.autoload.Fallback

        # Preview the generated module
        bootmap show --root .
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_console_logging(verbose, debug)


@cli.command()
@click.option("--root", "-r", "root", required=True,
              type=click.Path(exists=True, file_okay=False),
              help="Project root directory")
@click.option("--out", "-o", "output_path", type=click.Path(file_okay=False),
              help="Output directory (default: output_dir from bootmap.yaml)")
@click.option("--manifest", "-m", type=click.Path(exists=True, dir_okay=False),
              help="Manifest listing files and autoload map (YAML or JSON)")
@click.option("--dev/--prod", "dev", default=None,
              help="Dev flag embedded in the artifact")
@click.option("--failure-handler", default=None,
              help="Fully-qualified FailureHandler subclass name")
@click.option("--absolute-root", is_flag=True,
              help="Embed the root as a fixed absolute path")
@click.option("--record", type=click.Path(dir_okay=False),
              help="Append a JSON record of the emission to this file")
@click.option("--log-file", type=click.Path(dir_okay=False),
              help="Also write INFO-level log messages to this file")
@click.option("--timestamp-log", is_flag=True,
              help="Insert a timestamp into the --log-file name")
@click.pass_context
def write(
    ctx: click.Context,
    root: str,
    output_path: Optional[str],
    manifest: Optional[str],
    dev: Optional[bool],
    failure_handler: Optional[str],
    absolute_root: bool,
    record: Optional[str],
    log_file: Optional[str],
    timestamp_log: bool,
) -> None:
    """Write autoload.py and legacy shims.

    Command-line options override values from bootmap.yaml.
    """
    logger = ctx.obj["logger"]
    if log_file:
        log_path = add_file_handler(logger, log_file, timestamped=timestamp_log)
        logger.debug("Logging to %s", log_path)

    from bootmap.core.builder import ManifestError
    from bootmap.core.writer import BootmapError, BootstrapWriter, WriterConfigBuilder
    from bootmap.io.logging import log_json

    try:
        project, builder = _load_inputs(root, manifest)
        out_dir = Path(output_path) if output_path else project.output_path(root)
        relative_root = project.relative_root and not absolute_root

        if relative_root and os.path.realpath(out_dir.parent) != os.path.realpath(root):
            logger.warning(
                "Output directory %s is not directly below root %s; "
                "the relative root computed at load time will be wrong",
                out_dir,
                root,
            )

        config = (
            WriterConfigBuilder()
            .root(root)
            .relative_root(relative_root)
            .dev(project.dev if dev is None else dev)
            .failure_handler(failure_handler or project.failure_handler)
            .builder(builder)
            .build()
        )
        result = BootstrapWriter(config, logger).write_to_directory(
            out_dir, shim_names=project.legacy_shims
        )
    except (BootmapError, ManifestError, FileNotFoundError, yaml.YAMLError) as e:
        _fail(e)
        return

    if record:
        log_json(record, result.to_record())

    click.echo(f"Wrote {result.artifact} ({result.symbol_count} symbols, "
               f"{result.file_count} files)")
    click.echo(f"Build id: {result.build_id}")


@cli.command()
@click.option("--root", "-r", "root", required=True,
              type=click.Path(exists=True, file_okay=False),
              help="Project root directory")
@click.option("--manifest", "-m", type=click.Path(exists=True, dir_okay=False),
              help="Manifest listing files and autoload map (YAML or JSON)")
@click.option("--map-only", is_flag=True, help="Print only the resolved autoload map")
@click.pass_context
def show(ctx: click.Context, root: str, manifest: Optional[str], map_only: bool) -> None:
    """Print the generated module without writing it (dry run)."""
    from bootmap.core.builder import ManifestError
    from bootmap.core.writer import (
        BootmapError,
        BootstrapWriter,
        PathResolver,
        WriterConfigBuilder,
        serialize_map,
    )

    try:
        project, builder = _load_inputs(root, manifest)
        config = (
            WriterConfigBuilder()
            .root(root)
            .relative_root(project.relative_root)
            .dev(project.dev)
            .failure_handler(project.failure_handler)
            .builder(builder)
            .build()
        )
        if map_only:
            output = serialize_map(config.autoload_map, PathResolver(config.root))
        else:
            output = BootstrapWriter(config, ctx.obj["logger"]).render()
    except (BootmapError, ManifestError, FileNotFoundError, yaml.YAMLError) as e:
        _fail(e)
        return

    click.echo(output.rstrip("\n"))


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
