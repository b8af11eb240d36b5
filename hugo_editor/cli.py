"""Command line entry point for Hugo Editor."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from hugo_editor.config import load_config
from hugo_editor.core.models import ConfigError, ExternalToolError
from hugo_editor.core.naming import derive_filename
from hugo_editor.core.service import create_service_from_config
from hugo_editor.web import create_app

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hugo-editor",
    help="Browser-based editor for the blog posts of a Hugo site.",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from hugo_editor import __version__

        typer.echo(f"hugo-editor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Hugo Editor - edit, save and publish Hugo blog posts."""
    pass


@app.command()
def serve(
    site: Annotated[Optional[Path], typer.Option("--site", help="Path to Hugo site directory.")] = None,
    config_file: Annotated[
        Optional[Path], typer.Option("--config", help="YAML file with editor settings.")
    ] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Port for the editor server.")] = None,
    hugo_port: Annotated[Optional[int], typer.Option("--hugo-port", help="Port for the Hugo server.")] = None,
    hugo_cmd: Annotated[
        Optional[str], typer.Option("--hugo-cmd", help="Command to run the Hugo server.")
    ] = None,
    publish_cmd: Annotated[
        Optional[str], typer.Option("--publish-cmd", help="Command to build and publish the site.")
    ] = None,
    autosave: Annotated[
        Optional[float], typer.Option("--autosave", help="Autosave delay in seconds (0 disables).")
    ] = None,
    host: Annotated[Optional[str], typer.Option("--host", help="Interface to bind.")] = None,
    preview: Annotated[
        Optional[bool], typer.Option("--preview/--no-preview", help="Run the Hugo preview server.")
    ] = None,
    log_level: Annotated[str, typer.Option("--log-level", help="Logging level.")] = "INFO",
) -> None:
    """Run the editor web server."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(
            config_file,
            site_dir=site,
            port=port,
            hugo_port=hugo_port,
            hugo_command=hugo_cmd,
            publish_command=publish_cmd,
            autosave_delay=autosave,
            host=host,
            start_preview=preview,
        )
        config.validate()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    service = create_service_from_config(config)
    if config.start_preview:
        try:
            service.start()
        except ExternalToolError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        logger.info("Hugo server running at %s", config.preview_base_url)

    web_app = create_app(service, config)
    logger.info("Starting editor server at http://%s:%d", config.host, config.port)
    try:
        web_app.run(host=config.host, port=config.port, threaded=True)
    finally:
        service.shutdown()


@app.command()
def filename(
    title: Annotated[str, typer.Argument(help="Post title.")],
    date: Annotated[Optional[str], typer.Option("--date", help="Front matter date.")] = None,
) -> None:
    """Print the filename a post with this title and date is saved under."""
    typer.echo(derive_filename(title, date, datetime.now()).filename)


if __name__ == "__main__":
    app()
