"""Command line entry point: launch the TUI or ingest env text from a file."""

import json
import sys
from enum import Enum
from pathlib import Path

import typer

from nzdeploy.config import ConfigError, load_config
from nzdeploy.domain.ingest import duplicate_keys, format_dotenv, parse, to_submission_map
from nzdeploy.logging_config import LoggingConfigError, setup_logging
from nzdeploy.models import EnvVar

app = typer.Typer(
    help="Nearzero deploy: pick a repository, add environment variables, deploy.",
    no_args_is_help=True,
)

# Module-level defaults for Typer arguments
_MOCK_HELP = "Use built-in mock account data and do not submit anything"
_SOURCE_HELP = "File to read; omit or pass '-' to read stdin"
_FORMAT_HELP = "Output format for the submission map"


class OutputFormat(str, Enum):
    json = "json"
    env = "env"


def _init_logging(console: bool) -> None:
    try:
        setup_logging(console=console)
    except LoggingConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@app.command()
def run(
    mock: bool = typer.Option(False, "--mock", help=_MOCK_HELP),
) -> None:
    """Launch the deployment TUI."""
    # Imported here so `parse` stays usable without loading Textual.
    from nzdeploy.app import DeployApp
    from nzdeploy.deploy.client import DeployClient
    from nzdeploy.providers import GitHubAccountProvider

    _init_logging(console=False)
    if mock:
        DeployApp().run()
        return

    try:
        settings = load_config()
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    account = GitHubAccountProvider(per_page=settings.per_page)
    DeployApp(account=account, deployer=DeployClient(settings)).run()


@app.command("parse")
def parse_command(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output_format: OutputFormat = typer.Option(  # noqa: B008
        OutputFormat.json, "--format", "-f", help=_FORMAT_HELP
    ),
) -> None:
    """Ingest pasted env text and print the map that would be submitted."""
    _init_logging(console=True)
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            typer.echo(f"Error: cannot read {path}: {exc}", err=True)
            sys.exit(1)

    vars = parse(text)
    for key in duplicate_keys(vars):
        typer.echo(f"warning: {key} is set more than once; the last value wins", err=True)

    if output_format is OutputFormat.env:
        mapping = to_submission_map(vars)
        rendered = format_dotenv(EnvVar(key=k, value=v) for k, v in mapping.items())
        if rendered:
            typer.echo(rendered)
    else:
        typer.echo(json.dumps(to_submission_map(vars), indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
