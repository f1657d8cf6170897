"""subbatch CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from subbatch import __version__
from subbatch.cli.run import run

app = typer.Typer(
    name="subbatch",
    help="subbatch: batch-transcribe MP4 videos into SRT and WebVTT subtitles.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"subbatch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """subbatch: batch-transcribe MP4 videos into SRT and WebVTT subtitles."""
    # Load .env file for API keys (OPENAI_API_KEY, etc.)
    # Does not override existing env vars, shell exports take precedence
    load_dotenv(override=False)


app.command("run")(run)
