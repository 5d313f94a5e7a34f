"""Command-line interface for Lexivoice.

Responsibilities:
- Expose the `run` and `tokenize` commands.
- Convert CLI arguments and YAML defaults into `LexivoiceConfig`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_lexemes, echo_run_summary, exit_with_command_error
from .config import ConfigLoader, LexivoiceConfig
from .errors import PipelineStageError
from .pipeline import LexivoicePipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="lexivoice",
    no_args_is_help=True,
    help="Lexivoice CLI.",
)


class RunProgressIndicator:
    """Render deterministic per-stage progress lines for long-running commands."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )


def _load_yaml_config(config_path: Path | None) -> LexivoiceConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_run_config(
    config_file: Path | None,
    input_path: Path | None,
    out: Path | None,
    voice: str | None,
    pause_ms: int | None,
    model: str | None,
    narrate: bool | None,
) -> LexivoiceConfig:
    """Resolve effective config from YAML defaults and explicit CLI overrides."""

    loaded_config = _load_yaml_config(config_file)
    if loaded_config is None:
        if input_path is None:
            raise PipelineStageError(
                stage="config",
                detail="Input text path is required when `--config` is not provided.",
                hint="Pass `<input.txt>` or use `--config <path.yaml>` with `input_path`.",
            )
        loaded_config = LexivoiceConfig(input_path=input_path)

    overrides: dict[str, object] = {}
    if input_path is not None:
        overrides["input_path"] = input_path
    if out is not None:
        overrides["output_dir"] = out
    if voice is not None:
        overrides["voice_name"] = voice
    if pause_ms is not None:
        overrides["pause_ms"] = pause_ms
    if model is not None:
        overrides["spacy_model"] = model
    if narrate is not None:
        overrides["narrate"] = narrate
    return replace(loaded_config, **overrides)


@app.command("run")
def run_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="Path to source text. Required unless provided by `--config`."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with run defaults."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory for artifacts and audio."),
    ] = None,
    voice: Annotated[
        str | None,
        typer.Option("--voice", help="Synthesis voice name or id."),
    ] = None,
    pause_ms: Annotated[
        int | None,
        typer.Option("--pause-ms", min=0, help="Pause between narrated sentences (ms)."),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", help="spaCy model package used for annotation."),
    ] = None,
    narrate: Annotated[
        bool | None,
        typer.Option("--narrate/--no-narrate", help="Run or skip the narration stage."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Include per-lexeme and per-sentence debug events."),
    ] = False,
) -> None:
    """Run tokenize, annotate, artifact, and narration stages."""

    try:
        config = _resolve_run_config(
            config_file=config_file,
            input_path=input_path,
            out=out,
            voice=voice,
            pause_ms=pause_ms,
            model=model,
            narrate=narrate,
        )
        progress = RunProgressIndicator(command_name="run")
        pipeline = LexivoicePipeline(
            run_logger=RunLogger(level="DEBUG" if verbose else "INFO"),
            stage_progress_callback=progress.on_stage_start,
        )
        report = pipeline.run(config)
    except Exception as exc:
        exit_with_command_error("run", exc)

    echo_run_summary(report)


@app.command("tokenize")
def tokenize_command(
    input_path: Annotated[Path, typer.Argument(help="Path to source text.")],
    encoding: Annotated[
        str, typer.Option("--encoding", help="Source text encoding.")
    ] = "utf-8",
) -> None:
    """Print the lexemes of a text file without annotating it."""

    try:
        pipeline = LexivoicePipeline()
        buffer = pipeline.tokenize(LexivoiceConfig(input_path=input_path, encoding=encoding))
    except Exception as exc:
        exit_with_command_error("tokenize", exc)

    echo_lexemes(list(buffer))
    typer.echo("End of file reached.")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
