"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
run summaries, and lexeme listings.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import Lexeme, NarrationResult, RunReport


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_lexemes(lexemes: list[Lexeme]) -> None:
    """Print one `Lexeme:` row per lexeme in source order."""

    for lexeme in lexemes:
        typer.echo(f"Lexeme: {lexeme.text}\t{lexeme.kind}")


def echo_narration_summary(narration: NarrationResult | None) -> None:
    """Print narration status, audio location, and failed sentence positions."""

    if narration is None:
        typer.echo("Narration: not run")
        return
    if narration.status == "voice_not_found":
        typer.secho(
            f"Cannot find the specified voice: {narration.voice_name}",
            fg=typer.colors.YELLOW,
        )
        return
    typer.echo(f"Narration: {narration.status} ({narration.spoken_count} sentence(s) spoken)")
    if narration.audio_path is not None:
        typer.echo(f"Audio: {narration.audio_path}")
    if narration.failed_sentences:
        failed = ", ".join(str(index) for index in narration.failed_sentences)
        typer.echo(f"Synthesis failed for sentence(s): {failed}")


def echo_run_summary(report: RunReport) -> None:
    """Print lexeme, sentence, and artifact counts for a finished run."""

    typer.echo(f"Lexemes: {report.lexeme_count}")
    typer.echo(f"Sentences: {report.sentence_count}")
    typer.echo(f"Coreference chains: {report.coref_chain_count}")
    typer.echo(f"Artifact triples written: {len(report.artifacts)}")
    if report.failed_artifact_sentences:
        failed = ", ".join(str(index) for index in report.failed_artifact_sentences)
        typer.echo(f"Artifact writes failed for sentence(s): {failed}")
    if report.cancelled:
        typer.echo("Run cancelled before completion.")
    echo_narration_summary(report.narration)
