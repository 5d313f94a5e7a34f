"""CLI tests for the `run` and `tokenize` commands."""

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from lexivoice.cli import app
from lexivoice.config import LexivoiceConfig
from lexivoice.errors import PipelineStageError
from lexivoice.models.datatypes import NarrationResult, RunReport, SentenceArtifacts


def _artifacts(index: int, dependencies_written: bool) -> SentenceArtifacts:
    return SentenceArtifacts(
        sentence_index=index,
        pos_tags_path=Path(f"pos_tags_{index}.txt"),
        entity_tags_path=Path(f"named_entity_tags_{index}.txt"),
        dependency_parse_path=Path(f"dependency_parse_{index}.txt"),
        pos_tags_written=True,
        entity_tags_written=True,
        dependency_parse_written=dependencies_written,
    )


def test_tokenize_command_prints_lexemes_in_source_order(tmp_path: Path) -> None:
    """Tokenize should list every lexeme with its kind and the end-of-file line."""

    source = tmp_path / "Readable.txt"
    source.write_text("Hello, world 42!\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["tokenize", str(source)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "Lexeme: Hello\tword",
        "Lexeme: ,\tother",
        "Lexeme: world\tword",
        "Lexeme: 42\tnumber",
        "Lexeme: !\tother",
        "End of file reached.",
    ]


def test_tokenize_command_reports_missing_file(tmp_path: Path) -> None:
    """A missing input should fail at the read stage with exit code 1."""

    runner = CliRunner()

    result = runner.invoke(app, ["tokenize", str(tmp_path / "absent.txt")])

    assert result.exit_code == 1
    assert "tokenize failed at stage `read`: File not found" in result.output


def test_run_command_requires_input_without_config() -> None:
    """Run without an input path or config should fail at the config stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "run failed at stage `config`" in result.output
    assert "Hint: Pass `<input.txt>`" in result.output


def test_run_command_reports_missing_config_file(tmp_path: Path) -> None:
    """Run should fail with stage-aware diagnostics when `--config` path is missing."""

    runner = CliRunner()

    result = runner.invoke(app, ["run", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "run failed at stage `config`: Config file not found" in result.output


def test_run_command_merges_yaml_and_flags_then_prints_summary(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """CLI flags should override YAML values before the pipeline runs."""

    config_path = tmp_path / "lexivoice.yaml"
    config_path.write_text(
        "input_path: book.txt\nvoice_name: alan\npause_ms: 500\n", encoding="utf-8"
    )
    seen: list[LexivoiceConfig] = []

    def _fake_run(self: object, config: LexivoiceConfig) -> RunReport:
        _ = self
        seen.append(config)
        return RunReport(
            input_path=config.input_path,
            lexeme_count=7,
            sentence_count=2,
            artifacts=(_artifacts(1, True), _artifacts(2, False)),
            narration=NarrationResult(voice_name=config.voice_name, status="voice_not_found"),
        )

    monkeypatch.setattr("lexivoice.cli.LexivoicePipeline.run", _fake_run)
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["run", "--config", str(config_path), "--voice", "kevin16", "--out", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    assert seen[0].voice_name == "kevin16"
    assert seen[0].pause_ms == 500
    assert seen[0].output_dir == tmp_path
    assert "Lexemes: 7" in result.output
    assert "Artifact writes failed for sentence(s): 2" in result.output
    assert "Cannot find the specified voice: kevin16" in result.output


def test_run_command_reports_stage_error_with_hint(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Pipeline stage failures should print the stage, detail, and hint."""

    def _failing_run(*_: object, **__: object) -> None:
        raise PipelineStageError(
            stage="annotate",
            detail="spaCy model `en_core_web_sm` is not installed.",
            hint="Install it with `python -m spacy download en_core_web_sm`.",
        )

    monkeypatch.setattr("lexivoice.cli.LexivoicePipeline.run", _failing_run)
    runner = CliRunner()

    result = runner.invoke(app, ["run", str(tmp_path / "in.txt")])

    assert result.exit_code == 1
    assert "run failed at stage `annotate`" in result.output
    assert "Hint: Install it with `python -m spacy download en_core_web_sm`." in result.output
