"""Pipeline orchestration for Lexivoice.

Responsibilities:
- Define the stage order: read, reconstruct, annotate, artifacts, narrate.
- Own the lexeme buffer for the duration of one run.
- Coordinate stage outputs into an immutable `RunReport`.

Key types:
- `LexivoicePipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable

from ..audio.wav_sink import WavAudioSink
from ..config import LexivoiceConfig
from ..errors import AnnotationError, PipelineStageError
from ..io.reader import TextSourceReader
from ..io.storage import ArtifactStore
from ..models.datatypes import (
    Document,
    LexemeBuffer,
    NarrationResult,
    RunReport,
    SentenceArtifacts,
)
from ..nlp.gateway import AnnotationGateway, validate_document
from ..nlp.spacy_gateway import SpacyAnnotationGateway
from ..telemetry.logger import RunLogger
from ..text.reconstruct import reconstruct
from ..text.tokenizer import tokenize_line
from ..tts.narrator import SpeechOrchestrator
from ..tts.pacing import CancellationToken, Pacer
from ..tts.pyttsx3_voice import Pyttsx3VoiceRegistry
from ..tts.voices import VoiceRegistry
from .artifacts import ArtifactWriter
from .telemetry import PipelineTelemetryMixin


class LexivoicePipeline(PipelineTelemetryMixin):
    """Coordinate all stages for a single Lexivoice run."""

    def __init__(
        self,
        gateway: AnnotationGateway | None = None,
        voice_registry: VoiceRegistry | None = None,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
        sleeper: Callable[[float], object] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Initialize collaborators and optional logging/progress hooks.

        Args:
            gateway: Annotation engine; a spaCy gateway for `config.spacy_model`
                is created per run when omitted.
            voice_registry: Voice lookup; the pyttsx3 registry when omitted.
            run_logger: Structured logger for stage and failure events.
            stage_progress_callback: Called with `(stage, index, total)` on stage start.
            sleeper: Pause implementation between narrated sentences.
            cancellation: Token checked between sentences during artifact
                writing and narration.
        """

        self._gateway = gateway
        self._voice_registry = voice_registry
        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback
        self._sleeper = sleeper
        self.cancellation = cancellation if cancellation is not None else CancellationToken()

    def run(self, config: LexivoiceConfig) -> RunReport:
        """Run all stages for `config` and return the run report.

        Raises:
            PipelineStageError: For fatal failures (config, missing or unreadable
                input, annotation, speech resources).
        """

        self._validate_config(config)
        buffer = self._run_stage("read", lambda: self._read_lexemes(config))
        text = self._run_stage("reconstruct", lambda: reconstruct(buffer))
        document = self._run_stage("annotate", lambda: self._annotate(text, config))
        artifacts = self._run_stage("artifacts", lambda: self._write_artifacts(document, config))

        cancelled = len(artifacts) < len(document.sentences)
        narration: NarrationResult | None = None
        if not cancelled and config.narrate:
            narration = self._run_stage("narrate", lambda: self._narrate(document, config))
            cancelled = narration.status == "cancelled"
        elif not cancelled:
            narration = NarrationResult(voice_name=config.voice_name, status="skipped")

        return RunReport(
            input_path=config.input_path,
            lexeme_count=len(buffer),
            sentence_count=len(document.sentences),
            artifacts=tuple(artifacts),
            narration=narration,
            coref_chain_count=len(document.coref_chains),
            cancelled=cancelled,
        )

    def tokenize(self, config: LexivoiceConfig) -> LexemeBuffer:
        """Run only the read stage and return the lexeme buffer."""

        self._validate_config(config)
        return self._run_stage("read", lambda: self._read_lexemes(config))

    def _validate_config(self, config: LexivoiceConfig) -> None:
        """Validate top-level configuration and map failures to stage-aware error."""

        try:
            config.validate()
        except ValueError as exc:
            raise PipelineStageError(
                stage="config",
                detail=str(exc),
                hint="Update configuration values and rerun the command.",
            ) from exc

    def _read_lexemes(self, config: LexivoiceConfig) -> LexemeBuffer:
        """Tokenize the source file line by line into a fresh buffer."""

        buffer = LexemeBuffer()
        reader = TextSourceReader(config.input_path, encoding=config.encoding)
        for line in reader.lines():
            lexemes = tokenize_line(line)
            buffer.extend(lexemes)
            if self._run_logger is not None:
                for lexeme in lexemes:
                    self._run_logger.log_debug("read", "lexeme", text=lexeme.text, kind=lexeme.kind)
        return buffer

    def _annotate(self, text: str, config: LexivoiceConfig) -> Document:
        """Annotate reconstructed text; blank text yields an empty document."""

        if not text.strip():
            return Document(sentences=())
        gateway = self._gateway or SpacyAnnotationGateway(model_name=config.spacy_model)
        try:
            result = gateway.annotate(text)
        except PipelineStageError:
            raise
        except Exception as exc:
            raise AnnotationError(
                stage="annotate",
                detail=f"Annotation engine failed: {exc}",
            ) from exc
        document = validate_document(result)
        if self._run_logger is not None:
            for sentence in document.sentences:
                self._run_logger.log_debug(
                    "annotate",
                    "sentence",
                    index=sentence.index,
                    text=sentence.text,
                    tokens=len(sentence.tokens),
                    edges=len(sentence.dependencies.edges),
                )
        return document

    def _write_artifacts(
        self, document: Document, config: LexivoiceConfig
    ) -> list[SentenceArtifacts]:
        """Write the artifact triple per sentence until done or cancelled."""

        writer = ArtifactWriter(ArtifactStore(config.output_dir), run_logger=self._run_logger)
        written: list[SentenceArtifacts] = []
        for sentence in document.sentences:
            if self.cancellation.cancelled:
                if self._run_logger is not None:
                    self._run_logger.log_warning("artifacts", "cancelled", sentence=sentence.index)
                break
            written.append(writer.write_sentence(sentence))
        return written

    def _narrate(self, document: Document, config: LexivoiceConfig) -> NarrationResult:
        """Narrate the recovered sentence text into the configured WAV file."""

        registry = self._voice_registry or Pyttsx3VoiceRegistry()
        pacer = Pacer(
            pause_seconds=config.pause_seconds,
            sleeper=self._sleeper,
            cancellation=self.cancellation,
        )
        narrator = SpeechOrchestrator(registry, pacer=pacer, run_logger=self._run_logger)
        return narrator.narrate(
            document.text(),
            config.voice_name,
            sink_factory=lambda: WavAudioSink(config.audio_path),
        )
