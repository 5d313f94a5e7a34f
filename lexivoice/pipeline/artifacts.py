"""Per-sentence linguistic artifact writing.

Responsibilities:
- Serialize token tags, entity tags, and dependency parses of one sentence.
- Name artifact files by 1-based sentence index, replacing prior content.
- Report write failures as `False` results instead of aborting the run.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..io.storage import ArtifactStore
from ..models.datatypes import AnnotatedSentence, DependencyGraph, SentenceArtifacts, Token
from ..telemetry.logger import RunLogger

_STAGE = "artifacts"


def pos_tags_name(sentence_index: int) -> Path:
    return Path(f"pos_tags_{sentence_index}.txt")


def named_entity_tags_name(sentence_index: int) -> Path:
    return Path(f"named_entity_tags_{sentence_index}.txt")


def dependency_parse_name(sentence_index: int) -> Path:
    return Path(f"dependency_parse_{sentence_index}.txt")


def tag_lines(pairs: Iterable[tuple[str, str]]) -> str:
    """Render `surface<TAB>tag` lines, each newline-terminated."""

    return "".join(f"{surface}\t{tag}\n" for surface, tag in pairs)


class ArtifactWriter:
    """Write the artifact triple for annotated sentences into an `ArtifactStore`."""

    def __init__(self, store: ArtifactStore, run_logger: RunLogger | None = None) -> None:
        self.store = store
        self._run_logger = run_logger

    def write_token_tags(self, tokens: Iterable[Token], sentence_index: int) -> bool:
        """Write `surface<TAB>pos` lines to `pos_tags_<i>.txt`."""

        content = tag_lines((token.text, token.pos_tag) for token in tokens)
        return self._save(pos_tags_name(sentence_index), content, sentence_index, "pos_tags")

    def write_entity_tags(self, tokens: Iterable[Token], sentence_index: int) -> bool:
        """Write `surface<TAB>ner` lines to `named_entity_tags_<i>.txt`."""

        content = tag_lines((token.text, token.ner_tag) for token in tokens)
        return self._save(
            named_entity_tags_name(sentence_index), content, sentence_index, "named_entity_tags"
        )

    def write_dependency_parse(self, graph: DependencyGraph, sentence_index: int) -> bool:
        """Write the canonical graph text to `dependency_parse_<i>.txt`."""

        saved = self._save(
            dependency_parse_name(sentence_index),
            graph.to_text(),
            sentence_index,
            "dependency_parse",
        )
        if saved and self._run_logger is not None:
            self._run_logger.log_info(
                _STAGE, "dependency_parse_saved", sentence=sentence_index, edges=len(graph.edges)
            )
        return saved

    def write_sentence(self, sentence: AnnotatedSentence) -> SentenceArtifacts:
        """Write all three artifacts; each kind is attempted independently."""

        index = sentence.index
        return SentenceArtifacts(
            sentence_index=index,
            pos_tags_path=self.store.path_for(pos_tags_name(index)),
            entity_tags_path=self.store.path_for(named_entity_tags_name(index)),
            dependency_parse_path=self.store.path_for(dependency_parse_name(index)),
            pos_tags_written=self.write_token_tags(sentence.tokens, index),
            entity_tags_written=self.write_entity_tags(sentence.tokens, index),
            dependency_parse_written=self.write_dependency_parse(sentence.dependencies, index),
        )

    def _save(self, name: Path, content: str, sentence_index: int, kind: str) -> bool:
        try:
            self.store.save_text(name, content)
        except OSError as exc:
            if self._run_logger is not None:
                self._run_logger.log_warning(
                    _STAGE,
                    "artifact_write_failed",
                    sentence=sentence_index,
                    kind=kind,
                    error_type=type(exc.__cause__ or exc).__name__,
                )
            return False
        return True
