"""Core datatypes shared across Lexivoice modules.

Responsibilities:
- Represent immutable records exchanged between pipeline stages.
- Keep annotation output independent from any concrete NLP engine.

Key types:
- `Lexeme`, `LexemeBuffer`, `Token`, `DependencyEdge`, `DependencyGraph`,
  `AnnotatedSentence`, `Mention`, `CorefChain`, `Document`,
  `SentenceArtifacts`, `NarrationResult`, and `RunReport`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping

LexemeKind = Literal["word", "number", "other"]
NarrationStatus = Literal["completed", "voice_not_found", "cancelled", "skipped"]


@dataclass(frozen=True, slots=True)
class Lexeme:
    """A classified minimal text unit produced by tokenization.

    Attributes:
        text: Surface form emitted by the tokenizer (never empty).
        kind: Shape classification, `word`, `number`, or `other`.
    """

    text: str
    kind: LexemeKind


class LexemeBuffer:
    """Append-only ordered lexeme sequence owned by one pipeline run."""

    __slots__ = ("_lexemes",)

    def __init__(self, lexemes: Iterable[Lexeme] = ()) -> None:
        self._lexemes: list[Lexeme] = list(lexemes)

    def append(self, lexeme: Lexeme) -> None:
        self._lexemes.append(lexeme)

    def extend(self, lexemes: Iterable[Lexeme]) -> None:
        self._lexemes.extend(lexemes)

    def __iter__(self) -> Iterator[Lexeme]:
        return iter(tuple(self._lexemes))

    def __len__(self) -> int:
        return len(self._lexemes)

    def __getitem__(self, index: int) -> Lexeme:
        return self._lexemes[index]

    def texts(self) -> list[str]:
        """Return surface forms in source order."""

        return [lexeme.text for lexeme in self._lexemes]


@dataclass(frozen=True, slots=True)
class Token:
    """One annotated token.

    Attributes:
        text: Surface text as segmented by the annotation engine.
        pos_tag: Part-of-speech tag.
        ner_tag: Named-entity tag, `O` outside any entity.
    """

    text: str
    pos_tag: str
    ner_tag: str


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """One typed dependency between two 1-based token positions.

    A `head_index` of 0 denotes the artificial `ROOT` node.
    """

    relation: str
    head_index: int
    head_text: str
    dependent_index: int
    dependent_text: str

    def render(self) -> str:
        """Render the edge as `relation(head-i, dependent-j)`."""

        return (
            f"{self.relation}({self.head_text}-{self.head_index}, "
            f"{self.dependent_text}-{self.dependent_index})"
        )


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Dependency graph of one sentence, stored as ordered typed edges."""

    edges: tuple[DependencyEdge, ...] = field(default_factory=tuple)

    def to_text(self) -> str:
        """Return the canonical serialized form, one edge per line."""

        return "".join(f"{edge.render()}\n" for edge in self.edges)

    def roots(self) -> tuple[DependencyEdge, ...]:
        return tuple(edge for edge in self.edges if edge.head_index == 0)


@dataclass(frozen=True, slots=True)
class AnnotatedSentence:
    """Annotation output for one sentence.

    Attributes:
        index: 1-based sentence position in the document.
        text: Sentence text as recovered by the annotation engine.
        tokens: Ordered annotated tokens.
        dependencies: Dependency graph over `tokens`.
    """

    index: int
    text: str
    tokens: tuple[Token, ...]
    dependencies: DependencyGraph = field(default_factory=DependencyGraph)


@dataclass(frozen=True, slots=True)
class Mention:
    """A coreference mention as a token span within one sentence.

    Attributes:
        sentence_index: 1-based sentence index.
        start: 1-based inclusive token start within the sentence.
        end: 1-based exclusive token end within the sentence.
        text: Mention surface text.
    """

    sentence_index: int
    start: int
    end: int
    text: str


@dataclass(frozen=True, slots=True)
class CorefChain:
    """Mentions referring to the same entity, with one representative."""

    chain_id: int
    mentions: tuple[Mention, ...]
    representative_index: int = 0

    @property
    def representative(self) -> Mention:
        return self.mentions[self.representative_index]


@dataclass(frozen=True, slots=True)
class Document:
    """Annotated document returned by an annotation gateway."""

    sentences: tuple[AnnotatedSentence, ...]
    coref_chains: Mapping[int, CorefChain] = field(default_factory=dict)

    def text(self) -> str:
        """Join recovered sentence texts with single spaces."""

        return " ".join(sentence.text for sentence in self.sentences)


@dataclass(frozen=True, slots=True)
class SentenceArtifacts:
    """Write outcome for the artifact triple of one sentence."""

    sentence_index: int
    pos_tags_path: Path
    entity_tags_path: Path
    dependency_parse_path: Path
    pos_tags_written: bool
    entity_tags_written: bool
    dependency_parse_written: bool

    @property
    def complete(self) -> bool:
        return (
            self.pos_tags_written
            and self.entity_tags_written
            and self.dependency_parse_written
        )


@dataclass(frozen=True, slots=True)
class NarrationResult:
    """Observable outcome of one narration attempt.

    Attributes:
        voice_name: Requested voice identifier.
        status: `completed`, `voice_not_found`, `cancelled`, or `skipped`.
        audio_path: Audio sink location when a sink was created.
        sentences: Sentences submitted for synthesis, in order.
        failed_sentences: 1-based positions of sentences that failed to synthesize.
    """

    voice_name: str
    status: NarrationStatus
    audio_path: Path | None = None
    sentences: tuple[str, ...] = field(default_factory=tuple)
    failed_sentences: tuple[int, ...] = field(default_factory=tuple)

    @property
    def spoken_count(self) -> int:
        return len(self.sentences) - len(self.failed_sentences)


@dataclass(frozen=True, slots=True)
class RunReport:
    """Immutable record of one pipeline run."""

    input_path: Path
    lexeme_count: int
    sentence_count: int
    artifacts: tuple[SentenceArtifacts, ...]
    narration: NarrationResult | None
    coref_chain_count: int = 0
    cancelled: bool = False

    @property
    def failed_artifact_sentences(self) -> tuple[int, ...]:
        return tuple(item.sentence_index for item in self.artifacts if not item.complete)
