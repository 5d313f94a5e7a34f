"""spaCy-backed annotation gateway.

Responsibilities:
- Load a spaCy pipeline lazily, once per gateway.
- Map spaCy sentences, tags, entities, and dependency heads to `Document`.
- Collect coreference clusters stored under `doc.spans["coref_clusters_*"]`
  when a coreference component is part of the pipeline.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..errors import AnnotationError
from ..models.datatypes import (
    AnnotatedSentence,
    CorefChain,
    DependencyEdge,
    DependencyGraph,
    Document,
    Mention,
    Token,
)

_COREF_SPAN_PREFIX = "coref_clusters"


def _cluster_sort_key(key: str) -> tuple[int, str]:
    """Order `coref_clusters_<n>` keys by their numeric suffix."""

    suffix = key[len(_COREF_SPAN_PREFIX):].lstrip("_")
    return (int(suffix) if suffix.isdigit() else -1, key)


class SpacyAnnotationGateway:
    """Annotation gateway running a spaCy `Language` pipeline."""

    def __init__(
        self,
        model_name: str = "en_core_web_sm",
        nlp: Callable[[str], Any] | None = None,
    ) -> None:
        """Initialize with a model package name or an already loaded pipeline."""

        self.model_name = model_name
        self._nlp = nlp

    def load_model(self) -> Callable[[str], Any]:
        """Load the spaCy model on first use."""

        if self._nlp is None:
            import spacy

            try:
                self._nlp = spacy.load(self.model_name)
            except OSError as exc:
                raise AnnotationError(
                    stage="annotate",
                    detail=f"spaCy model `{self.model_name}` could not be loaded: {exc}",
                    hint=f"Install it with `python -m spacy download {self.model_name}`.",
                ) from exc
        return self._nlp

    def annotate(self, text: str) -> Document:
        """Run the pipeline over `text` and convert the result."""

        nlp = self.load_model()
        try:
            doc = nlp(text)
            # Raises ValueError when no component set sentence boundaries.
            sentence_spans = list(doc.sents)
        except Exception as exc:
            raise AnnotationError(
                stage="annotate",
                detail=f"spaCy pipeline `{self.model_name}` failed: {exc}",
            ) from exc

        sentences = tuple(
            self._convert_sentence(index, span)
            for index, span in enumerate(sentence_spans, start=1)
        )
        chains = self._convert_coref_chains(doc, sentence_spans)
        return Document(sentences=sentences, coref_chains=chains)

    def _convert_sentence(self, index: int, span: Any) -> AnnotatedSentence:
        tokens = tuple(
            Token(
                text=token.text,
                pos_tag=token.tag_ or token.pos_ or "X",
                ner_tag=token.ent_type_ or "O",
            )
            for token in span
        )
        return AnnotatedSentence(
            index=index,
            text=span.text,
            tokens=tokens,
            dependencies=self._convert_dependencies(span),
        )

    @staticmethod
    def _convert_dependencies(span: Any) -> DependencyGraph:
        """Convert token heads into typed edges with sentence-relative positions."""

        offset = span.start
        edges: list[DependencyEdge] = []
        for token in span:
            dependent_index = token.i - offset + 1
            if token.head.i == token.i:
                edges.append(
                    DependencyEdge(
                        relation="root",
                        head_index=0,
                        head_text="ROOT",
                        dependent_index=dependent_index,
                        dependent_text=token.text,
                    )
                )
                continue
            edges.append(
                DependencyEdge(
                    relation=token.dep_.lower() or "dep",
                    head_index=token.head.i - offset + 1,
                    head_text=token.head.text,
                    dependent_index=dependent_index,
                    dependent_text=token.text,
                )
            )
        return DependencyGraph(edges=tuple(edges))

    @staticmethod
    def _convert_coref_chains(doc: Any, sentence_spans: list[Any]) -> dict[int, CorefChain]:
        sentence_index_by_start = {
            span.start: index for index, span in enumerate(sentence_spans, start=1)
        }
        cluster_keys = sorted(
            (key for key in doc.spans.keys() if key.startswith(_COREF_SPAN_PREFIX)),
            key=_cluster_sort_key,
        )
        chains: dict[int, CorefChain] = {}
        for chain_id, key in enumerate(cluster_keys, start=1):
            mentions: list[Mention] = []
            representative_index: int | None = None
            for span in sorted(doc.spans[key], key=lambda item: item.start):
                sentence = span.sent
                mentions.append(
                    Mention(
                        sentence_index=sentence_index_by_start[sentence.start],
                        start=span.start - sentence.start + 1,
                        end=span.end - sentence.start + 1,
                        text=span.text,
                    )
                )
                is_pronoun = all(token.pos_ == "PRON" for token in span)
                if representative_index is None and not is_pronoun:
                    representative_index = len(mentions) - 1
            if not mentions:
                continue
            chains[chain_id] = CorefChain(
                chain_id=chain_id,
                mentions=tuple(mentions),
                representative_index=representative_index or 0,
            )
        return chains
