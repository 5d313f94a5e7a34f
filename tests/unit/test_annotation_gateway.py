"""Unit tests for the spaCy annotation gateway and document validation."""

from __future__ import annotations

import pytest
import spacy
from spacy.tokens import Doc, Span

from lexivoice.errors import AnnotationError
from lexivoice.models.datatypes import AnnotatedSentence, Document, Token
from lexivoice.nlp.gateway import validate_document
from lexivoice.nlp.spacy_gateway import SpacyAnnotationGateway


@pytest.fixture
def blank_nlp() -> spacy.language.Language:
    """Provide a blank English pipeline with rule-based sentence splitting."""

    nlp = spacy.blank("en")
    nlp.add_pipe("sentencizer")
    return nlp


def test_gateway_maps_sentences_and_defaults_missing_tags(blank_nlp) -> None:
    """Sentences should be numbered from 1 with `O` for tokens outside entities."""

    gateway = SpacyAnnotationGateway(nlp=blank_nlp)

    document = gateway.annotate("Alice met Bob . She waved .")

    assert [sentence.index for sentence in document.sentences] == [1, 2]
    assert document.sentences[0].text == "Alice met Bob ."
    assert [token.text for token in document.sentences[1].tokens] == ["She", "waved", "."]
    assert all(token.ner_tag == "O" for token in document.sentences[0].tokens)
    assert document.coref_chains == {}
    assert document.text() == "Alice met Bob . She waved ."


def test_gateway_converts_tags_entities_and_dependencies(blank_nlp) -> None:
    """Fine-grained tags, entity labels, and heads should map to typed edges."""

    def _parsed(_: str) -> Doc:
        return Doc(
            blank_nlp.vocab,
            words=["Alice", "sings", "."],
            spaces=[True, False, False],
            tags=["NNP", "VBZ", "."],
            heads=[1, 1, 1],
            deps=["nsubj", "ROOT", "punct"],
            ents=["B-PERSON", "O", "O"],
        )

    document = SpacyAnnotationGateway(nlp=_parsed).annotate("Alice sings.")
    sentence = document.sentences[0]

    assert sentence.text == "Alice sings."
    assert sentence.tokens == (
        Token(text="Alice", pos_tag="NNP", ner_tag="PERSON"),
        Token(text="sings", pos_tag="VBZ", ner_tag="O"),
        Token(text=".", pos_tag=".", ner_tag="O"),
    )
    assert sentence.dependencies.to_text() == (
        "nsubj(sings-2, Alice-1)\nroot(ROOT-0, sings-2)\npunct(sings-2, .-3)\n"
    )
    assert [edge.dependent_text for edge in sentence.dependencies.roots()] == ["sings"]


def test_gateway_reads_coreference_clusters(blank_nlp) -> None:
    """Coreference span groups should become chains with a non-pronoun representative."""

    def _with_coref(text: str) -> Doc:
        doc = blank_nlp(text)
        doc[0].pos_ = "PRON"
        doc.spans["coref_clusters_1"] = [Span(doc, 3, 4), Span(doc, 0, 1)]
        return doc

    document = SpacyAnnotationGateway(nlp=_with_coref).annotate("She waved . Alice smiled .")
    chain = document.coref_chains[1]

    assert [mention.text for mention in chain.mentions] == ["She", "Alice"]
    assert chain.representative.text == "Alice"
    assert (chain.representative.sentence_index, chain.representative.start) == (2, 1)
    assert chain.representative.end == 2


def test_gateway_wraps_pipeline_failures() -> None:
    """Engine exceptions and missing sentence boundaries should become `AnnotationError`."""

    def _broken(_: str) -> Doc:
        raise RuntimeError("engine crashed")

    with pytest.raises(AnnotationError, match="engine crashed"):
        SpacyAnnotationGateway(nlp=_broken).annotate("text")

    with pytest.raises(AnnotationError) as exc_info:
        SpacyAnnotationGateway(nlp=spacy.blank("en")).annotate("No sentence splitter here.")
    assert exc_info.value.stage == "annotate"


def test_gateway_reports_missing_model_with_download_hint() -> None:
    """An uninstalled model package should fail with an install hint."""

    gateway = SpacyAnnotationGateway(model_name="lexivoice_missing_model")

    with pytest.raises(AnnotationError) as exc_info:
        gateway.annotate("Hello.")

    assert exc_info.value.hint == (
        "Install it with `python -m spacy download lexivoice_missing_model`."
    )


def test_validate_document_rejects_unusable_results() -> None:
    """Non-documents, misnumbered sentences, and empty sentences are unusable."""

    with pytest.raises(AnnotationError, match="expected a document"):
        validate_document({"sentences": []})

    misnumbered = Document(
        sentences=(AnnotatedSentence(index=2, text="Hi.", tokens=(Token("Hi", "UH", "O"),)),)
    )
    with pytest.raises(AnnotationError, match="numbered 2"):
        validate_document(misnumbered)

    empty = Document(sentences=(AnnotatedSentence(index=1, text="", tokens=()),))
    with pytest.raises(AnnotationError, match="has no tokens"):
        validate_document(empty)

    usable = Document(sentences=())
    assert validate_document(usable) is usable


def test_gateway_numbers_coreference_chains_by_cluster_suffix(blank_nlp) -> None:
    """`coref_clusters_2` should become chain 1 ahead of `coref_clusters_10`."""

    def _with_clusters(text: str) -> Doc:
        doc = blank_nlp(text)
        doc.spans["coref_clusters_10"] = [Span(doc, 3, 4)]
        doc.spans["coref_clusters_2"] = [Span(doc, 0, 1)]
        return doc

    document = SpacyAnnotationGateway(nlp=_with_clusters).annotate("She waved . Alice smiled .")

    assert sorted(document.coref_chains) == [1, 2]
    assert document.coref_chains[1].representative.text == "She"
    assert document.coref_chains[2].representative.text == "Alice"
