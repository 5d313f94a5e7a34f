"""Annotation gateway contract and engine adapters."""

from .gateway import AnnotationGateway, validate_document
from .spacy_gateway import SpacyAnnotationGateway

__all__ = ["AnnotationGateway", "SpacyAnnotationGateway", "validate_document"]
