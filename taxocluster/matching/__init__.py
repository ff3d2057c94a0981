"""Keyword extraction, synonym resolution and token classification."""

from taxocluster.matching.extractor import KeywordExtractor
from taxocluster.matching.synonyms import SynonymResolver
from taxocluster.matching.classifier import (
    ClassificationResult,
    TokenClassifier,
    TokenKind,
    TokenRole,
    classify_token,
)

__all__ = [
    "KeywordExtractor", "SynonymResolver",
    "ClassificationResult", "TokenClassifier", "TokenKind", "TokenRole",
    "classify_token",
]
