"""
TF-IDF sparse encoder.

Converts one text into a sparse vector using the corpus-wide vocabulary and
IDF tables. CorpusStatistics bundles those tables so that the build step is
a single pure call and the encode step only reads its result.

Dependencies: nba_vectors.core.sparse_encoding, nba_vectors.models
System role: Pass 2 of the two-pass sparse encoding, also used for queries
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from nba_vectors.core.sparse_encoding.idf import IDFCalculator, InverseDocumentFrequency
from nba_vectors.core.sparse_encoding.tokenizer import normalize, term_frequencies
from nba_vectors.core.sparse_encoding.vocabulary import (
    DocumentFrequency,
    Vocabulary,
    VocabularyBuilder,
)
from nba_vectors.models import Document, SparseVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusStatistics:
    """Vocabulary, document frequency and IDF of one corpus scan."""

    vocabulary: Vocabulary
    document_frequency: DocumentFrequency
    idf: InverseDocumentFrequency
    total_documents: int

    @classmethod
    def from_documents(cls, documents: Iterable[Document]) -> "CorpusStatistics":
        """
        Run the full build pass over a corpus.

        Args:
            documents: Corpus in a fixed order

        Returns:
            CorpusStatistics: Immutable tables for encoding
        """
        corpus = list(documents)
        vocabulary, document_frequency = VocabularyBuilder().build(corpus)
        idf = IDFCalculator().compute(document_frequency, len(corpus))
        return cls(
            vocabulary=vocabulary,
            document_frequency=document_frequency,
            idf=idf,
            total_documents=len(corpus),
        )

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)


class TFIDFEncoder:
    """Encode texts as TF-IDF sparse vectors."""

    def __init__(self, statistics: CorpusStatistics | None = None) -> None:
        """
        Initialize encoder, optionally bound to corpus statistics.

        Args:
            statistics: Tables used by encode_text(); encode() takes them explicitly
        """
        self._statistics = statistics

    def encode(
        self,
        text: str,
        vocabulary: Mapping[str, int],
        idf: Mapping[str, float],
    ) -> SparseVector:
        """
        Encode text against the given vocabulary and IDF tables.

        Terms missing from the vocabulary are dropped, as are terms whose
        weight is zero (present in every document).

        Args:
            text: Record or query text
            vocabulary: term -> index
            idf: term -> inverse document frequency

        Returns:
            SparseVector: Nonzero weights in first-occurrence order of the terms
        """
        tokens = normalize(text)
        if not tokens:
            return SparseVector()

        indices: list[int] = []
        values: list[float] = []
        out_of_vocabulary = 0
        for term, frequency in term_frequencies(tokens).items():
            index = vocabulary.get(term)
            if index is None:
                out_of_vocabulary += 1
                continue
            weight = frequency * idf.get(term, 0.0)
            if weight > 0:
                indices.append(index)
                values.append(weight)

        if out_of_vocabulary:
            logger.debug(
                f"{__name__}:encode - Dropped {out_of_vocabulary} out-of-vocabulary terms"
            )
        return SparseVector(indices=tuple(indices), values=tuple(values))

    def encode_text(self, text: str) -> SparseVector:
        """
        Encode text against the bound corpus statistics.

        Raises:
            RuntimeError: When the encoder was created without statistics
        """
        if self._statistics is None:
            raise RuntimeError("TFIDFEncoder has no corpus statistics; use encode() instead")
        return self.encode(text, self._statistics.vocabulary, self._statistics.idf)
