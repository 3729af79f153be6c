"""
Vocabulary and document frequency build.

Scans the full corpus once, assigning stable term indices in first-seen
order and counting the documents each term occurs in.

Dependencies: nba_vectors.core.sparse_encoding.tokenizer
System role: Pass 1 of the two-pass sparse encoding
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from nba_vectors.core.sparse_encoding.tokenizer import normalize
from nba_vectors.models import Document

logger = logging.getLogger(__name__)

Vocabulary = Mapping[str, int]
DocumentFrequency = Mapping[str, int]


class VocabularyBuilder:
    """Build a frozen vocabulary and document frequency table from a corpus."""

    def build(self, documents: Iterable[Document]) -> tuple[Vocabulary, DocumentFrequency]:
        """
        Scan documents and build term indices and document frequencies.

        Each document contributes at most one count per term. Indices come
        from a counter local to this call, so two builds over the same corpus
        in the same order give identical vocabularies.

        Args:
            documents: Corpus in a fixed order

        Returns:
            tuple[Vocabulary, DocumentFrequency]: Read-only mappings
        """
        vocabulary: dict[str, int] = {}
        document_frequency: dict[str, int] = {}
        next_index = 0
        scanned = 0

        for document in documents:
            scanned += 1
            # dict.fromkeys keeps first-occurrence order within the document
            for token in dict.fromkeys(normalize(document.text)):
                if token not in vocabulary:
                    vocabulary[token] = next_index
                    next_index += 1
                document_frequency[token] = document_frequency.get(token, 0) + 1

        logger.info(
            f"{__name__}:build - Built vocabulary with {len(vocabulary)} terms",
            extra={"documents": scanned, "terms": len(vocabulary)},
        )
        return MappingProxyType(vocabulary), MappingProxyType(document_frequency)
