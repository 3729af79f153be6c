"""
Inverse document frequency.

Dependencies: math (stdlib)
System role: Global term weights derived from the vocabulary build
"""

import math
from collections.abc import Mapping
from types import MappingProxyType

InverseDocumentFrequency = Mapping[str, float]


class IDFCalculator:
    """Derive IDF weights as ln(total_docs / doc_freq)."""

    def compute(
        self,
        document_frequency: Mapping[str, int],
        total_docs: int,
    ) -> InverseDocumentFrequency:
        """
        Compute the IDF of every term.

        A term found in every document gets 0, which zeroes its TF-IDF weight.

        Args:
            document_frequency: term -> number of documents containing it
            total_docs: Corpus size

        Returns:
            InverseDocumentFrequency: Read-only term -> idf mapping
                (empty when total_docs is 0)

        Raises:
            ValueError: When a document frequency is not positive
        """
        if total_docs <= 0:
            return MappingProxyType({})

        idf: dict[str, float] = {}
        for term, frequency in document_frequency.items():
            if frequency <= 0:
                raise ValueError(f"Document frequency for '{term}' must be positive, got {frequency}")
            idf[term] = math.log(total_docs / frequency)
        return MappingProxyType(idf)
