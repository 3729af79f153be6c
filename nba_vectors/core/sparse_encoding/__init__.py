"""
Sparse vector generation.

Tokenizer, vocabulary build, IDF and TF-IDF encoding.

Exports: normalize, term_frequencies, VocabularyBuilder, IDFCalculator, TFIDFEncoder, CorpusStatistics
"""

from .idf import IDFCalculator
from .tfidf_encoder import CorpusStatistics, TFIDFEncoder
from .tokenizer import normalize, term_frequencies
from .vocabulary import VocabularyBuilder

__all__ = [
    "normalize",
    "term_frequencies",
    "VocabularyBuilder",
    "IDFCalculator",
    "TFIDFEncoder",
    "CorpusStatistics",
]
