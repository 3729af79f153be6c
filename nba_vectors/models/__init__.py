"""
Models for the vectorization pipeline.

Exports: Document, SparseVector, Hit, TargetStatus, TargetReport, UploadReport, VectorizeReport
"""

from .document import Document
from .sparse_vector import SparseVector
from .upload import Hit, TargetReport, TargetStatus, UploadReport, VectorizeReport

__all__ = [
    "Document",
    "SparseVector",
    "Hit",
    "TargetStatus",
    "TargetReport",
    "UploadReport",
    "VectorizeReport",
]
