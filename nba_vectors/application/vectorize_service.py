"""
Vectorize service - orchestrates the complete NBA vectorization run.

Orchestration flow:
1. Build corpus statistics (vocabulary, document frequency, IDF) over all documents
2. Shape dense records (raw text, embedded by the index service)
3. Encode sparse records with TF-IDF against the finished statistics
4. Upload dense then sparse through BatchUpsertPipeline
5. Optionally wait, read index stats and run one smoke query per index

Dependencies: nba_vectors.core, nba_vectors.boundary.vdb, nba_vectors.configs
System role: Application layer entry point used by the CLI
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from nba_vectors.boundary.vdb.index_client import DenseSearchIndex, IndexWriter, SparseSearchIndex
from nba_vectors.boundary.vdb.pinecone_index import dense_record, sparse_record
from nba_vectors.configs.upload import UploadSettings
from nba_vectors.core.exceptions import NbaVectorsException
from nba_vectors.core.sparse_encoding import CorpusStatistics, TFIDFEncoder
from nba_vectors.core.upload import BatchUpsertPipeline, CancellableSleeper, Sleeper, UploadPhase
from nba_vectors.models import Document, Hit, TargetStatus, UploadReport, VectorizeReport
from nba_vectors.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class VectorizeService:
    """Encode a corpus and upload it to the dense and sparse indices."""

    def __init__(
        self,
        dense_index: DenseSearchIndex,
        sparse_index: SparseSearchIndex,
        settings: UploadSettings | None = None,
        sleeper: Sleeper | None = None,
    ) -> None:
        """
        Initialize vectorize service.

        Args:
            dense_index: Target with integrated embedding
            sparse_index: Target for TF-IDF vectors
            settings: Batching, timing and smoke-test settings (env defaults if None)
            sleeper: Wait primitive shared by the pipeline and the settle wait
        """
        self._dense = dense_index
        self._sparse = sparse_index
        self._settings = settings or UploadSettings()
        self._sleeper = sleeper or CancellableSleeper()
        self._pipeline = BatchUpsertPipeline(
            sleeper=self._sleeper,
            inter_batch_delay_seconds=self._settings.inter_batch_delay_seconds,
            rate_limit_cooldown_seconds=self._settings.rate_limit_cooldown_seconds,
            max_retries=self._settings.max_retries,
        )

    def run(self, documents: Sequence[Document]) -> VectorizeReport:
        """
        Execute the full vectorization run.

        Args:
            documents: Corpus in a fixed order

        Returns:
            VectorizeReport: Counts, per-target upload outcome and smoke-test hits

        Raises:
            TransientServiceError: When a batch still fails after its retry
            UploadCancelledError: When a wait was cancelled
            FatalError: For any other unrecoverable error
        """
        start_time = time.perf_counter()
        documents = list(documents)

        # Every document must be counted before any vector is produced.
        statistics = CorpusStatistics.from_documents(documents)
        encoder = TFIDFEncoder(statistics)
        logger.info(
            f"{__name__}:run - Built vocabulary with {statistics.vocabulary_size} terms "
            f"from {len(documents)} documents"
        )

        dense_records = [dense_record(document) for document in documents]
        sparse_records, omitted = self._encode_sparse(documents, encoder)

        upload = self._pipeline.run(
            [
                UploadPhase(self._dense, dense_records, self._settings.dense_batch_size),
                UploadPhase(self._sparse, sparse_records, self._settings.sparse_batch_size),
            ]
        )

        dense_hits: list[Hit] = []
        sparse_hits: list[Hit] = []
        if self._settings.smoke_test_enabled:
            dense_hits, sparse_hits = self._smoke_test(encoder, upload)

        processing_time_ms = (time.perf_counter() - start_time) * 1000
        report = VectorizeReport(
            document_count=len(documents),
            vocabulary_size=statistics.vocabulary_size,
            dense_records=len(dense_records),
            sparse_records=len(sparse_records),
            sparse_omitted=omitted,
            upload=upload,
            dense_hits=dense_hits,
            sparse_hits=sparse_hits,
            processing_time_ms=processing_time_ms,
        )
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Vectorization finished in {processing_time_ms:.0f}ms",
            documents=report.document_count,
            vocabulary=report.vocabulary_size,
            targets=[f"{t.target}={t.status.value}" for t in upload.targets],
        )
        return report

    def _encode_sparse(
        self,
        documents: list[Document],
        encoder: TFIDFEncoder,
    ) -> tuple[list[dict[str, Any]], int]:
        """Encode every document; ones without a nonzero weight are left out."""
        records: list[dict[str, Any]] = []
        omitted = 0
        for document in documents:
            vector = encoder.encode_text(document.text)
            if vector.is_empty:
                omitted += 1
                logger.debug(f"{__name__}:_encode_sparse - {document.id} has no nonzero weight, omitted")
                continue
            records.append(sparse_record(document, vector))

        if omitted:
            logger.warning(
                f"{__name__}:_encode_sparse - Omitted {omitted} documents with empty sparse vectors"
            )
        return records, omitted

    def _smoke_test(self, encoder: TFIDFEncoder, upload: UploadReport) -> tuple[list[Hit], list[Hit]]:
        """Wait for the indices to settle, log stats, then query both."""
        logger.info(
            f"{__name__}:_smoke_test - Waiting {self._settings.settle_seconds:.0f}s for indexes to be ready"
        )
        self._sleeper.sleep(self._settings.settle_seconds)

        query = self._settings.smoke_test_query
        top_k = self._settings.smoke_test_top_k

        dense_hits: list[Hit] = []
        if self._usable(self._dense, upload):
            self._log_stats(self._dense)
            try:
                dense_hits = self._dense.search(query, top_k=top_k)
            except NbaVectorsException as e:
                logger.warning(f"{__name__}:_smoke_test - Dense query failed: {e}")

        sparse_hits: list[Hit] = []
        if self._usable(self._sparse, upload):
            self._log_stats(self._sparse)
            try:
                sparse_hits = self._sparse.search(encoder.encode_text(query), top_k=top_k)
            except NbaVectorsException as e:
                logger.warning(f"{__name__}:_smoke_test - Sparse query failed: {e}")

        for label, hits in (("dense", dense_hits), ("sparse", sparse_hits)):
            for rank, hit in enumerate(hits, start=1):
                logger.info(
                    f"{__name__}:_smoke_test - {label} #{rank} {hit.id} "
                    f"(score {hit.score:.4f}) {str(hit.fields.get('text', ''))[:100]}"
                )
        return dense_hits, sparse_hits

    @staticmethod
    def _usable(index: IndexWriter, upload: UploadReport) -> bool:
        report = upload.for_target(index.name)
        if report is not None and report.status is TargetStatus.ABORTED:
            logger.info(f"{__name__}:_smoke_test - Skipping query on aborted target {index.name}")
            return False
        return True

    @staticmethod
    def _log_stats(index: IndexWriter) -> None:
        try:
            stats = index.describe_stats()
        except NbaVectorsException as e:
            logger.warning(f"{__name__}:_smoke_test - Could not read stats for {index.name}: {e}")
            return
        logger.info(
            f"{__name__}:_smoke_test - {index.name} stats: "
            f"{stats.get('total_vector_count', stats.get('totalRecordCount', 'unknown'))} vectors"
        )
