"""
Command line entry point.

Usage:
    python -m nba_vectors
    python -m nba_vectors --data-root /path/to/project --skip-smoke-test
    nba-vectors --log-level DEBUG

Exit status: 0 on success (an aborted, misconfigured target still counts),
1 on a fatal error, 130 when cancelled.

Dependencies: python-dotenv, nba_vectors.application, nba_vectors.boundary.vdb
System role: CLI wiring of loader, index targets and VectorizeService
"""

import argparse
import logging
import signal
import threading
from pathlib import Path

from dotenv import load_dotenv

from nba_vectors.application import DocumentLoader, VectorizeService
from nba_vectors.boundary.vdb import get_index_targets
from nba_vectors.configs import Settings, get_settings
from nba_vectors.core.exceptions import UploadCancelledError
from nba_vectors.core.upload import CancellableSleeper
from nba_vectors.models import TargetStatus
from nba_vectors.observability import configure_logging, log_exception_with_context

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nba-vectors",
        description="Build TF-IDF sparse vectors for NBA data and upload them to Pinecone.",
    )
    parser.add_argument(
        "--data-root",
        type=Path,
        default=None,
        help="Directory holding historical-data/ and upcoming-data/ (default: INGEST_DATA_ROOT or .)",
    )
    parser.add_argument(
        "--skip-smoke-test",
        action="store_true",
        help="Do not wait for the indexes or run the post-upload test queries",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command line flags applied."""
    ingestion = settings.ingestion
    if args.data_root is not None:
        ingestion = ingestion.model_copy(update={"data_root": args.data_root})

    upload = settings.upload
    if args.skip_smoke_test:
        upload = upload.model_copy(update={"smoke_test_enabled": False})

    update = {"ingestion": ingestion, "upload": upload}
    if args.log_level:
        update["log_level"] = args.log_level
    return settings.model_copy(update=update)


def _install_signal_handler(sleeper: CancellableSleeper) -> None:
    # signal.signal only works from the main thread
    if threading.current_thread() is not threading.main_thread():
        return

    def _handle_sigterm(signum, frame):
        logger.warning(f"{__name__}:main - Received signal {signum}, cancelling")
        sleeper.cancel()

    signal.signal(signal.SIGTERM, _handle_sigterm)


def main(argv: list[str] | None = None) -> int:
    """
    Run the vectorization job.

    Args:
        argv: Command line arguments (sys.argv[1:] if None)

    Returns:
        int: Process exit status
    """
    args = build_parser().parse_args(argv)
    load_dotenv(".env.local")

    settings = apply_overrides(get_settings(), args)
    configure_logging(settings.log_level)

    sleeper = CancellableSleeper()
    _install_signal_handler(sleeper)

    try:
        loaded = DocumentLoader(settings.ingestion).load()
        dense_index, sparse_index = get_index_targets(settings.pinecone)
        service = VectorizeService(dense_index, sparse_index, settings=settings.upload, sleeper=sleeper)
        report = service.run(loaded.documents)
    except (UploadCancelledError, KeyboardInterrupt):
        sleeper.cancel()
        logger.warning(f"{__name__}:main - Run cancelled")
        return EXIT_CANCELLED
    except Exception as e:
        log_exception_with_context(logger, f"{__name__}:main - Vectorization failed", e)
        return EXIT_FAILURE

    logger.info(
        f"{__name__}:main - Done: {report.document_count} documents "
        f"({loaded.skipped} skipped), vocabulary of {report.vocabulary_size} terms, "
        f"{report.sparse_records} sparse vectors"
    )
    for target in report.upload.targets:
        if target.status is TargetStatus.ABORTED:
            logger.warning(f"{__name__}:main - {target.target} aborted: {target.error}")
        else:
            logger.info(
                f"{__name__}:main - {target.target}: {target.records_upserted} records "
                f"in {target.batches_done} batches"
            )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
