"""
Test suite for the command line entry point.

Patches the loader, index factory and service so no files or network are used.

System role: Verification of CLI wiring and exit codes
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nba_vectors.__main__ import EXIT_CANCELLED, EXIT_FAILURE, EXIT_OK, apply_overrides, build_parser, main
from nba_vectors.application import LoadResult
from nba_vectors.configs import Settings, get_settings
from nba_vectors.core.exceptions import SettingsError, UploadCancelledError
from nba_vectors.models import TargetReport, TargetStatus, UploadReport, VectorizeReport


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run away from local .env files with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_report() -> VectorizeReport:
    """Provide a report with one completed and one aborted target."""
    return VectorizeReport(
        document_count=2,
        vocabulary_size=3,
        dense_records=2,
        sparse_records=2,
        upload=UploadReport(
            targets=[
                TargetReport(
                    target="nba-dense",
                    status=TargetStatus.COMPLETED,
                    batches_total=1,
                    batches_done=1,
                    records_upserted=2,
                ),
                TargetReport(
                    target="nba-sparse",
                    status=TargetStatus.ABORTED,
                    batches_total=1,
                    batches_done=0,
                    records_upserted=0,
                    error="wrong vector type",
                ),
            ]
        ),
        processing_time_ms=12.5,
    )


@pytest.fixture
def patched_run(sample_report: VectorizeReport):
    """Patch collaborators used by main()."""
    with (
        patch("nba_vectors.__main__.DocumentLoader") as loader_class,
        patch("nba_vectors.__main__.get_index_targets") as factory,
        patch("nba_vectors.__main__.VectorizeService") as service_class,
        patch("nba_vectors.__main__.configure_logging"),
        patch("nba_vectors.__main__._install_signal_handler"),
    ):
        loader_class.return_value.load.return_value = LoadResult(documents=[], skipped=1)
        factory.return_value = (MagicMock(name="dense"), MagicMock(name="sparse"))
        service_class.return_value.run.return_value = sample_report
        yield loader_class, factory, service_class


class TestArguments:
    """Test flag parsing and overrides."""

    def test_apply_overrides_should_update_sections(self, tmp_path: Path) -> None:
        """Should apply data root, smoke test and log level flags."""
        args = build_parser().parse_args(
            ["--data-root", str(tmp_path), "--skip-smoke-test", "--log-level", "DEBUG"]
        )

        settings = apply_overrides(Settings(), args)

        assert settings.ingestion.data_root == tmp_path
        assert settings.upload.smoke_test_enabled is False
        assert settings.log_level == "DEBUG"

    def test_apply_overrides_should_keep_defaults_without_flags(self) -> None:
        """Should leave settings untouched when no flags are given."""
        settings = apply_overrides(Settings(), build_parser().parse_args([]))

        assert settings.upload.smoke_test_enabled is True
        assert settings.ingestion.data_root == Path(".")


class TestMain:
    """Test exit codes."""

    def test_main_should_return_ok_when_target_aborted(self, patched_run) -> None:
        """Should exit 0 when only one target was aborted."""
        _, _, service_class = patched_run

        assert main([]) == EXIT_OK
        service_class.return_value.run.assert_called_once_with([])

    def test_main_should_return_failure_on_fatal_error(self, patched_run) -> None:
        """Should exit 1 when the index factory fails."""
        _, factory, _ = patched_run
        factory.side_effect = SettingsError("PINECONE_API_KEY environment variable not set")

        assert main([]) == EXIT_FAILURE

    def test_main_should_return_cancelled_when_wait_cancelled(self, patched_run) -> None:
        """Should exit 130 when the run is cancelled."""
        _, _, service_class = patched_run
        service_class.return_value.run.side_effect = UploadCancelledError("Wait cancelled")

        assert main([]) == EXIT_CANCELLED

    def test_main_should_pass_skip_flag_to_service(self, patched_run) -> None:
        """Should disable the smoke test from the command line."""
        _, _, service_class = patched_run

        main(["--skip-smoke-test"])

        assert service_class.call_args.kwargs["settings"].smoke_test_enabled is False
