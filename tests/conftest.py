"""
Shared test fixtures and configuration for entire test suite.

Provides: Recording sleeper, scripted fake index targets, sample documents
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from collections.abc import Iterable
from typing import Any

import pytest

from nba_vectors.core.exceptions import UploadCancelledError
from nba_vectors.models import Document, Hit, SparseVector


class RecordingSleeper:
    """Sleeper that records requested waits instead of blocking."""

    def __init__(self, cancel_after: int | None = None) -> None:
        self.calls: list[float] = []
        self._cancel_after = cancel_after

    def sleep(self, seconds: float) -> None:
        if self._cancel_after is not None and len(self.calls) >= self._cancel_after:
            raise UploadCancelledError("Wait cancelled")
        self.calls.append(seconds)


class FakeIndex:
    """
    In-memory index target.

    ``errors`` maps a 1-based call number to the exception raised by that
    upsert call; every other call succeeds and its records are stored.
    """

    def __init__(
        self,
        name: str,
        errors: dict[int, Exception] | None = None,
        hits: list[Hit] | None = None,
    ) -> None:
        self.name = name
        self.errors = errors or {}
        self.hits = hits or []
        self.calls: list[list[dict[str, Any]]] = []
        self.stored: dict[str, dict[str, Any]] = {}
        self.queries: list[Any] = []

    def upsert_batch(self, records: list[dict[str, Any]]) -> None:
        self.calls.append(records)
        error = self.errors.get(len(self.calls))
        if error is not None:
            raise error
        for record in records:
            self.stored[record.get("_id") or record["id"]] = record

    def describe_stats(self) -> dict[str, Any]:
        return {"total_vector_count": len(self.stored)}

    def search(self, query: Any, top_k: int = 5) -> list[Hit]:
        self.queries.append(query)
        if isinstance(query, SparseVector) and query.is_empty:
            return []
        return self.hits[:top_k]


def make_documents(texts: Iterable[str], category: str = "team-game") -> list[Document]:
    """Build documents with ids doc-0, doc-1, ..."""
    return [
        Document(id=f"doc-{i}", text=text, category=category, metadata={"season": 2024})
        for i, text in enumerate(texts)
    ]


@pytest.fixture
def sleeper() -> RecordingSleeper:
    """Provide sleeper that records waits."""
    return RecordingSleeper()


@pytest.fixture
def index_factory():
    """Provide FakeIndex constructor."""
    return FakeIndex


@pytest.fixture
def sleeper_factory():
    """Provide RecordingSleeper constructor."""
    return RecordingSleeper


@pytest.fixture
def documents_factory():
    """Provide make_documents helper."""
    return make_documents


@pytest.fixture
def lakers_documents() -> list[Document]:
    """Provide the two-document Lakers corpus."""
    return make_documents(["Lakers won", "Lakers lost"])


@pytest.fixture
def sample_documents() -> list[Document]:
    """Provide a small mixed corpus."""
    return [
        Document(
            id="team_2024_0022400001",
            text="Boston Celtics won on 2024-10-22 with 18/45 three-pointers.",
            category="team-game",
            metadata={"season": 2024, "team": "BOS"},
        ),
        Document(
            id="player_2024_0022400001_1628369",
            text="Jayson Tatum played for Boston Celtics and scored 37 points.",
            category="player-game",
            metadata={"season": 2024, "playerName": "Jayson Tatum"},
        ),
        Document(
            id="injury_203999_2024-10-20",
            text="Injury Report: Nikola Jokic (DEN) - Questionable. Injury: left ankle sprain.",
            category="injury",
            metadata={"playerName": "Nikola Jokic"},
        ),
    ]


@pytest.fixture
def dense_index() -> FakeIndex:
    """Provide fake dense target."""
    return FakeIndex("nba-dense", hits=[Hit(id="team_2024_0022400001", score=0.9, fields={"text": "x"})])


@pytest.fixture
def sparse_index() -> FakeIndex:
    """Provide fake sparse target."""
    return FakeIndex(
        "nba-sparse",
        hits=[Hit(id="team_2024_0022400001_sparse", score=1.2, fields={"text": "x"})],
    )
