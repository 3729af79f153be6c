"""
Document loader for the NBA data files.

Reads the season files written by the historical fetcher and the upcoming
games/injuries file written by the upcoming fetcher, and turns them into
Documents with deterministic ids so re-ingestion overwrites instead of
duplicating.

Dependencies: pydantic, nba_vectors.configs, nba_vectors.models
System role: Corpus source for VectorizeService
"""

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from nba_vectors.application.record_text import (
    game_text,
    injury_text,
    player_text,
    upcoming_game_text,
)
from nba_vectors.configs.ingestion import IngestionSettings
from nba_vectors.core.exceptions import DataSourceError, ValidationError
from nba_vectors.models import Document

logger = logging.getLogger(__name__)

SEASON_FILE_PATTERN = re.compile(r"^nba-data-(\d{4})\.json$")

# Counting stats copied onto player-game records, defaulting to 0.
_PLAYER_COUNTING_STATS = {
    "points": "PTS",
    "rebounds": "REB",
    "offensiveRebounds": "OREB",
    "defensiveRebounds": "DREB",
    "assists": "AST",
    "steals": "STL",
    "blocks": "BLK",
    "turnovers": "TOV",
    "fouls": "PF",
    "fgm": "FGM",
    "fga": "FGA",
    "fg3m": "FG3M",
    "fg3a": "FG3A",
    "ftm": "FTM",
    "fta": "FTA",
    "plusMinus": "PLUS_MINUS",
}

# Optional fields, only stored when the source has a value.
_PLAYER_OPTIONAL_STATS = {
    "seasonType": "SEASON_TYPE",
    "fgPct": "FG_PCT",
    "fg3Pct": "FG3_PCT",
    "ftPct": "FT_PCT",
    "fantasyPts": "FANTASY_PTS",
}


def parse_document(record: dict[str, Any]) -> Document:
    """
    Validate one flat record as a Document.

    Args:
        record: ``{id or _id, text, category, ...metadata}``

    Returns:
        Document: Validated document

    Raises:
        ValidationError: When a required field is missing or empty
    """
    try:
        return Document.from_record(record)
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ValidationError(
            f"Record is missing required fields: {fields}",
            record_id=str(record.get("id") or record.get("_id") or ""),
            field=fields or None,
        ) from e


def parse_documents(records: Iterable[dict[str, Any]]) -> tuple[list[Document], int]:
    """
    Validate a corpus of flat records, skipping invalid ones.

    Args:
        records: Records supplied by an external collaborator

    Returns:
        tuple[list[Document], int]: Valid documents in input order, skipped count
    """
    documents: list[Document] = []
    skipped = 0
    for record in records:
        try:
            documents.append(parse_document(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(f"{__name__}:parse_documents - Skipping record: {e}")
    return documents, skipped


def _minutes(value: Any) -> float:
    """Minutes played as a number; accepts 24, 24.5 or "24:30"."""
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value:
        minutes, _, seconds = value.partition(":")
        try:
            return float(minutes) + (float(seconds) / 60 if seconds else 0.0)
        except ValueError:
            return 0.0
    return 0.0


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def _read_json(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DataSourceError(f"Failed to read {path.name}: {e}", path=str(path)) from e


@dataclass
class LoadResult:
    """Documents loaded from the data files plus skip diagnostics."""

    documents: list[Document] = field(default_factory=list)
    skipped: int = 0

    def add(self, build: Any, *args: Any) -> None:
        """Build one record and keep it, or count it as skipped."""
        try:
            self.documents.append(parse_document(build(*args)))
        except (KeyError, TypeError) as e:
            self.skipped += 1
            logger.warning(f"{__name__}:load - Skipping malformed record ({type(e).__name__}: {e})")
        except ValidationError as e:
            self.skipped += 1
            logger.warning(f"{__name__}:load - Skipping record: {e}")


class DocumentLoader:
    """Load historical and upcoming NBA records as Documents."""

    def __init__(self, settings: IngestionSettings | None = None) -> None:
        """
        Initialize loader.

        Args:
            settings: Data file locations (defaults from environment if None)
        """
        self._settings = settings or IngestionSettings()

    def load(self) -> LoadResult:
        """
        Load every record from the historical and upcoming files.

        Returns:
            LoadResult: Documents in file order and the number skipped

        Raises:
            DataSourceError: When the historical directory is missing or a file is unreadable
        """
        result = LoadResult()
        self._load_historical(result)
        self._load_upcoming(result)

        logger.info(
            f"{__name__}:load - Total records prepared: {len(result.documents)}",
            extra={"documents": len(result.documents), "skipped": result.skipped},
        )
        return result

    def _load_historical(self, result: LoadResult) -> None:
        directory = self._settings.historical_path
        if not directory.is_dir():
            raise DataSourceError("Historical data directory not found", path=str(directory))

        logger.info(f"{__name__}:_load_historical - Loading historical NBA data from {directory}")
        for path in sorted(directory.iterdir()):
            match = SEASON_FILE_PATTERN.match(path.name)
            if not match:
                continue
            season = int(match.group(1))
            games = _read_json(path).get("games") or []
            logger.info(f"{__name__}:_load_historical - Loaded {len(games)} games from {season} season")

            for game in games[:: self._settings.sample_every]:
                result.add(self._team_game_record, game, season)
                for player in game.get("playerStats") or []:
                    if _minutes(player.get("MIN")) > 0:
                        result.add(self._player_game_record, player, game, season)

    def _load_upcoming(self, result: LoadResult) -> None:
        path = self._settings.upcoming_path
        if not path.exists():
            logger.info(f"{__name__}:_load_upcoming - No upcoming data at {path}, skipping")
            return

        data = _read_json(path)
        games = data.get("games") or []
        injuries = data.get("injuries") or []
        logger.info(
            f"{__name__}:_load_upcoming - Loaded {len(games)} upcoming games "
            f"and {len(injuries)} injury reports"
        )

        for game in games:
            result.add(self._upcoming_record, game)
        for injury in injuries:
            if not injury.get("playerName") or not injury.get("date"):
                result.skipped += 1
                logger.warning(
                    f"{__name__}:_load_upcoming - Skipping injury report without player name or date"
                )
                continue
            result.add(self._injury_record, injury)

    @staticmethod
    def _team_game_record(game: dict[str, Any], season: int) -> dict[str, Any]:
        players = game.get("playerStats") or []
        top_scorer = None
        if players:
            top_scorer = max(players, key=lambda p: p.get("PTS") or 0).get("PLAYER_NAME")

        return {
            "id": f"team_{season}_{game['GAME_ID']}",
            "text": game_text(game),
            "category": "team-game",
            "season": season,
            "seasonType": game.get("SEASON_TYPE"),
            "team": game.get("TEAM_ABBREVIATION"),
            "gameDate": game.get("GAME_DATE"),
            "result": game.get("WL"),
            "points": game.get("PTS"),
            "fg3m": game.get("FG3M"),
            "plusMinus": game.get("PLUS_MINUS"),
            "assists": game.get("AST"),
            "rebounds": game.get("REB"),
            "topScorer": top_scorer,
        }

    @staticmethod
    def _player_game_record(
        player: dict[str, Any],
        game: dict[str, Any],
        season: int,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": f"player_{season}_{game['GAME_ID']}_{player['PLAYER_ID']}",
            "text": player_text(player),
            "category": "player-game",
            "season": season,
            "team": player.get("TEAM_ABBREVIATION"),
            "playerName": player.get("PLAYER_NAME"),
            "playerId": player.get("PLAYER_ID"),
            "gameDate": player.get("GAME_DATE"),
            "result": player.get("WL"),
            "minutes": _minutes(player.get("MIN")),
        }
        for key, source in _PLAYER_COUNTING_STATS.items():
            record[key] = player.get(source) or 0
        for key, source in _PLAYER_OPTIONAL_STATS.items():
            record[key] = player.get(source)
        return record

    @staticmethod
    def _upcoming_record(game: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": f"upcoming_{game['gameId']}",
            "text": upcoming_game_text(game),
            "category": "upcoming",
            "gameDate": game.get("date"),
            "homeTeam": game["homeTeam"].get("teamTricode"),
            "visitorTeam": game["visitorTeam"].get("teamTricode"),
        }

    @staticmethod
    def _injury_record(injury: dict[str, Any]) -> dict[str, Any]:
        player_name = injury["playerName"]
        player_id = injury.get("playerId") or _slug(player_name)
        return {
            "id": f"injury_{player_id}_{injury['date']}",
            "text": injury_text(injury),
            "category": "injury",
            "playerName": player_name,
            "playerId": player_id,
            "team": injury.get("teamAbbreviation") or "Unknown",
            "position": injury.get("position") or "",
            "status": injury.get("status") or "Unknown",
            "injuryType": injury.get("injuryType") or "",
            "injuryLocation": injury.get("injuryLocation") or "",
            "injuryDetail": injury.get("injuryDetail") or "",
            "injurySide": injury.get("injurySide") or "",
            "returnDate": injury.get("returnDate") or "Unknown",
            "reportDate": injury["date"],
        }
