"""
Test suite for record text builders.

System role: Verification of the searchable text rendered for each record type
"""

import pytest

from nba_vectors.application.record_text import game_text, injury_text, player_text, upcoming_game_text


@pytest.fixture
def team_game() -> dict:
    """Provide a team box score row with player stats."""
    return {
        "GAME_ID": "0022400001",
        "TEAM_NAME": "Boston Celtics",
        "TEAM_ABBREVIATION": "BOS",
        "GAME_DATE": "2024-10-22",
        "MATCHUP": "BOS vs. NYK",
        "WL": "W",
        "PTS": 132,
        "PLUS_MINUS": 23.0,
        "FG_PCT": 0.511,
        "FG3M": 29,
        "FG3A": 61,
        "FG3_PCT": 0.45,
        "FT_PCT": 0.8,
        "REB": 41,
        "OREB": 8,
        "DREB": 33,
        "AST": 33,
        "STL": 9,
        "BLK": 4,
        "TOV": 10,
        "playerStats": [
            {"PLAYER_NAME": "Jrue Holiday", "PTS": 18, "REB": 4, "AST": 5},
            {"PLAYER_NAME": "Jayson Tatum", "PTS": 37, "REB": 10, "AST": 4},
            {"PLAYER_NAME": "Derrick White", "PTS": 24, "REB": 2, "AST": 3},
            {"PLAYER_NAME": "Sam Hauser", "PTS": 3, "REB": 1, "AST": 0},
        ],
    }


class TestGameText:
    """Test team game text."""

    def test_game_text_should_describe_result_and_stats(self, team_game: dict) -> None:
        """Should include result, margin and shooting."""
        text = game_text(team_game)

        assert text.startswith("Boston Celtics won on 2024-10-22 in Regular Season matchup BOS vs. NYK.")
        assert "Final score: 132 points (+23 margin)." in text
        assert "29/61 three-pointers (45.0%)" in text
        assert "51.1% FG" in text

    def test_game_text_should_list_top_three_scorers(self, team_game: dict) -> None:
        """Should list the three highest scorers in order."""
        text = game_text(team_game)

        assert (
            "Top performers: Jayson Tatum (37pts, 10reb, 4ast), Derrick White (24pts, 2reb, 3ast), "
            "Jrue Holiday (18pts, 4reb, 5ast)."
        ) in text
        assert "Sam Hauser" not in text

    def test_game_text_should_handle_loss_without_players(self, team_game: dict) -> None:
        """Should render a loss and omit top performers when there are none."""
        team_game.update({"WL": "L", "PLUS_MINUS": -5, "playerStats": []})

        text = game_text(team_game)

        assert "Boston Celtics lost" in text
        assert "(-5 margin)" in text
        assert "Top performers" not in text


class TestPlayerText:
    """Test player game text."""

    def test_player_text_should_describe_line(self) -> None:
        """Should include minutes, counting stats and plus/minus."""
        text = player_text(
            {
                "PLAYER_NAME": "Jayson Tatum",
                "TEAM_NAME": "Boston Celtics",
                "GAME_DATE": "2024-10-22",
                "MATCHUP": "BOS vs. NYK",
                "WL": "W",
                "MIN": 36.0,
                "PTS": 37,
                "REB": 10,
                "AST": 4,
                "FG3M": 8,
                "FG3A": 14,
                "PLUS_MINUS": 20,
            }
        )

        assert text.startswith("Jayson Tatum played for Boston Celtics on 2024-10-22")
        assert "Player performance in 36 minutes: 37 points, 10 rebounds, 4 assists." in text
        assert "8/14 3PT" in text
        assert text.endswith("Plus/minus: +20.")


class TestUpcomingGameText:
    """Test upcoming game text."""

    def test_upcoming_game_text_should_describe_matchup(self) -> None:
        """Should include both teams, records and arena."""
        text = upcoming_game_text(
            {
                "gameId": "0022400100",
                "date": "2024-11-01",
                "statusText": "7:30 pm ET",
                "arenaName": "TD Garden",
                "arenaCity": "Boston",
                "arenaState": "MA",
                "homeTeam": {"teamCity": "Boston", "teamName": "Celtics", "wins": 5, "losses": 1},
                "visitorTeam": {"teamCity": "New York", "teamName": "Knicks", "wins": 3, "losses": 3},
            }
        )

        assert text == (
            "Upcoming game on 2024-11-01 at 7:30 pm ET: New York Knicks (3-3) vs "
            "Boston Celtics (5-1) at TD Garden in Boston, MA."
        )

    def test_upcoming_game_text_should_require_teams(self) -> None:
        """Should raise KeyError when a team block is missing."""
        with pytest.raises(KeyError):
            upcoming_game_text({"gameId": "1", "homeTeam": {"teamCity": "Boston", "teamName": "Celtics"}})


class TestInjuryText:
    """Test injury report text."""

    def test_injury_text_should_join_description_and_comments(self) -> None:
        """Should describe the injury and append comments."""
        text = injury_text(
            {
                "playerName": "Nikola Jokic",
                "teamAbbreviation": "DEN",
                "status": "Questionable",
                "injurySide": "Left",
                "injuryLocation": "Ankle",
                "injuryDetail": "Sprain",
                "returnDate": "2024-11-03",
                "shortComment": "Game-time decision.",
            }
        )

        assert text == (
            "Injury Report: Nikola Jokic (DEN) - Questionable. Injury: Left Ankle Sprain. "
            "Expected return: 2024-11-03. Game-time decision."
        )

    def test_injury_text_should_default_unknown_fields(self) -> None:
        """Should fall back to Unknown for missing team, status and return date."""
        text = injury_text({"playerName": "Jane Doe"})

        assert "Jane Doe (Unknown) - Unknown." in text
        assert "Expected return: Unknown." in text
