"""
Searchable text for NBA source records.

Each builder turns one raw record from the data files into the sentence-style
description that is embedded by the dense index and tokenized for the sparse
index.

Dependencies: None
System role: Text rendering for DocumentLoader
"""

from typing import Any

DEFAULT_SEASON_TYPE = "Regular Season"


def _num(value: Any, default: Any = 0) -> str:
    """Render a stat the way the box score shows it (24.0 -> "24")."""
    if value is None:
        value = default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _pct(value: Any) -> str:
    """Render a 0-1 fraction as a percentage with one decimal."""
    return f"{(value or 0) * 100:.1f}"


def _signed(value: Any) -> str:
    value = value or 0
    return f"+{_num(value)}" if value > 0 else _num(value)


def _result(wl: Any) -> str:
    return "won" if wl == "W" else "lost"


def game_text(game: dict[str, Any]) -> str:
    """
    Describe one team's box score for one game.

    Args:
        game: Team game row with optional ``playerStats``

    Returns:
        str: Result, score margin, shooting, rebounds, team stats and top scorers
    """
    team = game.get("TEAM_NAME") or game.get("TEAM_ABBREVIATION")
    season_type = game.get("SEASON_TYPE") or DEFAULT_SEASON_TYPE

    content = (
        f"{team} {_result(game.get('WL'))} on {game.get('GAME_DATE')} in {season_type} "
        f"matchup {game.get('MATCHUP')}. "
        f"Final score: {_num(game.get('PTS'))} points ({_signed(game.get('PLUS_MINUS'))} margin). "
        f"Shooting: {_pct(game.get('FG_PCT'))}% FG, {_num(game.get('FG3M'))}/{_num(game.get('FG3A'))} "
        f"three-pointers ({_pct(game.get('FG3_PCT'))}%), {_pct(game.get('FT_PCT'))}% FT. "
        f"Rebounds: {_num(game.get('REB'))} total ({_num(game.get('OREB'))} offensive, "
        f"{_num(game.get('DREB'))} defensive). "
        f"Team stats: {_num(game.get('AST'))} assists, {_num(game.get('STL'))} steals, "
        f"{_num(game.get('BLK'))} blocks, {_num(game.get('TOV'))} turnovers."
    )

    scorers = sorted(game.get("playerStats") or [], key=lambda p: p.get("PTS") or 0, reverse=True)
    top = [p for p in scorers[:3] if (p.get("PTS") or 0) > 0]
    if top:
        lines = [
            f"{p.get('PLAYER_NAME')} ({_num(p.get('PTS'))}pts, {_num(p.get('REB'))}reb, {_num(p.get('AST'))}ast)"
            for p in top
        ]
        content += " Top performers: " + ", ".join(lines) + "."
    return content


def player_text(player: dict[str, Any]) -> str:
    """Describe one player's line in one game."""
    team = player.get("TEAM_NAME") or player.get("TEAM_ABBREVIATION")
    season_type = player.get("SEASON_TYPE") or DEFAULT_SEASON_TYPE

    return (
        f"{player.get('PLAYER_NAME')} played for {team} on {player.get('GAME_DATE')} in "
        f"{season_type} matchup {player.get('MATCHUP')}. "
        f"Team {_result(player.get('WL'))}. Player performance in {_num(player.get('MIN'))} minutes: "
        f"{_num(player.get('PTS'))} points, {_num(player.get('REB'))} rebounds, "
        f"{_num(player.get('AST'))} assists. "
        f"Shooting: {_pct(player.get('FG_PCT'))}% FG, {_num(player.get('FG3M'))}/{_num(player.get('FG3A'))} "
        f"3PT ({_pct(player.get('FG3_PCT'))}%), {_pct(player.get('FT_PCT'))}% FT. "
        f"Defense: {_num(player.get('STL'))} steals, {_num(player.get('BLK'))} blocks. "
        f"{_num(player.get('TOV'))} turnovers. Plus/minus: {_signed(player.get('PLUS_MINUS'))}."
    )


def upcoming_game_text(game: dict[str, Any]) -> str:
    """
    Describe a scheduled game.

    Raises:
        KeyError: When the home or visitor team block is missing
    """
    home = game["homeTeam"]
    visitor = game["visitorTeam"]
    arena = f"{game.get('arenaName')} in {game.get('arenaCity')}, {game.get('arenaState')}"

    return (
        f"Upcoming game on {game.get('date')} at {game.get('statusText')}: "
        f"{visitor['teamCity']} {visitor['teamName']} ({_num(visitor.get('wins'))}-{_num(visitor.get('losses'))}) vs "
        f"{home['teamCity']} {home['teamName']} ({_num(home.get('wins'))}-{_num(home.get('losses'))}) at {arena}."
    )


def injury_text(injury: dict[str, Any]) -> str:
    """Describe one injury report entry."""
    description = " ".join(
        part
        for part in (injury.get("injurySide"), injury.get("injuryLocation"), injury.get("injuryDetail"))
        if part
    )
    content = (
        f"Injury Report: {injury.get('playerName')} ({injury.get('teamAbbreviation') or 'Unknown'}) - "
        f"{injury.get('status') or 'Unknown'}. "
        f"Injury: {description}. Expected return: {injury.get('returnDate') or 'Unknown'}."
    )
    for comment in (injury.get("shortComment"), injury.get("longComment")):
        if comment:
            content += f" {comment}"
    return content
