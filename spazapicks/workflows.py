import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .db.utils import dt_iso
from .models import Entry, Match, PrizeDraw, User
from .prize_draw.engine import DrawOutcome, PrizeDrawEngine
from .repository.sql import SqlAlchemyWeekRepository
from .scoring.engine import EntryScorer, ScoringSummary
from .scoring.outcome import Outcome
from .week import current_week_id

logger = logging.getLogger(__name__)


def score_week(session: Session, week_id: str, *, strict: bool = False) -> ScoringSummary:
    """Recompute points for every entry of ``week_id`` from its match scores.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session used for queries and persistence.
    week_id : str
        Week to score.
    strict : bool, default: False
        Raise :class:`~spazapicks.scoring.engine.AlignmentMismatch` instead of
        scoring paired picks only when an entry's picks and the week's
        matches disagree.

    Returns
    -------
    ScoringSummary
        Which weeks were fully scored, partially scored, or skipped, and how
        many entries were written.
    """

    scorer = EntryScorer(SqlAlchemyWeekRepository(session), strict=strict)
    summary = scorer.score_week(week_id)
    session.flush()
    return summary


def score_all_weeks(session: Session, *, strict: bool = False) -> ScoringSummary:
    """Score every week that has matches or entries."""

    repository = SqlAlchemyWeekRepository(session)
    scorer = EntryScorer(repository, strict=strict)
    summary = scorer.score_weeks(repository.list_week_ids())
    session.flush()
    return summary


def record_match_scores(
    session: Session,
    scores: Iterable[tuple[int, Optional[int], Optional[int]]],
    *,
    strict: bool = False,
) -> ScoringSummary:
    """Store final scores and re-score every week they touch.

    Later writes overwrite earlier ones; passing ``None`` for a side clears
    it and returns the match to the unfinished state.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    scores : Iterable[tuple[int, Optional[int], Optional[int]]]
        ``(match_id, home_score, away_score)`` triples.
    strict : bool, default: False
        Forwarded to the scorer.

    Returns
    -------
    ScoringSummary
        Summary of re-scoring the affected weeks.

    Raises
    ------
    ValueError
        If ``scores`` is empty, a match id is unknown, or a score is negative.
    """

    updates = list(scores)
    if not updates:
        raise ValueError("At least one score update is required")

    affected_weeks: list[str] = []
    for match_id, home_score, away_score in updates:
        match = session.get(Match, match_id)
        if match is None:
            raise ValueError(f"Match {match_id!r} does not exist")
        match.set_score(home_score, away_score)
        if match.week_id not in affected_weeks:
            affected_weeks.append(match.week_id)

    session.flush()
    scorer = EntryScorer(SqlAlchemyWeekRepository(session), strict=strict)
    summary = scorer.score_weeks(affected_weeks)
    session.flush()
    return summary


def run_weekly_draw(
    session: Session,
    week_id: str,
    prize_codes: Sequence[str],
    *,
    min_points: int = 1,
    allow_redraw: bool = True,
    rescore: bool = True,
    strict: bool = False,
    rng: Optional[random.Random] = None,
) -> DrawOutcome:
    """Draw prize winners for ``week_id`` weighted by their weekly points.

    This function wraps :class:`~spazapicks.prize_draw.engine.PrizeDrawEngine`.
    When ``rescore`` is ``True`` the week is scored first so that the draw
    uses points computed from the latest match scores.

    Parameters
    ----------
    session : Session
        Active session used for persistence and queries.
    week_id : str
        Week to draw.
    prize_codes : Sequence[str]
        Prize codes to hand out, in order.
    min_points : int, default: 1
        Minimum tickets a player needs to take part.
    allow_redraw : bool, default: True
        When ``False`` a week that already has winners is refused.
    rescore : bool, default: True
        Re-score the week before drawing.
    strict : bool, default: False
        Forwarded to the scorer when ``rescore`` is ``True``.
    rng : Optional[random.Random], default: None
        Random source override.

    Returns
    -------
    DrawOutcome
        Winners, in draw order, and the number of eligible players.

    Raises
    ------
    DrawError
        One of its subclasses when the draw cannot run. Nothing is written to
        ``prize_draws`` in that case.
    AlignmentMismatch
        If ``strict`` re-scoring finds an entry whose picks do not line up
        with the week's matches.
    """

    repository = SqlAlchemyWeekRepository(session)
    if rescore:
        EntryScorer(repository, strict=strict).score_week(week_id)
        session.flush()

    engine = PrizeDrawEngine(repository, rng=rng)
    outcome = engine.run(
        week_id,
        prize_codes,
        min_points=min_points,
        allow_redraw=allow_redraw,
    )
    session.flush()
    return outcome


def draws_for_week(session: Session, week_id: str) -> list[PrizeDraw]:
    """Return every stored draw record of ``week_id``."""

    return PrizeDraw.for_week(session, week_id)


@dataclass(frozen=True)
class LeaderboardRow:
    leaderboard_id: str
    entry_count: int
    total_points: int

    def to_json(self) -> dict:
        return {
            "leaderboard_id": self.leaderboard_id,
            "entry_count": self.entry_count,
            "total_points": self.total_points,
        }


def weekly_leaderboard(session: Session, week_id: str) -> list[LeaderboardRow]:
    """Return the week's standings per leaderboard id.

    Entries of players without a leaderboard id are left out. Rows are
    ordered by total points (highest first), then by leaderboard id.
    """

    aliases = {
        user.wa_number: user.leaderboard_id
        for user in session.scalars(select(User).where(User.leaderboard_id.isnot(None)))
    }

    totals: dict[str, list[int]] = {}
    for entry in Entry.for_week(session, week_id):
        leaderboard_id = aliases.get(entry.wa_number)
        if leaderboard_id is None:
            continue
        row = totals.setdefault(leaderboard_id, [0, 0])
        row[0] += 1
        row[1] += entry.points or 0

    rows = [
        LeaderboardRow(leaderboard_id=key, entry_count=count, total_points=points)
        for key, (count, points) in totals.items()
    ]
    rows.sort(key=lambda row: (-row.total_points, row.leaderboard_id))
    return rows


# Fixtures used to pre-fill an empty week: (home, away, days ahead, hour, minute)
DEFAULT_FIXTURES = (
    ("Chiefs", "Pirates", 1, 15, 0),
    ("Sundowns", "SuperSport", 1, 17, 30),
    ("Arrows", "AmaZulu", 1, 19, 0),
    ("Stellenbosch", "Cape Town City", 2, 18, 0),
    ("Polokwane", "Sekhukhune", 3, 15, 0),
    ("TS Galaxy", "Royal AM", 3, 17, 30),
    ("Swallows", "Richards Bay", 3, 19, 0),
)


def _parse_kickoff(value: Any) -> datetime:
    if isinstance(value, datetime):
        kickoff = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            kickoff = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid kickoff time {value!r}") from None
    else:
        raise ValueError("Each match needs home_team, away_team and kickoff_at")
    if kickoff.tzinfo is None:
        kickoff = kickoff.replace(tzinfo=timezone.utc)
    return kickoff


def create_matches(
    session: Session,
    fixtures: Iterable[Mapping[str, Any]],
    *,
    week_id: Optional[str] = None,
) -> list[Match]:
    """Create matches from ``fixtures`` and return them.

    Each fixture is a mapping with ``home_team``, ``away_team`` and
    ``kickoff_at`` (a datetime or an ISO 8601 string), and optionally its own
    ``week_id``. Fixtures without one fall back to ``week_id`` and then to the
    current week. Every fixture is validated before any match is added.

    Raises
    ------
    ValueError
        If ``fixtures`` is empty or a fixture misses a team or kickoff time.
    """

    items = list(fixtures)
    if not items:
        raise ValueError("At least one match is required")

    default_week = (week_id or "").strip() or current_week_id()
    matches = []
    for item in items:
        home_team = str(item.get("home_team") or "").strip()
        away_team = str(item.get("away_team") or "").strip()
        if not home_team or not away_team:
            raise ValueError("Each match needs home_team, away_team and kickoff_at")
        matches.append(
            Match(
                week_id=str(item.get("week_id") or "").strip() or default_week,
                home_team=home_team,
                away_team=away_team,
                kickoff_at=_parse_kickoff(item.get("kickoff_at")),
            )
        )

    session.add_all(matches)
    session.flush()
    logger.info(f"Created {len(matches)} match(es) for week {default_week}")
    return matches


def preseed_week(
    session: Session,
    week_id: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> list[Match]:
    """Fill an empty week with :data:`DEFAULT_FIXTURES`.

    Kickoffs are set relative to ``now`` (UTC). A week that already has
    matches is refused with ``ValueError``.
    """

    week = (week_id or "").strip() or current_week_id()
    existing = session.scalar(select(Match.id).where(Match.week_id == week).limit(1))
    if existing is not None:
        raise ValueError(f"Matches already exist for week {week}")

    base = now or datetime.now(timezone.utc)
    if base.tzinfo is None:
        base = base.replace(tzinfo=timezone.utc)
    base = base.astimezone(timezone.utc)

    fixtures = [
        {
            "home_team": home,
            "away_team": away,
            "kickoff_at": (base + timedelta(days=days)).replace(
                hour=hour, minute=minute, second=0, microsecond=0
            ),
        }
        for home, away, days, hour, minute in DEFAULT_FIXTURES
    ]
    return create_matches(session, fixtures, week_id=week)


def _require_leaderboard_user(session: Session, leaderboard_id: str) -> User:
    user = User.get_by_leaderboard_id(session, leaderboard_id)
    if user is None:
        raise ValueError(f"No player with leaderboard id {leaderboard_id!r}")
    return user


@dataclass(frozen=True)
class PlayerWeekSummary:
    week_id: str
    entry_count: int
    total_points: int
    latest_submitted_at: Optional[datetime]

    def to_json(self) -> dict:
        return {
            "week_id": self.week_id,
            "entry_count": self.entry_count,
            "total_points": self.total_points,
            "latest_submitted_at": dt_iso(self.latest_submitted_at),
        }


def player_week_history(session: Session, leaderboard_id: str) -> list[PlayerWeekSummary]:
    """Return one row per week the player entered, most recent first.

    Raises
    ------
    ValueError
        If no player holds ``leaderboard_id``.
    """

    user = _require_leaderboard_user(session, leaderboard_id)
    latest = func.max(Entry.submitted_at)
    stmt = (
        select(
            Entry.week_id,
            func.count(Entry.id),
            func.coalesce(func.sum(Entry.points), 0),
            latest,
        )
        .where(Entry.wa_number == user.wa_number)
        .group_by(Entry.week_id)
        .order_by(latest.desc(), Entry.week_id.desc())
    )
    return [
        PlayerWeekSummary(
            week_id=week_id,
            entry_count=int(count),
            total_points=int(points),
            latest_submitted_at=submitted_at,
        )
        for week_id, count, points, submitted_at in session.execute(stmt).all()
    ]


@dataclass(frozen=True)
class PickResult:
    """A match of the week next to the player's pick for it."""

    match_id: int
    home_team: str
    away_team: str
    kickoff_at: datetime
    pick: Optional[Outcome]
    home_score: Optional[int]
    away_score: Optional[int]
    outcome: Optional[Outcome]

    @property
    def is_finished(self) -> bool:
        return self.outcome is not None

    @property
    def is_correct(self) -> Optional[bool]:
        """``None`` until the match is finished."""
        if self.outcome is None:
            return None
        return self.pick is self.outcome

    def to_json(self) -> dict:
        return {
            "match_id": self.match_id,
            "home_team": self.home_team,
            "away_team": self.away_team,
            "kickoff_at": dt_iso(self.kickoff_at),
            "pick": self.pick.value if self.pick is not None else None,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_finished": self.is_finished,
            "is_correct": self.is_correct,
        }


@dataclass(frozen=True)
class PlayerWeekDetail:
    leaderboard_id: str
    week_id: str
    submitted_at: datetime
    points: int
    matches: list[PickResult]

    def to_json(self) -> dict:
        return {
            "leaderboard_id": self.leaderboard_id,
            "week_id": self.week_id,
            "submitted_at": dt_iso(self.submitted_at),
            "points": self.points,
            "matches": [match.to_json() for match in self.matches],
        }


def player_week_detail(session: Session, leaderboard_id: str, week_id: str) -> PlayerWeekDetail:
    """Compare the player's latest entry of ``week_id`` with the results.

    Every match of the week is listed in kickoff order; matches the entry
    has no pick for carry ``pick=None``.

    Raises
    ------
    ValueError
        If no player holds ``leaderboard_id`` or they have no entry for
        ``week_id``.
    """

    user = _require_leaderboard_user(session, leaderboard_id)
    entry = session.scalar(
        select(Entry)
        .where(Entry.wa_number == user.wa_number, Entry.week_id == week_id)
        .order_by(Entry.submitted_at.desc(), Entry.id.desc())
        .limit(1)
    )
    if entry is None:
        raise ValueError(f"No entry for {user.leaderboard_id} in week {week_id}")

    picks = {pick.match_id: pick.pick for pick in entry.picks}
    return PlayerWeekDetail(
        leaderboard_id=user.leaderboard_id,
        week_id=week_id,
        submitted_at=entry.submitted_at,
        points=entry.points,
        matches=[
            PickResult(
                match_id=match.id,
                home_team=match.home_team,
                away_team=match.away_team,
                kickoff_at=match.kickoff_at,
                pick=picks.get(match.id),
                home_score=match.home_score,
                away_score=match.away_score,
                outcome=match.outcome,
            )
            for match in Match.for_week(session, week_id)
        ],
    )
