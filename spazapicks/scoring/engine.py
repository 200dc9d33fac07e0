"""Weekly entry scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Hashable, Iterable, Optional

from .outcome import Outcome, outcome_from_scores
from .points import count_correct_picks, points_for_correct_picks
from ..repository.base import WeekRepository

logger = logging.getLogger(__name__)


class AlignmentMismatch(ValueError):
    """An entry's picks do not line up with the matches of its week."""

    def __init__(
        self,
        week_id: str,
        entry_id: Hashable,
        pick_count: int,
        match_count: int,
    ) -> None:
        self.week_id = week_id
        self.entry_id = entry_id
        self.pick_count = pick_count
        self.match_count = match_count
        super().__init__(
            f"Entry {entry_id!r} in week {week_id} has {pick_count} picks "
            f"for {match_count} matches."
        )


@dataclass(frozen=True)
class EntryScore:
    """Score computed for a single entry."""

    entry_id: Hashable
    player_id: str
    correct_picks: int
    points: int


@dataclass
class WeekScore:
    """Scores for every entry of a week, prior to persistence.

    Attributes
    ----------
    week_id : str
        Week that was evaluated.
    match_count : int
        Number of matches scheduled in the week.
    resolved_count : int
        Number of those matches with both final scores.
    entries : list[EntryScore]
        Per-entry results in the order the repository returned the entries.
    """

    week_id: str
    match_count: int
    resolved_count: int
    entries: list[EntryScore] = field(default_factory=list)

    @property
    def is_final(self) -> bool:
        """``True`` when every match of the week has a resolved outcome."""
        return self.match_count > 0 and self.resolved_count == self.match_count


@dataclass
class ScoringSummary:
    """Aggregate result of scoring one or more weeks.

    Attributes
    ----------
    scored_weeks : list[str]
        Weeks whose matches were all finished; their entries got ``scored_at``.
    pending_weeks : list[str]
        Weeks scored on the finished matches only; ``scored_at`` stays ``None``.
    skipped_weeks : list[str]
        Weeks without any match, left untouched.
    updated_count : int
        Number of entry rows written.
    """

    scored_weeks: list[str] = field(default_factory=list)
    pending_weeks: list[str] = field(default_factory=list)
    skipped_weeks: list[str] = field(default_factory=list)
    updated_count: int = 0

    def merge(self, other: "ScoringSummary") -> "ScoringSummary":
        self.scored_weeks.extend(other.scored_weeks)
        self.pending_weeks.extend(other.pending_weeks)
        self.skipped_weeks.extend(other.skipped_weeks)
        self.updated_count += other.updated_count
        return self

    def to_json(self) -> dict:
        return {
            "scored_weeks": list(self.scored_weeks),
            "pending_weeks": list(self.pending_weeks),
            "skipped_weeks": list(self.skipped_weeks),
            "updated_count": self.updated_count,
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntryScorer:
    """Scores every entry of a week against the week's match results."""

    def __init__(
        self,
        repository: WeekRepository,
        *,
        strict: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Create a scorer bound to a repository.

        Parameters
        ----------
        repository : WeekRepository
            Source of matches, entries and picks, and sink for entry updates.
        strict : bool, default: False
            When ``True`` an entry whose picks do not line up one-to-one with
            the week's matches raises :class:`AlignmentMismatch`. Otherwise
            only the paired picks are compared and a warning is logged.
        clock : Optional[Callable[[], datetime]], default: None
            Source of the ``scored_at`` timestamp. Defaults to UTC now.
        """

        self._repository = repository
        self._strict = strict
        self._clock = clock or _utcnow

    def evaluate_week(self, week_id: str) -> Optional[WeekScore]:
        """Compute the score of every entry in ``week_id`` without writing.

        Returns ``None`` when the week has no matches.

        Raises
        ------
        AlignmentMismatch
            In strict mode, for the first entry whose picks do not cover
            exactly the week's matches.
        """

        matches = self._repository.get_matches(week_id)
        if not matches:
            return None

        outcomes: dict[Hashable, Optional[Outcome]] = {
            match.id: outcome_from_scores(match.home_score, match.away_score)
            for match in matches
        }
        resolved_count = sum(1 for outcome in outcomes.values() if outcome is not None)
        week_score = WeekScore(
            week_id=week_id,
            match_count=len(matches),
            resolved_count=resolved_count,
        )

        for entry in self._repository.get_entries(week_id):
            picks = self._repository.get_picks(entry.id)
            paired = {p.match_id: p.pick for p in picks if p.match_id in outcomes}
            if len(paired) != len(matches) or len(picks) != len(matches):
                if self._strict:
                    raise AlignmentMismatch(week_id, entry.id, len(picks), len(matches))
                logger.warning(
                    f"Entry {entry.id} in week {week_id} has {len(picks)} picks for "
                    f"{len(matches)} matches; scoring {len(paired)} paired picks"
                )

            correct = count_correct_picks(paired, outcomes)
            week_score.entries.append(
                EntryScore(
                    entry_id=entry.id,
                    player_id=entry.player_id,
                    correct_picks=correct,
                    points=points_for_correct_picks(correct),
                )
            )

        return week_score

    def score_week(self, week_id: str) -> ScoringSummary:
        """Score and persist every entry of ``week_id``.

        Safe to call repeatedly: each call recomputes all entries of the week
        from the current match scores and overwrites the stored values.
        ``scored_at`` is set only when every match of the week is finished and
        cleared otherwise.

        Returns
        -------
        ScoringSummary
            Summary listing the week as scored, pending, or skipped.
        """

        summary = ScoringSummary()
        week_score = self.evaluate_week(week_id)
        if week_score is None:
            logger.debug(f"Week {week_id} has no matches; skipping scoring")
            summary.skipped_weeks.append(week_id)
            return summary

        scored_at = self._clock() if week_score.is_final else None
        for result in week_score.entries:
            self._repository.update_entry(
                result.entry_id,
                correct_picks=result.correct_picks,
                points=result.points,
                scored_at=scored_at,
            )
        summary.updated_count = len(week_score.entries)

        if week_score.is_final:
            summary.scored_weeks.append(week_id)
        else:
            summary.pending_weeks.append(week_id)

        logger.info(
            f"Scored {summary.updated_count} entries for week {week_id} "
            f"({week_score.resolved_count}/{week_score.match_count} matches finished)"
        )
        return summary

    def score_weeks(self, week_ids: Iterable[str]) -> ScoringSummary:
        """Score several weeks, each at most once, and merge their summaries."""

        summary = ScoringSummary()
        seen: set[str] = set()
        for week_id in week_ids:
            if week_id in seen:
                continue
            seen.add(week_id)
            summary.merge(self.score_week(week_id))
        return summary


__all__ = [
    "AlignmentMismatch",
    "EntryScore",
    "EntryScorer",
    "ScoringSummary",
    "WeekScore",
]
