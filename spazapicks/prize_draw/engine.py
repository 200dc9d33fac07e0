"""Weighted weekly prize draw."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from .errors import (
    AlreadyDrawn,
    IncompleteWeek,
    NoEligiblePlayers,
    NoEntries,
    NoMatches,
    NoPrizes,
)
from .message import build_winner_message, normalize_prize_codes
from .sampling import weighted_sample_without_replacement
from ..repository.base import DrawRecord, PlayerTickets, WeekRepository

logger = logging.getLogger(__name__)


def _ticket_threshold(min_points: int) -> int:
    if isinstance(min_points, bool) or not isinstance(min_points, int):
        raise TypeError("min_points must be an integer")
    return max(1, min_points)


@dataclass(frozen=True)
class DrawWinner:
    """A player selected in a draw and the prize code they were given."""

    player_id: str
    tickets_held: int
    prize_code: str
    message: str

    def to_json(self) -> dict:
        return {
            "player_id": self.player_id,
            "tickets_held": self.tickets_held,
            "prize_code": self.prize_code,
            "message": self.message,
        }


@dataclass
class DrawOutcome:
    """Value object describing a completed draw.

    Attributes
    ----------
    week_id : str
        Week the draw was run for.
    min_points : int
        Ticket threshold a player needed to take part.
    total_eligible : int
        Number of players that met ``min_points``.
    winners : list[DrawWinner]
        Winners in draw order; the i-th winner holds the i-th prize code.
    """

    week_id: str
    min_points: int
    total_eligible: int
    winners: list[DrawWinner] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "week_id": self.week_id,
            "min_points": self.min_points,
            "total_eligible": self.total_eligible,
            "winners": [winner.to_json() for winner in self.winners],
        }


class PrizeDrawEngine:
    """Engine that selects weekly winners weighted by points and records them."""

    def __init__(
        self,
        repository: WeekRepository,
        *,
        rng: Optional[random.Random] = None,
        message_builder: Callable[[str], str] = build_winner_message,
    ) -> None:
        """Create a prize draw engine bound to a repository.

        Parameters
        ----------
        repository : WeekRepository
            Source of matches and aggregated points, and sink for draw records.
        rng : Optional[random.Random], default: None
            Random source used for selection. Typically omitted, in which case
            ``random.SystemRandom()`` is used; tests pass a seeded instance.
        message_builder : Callable[[str], str], default: build_winner_message
            Produces the winner notification from a prize code.
        """

        self._repository = repository
        self._rng = rng or random.SystemRandom()
        self._message_builder = message_builder

    def eligible_players(self, week_id: str, min_points: int = 1) -> list[PlayerTickets]:
        """Return players of ``week_id`` holding at least ``min_points`` tickets."""

        threshold = _ticket_threshold(min_points)
        return [
            tickets
            for tickets in self._repository.get_aggregate_points(week_id)
            if tickets.total_points >= threshold
        ]

    def run(
        self,
        week_id: str,
        prize_codes: Iterable[str],
        *,
        min_points: int = 1,
        allow_redraw: bool = True,
    ) -> DrawOutcome:
        """Draw winners for ``week_id`` and persist one record per winner.

        Parameters
        ----------
        week_id : str
            Week to draw. Every match in it must be finished.
        prize_codes : Iterable[str]
            Prize codes handed out in the given order. Codes are trimmed,
            blanks are dropped and repeated codes are used once.
        min_points : int, default: 1
            Minimum tickets a player needs to take part. Values below 1 are
            raised to 1, since a player without tickets cannot be drawn.
        allow_redraw : bool, default: True
            When ``False``, refuse to draw a week that already has winners.

        Returns
        -------
        DrawOutcome
            Winners and eligibility counts. The number of winners is
            ``min(len(prize_codes), eligible players)``.

        Notes
        -----
        The draw performs the following steps:

        1. Check the preconditions below, in order.
        2. Sum every player's entry points for the week into a ticket count
           and keep players with at least ``min_points`` tickets.
        3. Repeatedly select one remaining player with probability
           proportional to their tickets, remove them from the pool and give
           them the next unused prize code.
        4. Store all winner records at once.

        Draws are not idempotent: each call makes a new random selection and
        adds new records.

        Raises
        ------
        NoMatches
            If the week has no matches.
        IncompleteWeek
            If any match of the week lacks a final score.
        NoEntries
            If nobody submitted an entry for the week.
        NoEligiblePlayers
            If no player reaches ``min_points``.
        NoPrizes
            If no usable prize code was supplied.
        AlreadyDrawn
            If ``allow_redraw`` is ``False`` and the week was drawn before.
        TypeError
            If ``min_points`` is not an integer.
        """

        threshold = _ticket_threshold(min_points)

        matches = self._repository.get_matches(week_id)
        if not matches:
            raise NoMatches(week_id)
        unfinished = sum(1 for match in matches if not match.is_finished)
        if unfinished:
            raise IncompleteWeek(week_id, unfinished)

        if not self._repository.get_entries(week_id):
            raise NoEntries(week_id)

        eligible = self.eligible_players(week_id, threshold)
        if not eligible:
            raise NoEligiblePlayers(week_id, threshold)

        codes = normalize_prize_codes(prize_codes)
        if not codes:
            raise NoPrizes(week_id)

        if not allow_redraw and self._repository.has_draw(week_id):
            raise AlreadyDrawn(week_id)

        selected = weighted_sample_without_replacement(
            [(tickets.player_id, tickets.total_points) for tickets in eligible],
            len(codes),
            self._rng,
        )

        winners = [
            DrawWinner(
                player_id=player_id,
                tickets_held=tickets_held,
                prize_code=code,
                message=self._message_builder(code),
            )
            for (player_id, tickets_held), code in zip(selected, codes)
        ]

        self._repository.insert_draw_records(
            [
                DrawRecord(
                    week_id=week_id,
                    player_id=winner.player_id,
                    prize_code=winner.prize_code,
                    message=winner.message,
                    tickets_held=winner.tickets_held,
                )
                for winner in winners
            ]
        )

        logger.info(
            f"Drew {len(winners)} winner(s) for week {week_id} from "
            f"{len(eligible)} eligible player(s) and {len(codes)} prize code(s)"
        )
        return DrawOutcome(
            week_id=week_id,
            min_points=threshold,
            total_eligible=len(eligible),
            winners=winners,
        )


__all__ = [
    "DrawOutcome",
    "DrawWinner",
    "PrizeDrawEngine",
]
