"""Winner notification text."""

from __future__ import annotations

from typing import Iterable, Optional

WINNER_MESSAGE_LINES = (
    "Congratulations you've won on your picks this week.",
    "Please go to your home spaza to claim your prize.",
)


def build_winner_message(prize_code: str) -> str:
    """Return the fixed winner message ending with ``prize_code``."""

    if not prize_code:
        raise ValueError("prize_code must not be empty")
    return "\n".join((*WINNER_MESSAGE_LINES, prize_code))


def normalize_prize_codes(prize_codes: Optional[Iterable[Optional[str]]]) -> list[str]:
    """Trim codes, drop blanks and duplicates, and keep the first-seen order."""

    unique: list[str] = []
    seen: set[str] = set()
    for code in prize_codes or ():
        if code is None:
            continue
        text = str(code).strip()
        if not text or text in seen:
            continue
        seen.add(text)
        unique.append(text)
    return unique


__all__ = ["WINNER_MESSAGE_LINES", "build_winner_message", "normalize_prize_codes"]
