"""Week identifiers used to group matches, entries and draws."""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

WEEK_ID_PATTERN = re.compile(r"^\d{4}-W(0[1-9]|[1-4]\d|5[0-3])$")


def week_id_for(moment: datetime) -> str:
    """Return the ISO week of ``moment`` (in UTC) formatted as ``YYYY-Www``."""

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    year, week, _ = moment.isocalendar()
    return f"{year}-W{week:02d}"


def current_week_id(now: Optional[datetime] = None) -> str:
    """Return the week id of ``now``, honouring the ``CURRENT_WEEK_ID`` override.

    Setting ``CURRENT_WEEK_ID`` (in the environment or ``.env``) pins the
    current week, which is how demo and test deployments replay a fixed week.
    """

    load_dotenv()
    override = os.getenv("CURRENT_WEEK_ID", "").strip()
    if override:
        return override
    return week_id_for(now or datetime.now(timezone.utc))


def is_valid_week_id(value: Optional[str]) -> bool:
    """Return ``True`` for strings shaped like ``2026-W05``."""

    if not value:
        return False
    return WEEK_ID_PATTERN.match(value) is not None


__all__ = ["WEEK_ID_PATTERN", "current_week_id", "is_valid_week_id", "week_id_for"]
