# /app/services/submission_helpers/lateness.py

import math
from datetime import datetime
from typing import Tuple

from ...core.clock import ensure_utc


def lateness(due_date: datetime, submitted_at: datetime) -> Tuple[bool, int]:
    """
    Returns `(is_late, late_days)` for a submission. Any part of a day past
    the due instant counts as a whole day.
    """
    due = ensure_utc(due_date)
    submitted = ensure_utc(submitted_at)
    if submitted <= due:
        return False, 0
    overdue_seconds = (submitted - due).total_seconds()
    return True, max(1, math.ceil(overdue_seconds / 86400))
