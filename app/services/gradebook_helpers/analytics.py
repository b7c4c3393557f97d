# /app/services/gradebook_helpers/analytics.py

"""
Class-level statistics over a set of gradebook entries: average and median
totals, the A-F distribution and each student's position in class.
These functions operate on entries that have already been fetched.
"""

from typing import Dict, List

import pandas as pd

from ...models.common import LetterGrade

EMPTY_DISTRIBUTION = {grade.value: 0 for grade in LetterGrade}


def calculate_class_statistics(entries: List) -> Dict:
    """
    Entries whose total has never been computed are left out. Positions use
    a dense ranking, so equal totals share a position and the next total
    takes the following number.
    """
    rows = [
        {"student_id": e.student_id, "total_marks": e.total_marks, "final_grade": e.final_grade}
        for e in entries
    ]
    df = pd.DataFrame(rows, columns=["student_id", "total_marks", "final_grade"])
    df["total_marks"] = pd.to_numeric(df["total_marks"], errors="coerce")
    df.dropna(subset=["total_marks"], inplace=True)

    if df.empty:
        return {
            "entry_count": 0,
            "average_total": 0.0,
            "median_total": 0.0,
            "grade_distribution": dict(EMPTY_DISTRIBUTION),
            "positions": {},
        }

    distribution = dict(EMPTY_DISTRIBUTION)
    distribution.update({str(k): int(v) for k, v in df["final_grade"].dropna().value_counts().to_dict().items()})

    ranks = df["total_marks"].rank(method="dense", ascending=False).astype(int)
    positions = dict(zip(df["student_id"], ranks.tolist()))

    return {
        "entry_count": int(len(df)),
        "average_total": round(float(df["total_marks"].mean()), 2),
        "median_total": round(float(df["total_marks"].median()), 2),
        "grade_distribution": distribution,
        "positions": positions,
    }
