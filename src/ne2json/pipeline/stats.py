"""
Summary statistics over normalized country records.
"""

from __future__ import annotations

import pandas as pd

from ..domain.models import NormalizedCountry


def _counts(frame: pd.DataFrame, column: str) -> dict[str, int]:
    if frame.empty:
        return {}
    counts = frame[column].fillna("Unknown").value_counts()
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return {label: int(count) for label, count in ordered}


def country_statistics(records: list[NormalizedCountry]) -> dict:
    """
    Totals by continent and region.

    Returns:
        {"total": n, "by_continent": {...}, "by_region": {...}} with each
        breakdown sorted by count descending, then label
    """
    frame = pd.DataFrame([{"continent": r.continent, "region": r.region} for r in records])
    return {
        "total": len(records),
        "by_continent": _counts(frame, "continent"),
        "by_region": _counts(frame, "region"),
    }
