"""
CSV Export Service
app/services/csv_export.py

Flattens scored appraisal views into the detailed appraisal spreadsheet.
"""

import logging
from typing import Dict, List, Sequence, Union

import pandas as pd

from app.models.appraisal import AppraisalView
from app.models.enumerations import Capacity

logger = logging.getLogger(__name__)

# Column order is part of the export format
EXPORT_COLUMNS: List[str] = [
    "Instructor",
    "Research & Scientific Activities",
    "University Service",
    "Community Service",
    "Quality of Teaching",
    "Total Performance (out of 100)",
    "Total Performance (out of 3)",
    Capacity.INSTITUTIONAL_COMMITMENT.value,
    Capacity.COLLABORATION_TEAMWORK.value,
    Capacity.PROFESSIONALISM.value,
    Capacity.CLIENT_SERVICE.value,
    Capacity.ACHIEVING_RESULTS.value,
    "Total Capabilities (out of 100)",
    "Total Capabilities (out of 7)",
    "Overall Total (out of 5)",
]


def _points(value: float) -> Union[int, float]:
    """Whole-number points print without a trailing .0"""
    return int(value) if float(value).is_integer() else value


def _scaled(value: float) -> str:
    return f"{value:.2f}"


def export_row(view: AppraisalView) -> Dict[str, Union[str, int, float]]:
    """Build one spreadsheet row from a scored appraisal view."""
    ev = view.evaluation
    scores = view.scores

    row = {
        "Instructor": view.faculty.name,
        "Research & Scientific Activities": _points(ev.research_pts),
        "University Service": _points(ev.university_service_pts),
        "Community Service": _points(ev.community_service_pts),
        "Quality of Teaching": _points(ev.teaching_quality_pts),
        "Total Performance (out of 100)": _points(scores.raw_performance),
        "Total Performance (out of 3)": _scaled(scores.scaled_performance),
    }
    for capacity in Capacity:
        row[capacity.value] = _points(ev.points_for(capacity))
    row["Total Capabilities (out of 100)"] = _points(scores.raw_capabilities)
    row["Total Capabilities (out of 7)"] = _scaled(scores.scaled_capabilities)
    row["Overall Total (out of 5)"] = _scaled(scores.overall)
    return row


def export_csv(views: Sequence[AppraisalView]) -> str:
    """
    Serialize appraisal views to CSV text.

    An empty list yields the header line only.
    """
    frame = pd.DataFrame([export_row(v) for v in views], columns=EXPORT_COLUMNS, dtype=object)
    logger.info(f"Exporting {len(frame)} appraisal rows to CSV")
    return frame.to_csv(index=False)
