"""
scoring/eligibility.py

Decides whether the "evaluate" action is available for an appraisal.

    complete              → never (terminal)
    new                   → only inside [cycle_end − 1 month, cycle_end]
    in_progress / sent    → always

The window is checked against the wall clock on every call. Month
subtraction uses calendar semantics from dateutil: the month drops by one
and the day is clamped to the end of the shorter month, so a cycle ending
2024-03-31 opens on 2024-02-29. This departs from the legacy dashboard,
which rolled the overflow into the next month and opened on 2024-03-02.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from app.models.enumerations import AppraisalStatus

DEFAULT_WINDOW_MONTHS = 1


def _as_utc(moment: Union[date, datetime]) -> datetime:
    """Dates mean midnight UTC; naive datetimes are taken as UTC."""
    if not isinstance(moment, datetime):
        return datetime.combine(moment, time.min, tzinfo=timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def evaluation_window(
    cycle_end: Union[date, datetime],
    months: int = DEFAULT_WINDOW_MONTHS,
) -> tuple:
    """Return the inclusive (opens, closes) window for new appraisals."""
    closes = _as_utc(cycle_end)
    opens = closes - relativedelta(months=months)
    return opens, closes


def is_evaluation_enabled(
    status: AppraisalStatus,
    cycle_end: Union[date, datetime],
    now: Optional[datetime] = None,
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> bool:
    """
    Check whether an appraisal can be evaluated right now.

    Args:
        status: Current appraisal status
        cycle_end: End date of the appraisal's cycle
        now: Clock value; defaults to the current UTC time
        window_months: Length of the evaluation window for new appraisals

    Returns:
        True if the evaluate action should be enabled
    """
    if status == AppraisalStatus.COMPLETE:
        return False

    if status == AppraisalStatus.NEW:
        current = _as_utc(now if now is not None else datetime.now(timezone.utc))
        opens, closes = evaluation_window(cycle_end, window_months)
        return opens <= current <= closes

    return True
