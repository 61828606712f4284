"""
scoring/capacity_normalizer.py

Maps free-text behavior-rating labels onto the five canonical capacities.

For each capacity, in canonical order, the first rating (input order) whose
label contains the capacity keyword case-insensitively supplies the points.
Capacities without a match score 0 and unmatched labels are dropped, so the
output always has exactly five entries.

    Institutional Commitment   "institutional"
    Collaboration & Teamwork   "collaboration"
    Professionalism            "professionalism"
    Client Service             "client"
    Achieving Results          "achieving"
"""

import logging
from enum import Enum
from typing import Any, Iterable, List, Sequence, Tuple

from app.models.appraisal import NormalizedRating
from app.models.enumerations import Capacity

logger = logging.getLogger(__name__)


def _label_and_points(entry: Any) -> Tuple[str, float]:
    """Accept (label, points) pairs, BehaviorRating and NormalizedRating."""
    if isinstance(entry, tuple):
        label, points = entry
    else:
        label, points = entry.capacity, entry.points
    if isinstance(label, Enum):
        label = label.value
    return (label or ""), (points if points is not None else 0)


class CapacityNormalizer:
    """Normalize behavior ratings to the closed Capacity enumeration."""

    def normalize(self, ratings: Iterable[Any]) -> List[NormalizedRating]:
        """
        Produce one NormalizedRating per Capacity, in canonical order.

        Args:
            ratings: (label, points) pairs or objects with .capacity/.points

        Returns:
            Exactly five NormalizedRating entries

        Examples:
            >>> n = CapacityNormalizer().normalize([("client service", 80)])
            >>> len(n), [r.capacity.value for r in n if r.points]
            (5, ['Client Service'])
        """
        pairs: Sequence[Tuple[str, float]] = [_label_and_points(r) for r in ratings]
        lowered = [(label.lower(), points) for label, points in pairs]

        normalized = [
            NormalizedRating(capacity=capacity, points=self._first_match(capacity, lowered))
            for capacity in Capacity
        ]

        unmatched = [
            label for label, _ in lowered
            if not any(c.keyword in label for c in Capacity)
        ]
        if unmatched:
            logger.debug(
                "capacity_labels_dropped",
                extra={"labels": unmatched},
            )

        return normalized

    @staticmethod
    def _first_match(capacity: Capacity, lowered: Sequence[Tuple[str, float]]) -> float:
        for label, points in lowered:
            if capacity.keyword in label:
                return points
        return 0
