"""
Criterion building blocks shared by the job and candidate scorers.

Every helper follows the same contract: it returns None when the filter
does not ask for the criterion (so it contributes nothing to either
accumulator), and otherwise a CriterionScore carrying the weight added to
the total and the amount earned towards the matched sum.
"""

import logging
import math
import operator
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence, Tuple, TypeVar

from .config import RADIUS_TIERS, DEFAULT_WORK_RADIUS_KM
from .geo import distance_km

logger = logging.getLogger(__name__)

W = TypeVar("W")
A = TypeVar("A")

Coordinates = Tuple[float, float]


@dataclass(frozen=True)
class CriterionScore:
    name: str
    weight: float
    earned: float

    @property
    def matched(self) -> bool:
        return self.weight > 0 and self.earned >= self.weight


@dataclass(frozen=True)
class ScoreResult:
    """Percentage score plus the accumulators that explain it."""
    score: int
    matched: float
    total: float
    breakdown: Tuple[CriterionScore, ...] = field(default_factory=tuple)

    @property
    def matched_criteria(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.breakdown if c.matched)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def contains_either_way(a: str, b: str) -> bool:
    """Case-insensitive substring match in either direction."""
    a_lower = a.lower()
    b_lower = b.lower()
    return a_lower in b_lower or b_lower in a_lower


def _evaluate(name: str, weight: float, matched: bool, missing: bool, partial: float) -> CriterionScore:
    if matched:
        earned = weight
    elif missing:
        earned = weight * partial
    else:
        earned = 0.0
    return CriterionScore(name, weight, earned)


def score_exact_match(
    name: str,
    wanted: Optional[W],
    actual: Optional[A],
    weight: float,
    partial: float = 0.0,
    matcher: Callable[[A, W], bool] = operator.eq,
) -> Optional[CriterionScore]:
    """
    Compare a single filter value against a single record value.

    Args:
        name: Criterion name for the breakdown
        wanted: Filter value; falsy means the criterion is unset
        actual: Record value; falsy means the record lacks data
        weight: Weight added to the total
        partial: Fraction of the weight earned when the record lacks data
        matcher: Comparison called as matcher(actual, wanted)
    """
    if not wanted:
        return None
    missing = not actual
    matched = not missing and matcher(actual, wanted)
    return _evaluate(name, weight, matched, missing, partial)


def score_set_membership(
    name: str,
    accepted: Sequence[W],
    actual: Optional[W],
    weight: float,
    partial: float = 0.0,
) -> Optional[CriterionScore]:
    """Full credit when the record value is one of the accepted values."""
    if not accepted:
        return None
    missing = not actual
    return _evaluate(name, weight, actual in accepted, missing, partial)


def score_set_overlap(
    name: str,
    wanted: Sequence[W],
    actual: Sequence[W],
    weight: float,
    partial: float = 0.0,
) -> Optional[CriterionScore]:
    """Full credit when any wanted value appears among the record values."""
    if not wanted:
        return None
    matched = any(w in actual for w in wanted)
    return _evaluate(name, weight, matched, not actual, partial)


def score_each_required_item(
    name: str,
    wanted: Sequence[W],
    available: Sequence[A],
    weight_per_item: float,
    item_matches: Callable[[W, A], bool],
    partial_if_empty: float = 0.0,
) -> Optional[CriterionScore]:
    """
    Score every wanted item on its own.

    The total grows by weight_per_item for each wanted item. An item earns
    its weight when some available item matches it, or partial_if_empty of
    it when the record lists nothing at all in this category.
    """
    if not wanted:
        return None
    earned = 0.0
    for item in wanted:
        if any(item_matches(item, candidate) for candidate in available):
            earned += weight_per_item
        elif not available:
            earned += weight_per_item * partial_if_empty
    return CriterionScore(name, weight_per_item * len(wanted), earned)


def score_all_required_items(
    name: str,
    held: Sequence[W],
    required: Sequence[A],
    weight: float,
    item_matches: Callable[[W, A], bool],
    empty_credit: float = 1.0,
) -> Optional[CriterionScore]:
    """
    Score a whole category as one unit.

    Full credit when every required item is covered by some held item.
    A record with no requirements earns empty_credit of the weight.
    """
    if not held:
        return None
    if not required:
        return CriterionScore(name, weight, weight * empty_credit)
    covered = all(any(item_matches(h, r) for h in held) for r in required)
    return CriterionScore(name, weight, weight if covered else 0.0)


def score_minimum(
    name: str,
    minimum: Optional[float],
    actual: Optional[float],
    weight: float,
    partial: float = 0.0,
) -> Optional[CriterionScore]:
    """Full credit when the record value reaches a positive minimum."""
    if not minimum or minimum <= 0:
        return None
    matched = (actual or 0) >= minimum
    return _evaluate(name, weight, matched, not actual, partial)


def is_narrowed(value_range: Optional[Tuple[float, float]], defaults: Tuple[float, float]) -> bool:
    """True when a range filter was moved off its form defaults."""
    if value_range is None:
        return False
    low, high = value_range
    default_low, default_high = defaults
    return low > default_low or high < default_high


def score_range(
    name: str,
    value_range: Optional[Tuple[float, float]],
    actual: float,
    weight: float,
    defaults: Tuple[float, float],
    lower_bound_only: bool = False,
) -> Optional[CriterionScore]:
    """Full credit when the record value lies inside the filter range."""
    if not is_narrowed(value_range, defaults):
        return None
    low, high = value_range
    matched = actual >= low if lower_bound_only else low <= actual <= high
    return CriterionScore(name, weight, weight if matched else 0.0)


def score_range_overlap(
    name: str,
    value_range: Optional[Tuple[float, float]],
    record_low: Optional[float],
    record_high: Optional[float],
    weight: float,
    defaults: Tuple[float, float],
    missing: bool = False,
    partial: float = 0.0,
) -> Optional[CriterionScore]:
    """
    Full credit when the filter range and the record range intersect.

    A record range with only one bound never intersects.
    """
    if not is_narrowed(value_range, defaults):
        return None
    low, high = value_range
    bounded = record_low is not None and record_high is not None
    matched = not missing and bounded and record_high >= low and record_low <= high
    return _evaluate(name, weight, matched, missing, partial)


def distance_credit(distance: float, radius: float) -> float:
    """Fraction of the location weight earned at a given distance."""
    for multiplier, fraction in RADIUS_TIERS:
        if distance <= radius * multiplier:
            return fraction
    return 0.0


def score_distance(
    name: str,
    origin: Optional[Coordinates],
    target: Optional[Coordinates],
    radius: Optional[float],
    weight: float,
) -> Optional[CriterionScore]:
    """
    Tiered distance credit: full inside the radius, half inside twice the
    radius, a quarter inside four times the radius, nothing beyond.

    A record without coordinates earns nothing but still adds the weight.
    """
    if origin is None:
        return None
    if target is None:
        return CriterionScore(name, weight, 0.0)
    if not radius or radius <= 0:
        radius = DEFAULT_WORK_RADIUS_KM
    distance = distance_km(origin[0], origin[1], target[0], target[1])
    fraction = distance_credit(distance, radius)
    logger.debug(f"{name}: {distance:.1f} km against radius {radius} km, credit {fraction}")
    return CriterionScore(name, weight, weight * fraction)


def fold(criteria: Iterable[Optional[CriterionScore]]) -> ScoreResult:
    """
    Sum evaluated criteria into a ScoreResult.

    No evaluated criteria means nothing was asked for, which scores 100.
    """
    breakdown = tuple(c for c in criteria if c is not None)
    matched = sum(c.earned for c in breakdown)
    total = sum(c.weight for c in breakdown)

    for c in breakdown:
        logger.debug(f"{c.name}: {c.earned}/{c.weight}")

    if total == 0:
        return ScoreResult(score=100, matched=0, total=0, breakdown=breakdown)
    score = round_half_up(matched / total * 100)
    return ScoreResult(score=max(0, min(100, score)), matched=matched, total=total, breakdown=breakdown)
