"""
Main Matcher Module

Ranks lists of records against one filter:
1. Score every record (optionally across a thread pool)
2. Sort by score, highest first
3. Drop records under the minimum match threshold when partial matching is on
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeVar

from .config import DEFAULT_MIN_MATCH_THRESHOLD, MATCH_TIERS
from .criteria import ScoreResult
from .records import CandidateFilter, CandidateRecord, JobFilter, JobRecord
from .scoring_engine import score_candidate, score_job

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class RankedMatch:
    index: int
    record: object
    result: ScoreResult

    @property
    def score(self) -> int:
        return self.result.score

    @property
    def tier(self) -> str:
        return match_tier(self.result.score)


def match_tier(score: float) -> str:
    """Label a score as strong (>= 80), moderate (>= 50) or weak."""
    for minimum, label in MATCH_TIERS:
        if score >= minimum:
            return label
    return MATCH_TIERS[-1][1]


def _score_all(
    records: Sequence[R],
    scorer: Callable[[R], ScoreResult],
    max_workers: Optional[int],
) -> List[ScoreResult]:
    if max_workers and max_workers > 1 and len(records) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(scorer, records))
    return [scorer(record) for record in records]


def _rank(
    records: Sequence[R],
    scorer: Callable[[R], ScoreResult],
    enable_partial_match: bool,
    min_match_threshold: Optional[float],
    max_workers: Optional[int],
) -> List[RankedMatch]:
    results = _score_all(records, scorer, max_workers)
    ranked = [RankedMatch(i, record, result) for i, (record, result) in enumerate(zip(records, results))]

    if enable_partial_match:
        threshold = min_match_threshold or DEFAULT_MIN_MATCH_THRESHOLD
        ranked = [match for match in ranked if match.score >= threshold]
        logger.info(f"{len(ranked)}/{len(records)} records at or above {threshold}% match")

    # Stable sort keeps input order among equal scores
    ranked.sort(key=lambda match: match.score, reverse=True)

    if ranked:
        logger.info(f"Top match: {ranked[0].score}% (record {ranked[0].index})")
    return ranked


def rank_jobs(
    jobs: Sequence[JobRecord],
    filters: JobFilter,
    flexible: Optional[bool] = None,
    max_workers: Optional[int] = None,
) -> List[RankedMatch]:
    """
    Score jobs against a searcher's filter and return them best first.

    Args:
        jobs: Jobs to rank
        filters: Searcher's filter; its enable_partial_match and
            min_match_threshold control the threshold cut
        flexible: Scoring mode, defaults to the filter's setting
        max_workers: Score across this many threads when greater than 1

    Returns:
        RankedMatch list sorted by score (highest first)
    """
    logger.info(f"Ranking {len(jobs)} jobs")
    return _rank(
        jobs,
        lambda job: score_job(job, filters, flexible),
        filters.enable_partial_match,
        filters.min_match_threshold,
        max_workers,
    )


def rank_candidates(
    candidates: Sequence[CandidateRecord],
    filters: CandidateFilter,
    max_workers: Optional[int] = None,
) -> List[RankedMatch]:
    """Score candidates against an employer's filter and return them best first."""
    logger.info(f"Ranking {len(candidates)} candidates")
    return _rank(
        candidates,
        lambda candidate: score_candidate(candidate, filters),
        filters.enable_partial_match,
        filters.min_match_threshold,
        max_workers,
    )
