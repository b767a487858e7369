"""
Deterministic Relevance-Scoring Engine

Scores job postings against a searcher's filter and candidate profiles
against an employer's filter, producing a 0-100 match percentage with the
per-criterion breakdown that explains it.

Usage:
    from relevance import JobRecord, JobFilter, score_job

    result = score_job(JobRecord(**job_row), JobFilter(**filter_state))
    print(f"Match: {result.score}%")
"""

from .criteria import CriterionScore, ScoreResult
from .geo import distance_km
from .language_levels import meets_requirement
from .matcher import RankedMatch, match_tier, rank_candidates, rank_jobs
from .records import CandidateFilter, CandidateRecord, JobFilter, JobRecord
from .scoring_engine import score_candidate, score_job

__all__ = [
    "CandidateFilter",
    "CandidateRecord",
    "CriterionScore",
    "JobFilter",
    "JobRecord",
    "RankedMatch",
    "ScoreResult",
    "distance_km",
    "match_tier",
    "meets_requirement",
    "rank_candidates",
    "rank_jobs",
    "score_candidate",
    "score_job",
]
__version__ = "1.0.0"
