from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from relevance import CandidateFilter, CandidateRecord, JobFilter, JobRecord, RankedMatch, ScoreResult
from relevance.matcher import match_tier

MAX_RANK_RECORDS = 500


class ScoreJobRequest(BaseModel):
    job: JobRecord
    filter: JobFilter
    flexible: Optional[bool] = Field(
        default=None,
        description="Score skills/qualifications/languages as whole categories; defaults to the filter setting",
    )


class ScoreCandidateRequest(BaseModel):
    candidate: CandidateRecord
    filter: CandidateFilter


class RankJobsRequest(BaseModel):
    jobs: List[JobRecord] = Field(default_factory=list)
    filter: JobFilter
    flexible: Optional[bool] = None

    @field_validator("jobs")
    @classmethod
    def validate_jobs(cls, v: List[JobRecord]) -> List[JobRecord]:
        if len(v) == 0:
            raise ValueError("At least one job is required")
        if len(v) > MAX_RANK_RECORDS:
            raise ValueError(f"A maximum of {MAX_RANK_RECORDS} jobs is allowed")
        return v


class RankCandidatesRequest(BaseModel):
    candidates: List[CandidateRecord] = Field(default_factory=list)
    filter: CandidateFilter

    @field_validator("candidates")
    @classmethod
    def validate_candidates(cls, v: List[CandidateRecord]) -> List[CandidateRecord]:
        if len(v) == 0:
            raise ValueError("At least one candidate is required")
        if len(v) > MAX_RANK_RECORDS:
            raise ValueError(f"A maximum of {MAX_RANK_RECORDS} candidates is allowed")
        return v


class CriterionBreakdown(BaseModel):
    name: str
    weight: float
    earned: float


class ScoreResponse(BaseModel):
    score: int = Field(ge=0, le=100)
    matched: float
    total: float
    tier: str = Field(description="strong|moderate|weak")
    breakdown: List[CriterionBreakdown] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ScoreResult) -> "ScoreResponse":
        return cls(
            score=result.score,
            matched=result.matched,
            total=result.total,
            tier=match_tier(result.score),
            breakdown=[
                CriterionBreakdown(name=c.name, weight=c.weight, earned=c.earned) for c in result.breakdown
            ],
        )


class RankedItem(BaseModel):
    index: int = Field(description="Position of the record in the request")
    score: int = Field(ge=0, le=100)
    tier: str
    matched: float
    total: float

    @classmethod
    def from_match(cls, match: RankedMatch) -> "RankedItem":
        return cls(
            index=match.index,
            score=match.score,
            tier=match.tier,
            matched=match.result.matched,
            total=match.result.total,
        )


class RankResponse(BaseModel):
    results: List[RankedItem]
    records_scored: int
    records_returned: int


class LanguageLevelOption(BaseModel):
    value: str
    label: str


class Settings(BaseModel):
    log_level: str = "INFO"
    scoring_max_workers: int = 1
    rate_limit_requests_per_minute: int = 60
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
