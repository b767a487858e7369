from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from models import (
    LanguageLevelOption,
    RankCandidatesRequest,
    RankedItem,
    RankJobsRequest,
    RankResponse,
    ScoreCandidateRequest,
    ScoreJobRequest,
    ScoreResponse,
    Settings,
)
from relevance import __version__, rank_candidates, rank_jobs, score_candidate, score_job
from relevance.language_levels import language_level_options


# Load environment from the working directory and next to this file if present
load_dotenv()
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env", override=False)


def get_settings() -> Settings:
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        scoring_max_workers=int(os.getenv("SCORING_MAX_WORKERS", "1")),
        rate_limit_requests_per_minute=int(os.getenv("RATE_LIMIT_RPM", "60")),
        cors_allow_origins=[
            origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
        ],
    )


_startup_settings = get_settings()

logging.basicConfig(
    level=_startup_settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Relevance Scoring API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_startup_settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory store
LAST_REQUESTS_BY_IP: Dict[str, List[float]] = {}


async def rate_limit(request: Request, settings: Settings = Depends(get_settings)):
    ip = request.client.host if request.client else "unknown"
    window = 60.0
    max_req = settings.rate_limit_requests_per_minute
    now = time.time()
    # forget clients idle for a full window
    for idle_ip in [k for k, times in LAST_REQUESTS_BY_IP.items() if not times or now - times[-1] > window]:
        del LAST_REQUESTS_BY_IP[idle_ip]
    bucket = LAST_REQUESTS_BY_IP.setdefault(ip, [])
    # prune
    while bucket and now - bucket[0] > window:
        bucket.pop(0)
    if len(bucket) >= max_req:
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
    bucket.append(now)


@app.get("/")
async def root():
    return {"status": "ok", "version": __version__}


@app.get("/api/language-levels", response_model=List[LanguageLevelOption])
async def get_language_levels(compact: bool = False):
    return language_level_options(compact)


@app.post("/api/score/job", response_model=ScoreResponse, dependencies=[Depends(rate_limit)])
def score_job_endpoint(request: ScoreJobRequest):
    try:
        result = score_job(request.job, request.filter, request.flexible)
    except Exception as e:
        logger.error(f"Job scoring failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
    return ScoreResponse.from_result(result)


@app.post("/api/score/candidate", response_model=ScoreResponse, dependencies=[Depends(rate_limit)])
def score_candidate_endpoint(request: ScoreCandidateRequest):
    try:
        result = score_candidate(request.candidate, request.filter)
    except Exception as e:
        logger.error(f"Candidate scoring failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
    return ScoreResponse.from_result(result)


@app.post("/api/rank/jobs", response_model=RankResponse, dependencies=[Depends(rate_limit)])
def rank_jobs_endpoint(request: RankJobsRequest, settings: Settings = Depends(get_settings)):
    try:
        ranked = rank_jobs(request.jobs, request.filter, request.flexible, settings.scoring_max_workers)
    except Exception as e:
        logger.error(f"Job ranking failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
    return RankResponse(
        results=[RankedItem.from_match(match) for match in ranked],
        records_scored=len(request.jobs),
        records_returned=len(ranked),
    )


@app.post("/api/rank/candidates", response_model=RankResponse, dependencies=[Depends(rate_limit)])
def rank_candidates_endpoint(request: RankCandidatesRequest, settings: Settings = Depends(get_settings)):
    try:
        ranked = rank_candidates(request.candidates, request.filter, settings.scoring_max_workers)
    except Exception as e:
        logger.error(f"Candidate ranking failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
    return RankResponse(
        results=[RankedItem.from_match(match) for match in ranked],
        records_scored=len(request.candidates),
        records_returned=len(ranked),
    )
