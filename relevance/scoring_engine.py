"""
Deterministic Scoring Engine

Each criterion is a small evaluator returning a CriterionScore (or None
when the filter does not ask for it). The scorers run their evaluators in
order and fold the results into a ScoreResult.

All scoring functions are deterministic - same inputs produce same outputs.
"""

import logging
from typing import Callable, Optional, Sequence

from .config import (
    JOB_WEIGHTS, CANDIDATE_WEIGHTS, PARTIAL_CREDIT, FLEXIBLE_NO_LICENSE_CREDIT,
    JOB_FILTER_DEFAULTS, CANDIDATE_FILTER_DEFAULTS, UNSET_CHOICES,
)
from .criteria import (
    CriterionScore, ScoreResult, contains_either_way, fold, score_all_required_items,
    score_distance, score_each_required_item, score_exact_match, score_minimum,
    score_range, score_range_overlap, score_set_membership, score_set_overlap,
)
from .language_levels import meets_requirement
from .records import CandidateFilter, CandidateRecord, JobFilter, JobRecord, LanguageSkill

logger = logging.getLogger(__name__)

JobCriterion = Callable[[JobRecord, JobFilter, bool], Optional[CriterionScore]]
CandidateCriterion = Callable[[CandidateRecord, CandidateFilter], Optional[CriterionScore]]


def _choice(value: Optional[str]) -> Optional[str]:
    """Drop "" and "all" select values."""
    if value is None or value.strip().lower() in UNSET_CHOICES:
        return None
    return value


def _title_contains(actual: str, wanted: str) -> bool:
    return wanted.strip().lower() in actual.lower()


def _same_text(actual: str, wanted: str) -> bool:
    return actual.lower() == wanted.lower()


def _same_language(held: LanguageSkill, required: LanguageSkill) -> bool:
    return held.name.lower() == required.name.lower() and meets_requirement(held.level, required.level)


# ---------------------------------------------------------------------------
# Job criteria: how well a job satisfies a searcher's filter
# ---------------------------------------------------------------------------

def job_title(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    wanted = filters.title if filters.title and filters.title.strip() else None
    return score_exact_match("title", wanted, job.title, JOB_WEIGHTS["title"], PARTIAL_CREDIT, _title_contains)


def job_sector(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_exact_match("sector", _choice(filters.sector), job.sector, JOB_WEIGHTS["sector"], PARTIAL_CREDIT)


def job_salary(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    missing = not job.salary_min and not job.salary_max
    return score_range_overlap(
        "salary", filters.salary_range, job.salary_min, job.salary_max, JOB_WEIGHTS["salary"],
        JOB_FILTER_DEFAULTS["salary_range"], missing=missing, partial=PARTIAL_CREDIT,
    )


def job_location(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    """Distance tiers when both sides have coordinates, else city, else country."""
    if filters.coordinates is not None and job.coordinates is not None:
        return score_distance(
            "location", filters.coordinates, job.coordinates, filters.work_radius, JOB_WEIGHTS["location_distance"]
        )
    city = _choice(filters.city)
    if city:
        return score_exact_match("city", city, job.city, JOB_WEIGHTS["location_city"], PARTIAL_CREDIT)
    return score_exact_match(
        "country", _choice(filters.country), job.country, JOB_WEIGHTS["location_country"], PARTIAL_CREDIT
    )


def _job_list_criterion(
    name: str,
    wanted: Sequence,
    required: Sequence,
    flexible: bool,
    item_matches: Callable,
    item_weight: float,
    category_weight: float,
) -> Optional[CriterionScore]:
    """Whole category as one unit in flexible mode, else one point per wanted item."""
    if flexible:
        return score_all_required_items(name, wanted, required, category_weight, item_matches)
    return score_each_required_item(
        name, wanted, required, item_weight, item_matches, partial_if_empty=PARTIAL_CREDIT,
    )


def job_skills(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return _job_list_criterion(
        "skills", filters.skills, job.required_skills, flexible, contains_either_way,
        JOB_WEIGHTS["skill"], JOB_WEIGHTS["skills_flexible"],
    )


def job_qualifications(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return _job_list_criterion(
        "qualifications", filters.qualifications, job.required_qualifications, flexible, contains_either_way,
        JOB_WEIGHTS["qualification"], JOB_WEIGHTS["qualifications_flexible"],
    )


def job_languages(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return _job_list_criterion(
        "languages", filters.languages, job.required_languages, flexible, _same_language,
        JOB_WEIGHTS["language"], JOB_WEIGHTS["languages_flexible"],
    )


def job_employment_type(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_set_membership(
        "employment_type", filters.employment_types, job.employment_type,
        JOB_WEIGHTS["employment_type"], PARTIAL_CREDIT,
    )


def job_experience(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    """
    The searcher must have at least the years the job asks for.

    Flexible mode applies the same comparison.
    """
    if filters.experience_years is None:
        return None
    weight = JOB_WEIGHTS["experience"]
    if job.experience_years is None:
        return CriterionScore("experience", weight, weight * PARTIAL_CREDIT)
    matched = job.experience_years <= filters.experience_years
    return CriterionScore("experience", weight, weight if matched else 0.0)


def job_career_level(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_exact_match(
        "career_level", _choice(filters.career_level), job.career_level, JOB_WEIGHTS["career_level"], PARTIAL_CREDIT
    )


def job_entry_bonus(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_minimum(
        "entry_bonus", filters.min_entry_bonus, job.entry_bonus, JOB_WEIGHTS["entry_bonus"], PARTIAL_CREDIT
    )


def job_vacation_days(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_minimum(
        "vacation_days", filters.min_vacation_days, job.vacation_days, JOB_WEIGHTS["vacation_days"], PARTIAL_CREDIT
    )


def job_driving_licenses(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    empty_credit = FLEXIBLE_NO_LICENSE_CREDIT if flexible else PARTIAL_CREDIT
    return score_all_required_items(
        "driving_licenses", filters.driving_licenses, job.driving_licenses,
        JOB_WEIGHTS["driving_licenses"], lambda held, required: held == required, empty_credit,
    )


def job_contract_terms(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_set_overlap(
        "contract_terms", filters.contract_terms, job.contract_terms, JOB_WEIGHTS["contract_terms"], PARTIAL_CREDIT
    )


def job_contract_duration(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_exact_match(
        "contract_duration", filters.contract_duration, job.contract_duration,
        JOB_WEIGHTS["contract_duration"], PARTIAL_CREDIT,
    )


def job_home_office(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    if not filters.home_office:
        return None
    weight = JOB_WEIGHTS["home_office"]
    if job.home_office_available:
        return CriterionScore("home_office", weight, weight)
    if job.home_office_available is None:
        return CriterionScore("home_office", weight, weight * PARTIAL_CREDIT)
    return CriterionScore("home_office", weight, 0.0)


def job_benefits(job: JobRecord, filters: JobFilter, flexible: bool) -> Optional[CriterionScore]:
    return score_each_required_item(
        "benefits", filters.benefits, job.benefits, JOB_WEIGHTS["benefit"], contains_either_way
    )


JOB_CRITERIA: Sequence[JobCriterion] = (
    job_title,
    job_sector,
    job_salary,
    job_location,
    job_skills,
    job_qualifications,
    job_languages,
    job_employment_type,
    job_experience,
    job_career_level,
    job_entry_bonus,
    job_vacation_days,
    job_driving_licenses,
    job_contract_terms,
    job_contract_duration,
    job_home_office,
    job_benefits,
)


def score_job(job: JobRecord, filters: JobFilter, flexible: Optional[bool] = None) -> ScoreResult:
    """
    Calculate how well a job satisfies a searcher's filter (0-100).

    Only criteria set on the filter are evaluated; a filter with nothing
    set scores 100.

    Args:
        job: Job posting
        filters: Searcher's filter criteria
        flexible: Score skills, qualifications and languages as whole
            categories (overqualification counts as a match). Defaults to
            the filter's enable_flexible_match.

    Returns:
        ScoreResult with score, matched, total and per-criterion breakdown
    """
    if flexible is None:
        flexible = filters.enable_flexible_match

    result = fold(criterion(job, filters, flexible) for criterion in JOB_CRITERIA)
    logger.info(
        f"Job match score: {result.score}% ({result.matched}/{result.total}, "
        f"{'flexible' if flexible else 'strict'} mode)"
    )
    return result


# ---------------------------------------------------------------------------
# Candidate criteria: how well a candidate satisfies an employer's filter.
# No partial credit anywhere on this side.
# ---------------------------------------------------------------------------

def candidate_job_title(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    wanted = filters.job_title if filters.job_title and filters.job_title.strip() else None
    return score_exact_match(
        "job_title", wanted, candidate.job_title, CANDIDATE_WEIGHTS["job_title"], matcher=_title_contains
    )


def candidate_sector(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_exact_match(
        "sector", filters.sector, candidate.sector, CANDIDATE_WEIGHTS["sector"], matcher=_same_text
    )


def candidate_gender(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    accepted = [g.lower() for g in filters.gender]
    gender = candidate.gender.lower() if candidate.gender else None
    return score_set_membership("gender", accepted, gender, CANDIDATE_WEIGHTS["gender"])


def candidate_status(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_set_membership(
        "candidate_status", filters.candidate_status, candidate.employment_status,
        CANDIDATE_WEIGHTS["candidate_status"],
    )


def candidate_salary(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_range_overlap(
        "salary", filters.salary, candidate.salary_expectation_min or 0, candidate.salary_expectation_max or 0,
        CANDIDATE_WEIGHTS["salary"], CANDIDATE_FILTER_DEFAULTS["salary"],
    )


def candidate_bonus(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_range(
        "bonus", filters.bonus, candidate.desired_entry_bonus or 0,
        CANDIDATE_WEIGHTS["bonus"], CANDIDATE_FILTER_DEFAULTS["bonus"],
    )


def candidate_vacation_days(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_range(
        "vacation_days", filters.vacation_days, candidate.vacation_days or 0,
        CANDIDATE_WEIGHTS["vacation_days"], CANDIDATE_FILTER_DEFAULTS["vacation_days"],
    )


def _candidate_holds(wanted: str, held: str) -> bool:
    return wanted.lower() in held.lower()


def _candidate_speaks(wanted: LanguageSkill, held: LanguageSkill) -> bool:
    return wanted.name.lower() in held.name.lower() and meets_requirement(held.level, wanted.level)


def candidate_skills(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_each_required_item(
        "skills", filters.skills, candidate.skills, CANDIDATE_WEIGHTS["skill"], _candidate_holds
    )


def candidate_qualifications(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_each_required_item(
        "qualifications", filters.qualifications, candidate.qualifications,
        CANDIDATE_WEIGHTS["qualification"], _candidate_holds,
    )


def candidate_languages(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_each_required_item(
        "languages", filters.languages, candidate.languages, CANDIDATE_WEIGHTS["language"], _candidate_speaks
    )


def candidate_job_types(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_set_overlap("job_types", filters.job_types, candidate.job_types, CANDIDATE_WEIGHTS["job_types"])


def candidate_career_level(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_set_membership(
        "career_level", filters.career_level, candidate.career_level, CANDIDATE_WEIGHTS["career_level"]
    )


def candidate_experience(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    """Years within the range, or only above the floor when overqualification is allowed."""
    return score_range(
        "experience", filters.years_of_experience, candidate.years_of_experience or 0,
        CANDIDATE_WEIGHTS["experience"], CANDIDATE_FILTER_DEFAULTS["years_of_experience"],
        lower_bound_only=filters.allow_overqualification,
    )


def candidate_notice_period(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_set_membership(
        "notice_period", filters.notice_period, candidate.notice_period, CANDIDATE_WEIGHTS["notice_period"]
    )


def candidate_contract_term(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_set_overlap(
        "contract_term", filters.contract_term, candidate.contract_terms, CANDIDATE_WEIGHTS["contract_term"]
    )


def candidate_home_office(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_set_membership(
        "home_office", filters.home_office_preference, candidate.home_office_preference,
        CANDIDATE_WEIGHTS["home_office"],
    )


def candidate_travel(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_range(
        "travel_willingness", filters.travel_willingness, candidate.travel_willingness or 0,
        CANDIDATE_WEIGHTS["travel_willingness"], CANDIDATE_FILTER_DEFAULTS["travel_willingness"],
    )


def candidate_driving_licenses(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_each_required_item(
        "driving_licenses", filters.driving_licenses, candidate.driving_licenses,
        CANDIDATE_WEIGHTS["driving_license"], lambda wanted, held: wanted == held,
    )


def candidate_custom_tags(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_each_required_item(
        "custom_tags", filters.custom_tags, candidate.tags, CANDIDATE_WEIGHTS["custom_tag"], _same_text
    )


def candidate_refugee(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    if not filters.is_refugee:
        return None
    weight = CANDIDATE_WEIGHTS["refugee"]
    return CriterionScore("refugee", weight, weight if candidate.is_refugee else 0.0)


def candidate_origin_country(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    return score_exact_match(
        "origin_country", filters.origin_country, candidate.origin_country,
        CANDIDATE_WEIGHTS["origin_country"], matcher=_same_text,
    )


def candidate_location(candidate: CandidateRecord, filters: CandidateFilter) -> Optional[CriterionScore]:
    """
    Distance tiers around filter.location's coordinates; without them, the
    first city of filter.location.cities, then filter.city, as substrings
    of the candidate's city.
    """
    location = filters.location
    if location is not None and location.coordinates is not None:
        return score_distance(
            "location", location.coordinates, candidate.coordinates, filters.work_radius,
            CANDIDATE_WEIGHTS["location_distance"],
        )
    city = location.cities[0] if location is not None and location.cities else filters.city
    return score_exact_match(
        "city", city, candidate.city, CANDIDATE_WEIGHTS["location_city"], matcher=_title_contains
    )


CANDIDATE_CRITERIA: Sequence[CandidateCriterion] = (
    candidate_job_title,
    candidate_sector,
    candidate_gender,
    candidate_status,
    candidate_salary,
    candidate_bonus,
    candidate_vacation_days,
    candidate_skills,
    candidate_qualifications,
    candidate_languages,
    candidate_job_types,
    candidate_career_level,
    candidate_experience,
    candidate_notice_period,
    candidate_contract_term,
    candidate_home_office,
    candidate_travel,
    candidate_driving_licenses,
    candidate_custom_tags,
    candidate_refugee,
    candidate_origin_country,
    candidate_location,
)


def score_candidate(candidate: CandidateRecord, filters: CandidateFilter) -> ScoreResult:
    """
    Calculate how well a candidate satisfies an employer's filter (0-100).

    Every list criterion is scored per item and a candidate missing data
    earns nothing for it.
    """
    result = fold(criterion(candidate, filters) for criterion in CANDIDATE_CRITERIA)
    logger.info(f"Candidate match score: {result.score}% ({result.matched}/{result.total})")
    return result
