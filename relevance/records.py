"""
Canonical record shapes consumed by the scorers.

Records reach the engine from several producers that spell the same field
differently (snake_case columns, camelCase form state, nested joins). The
models below accept all of those spellings and normalize malformed values
to "absent" so the scoring core only ever sees one shape.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, AliasPath, BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_CANDIDATE_LANGUAGE_LEVEL, DEFAULT_REQUIRED_LANGUAGE_LEVEL


def to_float(value: Any) -> Optional[float]:
    """Finite float or None; booleans and non-numeric strings count as absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def to_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0"):
            return False
    return None


def to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value if value.strip() else None


def item_name(item: Any) -> Optional[str]:
    """Name of a list entry given as a string, {"name": ...} or a nested join row."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for key in ("skills", "qualifications", "languages"):
            nested = item.get(key)
            if isinstance(nested, dict) and nested.get("name"):
                return nested["name"]
        name = item.get("name")
        if isinstance(name, str):
            return name
    return None


def to_names(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        return []
    names = (item_name(item) for item in value)
    return [n.strip() for n in names if n and n.strip()]


def to_languages(value: Any, default_level: str) -> List[dict]:
    """Normalize language entries to {"name", "level"} dicts."""
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    languages = []
    for item in value:
        name = item_name(item)
        if not name or not name.strip():
            continue
        level = default_level
        if isinstance(item, dict):
            level = item.get("level") or item.get("proficiency_level") or default_level
        languages.append({"name": name.strip(), "level": str(level)})
    return languages


def to_range(value: Any) -> Optional[Tuple[float, float]]:
    """Two-number [low, high] range or None when malformed."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    low, high = to_float(value[0]), to_float(value[1])
    if low is None or high is None:
        return None
    return (low, high)


def to_latitude(value: Any) -> Optional[float]:
    number = to_float(value)
    if number is None or not -90 <= number <= 90:
        return None
    return number


def to_longitude(value: Any) -> Optional[float]:
    number = to_float(value)
    if number is None or not -180 <= number <= 180:
        return None
    return number


def to_radius(value: Any) -> Optional[float]:
    number = to_float(value)
    if number is None or number <= 0:
        return None
    return number


class LanguageSkill(BaseModel):
    name: str
    level: str


class RecordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        latitude = getattr(self, "latitude", None)
        longitude = getattr(self, "longitude", None)
        if latitude is None or longitude is None:
            return None
        return (latitude, longitude)


class JobRecord(RecordModel):
    """A job posting as seen by the job scorer."""
    title: Optional[str] = None
    sector: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("sector", "industry", AliasPath("company", "industry"))
    )
    salary_min: Optional[float] = Field(default=None, validation_alias=AliasChoices("salary_min", "salaryMin"))
    salary_max: Optional[float] = Field(default=None, validation_alias=AliasChoices("salary_max", "salaryMax"))
    # Carried for callers; not scored
    salary_currency: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("salary_currency", "salaryCurrency", "currency")
    )
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city: Optional[str] = None
    country: Optional[str] = None
    required_skills: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("required_skills", "requiredSkills", "skills")
    )
    required_qualifications: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("required_qualifications", "requiredQualifications", "qualifications"),
    )
    required_languages: List[LanguageSkill] = Field(
        default_factory=list, validation_alias=AliasChoices("required_languages", "requiredLanguages", "languages")
    )
    employment_type: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("employment_type", "employmentType")
    )
    career_level: Optional[str] = Field(default=None, validation_alias=AliasChoices("career_level", "careerLevel"))
    experience_years: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("experience_years", "experienceYears")
    )
    entry_bonus: Optional[float] = Field(default=None, validation_alias=AliasChoices("entry_bonus", "entryBonus"))
    vacation_days: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("vacation_days", "vacationDays")
    )
    driving_licenses: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("driving_licenses", "drivingLicenses")
    )
    contract_terms: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("contract_terms", "contractTerms")
    )
    contract_duration: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("contract_duration", "contractDuration")
    )
    benefits: List[str] = Field(default_factory=list)
    home_office_available: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("home_office_available", "homeOfficeAvailable", "home_office")
    )

    @field_validator(
        "title", "sector", "salary_currency", "city", "country", "employment_type",
        "career_level", "contract_duration", mode="before",
    )
    @classmethod
    def normalize_text(cls, v: Any) -> Optional[str]:
        return to_text(v)

    @field_validator("salary_min", "salary_max", "experience_years", "entry_bonus", "vacation_days", mode="before")
    @classmethod
    def normalize_number(cls, v: Any) -> Optional[float]:
        return to_float(v)

    @field_validator("latitude", mode="before")
    @classmethod
    def normalize_latitude(cls, v: Any) -> Optional[float]:
        return to_latitude(v)

    @field_validator("longitude", mode="before")
    @classmethod
    def normalize_longitude(cls, v: Any) -> Optional[float]:
        return to_longitude(v)

    @field_validator(
        "required_skills", "required_qualifications", "driving_licenses", "contract_terms", "benefits",
        mode="before",
    )
    @classmethod
    def normalize_names(cls, v: Any) -> List[str]:
        return to_names(v)

    @field_validator("required_languages", mode="before")
    @classmethod
    def normalize_languages(cls, v: Any) -> List[dict]:
        return to_languages(v, DEFAULT_REQUIRED_LANGUAGE_LEVEL)

    @field_validator("home_office_available", mode="before")
    @classmethod
    def normalize_tri_state(cls, v: Any) -> Optional[bool]:
        return to_bool(v)


class CandidateRecord(RecordModel):
    """A candidate profile as seen by the candidate scorer."""
    job_title: Optional[str] = Field(default=None, validation_alias=AliasChoices("job_title", "jobTitle", "title"))
    sector: Optional[str] = None
    gender: Optional[str] = None
    employment_status: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("employment_status", "employmentStatus")
    )
    salary_expectation_min: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("salary_expectation_min", "salaryExpectationMin", AliasPath("salary", "min")),
    )
    salary_expectation_max: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("salary_expectation_max", "salaryExpectationMax", AliasPath("salary", "max")),
    )
    desired_entry_bonus: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("desired_entry_bonus", "desiredEntryBonus", AliasPath("conditions", "entryBonus")),
    )
    vacation_days: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("vacation_days", "vacationDays", AliasPath("conditions", "vacationDays")),
    )
    skills: List[str] = Field(default_factory=list, validation_alias=AliasChoices("skills", "candidate_skills"))
    qualifications: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("qualifications", "candidate_qualifications")
    )
    languages: List[LanguageSkill] = Field(
        default_factory=list, validation_alias=AliasChoices("languages", "candidate_languages")
    )
    job_types: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("job_types", "job_type", "jobTypes")
    )
    career_level: Optional[str] = Field(default=None, validation_alias=AliasChoices("career_level", "careerLevel"))
    years_of_experience: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("years_of_experience", "yearsOfExperience")
    )
    notice_period: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("notice_period", "noticePeriod", AliasPath("conditions", "noticePeriod")),
    )
    contract_terms: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("contract_terms", "contract_type", "contractTermPreference"),
    )
    home_office_preference: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "home_office_preference", "homeOfficePreference", AliasPath("conditions", "homeOfficePreference")
        ),
    )
    travel_willingness: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("travel_willingness", "travelWillingness")
    )
    driving_licenses: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("driving_licenses", "drivingLicenses")
    )
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city: Optional[str] = None
    tags: List[str] = Field(default_factory=list, validation_alias=AliasChoices("tags", "custom_tags", "customTags"))
    is_refugee: bool = Field(default=False, validation_alias=AliasChoices("is_refugee", "isRefugee"))
    origin_country: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("origin_country", "originCountry")
    )

    @field_validator(
        "job_title", "sector", "gender", "employment_status", "career_level", "notice_period",
        "home_office_preference", "city", "origin_country", mode="before",
    )
    @classmethod
    def normalize_text(cls, v: Any) -> Optional[str]:
        return to_text(v)

    @field_validator(
        "salary_expectation_min", "salary_expectation_max", "desired_entry_bonus", "vacation_days",
        "years_of_experience", "travel_willingness", mode="before",
    )
    @classmethod
    def normalize_number(cls, v: Any) -> Optional[float]:
        return to_float(v)

    @field_validator("latitude", mode="before")
    @classmethod
    def normalize_latitude(cls, v: Any) -> Optional[float]:
        return to_latitude(v)

    @field_validator("longitude", mode="before")
    @classmethod
    def normalize_longitude(cls, v: Any) -> Optional[float]:
        return to_longitude(v)

    @field_validator(
        "skills", "qualifications", "job_types", "contract_terms", "driving_licenses", "tags", mode="before",
    )
    @classmethod
    def normalize_names(cls, v: Any) -> List[str]:
        return to_names(v)

    @field_validator("languages", mode="before")
    @classmethod
    def normalize_languages(cls, v: Any) -> List[dict]:
        return to_languages(v, DEFAULT_CANDIDATE_LANGUAGE_LEVEL)

    @field_validator("is_refugee", mode="before")
    @classmethod
    def normalize_flag(cls, v: Any) -> bool:
        return bool(to_bool(v))


class JobFilter(RecordModel):
    """Search criteria a candidate sets when looking for jobs."""
    title: Optional[str] = None
    sector: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    work_radius: Optional[float] = Field(default=None, validation_alias=AliasChoices("work_radius", "workRadius"))
    employment_types: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("employment_types", "employmentTypes")
    )
    salary_range: Optional[Tuple[float, float]] = Field(
        default=None, validation_alias=AliasChoices("salary_range", "salaryRange")
    )
    min_entry_bonus: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("min_entry_bonus", "minEntryBonus")
    )
    contract_duration: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("contract_duration", "contractDuration")
    )
    skills: List[str] = Field(default_factory=list)
    qualifications: List[str] = Field(default_factory=list)
    languages: List[LanguageSkill] = Field(default_factory=list)
    career_level: Optional[str] = Field(default=None, validation_alias=AliasChoices("career_level", "careerLevel"))
    experience_years: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("experience_years", "experienceYears")
    )
    driving_licenses: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("driving_licenses", "drivingLicenses")
    )
    contract_terms: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("contract_terms", "contractTerms")
    )
    home_office: bool = Field(default=False, validation_alias=AliasChoices("home_office", "homeOffice"))
    benefits: List[str] = Field(default_factory=list)
    min_vacation_days: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("min_vacation_days", "minVacationDays")
    )
    enable_flexible_match: bool = Field(
        default=False,
        validation_alias=AliasChoices("enable_flexible_match", "enableFlexibleMatch", "flexible_mode", "flexibleMode"),
    )
    enable_partial_match: bool = Field(
        default=False, validation_alias=AliasChoices("enable_partial_match", "enablePartialMatch")
    )
    min_match_threshold: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("min_match_threshold", "minMatchThreshold")
    )

    @field_validator("title", "sector", "city", "country", "contract_duration", "career_level", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> Optional[str]:
        return to_text(v)

    @field_validator(
        "min_entry_bonus", "experience_years", "min_vacation_days", "min_match_threshold", mode="before",
    )
    @classmethod
    def normalize_number(cls, v: Any) -> Optional[float]:
        return to_float(v)

    @field_validator("latitude", mode="before")
    @classmethod
    def normalize_latitude(cls, v: Any) -> Optional[float]:
        return to_latitude(v)

    @field_validator("longitude", mode="before")
    @classmethod
    def normalize_longitude(cls, v: Any) -> Optional[float]:
        return to_longitude(v)

    @field_validator("work_radius", mode="before")
    @classmethod
    def normalize_radius(cls, v: Any) -> Optional[float]:
        return to_radius(v)

    @field_validator("salary_range", mode="before")
    @classmethod
    def normalize_range(cls, v: Any) -> Optional[Tuple[float, float]]:
        return to_range(v)

    @field_validator(
        "employment_types", "skills", "qualifications", "driving_licenses", "contract_terms", "benefits",
        mode="before",
    )
    @classmethod
    def normalize_names(cls, v: Any) -> List[str]:
        return to_names(v)

    @field_validator("languages", mode="before")
    @classmethod
    def normalize_languages(cls, v: Any) -> List[dict]:
        return to_languages(v, DEFAULT_REQUIRED_LANGUAGE_LEVEL)

    @field_validator("home_office", "enable_flexible_match", "enable_partial_match", mode="before")
    @classmethod
    def normalize_flag(cls, v: Any) -> bool:
        return bool(to_bool(v))


class LocationFilter(RecordModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    # Carried for callers; not scored
    continent: Optional[str] = None
    country: Optional[str] = None
    cities: List[str] = Field(default_factory=list)

    @field_validator("latitude", mode="before")
    @classmethod
    def normalize_latitude(cls, v: Any) -> Optional[float]:
        return to_latitude(v)

    @field_validator("longitude", mode="before")
    @classmethod
    def normalize_longitude(cls, v: Any) -> Optional[float]:
        return to_longitude(v)

    @field_validator("continent", "country", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> Optional[str]:
        return to_text(v)

    @field_validator("cities", mode="before")
    @classmethod
    def normalize_names(cls, v: Any) -> List[str]:
        return to_names(v)


class CandidateFilter(RecordModel):
    """Search criteria an employer sets when looking for candidates."""
    job_title: Optional[str] = Field(default=None, validation_alias=AliasChoices("job_title", "jobTitle"))
    sector: Optional[str] = None
    gender: List[str] = Field(default_factory=list)
    candidate_status: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("candidate_status", "candidateStatus")
    )
    salary: Optional[Tuple[float, float]] = None
    bonus: Optional[Tuple[float, float]] = None
    vacation_days: Optional[Tuple[float, float]] = Field(
        default=None, validation_alias=AliasChoices("vacation_days", "vacationDays")
    )
    skills: List[str] = Field(default_factory=list)
    qualifications: List[str] = Field(default_factory=list)
    languages: List[LanguageSkill] = Field(default_factory=list)
    job_types: List[str] = Field(default_factory=list, validation_alias=AliasChoices("job_types", "jobTypes"))
    career_level: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("career_level", "careerLevel")
    )
    years_of_experience: Optional[Tuple[float, float]] = Field(
        default=None, validation_alias=AliasChoices("years_of_experience", "yearsOfExperience")
    )
    allow_overqualification: bool = Field(
        default=False, validation_alias=AliasChoices("allow_overqualification", "allowOverqualification")
    )
    notice_period: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("notice_period", "noticePeriod")
    )
    contract_term: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("contract_term", "contractTerm", "contract_terms")
    )
    home_office_preference: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("home_office_preference", "homeOfficePreference")
    )
    travel_willingness: Optional[Tuple[float, float]] = Field(
        default=None, validation_alias=AliasChoices("travel_willingness", "travelWillingness")
    )
    driving_licenses: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("driving_licenses", "drivingLicenses")
    )
    custom_tags: List[str] = Field(default_factory=list, validation_alias=AliasChoices("custom_tags", "customTags"))
    is_refugee: bool = Field(default=False, validation_alias=AliasChoices("is_refugee", "isRefugee"))
    origin_country: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("origin_country", "originCountry")
    )
    location: Optional[LocationFilter] = None
    city: Optional[str] = None
    work_radius: Optional[float] = Field(default=None, validation_alias=AliasChoices("work_radius", "workRadius"))
    enable_partial_match: bool = Field(
        default=False, validation_alias=AliasChoices("enable_partial_match", "enablePartialMatch")
    )
    min_match_threshold: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("min_match_threshold", "minMatchThreshold")
    )

    @field_validator("job_title", "sector", "origin_country", "city", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> Optional[str]:
        return to_text(v)

    @field_validator(
        "gender", "candidate_status", "skills", "qualifications", "job_types", "career_level",
        "notice_period", "contract_term", "home_office_preference", "driving_licenses", "custom_tags",
        mode="before",
    )
    @classmethod
    def normalize_names(cls, v: Any) -> List[str]:
        return to_names(v)

    @field_validator("languages", mode="before")
    @classmethod
    def normalize_languages(cls, v: Any) -> List[dict]:
        return to_languages(v, DEFAULT_REQUIRED_LANGUAGE_LEVEL)

    @field_validator("salary", "bonus", "vacation_days", "years_of_experience", "travel_willingness", mode="before")
    @classmethod
    def normalize_range(cls, v: Any) -> Optional[Tuple[float, float]]:
        return to_range(v)

    @field_validator("allow_overqualification", "is_refugee", "enable_partial_match", mode="before")
    @classmethod
    def normalize_flag(cls, v: Any) -> bool:
        return bool(to_bool(v))

    @field_validator("work_radius", mode="before")
    @classmethod
    def normalize_radius(cls, v: Any) -> Optional[float]:
        return to_radius(v)

    @field_validator("min_match_threshold", mode="before")
    @classmethod
    def normalize_number(cls, v: Any) -> Optional[float]:
        return to_float(v)

    @field_validator("location", mode="before")
    @classmethod
    def normalize_location(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, LocationFilter)) else None
