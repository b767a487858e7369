"""
Configuration for the deterministic relevance-scoring engine.
Adjust weights and parameters here.
"""

# Criterion weights (added to "total" when the criterion is evaluated)
JOB_WEIGHTS = {
    "title": 2,
    "sector": 1,
    "salary": 1,
    "location_distance": 2,
    "location_city": 1,
    "location_country": 1,
    "employment_type": 1,
    "experience": 1,
    "career_level": 1,
    "entry_bonus": 1,
    "vacation_days": 1,
    "driving_licenses": 1,
    "contract_terms": 1,
    "contract_duration": 1,
    "home_office": 1,
    # per requested item
    "skill": 1,
    "qualification": 1,
    "language": 1,
    "benefit": 1,
    # whole category in flexible mode
    "skills_flexible": 1,
    "qualifications_flexible": 1,
    "languages_flexible": 1,
}

CANDIDATE_WEIGHTS = {
    "job_title": 2,
    "sector": 1,
    "gender": 1,
    "candidate_status": 1,
    "salary": 1,
    "bonus": 1,
    "vacation_days": 1,
    "job_types": 1,
    "career_level": 1,
    "experience": 1,
    "notice_period": 1,
    "contract_term": 1,
    "home_office": 1,
    "travel_willingness": 1,
    "refugee": 1,
    "origin_country": 1,
    "location_distance": 2,
    "location_city": 1,
    # per requested item
    "skill": 1,
    "qualification": 1,
    "language": 1,
    "driving_license": 1,
    "custom_tag": 1,
}

# Fraction of the weight earned when the job simply lacks data
PARTIAL_CREDIT = 0.5

# Fraction earned in flexible mode by a job without license requirements
FLEXIBLE_NO_LICENSE_CREDIT = 1.0

# Distance scoring
EARTH_RADIUS_KM = 6371.0
DEFAULT_WORK_RADIUS_KM = 50

# (radius multiplier, fraction of the location weight earned)
RADIUS_TIERS = [
    (1, 1.0),
    (2, 0.5),
    (4, 0.25),
]

# Language proficiency hierarchy
LANGUAGE_LEVELS = {
    "A1": 1,
    "A2": 2,
    "B1": 3,
    "B2": 4,
    "C1": 5,
    "C2": 6,
    "native": 7,
}

LANGUAGE_LEVEL_LABELS = {
    "A1": "A1 (Beginner)",
    "A2": "A2 (Elementary)",
    "B1": "B1 (Intermediate)",
    "B2": "B2 (Upper Intermediate)",
    "C1": "C1 (Advanced)",
    "C2": "C2 (Proficient)",
    "native": "Native Speaker",
}

# Level assumed when a language is given without one
DEFAULT_REQUIRED_LANGUAGE_LEVEL = "B2"
DEFAULT_CANDIDATE_LANGUAGE_LEVEL = "native"

# Range filters count as unset while they sit at these form defaults
JOB_FILTER_DEFAULTS = {
    "salary_range": (0, 250000),
}

CANDIDATE_FILTER_DEFAULTS = {
    "salary": (20000, 200000),
    "bonus": (0, 100000),
    "vacation_days": (0, 50),
    "years_of_experience": (0, 30),
    "travel_willingness": (0, 100),
}

# String filters holding one of these values are unset
UNSET_CHOICES = {"", "all"}

# Ranking
DEFAULT_MIN_MATCH_THRESHOLD = 50

# Match tiers (minimum score, label), checked top-down
MATCH_TIERS = [
    (80, "strong"),
    (50, "moderate"),
    (0, "weak"),
]
