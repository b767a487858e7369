"""
Unit tests for the job-match scorer.
"""

import math
import unittest

from relevance import JobFilter, JobRecord, score_job
from relevance.scoring_engine import job_location


BERLIN = (52.5200, 13.4050)


def north_of(origin, km):
    """Point km kilometers due north of origin."""
    return origin[0] + math.degrees(km / 6371.0), origin[1]


def criterion(result, name):
    return next(c for c in result.breakdown if c.name == name)


class TestEmptyFilter(unittest.TestCase):
    """Test that a filter with nothing set is a perfect match."""

    def test_empty_filter_scores_100(self):
        job = JobRecord(title="Backend Engineer", required_skills=["Go"], salary_min=50000)
        for flexible in (False, True):
            result = score_job(job, JobFilter(), flexible)
            self.assertEqual((result.score, result.matched, result.total), (100, 0, 0))

    def test_select_values_are_unset_regardless_of_case_or_padding(self):
        filters = JobFilter(sector="All", city="  ", country=" all ", career_level="ALL")
        result = score_job(JobRecord(sector="IT", city="Berlin", country="DE"), filters)
        self.assertEqual((result.score, result.total), (100, 0))

    def test_default_and_unset_values_are_skipped(self):
        """Test that form defaults ("all", blank title, default salary range) are not scored."""
        filters = JobFilter(
            title="   ", sector="all", city="", career_level="all", salary_range=[0, 250000],
            min_entry_bonus=0, min_vacation_days=0, home_office=False,
        )
        result = score_job(JobRecord(title="Anything"), filters)
        self.assertEqual(result.total, 0)
        self.assertEqual(result.score, 100)


class TestEndToEnd(unittest.TestCase):
    """Test a complete strict-mode scenario."""

    def test_backend_engineer_in_berlin(self):
        job = JobRecord(
            title="Backend Engineer", city="Berlin", required_skills=["Go", "SQL"],
            salary_min=50000, salary_max=70000,
        )
        filters = JobFilter(
            title="Backend", city="Berlin", skills=["Go", "SQL", "Kubernetes"], salary_range=[60000, 80000],
        )
        result = score_job(job, filters, flexible=False)

        self.assertEqual(result.total, 7)
        self.assertEqual(result.matched, 6)
        self.assertEqual(result.score, 86)
        self.assertEqual(
            [c.name for c in result.breakdown], ["title", "salary", "city", "skills"]
        )


class TestSingleCriteria(unittest.TestCase):
    """Test criterion weights and partial credit."""

    def test_title(self):
        filters = JobFilter(title="backend")
        self.assertEqual(criterion(score_job(JobRecord(title="Senior BACKEND dev"), filters), "title").earned, 2)
        self.assertEqual(criterion(score_job(JobRecord(), filters), "title").earned, 1)
        self.assertEqual(criterion(score_job(JobRecord(title="Designer"), filters), "title").earned, 0)

    def test_sector_uses_company_industry(self):
        job = JobRecord.model_validate({"company": {"industry": "IT"}})
        self.assertEqual(score_job(job, JobFilter(sector="IT")).score, 100)
        self.assertEqual(score_job(JobRecord(), JobFilter(sector="IT")).score, 50)
        self.assertEqual(score_job(JobRecord(sector="Retail"), JobFilter(sector="IT")).score, 0)

    def test_salary(self):
        filters = JobFilter(salary_range=[60000, 80000])
        self.assertEqual(score_job(JobRecord(salary_min=30000, salary_max=50000), filters).score, 0)
        self.assertEqual(score_job(JobRecord(salary_min=75000, salary_max=90000), filters).score, 100)
        self.assertEqual(score_job(JobRecord(), filters).score, 50)

    def test_salary_one_sided_job_range(self):
        """Test that a job with only one salary bound earns nothing."""
        filters = JobFilter(salary_range=[60000, 80000])
        result = score_job(JobRecord(salary_min=50000), filters, False)
        self.assertEqual((result.matched, result.total, result.score), (0, 1, 0))
        self.assertEqual(score_job(JobRecord(salary_max=70000), filters).score, 0)
        self.assertEqual(score_job(JobRecord(salary_min=0, salary_max=70000), filters).score, 100)

    def test_city_and_country_fallback(self):
        self.assertEqual(score_job(JobRecord(city="Berlin"), JobFilter(city="Berlin")).score, 100)
        self.assertEqual(score_job(JobRecord(city="Hamburg"), JobFilter(city="Berlin")).score, 0)
        self.assertEqual(score_job(JobRecord(), JobFilter(city="Berlin")).score, 50)
        self.assertEqual(score_job(JobRecord(country="DE"), JobFilter(country="DE")).score, 100)
        self.assertEqual(score_job(JobRecord(), JobFilter(country="DE")).score, 50)

    def test_city_takes_precedence_over_country(self):
        result = score_job(JobRecord(city="Hamburg", country="DE"), JobFilter(city="Berlin", country="DE"))
        self.assertEqual([c.name for c in result.breakdown], ["city"])
        self.assertEqual(result.score, 0)

    def test_coordinates_take_precedence_over_city(self):
        filters = JobFilter(latitude=BERLIN[0], longitude=BERLIN[1], city="Hamburg")
        job = JobRecord(latitude=BERLIN[0], longitude=BERLIN[1], city="Berlin")
        result = score_job(job, filters)
        self.assertEqual([c.name for c in result.breakdown], ["location"])
        self.assertEqual((result.matched, result.total), (2, 2))

    def test_coordinates_on_one_side_fall_back_to_city(self):
        filters = JobFilter(latitude=BERLIN[0], longitude=BERLIN[1], city="Berlin")
        result = score_job(JobRecord(city="Berlin"), filters)
        self.assertEqual([c.name for c in result.breakdown], ["city"])

    def test_employment_type(self):
        filters = JobFilter(employment_types=["full-time", "part-time"])
        self.assertEqual(score_job(JobRecord(employment_type="part-time"), filters).score, 100)
        self.assertEqual(score_job(JobRecord(employment_type="internship"), filters).score, 0)
        self.assertEqual(score_job(JobRecord(), filters).score, 50)

    def test_experience_same_rule_in_both_modes(self):
        """Test that the searcher must have at least the required years, flexible or not."""
        filters = JobFilter(experience_years=3)
        for flexible in (False, True):
            self.assertEqual(score_job(JobRecord(experience_years=2), filters, flexible).score, 100)
            self.assertEqual(score_job(JobRecord(experience_years=3), filters, flexible).score, 100)
            self.assertEqual(score_job(JobRecord(experience_years=5), filters, flexible).score, 0)
            self.assertEqual(score_job(JobRecord(), filters, flexible).score, 50)

    def test_zero_experience_filter_is_evaluated(self):
        result = score_job(JobRecord(experience_years=0), JobFilter(experience_years=0))
        self.assertEqual((result.matched, result.total), (1, 1))

    def test_career_level(self):
        filters = JobFilter(career_level="senior")
        self.assertEqual(score_job(JobRecord(career_level="senior"), filters).score, 100)
        self.assertEqual(score_job(JobRecord(career_level="junior"), filters).score, 0)
        self.assertEqual(score_job(JobRecord(), filters).score, 50)

    def test_entry_bonus_and_vacation_minimums(self):
        filters = JobFilter(min_entry_bonus=1000, min_vacation_days=28)
        self.assertEqual(score_job(JobRecord(entry_bonus=1500, vacation_days=30), filters).score, 100)
        self.assertEqual(score_job(JobRecord(entry_bonus=500, vacation_days=25), filters).score, 0)
        self.assertEqual(score_job(JobRecord(), filters).score, 50)

    def test_contract_terms_and_duration(self):
        filters = JobFilter(contract_terms=["permanent"], contract_duration="12 months")
        job = JobRecord(contract_terms=["temporary", "permanent"], contract_duration="12 months")
        self.assertEqual(score_job(job, filters).score, 100)
        self.assertEqual(score_job(JobRecord(contract_terms=["temporary"]), filters).score, 25)
        self.assertEqual(score_job(JobRecord(), filters).score, 50)

    def test_home_office_only_when_required(self):
        self.assertEqual(score_job(JobRecord(home_office_available=False), JobFilter()).total, 0)
        filters = JobFilter(home_office=True)
        self.assertEqual(score_job(JobRecord(home_office_available=True), filters).score, 100)
        self.assertEqual(score_job(JobRecord(home_office_available=False), filters).score, 0)
        self.assertEqual(score_job(JobRecord(), filters).score, 50)

    def test_benefits_have_no_partial_credit(self):
        filters = JobFilter(benefits=["Gym", "company car"])
        result = score_job(JobRecord(benefits=["Free gym membership"]), filters)
        self.assertEqual((result.matched, result.total), (1, 2))
        self.assertEqual(score_job(JobRecord(), filters).matched, 0)


class TestDistanceTiers(unittest.TestCase):
    """Test stepped location credit with a 50 km radius."""

    def location_earned(self, km, radius=50):
        filters = JobFilter(latitude=BERLIN[0], longitude=BERLIN[1], work_radius=radius)
        lat, lon = north_of(BERLIN, km)
        result = job_location(JobRecord(latitude=lat, longitude=lon), filters, False)
        self.assertEqual(result.weight, 2)
        return result.earned

    def test_four_tiers(self):
        self.assertEqual(self.location_earned(10), 2)
        self.assertEqual(self.location_earned(80), 1)
        self.assertEqual(self.location_earned(150), 0.5)
        self.assertEqual(self.location_earned(500), 0)

    def test_tier_boundaries(self):
        self.assertEqual(self.location_earned(49.9), 2)
        self.assertEqual(self.location_earned(50.1), 1)
        self.assertEqual(self.location_earned(99.9), 1)
        self.assertEqual(self.location_earned(100.1), 0.5)
        self.assertEqual(self.location_earned(199.9), 0.5)
        self.assertEqual(self.location_earned(200.1), 0)

    def test_default_radius_is_50(self):
        filters = JobFilter(latitude=BERLIN[0], longitude=BERLIN[1])
        lat, lon = north_of(BERLIN, 80)
        self.assertEqual(job_location(JobRecord(latitude=lat, longitude=lon), filters, False).earned, 1)

    def test_custom_radius(self):
        self.assertEqual(self.location_earned(80, radius=100), 2)


class TestFlexibleMode(unittest.TestCase):
    """Test strict vs flexible scoring of skills, qualifications and languages."""

    def test_superset_of_requirements(self):
        """Test that holding more than required is a full match in flexible mode only."""
        job = JobRecord(required_skills=["Go"])
        filters = JobFilter(skills=["Go", "Rust"])

        flexible = score_job(job, filters, flexible=True)
        strict = score_job(job, filters, flexible=False)

        self.assertEqual((flexible.matched, flexible.total), (1, 1))
        self.assertEqual((strict.matched, strict.total), (1, 2))
        self.assertEqual(flexible.score - strict.score, 50)

    def test_subset_of_requirements(self):
        """Test that missing required skills fails the whole category in flexible mode."""
        job = JobRecord(required_skills=["Go", "Rust", "Python"])
        filters = JobFilter(skills=["Go"])

        flexible = score_job(job, filters, flexible=True)
        strict = score_job(job, filters, flexible=False)

        self.assertEqual((flexible.matched, flexible.total), (0, 1))
        self.assertEqual((strict.matched, strict.total), (1, 1))
        self.assertEqual(strict.score - flexible.score, 100)

    def test_job_without_requirements(self):
        """Test full credit in flexible mode and half credit per item in strict mode."""
        filters = JobFilter(skills=["Go", "SQL"], qualifications=["MSc"])
        flexible = score_job(JobRecord(), filters, flexible=True)
        strict = score_job(JobRecord(), filters, flexible=False)
        self.assertEqual((flexible.matched, flexible.total), (2, 2))
        self.assertEqual((strict.matched, strict.total), (1.5, 3))

    def test_mode_defaults_to_filter_setting(self):
        job = JobRecord(required_skills=["Go"])
        filters = JobFilter(skills=["Go", "Rust"], enable_flexible_match=True)
        self.assertEqual(score_job(job, filters).score, 100)
        self.assertEqual(score_job(job, filters, flexible=False).score, 50)

    def test_languages_respect_levels(self):
        job = JobRecord(required_languages=[{"name": "German", "level": "C1"}])
        good = JobFilter(languages=[{"name": "german", "level": "C2"}])
        weak = JobFilter(languages=[{"name": "German", "level": "B2"}])
        for flexible in (False, True):
            self.assertEqual(score_job(job, good, flexible).score, 100)
            self.assertEqual(score_job(job, weak, flexible).score, 0)

    def test_bare_string_languages_are_b2(self):
        job = JobRecord(required_languages=["English"])
        self.assertEqual(score_job(job, JobFilter(languages=["English"])).score, 100)
        job_c1 = JobRecord(required_languages=[{"name": "English", "level": "C1"}])
        self.assertEqual(score_job(job_c1, JobFilter(languages=["English"])).score, 0)

    def test_driving_licenses(self):
        filters = JobFilter(driving_licenses=["B", "C"])
        self.assertEqual(score_job(JobRecord(driving_licenses=["B"]), filters).score, 100)
        self.assertEqual(score_job(JobRecord(driving_licenses=["B", "D"]), filters).score, 0)
        self.assertEqual(score_job(JobRecord(), filters, flexible=False).score, 50)
        self.assertEqual(score_job(JobRecord(), filters, flexible=True).score, 100)


class TestProperties(unittest.TestCase):
    """Test bounds and monotonicity."""

    JOB = JobRecord(
        title="Data Engineer", sector="IT", city="Berlin", required_skills=["Python", "Spark"],
        employment_type="full-time", career_level="mid", salary_min=55000, salary_max=65000,
    )

    def test_score_is_bounded(self):
        filters = [
            JobFilter(title="Engineer", skills=["Python", "Go", "Scala"]),
            JobFilter(sector="Retail", city="Munich", employment_types=["internship"]),
            JobFilter(benefits=["gym"], home_office=True, min_entry_bonus=100000),
        ]
        for f in filters:
            for flexible in (False, True):
                result = score_job(self.JOB, f, flexible)
                self.assertGreaterEqual(result.score, 0)
                self.assertLessEqual(result.score, 100)
                self.assertLessEqual(result.matched, result.total)

    def test_adding_satisfied_criterion_does_not_lower_score(self):
        base = JobFilter(title="Engineer", sector="Retail", skills=["Go"])
        extended = base.model_copy(update={"career_level": "mid"})
        self.assertGreaterEqual(score_job(self.JOB, extended).score, score_job(self.JOB, base).score)

    def test_failing_harder_does_not_raise_score(self):
        near = JobFilter(latitude=BERLIN[0], longitude=BERLIN[1], work_radius=50)
        lat, lon = north_of(BERLIN, 80)
        job_near = JobRecord(latitude=lat, longitude=lon)
        lat, lon = north_of(BERLIN, 300)
        job_far = JobRecord(latitude=lat, longitude=lon)
        self.assertLessEqual(score_job(job_far, near).score, score_job(job_near, near).score)


class TestDeterminism(unittest.TestCase):
    """Test that scoring is deterministic."""

    def test_same_inputs_same_result(self):
        job = JobRecord(title="Backend Engineer", required_skills=["Go"])
        filters = JobFilter(title="Backend", skills=["Go", "Rust"])
        self.assertEqual(score_job(job, filters), score_job(job, filters))


if __name__ == "__main__":
    unittest.main()
