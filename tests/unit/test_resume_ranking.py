"""Unit tests for resume selection and match rates."""

import pytest

from bidmatch.contexts.matching import (
    calculate_resume_match_rate,
    find_matching_resumes,
    rank_resume_match_rates,
)
from bidmatch.contexts.matching.resume_ranking import MATCH_RESULT_LIMIT


class TestFindMatchingResumes:
    """Tests for stack-overlap resume ranking."""

    @pytest.mark.unit
    def test_ranked_with_matched_and_missing(self, make_resume):
        resumes = [
            make_resume("r1", ["React", "AWS"], day=2),
            make_resume("r2", ["React.js", "TypeScript", "AWS", "Lambda", "Docker"], day=1),
            make_resume("r3", ["Vue"], day=3),
        ]

        matches = find_matching_resumes(["React", "TypeScript", "AWS", "Lambda"], resumes)

        assert [m.id for m in matches] == ["r2", "r1", "r3"]
        assert [m.score for m in matches] == [100, 50, 0]
        assert matches[1].matched_skills == ["react", "aws"]
        assert matches[1].missing_skills == ["typescript", "lambda"]
        assert matches[0].tech_stack == ["React.js", "TypeScript", "AWS", "Lambda", "Docker"]
        assert matches[0].company == "Company r2"

    @pytest.mark.unit
    def test_equal_scores_newest_first(self, make_resume):
        resumes = [
            make_resume("old", ["react"], day=1),
            make_resume("new", ["react"], day=15),
        ]

        matches = find_matching_resumes(["react", "vue"], resumes)

        assert [m.id for m in matches] == ["new", "old"]
        assert all(m.score == 50 for m in matches)

    @pytest.mark.unit
    def test_limit(self, make_resume):
        resumes = [make_resume(f"r{i}", ["react"], day=i + 1) for i in range(5)]

        assert len(find_matching_resumes(["react"], resumes, limit=2)) == 2
        assert len(find_matching_resumes(["react"], resumes)) == min(5, MATCH_RESULT_LIMIT)

    @pytest.mark.unit
    def test_no_resumes(self):
        assert find_matching_resumes(["react"], []) == []


class TestResumeMatchRates:
    """Tests for JD-correlation based match rates."""

    @pytest.fixture
    def current(self, make_spec):
        return make_spec(
            weights={"frontend": 0.5, "backend": 0.5},
            spec_id="jd_current",
            frontend=[("React", 0.6), ("TypeScript", 0.4)],
            backend=[("Node.js", 1.0)],
        )

    @pytest.fixture
    def past_specs(self, make_spec):
        close = make_spec(
            weights={"frontend": 1.0},
            spec_id="jd_close",
            version="2024.3",
            frontend=[("React", 0.3), ("Vue", 0.7)],
            backend=[("Node", 0.5), ("Express", 0.5)],
        )
        far = make_spec(weights={"frontend": 1.0}, spec_id="jd_far", frontend=[("Angular", 1.0)])
        return {spec.id: spec for spec in (close, far)}

    @pytest.mark.unit
    def test_match_rate_from_original_spec(self, current, past_specs, make_resume):
        resume = make_resume("r1", ["React"], jd_spec_id="jd_close")

        rate = calculate_resume_match_rate(current, resume, past_specs)

        assert rate.match_rate == pytest.approx(0.4)
        assert rate.match_rate_percentage == pytest.approx(40.0)
        assert rate.original_jd_id == "jd_close"
        assert rate.current_dictionary_version == "2025.1"
        assert rate.original_dictionary_version == "2024.3"
        assert rate.layer_breakdown["frontend"].matching_skills == ["react"]

    @pytest.mark.unit
    def test_resume_without_original_spec(self, current, past_specs, make_resume):
        rate = calculate_resume_match_rate(current, make_resume("r1", ["React"]), past_specs)

        assert rate.match_rate == 0.0
        assert rate.original_jd_id is None
        assert rate.original_dictionary_version is None
        assert rate.layer_breakdown == {}

    @pytest.mark.unit
    def test_original_spec_not_loaded(self, current, make_resume):
        resume = make_resume("r1", ["React"], jd_spec_id="jd_deleted")

        rate = calculate_resume_match_rate(current, resume, {})

        assert rate.match_rate == 0.0
        assert rate.original_jd_id == "jd_deleted"

    @pytest.mark.unit
    def test_rank_highest_first_ties_keep_order(self, current, past_specs, make_resume):
        resumes = [
            make_resume("none_1", ["React"]),
            make_resume("far", ["Angular"], jd_spec_id="jd_far"),
            make_resume("close", ["React"], jd_spec_id="jd_close"),
            make_resume("none_2", ["Vue"]),
        ]

        rates = rank_resume_match_rates(current, resumes, past_specs)

        assert [rate.resume_id for rate in rates] == ["close", "none_1", "far", "none_2"]
