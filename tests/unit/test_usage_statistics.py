"""Unit tests for skill usage statistics."""

from datetime import datetime, timezone

import pytest

from bidmatch.contexts.matching import CanonicalJDSpec, collect_skill_usage
from bidmatch.contexts.skills import TECH_LAYERS, SkillDictionary, ValidationError


def _date(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def make_dated_spec():
    """Factory for single-weighted-layer specs with a fixed creation time."""

    def _make(created_at=None, **layer_skills):
        weighted = next(iter(layer_skills), "frontend")
        skills = {
            layer: [{"skill": name, "weight": 1.0 / len(names)} for name in names]
            for layer, names in layer_skills.items()
        }
        return CanonicalJDSpec.create(
            role="Engineer",
            layer_weights={layer: 1.0 if layer == weighted else 0.0 for layer in TECH_LAYERS},
            skills=skills,
            dictionary_version="2025.1",
            created_at=created_at or _date(2025, 1, 1),
        )

    return _make


@pytest.fixture
def frontend_dictionary():
    d = SkillDictionary.create("2025.1")
    for name in ("react", "vue", "angular"):
        d.add_canonical_skill(name, "frontend")
    d.add_canonical_skill("nodejs", "backend")
    return d


def _by_name(report):
    return {stat.skill_name: stat for stat in report.statistics}


class TestCounts:
    """Tests for JD and resume counting."""

    @pytest.mark.unit
    def test_counts_jd_usage(self, make_dated_spec, frontend_dictionary):
        specs = [
            make_dated_spec(frontend=["React"], backend=["Node.js"]),
            make_dated_spec(frontend=["React"]),
        ]

        report = collect_skill_usage(specs, [], frontend_dictionary)
        stats = _by_name(report)

        assert report.total_skills == 2
        assert stats["react"].jd_count == 2
        assert stats["react"].resume_count == 0
        assert stats["react"].total_usage == 2
        assert stats["nodejs"].jd_count == 1
        assert stats["nodejs"].category == "backend"

    @pytest.mark.unit
    def test_counts_resume_usage(self, make_resume):
        d = SkillDictionary.create("2025.1")
        d.add_canonical_skill("python", "backend")
        d.add_canonical_skill("django", "backend")
        resumes = [make_resume("r1", ["Python", "Django"]), make_resume("r2", ["python"], day=15)]

        stats = _by_name(collect_skill_usage([], resumes, d))

        assert stats["python"].jd_count == 0
        assert stats["python"].resume_count == 2
        assert stats["django"].resume_count == 1
        assert stats["django"].total_usage == 1

    @pytest.mark.unit
    def test_combines_jd_and_resume_counts(self, make_dated_spec, make_resume):
        d = SkillDictionary.create("2025.1")
        d.add_canonical_skill("typescript", "backend")

        report = collect_skill_usage(
            [make_dated_spec(backend=["TypeScript"])], [make_resume("r1", ["TypeScript"])], d
        )

        assert report.total_skills == 1
        stat = report.statistics[0]
        assert stat.skill_name == "typescript"
        assert stat.jd_count == 1
        assert stat.resume_count == 1
        assert stat.total_usage == 2

    @pytest.mark.unit
    def test_resume_counts_skill_once(self, make_resume, dictionary):
        stats = _by_name(collect_skill_usage([], [make_resume("r1", ["React", "react.js", " "])], dictionary))

        assert list(stats) == ["react"]
        assert stats["react"].resume_count == 1
        assert stats["react"].variations == ["react.js"]
        assert stats["react"].variation_usage_count == 1

    @pytest.mark.unit
    def test_unknown_resume_skill_falls_back_to_others(self, make_resume, dictionary):
        stats = _by_name(collect_skill_usage([], [make_resume("r1", ["Inhouse Tool"])], dictionary))

        assert stats["inhouse tool"].category == "others"

    @pytest.mark.unit
    def test_works_without_dictionary(self, make_dated_spec, make_resume):
        report = collect_skill_usage(
            [make_dated_spec(frontend=["React"])], [make_resume("r1", ["ReactJS"])]
        )
        stat = report.statistics[0]

        assert stat.skill_name == "react"
        assert stat.category == "frontend"
        assert stat.total_usage == 2
        assert stat.variations == ["reactjs"]

    @pytest.mark.unit
    def test_tracks_variations(self, make_dated_spec, make_resume):
        d = SkillDictionary.create("2025.1")
        d.add_canonical_skill("javascript", "frontend")
        d.add_skill_variation("js", "javascript")
        d.add_skill_variation("ecmascript", "javascript")

        report = collect_skill_usage(
            [make_dated_spec(frontend=["JavaScript"])], [make_resume("r1", ["js"])], d
        )

        assert report.total_skills == 1
        stat = report.statistics[0]
        assert stat.skill_name == "javascript"
        assert stat.total_usage == 2
        assert "js" in stat.variations
        assert stat.variation_usage_count == 1

    @pytest.mark.unit
    def test_first_and_last_seen(self, make_dated_spec, make_resume, dictionary):
        report = collect_skill_usage(
            [make_dated_spec(_date(2025, 1, 10), frontend=["React"])],
            [make_resume("r1", ["React"], day=3), make_resume("r2", ["React"], day=20)],
            dictionary,
        )
        stat = report.statistics[0]

        assert stat.first_seen == _date(2025, 1, 3)
        assert stat.last_seen == _date(2025, 1, 20)


class TestFilters:
    """Tests for date range and category filters."""

    @pytest.mark.unit
    def test_date_range(self, make_dated_spec):
        d = SkillDictionary.create("2025.1")
        d.add_canonical_skill("java", "backend")
        specs = [
            make_dated_spec(_date(2023, 12, 1), backend=["Java"]),
            make_dated_spec(_date(2024, 1, 15), backend=["Java"]),
        ]
        start, end = _date(2024, 1, 1), _date(2024, 1, 31)

        report = collect_skill_usage(specs, [], d, start_date=start, end_date=end)

        assert report.total_skills == 1
        assert report.statistics[0].jd_count == 1
        assert report.start_date == start
        assert report.end_date == end

    @pytest.mark.unit
    def test_date_bounds_inclusive(self, make_resume, dictionary):
        resumes = [make_resume("r1", ["AWS"], day=1), make_resume("r2", ["AWS"], day=5)]

        report = collect_skill_usage(
            [], resumes, dictionary, start_date=_date(2025, 1, 1), end_date=_date(2025, 1, 5)
        )

        assert report.statistics[0].resume_count == 2

    @pytest.mark.unit
    def test_category(self, make_dated_spec, frontend_dictionary):
        specs = [make_dated_spec(frontend=["React"], backend=["Node.js"])]

        report = collect_skill_usage(specs, [], frontend_dictionary, category="Frontend")

        assert [stat.skill_name for stat in report.statistics] == ["react"]
        assert report.statistics[0].category == "frontend"

    @pytest.mark.unit
    def test_invalid_category(self, dictionary):
        with pytest.raises(ValidationError, match="Invalid tech layer"):
            collect_skill_usage([], [], dictionary, category="mainframe")


class TestSorting:
    """Tests for result ordering."""

    @pytest.fixture
    def report_specs(self, make_dated_spec):
        return [
            make_dated_spec(frontend=["React", "Vue"]),
            make_dated_spec(frontend=["Angular", "React"]),
        ]

    @pytest.mark.unit
    def test_frequency_desc_by_default(self, report_specs, frontend_dictionary):
        report = collect_skill_usage(report_specs, [], frontend_dictionary)

        assert [s.skill_name for s in report.statistics] == ["react", "vue", "angular"]

    @pytest.mark.unit
    def test_frequency_asc_keeps_first_seen_order_for_ties(self, report_specs, frontend_dictionary):
        report = collect_skill_usage(report_specs, [], frontend_dictionary, sort_order="asc")

        assert [s.skill_name for s in report.statistics] == ["vue", "angular", "react"]

    @pytest.mark.unit
    def test_name_asc_by_default(self, report_specs, frontend_dictionary):
        report = collect_skill_usage(report_specs, [], frontend_dictionary, sort_by="name")

        assert [s.skill_name for s in report.statistics] == ["angular", "react", "vue"]

    @pytest.mark.unit
    def test_name_desc(self, report_specs, frontend_dictionary):
        report = collect_skill_usage(
            report_specs, [], frontend_dictionary, sort_by="name", sort_order="desc"
        )

        assert [s.skill_name for s in report.statistics] == ["vue", "react", "angular"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs, field",
        [({"sort_by": "popularity"}, "sort_by"), ({"sort_order": "random"}, "sort_order")],
    )
    def test_invalid_sort(self, kwargs, field):
        with pytest.raises(ValidationError) as exc_info:
            collect_skill_usage([], [], **kwargs)

        assert exc_info.value.field == field
