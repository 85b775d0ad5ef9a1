"""
Skill usage statistics across JD specs and resumes.

Counts how often each canonical skill appears in JD specs and resume tech
stacks, which spellings were used for it, and when it was first and last seen.

    report = collect_skill_usage(specs, resumes, dictionary, category="frontend")
    for stat in report.statistics:
        print(stat.skill_name, stat.jd_count, stat.resume_count)

Skills are keyed by canonical name. A JD spec counts a skill once per layer
it is listed in; a resume counts it once however many spellings it uses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from bidmatch.contexts.matching.jd_spec import CanonicalJDSpec
from bidmatch.contexts.matching.logger import _log_info
from bidmatch.contexts.matching.resume_metadata import ResumeMetadata
from bidmatch.contexts.skills.dictionary import SkillDictionary
from bidmatch.contexts.skills.exceptions import ValidationError
from bidmatch.contexts.skills.layers import TECH_LAYERS, parse_tech_layer
from bidmatch.contexts.skills.mapper import CanonicalSkillMapper, DEFAULT_MAPPER, clean_skill_name

SORT_FIELDS = ("frequency", "name")
SORT_ORDERS = ("asc", "desc")


@dataclass
class SkillStatistic:
    """
    Usage of one canonical skill.

    Attributes:
        skill_name: Canonical skill name
        category: Dictionary category, else the first JD layer it appeared in, else "others"
        jd_count: JD spec layers listing the skill
        resume_count: Resumes whose stack includes the skill
        variations: Non-canonical spellings seen, first-seen order
        variation_usage_count: Times a non-canonical spelling was used
        first_seen: Earliest creation time of a JD spec or resume using it
        last_seen: Latest creation time of a JD spec or resume using it
    """

    skill_name: str
    category: str
    first_seen: datetime
    last_seen: datetime
    jd_count: int = 0
    resume_count: int = 0
    variations: List[str] = field(default_factory=list)
    variation_usage_count: int = 0

    @property
    def total_usage(self) -> int:
        return self.jd_count + self.resume_count

    def _seen_at(self, when: datetime) -> None:
        self.first_seen = min(self.first_seen, when)
        self.last_seen = max(self.last_seen, when)

    def _record_variation(self, spelling: str) -> None:
        if spelling not in self.variations:
            self.variations.append(spelling)
        self.variation_usage_count += 1


@dataclass(frozen=True)
class SkillUsageReport:
    statistics: List[SkillStatistic]
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @property
    def total_skills(self) -> int:
        return len(self.statistics)


def _in_range(when: datetime, start_date: Optional[datetime], end_date: Optional[datetime]) -> bool:
    if start_date is not None and when < start_date:
        return False
    if end_date is not None and when > end_date:
        return False
    return True


def _sort_statistics(
    statistics: List[SkillStatistic], sort_by: str, sort_order: Optional[str]
) -> List[SkillStatistic]:
    if sort_by not in SORT_FIELDS:
        raise ValidationError(
            f"Invalid sort field: '{sort_by}'. Expected one of: {', '.join(SORT_FIELDS)}",
            field="sort_by",
            value=sort_by,
        )
    if sort_order is None:
        sort_order = "desc" if sort_by == "frequency" else "asc"
    if sort_order not in SORT_ORDERS:
        raise ValidationError(
            f"Invalid sort order: '{sort_order}'. Expected one of: {', '.join(SORT_ORDERS)}",
            field="sort_order",
            value=sort_order,
        )

    # Stable sorts: equal counts keep first-seen order in both directions
    reverse = sort_order == "desc"
    if sort_by == "frequency":
        return sorted(statistics, key=lambda s: s.total_usage, reverse=reverse)
    return sorted(statistics, key=lambda s: s.skill_name, reverse=reverse)


def collect_skill_usage(
    jd_specs: Iterable[CanonicalJDSpec],
    resumes: Iterable[ResumeMetadata],
    dictionary: Optional[SkillDictionary] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    category: Optional[str] = None,
    sort_by: str = "frequency",
    sort_order: Optional[str] = None,
    mapper: Optional[CanonicalSkillMapper] = None,
) -> SkillUsageReport:
    """
    Tally skill usage over JD specs and resumes created within a date range.

    Args:
        jd_specs: JD specs to count
        resumes: Resumes to count, using the raw technologies of their stacks
        dictionary: Dictionary used to resolve spellings and categories
        start_date: Inclusive lower bound on created_at
        end_date: Inclusive upper bound on created_at
        category: Keep only skills of this tech layer
        sort_by: "frequency" (total usage) or "name"
        sort_order: "asc" or "desc"; defaults to desc for frequency, asc for name
        mapper: Alias mapper, defaults to the bundled alias table

    Returns:
        SkillUsageReport with the sorted statistics

    Raises:
        ValidationError: On an unknown category, sort field or sort order
    """
    mapper = mapper or DEFAULT_MAPPER
    layer_filter = parse_tech_layer(category) if category is not None else None
    usage: Dict[str, SkillStatistic] = {}

    def category_of(skill: str, fallback: str) -> str:
        known = dictionary.get_canonical_skill(skill) if dictionary is not None else None
        return known.category if known is not None else fallback

    def stat_for(skill: str, fallback_category: str, when: datetime) -> SkillStatistic:
        stat = usage.get(skill)
        if stat is None:
            stat = SkillStatistic(skill, category_of(skill, fallback_category), when, when)
            usage[skill] = stat
        stat._seen_at(when)
        return stat

    spec_count = 0
    for spec in jd_specs:
        if not _in_range(spec.created_at, start_date, end_date):
            continue
        spec_count += 1
        for layer in TECH_LAYERS:
            for skill_weight in spec.get_skills_for_layer(layer):
                skill = skill_weight.skill
                key = (dictionary.map_to_canonical(skill) if dictionary is not None else None) or skill
                stat = stat_for(key, layer, spec.created_at)
                stat.jd_count += 1
                if key != skill:
                    stat._record_variation(skill)

    resume_count = 0
    for resume in resumes:
        if not _in_range(resume.created_at, start_date, end_date):
            continue
        resume_count += 1
        counted = set()
        for raw in resume.tech_stack.technologies:
            spelling = clean_skill_name(raw)
            if not spelling:
                continue
            key = mapper.normalize(spelling, dictionary)
            stat = stat_for(key, "others", resume.created_at)
            if key not in counted:
                stat.resume_count += 1
                counted.add(key)
            if key != spelling:
                stat._record_variation(spelling)

    statistics = list(usage.values())
    if layer_filter is not None:
        statistics = [stat for stat in statistics if stat.category == layer_filter]

    statistics = _sort_statistics(statistics, sort_by, sort_order)
    _log_info(
        f"Collected usage for {len(statistics)} skills "
        f"from {spec_count} JD specs and {resume_count} resumes"
    )
    return SkillUsageReport(statistics, start_date, end_date)
