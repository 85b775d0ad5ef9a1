"""
Matching Context

Responsibilities:
- Represents job and resume tech stacks as canonical technology sets
- Scores stack coverage (0-100) and ranks resumes by it
- Holds normalized six-layer JD specs and correlates them directionally
- Derives resume match rates from JD-to-JD correlation
- Supplies default layer weights per role title
- Reports skill usage across JD specs and resumes

Owns: Scoring formulas, tie-breaking, JD spec invariants
Never: Loads or stores resumes, specs or dictionaries
"""

from bidmatch.contexts.matching.correlation import (
    CorrelationResult,
    JDCorrelationCalculator,
    LayerCorrelation,
)
from bidmatch.contexts.matching.jd_spec import CanonicalJDSpec, SkillWeight
from bidmatch.contexts.matching.resume_metadata import ResumeMetadata
from bidmatch.contexts.matching.resume_ranking import (
    MatchingResume,
    ResumeMatchRate,
    calculate_resume_match_rate,
    find_matching_resumes,
    rank_resume_match_rates,
)
from bidmatch.contexts.matching.roles import (
    ROLE_LAYER_WEIGHTS,
    ParsedRole,
    compose_role,
    extract_basic_title,
    get_default_layer_weights,
    is_valid_role,
    parse_role,
)
from bidmatch.contexts.matching.stack_match import ScoredCandidate, StackMatchCalculator
from bidmatch.contexts.matching.tech_stack import TechStackValue
from bidmatch.contexts.matching.usage_statistics import (
    SkillStatistic,
    SkillUsageReport,
    collect_skill_usage,
)

__all__ = [
    # Stacks
    "TechStackValue",
    "StackMatchCalculator",
    "ScoredCandidate",
    "ResumeMetadata",
    # JD specs
    "CanonicalJDSpec",
    "SkillWeight",
    "JDCorrelationCalculator",
    "CorrelationResult",
    "LayerCorrelation",
    # Resume ranking
    "MatchingResume",
    "ResumeMatchRate",
    "find_matching_resumes",
    "calculate_resume_match_rate",
    "rank_resume_match_rates",
    # Roles
    "ROLE_LAYER_WEIGHTS",
    "ParsedRole",
    "get_default_layer_weights",
    "extract_basic_title",
    "is_valid_role",
    "parse_role",
    "compose_role",
    # Usage statistics
    "SkillStatistic",
    "SkillUsageReport",
    "collect_skill_usage",
]
