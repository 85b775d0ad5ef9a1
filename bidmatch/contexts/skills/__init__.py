"""
Skills Context

Responsibilities:
- Canonicalizes free-text technology names (alias table + dictionary variations)
- Owns the versioned canonical skill dictionary
- Queues unknown skills for human review and folds decisions back into the dictionary

Owns: Skill vocabulary, tech layer tags, validation errors
Never: Scores stacks or JD specs
"""

from bidmatch.contexts.skills.dictionary import CanonicalSkill, SkillDictionary
from bidmatch.contexts.skills.exceptions import ReviewQueueError, ValidationError
from bidmatch.contexts.skills.layers import TECH_LAYERS, TechLayer
from bidmatch.contexts.skills.mapper import (
    SKILL_ALIASES,
    CanonicalSkillMapper,
    normalize_skill,
)
from bidmatch.contexts.skills.review_queue import (
    ApprovalDecision,
    RejectionDecision,
    SkillReviewQueue,
    UnknownSkillItem,
    apply_decision,
    find_unknown_skills,
)

__all__ = [
    # Normalization
    "normalize_skill",
    "CanonicalSkillMapper",
    "SKILL_ALIASES",
    # Dictionary
    "SkillDictionary",
    "CanonicalSkill",
    # Review queue
    "SkillReviewQueue",
    "UnknownSkillItem",
    "ApprovalDecision",
    "RejectionDecision",
    "find_unknown_skills",
    "apply_decision",
    # Layers and errors
    "TECH_LAYERS",
    "TechLayer",
    "ValidationError",
    "ReviewQueueError",
]
