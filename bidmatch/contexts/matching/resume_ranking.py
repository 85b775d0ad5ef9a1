"""
Resume selection and match rates for the Matching context.

Two ways of ranking past resumes for a new job, both over inputs the caller
has already loaded from its repositories:

- find_matching_resumes(): tech stack overlap (StackMatchCalculator), best
  first, with matched and missing technologies for display
- rank_resume_match_rates(): JD-to-JD correlation between the new job's spec
  and the JD spec each resume was originally written against

Usage:
    matches = find_matching_resumes(["React", "TypeScript", "AWS"], resumes)
    rates = rank_resume_match_rates(current_spec, resumes, specs_by_id)
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from dotenv import load_dotenv

from bidmatch.contexts.matching.correlation import (
    CorrelationResult,
    JDCorrelationCalculator,
    LayerCorrelation,
)
from bidmatch.contexts.matching.jd_spec import CanonicalJDSpec
from bidmatch.contexts.matching.logger import _log_debug, _log_info
from bidmatch.contexts.matching.resume_metadata import ResumeMetadata
from bidmatch.contexts.matching.stack_match import StackMatchCalculator
from bidmatch.contexts.matching.tech_stack import TechStackValue
from bidmatch.contexts.skills.dictionary import SkillDictionary

load_dotenv()
MATCH_RESULT_LIMIT = int(os.getenv("MATCH_RESULT_LIMIT", "30"))


@dataclass(frozen=True)
class MatchingResume:
    """One resume scored against a target tech stack."""

    id: str
    company: str
    role: str
    tech_stack: List[str]
    score: int
    created_at: datetime
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResumeMatchRate:
    """
    Match rate of a resume for the current JD.

    match_rate is the correlation between the current JD spec and the resume's
    original JD spec; 0 when the resume has no original spec or it cannot be found.
    """

    resume_id: str
    company: str
    role: str
    match_rate: float
    original_jd_id: Optional[str]
    current_dictionary_version: str
    original_dictionary_version: Optional[str] = None
    layer_breakdown: Dict[str, LayerCorrelation] = field(default_factory=dict)

    @property
    def match_rate_percentage(self) -> float:
        return max(0.0, min(100.0, self.match_rate * 100))


def find_matching_resumes(
    target_technologies: Iterable[str],
    resumes: Sequence[ResumeMetadata],
    limit: Optional[int] = None,
    calculator: Optional[StackMatchCalculator] = None,
    dictionary: Optional[SkillDictionary] = None,
) -> List[MatchingResume]:
    """
    Rank resumes by how well their tech stack covers the target technologies.

    Args:
        target_technologies: Raw technology names from the job
        resumes: Resume metadata loaded by the caller
        limit: Maximum number of results, defaults to MATCH_RESULT_LIMIT
        calculator: Scorer to use, defaults to a new StackMatchCalculator
        dictionary: Dictionary used to canonicalize the target technologies

    Returns:
        Up to `limit` MatchingResume entries, best score first, then most recent
    """
    limit = MATCH_RESULT_LIMIT if limit is None else limit
    calculator = calculator or StackMatchCalculator()
    target = TechStackValue(target_technologies, dictionary=dictionary)

    ranked = calculator.sort_by_score(resumes, target)
    _log_info(f"Scored {len(ranked)} resumes against {len(target)} target technologies")

    return [
        MatchingResume(
            id=entry.item.id,
            company=entry.item.company,
            role=entry.item.role,
            tech_stack=entry.item.tech_stack.technologies,
            score=entry.score,
            created_at=entry.item.created_at,
            matched_skills=target.get_matching_technologies(entry.item.tech_stack),
            missing_skills=target.get_missing_technologies(entry.item.tech_stack),
        )
        for entry in ranked[:limit]
    ]


def calculate_resume_match_rate(
    current_spec: CanonicalJDSpec,
    resume: ResumeMetadata,
    jd_specs: Mapping[str, CanonicalJDSpec],
    calculator: Optional[JDCorrelationCalculator] = None,
) -> ResumeMatchRate:
    """
    Match rate of one resume for the current JD.

    Args:
        current_spec: Spec of the job being applied to
        resume: Resume to rate
        jd_specs: Preloaded specs by id, used to resolve resume.jd_spec_id
        calculator: Correlation calculator, defaults to a new one

    Returns:
        ResumeMatchRate (zero rate with empty breakdown if the original spec is unavailable)
    """
    original_id = resume.jd_spec_id
    original_spec = jd_specs.get(original_id) if original_id else None

    if original_spec is None:
        _log_debug(f"Resume {resume.id}: no original JD spec ({original_id}), match rate 0")
        return ResumeMatchRate(
            resume_id=resume.id,
            company=resume.company,
            role=resume.role,
            match_rate=0.0,
            original_jd_id=original_id,
            current_dictionary_version=current_spec.dictionary_version,
        )

    calculator = calculator or JDCorrelationCalculator()
    correlation: CorrelationResult = calculator.calculate(current_spec, original_spec)

    return ResumeMatchRate(
        resume_id=resume.id,
        company=resume.company,
        role=resume.role,
        match_rate=correlation.overall_score,
        original_jd_id=original_id,
        current_dictionary_version=correlation.current_dictionary_version,
        original_dictionary_version=correlation.past_dictionary_version,
        layer_breakdown=correlation.layer_breakdown,
    )


def rank_resume_match_rates(
    current_spec: CanonicalJDSpec,
    resumes: Sequence[ResumeMetadata],
    jd_specs: Mapping[str, CanonicalJDSpec],
    calculator: Optional[JDCorrelationCalculator] = None,
) -> List[ResumeMatchRate]:
    """Match rates for every resume, highest first (ties keep input order)."""
    calculator = calculator or JDCorrelationCalculator()
    rates = [
        calculate_resume_match_rate(current_spec, resume, jd_specs, calculator)
        for resume in resumes
    ]
    return sorted(rates, key=lambda rate: rate.match_rate, reverse=True)
